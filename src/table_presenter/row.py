"""Cross-field access to the record being formatted."""

from __future__ import annotations

from typing import Any, Callable, Dict, Mapping

from .values import to_bool, to_float, to_int, to_str

Accessor = Callable[[Any], Any]


class Row:
    """Read a record's values by field identifier.

    Formatters receive a Row so they can consult other fields of the same
    record, for example a per-row unit override.
    """

    __slots__ = ("record", "_accessors")

    def __init__(self, record: Any, accessors: Mapping[str, Accessor]) -> None:
        self.record = record
        self._accessors = accessors

    def get(self, field_id: str) -> Any:
        """Return the raw value of ``field_id`` or None when it is not a field."""
        accessor = self._accessors.get(field_id)
        if accessor is None:
            return None
        return accessor(self.record)

    def get_int(self, field_id: str) -> int:
        return to_int(self.get(field_id))

    def get_float(self, field_id: str) -> float:
        return to_float(self.get(field_id))

    def get_str(self, field_id: str) -> str:
        return to_str(self.get(field_id))

    def get_bool(self, field_id: str) -> bool:
        return to_bool(self.get(field_id))

    def __repr__(self) -> str:
        return f"Row(fields={sorted(self._accessors)})"


def build_accessor_map(pairs) -> Dict[str, Accessor]:
    """Map field ids to accessors; a later registration for an id wins."""
    accessors: Dict[str, Accessor] = {}
    for field_id, accessor in pairs:
        accessors[field_id] = accessor
    return accessors
