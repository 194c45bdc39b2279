"""Registry of icon definitions shared by icon fields."""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterator, Mapping, Optional, Tuple, Union

from .enums import FieldColor
from .fields import IconDef

LOGGER = logging.getLogger(__name__)


class IconRef:
    """Reference to a value registered in an :class:`IconSet`.

    Only ``IconSet.add`` and ``IconSet.resolve`` hand these out, so an icon
    field fed with IconRefs can only emit registered values.
    """

    __slots__ = ("_value",)

    def __init__(self, value: str) -> None:
        self._value = value

    @property
    def value(self) -> str:
        return self._value

    def __eq__(self, other: object) -> bool:
        return isinstance(other, IconRef) and other._value == self._value

    def __hash__(self) -> int:
        return hash(self._value)

    def __repr__(self) -> str:
        return f"IconRef({self._value!r})"


class IconSet:
    """Ordered collection of icon definitions keyed by cell value."""

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self._icons: Dict[str, IconDef] = {}
        self.logger = logger or LOGGER

    def add(
        self,
        value: str,
        icon: str,
        color: Union[FieldColor, str],
        hint: str = "",
        options: Optional[Mapping[str, Any]] = None,
    ) -> IconRef:
        """Register an icon for ``value`` and return its reference.

        Args:
            value: Cell value identifying the icon.
            icon: Material icon name.
            color: Icon color.
            hint: Tooltip translation key.
            options: Extra properties passed through to the UI.

        Returns:
            IconRef to return from the field accessor.
        """
        self._icons[value] = IconDef(icon, FieldColor(color), hint, dict(options or {}))
        return IconRef(value)

    def resolve(self, value: str) -> Optional[IconRef]:
        """Return the reference for a registered value, or None with a warning."""
        if value in self._icons:
            return IconRef(value)
        self.logger.warning("Unknown icon value %r", value)
        return None

    def items(self) -> Iterator[Tuple[str, IconDef]]:
        return iter(self._icons.items())

    def __contains__(self, value: object) -> bool:
        return value in self._icons

    def __len__(self) -> int:
        return len(self._icons)
