"""Lenient value conversion.

Formatting must never fail a whole row because of one bad cell, so every
helper here returns a zero or empty value instead of raising.
"""

from __future__ import annotations

import math
from datetime import date, datetime, time, timezone
from decimal import Decimal
from typing import Any, Callable, List, Optional, Tuple

Predicate = Callable[[Any], bool]

TRUE_STRINGS = ("true", "1", "yes")


def is_text(value: Any) -> bool:
    return isinstance(value, str)


def is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


def is_boolean(value: Any) -> bool:
    return isinstance(value, bool)


def is_moment(value: Any) -> bool:
    """Accept datetimes, dates, epoch seconds and ``None`` for an unset moment."""
    return value is None or isinstance(value, (datetime, date)) or is_integer(value)


def to_int(value: Any) -> int:
    """Coerce a raw value to ``int``; unparseable input yields 0."""
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, (float, Decimal)):
        return int(value) if math.isfinite(value) else 0
    if isinstance(value, (datetime, date)):
        return to_timestamp(value)
    if isinstance(value, str):
        text = value.strip()
        try:
            return int(text)
        except ValueError:
            number = _parse_float(text)
            return int(number) if number is not None else 0
    return 0


def to_float(value: Any) -> float:
    """Coerce a raw value to ``float``; unparseable input yields 0.0."""
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float, Decimal)):
        number = float(value)
        return number if math.isfinite(number) else 0.0
    if isinstance(value, str):
        number = _parse_float(value.strip())
        return number if number is not None else 0.0
    return 0.0


def to_str(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def to_bool(value: Any) -> bool:
    """Coerce a raw value to ``bool``.

    Strings count as true only for ``"true"``, ``"1"`` and ``"yes"``.
    """
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float, Decimal)):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() in TRUE_STRINGS
    return False


def to_timestamp(value: Any) -> int:
    """Return epoch seconds for a datetime, date or number.

    Naive datetimes and plain dates are read as UTC.
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return int(value.timestamp())
    if isinstance(value, date):
        return int(datetime.combine(value, time(), tzinfo=timezone.utc).timestamp())
    return to_int(value)


def as_pair(value: Any, predicate: Predicate) -> Optional[Tuple[Any, Any]]:
    """Return ``value`` as a 2-tuple when both items satisfy ``predicate``."""
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        return None
    if not all(predicate(item) for item in value):
        return None
    return value[0], value[1]


def as_sequence(value: Any, predicate: Predicate) -> Optional[List[Any]]:
    """Return ``value`` as a list when every item satisfies ``predicate``."""
    if not isinstance(value, (list, tuple)):
        return None
    if not all(predicate(item) for item in value):
        return None
    return list(value)


def is_string_list(value: Any) -> bool:
    return isinstance(value, list) and all(isinstance(item, str) for item in value)


def _parse_float(text: str) -> Optional[float]:
    try:
        number = float(text)
    except ValueError:
        return None
    return number if math.isfinite(number) else None
