"""Default configuration per field type hint."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Union

from . import formatters as fmt
from .enums import FieldAlign, FieldTypeHint, StructuralType
from .formatters import Formatter

LOGGER = logging.getLogger(__name__)

FormatterFactory = Callable[[int, str, str], Formatter]

DEFAULT_TRUE_TEXT = "true"
DEFAULT_FALSE_TEXT = "false"


@dataclass(frozen=True)
class FieldDefaults:
    """Defaults applied when a field is declared with a type hint."""

    structural_type: StructuralType
    align: FieldAlign
    decimals: int
    search: bool
    sort: bool
    csv: bool
    formatter_factory: FormatterFactory
    true_text: str = ""
    false_text: str = ""

    def create_formatter(self) -> Formatter:
        return self.formatter_factory(self.decimals, self.true_text, self.false_text)


def _fixed(create: Callable[[], Formatter]) -> FormatterFactory:
    return lambda decimals, true_text, false_text: create()


def _scaled(create: Callable[[int], Formatter]) -> FormatterFactory:
    return lambda decimals, true_text, false_text: create(decimals)


def _labelled(decimals: int, true_text: str, false_text: str) -> Formatter:
    return fmt.create_bool_formatter(true_text, false_text)


FORMATTER_FACTORIES: Dict[FieldTypeHint, FormatterFactory] = {
    FieldTypeHint.ID: _fixed(fmt.create_id_formatter),
    FieldTypeHint.INTEGER: _fixed(fmt.create_integer_formatter),
    FieldTypeHint.FLOAT: _scaled(fmt.create_float_formatter),
    FieldTypeHint.TEXT: _fixed(fmt.create_text_formatter),
    FieldTypeHint.BOOL: _labelled,
    FieldTypeHint.DATETIME: _fixed(fmt.create_datetime_formatter),
    FieldTypeHint.DATE: _fixed(fmt.create_date_formatter),
    FieldTypeHint.DISTANCE: _scaled(fmt.create_distance_formatter),
    FieldTypeHint.PRESSURE: _scaled(fmt.create_pressure_formatter),
    FieldTypeHint.SPEED: _scaled(fmt.create_speed_formatter),
    FieldTypeHint.BUTTONS: _fixed(fmt.create_passthrough_formatter),
    FieldTypeHint.ICON: _fixed(fmt.create_text_formatter),
    FieldTypeHint.LINK: _fixed(fmt.create_link_formatter),
    FieldTypeHint.HTML: _fixed(fmt.create_text_formatter),
    FieldTypeHint.INPUT: _fixed(fmt.create_text_formatter),
    FieldTypeHint.HEADER: _fixed(fmt.create_text_formatter),
    FieldTypeHint.TIMELENGTH: _fixed(fmt.create_time_length_formatter),
    FieldTypeHint.TEXT2: _fixed(fmt.create_text2_formatter),
    FieldTypeHint.TEXT2_INT: _fixed(fmt.create_text2_int_formatter),
    FieldTypeHint.TEXT2_FLOAT: _scaled(fmt.create_text2_float_formatter),
    FieldTypeHint.TEXT2_DATETIME: _fixed(fmt.create_text2_datetime_formatter),
    FieldTypeHint.TEXT2_DATE: _fixed(fmt.create_text2_date_formatter),
    FieldTypeHint.TEXT2_DISTANCE: _scaled(fmt.create_text2_distance_formatter),
    FieldTypeHint.TEXT2_SPEED: _scaled(fmt.create_text2_speed_formatter),
    FieldTypeHint.TEXT2_BOOL: _fixed(fmt.create_text2_bool_formatter),
    FieldTypeHint.TEXT2_TIMELENGTH: _fixed(fmt.create_text2_time_length_formatter),
    FieldTypeHint.TEXT_N: _fixed(fmt.create_text_n_formatter),
    FieldTypeHint.INTEGER_N: _fixed(fmt.create_integer_n_formatter),
    FieldTypeHint.FLOAT_N: _scaled(fmt.create_float_n_formatter),
    FieldTypeHint.DATETIME_N: _fixed(fmt.create_datetime_n_formatter),
    FieldTypeHint.DATE_N: _fixed(fmt.create_date_n_formatter),
    FieldTypeHint.DISTANCE_N: _scaled(fmt.create_distance_n_formatter),
    FieldTypeHint.SPEED_N: _scaled(fmt.create_speed_n_formatter),
    FieldTypeHint.BOOL_N: _fixed(fmt.create_bool_n_formatter),
    FieldTypeHint.TIMELENGTH_N: _fixed(fmt.create_time_length_n_formatter),
}

# Hints whose formatter is rebuilt when the decimal precision changes.
DECIMAL_HINTS = frozenset(
    {
        FieldTypeHint.FLOAT,
        FieldTypeHint.DISTANCE,
        FieldTypeHint.PRESSURE,
        FieldTypeHint.SPEED,
        FieldTypeHint.TEXT2_FLOAT,
        FieldTypeHint.TEXT2_DISTANCE,
        FieldTypeHint.TEXT2_SPEED,
        FieldTypeHint.FLOAT_N,
        FieldTypeHint.DISTANCE_N,
        FieldTypeHint.SPEED_N,
    }
)

_T, _N, _X = StructuralType.TEXT, StructuralType.NUMBER, StructuralType.TEXT2
_L, _C, _R = FieldAlign.LEFT, FieldAlign.CENTER, FieldAlign.RIGHT

# hint: (structural type, align, decimals, search, sort, csv)
_DEFAULTS_TABLE = {
    FieldTypeHint.ID: (StructuralType.ID, _R, 0, True, True, False),
    FieldTypeHint.INTEGER: (_N, _R, 0, True, True, True),
    FieldTypeHint.FLOAT: (_N, _R, 2, True, True, True),
    FieldTypeHint.TEXT: (_T, _L, 0, True, True, True),
    FieldTypeHint.BOOL: (_T, _L, 0, True, True, True),
    FieldTypeHint.DATETIME: (_T, _L, 0, True, True, True),
    FieldTypeHint.DATE: (_T, _L, 0, True, True, True),
    FieldTypeHint.DISTANCE: (_N, _R, 2, True, True, True),
    FieldTypeHint.PRESSURE: (_N, _R, 2, True, True, True),
    FieldTypeHint.SPEED: (_N, _R, 1, True, True, True),
    FieldTypeHint.BUTTONS: (StructuralType.BUTTONS, _C, 0, False, False, False),
    FieldTypeHint.ICON: (StructuralType.ICON, _C, 0, False, True, True),
    FieldTypeHint.LINK: (StructuralType.LINK, _L, 0, True, True, True),
    FieldTypeHint.HTML: (StructuralType.HTML, _L, 0, True, True, False),
    FieldTypeHint.INPUT: (StructuralType.INPUT, _L, 0, False, True, False),
    FieldTypeHint.HEADER: (StructuralType.HEADER, _L, 0, False, False, False),
    FieldTypeHint.TIMELENGTH: (_T, _L, 0, True, True, True),
    FieldTypeHint.TEXT2: (_X, _L, 0, True, True, True),
    FieldTypeHint.TEXT2_INT: (_X, _R, 0, True, True, True),
    FieldTypeHint.TEXT2_FLOAT: (_X, _R, 2, True, True, True),
    FieldTypeHint.TEXT2_DATETIME: (_X, _L, 0, True, True, True),
    FieldTypeHint.TEXT2_DATE: (_X, _L, 0, True, True, True),
    FieldTypeHint.TEXT2_DISTANCE: (_X, _R, 2, True, True, True),
    FieldTypeHint.TEXT2_SPEED: (_X, _R, 1, True, True, True),
    FieldTypeHint.TEXT2_BOOL: (_X, _L, 0, True, True, True),
    FieldTypeHint.TEXT2_TIMELENGTH: (_X, _L, 0, True, True, True),
    FieldTypeHint.TEXT_N: (_X, _L, 0, True, True, True),
    FieldTypeHint.INTEGER_N: (_X, _R, 0, True, True, True),
    FieldTypeHint.FLOAT_N: (_X, _R, 2, True, True, True),
    FieldTypeHint.DATETIME_N: (_X, _L, 0, True, True, True),
    FieldTypeHint.DATE_N: (_X, _L, 0, True, True, True),
    FieldTypeHint.DISTANCE_N: (_X, _R, 2, True, True, True),
    FieldTypeHint.SPEED_N: (_X, _R, 1, True, True, True),
    FieldTypeHint.BOOL_N: (_X, _L, 0, True, True, True),
    FieldTypeHint.TIMELENGTH_N: (_X, _L, 0, True, True, True),
}

FALLBACK_DEFAULTS = FieldDefaults(
    structural_type=StructuralType.TEXT,
    align=FieldAlign.LEFT,
    decimals=0,
    search=True,
    sort=True,
    csv=True,
    formatter_factory=FORMATTER_FACTORIES[FieldTypeHint.TEXT],
)


def coerce_hint(hint: Union[FieldTypeHint, str, None]) -> Optional[FieldTypeHint]:
    """Return the matching FieldTypeHint, or None for unknown tags."""
    if isinstance(hint, FieldTypeHint):
        return hint
    try:
        return FieldTypeHint(str(hint).lower())
    except ValueError:
        return None


def resolve_defaults(hint: Union[FieldTypeHint, str, None]) -> FieldDefaults:
    """Return the defaults bundle for a type hint.

    Unknown hints never raise; they fall back to a searchable, sortable,
    exportable text field.

    Args:
        hint: A FieldTypeHint or its string value.

    Returns:
        FieldDefaults for the hint.
    """
    known = coerce_hint(hint)
    if known is None:
        LOGGER.debug("Unknown field type hint %r, using text defaults", hint)
        return FALLBACK_DEFAULTS

    structural_type, align, decimals, search, sort, csv = _DEFAULTS_TABLE[known]
    true_text, false_text = "", ""
    if known == FieldTypeHint.BOOL:
        true_text, false_text = DEFAULT_TRUE_TEXT, DEFAULT_FALSE_TEXT
    return FieldDefaults(
        structural_type=structural_type,
        align=align,
        decimals=decimals,
        search=search,
        sort=sort,
        csv=csv,
        formatter_factory=FORMATTER_FACTORIES[known],
        true_text=true_text,
        false_text=false_text,
    )


def create_formatter(
    hint: Union[FieldTypeHint, str, None],
    decimals: int,
    true_text: str = "",
    false_text: str = "",
) -> Formatter:
    """Build the default formatter for a hint with explicit parameters."""
    known = coerce_hint(hint)
    factory = FORMATTER_FACTORIES.get(known, FALLBACK_DEFAULTS.formatter_factory)
    return factory(decimals, true_text, false_text)
