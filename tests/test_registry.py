"""Tests for type hint defaults."""

import pytest

from table_presenter.context import UiContext
from table_presenter.enums import FieldAlign, FieldTypeHint, OutputChannel, StructuralType
from table_presenter.registry import (
    DECIMAL_HINTS,
    FALLBACK_DEFAULTS,
    coerce_hint,
    create_formatter,
    resolve_defaults,
)
from table_presenter.row import Row


@pytest.mark.parametrize("hint", list(FieldTypeHint))
def test_every_hint_resolves(hint: FieldTypeHint, ctx: UiContext, empty_row: Row) -> None:
    defaults = resolve_defaults(hint)
    formatter = defaults.create_formatter()
    for channel in OutputChannel:
        formatter.format(None, empty_row, channel, ctx)


def test_unknown_hint_falls_back_to_text() -> None:
    assert resolve_defaults("sparkline") is FALLBACK_DEFAULTS
    assert resolve_defaults(None) is FALLBACK_DEFAULTS
    assert FALLBACK_DEFAULTS.structural_type == StructuralType.TEXT
    assert FALLBACK_DEFAULTS.search and FALLBACK_DEFAULTS.sort and FALLBACK_DEFAULTS.csv


def test_coerce_hint_is_case_insensitive() -> None:
    assert coerce_hint("Text2Float") == FieldTypeHint.TEXT2_FLOAT
    assert coerce_hint("nope") is None


def test_selected_defaults() -> None:
    buttons = resolve_defaults(FieldTypeHint.BUTTONS)
    assert buttons.structural_type == StructuralType.BUTTONS
    assert buttons.align == FieldAlign.CENTER
    assert not buttons.search and not buttons.sort and not buttons.csv

    identifier = resolve_defaults("id")
    assert identifier.structural_type == StructuralType.ID
    assert not identifier.csv

    speed = resolve_defaults(FieldTypeHint.SPEED)
    assert speed.structural_type == StructuralType.NUMBER
    assert speed.decimals == 1

    assert resolve_defaults(FieldTypeHint.TEXT_N).structural_type == StructuralType.TEXT2


def test_bool_defaults_use_plain_labels(ctx: UiContext, empty_row: Row) -> None:
    formatter = resolve_defaults(FieldTypeHint.BOOL).create_formatter()
    assert formatter.format(True, empty_row, OutputChannel.WEB, ctx) == "true"
    assert formatter.format(False, empty_row, OutputChannel.CSV, ctx) == "false"


def test_create_formatter_honours_decimals(ctx: UiContext, empty_row: Row) -> None:
    assert FieldTypeHint.FLOAT in DECIMAL_HINTS
    assert FieldTypeHint.TEXT not in DECIMAL_HINTS
    formatter = create_formatter(FieldTypeHint.FLOAT, 3)
    assert formatter.format(1.5, empty_row, OutputChannel.CSV, ctx) == "1.500"
    fallback = create_formatter("unknown", 3)
    assert fallback.format(1.5, empty_row, OutputChannel.CSV, ctx) == "1.5"
