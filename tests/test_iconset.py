"""Tests for icon sets and icon fields."""

import logging

import pytest

from table_presenter.context import UiContext
from table_presenter.enums import FieldColor
from table_presenter.iconset import IconRef, IconSet
from table_presenter.table import TableBuilder


def test_add_returns_reference() -> None:
    icons = IconSet()
    online = icons.add("online", "check_circle", FieldColor.ACCENT, "state.online")
    assert online == IconRef("online")
    assert online.value == "online"
    assert "online" in icons
    assert len(icons) == 1


def test_resolve_unknown_value_warns(caplog: pytest.LogCaptureFixture) -> None:
    icons = IconSet()
    icons.add("online", "check_circle", "accent")
    with caplog.at_level(logging.WARNING):
        assert icons.resolve("offline") is None
    assert "offline" in caplog.text
    assert icons.resolve("online") == IconRef("online")


def test_icon_field_from_set(ctx: UiContext) -> None:
    icons = IconSet()
    online = icons.add("online", "check_circle", FieldColor.ACCENT, "state.online", {"size": 20})
    icons.add("offline", "cancel", FieldColor.WARN, "state.offline")

    builder = TableBuilder(ctx)
    builder.icon_field_from_set("state", "device.state", lambda r: r, icons)
    table = builder.build().set_data([online, None])

    assert [row["state"] for row in table.get_data()] == ["online", ""]
    descriptor = table.describe_fields()[0]
    assert list(descriptor["icons"]) == ["online", "offline"]
    assert descriptor["icons"]["online"]["size"] == 20
