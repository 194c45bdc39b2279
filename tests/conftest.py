"""Shared pytest fixtures."""

from __future__ import annotations

import json
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = PROJECT_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from table_presenter.config import Settings  # noqa: E402
from table_presenter.context import UiContext  # noqa: E402
from table_presenter.row import Row  # noqa: E402
from table_presenter.table import Table, TableBuilder  # noqa: E402
from table_presenter.units import DistanceUnit, Locale, PressureUnit  # noqa: E402


@pytest.fixture
def settings() -> Settings:
    """Return settings independent of the environment."""
    return Settings(
        _env_file=None,
        locale=Locale.DE,
        timezone="Europe/Vienna",
        distance_unit=DistanceUnit.KILOMETER,
        pressure_unit=PressureUnit.BAR,
        csv_delimiter=";",
        excel_sheet_name="Sheet1",
        excel_min_column_width=10,
        excel_max_column_width=50,
        excel_width_factor=1.2,
        export_dir="exports",
    )


@pytest.fixture
def ctx() -> UiContext:
    """Return a German user context in Vienna."""
    return UiContext(locale=Locale.DE, timezone="Europe/Vienna")


@pytest.fixture
def ctx_us() -> UiContext:
    """Return a US user context preferring miles and psi."""
    return UiContext(
        locale=Locale.EN_US,
        timezone="Europe/Vienna",
        distance=DistanceUnit.MILES,
        pressure=PressureUnit.PSI,
    )


@pytest.fixture
def empty_row() -> Row:
    return Row({}, {})


@pytest.fixture
def trip_records() -> List[Dict[str, Any]]:
    """Return representative vehicle trip records."""
    return [
        {
            "id": 1,
            "driver": "Anna",
            "distance": 1234.5,
            "stops": 10,
            "started": datetime(2024, 1, 15, 12, 30, tzinfo=timezone.utc),
            "site": ("Depot Nord", "/sites/1"),
            "tags": ["urgent", "fragile", "cold"],
            "note": "Refuel",
        },
        {
            "id": 2,
            "driver": "Ben",
            "distance": 10.0,
            "stops": 20,
            "started": None,
            "site": ("Depot Süd", "/sites/2"),
            "tags": ["urgent"],
            "note": "",
        },
        {
            "id": 3,
            "driver": "",
            "distance": "bad",
            "stops": "bad",
            "started": datetime(2024, 7, 1, 6, 0, tzinfo=timezone.utc),
            "site": "not a pair",
            "tags": [],
            "note": "",
        },
    ]


@pytest.fixture
def trip_builder(ctx: UiContext, settings: Settings) -> TableBuilder:
    """Return a builder declaring the trip columns."""
    builder = TableBuilder(ctx, settings=settings)
    builder.id_field("id", "trip.id", lambda r: r["id"])
    builder.text_field("driver", "trip.driver", lambda r: r["driver"]).with_footer_count()
    builder.distance_field("distance", "trip.distance", lambda r: r["distance"]).with_footer_sum()
    builder.int_field("stops", "trip.stops", lambda r: r["stops"]).with_footer_sum()
    builder.datetime_field("started", "trip.started", lambda r: r["started"])
    builder.link_field("site", "trip.site", lambda r: r["site"])
    builder.text_n_field("tags", "trip.tags", lambda r: r["tags"])
    builder.text_field("note", "trip.note", lambda r: r["note"]).with_row_hint(
        lambda r: r["note"]
    )
    return builder


@pytest.fixture
def trip_table(trip_builder: TableBuilder, trip_records: List[Dict[str, Any]]) -> Table:
    """Return the built trip table with data."""
    return trip_builder.build().set_data(trip_records)


@pytest.fixture
def trip_schema_payload() -> Dict[str, Any]:
    """Return a declarative schema for JSON trip records."""
    return {
        "title": "Trips",
        "fields": [
            {"id": "id", "name": "trip.id", "type": "id"},
            {"id": "driver", "name": "trip.driver", "key": "driver.name", "footer": "count"},
            {
                "id": "distance",
                "name": "trip.distance",
                "type": "distance",
                "decimals": 1,
                "footer": "sum",
            },
            {"id": "started", "name": "trip.started", "type": "datetime"},
            {
                "id": "site",
                "name": "trip.site",
                "type": "link",
                "key": "site.name",
                "link_key": "site.url",
            },
            {"id": "done", "name": "trip.done", "type": "bool", "bool_text": ["Ja", "Nein"]},
            {"id": "note", "name": "trip.note", "hint_key": "note", "csv": False},
            {
                "id": "actions",
                "name": "trip.actions",
                "type": "buttons",
                "buttons": [{"slot": 0, "action": "link", "icon": "edit"}],
            },
        ],
    }


@pytest.fixture
def trip_data_payload() -> List[Dict[str, Any]]:
    """Return JSON trip records matching the trip schema."""
    return [
        {
            "id": 1,
            "driver": {"name": "Anna"},
            "distance": 12.34,
            "started": "2024-01-15T12:30:00Z",
            "site": {"name": "Depot Nord", "url": "/sites/1"},
            "done": True,
            "note": "Refuel",
            "actions": {"0": "/trips/1"},
        },
        {
            "id": 2,
            "driver": {"name": "Ben"},
            "distance": 7.66,
            "started": None,
            "site": {"name": "Depot Süd", "url": "/sites/2"},
            "done": False,
            "note": "",
            "actions": {"0": ""},
        },
    ]


@pytest.fixture
def schema_file(tmp_path: Path, trip_schema_payload: Dict[str, Any]) -> Path:
    path = tmp_path / "trips.schema.json"
    path.write_text(json.dumps(trip_schema_payload), encoding="utf-8")
    return path


@pytest.fixture
def data_file(tmp_path: Path, trip_data_payload: List[Dict[str, Any]]) -> Path:
    path = tmp_path / "trips.json"
    path.write_text(json.dumps(trip_data_payload, ensure_ascii=False), encoding="utf-8")
    return path
