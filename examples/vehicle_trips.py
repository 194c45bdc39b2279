"""Build a trip table in code and print it for every output channel."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Optional, Tuple

from table_presenter.config import get_settings
from table_presenter.context import UiContext
from table_presenter.enums import ButtonAction, FieldColor, OutputChannel
from table_presenter.iconset import IconRef, IconSet
from table_presenter.logging_config import configure_logging
from table_presenter.print_renderer import PrintRenderer
from table_presenter.table import Table, TableBuilder

LABELS = {
    "trip.vehicle": "Vehicle",
    "trip.state": "State",
    "trip.started": "Started",
    "trip.distance": "Distance",
    "trip.duration": "Duration",
    "trip.speed": "Avg / max speed",
    "trip.depot": "Depot",
    "trip.actions": "",
    "table.no_data": "No trips",
}


@dataclass
class Trip:
    vehicle: str
    state: Optional[IconRef]
    started: datetime
    distance_km: float
    duration_s: int
    speeds: Tuple[float, float]
    depot: Tuple[str, str]


def translate(key: str) -> str:
    return LABELS.get(key, key)


def build_table(ctx: UiContext, states: IconSet) -> Table:
    """Declare the trip columns."""
    builder = TableBuilder(ctx, translator=translate)
    builder.text_field("vehicle", "trip.vehicle", lambda t: t.vehicle).with_footer_count()
    builder.icon_field_from_set("state", "trip.state", lambda t: t.state, states)
    builder.datetime_field("started", "trip.started", lambda t: t.started)
    builder.distance_field("distance", "trip.distance", lambda t: t.distance_km).with_footer_sum()
    builder.time_length_field("duration", "trip.duration", lambda t: t.duration_s)
    builder.field("speed", "trip.speed", "text2speed", lambda t: t.speeds).with_decimals(0)
    builder.link_field("depot", "trip.depot", lambda t: t.depot)
    actions = builder.buttons_field(
        "actions", "trip.actions", lambda t: {"0": f"/trips/{t.vehicle}"}
    )
    actions.add_button(0, ButtonAction.LINK, "open_in_new", FieldColor.PRIMARY, "trip.open")
    return builder.build()


def sample_trips(states: IconSet) -> List[Trip]:
    """Three trips; the last one carries a state missing from the icon set."""
    return [
        Trip(
            "W-1234",
            states.resolve("done"),
            datetime(2024, 3, 4, 7, 15, tzinfo=timezone.utc),
            182.4,
            9420,
            (74.0, 131.0),
            ("Nord", "/depots/1"),
        ),
        Trip(
            "W-5678",
            states.resolve("running"),
            datetime(2024, 3, 4, 9, 0, tzinfo=timezone.utc),
            12.9,
            1860,
            (31.0, 58.0),
            ("Süd", "/depots/2"),
        ),
        Trip(
            "W-9012",
            states.resolve("lost"),
            datetime(2024, 3, 5, 22, 40, tzinfo=timezone.utc),
            640.0,
            97200,
            (66.0, 118.0),
            ("Nord", "/depots/1"),
        ),
    ]


def main() -> None:
    """Print the web payload, the CSV export and the print document."""
    configure_logging(logging.INFO)
    states = IconSet()
    states.add("done", "check_circle", FieldColor.ACCENT, "trip.done")
    states.add("running", "autorenew", FieldColor.PRIMARY, "trip.running")

    ctx = UiContext.from_settings(get_settings(), translator=translate)
    table = build_table(ctx, states).set_data(sample_trips(states))

    print(table.to_table_data_response().print(translate))
    print(table.set_output_type(OutputChannel.CSV).to_table_data_response().print()["csv"])
    print(PrintRenderer().render(table, title="Trips"))


if __name__ == "__main__":
    main()
