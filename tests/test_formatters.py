"""Tests for channel specific value formatters."""

from datetime import date, datetime, timezone

import pytest

from table_presenter import formatters as fmt
from table_presenter.context import UiContext
from table_presenter.enums import OutputChannel
from table_presenter.row import Row
from table_presenter.schema_processor import parse_moment
from table_presenter.units import Locale

WEB = OutputChannel.WEB
CSV = OutputChannel.CSV
PDF = OutputChannel.PDF
EXCEL = OutputChannel.EXCEL

NOON_UTC = datetime(2024, 1, 15, 12, 30, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "seconds, expected",
    [(0, "00:00"), (59, "00:00"), (3665, "01:01"), (90000, "1d 01:00"), (-5, "")],
)
def test_format_time_length(seconds: int, expected: str) -> None:
    assert fmt.format_time_length(seconds) == expected


def test_whole_minutes_truncates_toward_zero() -> None:
    assert fmt.whole_minutes(119) == 1
    assert fmt.whole_minutes(-119) == -1


def test_join_lines() -> None:
    assert fmt.join_lines("a", "b") == "a - b"
    assert fmt.join_lines("a", "") == "a"
    assert fmt.join_lines("a", "0") == "a - 0"
    assert fmt.join_lines("a", "0", skip_zero=True) == "a"


def test_integer_formatter(ctx: UiContext, empty_row: Row) -> None:
    formatter = fmt.create_integer_formatter()
    assert formatter.format(1234567, empty_row, WEB, ctx) == "1.234.567"
    assert formatter.format(1234567, empty_row, CSV, ctx) == "1234567"
    assert formatter.format("bad", empty_row, PDF, ctx) == "0"


def test_float_formatter(ctx: UiContext, ctx_us: UiContext, empty_row: Row) -> None:
    formatter = fmt.create_float_formatter(2)
    assert formatter.format(1234.567, empty_row, WEB, ctx) == "1.234,57"
    assert formatter.format(1234.567, empty_row, PDF, ctx_us) == "1,234.57"
    assert formatter.format(1234.567, empty_row, EXCEL, ctx) == "1234.57"


def test_id_formatter_returns_int(ctx: UiContext, empty_row: Row) -> None:
    assert fmt.create_id_formatter().format("17", empty_row, WEB, ctx) == 17


def test_text_formatter(ctx: UiContext, empty_row: Row) -> None:
    formatter = fmt.create_text_formatter()
    assert formatter.format(None, empty_row, WEB, ctx) == ""
    assert formatter.format(5, empty_row, CSV, ctx) == "5"


def test_bool_formatter_labels(ctx: UiContext, empty_row: Row) -> None:
    formatter = fmt.create_bool_formatter("Ja", "Nein")
    assert formatter.format(True, empty_row, WEB, ctx) == "Ja"
    assert formatter.format(False, empty_row, CSV, ctx) == "Nein"
    assert formatter.format("true", empty_row, CSV, ctx) == ""


def test_datetime_formatter_channels(
    ctx: UiContext, ctx_us: UiContext, empty_row: Row
) -> None:
    formatter = fmt.create_datetime_formatter()
    assert formatter.format(NOON_UTC, empty_row, WEB, ctx) == "2024-01-15 13:30"
    assert formatter.format(NOON_UTC, empty_row, WEB, ctx_us) == "01/15/2024 01:30 PM"
    assert formatter.format(NOON_UTC, empty_row, CSV, ctx) == "2024-01-15 13:30:00"
    assert formatter.format(None, empty_row, WEB, ctx) == ""
    assert formatter.format(0, empty_row, WEB, ctx) == ""


def test_date_formatter(ctx: UiContext, empty_row: Row) -> None:
    formatter = fmt.create_date_formatter()
    assert formatter.format(date(2024, 1, 15), empty_row, WEB, ctx) == "2024-01-15"
    assert formatter.format(NOON_UTC, empty_row, EXCEL, ctx) == "2024-01-15"


@pytest.mark.parametrize("channel", [WEB, PDF, CSV, EXCEL])
def test_plain_dates_keep_their_day_west_of_utc(channel: OutputChannel, empty_row: Row) -> None:
    new_york = UiContext(locale=Locale.EN_US, timezone="America/New_York")
    expected = "01/15/2024" if channel.is_display() else "2024-01-15"

    day = parse_moment("2024-01-15")
    assert fmt.create_date_formatter().format(day, empty_row, channel, new_york) == expected
    stamped = fmt.create_datetime_formatter().format(day, empty_row, channel, new_york)
    assert stamped.startswith(expected)
    assert fmt.create_date_n_formatter().format([day], empty_row, channel, new_york) == [expected]


def test_datetimes_still_shift_into_the_user_zone(empty_row: Row) -> None:
    new_york = UiContext(locale=Locale.EN_US, timezone="America/New_York")
    late_utc = datetime(2024, 1, 15, 2, 0, tzinfo=timezone.utc)
    assert fmt.create_date_formatter().format(late_utc, empty_row, CSV, new_york) == "2024-01-14"


def test_unit_formatters(ctx: UiContext, ctx_us: UiContext, empty_row: Row) -> None:
    distance = fmt.create_distance_formatter(1)
    assert distance.format(10, empty_row, WEB, ctx) == "10,0 km"
    assert distance.format(10, empty_row, WEB, ctx_us) == "6.2 mi"
    assert distance.format(10, empty_row, CSV, ctx_us) == "6.2"

    speed = fmt.create_speed_formatter(0)
    assert speed.format(100, empty_row, PDF, ctx_us) == "62 mph"

    pressure = fmt.create_pressure_formatter(1)
    assert pressure.format(2, empty_row, WEB, ctx_us) == "29.0 psi"
    assert pressure.format(2, empty_row, CSV, ctx) == "2.0"


def test_time_length_formatter(ctx: UiContext, empty_row: Row) -> None:
    formatter = fmt.create_time_length_formatter()
    assert formatter.format(3665, empty_row, WEB, ctx) == "01:01"
    assert formatter.format(3665, empty_row, CSV, ctx) == "61"
    assert formatter.format(-5, empty_row, WEB, ctx) == ""


def test_link_formatter(ctx: UiContext, empty_row: Row) -> None:
    formatter = fmt.create_link_formatter()
    link = ("Depot", "/sites/1")
    assert formatter.format(link, empty_row, WEB, ctx) == ("Depot", "/sites/1")
    assert formatter.format(link, empty_row, CSV, ctx) == "Depot"
    assert formatter.format("Depot", empty_row, WEB, ctx) == ("", "")
    assert formatter.format("Depot", empty_row, CSV, ctx) == ("", "")


def test_passthrough_formatter(ctx: UiContext, empty_row: Row) -> None:
    formatter = fmt.create_passthrough_formatter()
    buttons = {"0": "/edit/1", "1": False}
    assert formatter.format(buttons, empty_row, WEB, ctx) is buttons
    assert formatter.format(buttons, empty_row, CSV, ctx) == str(buttons)
    assert formatter.format(None, empty_row, PDF, ctx) is None


def test_text2_formatters(ctx: UiContext, empty_row: Row) -> None:
    text2 = fmt.create_text2_formatter()
    assert text2.format(("a", "b"), empty_row, WEB, ctx) == ("a", "b")
    assert text2.format(("a", "b"), empty_row, CSV, ctx) == "a - b"
    assert text2.format(("a", ""), empty_row, EXCEL, ctx) == "a"
    assert text2.format((1, "b"), empty_row, WEB, ctx) == ("", "")

    text2int = fmt.create_text2_int_formatter()
    assert text2int.format((1500, 0), empty_row, WEB, ctx) == ("1.500", "0")
    assert text2int.format((1500, 0), empty_row, CSV, ctx) == "1500"
    assert text2int.format((5, 3), empty_row, CSV, ctx) == "5 - 3"

    text2float = fmt.create_text2_float_formatter(1)
    assert text2float.format((1, 0.0), empty_row, CSV, ctx) == "1.0 - 0.0"

    text2bool = fmt.create_text2_bool_formatter()
    assert text2bool.format((True, False), empty_row, CSV, ctx) == "Yes - No"

    text2time = fmt.create_text2_time_length_formatter()
    assert text2time.format((3600, 0), empty_row, CSV, ctx) == "60"
    assert text2time.format((3600, 0), empty_row, WEB, ctx) == ("01:00", "00:00")


def test_text2_split_round_trips(ctx: UiContext, empty_row: Row) -> None:
    joined = fmt.create_text2_formatter().format(("left", "right"), empty_row, CSV, ctx)
    assert tuple(joined.split(fmt.LINE_SEPARATOR)) == ("left", "right")


def test_n_line_formatters(ctx: UiContext, empty_row: Row) -> None:
    integers = fmt.create_integer_n_formatter()
    assert integers.format([1000, 2], empty_row, WEB, ctx) == ["1.000", "2"]
    assert integers.format([1000, 2], empty_row, CSV, ctx) == ["1000", "2"]
    assert integers.format(["a"], empty_row, WEB, ctx) == []

    texts = fmt.create_text_n_formatter()
    assert texts.format(["a", "b"], empty_row, EXCEL, ctx) == ["a", "b"]
    assert texts.format("a", empty_row, EXCEL, ctx) == []

    durations = fmt.create_time_length_n_formatter()
    assert durations.format([60, 7200], empty_row, PDF, ctx) == ["00:01", "02:00"]


@pytest.mark.parametrize(
    "formatter",
    [
        fmt.create_integer_formatter(),
        fmt.create_float_formatter(2),
        fmt.create_distance_formatter(2),
        fmt.create_pressure_formatter(2),
        fmt.create_speed_formatter(1),
        fmt.create_time_length_formatter(),
        fmt.create_datetime_formatter(),
    ],
)
@pytest.mark.parametrize("channel", list(OutputChannel))
def test_numeric_formatters_accept_none(
    formatter: fmt.FormatterFunc, channel: OutputChannel, ctx: UiContext, empty_row: Row
) -> None:
    first = formatter.format(None, empty_row, channel, ctx)
    assert isinstance(first, str)
    assert formatter.format(None, empty_row, channel, ctx) == first


def test_formatter_func_is_callable(ctx: UiContext, empty_row: Row) -> None:
    formatter = fmt.create_text_formatter()
    assert formatter("x", empty_row, WEB, ctx) == "x"
    assert repr(formatter) == "FormatterFunc(text)"
