"""Value formatters, one constructor per field type hint.

A formatter turns a raw cell value into its rendered form for one output
channel. Display channels (web, print) use locale separators, unit suffixes
and localized date layouts. Export channels (CSV, Excel) use plain fixed
decimals and ISO dates so the files stay machine readable.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Callable, Protocol, Tuple

from .context import UiContext
from .enums import OutputChannel
from .row import Row
from .units import (
    convert_distance,
    convert_pressure,
    convert_speed,
    date_layout,
    datetime_layout,
    format_distance,
    format_number,
    format_pressure,
    format_speed,
    to_local_datetime,
)
from .values import (
    Predicate,
    as_pair,
    as_sequence,
    is_boolean,
    is_integer,
    is_moment,
    is_number,
    is_text,
    to_float,
    to_int,
    to_timestamp,
)

EMPTY_PAIR: Tuple[str, str] = ("", "")
LINE_SEPARATOR = " - "
EXPORT_DATETIME_LAYOUT = "%Y-%m-%d %H:%M:%S"
EXPORT_DATE_LAYOUT = "%Y-%m-%d"

ItemRenderer = Callable[[Any, OutputChannel, UiContext], str]


class Formatter(Protocol):
    """Render one raw value for one output channel."""

    def format(self, value: Any, row: Row, channel: OutputChannel, ctx: UiContext) -> Any:
        ...


class FormatterFunc:
    """Adapt a plain function to the :class:`Formatter` protocol."""

    __slots__ = ("func", "name")

    def __init__(
        self,
        func: Callable[[Any, Row, OutputChannel, UiContext], Any],
        name: str = "",
    ) -> None:
        self.func = func
        self.name = name or getattr(func, "__name__", "formatter")

    def format(self, value: Any, row: Row, channel: OutputChannel, ctx: UiContext) -> Any:
        return self.func(value, row, channel, ctx)

    def __call__(self, value: Any, row: Row, channel: OutputChannel, ctx: UiContext) -> Any:
        return self.func(value, row, channel, ctx)

    def __repr__(self) -> str:
        return f"FormatterFunc({self.name})"


def format_time_length(seconds: int) -> str:
    """Render a duration in seconds as ``HH:MM`` or ``{days}d HH:MM``.

    Negative durations render as an empty string.
    """
    if seconds < 0:
        return ""
    if seconds == 0:
        return "00:00"
    total_minutes = seconds // 60
    hours, minutes = divmod(total_minutes, 60)
    if hours >= 24:
        days, hours = divmod(hours, 24)
        return f"{days}d {hours:02d}:{minutes:02d}"
    return f"{hours:02d}:{minutes:02d}"


def whole_minutes(seconds: int) -> int:
    """Seconds to minutes, truncating toward zero."""
    if seconds < 0:
        return -((-seconds) // 60)
    return seconds // 60


def join_lines(primary: str, secondary: str, skip_zero: bool = False) -> str:
    """Collapse a two-line value into one export cell.

    The secondary line is dropped when it is empty, or ``"0"`` when
    ``skip_zero`` is set.
    """
    if secondary == "" or (skip_zero and secondary == "0"):
        return primary
    return primary + LINE_SEPARATOR + secondary


def _fixed(value: float, decimals: int) -> str:
    return f"{value:.{max(decimals, 0)}f}"


# Item renderers shared by the single, two-line and N-line variants.


def _text_item(value: Any, channel: OutputChannel, ctx: UiContext) -> str:
    return value


def _integer_item(value: Any, channel: OutputChannel, ctx: UiContext) -> str:
    number = to_int(value)
    if channel.is_display():
        return format_number(number, 0, ctx.locale)
    return str(number)


def _float_item(decimals: int) -> ItemRenderer:
    def render(value: Any, channel: OutputChannel, ctx: UiContext) -> str:
        number = to_float(value)
        if channel.is_display():
            return format_number(number, decimals, ctx.locale)
        return _fixed(number, decimals)

    return render


def _distance_item(decimals: int) -> ItemRenderer:
    def render(value: Any, channel: OutputChannel, ctx: UiContext) -> str:
        km = to_float(value)
        if channel.is_display():
            return format_distance(km, ctx.distance, ctx.locale, decimals)
        return _fixed(convert_distance(km, ctx.distance), decimals)

    return render


def _speed_item(decimals: int) -> ItemRenderer:
    def render(value: Any, channel: OutputChannel, ctx: UiContext) -> str:
        kmh = to_float(value)
        if channel.is_display():
            return format_speed(kmh, ctx.distance, ctx.locale, decimals)
        return _fixed(convert_speed(kmh, ctx.distance), decimals)

    return render


def _pressure_item(decimals: int) -> ItemRenderer:
    def render(value: Any, channel: OutputChannel, ctx: UiContext) -> str:
        bar = to_float(value)
        if channel.is_display():
            return format_pressure(bar, ctx.pressure, ctx.locale, decimals)
        return _fixed(convert_pressure(bar, ctx.pressure), decimals)

    return render


def _moment_item(date_only: bool) -> ItemRenderer:
    def render(value: Any, channel: OutputChannel, ctx: UiContext) -> str:
        if value is None:
            return ""
        if channel.is_display():
            layout = date_layout(ctx.locale) if date_only else datetime_layout(ctx.locale)
        else:
            layout = EXPORT_DATE_LAYOUT if date_only else EXPORT_DATETIME_LAYOUT
        # Plain dates are calendar days, not instants.
        if isinstance(value, date) and not isinstance(value, datetime):
            return value.strftime(layout)
        timestamp = to_timestamp(value)
        if timestamp == 0:
            return ""
        moment = to_local_datetime(timestamp, ctx.zone)
        if moment is None:
            return ""
        return moment.strftime(layout)

    return render


def _duration_item(value: Any, channel: OutputChannel, ctx: UiContext) -> str:
    seconds = to_int(value)
    if channel.is_display():
        return format_time_length(seconds)
    return str(whole_minutes(seconds))


def _yes_no_item(value: Any, channel: OutputChannel, ctx: UiContext) -> str:
    return "Yes" if value else "No"


def _single(render: ItemRenderer, name: str) -> FormatterFunc:
    def format_single(value: Any, row: Row, channel: OutputChannel, ctx: UiContext) -> str:
        return render(value, channel, ctx)

    return FormatterFunc(format_single, name)


def _pair(
    predicate: Predicate, render: ItemRenderer, name: str, skip_zero: bool = False
) -> FormatterFunc:
    def format_pair(value: Any, row: Row, channel: OutputChannel, ctx: UiContext) -> Any:
        pair = as_pair(value, predicate)
        if pair is None:
            return EMPTY_PAIR
        primary = render(pair[0], channel, ctx)
        secondary = render(pair[1], channel, ctx)
        if channel.is_export():
            return join_lines(primary, secondary, skip_zero=skip_zero)
        return (primary, secondary)

    return FormatterFunc(format_pair, name)


def _lines(predicate: Predicate, render: ItemRenderer, name: str) -> FormatterFunc:
    def format_lines(value: Any, row: Row, channel: OutputChannel, ctx: UiContext) -> Any:
        items = as_sequence(value, predicate)
        if items is None:
            return []
        return [render(item, channel, ctx) for item in items]

    return FormatterFunc(format_lines, name)


# Single value formatters.


def create_id_formatter() -> FormatterFunc:
    def format_id(value: Any, row: Row, channel: OutputChannel, ctx: UiContext) -> int:
        return to_int(value)

    return FormatterFunc(format_id, "id")


def create_integer_formatter() -> FormatterFunc:
    return _single(_integer_item, "integer")


def create_float_formatter(decimals: int) -> FormatterFunc:
    return _single(_float_item(decimals), f"float({decimals})")


def create_text_formatter() -> FormatterFunc:
    def format_text(value: Any, row: Row, channel: OutputChannel, ctx: UiContext) -> str:
        if value is None:
            return ""
        return str(value)

    return FormatterFunc(format_text, "text")


def create_passthrough_formatter() -> FormatterFunc:
    """Keep structured values (button maps) intact for the web channel."""

    def format_passthrough(value: Any, row: Row, channel: OutputChannel, ctx: UiContext) -> Any:
        if value is None:
            return None
        if channel == OutputChannel.WEB:
            return value
        return str(value)

    return FormatterFunc(format_passthrough, "passthrough")


def create_bool_formatter(true_text: str, false_text: str) -> FormatterFunc:
    def format_bool(value: Any, row: Row, channel: OutputChannel, ctx: UiContext) -> str:
        if not isinstance(value, bool):
            return ""
        return true_text if value else false_text

    return FormatterFunc(format_bool, "bool")


def create_datetime_formatter() -> FormatterFunc:
    return _single(_moment_item(date_only=False), "datetime")


def create_date_formatter() -> FormatterFunc:
    return _single(_moment_item(date_only=True), "date")


def create_distance_formatter(decimals: int) -> FormatterFunc:
    return _single(_distance_item(decimals), f"distance({decimals})")


def create_pressure_formatter(decimals: int) -> FormatterFunc:
    return _single(_pressure_item(decimals), f"pressure({decimals})")


def create_speed_formatter(decimals: int) -> FormatterFunc:
    return _single(_speed_item(decimals), f"speed({decimals})")


def create_time_length_formatter() -> FormatterFunc:
    return _single(_duration_item, "timelength")


def create_link_formatter() -> FormatterFunc:
    """Links are ``(text, url)`` pairs; only the web channel keeps the url."""

    def format_link(value: Any, row: Row, channel: OutputChannel, ctx: UiContext) -> Any:
        pair = as_pair(value, is_text)
        if pair is None:
            return EMPTY_PAIR
        if channel == OutputChannel.WEB:
            return pair
        return pair[0]

    return FormatterFunc(format_link, "link")


# Two-line formatters.


def create_text2_formatter() -> FormatterFunc:
    return _pair(is_text, _text_item, "text2")


def create_text2_int_formatter() -> FormatterFunc:
    return _pair(is_integer, _integer_item, "text2int", skip_zero=True)


def create_text2_float_formatter(decimals: int) -> FormatterFunc:
    return _pair(is_number, _float_item(decimals), f"text2float({decimals})")


def create_text2_datetime_formatter() -> FormatterFunc:
    return _pair(is_moment, _moment_item(date_only=False), "text2datetime")


def create_text2_date_formatter() -> FormatterFunc:
    return _pair(is_moment, _moment_item(date_only=True), "text2date")


def create_text2_distance_formatter(decimals: int) -> FormatterFunc:
    return _pair(is_number, _distance_item(decimals), f"text2distance({decimals})")


def create_text2_speed_formatter(decimals: int) -> FormatterFunc:
    return _pair(is_number, _speed_item(decimals), f"text2speed({decimals})")


def create_text2_bool_formatter() -> FormatterFunc:
    return _pair(is_boolean, _yes_no_item, "text2bool")


def create_text2_time_length_formatter() -> FormatterFunc:
    return _pair(is_integer, _duration_item, "text2timelength", skip_zero=True)


# N-line formatters. Every channel receives a list of strings; exporters
# spread the list over numbered columns.


def create_text_n_formatter() -> FormatterFunc:
    return _lines(is_text, _text_item, "textn")


def create_integer_n_formatter() -> FormatterFunc:
    return _lines(is_integer, _integer_item, "integern")


def create_float_n_formatter(decimals: int) -> FormatterFunc:
    return _lines(is_number, _float_item(decimals), f"floatn({decimals})")


def create_datetime_n_formatter() -> FormatterFunc:
    return _lines(is_moment, _moment_item(date_only=False), "datetimen")


def create_date_n_formatter() -> FormatterFunc:
    return _lines(is_moment, _moment_item(date_only=True), "daten")


def create_distance_n_formatter(decimals: int) -> FormatterFunc:
    return _lines(is_number, _distance_item(decimals), f"distancen({decimals})")


def create_speed_n_formatter(decimals: int) -> FormatterFunc:
    return _lines(is_number, _speed_item(decimals), f"speedn({decimals})")


def create_bool_n_formatter() -> FormatterFunc:
    return _lines(is_boolean, _yes_no_item, "booln")


def create_time_length_n_formatter() -> FormatterFunc:
    return _lines(is_integer, _duration_item, "timelengthn")
