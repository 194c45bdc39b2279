"""Tests for unit conversion and locale formatting."""

from datetime import timezone

import pytest

from table_presenter.units import (
    DistanceUnit,
    Locale,
    PressureUnit,
    convert_distance,
    convert_pressure,
    date_layout,
    datetime_layout,
    format_distance,
    format_number,
    format_pressure,
    format_speed,
    resolve_timezone,
    to_local_datetime,
    uses_comma_decimal,
)


@pytest.mark.parametrize(
    "locale, expected",
    [
        (Locale.DE, "1.234,50"),
        (Locale.FR, "1.234,50"),
        (Locale.EN_US, "1,234.50"),
        (Locale.EN_GB, "1,234.50"),
        (Locale.JA, "1,234.50"),
    ],
)
def test_format_number_uses_locale_separators(locale: Locale, expected: str) -> None:
    assert format_number(1234.5, 2, locale) == expected


def test_format_number_without_decimals_rounds() -> None:
    assert format_number(1234.6, 0, Locale.DE) == "1.235"
    assert format_number(-0.5, 1, Locale.EN_US) == "-0.5"


def test_comma_decimal_locales() -> None:
    assert uses_comma_decimal(Locale.DE)
    assert not uses_comma_decimal(Locale.EN_US)


def test_distance_conversion_and_suffix() -> None:
    assert convert_distance(100, DistanceUnit.KILOMETER) == 100
    assert convert_distance(100, DistanceUnit.MILES) == pytest.approx(62.1371)
    assert format_distance(10, DistanceUnit.MILES, Locale.EN_US, 1) == "6.2 mi"
    assert format_distance(10, DistanceUnit.NAUTICAL_MILES, Locale.DE, 2) == "5,40 NM"


def test_speed_follows_distance_preference() -> None:
    assert format_speed(100, DistanceUnit.KILOMETER, Locale.DE, 0) == "100 km/h"
    assert format_speed(100, DistanceUnit.MILES, Locale.EN_US, 1) == "62.1 mph"
    assert format_speed(100, DistanceUnit.NAUTICAL_MILES, Locale.EN_US, 0) == "54 kn"


def test_pressure_units() -> None:
    assert convert_pressure(2.5, PressureUnit.BAR) == 2.5
    assert format_pressure(2.5, PressureUnit.KPA, Locale.DE, 0) == "250 kPa"
    assert format_pressure(2, PressureUnit.PSI, Locale.EN_US, 1) == "29.0 psi"


def test_resolve_timezone_falls_back_to_utc() -> None:
    assert resolve_timezone("Not/AZone") is timezone.utc
    assert resolve_timezone("") is timezone.utc
    assert str(resolve_timezone("Europe/Vienna")) == "Europe/Vienna"


def test_date_layouts() -> None:
    assert date_layout(Locale.DE) == "%Y-%m-%d"
    assert date_layout(Locale.EN_US) == "%m/%d/%Y"
    assert date_layout(Locale.FR) == "%d/%m/%Y"
    assert date_layout(Locale.ZH_CN) == "%Y/%m/%d"
    assert datetime_layout(Locale.EN_US) == "%m/%d/%Y %I:%M %p"
    assert datetime_layout(Locale.DE) == "%Y-%m-%d %H:%M"


def test_to_local_datetime_out_of_range() -> None:
    assert to_local_datetime(10**20, timezone.utc) is None
    moment = to_local_datetime(0, resolve_timezone("Europe/Vienna"))
    assert moment is not None and moment.hour == 1
