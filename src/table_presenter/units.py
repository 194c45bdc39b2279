"""Locale, unit and timezone lookups used by the formatters."""

from __future__ import annotations

import logging
from datetime import datetime, timezone, tzinfo
from enum import Enum
from functools import lru_cache
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

LOGGER = logging.getLogger(__name__)

MILES_PER_KM = 0.621371
NAUTICAL_MILES_PER_KM = 0.539957
PSI_PER_BAR = 14.5038
KPA_PER_BAR = 100.0

DEFAULT_TIMEZONE = "UTC"


class Locale(str, Enum):
    """User locale preference."""

    DE = "de"
    EN_GB = "en-GB"
    HR = "hr"
    ES = "es"
    FR = "fr"
    IT = "it"
    EN_US = "en-US"
    DE_AT = "de-AT"
    DE_CH = "de-CH"
    PT = "pt"
    PT_BR = "pt-BR"
    NL = "nl"
    PL = "pl"
    CS = "cs"
    HU = "hu"
    RO = "ro"
    TR = "tr"
    SV = "sv"
    BG = "bg"
    SL = "sl"
    SK = "sk"
    SR = "sr"
    EL = "el"
    NB = "nb"
    DA = "da"
    FI = "fi"
    RU = "ru"
    UK = "uk"
    JA = "ja"
    ZH_CN = "zh-CN"
    AR_AE = "ar-AE"


class DistanceUnit(str, Enum):
    """Preferred distance unit. Speed follows the same preference."""

    KILOMETER = "km"
    MILES = "mi"
    NAUTICAL_MILES = "nm"


class PressureUnit(str, Enum):
    BAR = "bar"
    PSI = "psi"
    KPA = "kpa"


_DOT_DECIMAL_LOCALES = {Locale.EN_GB, Locale.EN_US, Locale.JA, Locale.ZH_CN, Locale.AR_AE}
_ISO_DATE_LOCALES = {
    Locale.DE,
    Locale.DE_AT,
    Locale.DE_CH,
    Locale.SV,
    Locale.NB,
    Locale.DA,
    Locale.FI,
}
_ASIAN_DATE_LOCALES = {Locale.JA, Locale.ZH_CN}
_SWAP_SEPARATORS = str.maketrans({",": ".", ".": ","})

_DISTANCE_SUFFIXES = {
    DistanceUnit.KILOMETER: " km",
    DistanceUnit.MILES: " mi",
    DistanceUnit.NAUTICAL_MILES: " NM",
}
_SPEED_SUFFIXES = {
    DistanceUnit.KILOMETER: " km/h",
    DistanceUnit.MILES: " mph",
    DistanceUnit.NAUTICAL_MILES: " kn",
}
_PRESSURE_SUFFIXES = {
    PressureUnit.BAR: " bar",
    PressureUnit.PSI: " psi",
    PressureUnit.KPA: " kPa",
}


def uses_comma_decimal(locale: Locale) -> bool:
    """Return True when the locale writes ``1.234,5`` rather than ``1,234.5``."""
    return locale not in _DOT_DECIMAL_LOCALES


def format_number(value: float, decimals: int, locale: Locale) -> str:
    """Format a number with fixed decimals and the locale's separators.

    Args:
        value: Number to render.
        decimals: Digits after the decimal separator.
        locale: Locale deciding which separators to use.

    Returns:
        The grouped number, e.g. ``"1.234,50"`` for German.
    """
    rendered = f"{value:,.{max(decimals, 0)}f}"
    if uses_comma_decimal(locale):
        return rendered.translate(_SWAP_SEPARATORS)
    return rendered


def convert_distance(km: float, unit: DistanceUnit) -> float:
    """Convert kilometres into the preferred distance unit."""
    if unit == DistanceUnit.MILES:
        return km * MILES_PER_KM
    if unit == DistanceUnit.NAUTICAL_MILES:
        return km * NAUTICAL_MILES_PER_KM
    return km


def convert_speed(kmh: float, unit: DistanceUnit) -> float:
    """Convert km/h into mph or knots following the distance preference."""
    return convert_distance(kmh, unit)


def convert_pressure(bar: float, unit: PressureUnit) -> float:
    """Convert bar into the preferred pressure unit."""
    if unit == PressureUnit.PSI:
        return bar * PSI_PER_BAR
    if unit == PressureUnit.KPA:
        return bar * KPA_PER_BAR
    return bar


def distance_suffix(unit: DistanceUnit) -> str:
    return _DISTANCE_SUFFIXES.get(unit, " km")


def speed_suffix(unit: DistanceUnit) -> str:
    return _SPEED_SUFFIXES.get(unit, " km/h")


def pressure_suffix(unit: PressureUnit) -> str:
    return _PRESSURE_SUFFIXES.get(unit, " bar")


def format_distance(km: float, unit: DistanceUnit, locale: Locale, decimals: int) -> str:
    """Convert and format a distance with its unit suffix."""
    return format_number(convert_distance(km, unit), decimals, locale) + distance_suffix(unit)


def format_speed(kmh: float, unit: DistanceUnit, locale: Locale, decimals: int) -> str:
    return format_number(convert_speed(kmh, unit), decimals, locale) + speed_suffix(unit)


def format_pressure(bar: float, unit: PressureUnit, locale: Locale, decimals: int) -> str:
    return format_number(convert_pressure(bar, unit), decimals, locale) + pressure_suffix(unit)


@lru_cache(maxsize=64)
def resolve_timezone(name: Optional[str]) -> tzinfo:
    """Return the zone for an IANA name, falling back to UTC.

    Args:
        name: IANA timezone name such as ``"Europe/Vienna"``.

    Returns:
        A ``ZoneInfo`` instance, or ``datetime.timezone.utc`` when the name
        cannot be resolved.
    """
    if not name:
        return timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        LOGGER.warning("Unknown timezone %r, falling back to UTC", name)
        return timezone.utc


def date_layout(locale: Locale) -> str:
    """Return the ``strftime`` layout for a date in the given locale."""
    if locale in _ISO_DATE_LOCALES:
        return "%Y-%m-%d"
    if locale == Locale.EN_US:
        return "%m/%d/%Y"
    if locale in _ASIAN_DATE_LOCALES:
        return "%Y/%m/%d"
    return "%d/%m/%Y"


def datetime_layout(locale: Locale) -> str:
    """Return the ``strftime`` layout for a date and time in the given locale."""
    if locale == Locale.EN_US:
        return "%m/%d/%Y %I:%M %p"
    return date_layout(locale) + " %H:%M"


def to_local_datetime(timestamp: int, zone: tzinfo) -> Optional[datetime]:
    """Convert epoch seconds into an aware datetime, or None when out of range."""
    try:
        return datetime.fromtimestamp(timestamp, tz=zone)
    except (OverflowError, OSError, ValueError):
        LOGGER.debug("Timestamp %s is out of range", timestamp)
        return None


__all__ = [
    "DEFAULT_TIMEZONE",
    "DistanceUnit",
    "Locale",
    "PressureUnit",
    "convert_distance",
    "convert_pressure",
    "convert_speed",
    "date_layout",
    "datetime_layout",
    "format_distance",
    "format_number",
    "format_pressure",
    "format_speed",
    "resolve_timezone",
    "to_local_datetime",
    "uses_comma_decimal",
]
