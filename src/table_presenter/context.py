"""Per-user presentation context."""

from __future__ import annotations

from datetime import tzinfo
from typing import Callable, Optional

from pydantic import BaseModel, ConfigDict

from .config import Settings
from .units import DEFAULT_TIMEZONE, DistanceUnit, Locale, PressureUnit, resolve_timezone

TranslateFunc = Callable[[str], str]


def translate(translator: Optional[TranslateFunc], key: str) -> str:
    """Translate a label key, returning the key itself without a translator."""
    if translator is None:
        return key
    return translator(key)


class UiContext(BaseModel):
    """Read-only user preferences consulted by every formatter."""

    model_config = ConfigDict(frozen=True)

    locale: Locale = Locale.DE
    timezone: str = DEFAULT_TIMEZONE
    distance: DistanceUnit = DistanceUnit.KILOMETER
    pressure: PressureUnit = PressureUnit.BAR
    translator: Optional[TranslateFunc] = None

    @property
    def zone(self) -> tzinfo:
        """Resolved timezone, UTC when the configured name is unknown."""
        return resolve_timezone(self.timezone)

    def translate(self, key: str) -> str:
        return translate(self.translator, key)

    @classmethod
    def from_settings(
        cls, settings: Settings, translator: Optional[TranslateFunc] = None
    ) -> "UiContext":
        """Build a context from application settings.

        Args:
            settings: Loaded application settings.
            translator: Optional label translation function.

        Returns:
            UiContext carrying the configured locale, zone and units.
        """
        return cls(
            locale=settings.locale,
            timezone=settings.timezone,
            distance=settings.distance_unit,
            pressure=settings.pressure_unit,
            translator=translator,
        )
