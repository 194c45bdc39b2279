"""Application configuration and environment management."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .units import DistanceUnit, Locale, PressureUnit


class Settings(BaseSettings):
    """Presentation defaults loaded from environment variables.

    Attributes:
        locale: Locale used when no user context is supplied.
        timezone: IANA timezone used for date rendering.
        distance_unit: Preferred distance and speed unit.
        pressure_unit: Preferred pressure unit.
        csv_delimiter: Field separator for delimited text exports.
        excel_sheet_name: Name of the single worksheet in spreadsheet exports.
        excel_min_column_width: Lower bound for auto-sized spreadsheet columns.
        excel_max_column_width: Upper bound for auto-sized spreadsheet columns.
        excel_width_factor: Multiplier applied to the longest cell text.
        export_dir: Directory used when an export path is not given.
    """

    locale: Locale = Field(default=Locale.DE, alias="TABLE_LOCALE")
    timezone: str = Field(default="Europe/Vienna", alias="TABLE_TIMEZONE")
    distance_unit: DistanceUnit = Field(
        default=DistanceUnit.KILOMETER, alias="TABLE_DISTANCE_UNIT"
    )
    pressure_unit: PressureUnit = Field(default=PressureUnit.BAR, alias="TABLE_PRESSURE_UNIT")
    csv_delimiter: str = Field(default=";", alias="CSV_DELIMITER", min_length=1, max_length=1)
    excel_sheet_name: str = Field(default="Sheet1", alias="EXCEL_SHEET_NAME")
    excel_min_column_width: float = Field(default=10, alias="EXCEL_MIN_COLUMN_WIDTH")
    excel_max_column_width: float = Field(default=50, alias="EXCEL_MAX_COLUMN_WIDTH")
    excel_width_factor: float = Field(default=1.2, alias="EXCEL_WIDTH_FACTOR")
    export_dir: str = Field(default="exports", alias="EXPORT_DIR")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached application settings instance."""
    return Settings()
