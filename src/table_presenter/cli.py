"""Command-line interface for Table Presenter."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

import typer

from .config import Settings, get_settings
from .context import UiContext
from .enums import OutputChannel
from .exceptions import TablePresenterError
from .logging_config import configure_logging
from .print_renderer import PrintRenderer
from .schema_processor import SchemaProcessor
from .service import TableExportService
from .units import DistanceUnit, Locale, PressureUnit

app = typer.Typer(help="Render tabular records as JSON, CSV, Excel or print documents.")


@app.command()
def export(
    data: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSON file with records."),
    schema: Path = typer.Option(
        ..., "--schema", "-s", exists=True, dir_okay=False, help="JSON table schema."
    ),
    output_format: OutputChannel = typer.Option(
        OutputChannel.CSV, "--format", "-f", help="Output channel (web, csv, pdf, excel)."
    ),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Optional path where the export should be written."
    ),
    locale: Optional[Locale] = typer.Option(None, "--locale", help="Override the locale."),
    timezone: Optional[str] = typer.Option(None, "--timezone", help="IANA timezone name."),
    distance: Optional[DistanceUnit] = typer.Option(
        None, "--distance", help="Distance unit (km, mi, nm)."
    ),
    pressure: Optional[PressureUnit] = typer.Option(
        None, "--pressure", help="Pressure unit (bar, psi, kpa)."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging."),
) -> None:
    """Format a record file and write it in the chosen output format."""
    configure_logging(logging.DEBUG if verbose else logging.INFO)
    settings = _resolve_settings(
        locale=locale, timezone=timezone, distance=distance, pressure=pressure
    )
    service = TableExportService(
        settings=settings,
        schema_processor=SchemaProcessor(),
        print_renderer=PrintRenderer(),
    )

    try:
        _, saved_path = service.export(data, schema, output_format, output_path=output)
    except TablePresenterError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    typer.echo(f"Export saved to: {saved_path}")


@app.command()
def describe(
    schema: Path = typer.Option(
        ..., "--schema", "-s", exists=True, dir_okay=False, help="JSON table schema."
    ),
) -> None:
    """Print the field descriptors the web UI receives for a schema."""
    settings = get_settings()
    processor = SchemaProcessor()
    try:
        table_schema = processor.load_schema(schema)
    except TablePresenterError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    ctx = UiContext.from_settings(settings)
    table = processor.build_table(table_schema, ctx, settings=settings)
    typer.echo(json.dumps(table.describe_fields(), indent=2, ensure_ascii=False))


def _resolve_settings(
    locale: Optional[Locale] = None,
    timezone: Optional[str] = None,
    distance: Optional[DistanceUnit] = None,
    pressure: Optional[PressureUnit] = None,
) -> Settings:
    settings = get_settings()
    overrides = {}
    if locale:
        overrides["locale"] = locale
    if timezone:
        overrides["timezone"] = timezone
    if distance:
        overrides["distance_unit"] = distance
    if pressure:
        overrides["pressure_unit"] = pressure
    if overrides:
        return settings.model_copy(update=overrides)
    return settings


def main() -> None:  # pragma: no cover - CLI entrypoint
    app()


if __name__ == "__main__":  # pragma: no cover - CLI entrypoint
    main()
