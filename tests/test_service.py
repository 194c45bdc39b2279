"""End-to-end export service tests."""

from __future__ import annotations

import io
import json
from pathlib import Path

import openpyxl
import pytest

from table_presenter.config import Settings
from table_presenter.exceptions import ExportWriteError, SchemaValidationError
from table_presenter.print_renderer import PrintRenderer
from table_presenter.schema_processor import SchemaProcessor
from table_presenter.service import TableExportService


@pytest.fixture
def service(settings: Settings, tmp_path: Path) -> TableExportService:
    settings = settings.model_copy(update={"export_dir": str(tmp_path / "exports")})
    return TableExportService(
        settings=settings,
        schema_processor=SchemaProcessor(),
        print_renderer=PrintRenderer(),
    )


def test_csv_export_end_to_end(
    service: TableExportService, data_file: Path, schema_file: Path, tmp_path: Path
) -> None:
    output_file = tmp_path / "out" / "trips.csv"
    payload, saved_path = service.export(data_file, schema_file, "csv", output_path=output_file)

    assert saved_path == output_file
    assert output_file.read_text(encoding="utf-8") == payload
    assert payload.splitlines()[1] == "Anna;12.3;2024-01-15 13:30:00;Depot Nord;Ja"


def test_web_export_writes_json(
    service: TableExportService, data_file: Path, schema_file: Path, tmp_path: Path
) -> None:
    payload, saved_path = service.export(
        data_file, schema_file, "web", output_path=tmp_path / "trips.json"
    )
    document = json.loads(saved_path.read_text(encoding="utf-8"))
    assert document["data"][0]["siteLink"] == "/sites/1"
    assert document["footer"]["driver"] == "2"


def test_excel_export_defaults_to_timestamped_path(
    service: TableExportService, data_file: Path, schema_file: Path, tmp_path: Path
) -> None:
    payload, saved_path = service.export(data_file, schema_file, "excel")

    assert saved_path.parent == tmp_path / "exports"
    assert saved_path.name.startswith("Trips_")
    assert saved_path.suffix == ".xlsx"
    sheet = openpyxl.load_workbook(io.BytesIO(saved_path.read_bytes())).active
    assert sheet.cell(row=2, column=1).value == "Anna"
    assert isinstance(payload, bytes)


def test_print_export_writes_markdown(
    service: TableExportService, data_file: Path, schema_file: Path, tmp_path: Path
) -> None:
    payload, saved_path = service.export(
        data_file, schema_file, "pdf", output_path=tmp_path / "trips.md"
    )
    assert payload.startswith("# Trips")
    assert saved_path.read_text(encoding="utf-8") == payload


def test_invalid_schema_propagates(
    service: TableExportService, data_file: Path, tmp_path: Path
) -> None:
    schema_file = tmp_path / "bad.json"
    schema_file.write_text('{"fields": []}', encoding="utf-8")
    with pytest.raises(SchemaValidationError):
        service.export(data_file, schema_file, "csv")


def test_write_failure_raises(
    service: TableExportService, data_file: Path, schema_file: Path, tmp_path: Path
) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    with pytest.raises(ExportWriteError):
        service.export(data_file, schema_file, "csv", output_path=blocker / "trips.csv")
