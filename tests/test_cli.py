"""Tests for the command-line interface."""

import json
from pathlib import Path

from typer.testing import CliRunner

from table_presenter.cli import app

runner = CliRunner()


def test_describe_prints_descriptors(schema_file: Path) -> None:
    result = runner.invoke(app, ["describe", "--schema", str(schema_file)])
    assert result.exit_code == 0
    descriptors = json.loads(result.stdout)
    assert [d["id"] for d in descriptors][:3] == ["id", "driver", "distance"]


def test_export_writes_file(data_file: Path, schema_file: Path, tmp_path: Path) -> None:
    output = tmp_path / "trips.csv"
    result = runner.invoke(
        app,
        [
            "export",
            str(data_file),
            "--schema",
            str(schema_file),
            "--format",
            "csv",
            "--output",
            str(output),
            "--locale",
            "en-US",
        ],
    )
    assert result.exit_code == 0, result.output
    assert output.read_text(encoding="utf-8").startswith("trip.driver;trip.distance")


def test_export_reports_invalid_schema(data_file: Path, tmp_path: Path) -> None:
    schema_file = tmp_path / "bad.json"
    schema_file.write_text("[]", encoding="utf-8")
    result = runner.invoke(app, ["export", str(data_file), "--schema", str(schema_file)])
    assert result.exit_code == 1
