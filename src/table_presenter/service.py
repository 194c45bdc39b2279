"""High-level orchestration for table exports."""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from .config import Settings
from .context import TranslateFunc, UiContext
from .enums import OutputChannel
from .exceptions import ExportWriteError
from .print_renderer import PrintRenderer
from .schema_processor import SchemaProcessor
from .table import Table

LOGGER = logging.getLogger(__name__)

FILE_EXTENSIONS = {
    OutputChannel.WEB: "json",
    OutputChannel.CSV: "csv",
    OutputChannel.EXCEL: "xlsx",
    OutputChannel.PDF: "md",
}


class TableExportService:
    """Coordinate schema loading, formatting and writing of exports."""

    def __init__(
        self,
        settings: Settings,
        schema_processor: SchemaProcessor,
        print_renderer: PrintRenderer,
        translator: Optional[TranslateFunc] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        """Create a new export service."""
        self.settings = settings
        self.schema_processor = schema_processor
        self.print_renderer = print_renderer
        self.translator = translator
        self.logger = logger or LOGGER

    def build_table(self, schema_path: Path, records: List[Dict[str, Any]]) -> Table:
        """Load a schema and attach the records to the resulting table."""
        schema = self.schema_processor.load_schema(schema_path)
        ctx = UiContext.from_settings(self.settings, translator=self.translator)
        table = self.schema_processor.build_table(
            schema, ctx, translator=self.translator, settings=self.settings
        )
        return table.set_data(records)

    def export(
        self,
        data_path: Path,
        schema_path: Path,
        channel: Union[OutputChannel, str],
        output_path: Optional[Path] = None,
    ) -> Tuple[Union[str, bytes], Path]:
        """Format a record file for one channel and write the result.

        Args:
            data_path: JSON file with the records.
            schema_path: JSON table schema.
            channel: Output channel selecting the file format.
            output_path: Target file. Defaults to a timestamped file in
                the configured export directory.

        Returns:
            Tuple of (payload, path where it was written).

        Raises:
            SchemaValidationError: If the schema or data file is invalid.
            ExportWriteError: If the payload cannot be written.
        """
        channel = OutputChannel(channel)
        records = self.schema_processor.load_records(data_path)
        table = self.build_table(schema_path, records).set_output_type(channel)
        payload = self.render(table, channel)

        if output_path is None:
            output_path = self._generate_export_path(table.options.title or data_path.stem, channel)
        self._write(output_path, payload)
        return payload, output_path

    def render(self, table: Table, channel: OutputChannel) -> Union[str, bytes]:
        """Produce the file payload of a table for ``channel``."""
        self.logger.info("Rendering %d records for %s", len(table.data or []), channel.value)
        if channel == OutputChannel.PDF:
            return self.print_renderer.render(table)

        response = table.to_table_data_response().print(self.translator)
        if channel == OutputChannel.CSV:
            return response["csv"]
        if channel == OutputChannel.EXCEL:
            return response["excel"]
        return json.dumps(response, indent=2, ensure_ascii=False, default=str)

    def _generate_export_path(self, name: str, channel: OutputChannel) -> Path:
        """Generate a timestamped filename inside the export directory."""
        timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
        safe_name = "".join(c if c.isalnum() or c in ("-", "_") else "_" for c in name)
        filename = f"{safe_name}_{timestamp}.{FILE_EXTENSIONS[channel]}"
        return Path(self.settings.export_dir) / filename

    def _write(self, path: Path, payload: Union[str, bytes]) -> None:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(payload, bytes):
                path.write_bytes(payload)
            else:
                path.write_text(payload, encoding="utf-8")
        except OSError as exc:
            raise ExportWriteError(f"Unable to write export to {path}: {exc}") from exc
        self.logger.info("Export written to %s", path)
