"""Table data responses and their CSV and spreadsheet encodings."""

from __future__ import annotations

import csv
import io
import logging
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional, Sequence, Tuple

import openpyxl
from openpyxl.utils import get_column_letter

from .config import Settings, get_settings
from .context import TranslateFunc
from .enums import OutputChannel
from .exceptions import ExportEncodingError
from .values import is_string_list

LOGGER = logging.getLogger(__name__)

Column = Tuple[str, str]
FormattedRow = Dict[str, Any]

_EXCEL_NATIVE_TYPES = (str, int, float, bool, Decimal, datetime, date)


def expand_n_field_columns(
    fields: Sequence[Dict[str, Any]], rows: Sequence[FormattedRow]
) -> Tuple[List[Dict[str, Any]], List[FormattedRow]]:
    """Spread list-of-string values over numbered columns.

    For every key holding a list of strings the longest list decides how many
    columns the field needs. Column ``i`` (from 2 on) gets the id ``id_i``
    and the label ``name i``; shorter lists are padded with ``""``. Nothing
    changes when there are no field descriptors or no rows.

    Args:
        fields: Field descriptors in column order.
        rows: Formatted rows.

    Returns:
        Tuple of (expanded descriptors, expanded row copies).
    """
    if not fields or not rows:
        return list(fields), [dict(row) for row in rows]

    widths: Dict[str, int] = {}
    for row in rows:
        for key, value in row.items():
            if is_string_list(value):
                widths[key] = max(widths.get(key, 0), len(value))

    if not widths:
        return list(fields), [dict(row) for row in rows]

    expanded_fields: List[Dict[str, Any]] = []
    for descriptor in fields:
        field_id = descriptor.get("id")
        count = widths.get(field_id, 0) if isinstance(field_id, str) else 0
        if count <= 1:
            expanded_fields.append(descriptor)
            continue
        expanded_fields.append(descriptor)
        name = descriptor.get("name", field_id)
        for index in range(2, count + 1):
            extra = dict(descriptor)
            extra["id"] = f"{field_id}_{index}"
            extra["name"] = f"{name} {index}"
            expanded_fields.append(extra)

    expanded_rows: List[FormattedRow] = []
    for row in rows:
        copy = dict(row)
        for field_id, count in widths.items():
            value = copy.get(field_id)
            if not is_string_list(value):
                continue
            copy[field_id] = value[0] if value else ""
            for index in range(1, count):
                copy[f"{field_id}_{index + 1}"] = value[index] if index < len(value) else ""
        expanded_rows.append(copy)

    return expanded_fields, expanded_rows


def flatten_cell(value: Any) -> Any:
    """Collapse list cells to their first (display) element."""
    if isinstance(value, (list, tuple)):
        return value[0] if value else ""
    return value


def cell_text(value: Any) -> str:
    value = flatten_cell(value)
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class TableDataResponse:
    """Formatted table rows plus the metadata needed to encode them."""

    def __init__(
        self,
        data: List[FormattedRow],
        channel: OutputChannel,
        settings: Optional[Settings] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.data = data
        self.channel = OutputChannel(channel)
        self.settings = settings or get_settings()
        self.logger = logger or LOGGER
        self.fields: Optional[List[Dict[str, Any]]] = None
        self.include_fields = False
        self.footer: Optional[Dict[str, Any]] = None
        self.total_count: Optional[int] = None

    def with_fields(self, fields: List[Dict[str, Any]]) -> "TableDataResponse":
        """Attach field descriptors and include them in the JSON payload."""
        self.fields = fields
        self.include_fields = True
        return self

    def with_export_fields(self, fields: List[Dict[str, Any]]) -> "TableDataResponse":
        """Attach descriptors used only for CSV and spreadsheet headers."""
        self.fields = fields
        self.include_fields = False
        return self

    def with_footer(self, footer: Dict[str, Any]) -> "TableDataResponse":
        self.footer = footer
        return self

    def with_total_count(self, count: int) -> "TableDataResponse":
        self.total_count = count
        return self

    def print(self, translator: Optional[TranslateFunc] = None) -> Dict[str, Any]:
        """Return the payload for the response channel.

        CSV responses carry ``{"csv": text}``, spreadsheet responses
        ``{"excel": bytes}`` and every other channel the JSON envelope with
        ``data`` and optional ``totalCount``, ``fields`` and ``footer``.
        """
        if self.channel == OutputChannel.CSV:
            return {"csv": self.generate_csv()}

        if self.channel == OutputChannel.EXCEL:
            try:
                return {"excel": self.generate_excel()}
            except ExportEncodingError:
                self.logger.exception("Spreadsheet export failed")
                return {"excel": b""}

        response: Dict[str, Any] = {"data": self.data}
        if self.total_count is not None:
            response["totalCount"] = self.total_count
        if self.include_fields and self.fields:
            response["fields"] = self.fields
        if self.footer:
            response["footer"] = self.footer
        return response

    def columns(self) -> Tuple[List[Column], List[FormattedRow]]:
        """Return the ordered export columns and the expanded rows."""
        fields, rows = expand_n_field_columns(self.fields or [], self.data)
        columns: List[Column] = [
            (descriptor["id"], descriptor["name"])
            for descriptor in fields
            if isinstance(descriptor.get("id"), str) and isinstance(descriptor.get("name"), str)
        ]
        if not columns and rows:
            columns = [(key, key) for key in rows[0]]
        return columns, rows

    def generate_csv(self) -> str:
        """Encode the rows as delimited text.

        Returns:
            The CSV document, ``""`` without rows, or an inline error message
            when the writer fails.
        """
        columns, rows = self.columns()
        if not rows:
            return ""

        buffer = io.StringIO()
        writer = csv.writer(buffer, delimiter=self.settings.csv_delimiter, lineterminator="\n")
        try:
            writer.writerow([label for _, label in columns])
        except csv.Error as exc:
            self.logger.error("Failed to write CSV header: %s", exc)
            return f"Error writing CSV header: {exc}"

        for row in rows:
            try:
                writer.writerow([cell_text(row.get(field_id)) for field_id, _ in columns])
            except csv.Error as exc:
                self.logger.error("Failed to write CSV row: %s", exc)
                return f"Error writing CSV row: {exc}"

        return buffer.getvalue()

    def generate_excel(self) -> bytes:
        """Encode the rows as an XLSX workbook with one worksheet.

        Raises:
            ExportEncodingError: If the workbook cannot be built or saved.
        """
        try:
            columns, rows = self.columns()
            workbook = openpyxl.Workbook()
            sheet = workbook.active
            sheet.title = self.settings.excel_sheet_name

            if rows:
                for col_idx, (_, label) in enumerate(columns, start=1):
                    sheet.cell(row=1, column=col_idx, value=label)
                for row_idx, row in enumerate(rows, start=2):
                    for col_idx, (field_id, _) in enumerate(columns, start=1):
                        value = flatten_cell(row.get(field_id))
                        if value is None:
                            continue
                        sheet.cell(row=row_idx, column=col_idx, value=self._excel_value(value))
                self._fit_columns(sheet, columns, rows)

            buffer = io.BytesIO()
            workbook.save(buffer)
            workbook.close()
            return buffer.getvalue()
        except Exception as exc:  # noqa: BLE001
            raise ExportEncodingError("Failed to build spreadsheet export.") from exc

    def _excel_value(self, value: Any) -> Any:
        if isinstance(value, datetime) and value.tzinfo is not None:
            return value.replace(tzinfo=None)
        if isinstance(value, _EXCEL_NATIVE_TYPES):
            return value
        return str(value)

    def _fit_columns(self, sheet, columns: List[Column], rows: List[FormattedRow]) -> None:
        settings = self.settings
        for col_idx, (field_id, label) in enumerate(columns, start=1):
            width = max(settings.excel_min_column_width, len(label) * settings.excel_width_factor)
            for row in rows:
                value = flatten_cell(row.get(field_id))
                if value is None:
                    continue
                width = max(width, len(cell_text(value)) * settings.excel_width_factor)
            width = min(width, settings.excel_max_column_width)
            sheet.column_dimensions[get_column_letter(col_idx)].width = width
