"""Markdown rendering of print channel rows."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from .enums import FieldAlign, OutputChannel, StructuralType
from .exceptions import PrintRenderError
from .fields import Field
from .table import Table

LOGGER = logging.getLogger(__name__)


class PrintRenderer:
    """Build a printable markdown document from a table."""

    # Interactive-only columns never make it to paper.
    SKIPPED_TYPES = {StructuralType.BUTTONS, StructuralType.INPUT}
    LINE_BREAK = "<br>"
    ALIGN_MARKERS = {
        FieldAlign.LEFT: ":---",
        FieldAlign.CENTER: ":---:",
        FieldAlign.RIGHT: "---:",
    }

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        """Create a print renderer."""
        self.logger = logger or LOGGER

    def render(self, table: Table, title: Optional[str] = None) -> str:
        """Render the table's records as a markdown document.

        Args:
            table: Built table with data.
            title: Optional document heading, defaults to the table title.

        Returns:
            Markdown text with a heading, a pipe table and a footer row.

        Raises:
            PrintRenderError: If rendering fails.
        """
        try:
            fields = [
                f
                for f in table.visible_fields()
                if f.structural_type not in self.SKIPPED_TYPES
            ]
            rows = table.get_data(OutputChannel.PDF)
            heading = title or table.options.title

            lines: List[str] = []
            if heading:
                lines.append(f"# {heading}")
                lines.append("")

            if not rows or not fields:
                lines.append(f"_{table.options.text_no_data or ''}_")
                return "\n".join(lines).strip()

            lines.append(self._table_row([self._label(table, f) for f in fields]))
            lines.append(self._table_row([self._align_marker(f) for f in fields]))
            for row in rows:
                lines.append(self._table_row([self._cell(row.get(f.id)) for f in fields]))

            footer = table.calculate_footer(OutputChannel.PDF)
            if footer:
                lines.append(self._footer_row(fields, footer))

            lines.append("")
            lines.append(f"_{len(rows)} rows_")
            return "\n".join(lines).strip()
        except Exception as exc:  # noqa: BLE001
            raise PrintRenderError("Failed to render print document.") from exc

    def _label(self, table: Table, f: Field) -> str:
        return self._escape(table.translator(f.name) if table.translator else f.name)

    def _align_marker(self, f: Field) -> str:
        return self.ALIGN_MARKERS.get(f.align, "---")

    def _footer_row(self, fields: List[Field], footer: Dict[str, Any]) -> str:
        cells = []
        for f in fields:
            cell = self._cell(footer.get(f.id))
            cells.append(f"**{cell}**" if cell else "")
        return self._table_row(cells)

    def _cell(self, value: Any) -> str:
        if value is None:
            return ""
        if isinstance(value, (list, tuple)):
            return self.LINE_BREAK.join(self._escape(str(item)) for item in value if item != "")
        if isinstance(value, bool):
            return "true" if value else "false"
        return self._escape(str(value))

    def _escape(self, text: str) -> str:
        return text.replace("|", "\\|").replace("\n", " ")

    def _table_row(self, cells: List[str]) -> str:
        return "| " + " | ".join(cells) + " |"
