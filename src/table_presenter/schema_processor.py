"""Turn declarative JSON table schemas into tables."""

from __future__ import annotations

import json
import logging
from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from pydantic import ValidationError

from .config import Settings
from .context import TranslateFunc, UiContext
from .enums import FieldTypeHint
from .exceptions import SchemaValidationError
from .fields import FieldBuilder
from .models import FieldSchema, TableSchema
from .registry import coerce_hint
from .row import Accessor
from .table import Table, TableBuilder
from .values import to_str

LOGGER = logging.getLogger(__name__)

MOMENT_HINTS = frozenset(
    {
        FieldTypeHint.DATETIME,
        FieldTypeHint.DATE,
        FieldTypeHint.TEXT2_DATETIME,
        FieldTypeHint.TEXT2_DATE,
        FieldTypeHint.DATETIME_N,
        FieldTypeHint.DATE_N,
    }
)


def resolve_path(record: Any, path: str) -> Any:
    """Follow a dotted path through nested mappings and lists.

    Missing keys and out of range indexes resolve to None.
    """
    current = record
    for part in path.split("."):
        if isinstance(current, Mapping):
            current = current.get(part)
        elif isinstance(current, (list, tuple)) and part.lstrip("-").isdigit():
            index = int(part)
            current = current[index] if -len(current) <= index < len(current) else None
        else:
            return None
        if current is None:
            return None
    return current


def parse_moment(value: Any) -> Any:
    """Parse ISO-8601 strings into datetimes; other values pass through."""
    if isinstance(value, list):
        return [parse_moment(item) for item in value]
    if not isinstance(value, str) or not value:
        return value
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        if len(text) == 10:
            return date.fromisoformat(text)
        return datetime.fromisoformat(text)
    except ValueError:
        return value


class SchemaProcessor:
    """Load table schemas and record files and build tables from them."""

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        """Create a new schema processor."""
        self.logger = logger or LOGGER

    def load_schema(self, path: Path) -> TableSchema:
        """Read and validate a schema file.

        Args:
            path: JSON file holding the table schema.

        Returns:
            Validated TableSchema.

        Raises:
            SchemaValidationError: If the file is unreadable or invalid.
        """
        payload = self._read_json(path)
        return self.parse_schema(payload)

    def parse_schema(self, payload: Any) -> TableSchema:
        """Validate an already decoded schema payload."""
        try:
            schema = TableSchema.model_validate(payload)
        except ValidationError as exc:
            raise SchemaValidationError(f"Invalid table schema: {exc}") from exc

        for field in schema.fields:
            if coerce_hint(field.type) is None:
                self.logger.warning(
                    "Field %r uses unknown type %r, rendering as text", field.id, field.type
                )
        return schema

    def load_records(self, path: Path) -> List[Dict[str, Any]]:
        """Read records from a JSON array or an object with a ``data`` array.

        Raises:
            SchemaValidationError: If the file does not hold a list of objects.
        """
        payload = self._read_json(path)
        if isinstance(payload, Mapping):
            payload = payload.get("data")
        if not isinstance(payload, list) or not all(isinstance(item, Mapping) for item in payload):
            raise SchemaValidationError(f"{path} must contain a JSON array of objects.")
        self.logger.info("Loaded %d records from %s", len(payload), path)
        return [dict(item) for item in payload]

    def build_table(
        self,
        schema: TableSchema,
        ctx: UiContext,
        translator: Optional[TranslateFunc] = None,
        settings: Optional[Settings] = None,
    ) -> Table:
        """Build a table whose accessors read the schema's record keys.

        Args:
            schema: Validated table schema.
            ctx: User presentation context.
            translator: Optional label translation function.
            settings: Settings passed on to the export encoders.

        Returns:
            Built Table without data.
        """
        builder = TableBuilder(ctx, translator=translator, settings=settings, logger=self.logger)
        if schema.title is not None:
            builder.set_title(schema.title)
        if schema.fields_can_change:
            builder.set_fields_can_change()

        for field in schema.fields:
            self._configure_field(self._declare_field(builder, field), field)
        return builder.build()

    def _declare_field(self, builder: TableBuilder, field: FieldSchema) -> FieldBuilder:
        hint = coerce_hint(field.type)
        key = field.record_key

        if hint == FieldTypeHint.BUTTONS:
            return builder.buttons_field(
                field.id, field.name, lambda record: resolve_path(record, key) or {}
            )
        if hint == FieldTypeHint.LINK and field.link_key:
            link_key = field.link_key
            return builder.link_field(
                field.id,
                field.name,
                lambda record: (
                    to_str(resolve_path(record, key)),
                    to_str(resolve_path(record, link_key)),
                ),
            )
        return builder.field(
            field.id, field.name, hint or field.type, self._accessor(key, hint)
        )

    def _accessor(self, key: str, hint: Optional[FieldTypeHint]) -> Accessor:
        if hint in MOMENT_HINTS:
            return lambda record: parse_moment(resolve_path(record, key))
        return lambda record: resolve_path(record, key)

    def _configure_field(self, builder: FieldBuilder, field: FieldSchema) -> None:
        if field.decimals is not None:
            builder.with_decimals(field.decimals)
        if field.bool_text is not None:
            builder.with_bool_text(*field.bool_text)
        if field.footer is not None:
            builder.with_footer(field.footer)
        if field.hide:
            builder.hide()
        if field.csv is True:
            builder.show_in_csv()
        elif field.csv is False:
            builder.hide_in_csv()
        if field.align is not None:
            builder.with_align(field.align)

        optional = (
            (field.width, builder.with_width),
            (field.min_width, builder.with_min_width),
            (field.hint, builder.with_hint),
            (field.display, builder.with_display),
            (field.header, builder.with_header),
            (field.header_span, builder.with_header_span),
            (field.search, builder.with_search),
            (field.sort, builder.with_sort),
            (field.prefix, builder.with_text_prefix),
            (field.suffix, builder.with_text_suffix),
        )
        for value, setter in optional:
            if value is not None:
                setter(value)
        if field.sticky:
            builder.with_sticky()

        if field.hint_key:
            hint_key = field.hint_key
            builder.with_row_hint(lambda record: to_str(resolve_path(record, hint_key)))
        for button in field.buttons:
            builder.add_button(button.slot, button.action, button.icon, button.color, button.hint)
        for icon in field.icons:
            builder.add_icon(icon.value, icon.icon, icon.color, icon.hint)

    def _read_json(self, path: Path) -> Any:
        try:
            text = Path(path).read_text(encoding="utf-8")
        except OSError as exc:
            raise SchemaValidationError(f"Unable to read {path}: {exc}") from exc
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise SchemaValidationError(f"{path} is not valid JSON: {exc}") from exc
