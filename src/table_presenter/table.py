"""Table builder and orchestrator.

A :class:`TableBuilder` collects field declarations in order and freezes them
into a :class:`Table`. The table turns records into formatted rows for one
output channel, aggregates footers and assembles the responses consumed by
the web UI and the export encoders.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field, replace
from typing import (
    Any,
    Callable,
    Dict,
    FrozenSet,
    Iterable,
    List,
    Mapping,
    Optional,
    Sequence,
    Tuple,
    Union,
)

from .config import Settings, get_settings
from .context import TranslateFunc, UiContext, translate
from .descriptor import describe_field
from .enums import FieldFooter, FieldTypeHint, OutputChannel, StructuralType
from .export import TableDataResponse
from .fields import Field, FieldBuilder
from .iconset import IconRef, IconSet
from .row import Accessor, Row, build_accessor_map
from .values import to_float

LOGGER = logging.getLogger(__name__)

NO_DATA_KEY = "table.no_data"

FormattedRow = Dict[str, Any]


@dataclass
class TableOptions:
    """Table level options rendered into the component ``options`` block.

    Unset (None) options are omitted from the output.
    """

    css_class: Optional[str] = None
    title: Optional[str] = None
    text_no_data: Optional[str] = None
    items_per_page: Optional[int] = None
    page_sizes: List[int] = field(default_factory=list)
    reload: Optional[bool] = True
    dense: Optional[bool] = None
    pagination: Optional[bool] = True
    search: Optional[bool] = True
    min_width: Optional[str] = None
    csv: Optional[bool] = True
    excel: Optional[bool] = True
    save_state: Optional[bool] = None
    save_state_id: Optional[str] = None
    borders: Optional[bool] = None
    borders_header: Optional[bool] = None
    select: Optional[bool] = None
    footer: Optional[bool] = None
    server_side: Optional[bool] = None
    scroll_height: Optional[str] = None
    display: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Return the camelCase options mapping for the UI."""
        scalar = (
            ("class", self.css_class),
            ("title", self.title),
            ("textNoData", self.text_no_data),
            ("itemsPerPage", self.items_per_page),
            ("reload", self.reload),
            ("dense", self.dense),
            ("pagination", self.pagination),
            ("search", self.search),
            ("minWidth", self.min_width),
            ("csv", self.csv),
            ("excel", self.excel),
            ("borders", self.borders),
            ("bordersHeader", self.borders_header),
            ("select", self.select),
            ("footer", self.footer),
            ("serverSide", self.server_side),
            ("scrollHeight", self.scroll_height),
        )
        options: Dict[str, Any] = {key: value for key, value in scalar if value is not None}
        if self.page_sizes:
            options["pageSizes"] = list(self.page_sizes)
        if self.save_state is not None and self.save_state_id is not None:
            options["saveState"] = self.save_state
            options["saveStateId"] = self.save_state_id
        return options


def _column_position(item: Tuple[int, Field]) -> int:
    index, f = item
    return f.column_order if f.column_order is not None else index


class Table:
    """Built table: frozen fields, mutable data source and visibility."""

    def __init__(
        self,
        fields: Sequence[Field],
        ctx: UiContext,
        translator: Optional[TranslateFunc] = None,
        options: Optional[TableOptions] = None,
        fields_can_change: bool = False,
        settings: Optional[Settings] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.fields: List[Field] = list(fields)
        self.ctx = ctx
        self.translator = translator if translator is not None else ctx.translator
        self.options = options or TableOptions()
        self.fields_can_change = fields_can_change
        self.settings = settings or get_settings()
        self.logger = logger or LOGGER
        self.output_type = OutputChannel.WEB
        self.data: Optional[List[Any]] = None
        self.url: Optional[str] = None
        self._lock = threading.Lock()
        self._hidden = {f.id for f in self.fields if f.hide}
        self._field_ids = {f.id for f in self.fields}
        self._accessors = self.build_accessor_map()

    # Data source

    def set_data(self, records: Iterable[Any]) -> "Table":
        """Use static records; the table stops being an AJAX table."""
        self.data = list(records)
        self.url = None
        return self

    def set_url(self, url: str) -> "Table":
        """Load rows from ``url`` in the browser; embedded data is dropped."""
        self.url = url
        self.data = None
        return self

    def set_output_type(self, channel: Union[OutputChannel, str]) -> "Table":
        self.output_type = OutputChannel(channel)
        return self

    # Visibility

    def hide_field(self, field_id: str) -> "Table":
        if field_id not in self._field_ids:
            self.logger.warning("hide_field: field %r not found", field_id)
            return self
        with self._lock:
            self._hidden.add(field_id)
        return self

    def show_field(self, field_id: str) -> "Table":
        if field_id not in self._field_ids:
            self.logger.warning("show_field: field %r not found", field_id)
            return self
        with self._lock:
            self._hidden.discard(field_id)
        return self

    def hide_fields(self, *field_ids: str) -> "Table":
        known = self._known_ids("hide_fields", field_ids)
        with self._lock:
            self._hidden.update(known)
        return self

    def show_fields(self, *field_ids: str) -> "Table":
        known = self._known_ids("show_fields", field_ids)
        with self._lock:
            self._hidden.difference_update(known)
        return self

    def _known_ids(self, operation: str, field_ids: Sequence[str]) -> List[str]:
        for fid in field_ids:
            if fid not in self._field_ids:
                self.logger.warning("%s: field %r not found", operation, fid)
        return [fid for fid in field_ids if fid in self._field_ids]

    def is_hidden(self, field_id: str) -> bool:
        with self._lock:
            return field_id in self._hidden

    def _hidden_snapshot(self) -> FrozenSet[str]:
        with self._lock:
            return frozenset(self._hidden)

    def visible_fields(self) -> List[Field]:
        hidden = self._hidden_snapshot()
        return [f for f in self.fields if f.id not in hidden]

    def export_fields(self) -> List[Field]:
        """Visible fields that are included in CSV and spreadsheet exports."""
        return [f for f in self.visible_fields() if f.csv]

    # Rows

    def build_accessor_map(self) -> Dict[str, Accessor]:
        """Map every field id to its accessor for cross-field lookups."""
        return build_accessor_map((f.id, f.accessor) for f in self.fields)

    def row(self, record: Any) -> Row:
        return Row(record, self._accessors)

    def get_data(self, channel: Optional[Union[OutputChannel, str]] = None) -> List[FormattedRow]:
        """Format every record for one output channel.

        Args:
            channel: Target channel, defaults to the table's output type.

        Returns:
            One dictionary per record keyed by field id. On the web channel
            link fields add ``<id>Link``, row hints add ``<id>Hint`` and menu
            buttons are resolved per row.
        """
        channel = OutputChannel(channel) if channel is not None else self.output_type
        hidden = self._hidden_snapshot()
        fields = [
            f for f in self.fields if f.id not in hidden and (f.csv or not channel.is_export())
        ]
        rows: List[FormattedRow] = []
        for record in self.data or []:
            row = self.row(record)
            formatted: FormattedRow = {}
            for f in fields:
                self._format_cell(formatted, f, record, row, channel)
            rows.append(formatted)
        return rows

    def _format_cell(
        self,
        formatted: FormattedRow,
        f: Field,
        record: Any,
        row: Row,
        channel: OutputChannel,
    ) -> None:
        value = f.format(f.accessor(record), row, channel, self.ctx)
        web = channel == OutputChannel.WEB

        if web and f.is_link:
            if isinstance(value, (tuple, list)) and len(value) == 2:
                formatted[f.id], formatted[f.id + "Link"] = value[0], value[1]
            else:
                formatted[f.id], formatted[f.id + "Link"] = "", ""
        else:
            formatted[f.id] = value

        if not web:
            return

        if f.row_hint is not None:
            hint = f.row_hint(record)
            if isinstance(hint, str) and hint:
                formatted[f.id + "Hint"] = hint

        if f.menu_accessors and isinstance(formatted.get(f.id), dict):
            formatted[f.id] = self._resolve_menus(f, formatted[f.id], record)

    def _resolve_menus(self, f: Field, buttons: Mapping[str, Any], record: Any) -> Dict[str, Any]:
        resolved = dict(buttons)
        for slot, accessor in f.menu_accessors.items():
            key = str(slot)
            if resolved.get(key) is False:
                continue
            items = accessor(record)
            if items is None:
                resolved[key] = False
            else:
                resolved[key] = [item if item != "" else False for item in items]
        return resolved

    def calculate_footer(
        self, channel: Optional[Union[OutputChannel, str]] = None
    ) -> Dict[str, Any]:
        """Aggregate sum and count footers.

        Aggregates are formatted with the first record as row context; an
        empty table yields the raw aggregates.

        Args:
            channel: Target channel, defaults to the table's output type.

        Returns:
            Mapping of field id to the formatted aggregate.
        """
        channel = OutputChannel(channel) if channel is not None else self.output_type
        records = self.data or []
        footer: Dict[str, Any] = {}
        first_row = self.row(records[0]) if records else None

        for f in self.fields:
            if f.footer == FieldFooter.SUM:
                total: Any = sum(to_float(f.accessor(record)) for record in records)
            elif f.footer == FieldFooter.COUNT:
                total = sum(
                    1 for record in records if f.accessor(record) not in (None, "")
                )
            else:
                continue
            if first_row is None:
                footer[f.id] = total
            else:
                footer[f.id] = f.format(total, first_row, channel, self.ctx)
        return footer

    # Responses

    def describe_fields(self, fields: Optional[List[Field]] = None) -> List[Dict[str, Any]]:
        """Descriptors for ``fields``, defaulting to the visible fields."""
        fields = self.visible_fields() if fields is None else fields
        return [describe_field(f, self.translator, hidden=False) for f in fields]

    def to_table_data_response(self) -> TableDataResponse:
        """Build the data response for the current output type."""
        channel = self.output_type
        response = TableDataResponse(
            self.get_data(channel), channel, settings=self.settings, logger=self.logger
        )
        if channel.is_export():
            response.with_export_fields(self.describe_fields(self.export_fields()))
        elif self.fields_can_change:
            response.with_fields(self.describe_fields())

        if channel != OutputChannel.CSV:
            footer = self.calculate_footer(channel)
            if footer:
                response.with_footer(footer)
        return response

    def to_server_side_response(self, total_count: int) -> TableDataResponse:
        """Data response for server-side pagination carrying ``totalCount``."""
        return self.to_table_data_response().with_total_count(total_count)

    def print(self, translator: Optional[TranslateFunc] = None) -> Dict[str, Any]:
        """Return the table component definition for the web UI.

        A table with a URL loads its rows in the browser and embeds no data.
        """
        translator = translator if translator is not None else self.translator
        data_section: Dict[str, Any] = {
            "hasFilter": False,
            "fields": [
                describe_field(f, translator, hidden=False) for f in self.visible_fields()
            ],
            "options": self.options.to_dict(),
        }
        if self.url is not None:
            data_section["url"] = self.url
            data_section["data"] = None
        else:
            data_section["url"] = None
            data_section["data"] = self.get_data(OutputChannel.WEB)
        data_section["components"] = None

        result: Dict[str, Any] = {"type": "table", "data": data_section}
        if self.options.display is not None:
            result["display"] = self.options.display
        return result


class TableBuilder:
    """Fluent builder collecting fields and options for a :class:`Table`."""

    def __init__(
        self,
        ctx: UiContext,
        translator: Optional[TranslateFunc] = None,
        settings: Optional[Settings] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.ctx = ctx
        self.translator = translator if translator is not None else ctx.translator
        self.settings = settings
        self.logger = logger or LOGGER
        self.options = TableOptions(text_no_data=translate(self.translator, NO_DATA_KEY))
        self.fields_can_change = False
        self._builders: List[FieldBuilder] = []

    def field(
        self,
        field_id: str,
        name: str,
        type_hint: Union[FieldTypeHint, str],
        accessor: Accessor,
    ) -> FieldBuilder:
        """Declare a field; columns keep declaration order.

        Args:
            field_id: Output key of the column.
            name: Label translation key.
            type_hint: Semantic type selecting the defaults and formatter.
            accessor: Callable extracting the raw value from a record.

        Returns:
            FieldBuilder for further configuration.
        """
        builder = FieldBuilder(field_id, name, type_hint, accessor)
        self._builders.append(builder)
        return builder

    # Typed shortcuts

    def id_field(self, field_id: str, name: str, accessor: Accessor) -> FieldBuilder:
        return self.field(field_id, name, FieldTypeHint.ID, accessor)

    def int_field(self, field_id: str, name: str, accessor: Accessor) -> FieldBuilder:
        return self.field(field_id, name, FieldTypeHint.INTEGER, accessor)

    def float_field(self, field_id: str, name: str, accessor: Accessor) -> FieldBuilder:
        return self.field(field_id, name, FieldTypeHint.FLOAT, accessor)

    def text_field(self, field_id: str, name: str, accessor: Accessor) -> FieldBuilder:
        return self.field(field_id, name, FieldTypeHint.TEXT, accessor)

    def bool_field(self, field_id: str, name: str, accessor: Accessor) -> FieldBuilder:
        return self.field(field_id, name, FieldTypeHint.BOOL, accessor)

    def datetime_field(self, field_id: str, name: str, accessor: Accessor) -> FieldBuilder:
        return self.field(field_id, name, FieldTypeHint.DATETIME, accessor)

    def date_field(self, field_id: str, name: str, accessor: Accessor) -> FieldBuilder:
        return self.field(field_id, name, FieldTypeHint.DATE, accessor)

    def distance_field(self, field_id: str, name: str, accessor: Accessor) -> FieldBuilder:
        return self.field(field_id, name, FieldTypeHint.DISTANCE, accessor)

    def pressure_field(self, field_id: str, name: str, accessor: Accessor) -> FieldBuilder:
        return self.field(field_id, name, FieldTypeHint.PRESSURE, accessor)

    def speed_field(self, field_id: str, name: str, accessor: Accessor) -> FieldBuilder:
        return self.field(field_id, name, FieldTypeHint.SPEED, accessor)

    def time_length_field(self, field_id: str, name: str, accessor: Accessor) -> FieldBuilder:
        return self.field(field_id, name, FieldTypeHint.TIMELENGTH, accessor)

    def link_field(self, field_id: str, name: str, accessor: Accessor) -> FieldBuilder:
        """Link column; the accessor returns ``(text, url)``."""
        return self.field(field_id, name, FieldTypeHint.LINK, accessor)

    def html_field(self, field_id: str, name: str, accessor: Accessor) -> FieldBuilder:
        return self.field(field_id, name, FieldTypeHint.HTML, accessor)

    def input_field(self, field_id: str, name: str, accessor: Accessor) -> FieldBuilder:
        return self.field(field_id, name, FieldTypeHint.INPUT, accessor)

    def header_field(self, field_id: str, name: str, accessor: Accessor) -> FieldBuilder:
        return self.field(field_id, name, FieldTypeHint.HEADER, accessor)

    def text2_field(self, field_id: str, name: str, accessor: Accessor) -> FieldBuilder:
        return self.field(field_id, name, FieldTypeHint.TEXT2, accessor)

    def text_n_field(self, field_id: str, name: str, accessor: Accessor) -> FieldBuilder:
        return self.field(field_id, name, FieldTypeHint.TEXT_N, accessor)

    def buttons_field(
        self, field_id: str, name: str, accessor: Callable[[Any], Mapping[str, str]]
    ) -> FieldBuilder:
        """Row buttons; the accessor maps slot keys to targets.

        An empty target hides the button in that row.
        """

        def buttons(record: Any) -> Dict[str, Any]:
            return {
                key: (target if target != "" else False)
                for key, target in (accessor(record) or {}).items()
            }

        return self.field(field_id, name, FieldTypeHint.BUTTONS, buttons)

    def icon_field_from_set(
        self,
        field_id: str,
        name: str,
        accessor: Callable[[Any], Optional[IconRef]],
        icon_set: IconSet,
    ) -> FieldBuilder:
        """Icon column restricted to the icons registered in ``icon_set``.

        A ``None`` reference renders as an empty cell.
        """

        def icon_value(record: Any) -> str:
            ref = accessor(record)
            return ref.value if ref is not None else ""

        builder = self.field(field_id, name, FieldTypeHint.ICON, icon_value)
        for value, icon in icon_set.items():
            builder.add_icon(value, icon.icon, icon.color, icon.hint, icon.options)
        return builder

    # Options

    def set_fields_can_change(self) -> "TableBuilder":
        """Send field descriptors with every data response."""
        self.fields_can_change = True
        return self

    def set_option(self, **values: Any) -> "TableBuilder":
        """Set one or more :class:`TableOptions` attributes."""
        for key, value in values.items():
            if not hasattr(self.options, key):
                raise AttributeError(f"Unknown table option: {key}")
            setattr(self.options, key, value)
        return self

    def set_title(self, title: str) -> "TableBuilder":
        return self.set_option(title=title)

    def set_text_no_data(self, text: str) -> "TableBuilder":
        return self.set_option(text_no_data=text)

    def set_pagination(self, pagination: bool) -> "TableBuilder":
        return self.set_option(pagination=pagination)

    def set_search(self, search: bool) -> "TableBuilder":
        return self.set_option(search=search)

    def set_reload(self, reload: bool) -> "TableBuilder":
        return self.set_option(reload=reload)

    def set_csv(self, csv: bool) -> "TableBuilder":
        return self.set_option(csv=csv)

    def set_excel(self, excel: bool) -> "TableBuilder":
        return self.set_option(excel=excel)

    def set_footer(self, footer: bool) -> "TableBuilder":
        return self.set_option(footer=footer)

    def set_server_side(self, server_side: bool) -> "TableBuilder":
        return self.set_option(server_side=server_side)

    def set_items_per_page(self, items_per_page: int) -> "TableBuilder":
        return self.set_option(items_per_page=items_per_page)

    def set_display(self, display: str) -> "TableBuilder":
        return self.set_option(display=display)

    def build(self) -> Table:
        """Freeze the declared fields into a table.

        Icon fields without icons and buttons fields without buttons are
        logged as likely configuration mistakes.
        """
        declared = [builder.build() for builder in self._builders]
        fields = [f for _, f in sorted(enumerate(declared), key=_column_position)]
        for f in fields:
            if f.structural_type == StructuralType.ICON and not f.icons:
                self.logger.warning(
                    "Icon field %r has no icon definitions, use icon_field_from_set()", f.id
                )
            elif f.structural_type == StructuralType.BUTTONS and not f.buttons:
                self.logger.warning(
                    "Buttons field %r has no button definitions, use add_button()", f.id
                )
        return Table(
            fields,
            self.ctx,
            translator=self.translator,
            options=replace(self.options, page_sizes=list(self.options.page_sizes)),
            fields_can_change=self.fields_can_change,
            settings=self.settings,
            logger=self.logger,
        )
