"""Field definitions and their fluent builder."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple, Union

from .context import UiContext
from .enums import (
    ButtonAction,
    FieldAlign,
    FieldColor,
    FieldFooter,
    FieldTypeHint,
    OutputChannel,
    StructuralType,
)
from .formatters import Formatter, create_bool_formatter
from .registry import DECIMAL_HINTS, coerce_hint, create_formatter, resolve_defaults
from .row import Accessor, Row

RowHintAccessor = Callable[[Any], str]
MenuAccessor = Callable[[Any], Optional[List[str]]]


@dataclass(frozen=True)
class IconDef:
    """Icon shown for one value of an icon field."""

    icon: str
    color: FieldColor
    hint: str = ""
    options: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ButtonDef:
    """Row button occupying one slot of a buttons field."""

    action: ButtonAction
    icon: str
    color: FieldColor
    hint: str = ""
    options: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class MenuItemDef:
    """Entry of a menu button."""

    action: ButtonAction
    icon: str
    color: FieldColor
    text: str


@dataclass(frozen=True)
class Field:
    """One logical table column.

    A Field is immutable; tables toggle visibility on their own.
    """

    id: str
    name: str
    type_hint: Union[FieldTypeHint, str]
    structural_type: StructuralType
    accessor: Accessor
    formatter: Formatter
    formatters: Mapping[OutputChannel, Formatter] = field(default_factory=dict)
    decimals: int = 0
    true_text: str = ""
    false_text: str = ""
    align: Optional[FieldAlign] = None
    search: bool = True
    sort: bool = True
    sticky: bool = False
    csv: bool = True
    hide: bool = False
    footer: FieldFooter = FieldFooter.NO
    width: Optional[str] = None
    min_width: Optional[str] = None
    hint: Optional[str] = None
    display: Optional[str] = None
    header: Optional[str] = None
    header_span: Optional[int] = None
    column_order: Optional[int] = None
    input_type: Optional[str] = None
    input_required: Optional[bool] = None
    input_lang: Optional[str] = None
    input_paste: Optional[bool] = None
    text_prefix: Optional[str] = None
    text_suffix: Optional[str] = None
    access: Tuple[str, ...] = ()
    buttons: Mapping[int, ButtonDef] = field(default_factory=dict)
    icons: Mapping[str, IconDef] = field(default_factory=dict)
    row_hint: Optional[RowHintAccessor] = None
    menu_accessors: Mapping[int, MenuAccessor] = field(default_factory=dict)
    menu_items: Mapping[int, Tuple[MenuItemDef, ...]] = field(default_factory=dict)

    @property
    def is_link(self) -> bool:
        return self.type_hint == FieldTypeHint.LINK

    def formatter_for(self, channel: OutputChannel) -> Formatter:
        """Return the channel override when present, else the default formatter."""
        return self.formatters.get(channel, self.formatter)

    def format(self, value: Any, row: Row, channel: OutputChannel, ctx: UiContext) -> Any:
        """Format a raw value for a channel.

        Number columns on the web channel become ``[display, raw]`` so the
        client can sort on the raw value.
        """
        formatted = self.formatter_for(channel).format(value, row, channel, ctx)
        if channel == OutputChannel.WEB and self.structural_type == StructuralType.NUMBER:
            return [formatted, value]
        return formatted


class FieldBuilder:
    """Collect field configuration before a table is built."""

    def __init__(
        self,
        field_id: str,
        name: str,
        type_hint: Union[FieldTypeHint, str],
        accessor: Accessor,
    ) -> None:
        defaults = resolve_defaults(type_hint)
        known = coerce_hint(type_hint)
        self._values: Dict[str, Any] = {
            "id": field_id,
            "name": name,
            "type_hint": known if known is not None else str(type_hint),
            "structural_type": defaults.structural_type,
            "accessor": accessor,
            "formatter": defaults.create_formatter(),
            "decimals": defaults.decimals,
            "true_text": defaults.true_text,
            "false_text": defaults.false_text,
            "align": defaults.align,
            "search": defaults.search,
            "sort": defaults.sort,
            "csv": defaults.csv,
        }
        self._formatters: Dict[OutputChannel, Formatter] = {}
        self._access: List[str] = []
        self._buttons: Dict[int, ButtonDef] = {}
        self._icons: Dict[str, IconDef] = {}
        self._menu_accessors: Dict[int, MenuAccessor] = {}
        self._menu_items: Dict[int, List[MenuItemDef]] = {}
        self._last_menu_key: Optional[int] = None

    @property
    def id(self) -> str:
        return self._values["id"]

    @property
    def type_hint(self) -> Union[FieldTypeHint, str]:
        return self._values["type_hint"]

    def _set(self, **values: Any) -> "FieldBuilder":
        self._values.update(values)
        return self

    # Formatting

    def with_formatter(self, formatter: Formatter) -> "FieldBuilder":
        """Replace the default formatter."""
        return self._set(formatter=formatter)

    def with_channel_formatter(
        self, channel: OutputChannel, formatter: Formatter
    ) -> "FieldBuilder":
        """Override the formatter for one output channel."""
        self._formatters[OutputChannel(channel)] = formatter
        return self

    def with_web_formatter(self, formatter: Formatter) -> "FieldBuilder":
        return self.with_channel_formatter(OutputChannel.WEB, formatter)

    def with_csv_formatter(self, formatter: Formatter) -> "FieldBuilder":
        return self.with_channel_formatter(OutputChannel.CSV, formatter)

    def with_pdf_formatter(self, formatter: Formatter) -> "FieldBuilder":
        return self.with_channel_formatter(OutputChannel.PDF, formatter)

    def with_excel_formatter(self, formatter: Formatter) -> "FieldBuilder":
        return self.with_channel_formatter(OutputChannel.EXCEL, formatter)

    def with_decimals(self, decimals: int) -> "FieldBuilder":
        """Set the decimal precision.

        The default formatter is rebuilt only for numeric, distance, pressure
        and speed hints; other hints keep their formatter.
        """
        self._values["decimals"] = decimals
        if self.type_hint in DECIMAL_HINTS:
            self._values["formatter"] = create_formatter(self.type_hint, decimals)
        return self

    def with_bool_text(self, true_text: str, false_text: str) -> "FieldBuilder":
        """Replace the boolean labels and the default formatter."""
        return self._set(
            true_text=true_text,
            false_text=false_text,
            formatter=create_bool_formatter(true_text, false_text),
        )

    # Footer and visibility

    def with_footer(self, footer: Union[FieldFooter, str]) -> "FieldBuilder":
        return self._set(footer=FieldFooter(footer))

    def with_footer_sum(self) -> "FieldBuilder":
        return self.with_footer(FieldFooter.SUM)

    def with_footer_count(self) -> "FieldBuilder":
        return self.with_footer(FieldFooter.COUNT)

    def hide(self) -> "FieldBuilder":
        return self._set(hide=True)

    def hide_in_csv(self) -> "FieldBuilder":
        return self._set(csv=False)

    def show_in_csv(self) -> "FieldBuilder":
        return self._set(csv=True)

    # Layout

    def with_align(self, align: Union[FieldAlign, str]) -> "FieldBuilder":
        return self._set(align=FieldAlign(align))

    def align_left(self) -> "FieldBuilder":
        return self.with_align(FieldAlign.LEFT)

    def align_center(self) -> "FieldBuilder":
        return self.with_align(FieldAlign.CENTER)

    def align_right(self) -> "FieldBuilder":
        return self.with_align(FieldAlign.RIGHT)

    def with_width(self, width: str) -> "FieldBuilder":
        return self._set(width=width)

    def with_min_width(self, min_width: str) -> "FieldBuilder":
        return self._set(min_width=min_width)

    def with_hint(self, hint: str) -> "FieldBuilder":
        return self._set(hint=hint)

    def with_display(self, display: str) -> "FieldBuilder":
        return self._set(display=display)

    def with_search(self, search: bool) -> "FieldBuilder":
        return self._set(search=search)

    def with_sort(self, sort: bool) -> "FieldBuilder":
        return self._set(sort=sort)

    def with_sticky(self, sticky: bool = True) -> "FieldBuilder":
        return self._set(sticky=sticky)

    def with_header(self, header: str) -> "FieldBuilder":
        return self._set(header=header)

    def with_header_span(self, span: int) -> "FieldBuilder":
        return self._set(header_span=span)

    def with_column_order(self, order: int) -> "FieldBuilder":
        """Place the column at ``order``; unordered columns keep their declaration index."""
        return self._set(column_order=order)

    def with_text_prefix(self, prefix: str) -> "FieldBuilder":
        return self._set(text_prefix=prefix)

    def with_text_suffix(self, suffix: str) -> "FieldBuilder":
        return self._set(text_suffix=suffix)

    def with_access(self, access: List[str]) -> "FieldBuilder":
        self._access = list(access)
        return self

    # Input fields

    def with_input_type(self, input_type: str) -> "FieldBuilder":
        return self._set(input_type=input_type)

    def with_input_required(self, required: bool) -> "FieldBuilder":
        return self._set(input_required=required)

    def with_input_lang(self, lang: str) -> "FieldBuilder":
        return self._set(input_lang=lang)

    def with_input_paste(self, paste: bool) -> "FieldBuilder":
        return self._set(input_paste=paste)

    # Icons, buttons and menus

    def with_row_hint(self, accessor: RowHintAccessor) -> "FieldBuilder":
        """Attach a per-row tooltip sent as ``<id>Hint`` on the web channel."""
        return self._set(row_hint=accessor)

    def add_icon(
        self,
        value: str,
        icon: str,
        color: Union[FieldColor, str],
        hint: str = "",
        options: Optional[Mapping[str, Any]] = None,
    ) -> "FieldBuilder":
        self._icons[value] = IconDef(icon, FieldColor(color), hint, dict(options or {}))
        return self

    def add_button(
        self,
        key: int,
        action: Union[ButtonAction, str],
        icon: str,
        color: Union[FieldColor, str],
        hint: str = "",
        options: Optional[Mapping[str, Any]] = None,
    ) -> "FieldBuilder":
        self._buttons[key] = ButtonDef(
            ButtonAction(action), icon, FieldColor(color), hint, dict(options or {})
        )
        return self

    def add_menu(
        self,
        key: int,
        icon: str,
        color: Union[FieldColor, str],
        hint: str,
        accessor: MenuAccessor,
    ) -> "FieldBuilder":
        """Add a menu button whose items are resolved per row.

        The accessor returns one entry per menu item: a non-empty string
        enables the item, ``""`` hides it, and ``None`` hides the whole menu.
        """
        self.add_button(key, ButtonAction.MENU, icon, color, hint)
        self._menu_accessors[key] = accessor
        self._menu_items[key] = []
        self._last_menu_key = key
        return self

    def add_menu_item(
        self,
        action: Union[ButtonAction, str],
        icon: str,
        color: Union[FieldColor, str],
        text: str,
    ) -> "FieldBuilder":
        """Append an item to the menu added last."""
        key = self._last_menu_key if self._last_menu_key is not None else 0
        self._menu_items.setdefault(key, []).append(
            MenuItemDef(ButtonAction(action), icon, FieldColor(color), text)
        )
        return self

    def build(self) -> Field:
        """Freeze the collected configuration into a Field."""
        return Field(
            formatters=MappingProxyType(dict(self._formatters)),
            access=tuple(self._access),
            buttons=MappingProxyType(dict(self._buttons)),
            icons=MappingProxyType(dict(self._icons)),
            menu_accessors=MappingProxyType(dict(self._menu_accessors)),
            menu_items=MappingProxyType(
                {key: tuple(items) for key, items in self._menu_items.items()}
            ),
            **self._values,
        )
