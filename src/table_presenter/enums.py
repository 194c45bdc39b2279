"""Closed enumerations shared by fields, formatters and exporters."""

from __future__ import annotations

from enum import Enum


class OutputChannel(str, Enum):
    """Target of a formatting pass."""

    WEB = "web"
    CSV = "csv"
    PDF = "pdf"
    EXCEL = "excel"

    def is_display(self) -> bool:
        """Return True for channels rendered for humans (web and print)."""
        return self in (OutputChannel.WEB, OutputChannel.PDF)

    def is_export(self) -> bool:
        """Return True for file exports that expect parseable values."""
        return self in (OutputChannel.CSV, OutputChannel.EXCEL)


class StructuralType(str, Enum):
    """Coarse rendering category sent to the UI as ``format``."""

    TEXT = "text"
    NUMBER = "number"
    ID = "id"
    BUTTONS = "buttons"
    ICON = "icon"
    HTML = "html"
    LINK = "link"
    INPUT = "input"
    TEXT2 = "text2"
    HEADER = "header"


class FieldTypeHint(str, Enum):
    """Semantic field tag selecting default formatting behaviour."""

    ID = "id"
    INTEGER = "integer"
    FLOAT = "float"
    TEXT = "text"
    BOOL = "bool"
    DATETIME = "datetime"
    DATE = "date"
    DISTANCE = "distance"
    PRESSURE = "pressure"
    SPEED = "speed"
    BUTTONS = "buttons"
    ICON = "icon"
    LINK = "link"
    HTML = "html"
    INPUT = "input"
    HEADER = "header"
    TIMELENGTH = "timelength"

    TEXT2 = "text2"
    TEXT2_INT = "text2int"
    TEXT2_FLOAT = "text2float"
    TEXT2_DATETIME = "text2datetime"
    TEXT2_DATE = "text2date"
    TEXT2_DISTANCE = "text2distance"
    TEXT2_SPEED = "text2speed"
    TEXT2_BOOL = "text2bool"
    TEXT2_TIMELENGTH = "text2timelength"

    TEXT_N = "textn"
    INTEGER_N = "integern"
    FLOAT_N = "floatn"
    DATETIME_N = "datetimen"
    DATE_N = "daten"
    DISTANCE_N = "distancen"
    SPEED_N = "speedn"
    BOOL_N = "booln"
    TIMELENGTH_N = "timelengthn"


class FieldAlign(str, Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class FieldFooter(str, Enum):
    """Footer aggregation policy."""

    NO = "no"
    SUM = "sum"
    COUNT = "count"
    STATIC = "static"


class FieldColor(str, Enum):
    PRIMARY = "primary"
    ACCENT = "accent"
    WARN = "warn"
    TERTIARY = "tertiary"


class ButtonAction(str, Enum):
    """Action triggered by a row button or menu item."""

    LINK = "link"
    DIALOG = "dialog"
    API = "api"
    DOWNLOAD = "download"
    FORM = "form"
    BACK = "back"
    CLOSE = "close"
    SAVE = "save"
    HREF = "href"
    GET = "get"
    POST = "post"
    PUT = "put"
    DELETE = "delete"
    MENU = "menu"


__all__ = [
    "ButtonAction",
    "FieldAlign",
    "FieldColor",
    "FieldFooter",
    "FieldTypeHint",
    "OutputChannel",
    "StructuralType",
]
