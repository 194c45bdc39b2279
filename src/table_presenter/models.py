"""Pydantic models describing declarative table schemas."""

from __future__ import annotations

from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .enums import ButtonAction, FieldAlign, FieldColor, FieldFooter


class IconSchema(BaseModel):
    """Icon shown for one cell value of an icon field."""

    model_config = ConfigDict(extra="forbid")

    value: str
    icon: str
    color: FieldColor = FieldColor.PRIMARY
    hint: str = ""


class ButtonSchema(BaseModel):
    """Row button placed in a buttons field slot."""

    model_config = ConfigDict(extra="forbid")

    slot: int = Field(ge=0)
    action: ButtonAction
    icon: str
    color: FieldColor = FieldColor.PRIMARY
    hint: str = ""


class FieldSchema(BaseModel):
    """Column declaration.

    ``key`` is a dotted path into the record (``owner.name``, ``tags.0``)
    and defaults to the field id. Link fields read the url from
    ``link_key`` when the record stores text and url separately.
    """

    model_config = ConfigDict(extra="forbid")

    id: str = Field(min_length=1)
    name: str
    type: str = "text"
    key: Optional[str] = None
    decimals: Optional[int] = Field(default=None, ge=0)
    bool_text: Optional[Tuple[str, str]] = None
    footer: Optional[FieldFooter] = None
    hide: bool = False
    csv: Optional[bool] = None
    align: Optional[FieldAlign] = None
    width: Optional[str] = None
    min_width: Optional[str] = None
    hint: Optional[str] = None
    display: Optional[str] = None
    header: Optional[str] = None
    header_span: Optional[int] = None
    sticky: bool = False
    search: Optional[bool] = None
    sort: Optional[bool] = None
    prefix: Optional[str] = None
    suffix: Optional[str] = None
    hint_key: Optional[str] = None
    link_key: Optional[str] = None
    buttons: List[ButtonSchema] = Field(default_factory=list)
    icons: List[IconSchema] = Field(default_factory=list)

    @property
    def record_key(self) -> str:
        return self.key or self.id


class TableSchema(BaseModel):
    """A table declared as data rather than code."""

    model_config = ConfigDict(extra="forbid")

    title: Optional[str] = None
    fields_can_change: bool = False
    fields: List[FieldSchema] = Field(min_length=1)

    @model_validator(mode="after")
    def _unique_field_ids(self) -> "TableSchema":
        seen = set()
        for field in self.fields:
            if field.id in seen:
                raise ValueError(f"duplicate field id: {field.id}")
            seen.add(field.id)
        return self
