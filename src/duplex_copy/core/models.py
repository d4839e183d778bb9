"""
Pydantic models for table store metadata and records.

The store describes the same structures with two spellings: the client SDK
uses camelCase keys (``id``, ``isPrimary``, ``backFieldId``) while the REST
API uses snake_case (``field_id``, ``is_primary``, ``back_field_id``). The
models accept either through validation aliases.
"""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, Field

from .constants import COMPUTED_FIELD_TYPES
from .enums import FieldType
from .validation import STRICT_VALIDATION_CONFIG, VALIDATION_CONFIG


class FieldProperty(BaseModel):
    """Link settings carried by a link-typed field.

    Attributes:
        table_id: Table the field points at.
        back_field_id: Paired field on that table (duplex links only).
        multiple: Whether the field may reference more than one record.
    """

    model_config = VALIDATION_CONFIG

    table_id: str | None = Field(default=None, validation_alias=AliasChoices("table_id", "tableId"))
    back_field_id: str | None = Field(
        default=None, validation_alias=AliasChoices("back_field_id", "backFieldId")
    )
    multiple: bool = True


class FieldMeta(BaseModel):
    """Metadata for a single field of a table."""

    model_config = VALIDATION_CONFIG

    id: str = Field(validation_alias=AliasChoices("id", "field_id"))
    name: str = Field(default="", validation_alias=AliasChoices("name", "field_name"))
    type: int
    is_primary: bool = Field(default=False, validation_alias=AliasChoices("is_primary", "isPrimary"))
    property: FieldProperty | None = None

    def is_duplex_link(self) -> bool:
        return self.type == FieldType.duplex_link

    def is_computed(self) -> bool:
        return self.type in COMPUTED_FIELD_TYPES

    def linked_table_id(self) -> str | None:
        return self.property.table_id if self.property else None

    def back_field_id(self) -> str | None:
        return self.property.back_field_id if self.property else None


class Record(BaseModel):
    """A record as read from the store, keyed by field id."""

    model_config = VALIDATION_CONFIG

    record_id: str = Field(validation_alias=AliasChoices("record_id", "recordId"))
    fields: dict[str, Any] = Field(default_factory=dict)


class NewRecordSpec(BaseModel):
    """An insertable record: a field map keyed by field id."""

    model_config = STRICT_VALIDATION_CONFIG

    fields: dict[str, Any] = Field(default_factory=dict)


def primary_field(fields: list[FieldMeta]) -> FieldMeta | None:
    """Return the table's primary field.

    The field flagged primary wins; otherwise the first column is used, which
    is where the store keeps the primary field.
    """
    for field in fields:
        if field.is_primary:
            return field
    return fields[0] if fields else None
