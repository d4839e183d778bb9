"""Decoding and encoding of link-typed cell values.

The store returns a link cell in several incompatible shapes depending on
where the value is read from:

1. ``["rec1", "rec2"]``
2. ``[{"record_id": "rec1", "text": "..."}, {"recordId": "rec2"}, {"id": "rec3"}]``
3. ``{"recordIds": ["rec1"], "tableId": "tbl1", "text": "..."}``
   (also ``record_ids`` and the REST read key ``link_record_ids``)
4. ``{"record_id": "rec1", "text": "..."}``

decode() folds all of them into a CanonicalLinkValue and never raises:
fragments it cannot use are dropped and anything unrecognised decodes to an
empty value. encode() always produces shape 3, the only shape the store
reliably accepts back on write, even for single links.

Example:
    >>> value = decode([{"record_id": "rec1"}, "rec2", "rec1"])
    >>> value.record_ids
    ['rec1', 'rec2']
    >>> encode(value)
    {'recordIds': ['rec1', 'rec2'], 'tableId': None, 'text': '', 'type': 'text'}
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field, field_validator

from duplex_copy.core.constants import RECORD_ID_KEYS, RECORD_ID_LIST_KEYS, TABLE_ID_KEYS
from duplex_copy.core.validation import VALIDATION_CONFIG


class CanonicalLinkValue(BaseModel):
    """Normalized form of a link cell.

    Attributes:
        table_id: Table the identifiers belong to, when known.
        record_ids: Target record identifiers, unique, in encounter order.
        text: Cached display text of the targets, when known.
    """

    model_config = VALIDATION_CONFIG

    table_id: str | None = None
    record_ids: list[str] = Field(default_factory=list)
    text: str | None = None

    @field_validator("record_ids", mode="after")
    @classmethod
    def drop_duplicates(cls, value: list[str]) -> list[str]:
        return list(dict.fromkeys(value))

    def contains(self, record_id: str) -> bool:
        return record_id in self.record_ids

    def is_empty(self) -> bool:
        return not self.record_ids


def _non_empty_str(value: Any) -> str | None:
    return value if isinstance(value, str) and value else None


def _first_key(item: Mapping, keys: tuple[str, ...]) -> str | None:
    for key in keys:
        value = _non_empty_str(item.get(key))
        if value:
            return value
    return None


def _decode_sequence(raw: list | tuple) -> CanonicalLinkValue:
    record_ids: list[str] = []
    texts: list[str] = []
    table_id = None
    for item in raw:
        if isinstance(item, str):
            if item:
                record_ids.append(item)
        elif isinstance(item, Mapping):
            record_id = _first_key(item, RECORD_ID_KEYS)
            if not record_id:
                continue
            record_ids.append(record_id)
            if text := _non_empty_str(item.get("text")):
                texts.append(text)
            table_id = table_id or _first_key(item, TABLE_ID_KEYS)
    return CanonicalLinkValue(table_id=table_id, record_ids=record_ids, text=", ".join(texts) or None)


def _decode_mapping(raw: Mapping) -> CanonicalLinkValue:
    table_id = _first_key(raw, TABLE_ID_KEYS)
    text = _non_empty_str(raw.get("text"))

    for key in RECORD_ID_LIST_KEYS:
        values = raw.get(key)
        if isinstance(values, (list, tuple)):
            record_ids = [v for v in values if isinstance(v, str) and v]
            return CanonicalLinkValue(table_id=table_id, record_ids=record_ids, text=text)

    record_id = _first_key(raw, RECORD_ID_KEYS)
    if record_id:
        return CanonicalLinkValue(table_id=table_id, record_ids=[record_id], text=text)
    return CanonicalLinkValue()


def decode(raw: Any) -> CanonicalLinkValue:
    """Decode a raw link cell into its canonical form.

    Args:
        raw: Cell value as returned by the store, in any of the known shapes.

    Returns:
        CanonicalLinkValue: Empty (no ids, no table id) when nothing matches.
    """
    if isinstance(raw, (list, tuple)):
        return _decode_sequence(raw)
    if isinstance(raw, Mapping):
        return _decode_mapping(raw)
    return CanonicalLinkValue()


def encode(value: CanonicalLinkValue) -> dict[str, Any]:
    """Encode a canonical link value in the write-safe object shape."""
    return {
        "recordIds": list(value.record_ids),
        "tableId": value.table_id,
        "text": value.text or "",
        "type": "text",
    }


def record_ids_of(raw: Any) -> list[str]:
    """Shortcut for the identifier list of a raw link cell."""
    return decode(raw).record_ids
