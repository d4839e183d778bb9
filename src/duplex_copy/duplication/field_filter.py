"""Which fields may be written when records are copied.

The store maintains computed fields (formulas, lookups, auto numbers, created
and modified stamps) itself and rejects inserts that supply them. Every code
path that copies or lists copyable columns goes through is_field_copyable.
"""

from __future__ import annotations

from duplex_copy.core.constants import COMPUTED_FIELD_TYPES
from duplex_copy.core.models import FieldMeta


def is_field_copyable(field_type: int) -> bool:
    """Return True if values of this field type may be supplied on insert."""
    return field_type not in COMPUTED_FIELD_TYPES


def filter_copyable_fields(fields: list[FieldMeta]) -> list[FieldMeta]:
    return [f for f in fields if is_field_copyable(f.type)]
