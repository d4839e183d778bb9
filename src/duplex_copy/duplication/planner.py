"""Building insertable copies of child records.

Each copy keeps the source record's plain values and has its back-link field
replaced so that it points at the target anchor instead of the anchor the
original belongs to. Per source field:

    - computed fields are dropped (the store maintains them),
    - the back-link field is dropped (it still names the original anchor),
    - null values are dropped (omission rather than an explicit null),
    - fields missing from the table metadata are dropped,
    - everything else is copied unchanged.

The back-link field is then set to the relink value, see relink_value().
"""

from __future__ import annotations

from typing import Any

from duplex_copy.duplication.field_filter import is_field_copyable
from duplex_copy.core.logging_config import get_logger
from duplex_copy.core.models import FieldMeta, NewRecordSpec, Record
from duplex_copy.link.codec import CanonicalLinkValue, encode

logger = get_logger("planner")


def relink_value(
    target_anchor_id: str,
    target_linked_table_id: str | None,
    cached_anchor_text: str | None = None,
) -> dict[str, Any]:
    """Encoded link value pointing at exactly one anchor.

    A copy is always relinked to the single designated anchor, whatever the
    field's declared multiplicity: it never inherits additional targets from
    the source record.

    Args:
        target_anchor_id: Record the copy should point at.
        target_linked_table_id: Table of the anchor (the main table).
        cached_anchor_text: Anchor's primary-field text, if it could be read.

    Returns:
        dict: Value in the write-safe object shape.
    """
    return encode(
        CanonicalLinkValue(
            table_id=target_linked_table_id,
            record_ids=[target_anchor_id],
            text=cached_anchor_text or "",
        )
    )


def plan_record(
    record: Record,
    fields_by_id: dict[str, FieldMeta],
    back_field_id: str,
    target_anchor_id: str,
    target_linked_table_id: str | None,
    cached_anchor_text: str | None = None,
) -> NewRecordSpec:
    new_fields: dict[str, Any] = {}
    for field_id, value in record.fields.items():
        field = fields_by_id.get(field_id)
        if field is None or not is_field_copyable(field.type):
            continue
        if field_id == back_field_id or value is None:
            continue
        new_fields[field_id] = value

    new_fields[back_field_id] = relink_value(target_anchor_id, target_linked_table_id, cached_anchor_text)
    return NewRecordSpec(fields=new_fields)


def plan(
    child_records: list[Record],
    field_metadata: list[FieldMeta],
    back_field_id: str,
    target_anchor_id: str,
    target_linked_table_id: str | None,
    cached_anchor_text: str | None = None,
) -> list[NewRecordSpec]:
    """Build one insertable spec per child record, in input order.

    Args:
        child_records: Records to copy.
        field_metadata: Field metadata of the child table.
        back_field_id: Child-table field paired with the forward link field.
        target_anchor_id: Main-table record the copies should point at.
        target_linked_table_id: The main table's id.
        cached_anchor_text: Anchor's primary-field text, empty if unavailable.

    Returns:
        list[NewRecordSpec]: Field maps ready for insertion.
    """
    fields_by_id = {f.id: f for f in field_metadata}
    specs = [
        plan_record(
            record,
            fields_by_id,
            back_field_id,
            target_anchor_id,
            target_linked_table_id,
            cached_anchor_text,
        )
        for record in child_records
    ]
    logger.info("Planned %d copies relinked to %s via %s", len(specs), target_anchor_id, back_field_id)
    if specs:
        logger.debug("First planned record: %s", specs[0].fields)
    return specs
