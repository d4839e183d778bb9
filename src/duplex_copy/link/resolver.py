"""Locating the paired field of a duplex link.

A duplex link is stored as two fields, one on each table. The forward field F
on the main table and the back field B on the child table form a pair when
``B.property.back_field_id == F.id``. Only the child table's metadata is
needed to find B.

Example:
    >>> fields = await service.get_field_metadata(child_table_id)
    >>> back_field = resolve_back_field(fields, forward_field_id)
    >>> back_field.linked_table_id()  # the main table
    'tblMain'
"""

from __future__ import annotations

from duplex_copy.core.exceptions import BackLinkNotFound, DuplexCopyException, DuplexCopyNotFoundError
from duplex_copy.core.logging_config import get_logger
from duplex_copy.core.models import FieldMeta
from duplex_copy.link.codec import CanonicalLinkValue, decode
from duplex_copy.protocols.table_service import TableService

logger = get_logger("resolver")


def resolve_back_field(child_table_fields: list[FieldMeta], forward_field_id: str) -> FieldMeta:
    """Find the child-table field paired with a forward link field.

    Fields are scanned in metadata order and the first duplex-link field whose
    back-field id equals forward_field_id is returned. Several matches point to
    a misconfigured base; the first one still wins and a warning is logged.

    Args:
        child_table_fields: Field metadata of the child table.
        forward_field_id: Id of the forward link field on the main table.

    Returns:
        FieldMeta: The back field. Its ``id`` is the back-field id.

    Raises:
        BackLinkNotFound: If no duplex-link field pairs with forward_field_id.
    """
    link_fields = [f for f in child_table_fields if f.is_duplex_link()]
    matches = [f for f in link_fields if f.back_field_id() == forward_field_id]

    if not matches:
        logger.error(
            "No back-link field for %s among duplex-link fields %s",
            forward_field_id,
            [(f.id, f.name, f.back_field_id()) for f in link_fields],
        )
        raise BackLinkNotFound(forward_field_id, [f.id for f in link_fields])

    if len(matches) > 1:
        logger.warning(
            "Fields %s all pair with %s; using %s",
            [f.id for f in matches],
            forward_field_id,
            matches[0].id,
        )

    back_field = matches[0]
    logger.debug(
        "Back-link field %s (%s) -> table %s, multiple=%s",
        back_field.id,
        back_field.name,
        back_field.linked_table_id(),
        back_field.property.multiple if back_field.property else None,
    )
    return back_field


async def list_link_fields(service: TableService, table_id: str) -> list[FieldMeta]:
    """Return the duplex-link fields of a table, in metadata order."""
    fields = await service.get_field_metadata(table_id)
    return [f for f in fields if f.is_duplex_link()]


async def get_linked_record_ids(
    service: TableService, table_id: str, record_id: str, field_id: str
) -> CanonicalLinkValue:
    """Read the records a link cell points at.

    The identifiers come from the decoded cell; the target table comes from
    the field's metadata, since not every cell shape carries it.

    Args:
        service: Table store.
        table_id: Table holding the record.
        record_id: Record whose link cell is read.
        field_id: Link field to read.

    Returns:
        CanonicalLinkValue: Targets of the link, with table_id set.

    Raises:
        DuplexCopyNotFoundError: If field_id is not a field of the table.
        DuplexCopyException: If the field does not name a linked table.
    """
    fields = await service.get_field_metadata(table_id)
    field = next((f for f in fields if f.id == field_id), None)
    if field is None:
        raise DuplexCopyNotFoundError(f"Field {field_id} not found in table {table_id}")

    linked_table_id = field.linked_table_id()
    if not linked_table_id:
        raise DuplexCopyException(f"Field {field_id} does not reference a linked table")

    raw = await service.get_cell_value(table_id, field_id, record_id)
    value = decode(raw)
    logger.debug("Record %s links %d records in %s", record_id, len(value.record_ids), linked_table_id)
    return value.model_copy(update={"table_id": linked_table_id})
