"""Copying records between two tables by matching field names.

A straight projection: every copyable source field whose name also exists as
a copyable field on the target table is carried over, values unchanged. No
link semantics are applied; for the relink copy see duplex_copy.duplication.facade.
"""

from __future__ import annotations

from typing import Any

from duplex_copy.duplication.field_filter import filter_copyable_fields
from duplex_copy.duplication.results import CopyResult
from duplex_copy.core.constants import DEFAULT_PAGE_SIZE
from duplex_copy.core.exceptions import NoRecordsSelected
from duplex_copy.core.logging_config import get_logger
from duplex_copy.core.models import FieldMeta, NewRecordSpec
from duplex_copy.protocols.table_service import TableService

logger = get_logger("projection")


def field_mapping(source_fields: list[FieldMeta], target_fields: list[FieldMeta]) -> dict[str, str]:
    """Map source field ids to target field ids with the same name.

    Only copyable fields take part on either side. When the target has several
    fields with one name the first wins.
    """
    target_by_name: dict[str, str] = {}
    for field in filter_copyable_fields(target_fields):
        target_by_name.setdefault(field.name, field.id)
    return {
        field.id: target_by_name[field.name]
        for field in filter_copyable_fields(source_fields)
        if field.name in target_by_name
    }


async def copy_records(
    service: TableService,
    source_table_id: str,
    target_table_id: str,
    record_ids: list[str],
    page_size: int = DEFAULT_PAGE_SIZE,
) -> CopyResult:
    """Copy records from one table to another, matching fields by name.

    Args:
        service: Table store.
        source_table_id: Table to read from.
        target_table_id: Table to write to.
        record_ids: Source records to copy.
        page_size: Minimum page size requested when reading the source table.

    Returns:
        CopyResult: Never raises; failures are reported in the result.
    """
    try:
        if not record_ids:
            raise NoRecordsSelected()

        source_fields = await service.get_field_metadata(source_table_id)
        target_fields = await service.get_field_metadata(target_table_id)
        mapping = field_mapping(source_fields, target_fields)
        logger.debug("Field mapping %s -> %s: %s", source_table_id, target_table_id, mapping)

        records = await service.get_records(source_table_id, max(page_size, len(record_ids)))
        wanted = set(record_ids)
        specs = []
        for record in records:
            if record.record_id not in wanted:
                continue
            new_fields: dict[str, Any] = {
                mapping[field_id]: value
                for field_id, value in record.fields.items()
                if field_id in mapping and value is not None
            }
            specs.append(NewRecordSpec(fields=new_fields))

        new_record_ids: list[str] = []
        if specs:
            new_record_ids = await service.add_records(target_table_id, specs)
        logger.info("Copied %d records from %s to %s", len(specs), source_table_id, target_table_id)
        return CopyResult(success=True, count=len(specs), record_ids=list(new_record_ids))
    except Exception as e:
        logger.error("Copy from %s to %s failed: %s", source_table_id, target_table_id, e)
        return CopyResult.failure(str(e) or "copy failed")
