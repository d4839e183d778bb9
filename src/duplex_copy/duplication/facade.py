"""Copying linked child records to another anchor.

This module provides the LinkedRecordCopier class and the copy_linked_records
shortcut, the single operation the package exposes for the relink copy.

Given a forward link field F on a main table, the child table's paired field
B, and a set of child records currently linked to some anchor, the copier
creates copies of the selected children whose B points at a different anchor.
The store mirrors B into F, so the copies show up under the new anchor while
the originals and their anchor are untouched.

Steps:
    1. Reject an empty selection.
    2. Resolve B from the child table's metadata.
    3. Read the new anchor's primary-field text (best effort).
    4. Read the child table and keep the selected records.
    5. Plan the copies and write them in one batch.
    6. Re-read the anchor's forward cell to verify the association.

Every failure ends up in the returned CopyResult; nothing is raised.

Concurrent calls are not coordinated and repeated calls are not deduplicated:
calling twice with the same arguments creates two sets of copies.

Example:
    >>> copier = LinkedRecordCopier(service)
    >>> result = await copier.copy_linked_records("tblItems", ["recC1", "recC2"], "fldItems", "recM2")
    >>> result.to_dict()
    {'success': True, 'count': 2}
"""

from __future__ import annotations

from duplex_copy.duplication.display import cell_text
from duplex_copy.duplication.executor import DuplicationExecutor
from duplex_copy.duplication.planner import plan
from duplex_copy.duplication.results import AnchorRef, CopyResult
from duplex_copy.core.constants import DEFAULT_PAGE_SIZE
from duplex_copy.core.exceptions import DuplexCopyException, NoRecordsSelected
from duplex_copy.core.logging_config import LoggerMixin
from duplex_copy.core.models import Record, primary_field
from duplex_copy.link.resolver import resolve_back_field
from duplex_copy.protocols.table_service import TableService


class LinkedRecordCopier(LoggerMixin):
    """Duplicates child records and relinks the copies to a new anchor.

    Args:
        service: Table store to read from and write to.
        page_size: Minimum page size requested when reading the child table.
    """

    def __init__(self, service: TableService, page_size: int = DEFAULT_PAGE_SIZE):
        self.service = service
        self.page_size = page_size
        self.executor = DuplicationExecutor(service)

    async def copy_linked_records(
        self,
        child_table_id: str,
        selected_record_ids: list[str],
        main_table_forward_field_id: str,
        target_anchor_record_id: str,
    ) -> CopyResult:
        """Copy the selected child records and point the copies at the target anchor.

        Args:
            child_table_id: Table holding the child records.
            selected_record_ids: Child records to copy. Ids not found in the
                table are skipped silently.
            main_table_forward_field_id: Forward link field on the main table.
            target_anchor_record_id: Main-table record the copies should belong to.

        Returns:
            CopyResult: success flag, number of records written, error message
                on failure, new record ids and the verification diagnostic.
        """
        self._logger.info(
            "Copying %d records of %s to anchor %s via %s",
            len(selected_record_ids or []),
            child_table_id,
            target_anchor_record_id,
            main_table_forward_field_id,
        )
        try:
            return await self._copy(
                child_table_id,
                selected_record_ids,
                main_table_forward_field_id,
                target_anchor_record_id,
            )
        except DuplexCopyException as e:
            self._logger.error("Copy failed: %s", e)
            return CopyResult.failure(str(e))
        except Exception as e:
            self._logger.error("Copy failed unexpectedly: %s", e, exc_info=True)
            return CopyResult.failure(str(e) or "copy failed")

    async def _copy(
        self,
        child_table_id: str,
        selected_record_ids: list[str],
        main_table_forward_field_id: str,
        target_anchor_record_id: str,
    ) -> CopyResult:
        if not selected_record_ids:
            raise NoRecordsSelected()

        fields = await self.service.get_field_metadata(child_table_id)
        back_field = resolve_back_field(fields, main_table_forward_field_id)
        main_table_id = back_field.linked_table_id()

        anchor_text = await self._anchor_text(main_table_id, target_anchor_record_id)
        records = await self._selected_records(child_table_id, selected_record_ids)

        specs = plan(
            records,
            fields,
            back_field.id,
            target_anchor_record_id,
            main_table_id,
            anchor_text,
        )

        anchor = None
        if main_table_id:
            anchor = AnchorRef(main_table_id, main_table_forward_field_id, target_anchor_record_id)
        else:
            self._logger.warning("Back-link field %s names no table; skipping verification", back_field.id)

        outcome = await self.executor.execute(child_table_id, specs, anchor)
        return CopyResult(
            success=True,
            count=len(specs),
            record_ids=outcome.record_ids,
            verification=outcome.verification,
        )

    async def _anchor_text(self, main_table_id: str | None, anchor_record_id: str) -> str:
        """Primary-field text of the anchor, or "" when it cannot be read."""
        if not main_table_id:
            return ""
        try:
            fields = await self.service.get_field_metadata(main_table_id)
            primary = primary_field(fields)
            if primary is None:
                return ""
            value = await self.service.get_cell_value(main_table_id, primary.id, anchor_record_id)
        except Exception as e:
            self._logger.warning("Could not read primary value of %s: %s", anchor_record_id, e)
            return ""
        return cell_text(value)

    async def _selected_records(self, table_id: str, selected_record_ids: list[str]) -> list[Record]:
        """Read the table and return the selected records in selection order."""
        page_size = max(self.page_size, len(selected_record_ids))
        by_id = {r.record_id: r for r in await self.service.get_records(table_id, page_size)}

        selected = [by_id[rid] for rid in dict.fromkeys(selected_record_ids) if rid in by_id]
        missing = len(set(selected_record_ids)) - len(selected)
        if missing:
            self._logger.debug("%d selected records were not found in %s", missing, table_id)
        self._logger.info("Copying %d of %d selected records", len(selected), len(selected_record_ids))
        return selected


async def copy_linked_records(
    service: TableService,
    child_table_id: str,
    selected_record_ids: list[str],
    main_table_forward_field_id: str,
    target_anchor_record_id: str,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> CopyResult:
    """Shortcut for LinkedRecordCopier(service).copy_linked_records(...)."""
    copier = LinkedRecordCopier(service, page_size=page_size)
    return await copier.copy_linked_records(
        child_table_id,
        selected_record_ids,
        main_table_forward_field_id,
        target_anchor_record_id,
    )
