"""Writing planned copies and checking that the store linked them.

The write and the check are independent steps. The store is expected to
mirror a new back-link value into the anchor's forward field; after writing,
the executor reads that forward cell back and looks for the first new record.
A missing record is reported and logged, never raised: the records already
exist at that point and nothing can be rolled back.
"""

from __future__ import annotations

from duplex_copy.duplication.results import AnchorRef, ExecutionOutcome, VerificationResult
from duplex_copy.core.exceptions import WriteFailure
from duplex_copy.core.logging_config import LoggerMixin
from duplex_copy.core.models import NewRecordSpec
from duplex_copy.link.codec import decode, record_ids_of
from duplex_copy.protocols.table_service import TableService


class DuplicationExecutor(LoggerMixin):
    """Batch-inserts planned records and verifies the reverse association.

    Args:
        service: Table store to write through.

    Example:
        >>> executor = DuplicationExecutor(service)
        >>> outcome = await executor.execute("tblChild", specs, AnchorRef("tblMain", "fldItems", "recM2"))
        >>> outcome.record_ids
        ['recNew1', 'recNew2']
    """

    def __init__(self, service: TableService):
        self.service = service

    async def execute(
        self, table_id: str, specs: list[NewRecordSpec], anchor: AnchorRef | None = None
    ) -> ExecutionOutcome:
        """Insert the specs and, when an anchor is given, verify the link.

        Args:
            table_id: Table to insert into.
            specs: Planned records. Nothing is written when empty.
            anchor: Forward cell to check after the write.

        Returns:
            ExecutionOutcome: New record ids and the verification result.

        Raises:
            WriteFailure: If the store fails the insert. The insert is not retried.
        """
        if not specs:
            self._logger.info("Nothing to write to %s", table_id)
            return ExecutionOutcome()

        try:
            inserted = await self.service.add_records(table_id, specs)
        except WriteFailure:
            raise
        except Exception as e:
            raise WriteFailure(table_id, e) from e

        new_record_ids = record_ids_of(inserted)
        self._logger.info("Wrote %d records to %s: %s", len(new_record_ids), table_id, new_record_ids)

        verification = None
        if anchor is not None and new_record_ids:
            verification = await self.verify(anchor, new_record_ids)
        return ExecutionOutcome(record_ids=new_record_ids, verification=verification)

    async def verify(self, anchor: AnchorRef, new_record_ids: list[str]) -> VerificationResult:
        """Check that the anchor's forward cell lists the first new record.

        Failures to read the cell are reported in the result rather than raised.
        """
        expected = new_record_ids[0]
        try:
            raw = await self.service.get_cell_value(anchor.main_table_id, anchor.forward_field_id, anchor.record_id)
        except Exception as e:
            self._logger.warning("Could not verify anchor %s: %s", anchor.record_id, e)
            return VerificationResult(
                verified=False,
                anchor_record_id=anchor.record_id,
                expected_record_id=expected,
                error=str(e),
            )

        observed = decode(raw).record_ids
        result = VerificationResult(
            verified=expected in observed,
            anchor_record_id=anchor.record_id,
            expected_record_id=expected,
            observed_record_ids=observed,
        )
        if result.verified:
            self._logger.info("Verified: %s", result)
        else:
            self._logger.warning("Verification mismatch: %s; forward cell is %r", result, raw)
        return result
