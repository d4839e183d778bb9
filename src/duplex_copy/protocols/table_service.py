"""The TableService protocol: the store operations the copy engine consumes.

Any object providing these four coroutines can back the engine. The package
ships an in-memory implementation (duplex_copy.service.memory) and a REST
implementation (duplex_copy.service.bitable).
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from duplex_copy.core.models import FieldMeta, NewRecordSpec, Record


@runtime_checkable
class TableService(Protocol):
    """Protocol for table stores the copy engine can read from and write to.

    Records are keyed by field id in both directions. Errors are raised as
    DuplexCopyException subclasses.
    """

    async def get_field_metadata(self, table_id: str) -> list[FieldMeta]:
        """Return the table's fields in column order."""
        ...

    async def get_records(self, table_id: str, page_size: int) -> list[Record]:
        """Return up to page_size records of the table."""
        ...

    async def get_cell_value(self, table_id: str, field_id: str, record_id: str) -> Any:
        """Return one raw cell, in whatever shape the store uses, or None."""
        ...

    async def add_records(self, table_id: str, specs: list[NewRecordSpec]) -> list[str]:
        """Insert all specs in one batch and return the new ids in spec order."""
        ...
