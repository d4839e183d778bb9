"""TableService implementations."""

from duplex_copy.service.bitable import BitableTableService
from duplex_copy.service.memory import InMemoryTableService

__all__ = ["BitableTableService", "InMemoryTableService"]
