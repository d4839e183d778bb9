from duplex_copy.protocols.table_service import TableService

__all__ = ["TableService"]
