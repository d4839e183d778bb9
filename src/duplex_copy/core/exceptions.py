"""
Custom exceptions used throughout the duplex_copy package.

All errors raised by the library derive from DuplexCopyException. Only the
operation facade converts them into a result object; everything below it
raises.
"""


class DuplexCopyException(Exception):
    """Exception class specific to the duplex_copy module.

    Args:
        msg (str): Optional message for the exception.
    """

    def __init__(self, msg=""):
        super().__init__(msg)
        self._msg = msg


class DuplexCopyConfigurationError(DuplexCopyException):
    """Raised when the library is configured with unusable settings."""


class NoRecordsSelected(DuplexCopyException):
    """Raised when a copy is requested with an empty selection."""

    def __init__(self, msg="no records selected"):
        super().__init__(msg)


class BackLinkNotFound(DuplexCopyException):
    """Raised when no field on the child table pairs with the forward field.

    Args:
        forward_field_id: Forward link field on the main table.
        candidates: Duplex-link field ids that were inspected.
    """

    def __init__(self, forward_field_id: str, candidates: list[str] | None = None):
        self.forward_field_id = forward_field_id
        self.candidates = candidates or []
        super().__init__(
            f"back-link field not found for forward field {forward_field_id}; "
            "check the link field configuration"
        )


class WriteFailure(DuplexCopyException):
    """Raised when the store rejects or cannot perform a batch insert."""

    def __init__(self, table_id: str, cause: Exception | None = None):
        self.table_id = table_id
        self.cause = cause
        detail = f": {cause}" if cause else ""
        super().__init__(f"failed to add records to table {table_id}{detail}")


class TableServiceError(DuplexCopyException):
    """Raised when the table store answers with an error.

    Args:
        msg: Error text reported by the store.
        code: Store-specific error code, if any.
    """

    def __init__(self, msg="", code: int | None = None):
        super().__init__(msg)
        self.code = code


class DuplexCopyNotFoundError(DuplexCopyException):
    """Raised when a table, field or record does not exist in the store."""
