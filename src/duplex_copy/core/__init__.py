from duplex_copy.core.config import DuplexCopyConfig
from duplex_copy.core.constants import COMPUTED_FIELD_TYPES, DEFAULT_PAGE_SIZE
from duplex_copy.core.enums import FieldType, LinkCellFormat
from duplex_copy.core.exceptions import (
    BackLinkNotFound,
    DuplexCopyConfigurationError,
    DuplexCopyException,
    DuplexCopyNotFoundError,
    NoRecordsSelected,
    TableServiceError,
    WriteFailure,
)
from duplex_copy.core.models import FieldMeta, FieldProperty, NewRecordSpec, Record, primary_field

__all__ = [
    "DuplexCopyConfig",
    "COMPUTED_FIELD_TYPES",
    "DEFAULT_PAGE_SIZE",
    "FieldType",
    "LinkCellFormat",
    "BackLinkNotFound",
    "DuplexCopyConfigurationError",
    "DuplexCopyException",
    "DuplexCopyNotFoundError",
    "NoRecordsSelected",
    "TableServiceError",
    "WriteFailure",
    "FieldMeta",
    "FieldProperty",
    "NewRecordSpec",
    "Record",
    "primary_field",
]
