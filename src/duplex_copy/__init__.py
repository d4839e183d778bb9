from duplex_copy.core import (
    BackLinkNotFound,
    DuplexCopyConfig,
    DuplexCopyException,
    FieldMeta,
    FieldType,
    NewRecordSpec,
    NoRecordsSelected,
    Record,
    TableServiceError,
    WriteFailure,
)
from duplex_copy.duplication import (
    CopyResult,
    LinkedRecordCopier,
    VerificationResult,
    copy_linked_records,
    copy_records,
    is_field_copyable,
)
from duplex_copy.link import CanonicalLinkValue, decode, encode, get_linked_record_ids, list_link_fields
from duplex_copy.protocols import TableService
from duplex_copy.service import BitableTableService, InMemoryTableService

__all__ = [
    "BackLinkNotFound",
    "DuplexCopyConfig",
    "DuplexCopyException",
    "FieldMeta",
    "FieldType",
    "NewRecordSpec",
    "NoRecordsSelected",
    "Record",
    "TableServiceError",
    "WriteFailure",
    "CopyResult",
    "LinkedRecordCopier",
    "VerificationResult",
    "copy_linked_records",
    "copy_records",
    "is_field_copyable",
    "CanonicalLinkValue",
    "decode",
    "encode",
    "get_linked_record_ids",
    "list_link_fields",
    "TableService",
    "BitableTableService",
    "InMemoryTableService",
]
