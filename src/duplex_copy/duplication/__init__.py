"""Record copying: planning, writing, verification and the operation facades."""

from duplex_copy.duplication.display import cell_text
from duplex_copy.duplication.executor import DuplicationExecutor
from duplex_copy.duplication.facade import LinkedRecordCopier, copy_linked_records
from duplex_copy.duplication.field_filter import filter_copyable_fields, is_field_copyable
from duplex_copy.duplication.planner import plan, plan_record, relink_value
from duplex_copy.duplication.projection import copy_records, field_mapping
from duplex_copy.duplication.results import AnchorRef, CopyResult, ExecutionOutcome, VerificationResult

__all__ = [
    "cell_text",
    "DuplicationExecutor",
    "LinkedRecordCopier",
    "copy_linked_records",
    "filter_copyable_fields",
    "is_field_copyable",
    "plan",
    "plan_record",
    "relink_value",
    "copy_records",
    "field_mapping",
    "AnchorRef",
    "CopyResult",
    "ExecutionOutcome",
    "VerificationResult",
]
