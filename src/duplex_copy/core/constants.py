"""
Constants used throughout the duplex_copy package.
"""

from duplex_copy.core.enums import FieldType

# Page size requested when pulling a child table in one batch
DEFAULT_PAGE_SIZE = 5000

# The REST API caps both record listing and batch_create at this many rows
REST_MAX_PAGE_SIZE = 500

DEFAULT_BASE_URL = "https://open.feishu.cn/open-apis"

# Values the store maintains itself and rejects on insert
COMPUTED_FIELD_TYPES = frozenset(
    {
        FieldType.formula,
        FieldType.lookup,
        FieldType.auto_number,
        FieldType.modified_time,
        FieldType.modified_user,
        FieldType.created_time,
        FieldType.created_user,
    }
)

LINK_FIELD_TYPES = frozenset({FieldType.single_link, FieldType.duplex_link})

# Keys under which a link cell may carry its identifiers
RECORD_ID_KEYS = ("record_id", "recordId", "id")
RECORD_ID_LIST_KEYS = ("recordIds", "record_ids", "link_record_ids")
TABLE_ID_KEYS = ("tableId", "table_id")
