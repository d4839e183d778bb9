"""
Enumeration classes used throughout the duplex_copy package.
"""

from enum import Enum, IntEnum


class BaseStrEnum(str, Enum):
    """Base class for string enums in Python 3.10"""
    pass


class FieldType(IntEnum):
    """Numeric field type tags used by the table store.

    The values match the tags the store reports in field metadata, so a raw
    integer from the wire compares equal to the member.
    """
    text = 1
    number = 2
    single_select = 3
    multi_select = 4
    date_time = 5
    checkbox = 7
    user = 11
    phone = 13
    url = 15
    attachment = 17
    single_link = 18
    lookup = 19
    formula = 20
    duplex_link = 21
    created_time = 1001
    modified_time = 1002
    created_user = 1003
    modified_user = 1004
    auto_number = 1005
    email = 99005


class LinkCellFormat(BaseStrEnum):
    """Shapes an in-memory store can emit when a link cell is read.

    Attributes:
        object: ``{"recordIds": [...], "tableId": ..., "text": ...}``
        ids: ``["rec1", "rec2"]``
        objects: ``[{"record_id": "rec1", "text": ...}, ...]``
    """
    object = "object"
    ids = "ids"
    objects = "objects"
