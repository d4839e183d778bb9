"""Link cell handling: the value codec and the duplex field pair resolver."""

from duplex_copy.link.codec import CanonicalLinkValue, decode, encode, record_ids_of
from duplex_copy.link.resolver import get_linked_record_ids, list_link_fields, resolve_back_field

__all__ = [
    "CanonicalLinkValue",
    "decode",
    "encode",
    "record_ids_of",
    "get_linked_record_ids",
    "list_link_fields",
    "resolve_back_field",
]
