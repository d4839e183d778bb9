"""Shared Pydantic configuration for duplex_copy models.

The store reports metadata with two spellings (camelCase from the client SDK,
snake_case from the REST API). Models use validation aliases for both and
these configs let callers populate them by field name as well.
"""

from pydantic import ConfigDict

# Standard configuration for duplex_copy Pydantic models and validate_call decorators.
VALIDATION_CONFIG = ConfigDict(
    arbitrary_types_allowed=True,
    validate_default=True,
    populate_by_name=True,
    # Store payloads carry many attributes the engine does not model
    extra="ignore",
)

# Configuration for models that should be strict about extra fields
STRICT_VALIDATION_CONFIG = ConfigDict(
    arbitrary_types_allowed=True,
    validate_default=True,
    populate_by_name=True,
    extra="forbid",
)

__all__ = [
    "VALIDATION_CONFIG",
    "STRICT_VALIDATION_CONFIG",
]
