"""Result types returned by copy operations."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class AnchorRef:
    """The main-table cell a batch of copies is relinked to.

    Attributes:
        main_table_id: Table holding the anchor record.
        forward_field_id: Forward link field on the main table.
        record_id: The anchor record.
    """

    main_table_id: str
    forward_field_id: str
    record_id: str


@dataclass
class VerificationResult:
    """Outcome of re-reading the anchor after a write.

    A failed verification is a diagnostic only: the records were written.
    """

    verified: bool
    anchor_record_id: str
    expected_record_id: str
    observed_record_ids: list[str] = field(default_factory=list)
    error: str | None = None

    def __str__(self) -> str:
        if self.verified:
            return f"anchor {self.anchor_record_id} links {self.expected_record_id}"
        if self.error:
            return f"could not verify anchor {self.anchor_record_id}: {self.error}"
        return (
            f"anchor {self.anchor_record_id} does not link {self.expected_record_id} "
            f"(observed {len(self.observed_record_ids)} links)"
        )


@dataclass
class ExecutionOutcome:
    """Identifiers created by a batch insert, plus the verification, if any ran."""

    record_ids: list[str] = field(default_factory=list)
    verification: VerificationResult | None = None


@dataclass
class CopyResult:
    """Uniform result of a copy operation. Copy operations never raise."""

    success: bool
    count: int = 0
    error: str | None = None
    record_ids: list[str] = field(default_factory=list)
    verification: VerificationResult | None = None

    @classmethod
    def failure(cls, error: str) -> "CopyResult":
        return cls(success=False, count=0, error=error)

    def to_dict(self) -> dict[str, Any]:
        """Return the result in the caller-facing ``{success, count, error?}`` shape."""
        result: dict[str, Any] = {"success": self.success, "count": self.count}
        if self.error is not None:
            result["error"] = self.error
        return result
