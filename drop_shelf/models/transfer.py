"""Transfer-related models."""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field

from .common import FileDescriptor


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    DESTINATION_UNCREATABLE = "destination_uncreatable"
    COPY_FAILED = "copy_failed"


class TransferOutcome(BaseModel):
    descriptor: FileDescriptor
    success: bool = False
    final_path: str = ""
    error_kind: Optional[ErrorKind] = None
    error: Optional[str] = None


class TransferSummary(BaseModel):
    successes: int = 0
    failures: int = 0
    destination: str = ""
    outcomes: list[TransferOutcome] = Field(default_factory=list)

    @classmethod
    def from_outcomes(cls, destination: str, outcomes: list[TransferOutcome]) -> "TransferSummary":
        successes = sum(1 for o in outcomes if o.success)
        return cls(
            successes=successes,
            failures=len(outcomes) - successes,
            destination=destination,
            outcomes=outcomes,
        )
