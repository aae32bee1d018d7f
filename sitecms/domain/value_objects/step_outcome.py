"""Tagged outcome of one step of a sync flow - immutable."""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from sitecms.domain.errors import ErrorKind, SyncError


class OutcomeTag(str, Enum):
    OK = "ok"
    SOFT_FAIL = "soft_fail"
    HARD_FAIL = "hard_fail"


@dataclass(frozen=True)
class StepOutcome:
    """Result of a single step.

    SOFT_FAIL is recorded as a warning and the flow continues.
    HARD_FAIL moves the flow to FAILED.
    """
    tag: OutcomeTag
    value: Any = None
    error: Optional[SyncError] = None

    @classmethod
    def ok(cls, value: Any = None) -> "StepOutcome":
        return cls(OutcomeTag.OK, value=value)

    @classmethod
    def soft_fail(cls, kind: ErrorKind, message: str) -> "StepOutcome":
        return cls(OutcomeTag.SOFT_FAIL, error=SyncError(kind, message))

    @classmethod
    def hard_fail(cls, kind: ErrorKind, message: str) -> "StepOutcome":
        return cls(OutcomeTag.HARD_FAIL, error=SyncError(kind, message))

    @property
    def is_ok(self) -> bool:
        return self.tag is OutcomeTag.OK

    @property
    def is_soft_fail(self) -> bool:
        return self.tag is OutcomeTag.SOFT_FAIL

    @property
    def is_hard_fail(self) -> bool:
        return self.tag is OutcomeTag.HARD_FAIL
