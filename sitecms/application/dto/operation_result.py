"""Result envelope returned by every coordinator operation."""
from dataclasses import dataclass, field
from typing import Generic, List, Optional, TypeVar

from sitecms.domain.errors import SyncError

T = TypeVar("T")


@dataclass
class OperationResult(Generic[T]):
    """``{data, error}`` pair handed back to the API layer.

    ``warnings`` lists secondary fan-out failures that were absorbed; the
    caller may show them as a soft notice but the operation itself succeeded.
    """
    data: Optional[T] = None
    error: Optional[SyncError] = None
    warnings: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, data: T, warnings: Optional[List[str]] = None) -> "OperationResult[T]":
        return cls(data=data, warnings=list(warnings or []))

    @classmethod
    def failure(cls, error: SyncError, data: Optional[T] = None) -> "OperationResult[T]":
        return cls(data=data, error=error)
