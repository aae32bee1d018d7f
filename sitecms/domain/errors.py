"""Error taxonomy shared by the record store and the sync coordinator.

Repositories raise ``RecordStoreError`` subclasses. The coordinator never lets
them escape: it turns them into ``SyncError`` values carried on an
``OperationResult``.
"""
from dataclasses import dataclass
from enum import Enum


class ErrorKind(str, Enum):
    """Kinds of failure a coordinator operation can report."""
    DUPLICATE_CITY = "duplicate_city"
    DUPLICATE_COUNTRY = "duplicate_country"
    NOT_FOUND = "not_found"
    PERSISTENCE_ERROR = "persistence_error"
    PARTIAL_SYNC_FAILURE = "partial_sync_failure"
    INVALID_INPUT = "invalid_input"
    # Absorbed inside the coordinator, never placed on a result
    REVALIDATION_IGNORED = "revalidation_ignored"


@dataclass(frozen=True)
class SyncError:
    """Error value returned to callers instead of an exception."""
    kind: ErrorKind
    message: str

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.message}"


class RecordStoreError(Exception):
    """Raised by a repository when a read or write cannot be completed."""


class RecordNotFoundError(RecordStoreError):
    """Raised when an update or delete targets a record that does not exist."""


class DuplicateRecordError(RecordStoreError):
    """Raised when an insert or update would break a uniqueness constraint."""
