"""Timestamp helpers for the naive UTC ``DateTime`` columns."""
from datetime import datetime, timezone


def utc_now() -> datetime:
    """Current UTC time without tzinfo, as stored in the database."""
    return datetime.now(timezone.utc).replace(tzinfo=None)
