"""Revalidation port - how the application tells the website a page is stale."""
from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class RevalidationReceipt:
    """Acknowledgement that a revalidation was dispatched.

    ``success`` is always True: delivery happens in the background and its
    outcome is never reported back.
    """
    path: str
    success: bool = True


class RevalidationPort(Protocol):
    def notify(self, path: str) -> RevalidationReceipt:
        """Dispatch a revalidation for ``path`` without waiting for it."""
