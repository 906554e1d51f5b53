"""
CancellationToken -- cooperative cancellation for long aggregations.

A caller (request handler, worker) holds the token and may ``cancel()`` it
from another thread.  Services call ``raise_if_cancelled()`` between units of
work; the façade turns the resulting ``OperationCancelledError`` into a
``CANCELLED`` result so no partially aggregated statement ever escapes.
"""

import threading

from ledger_kernel.exceptions import OperationCancelledError


class CancellationToken:
    """Thread-safe cancellation flag backed by ``threading.Event``."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self, operation: str) -> None:
        """
        Raises:
            OperationCancelledError: If cancel() has been called.
        """
        if self._event.is_set():
            raise OperationCancelledError(operation)


def check_cancelled(token: CancellationToken | None, operation: str) -> None:
    """raise_if_cancelled() that tolerates a missing token."""
    if token is not None:
        token.raise_if_cancelled(operation)
