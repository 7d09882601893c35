"""Cooperative cancellation for long-running tree operations."""

from __future__ import annotations

import threading

from drivefs.errors import OperationCancelledError

__all__ = ["CancelToken", "check_cancelled"]


class CancelToken:
    """Caller-owned cancellation signal.

    Operations poll the token at their start and between remote round-trips,
    so a cancelled operation stops at the next checkpoint. The token can be
    triggered from any thread.
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        """Request cancellation."""
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        """Raise OperationCancelledError if cancellation was requested."""
        if self._event.is_set():
            raise OperationCancelledError("Operation was cancelled.")


def check_cancelled(token: CancelToken | None) -> None:
    """Raise if ``token`` is set; a missing token never cancels."""
    if token is not None:
        token.raise_if_cancelled()
