#!/usr/bin/env python3
"""
Request Context Module

Thread-safe cancellation token passed to every request-issuing operation.
Rate limiter waits and retry backoff sleeps block on the context's event,
so cancelling it from another thread wakes them immediately.
"""

import logging
import threading
import time
from typing import Optional

from ..errors import DeadlineExceededError, RequestCancelledError

logger = logging.getLogger(__name__)


class Context:
    """
    Cancellation and deadline token for a logical request.

    A context is cancelled either explicitly with cancel() or implicitly when
    its deadline passes. Contexts may be shared between threads.
    """

    def __init__(self, deadline: Optional[float] = None):
        """
        Initialize a context.

        Args:
            deadline: Optional absolute time.monotonic() value after which
                the context counts as expired
        """
        self._done = threading.Event()
        self._deadline = deadline
        self._reason: Optional[str] = None
        self._lock = threading.Lock()

    @classmethod
    def background(cls) -> "Context":
        """Return a context that is never cancelled unless asked to."""
        return cls()

    @classmethod
    def with_timeout(cls, seconds: float) -> "Context":
        """Return a context that expires after the given number of seconds."""
        return cls(deadline=time.monotonic() + seconds)

    @property
    def deadline(self) -> Optional[float]:
        return self._deadline

    def cancel(self, reason: str = "context canceled") -> None:
        """Cancel the context. Idempotent."""
        with self._lock:
            if self._done.is_set():
                return
            self._reason = reason
            self._done.set()
        logger.debug(f"Context cancelled: {reason}")

    def remaining(self) -> Optional[float]:
        """Seconds left before the deadline, or None without a deadline."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    def is_cancelled(self) -> bool:
        """Check whether the context was cancelled or its deadline passed."""
        if self._done.is_set():
            return True
        return self._deadline is not None and time.monotonic() >= self._deadline

    def error(self) -> Optional[RequestCancelledError]:
        """Return the cancellation cause, or None while the context is live."""
        if self._done.is_set():
            with self._lock:
                return RequestCancelledError(self._reason or "context canceled")
        if self._deadline is not None and time.monotonic() >= self._deadline:
            return DeadlineExceededError()
        return None

    def raise_if_cancelled(self) -> None:
        err = self.error()
        if err is not None:
            raise err

    def sleep(self, seconds: float) -> bool:
        """
        Sleep for the given duration unless the context ends first.

        Args:
            seconds: Duration to sleep

        Returns:
            True if the full duration elapsed, False if the context was
            cancelled or its deadline passed before that
        """
        if self.is_cancelled():
            return False
        timeout = max(0.0, seconds)
        remaining = self.remaining()
        if remaining is not None and remaining < timeout:
            # Deadline comes first: wait until then and report expiry
            self._done.wait(remaining)
            return False
        return not self._done.wait(timeout)
