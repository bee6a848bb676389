#!/usr/bin/env python3
"""
Rate Limiter Module

Thread-safe token bucket gating outbound request issuance.
"""

import logging
import threading
import time
from typing import Callable, Optional

from ..models.ratelimit import RateLimiterConfig
from ..errors import DeadlineExceededError
from .context import Context

logger = logging.getLogger(__name__)


class RateLimiter:
    """
    Token bucket limiter.

    The bucket starts full with ``burst_size`` tokens and refills at
    ``requests_per_second`` tokens per second, never above its capacity.
    Each admitted request consumes one token. A caller that finds the
    bucket empty reserves the next free slot under the lock and then sleeps
    outside it, so queued callers are admitted in call order and each one
    can be cancelled while it waits.
    """

    def __init__(self, config: RateLimiterConfig, clock: Callable[[], float] = time.monotonic):
        """
        Initialize the limiter.

        Args:
            config: Rate and burst settings
            clock: Monotonic time source, in seconds
        """
        self._config = config
        self._capacity = float(config.burst_size)
        self._tokens = float(config.burst_size)
        self._refill_rate = float(config.requests_per_second)
        self._clock = clock
        self._last_refill = clock()
        self._reservations = 0
        self._lock = threading.Lock()

        logger.debug(
            f"RateLimiter initialized (rate={self._refill_rate}/s, burst={config.burst_size})"
        )

    @property
    def config(self) -> RateLimiterConfig:
        return self._config

    @property
    def tokens(self) -> float:
        """Tokens free for a new caller, after a lazy refill."""
        with self._lock:
            self._refill()
            return max(0.0, self._tokens)

    def _refill(self) -> None:
        # Caller must hold self._lock
        now = self._clock()
        elapsed = max(0.0, now - self._last_refill)
        self._tokens = min(self._capacity, self._tokens + elapsed * self._refill_rate)
        self._last_refill = now

    def _time_until_token(self) -> float:
        # Caller must hold self._lock
        if self._tokens >= 1:
            return 0.0
        return (1 - self._tokens) / self._refill_rate

    def wait(self, ctx: Optional[Context] = None) -> None:
        """
        Block until a token is available, then consume it.

        Args:
            ctx: Optional cancellation context

        Raises:
            RequestCancelledError: If the context is cancelled (or its
                deadline passes) before a token accrues
            TimeoutError: If the configured wait_timeout is shorter than
                the required wait
        """
        ctx = ctx or Context.background()
        with self._lock:
            self._refill()
            wait_time = self._time_until_token()
            timeout = self._config.wait_timeout
            if timeout is not None and wait_time > timeout:
                raise TimeoutError(
                    f"rate limiter wait of {wait_time:.3f}s exceeds timeout of {timeout:.3f}s"
                )
            # Reserve the slot now; a negative balance counts queued callers
            self._tokens -= 1
            self._reservations += 1
            ticket = self._reservations

        if wait_time <= 0:
            return

        logger.debug(f"Rate limiter waiting {wait_time:.3f}s for a token")
        if not ctx.sleep(wait_time):
            self._release(ticket)
            raise ctx.error() or DeadlineExceededError()

    def _release(self, ticket: int) -> None:
        with self._lock:
            # Later callers already sleep on this slot; only the newest can hand it back
            if ticket != self._reservations:
                return
            self._refill()
            self._tokens = min(self._capacity, self._tokens + 1)

    def get_wait_time(self) -> float:
        """Seconds until a token is available, without consuming one."""
        with self._lock:
            self._refill()
            return self._time_until_token()
