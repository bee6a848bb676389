#!/usr/bin/env python3
"""
Rate Limiting Models
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class RateLimiterConfig:
    """
    Token bucket configuration.

    Attributes:
        requests_per_second: Refill rate of the bucket
        burst_size: Bucket capacity (requests allowed back-to-back)
        wait_timeout: Optional cap in seconds on a single wait
    """
    requests_per_second: float
    burst_size: int = 1
    wait_timeout: Optional[float] = None

    def __post_init__(self):
        """Validate limiter settings."""
        if self.requests_per_second <= 0:
            raise ValueError("requests_per_second must be positive")
        if self.burst_size < 1:
            raise ValueError("burst_size must be at least 1")
        if self.wait_timeout is not None and self.wait_timeout <= 0:
            raise ValueError("wait_timeout must be positive or None")
