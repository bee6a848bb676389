#!/usr/bin/env python3
"""
Error Classification Models

This module contains the error-kind tag attached to every library error
and the classification record the retry executor uses to decide whether
a failed operation is attempted again.
"""

from dataclasses import dataclass, asdict
from enum import Enum
from typing import Optional, Dict, Any


class ErrorKind(str, Enum):
    """Kind tag carried by every error raised by the client."""

    NETWORK = "network"
    RATE_LIMIT = "rate_limit"
    AUTHENTICATION = "authentication"
    API = "api"
    OTHER = "other"


# Kinds the retry executor is allowed to retry
RETRYABLE_KINDS = frozenset({ErrorKind.NETWORK, ErrorKind.RATE_LIMIT})


@dataclass
class ErrorClassification:
    """
    Classification of an error for retry strategy.

    Attributes:
        kind: Kind tag of the error
        retry_after: Retry-After estimate in seconds (None if not known)
        should_retry: Whether this error kind should be retried
    """
    kind: ErrorKind
    retry_after: Optional[int]
    should_retry: bool

    def __post_init__(self):
        """Validate error classification."""
        if not isinstance(self.kind, ErrorKind):
            self.kind = ErrorKind(self.kind)
        if self.retry_after is not None and self.retry_after < 0:
            raise ValueError("retry_after must be non-negative")

    @classmethod
    def for_kind(cls, kind: ErrorKind, retry_after: Optional[int] = None) -> "ErrorClassification":
        """Build a classification whose retry flag follows the kind tag."""
        return cls(kind=kind, retry_after=retry_after, should_retry=kind in RETRYABLE_KINDS)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        data = asdict(self)
        data["kind"] = self.kind.value
        return data
