"""
API client management module.

This module contains the AI.YOU client, its request pipeline (rate
limiting, authentication, retry) and the streaming response reader.
"""

from .audio import validate_audio_file
from .auth import Authenticator, BearerTokenAuthenticator, JWTAuthenticator
from .chat import collect_stream, requires_streaming
from .client import Client
from .context import Context
from .ratelimit import RateLimiter
from .streaming import StreamReader
from .utils import (
    classify_error,
    compute_backoff,
    decode_response,
    extract_error_message,
    is_retryable_error,
    parse_retry_after,
    retry_operation,
)

__all__ = [
    # Client
    "Client",
    "Context",
    # Authentication
    "Authenticator",
    "JWTAuthenticator",
    "BearerTokenAuthenticator",
    # Rate limiting and retry
    "RateLimiter",
    "retry_operation",
    "compute_backoff",
    "classify_error",
    "is_retryable_error",
    "parse_retry_after",
    # Responses
    "StreamReader",
    "collect_stream",
    "requires_streaming",
    "decode_response",
    "extract_error_message",
    # Audio
    "validate_audio_file",
]
