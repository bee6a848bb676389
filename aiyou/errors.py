"""
Error types raised by the AI.YOU client.

Every error carries an ErrorKind tag fixed at class level. The retry
executor only looks at that tag, never at the message text.
"""

from typing import Optional

from .constants import DEFAULT_RATE_LIMIT_RETRY_AFTER
from .models.errors import ErrorKind


class AiyouError(Exception):
    """Base class for all errors raised by the library."""

    kind: ErrorKind = ErrorKind.OTHER


class AuthenticationError(AiyouError):
    """Bad, missing or expired credential. Never retried."""

    kind = ErrorKind.AUTHENTICATION

    def __init__(self, message: str):
        super().__init__(f"Authentication error: {message}")
        self.message = message


class NetworkError(AiyouError):
    """Transport-level failure while talking to the API."""

    kind = ErrorKind.NETWORK

    def __init__(self, cause: BaseException, message: Optional[str] = None):
        detail = message or str(cause) or type(cause).__name__
        super().__init__(f"Network error: {detail}")
        self.cause = cause


class RateLimitError(AiyouError):
    """Client-side or server-side throttling.

    ``retry_after`` is the number of seconds to wait before resubmitting.
    ``is_client_side`` tells whether the local rate limiter refused the
    request or the server answered 429.
    """

    kind = ErrorKind.RATE_LIMIT

    def __init__(self, retry_after: int = DEFAULT_RATE_LIMIT_RETRY_AFTER, is_client_side: bool = False):
        self.retry_after = retry_after
        self.is_client_side = is_client_side
        source = "client" if is_client_side else "server"
        super().__init__(f"{source}-side rate limit exceeded. Retry after {retry_after} seconds")


class APIError(AiyouError):
    """Non-2xx application-level response."""

    kind = ErrorKind.API

    def __init__(self, status_code: int, message: str):
        super().__init__(f"API error: {status_code} - {message}")
        self.status_code = status_code
        self.message = message


class StreamDecodeError(AiyouError):
    """A streamed fragment could not be decoded as JSON."""

    def __init__(self, line: str, cause: Exception):
        super().__init__(f"failed to decode stream chunk: {cause}")
        self.line = line
        self.cause = cause


class ResponseDecodeError(AiyouError):
    """A successful response body did not match the expected shape."""


class ValidationError(AiyouError):
    """Arguments rejected before any request is sent."""


class RequestCancelledError(AiyouError):
    """The request context was cancelled."""

    def __init__(self, message: str = "context canceled"):
        super().__init__(message)


class DeadlineExceededError(RequestCancelledError):
    """The request context deadline passed."""

    def __init__(self, message: str = "context deadline exceeded"):
        super().__init__(message)
