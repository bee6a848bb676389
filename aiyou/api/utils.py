"""
API utilities module.

This module provides utility functions for API operations including
error classification, retry logic, and delay calculations.

Retry eligibility is decided purely on the ErrorKind tag of the
classified error:
- network and rate_limit errors are retried with exponential backoff
- authentication, api and other errors are surfaced immediately
"""

import logging
from typing import Callable, Iterable, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ..constants import DEFAULT_RATE_LIMIT_RETRY_AFTER
from ..errors import (
    AiyouError,
    APIError,
    DeadlineExceededError,
    NetworkError,
    RateLimitError,
    ResponseDecodeError,
)
from ..models.errors import ErrorClassification, ErrorKind
from ..utils.logging import log_retry_event
from .context import Context

logger = logging.getLogger(__name__)

T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)


def parse_retry_after(headers: Optional[httpx.Headers], default: int = DEFAULT_RATE_LIMIT_RETRY_AFTER) -> int:
    """Extract Retry-After seconds from response headers.

    HTTP-date values are not parsed and fall back to the default.
    """
    if not headers:
        return default
    value = headers.get("retry-after")
    if value is None:
        return default
    try:
        seconds = int(float(value.strip()))
    except ValueError:
        return default
    return max(0, seconds)


def classify_error(exc: BaseException) -> ErrorClassification:
    """Classify an error by its kind tag.

    Library errors carry their tag; bare transport failures from httpx or
    the OS are network errors; anything else is 'other'.
    """
    if isinstance(exc, AiyouError):
        retry_after = exc.retry_after if isinstance(exc, RateLimitError) else None
        return ErrorClassification.for_kind(exc.kind, retry_after)

    network_types = (httpx.TransportError, ConnectionError, TimeoutError, OSError)
    if isinstance(exc, network_types):
        return ErrorClassification.for_kind(ErrorKind.NETWORK)

    return ErrorClassification.for_kind(ErrorKind.OTHER)


def is_retryable_error(exc: BaseException) -> bool:
    """Determine if an error should trigger a retry."""
    return classify_error(exc).should_retry


def compute_backoff(attempt: int, initial_delay: float, max_delay: Optional[float] = None) -> float:
    """Delay before retry number ``attempt + 1``.

    The delay doubles on each attempt starting from ``initial_delay``.
    No jitter is applied. ``max_delay`` caps the result when given.
    """
    delay = initial_delay * (2 ** attempt)
    if max_delay is not None:
        delay = min(delay, max_delay)
    return delay


def retry_operation(
    operation: Callable[[], T],
    max_retries: int,
    initial_delay: float,
    ctx: Optional[Context] = None,
    max_delay: Optional[float] = None,
    operation_name: str = "operation",
) -> T:
    """
    Run an operation with bounded retries and exponential backoff.

    The operation is invoked up to ``max_retries + 1`` times. Retryable
    failures on a non-final attempt sleep for the current delay and then
    double it; the sleep is abandoned as soon as the context is cancelled.

    Args:
        operation: Zero-argument callable to run
        max_retries: Maximum number of retries after the first attempt
        initial_delay: Delay before the first retry, in seconds
        ctx: Optional cancellation context
        max_delay: Optional ceiling on any single delay
        operation_name: Label used in log messages

    Returns:
        The operation's return value

    Raises:
        The last error raised by the operation when it is not retryable or
        when all attempts are exhausted; the context's error when the
        context is cancelled during a backoff sleep.
    """
    ctx = ctx or Context.background()
    max_retries = max(0, max_retries)
    last_exception: Optional[BaseException] = None

    for attempt in range(max_retries + 1):  # +1 for initial attempt
        logger.debug(f"{operation_name}: attempt {attempt + 1} of {max_retries + 1}")
        try:
            result = operation()
        except Exception as e:  # noqa: BLE001 - re-raised below
            last_exception = e
        else:
            if attempt > 0:
                logger.debug(f"{operation_name}: succeeded on attempt {attempt + 1}")
            return result

        classification = classify_error(last_exception)
        if not classification.should_retry:
            logger.error(
                f"{operation_name}: non-retryable error ({classification.kind.value}): {last_exception}"
            )
            raise last_exception

        if attempt == max_retries:
            break

        delay = compute_backoff(attempt, initial_delay, max_delay)
        log_retry_event(operation_name, attempt + 1, classification, delay, logger=logger)
        if not ctx.sleep(delay):
            logger.warning(f"{operation_name}: context cancelled, stopping retries")
            raise (ctx.error() or DeadlineExceededError()) from last_exception

    logger.error(f"{operation_name}: max retries reached, last error: {last_exception}")
    raise last_exception


def extract_error_message(response: httpx.Response) -> str:
    """Pull a readable error message out of an error response body.

    Reads the body. Understands ``{"error": "..."}``,
    ``{"error": {"message": "..."}}`` and ``{"message": "..."}``; falls back
    to the raw text, then to the reason phrase.
    """
    try:
        response.read()
    except httpx.HTTPError as e:
        return f"failed to read error body: {e}"

    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        if isinstance(error, str) and error:
            return error
        if body.get("message"):
            return str(body["message"])

    text = response.text.strip()
    return text or response.reason_phrase or "unknown error"


def read_body(response: httpx.Response) -> bytes:
    """Read a response body, reporting a dropped connection as a network error."""
    try:
        return response.read()
    except httpx.TransportError as e:
        raise NetworkError(e, f"failed to read response body: {e}") from e


def decode_response(
    response: httpx.Response,
    model_cls: Type[M],
    what: str,
    ok_statuses: Optional[Iterable[int]] = None,
) -> M:
    """
    Decode a JSON response body into a payload model and close the response.

    Args:
        response: Unconsumed response returned by authenticated_request
        model_cls: Pydantic model to validate the body against
        what: Short description used in error messages
        ok_statuses: Statuses accepted as success (any 2xx when None)

    Raises:
        APIError: If the status is not one of ``ok_statuses``
        ResponseDecodeError: If the body does not match ``model_cls``
    """
    try:
        if ok_statuses is not None and response.status_code not in set(ok_statuses):
            raise APIError(response.status_code, f"unexpected status code: {response.status_code}")
        body = read_body(response)
        try:
            return model_cls.model_validate_json(body)
        except PydanticValidationError as e:
            logger.error(f"Failed to decode {what} response: {e}")
            raise ResponseDecodeError(f"failed to decode {what} response: {e}") from e
    finally:
        response.close()
