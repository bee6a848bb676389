"""
Logging utilities for the AI.YOU client.

This module provides centralized logging configuration and utilities
to ensure consistent, credential-safe logging behavior across the library.
"""

import json
import logging
import time
from typing import Optional

from .text import mask_sensitive_info


class SensitiveDataFilter(logging.Filter):
    """Logging filter that masks emails, bearer tokens and passwords."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        masked = mask_sensitive_info(message)
        if masked != message:
            record.msg = masked
            record.args = None
        return True


def setup_logging(verbose: bool = False, quiet: bool = False):
    """Setup logging configuration with appropriate level and format."""
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.INFO
    format_string = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"

    logging.basicConfig(level=level, format=format_string, datefmt="%Y-%m-%d %H:%M:%S")

    # Mask credentials on every handler attached to the root logger
    for handler in logging.getLogger().handlers:
        if not any(isinstance(f, SensitiveDataFilter) for f in handler.filters):
            handler.addFilter(SensitiveDataFilter())

    # Set specific logger levels
    logging.getLogger("httpx").setLevel(logging.WARNING)  # Reduce HTTP client noise
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def log_rate_limit_event(
    retry_after: Optional[int],
    is_client_side: bool,
    path: str,
    logger: Optional[logging.Logger] = None,
):
    """
    Log structured rate limit event with retry information.

    Args:
        retry_after: Estimated seconds before a retry may succeed
        is_client_side: True when the local limiter refused the request
        path: API path of the request that was throttled
        logger: Logger instance to use (defaults to current module logger)
    """
    if logger is None:
        logger = logging.getLogger(__name__)

    rate_limit_record = {
        "event_type": "rate_limit",
        "timestamp": time.time(),
        "path": path,
        "source": "client" if is_client_side else "server",
        "retry_after_seconds": retry_after,
    }

    if is_client_side:
        logger.warning(f"RATE_LIMIT_CLIENT: {json.dumps(rate_limit_record, ensure_ascii=False)}")
    else:
        logger.warning(f"RATE_LIMIT_429: {json.dumps(rate_limit_record, ensure_ascii=False)}")


def log_retry_event(
    operation: str,
    attempt: int,
    classification,
    delay: float,
    logger: Optional[logging.Logger] = None,
):
    """
    Log structured retry event before a backoff sleep.

    Args:
        operation: Label of the operation being retried
        attempt: Number of the attempt that just failed (1-based)
        classification: ErrorClassification of the failure
        delay: Backoff delay in seconds before the next attempt
        logger: Logger instance to use (defaults to current module logger)
    """
    if logger is None:
        logger = logging.getLogger(__name__)

    retry_record = {
        "event_type": "retry",
        "timestamp": time.time(),
        "operation": operation,
        "failed_attempt": attempt,
        "classification": classification.to_dict(),
        "delay_seconds": round(delay, 3),
    }

    logger.info(f"RETRY: {json.dumps(retry_record, ensure_ascii=False)}")
