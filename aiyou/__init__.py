#!/usr/bin/env python3
"""
AI.YOU Client Package

A Python client for the AI.YOU conversational AI platform: chat
completions (plain and streamed), assistants, models, conversation
threads and audio transcription.

Every request goes through the same pipeline: optional client-side rate
limiting, JWT or bearer token authentication, and retry with exponential
backoff for network errors and 429 responses.
"""

__version__ = "1.0.0"
__author__ = "AI.YOU Client Contributors"
__description__ = "Python client for the AI.YOU conversational AI API"
__license__ = "GPL-3.0-or-later"
__status__ = "Production"

# Import models for public API
from .models import (
    ChatCompletionRequest,
    ChatCompletionResponse,
    Message,
    ContentPart,
    ErrorKind,
    RateLimiterConfig,
    SaveConversationRequest,
    UserThreadsParams,
    AudioTranscriptionRequest,
    ModelRequest,
)

# Import errors for public API
from .errors import (
    AiyouError,
    AuthenticationError,
    NetworkError,
    RateLimitError,
    APIError,
    StreamDecodeError,
    ResponseDecodeError,
    ValidationError,
    RequestCancelledError,
    DeadlineExceededError,
)

# Import API client for public API
from .api import (
    Client,
    Context,
    StreamReader,
    retry_operation,
)

# Import configuration for public API
from .config import (
    ConfigError,
    ConfigLoader,
    ConfigSchema,
)

# Import utilities for public API
from .utils import (
    setup_logging,
    MessageBuilder,
    new_text_message,
    new_image_message,
)

# Public API exports
__all__ = [
    # Package metadata
    "__version__",
    "__author__",
    "__description__",
    # Data models
    "ChatCompletionRequest",
    "ChatCompletionResponse",
    "Message",
    "ContentPart",
    "ErrorKind",
    "RateLimiterConfig",
    "SaveConversationRequest",
    "UserThreadsParams",
    "AudioTranscriptionRequest",
    "ModelRequest",
    # Errors
    "AiyouError",
    "AuthenticationError",
    "NetworkError",
    "RateLimitError",
    "APIError",
    "StreamDecodeError",
    "ResponseDecodeError",
    "ValidationError",
    "RequestCancelledError",
    "DeadlineExceededError",
    # Client
    "Client",
    "Context",
    "StreamReader",
    "retry_operation",
    # Configuration
    "ConfigError",
    "ConfigLoader",
    "ConfigSchema",
    # Utilities
    "setup_logging",
    "MessageBuilder",
    "new_text_message",
    "new_image_message",
]
