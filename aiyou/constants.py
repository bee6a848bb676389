#!/usr/bin/env python3
"""
Application Constants

This module contains the default settings, endpoint paths and exit codes
used throughout the AI.YOU client library.
"""

# Exit codes for different failure modes
EXIT_SUCCESS = 0
EXIT_INPUT_ERROR = 2
EXIT_CONFIG_ERROR = 3
EXIT_API_FAILURES = 4
EXIT_INTERRUPTED = 130  # Conventional exit code for Ctrl+C
EXIT_UNEXPECTED_ERROR = 10

# HTTP client defaults
DEFAULT_BASE_URL = "https://ai.dragonflygroup.fr"
DEFAULT_TIMEOUT = 30.0  # seconds

# Retry defaults
DEFAULT_MAX_RETRIES = 3
DEFAULT_RETRY_DELAY = 1.0  # seconds
DEFAULT_MAX_RETRY_DELAY = 30.0  # seconds

# Server-side 429 responses without a Retry-After header
DEFAULT_RATE_LIMIT_RETRY_AFTER = 60  # seconds

# Chat completion defaults used by the convenience helpers
DEFAULT_TEMPERATURE = 0.7
DEFAULT_TOP_P = 1.0

# Endpoint paths
LOGIN_PATH = "/api/login"
CHAT_COMPLETIONS_PATH = "/api/v1/chat/completions"
USER_ASSISTANTS_PATH = "/api/v1/user/assistants"
MODELS_PATH = "/api/v1/models"
SAVE_CONVERSATION_PATH = "/api/v1/save"
USER_THREADS_PATH = "/api/v1/user/threads"
THREADS_PATH = "/api/v1/threads"
AUDIO_TRANSCRIPTIONS_PATH = "/api/v1/audio/transcriptions"

# Server-sent events framing
SSE_DATA_PREFIX = "data:"
SSE_DONE_SENTINEL = "[DONE]"

# Audio upload limit shared by all supported formats
MAX_AUDIO_FILE_SIZE = 25 * 1024 * 1024  # 25 MiB
