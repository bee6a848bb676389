"""
Utilities module for the AI.YOU client.

This module provides shared utility functions organized by concern:
- Logging utilities for consistent, credential-safe logging setup
- Text utilities for masking sensitive values
- Message helpers for building chat messages
"""

# Logging utilities
from .logging import setup_logging, SensitiveDataFilter

# Text utilities
from .text import mask_sensitive_info

# Message helpers
from .messages import MessageBuilder, new_text_message, new_image_message

__all__ = [
    "setup_logging",
    "SensitiveDataFilter",
    "mask_sensitive_info",
    "MessageBuilder",
    "new_text_message",
    "new_image_message",
]
