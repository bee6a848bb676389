"""
Message building helpers.

Convenience constructors for chat messages made of text and image parts.
"""

import logging
from typing import List, Optional

from ..models.chat import ContentPart, Message
from .text import mask_sensitive_info

logger = logging.getLogger(__name__)


class MessageBuilder:
    """Fluent builder for a multi-part chat message."""

    def __init__(self, role: str, log: Optional[logging.Logger] = None):
        self._role = role
        self._parts: List[ContentPart] = []
        self._logger = log or logger

    def add_text(self, text: str) -> "MessageBuilder":
        self._logger.debug(f"Adding text content: {mask_sensitive_info(text)}")
        self._parts.append(ContentPart(type="text", text=text))
        return self

    def add_image(self, image_url: str) -> "MessageBuilder":
        self._logger.debug(f"Adding image content: {mask_sensitive_info(image_url)}")
        self._parts.append(ContentPart(type="image", text=image_url))
        return self

    def build(self) -> Message:
        """Return the constructed message. The builder can keep adding parts."""
        self._logger.debug(f"Building message with {len(self._parts)} content parts")
        return Message(role=self._role, content=list(self._parts))


def new_text_message(role: str, text: str) -> Message:
    """Create a message with a single text part."""
    return Message(role=role, content=[ContentPart(type="text", text=text)])


def new_image_message(role: str, image_url: str) -> Message:
    """Create a message with a single image part."""
    return Message(role=role, content=[ContentPart(type="image", text=image_url)])
