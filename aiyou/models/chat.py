#!/usr/bin/env python3
"""
Chat Completion Models

Request, response and streaming fragment payloads for the chat
completion endpoint.
"""

from typing import Any, List, Optional

from pydantic import Field, field_validator

from .base import ApiModel


class ContentPart(ApiModel):
    """One part of a message content (text or image URL)."""

    type: str = "text"
    text: str = ""


class Message(ApiModel):
    """A single message in a conversation."""

    role: str
    content: List[ContentPart] = Field(default_factory=list)

    @field_validator("content", mode="before")
    @classmethod
    def coerce_content(cls, v: Any) -> Any:
        """Accept a plain string as a single text part."""
        if v is None:
            return []
        if isinstance(v, str):
            return [{"type": "text", "text": v}]
        return v

    @property
    def text(self) -> str:
        """Concatenated text of all text parts."""
        return "".join(part.text for part in self.content if part.type == "text")


class Delta(ApiModel):
    """Incremental message update carried by a streamed fragment."""

    role: Optional[str] = None
    content: Optional[str] = None


class Choice(ApiModel):
    """A single choice in a chat completion response or fragment."""

    index: int = 0
    message: Optional[Message] = None
    delta: Optional[Delta] = None
    finish_reason: Optional[str] = None

    @property
    def text(self) -> str:
        """Text carried by this choice, whether full message or delta."""
        if self.delta is not None and self.delta.content:
            return self.delta.content
        if self.message is not None:
            return self.message.text
        return ""


class Usage(ApiModel):
    """Token usage information."""

    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


class ChatCompletionRequest(ApiModel):
    """Body of ``POST /api/v1/chat/completions``."""

    messages: List[Message]
    assistant_id: str = Field(..., alias="assistantId")
    temperature: float = 0.7
    top_p: float = 1.0
    prompt_system: str = Field("", alias="promptSystem")
    stream: bool = False
    stop: Optional[List[str]] = None
    thread_id: Optional[str] = Field(None, alias="threadId")


class ChatCompletionResponse(ApiModel):
    """A complete chat response, or one streamed fragment of it."""

    id: str = ""
    object: str = ""
    created: int = 0
    model: str = ""
    usage: Optional[Usage] = None
    choices: List[Choice] = Field(default_factory=list)

    @property
    def text(self) -> str:
        """Text of the first choice (empty when there is none)."""
        if not self.choices:
            return ""
        return self.choices[0].text
