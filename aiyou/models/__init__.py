#!/usr/bin/env python3
"""
Data Models Module

This module contains all payload structures and type definitions used
throughout the AI.YOU client.
"""

from .auth import LoginRequest, LoginResponse, User
from .chat import (
    ContentPart,
    Message,
    Delta,
    Choice,
    Usage,
    ChatCompletionRequest,
    ChatCompletionResponse,
)
from .assistants import Assistant, AssistantsResponse
from .catalog import Model, ModelProperties, ModelRequest, ModelResponse, ModelsResponse
from .conversation import (
    ConversationThread,
    SaveConversationRequest,
    SaveConversationResponse,
    ThreadFilter,
    UserThreadsParams,
    UserThreadsOutput,
)
from .audio import (
    SupportedAudioFormat,
    DEFAULT_AUDIO_FORMATS,
    AudioTranscriptionRequest,
    AudioTranscriptionResponse,
)
from .errors import ErrorKind, ErrorClassification
from .ratelimit import RateLimiterConfig

__all__ = [
    "LoginRequest",
    "LoginResponse",
    "User",
    "ContentPart",
    "Message",
    "Delta",
    "Choice",
    "Usage",
    "ChatCompletionRequest",
    "ChatCompletionResponse",
    "Assistant",
    "AssistantsResponse",
    "Model",
    "ModelProperties",
    "ModelRequest",
    "ModelResponse",
    "ModelsResponse",
    "ConversationThread",
    "SaveConversationRequest",
    "SaveConversationResponse",
    "ThreadFilter",
    "UserThreadsParams",
    "UserThreadsOutput",
    "SupportedAudioFormat",
    "DEFAULT_AUDIO_FORMATS",
    "AudioTranscriptionRequest",
    "AudioTranscriptionResponse",
    "ErrorKind",
    "ErrorClassification",
    "RateLimiterConfig",
]
