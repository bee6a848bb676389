#!/usr/bin/env python3
"""
Audio Transcription Models
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from .base import ApiModel
from ..constants import MAX_AUDIO_FILE_SIZE


@dataclass(frozen=True)
class SupportedAudioFormat:
    """
    An audio file format accepted by the transcription endpoint.

    Attributes:
        extension: File extension including the leading dot
        mime_types: MIME types accepted for this extension
        max_size: Maximum file size in bytes
    """
    extension: str
    mime_types: Tuple[str, ...]
    max_size: int


DEFAULT_AUDIO_FORMATS: Tuple[SupportedAudioFormat, ...] = (
    SupportedAudioFormat(".mp3", ("audio/mpeg",), MAX_AUDIO_FILE_SIZE),
    SupportedAudioFormat(".wav", ("audio/wav", "audio/x-wav"), MAX_AUDIO_FILE_SIZE),
    SupportedAudioFormat(".m4a", ("audio/mp4", "audio/x-m4a"), MAX_AUDIO_FILE_SIZE),
)


class AudioTranscriptionRequest(ApiModel):
    """Options sent alongside the uploaded file."""

    language: Optional[str] = None
    format: Optional[str] = None


class AudioTranscriptionResponse(ApiModel):
    """Result of a transcription."""

    transcription: Optional[str] = None
    text: str = ""
    language: Optional[str] = None
    duration: float = 0.0
