"""
Audio transcription endpoint.

Files are validated against the client's table of supported formats
before upload, then sent as multipart form data with the transcription
options as a JSON field.
"""

import json
import logging
import os
from typing import Optional, Sequence

from ..constants import AUDIO_TRANSCRIPTIONS_PATH
from ..errors import ValidationError
from ..models.audio import (
    DEFAULT_AUDIO_FORMATS,
    AudioTranscriptionRequest,
    AudioTranscriptionResponse,
    SupportedAudioFormat,
)
from .context import Context
from .utils import decode_response

logger = logging.getLogger(__name__)


def validate_audio_file(
    file_path: str, formats: Sequence[SupportedAudioFormat] = DEFAULT_AUDIO_FORMATS
) -> SupportedAudioFormat:
    """
    Check that a file has a supported extension and fits the size limit.

    Args:
        file_path: Path of the audio file
        formats: Accepted formats

    Returns:
        The matching format

    Raises:
        ValidationError: If the file is missing, has an unsupported
            extension or is too large
    """
    ext = os.path.splitext(file_path)[1].lower()
    audio_format = next((f for f in formats if f.extension == ext), None)
    if audio_format is None:
        raise ValidationError(f"unsupported audio format: {ext}")

    try:
        size = os.path.getsize(file_path)
    except OSError as e:
        raise ValidationError(f"failed to open audio file: {e}") from e

    if size > audio_format.max_size:
        raise ValidationError(
            f"file size exceeds maximum allowed size of {audio_format.max_size} bytes"
        )
    return audio_format


class AudioMixin:
    """Audio transcription, mixed into Client."""

    audio_formats: Sequence[SupportedAudioFormat] = DEFAULT_AUDIO_FORMATS

    def transcribe_audio_file(
        self,
        file_path: str,
        options: Optional[AudioTranscriptionRequest] = None,
        ctx: Optional[Context] = None,
    ) -> AudioTranscriptionResponse:
        """Upload an audio file and return its transcription."""
        logger.debug(f"Starting audio transcription for file: {file_path}")
        audio_format = validate_audio_file(file_path, self.audio_formats)

        with open(file_path, "rb") as f:
            content = f.read()

        files = {"file": (os.path.basename(file_path), content, audio_format.mime_types[0])}
        data = {}
        if options is not None:
            data["options"] = json.dumps(options.to_payload())

        response = self.authenticated_request(
            "POST", AUDIO_TRANSCRIPTIONS_PATH, files=files, data=data or None, ctx=ctx
        )
        transcription = decode_response(
            response, AudioTranscriptionResponse, "transcription", ok_statuses=(200,)
        )
        logger.info(f"Transcribed audio file: {file_path}")
        return transcription
