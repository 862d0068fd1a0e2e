"""
Validation utilities for voice-note uploads.

Browsers record in whatever container they support (webm, ogg, mp4, wav),
so any `audio/*` MIME type is accepted; codec parameters such as
";codecs=opus" are stripped before the clip is forwarded.
"""
import logging

from fastapi import UploadFile

from core.exceptions import AudioTooLargeError, InvalidAudioError, UnsupportedAudioTypeError

logger = logging.getLogger(__name__)

AUDIO_TYPE_PREFIX = "audio/"


def validate_audio_upload(file: UploadFile) -> str:
    """
    Validate the declared content type of an uploaded clip.

    Returns:
        str: The bare MIME type (e.g. "audio/webm").

    Raises:
        InvalidAudioError: 400 if the content type is missing.
        UnsupportedAudioTypeError: 415 if it is not an audio type.
    """
    if not file.content_type:
        logger.error("Audio upload has no content type")
        raise InvalidAudioError(detail="Audio content type is missing")

    mime_type = file.content_type.split(";", 1)[0].strip().lower()
    if not mime_type.startswith(AUDIO_TYPE_PREFIX):
        logger.error(f"Invalid audio content type: {file.content_type}")
        raise UnsupportedAudioTypeError(
            detail=f"Expected an audio/* content type, got {mime_type}",
            content_type=mime_type,
        )
    return mime_type


async def read_audio_upload(file: UploadFile, max_size: int) -> bytes:
    """
    Read the clip into memory, enforcing size limits.

    Raises:
        InvalidAudioError: 400 if the clip is empty.
        AudioTooLargeError: 413 if it exceeds `max_size` bytes.
    """
    content = await file.read(max_size + 1)
    if not content:
        raise InvalidAudioError(detail="Audio clip is empty")
    if len(content) > max_size:
        raise AudioTooLargeError(
            detail=f"Audio clip exceeds maximum size of {max_size // (1024 * 1024)}MB",
            max_size=max_size,
        )
    return content
