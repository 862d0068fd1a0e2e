"""
Request validation helpers shared by the routers.
"""
from api.utils.audio_validator import validate_audio_upload, read_audio_upload

__all__ = ["validate_audio_upload", "read_audio_upload"]
