"""
Shared exception classes and error handling utilities for the Dialysis Companion API.

This module provides:
- Custom exception hierarchy for domain-specific errors
- Consistent error response formatting
- Exception handlers for FastAPI integration

Usage:
    from core.exceptions import MedicationNotFoundError

    # In service layer - raise domain exceptions
    raise MedicationNotFoundError(medication_id="abc123")

    # In FastAPI - register handlers via setup_exception_handlers(app)

External-service failures (Gemini, notification channels) are
absent from the request path: those collaborators degrade to fallback values
instead of raising. The classes below exist for the parts that must fail.
"""
import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


# =============================================================================
# BASE EXCEPTION CLASSES
# =============================================================================

class DialysisServiceError(Exception):
    """
    Base exception for all domain errors.

    Provides consistent error structure with status code and detail message.
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    detail: str = "An unexpected error occurred"

    def __init__(
        self,
        detail: Optional[str] = None,
        status_code: Optional[int] = None,
        **kwargs: Any
    ):
        """
        Initialize the exception.

        Args:
            detail: Human-readable error message. Uses class default if not provided.
            status_code: HTTP status code. Uses class default if not provided.
            **kwargs: Additional context to include in error response.
        """
        self.detail = detail or self.__class__.detail
        self.status_code = status_code or self.__class__.status_code
        self.context = kwargs
        super().__init__(self.detail)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for JSON response."""
        result = {"detail": self.detail}
        if self.context:
            result["context"] = self.context
        return result


# =============================================================================
# INPUT VALIDATION EXCEPTIONS
# =============================================================================

class InvalidRecordDataError(DialysisServiceError):
    """Raised when a health record fails validation (e.g. dated in the future)."""

    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Invalid record data"


class InvalidProfileDataError(DialysisServiceError):
    """Raised when a patient profile fails validation."""

    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Invalid profile data"


# =============================================================================
# LOOKUP EXCEPTIONS
# =============================================================================

class MedicationNotFoundError(DialysisServiceError):
    """Raised when a medication id does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    detail = "Medication not found"

    def __init__(self, medication_id: Optional[str] = None, **kwargs: Any):
        detail = f"Medication '{medication_id}' not found" if medication_id else self.detail
        super().__init__(detail=detail, medication_id=medication_id, **kwargs)


class ProfileNotFoundError(DialysisServiceError):
    """Raised when the patient profile has not been set up yet."""

    status_code = status.HTTP_404_NOT_FOUND
    detail = "Patient profile has not been set up"


# =============================================================================
# STORAGE EXCEPTIONS
# =============================================================================

class StorageError(DialysisServiceError):
    """Raised when reading or writing the local store fails."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    detail = "Storage operation failed"

    def __init__(self, operation: Optional[str] = None, **kwargs: Any):
        detail = f"Storage error during {operation}" if operation else self.detail
        super().__init__(detail=detail, operation=operation, **kwargs)


# =============================================================================
# AUDIO UPLOAD EXCEPTIONS
# =============================================================================

class InvalidAudioError(DialysisServiceError):
    """Base exception for voice-note uploads that cannot be transcribed."""

    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Invalid audio upload"


class UnsupportedAudioTypeError(InvalidAudioError):
    """Raised when the uploaded clip is not an audio MIME type."""

    status_code = status.HTTP_415_UNSUPPORTED_MEDIA_TYPE
    detail = "Unsupported audio type"


class AudioTooLargeError(InvalidAudioError):
    """Raised when the uploaded clip exceeds the configured size limit."""

    status_code = status.HTTP_413_REQUEST_ENTITY_TOO_LARGE
    detail = "Audio clip exceeds maximum allowed size"


# =============================================================================
# EXCEPTION HANDLERS
# =============================================================================

async def dialysis_service_exception_handler(
    request: Request,
    exc: DialysisServiceError
) -> JSONResponse:
    """Log a DialysisServiceError and return it as a JSON response."""
    logger.warning(
        f"DialysisServiceError: {exc.detail}",
        extra={
            "status_code": exc.status_code,
            "path": request.url.path,
            "method": request.method,
            "context": exc.context
        }
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """
    Register exception handlers with the FastAPI application.

    Args:
        app: The FastAPI application instance.
    """
    app.add_exception_handler(DialysisServiceError, dialysis_service_exception_handler)
