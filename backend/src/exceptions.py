"""Custom exceptions for the film studio.

Every error carries a machine-readable code and an HTTP status so the API
layer and the studio client can report it the same way.
"""

from src.constants.error_codes import get_error_spec
from src.schemas.errors import ErrorInfo


class StudioError(Exception):
    """Base exception for all studio application errors."""

    code: str = "INTERNAL_ERROR"
    status_code: int = 500
    message: str = "An unexpected error occurred"

    def __init__(
        self,
        message: str | None = None,
        *,
        code: str | None = None,
        status_code: int | None = None,
        suggested_fix: str | None = None,
    ):
        self.message = message or self.__class__.message
        if code:
            self.code = code
        if status_code:
            self.status_code = status_code
        self.suggested_fix = suggested_fix
        super().__init__(self.message)

    @property
    def retryable(self) -> bool:
        return get_error_spec(self.code).get("retryable", False)

    def to_error_info(self) -> ErrorInfo:
        """Convert exception to ErrorInfo for API responses and UI banners."""
        spec = get_error_spec(self.code)
        return ErrorInfo(
            code=self.code,
            message=self.message,
            retryable=spec.get("retryable", False),
            suggested_fix=self.suggested_fix or spec.get("suggested_fix"),
        )


# =============================================================================
# Timeline Errors
# =============================================================================


class TrackNotFoundError(StudioError):
    """Track not found."""

    code = "TRACK_NOT_FOUND"
    status_code = 404
    message = "Track not found"

    def __init__(self, track_id: str | None = None):
        message = f"Track not found: {track_id}" if track_id else self.message
        self.track_id = track_id
        super().__init__(message)


class TrackLockedError(StudioError):
    """Track is locked and its clips cannot be modified."""

    code = "TRACK_LOCKED"
    status_code = 409
    message = "Track is locked"

    def __init__(self, track_id: str | None = None):
        message = f"Track is locked: {track_id}" if track_id else self.message
        self.track_id = track_id
        super().__init__(message)


class NoActiveClipError(StudioError):
    """Playback was requested with no clip selected."""

    code = "NO_ACTIVE_CLIP"
    status_code = 409
    message = "No clip is selected"


# =============================================================================
# Validation Errors
# =============================================================================


class ValidationError(StudioError):
    """User input rejected before any request is sent."""

    code = "VALIDATION_ERROR"
    status_code = 400
    message = "Invalid input"

    def __init__(self, message: str | None = None, *, field: str | None = None):
        self.field = field
        super().__init__(message)


# =============================================================================
# Network Errors
# =============================================================================


class NetworkError(StudioError):
    """Transport or HTTP failure talking to the studio backend."""

    code = "NETWORK_ERROR"
    status_code = 502
    message = "Failed to connect to API"

    def __init__(self, message: str | None = None, *, procedure: str | None = None):
        self.procedure = procedure
        super().__init__(message)


class GenerationError(NetworkError):
    """The video-generation service rejected or failed a request."""

    code = "GENERATION_FAILED"
    message = "Video generation failed"
