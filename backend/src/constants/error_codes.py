"""Error codes dictionary for the studio.

Single source of truth for error codes, their retryability, and the
human-readable fix shown next to the error. Used by the exception classes
and the API exception handlers.
"""

from typing import TypedDict


class ErrorCodeSpec(TypedDict, total=False):
    """Specification for an error code."""

    retryable: bool
    suggested_fix: str


ERROR_CODES: dict[str, ErrorCodeSpec] = {
    # ==========================================================================
    # Timeline errors (not retryable, fix the editing action)
    # ==========================================================================
    "TRACK_LOCKED": {
        "retryable": False,
        "suggested_fix": "Unlock the track before adding or moving clips",
    },
    "TRACK_NOT_FOUND": {
        "retryable": False,
    },
    "NO_ACTIVE_CLIP": {
        "retryable": False,
        "suggested_fix": "Select a clip to preview first",
    },
    # ==========================================================================
    # Validation errors (not retryable, fix input)
    # ==========================================================================
    "VALIDATION_ERROR": {
        "retryable": False,
    },
    # ==========================================================================
    # Network / upstream errors (retried by the next scheduled call)
    # ==========================================================================
    "NETWORK_ERROR": {
        "retryable": True,
    },
    "GENERATION_FAILED": {
        "retryable": True,
        "suggested_fix": "Try generating again",
    },
    # ==========================================================================
    # Generic server errors
    # ==========================================================================
    "INTERNAL_ERROR": {
        "retryable": True,
    },
}


def get_error_spec(code: str) -> ErrorCodeSpec:
    """Get error specification by code.

    Args:
        code: The error code

    Returns:
        ErrorCodeSpec with retryable flag and suggested fix
    """
    return ERROR_CODES.get(code, {"retryable": False})

