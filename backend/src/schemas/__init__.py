from src.schemas.errors import ErrorInfo, ErrorResponse
from src.schemas.studio import (
    ApiMessage,
    ApiStatus,
    GenerationFailed,
    GenerationResult,
    GenerationSucceeded,
    ReferenceImage,
    TextResult,
    VideoJob,
)
from src.schemas.timeline import Clip, MediaAsset, Track

__all__ = [
    "ErrorInfo",
    "ErrorResponse",
    "ApiMessage",
    "ApiStatus",
    "VideoJob",
    "TextResult",
    "ReferenceImage",
    "GenerationResult",
    "GenerationSucceeded",
    "GenerationFailed",
    "Track",
    "Clip",
    "MediaAsset",
]
