"""Schemas for the studio's RPC boundary and session results."""

from datetime import datetime
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from src.schemas.errors import ErrorInfo
from src.schemas.timeline import Clip, MediaAsset


# =============================================================================
# Health
# =============================================================================


class ApiStatus(BaseModel):
    status: str
    timestamp: datetime


class ApiMessage(BaseModel):
    message: str


# =============================================================================
# Video generation jobs
# =============================================================================

VideoJobStatus = Literal["pending", "processing", "completed", "failed"]


class VideoJob(BaseModel):
    """A generation job as reported by `video.list` / `video.create`.

    Status values outside VideoJobStatus are kept as-is; only "completed"
    jobs carry a video_url.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: int
    project_id: int | None = Field(default=None, alias="projectId")
    provider: str | None = None
    status: str = "pending"
    video_url: str | None = Field(default=None, alias="videoUrl")

    @property
    def is_ready(self) -> bool:
        return self.status == "completed" and bool(self.video_url)


# =============================================================================
# Visual style / project content
# =============================================================================


class TextResult(BaseModel):
    """Text produced by an AI mutation.

    The service answers either with a bare string or with an object carrying
    `content`; both are accepted here so callers only ever see `.content`.
    """

    content: str

    @model_validator(mode="before")
    @classmethod
    def _accept_bare_string(cls, data: Any) -> Any:
        if isinstance(data, str):
            return {"content": data}
        return data


class ProjectContent(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    script: str | None = None
    master_visual: str | None = Field(default=None, alias="masterVisual")


class ProjectDetails(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int
    name: str | None = None
    content: ProjectContent | None = None


class ReferenceImage(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: int
    project_id: int | None = Field(default=None, alias="projectId")
    image_url: str = Field(alias="imageUrl")
    description: str | None = None


# =============================================================================
# Generation bridge results
# =============================================================================


class GenerationSucceeded(BaseModel):
    status: Literal["succeeded"] = "succeeded"
    job: VideoJob
    assets: list[MediaAsset] = Field(default_factory=list)
    placed_clip: Clip | None = None


class GenerationFailed(BaseModel):
    status: Literal["failed"] = "failed"
    error: ErrorInfo


class GenerationDiscarded(BaseModel):
    """The request finished after its session was disposed; nothing was applied."""

    status: Literal["discarded"] = "discarded"


GenerationResult = Annotated[
    GenerationSucceeded | GenerationFailed | GenerationDiscarded,
    Field(discriminator="status"),
]
