from typing import Literal

from pydantic import BaseModel, Field

TrackKind = Literal["video", "audio"]
TrackFlag = Literal["muted", "locked", "visible"]

TRACK_FLAGS: tuple[TrackFlag, ...] = ("muted", "locked", "visible")


class MediaAsset(BaseModel):
    """Media pool entry. Independent of any clip that places it."""

    id: str
    name: str
    duration: float = Field(gt=0)  # seconds
    kind: TrackKind = "video"
    url: str
    thumbnail: str | None = None


class Clip(BaseModel):
    """A placed instance of a MediaAsset on a track."""

    id: str
    track_id: str
    asset_id: str
    start_time: float = Field(default=0.0, ge=0)  # seconds
    duration: float = Field(gt=0)  # seconds
    name: str
    url: str | None = None


class Track(BaseModel):
    id: str
    name: str
    kind: TrackKind
    muted: bool = False
    locked: bool = False
    visible: bool = True
    # Display order, not time order
    clips: list[Clip] = Field(default_factory=list)


def default_tracks() -> list[Track]:
    """The lanes a new editing session starts with."""
    return [
        Track(id="video-1", name="Video", kind="video"),
        Track(id="audio-1", name="Audio 1", kind="audio"),
        Track(id="audio-2", name="Audio 2", kind="audio"),
        Track(id="effects-1", name="Effects", kind="audio"),
    ]
