"""Presentation layout for the timeline panel, media pool and transport bar.

Turns the model into positioned boxes. Geometry comes from
`map_time_to_pixel`, so changing zoom re-lays out every clip without touching
the model.
"""

from dataclasses import dataclass, field

from src.schemas.timeline import Clip, MediaAsset, Track, TrackKind
from src.services.playback_controller import PlaybackController
from src.services.timeline_model import MediaPool, TimelineModel
from src.utils.timecode import format_timecode, map_time_to_pixel, pixels_per_second

EMPTY_POOL_TEXT = "No clips yet"
EMPTY_PREVIEW_TEXT = "Select a clip to preview"


@dataclass
class ClipBox:
    clip_id: str
    name: str
    left_px: float
    width_px: float
    selected: bool = False


@dataclass
class TrackRow:
    track_id: str
    name: str
    kind: TrackKind
    muted: bool
    locked: bool
    visible: bool
    clips: list[ClipBox] = field(default_factory=list)

    @property
    def editable(self) -> bool:
        """Clip add/remove/move controls are disabled on locked tracks."""
        return not self.locked


@dataclass
class MediaPoolItem:
    asset_id: str
    name: str
    duration_label: str
    thumbnail: str | None = None


@dataclass
class TimelineLayout:
    zoom_percent: float
    pixels_per_second: float
    timecode: str
    playing: bool
    preview_url: str | None
    rows: list[TrackRow] = field(default_factory=list)
    media_pool: list[MediaPoolItem] = field(default_factory=list)
    clip_count: int = 0

    @property
    def clip_count_label(self) -> str:
        return f"{self.clip_count} clips"

    @property
    def media_pool_placeholder(self) -> str | None:
        return EMPTY_POOL_TEXT if not self.media_pool else None

    @property
    def preview_placeholder(self) -> str | None:
        return EMPTY_PREVIEW_TEXT if not self.preview_url else None


class TimelineView:
    def layout_clip(self, clip: Clip, zoom_percent: float, selected_id: str | None = None) -> ClipBox:
        return ClipBox(
            clip_id=clip.id,
            name=clip.name,
            left_px=map_time_to_pixel(clip.start_time, zoom_percent),
            width_px=map_time_to_pixel(clip.duration, zoom_percent),
            selected=clip.id == selected_id,
        )

    def layout_track(self, track: Track, zoom_percent: float, selected_id: str | None = None) -> TrackRow:
        return TrackRow(
            track_id=track.id,
            name=track.name,
            kind=track.kind,
            muted=track.muted,
            locked=track.locked,
            visible=track.visible,
            clips=[self.layout_clip(c, zoom_percent, selected_id) for c in track.clips],
        )

    def layout_asset(self, asset: MediaAsset) -> MediaPoolItem:
        return MediaPoolItem(
            asset_id=asset.id,
            name=asset.name,
            duration_label=format_timecode(asset.duration),
            thumbnail=asset.thumbnail,
        )

    def render(
        self,
        model: TimelineModel,
        pool: MediaPool,
        playback: PlaybackController,
        zoom_percent: float,
    ) -> TimelineLayout:
        state = playback.state
        return TimelineLayout(
            zoom_percent=zoom_percent,
            pixels_per_second=pixels_per_second(zoom_percent),
            timecode=format_timecode(state.current_time),
            playing=state.playing,
            preview_url=state.source,
            rows=[self.layout_track(t, zoom_percent, state.selected_clip_id) for t in model.tracks],
            media_pool=[self.layout_asset(a) for a in pool.assets],
            clip_count=model.clip_count(),
        )
