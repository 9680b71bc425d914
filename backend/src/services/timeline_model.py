"""In-memory timeline: tracks, their clips, and the media pool.

Pure data operations only; no I/O. Clips on a track may overlap, there is no
collision detection.
"""

import logging

from src.exceptions import TrackLockedError, TrackNotFoundError
from src.schemas.timeline import TRACK_FLAGS, Clip, MediaAsset, Track, TrackFlag, TrackKind, default_tracks

logger = logging.getLogger(__name__)


class TimelineModel:
    """Ordered tracks, each holding an ordered sequence of clips."""

    def __init__(self, tracks: list[Track] | None = None) -> None:
        self._tracks: list[Track] = tracks if tracks is not None else default_tracks()

    @property
    def tracks(self) -> list[Track]:
        return self._tracks

    def get_track(self, track_id: str) -> Track:
        for track in self._tracks:
            if track.id == track_id:
                return track
        raise TrackNotFoundError(track_id)

    def first_track_of_kind(self, kind: TrackKind) -> Track | None:
        return next((t for t in self._tracks if t.kind == kind), None)

    def find_clip(self, clip_id: str) -> Clip | None:
        for track in self._tracks:
            for clip in track.clips:
                if clip.id == clip_id:
                    return clip
        return None

    def clip_count(self) -> int:
        return sum(len(track.clips) for track in self._tracks)

    def add_clip(self, track_id: str, clip: Clip) -> Clip:
        """Append a clip to a track.

        Raises:
            TrackNotFoundError: unknown track id
            TrackLockedError: the track is locked; its clips are left untouched
        """
        track = self.get_track(track_id)
        if track.locked:
            raise TrackLockedError(track_id)
        if clip.track_id != track_id:
            clip = clip.model_copy(update={"track_id": track_id})
        track.clips.append(clip)
        logger.debug("Added clip %s to track %s at %.3fs", clip.id, track_id, clip.start_time)
        return clip

    def remove_clip(self, track_id: str, clip_id: str) -> Clip | None:
        """Remove a clip by id. Returns the removed clip, or None if absent."""
        track = self.get_track(track_id)
        for i, clip in enumerate(track.clips):
            if clip.id == clip_id:
                logger.debug("Removed clip %s from track %s", clip_id, track_id)
                return track.clips.pop(i)
        return None

    def set_track_flag(self, track_id: str, flag: TrackFlag, value: bool) -> Track:
        """Set exactly one of muted/locked/visible on one track."""
        if flag not in TRACK_FLAGS:
            raise ValueError(f"Unknown track flag: {flag}")
        track = self.get_track(track_id)
        setattr(track, flag, value)
        return track

    def toggle_track_flag(self, track_id: str, flag: TrackFlag) -> Track:
        track = self.get_track(track_id)
        return self.set_track_flag(track_id, flag, not getattr(track, flag))


class MediaPool:
    """Assets available for placement, in insertion order.

    Assets outlive the clips that reference them; removing a clip never
    touches the pool.
    """

    def __init__(self) -> None:
        self._assets: dict[str, MediaAsset] = {}

    def __len__(self) -> int:
        return len(self._assets)

    def __contains__(self, asset_id: object) -> bool:
        return asset_id in self._assets

    @property
    def assets(self) -> list[MediaAsset]:
        return list(self._assets.values())

    def get(self, asset_id: str) -> MediaAsset | None:
        return self._assets.get(asset_id)

    def upsert(self, asset: MediaAsset) -> bool:
        """Insert or replace an asset. Returns True if the id was new."""
        is_new = asset.id not in self._assets
        self._assets[asset.id] = asset
        return is_new
