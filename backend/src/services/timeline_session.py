"""One editing session of the video timeline.

Owns the timeline model, media pool, playback controller, generation bridge
and health monitor. `start()` begins health polling and loads the project's
generated videos; `stop()` cancels polling and stops applying generation
results that arrive afterwards.
"""

import logging
import uuid
from collections.abc import Callable
from datetime import datetime

from src.config import Settings, get_settings
from src.exceptions import NetworkError, TrackLockedError, ValidationError
from src.schemas.studio import GenerationResult
from src.schemas.timeline import Clip, Track, TrackFlag
from src.services.generation_bridge import GenerationBridge
from src.services.health_monitor import HealthMonitor
from src.services.playback_controller import MediaElement, PlaybackController
from src.services.studio_rpc_client import StudioRpcClient
from src.services.timeline_model import MediaPool, TimelineModel
from src.services.timeline_view import TimelineLayout, TimelineView
from src.utils.interval_timer import IntervalTimer
from src.utils.timecode import DEFAULT_ZOOM_PERCENT, MAX_ZOOM_PERCENT, MIN_ZOOM_PERCENT

logger = logging.getLogger(__name__)


class TimelineSession:
    def __init__(
        self,
        project_id: int,
        *,
        client: StudioRpcClient | None = None,
        media: MediaElement | None = None,
        timer: IntervalTimer | None = None,
        clock: Callable[[], datetime] | None = None,
        model: TimelineModel | None = None,
        settings: Settings | None = None,
    ) -> None:
        settings = settings or get_settings()
        self.project_id = project_id
        self._owns_client = client is None
        self.client = client or StudioRpcClient()
        self.model = model or TimelineModel()
        self.pool = MediaPool()
        self.playback = PlaybackController(media)
        self.view = TimelineView()
        self.bridge = GenerationBridge(
            self.client,
            self.model,
            self.pool,
            default_provider=settings.default_video_provider,
            clip_duration_s=settings.generated_clip_duration_s,
        )
        self.health = HealthMonitor(
            self.client,
            interval_s=settings.health_poll_interval_s,
            timer=timer,
            clock=clock,
        )
        self._zoom_percent: float = DEFAULT_ZOOM_PERCENT
        self._pending_generations = 0
        self._started = False
        self._stopped = False

    async def __aenter__(self) -> "TimelineSession":
        await self.start()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.stop()

    # =========================================================================
    # Lifecycle
    # =========================================================================

    @property
    def active(self) -> bool:
        return self._started and not self._stopped

    async def start(self) -> None:
        if self._started:
            return
        self._started = True
        await self.health.start()
        if self._stopped:
            return
        try:
            await self.bridge.refresh(self.project_id)
        except NetworkError as e:
            logger.warning("Could not load videos for project %s: %s", self.project_id, e.message)

    async def stop(self) -> None:
        if self._stopped:
            return
        self._stopped = True
        self.health.stop()
        self.bridge.dispose()
        # An owned client stays open until in-flight generations finish
        if self._owns_client and not self.is_generating:
            await self.client.aclose()

    # =========================================================================
    # Zoom
    # =========================================================================

    @property
    def zoom_percent(self) -> float:
        return self._zoom_percent

    def set_zoom(self, zoom_percent: float) -> None:
        if not MIN_ZOOM_PERCENT <= zoom_percent <= MAX_ZOOM_PERCENT:
            raise ValidationError(
                f"Zoom must be between {MIN_ZOOM_PERCENT}% and {MAX_ZOOM_PERCENT}%",
                field="zoom_percent",
            )
        self._zoom_percent = zoom_percent

    # =========================================================================
    # Track / clip editing
    # =========================================================================

    def toggle_track_flag(self, track_id: str, flag: TrackFlag) -> Track:
        return self.model.toggle_track_flag(track_id, flag)

    def add_clip(self, track_id: str, clip: Clip) -> Clip:
        return self.model.add_clip(track_id, clip)

    def place_asset(self, asset_id: str, track_id: str, start_time: float = 0.0) -> Clip:
        """Place a media pool asset on a track as a new clip."""
        asset = self.pool.get(asset_id)
        if asset is None:
            raise ValidationError(f"Asset not in media pool: {asset_id}", field="asset_id")
        if start_time < 0:
            raise ValidationError("Start time must not be negative", field="start_time")
        clip = Clip(
            id=f"clip-{uuid.uuid4().hex[:12]}",
            track_id=track_id,
            asset_id=asset.id,
            start_time=start_time,
            duration=asset.duration,
            name=asset.name,
            url=asset.url,
        )
        return self.model.add_clip(track_id, clip)

    def remove_clip(self, track_id: str, clip_id: str) -> Clip | None:
        """Remove a clip from an unlocked track. The media pool is untouched."""
        if self.model.get_track(track_id).locked:
            raise TrackLockedError(track_id)
        removed = self.model.remove_clip(track_id, clip_id)
        if removed is not None and self.playback.state.selected_clip_id == clip_id:
            self.playback.clear_selection()
        return removed

    def move_clip(self, track_id: str, clip_id: str, start_time: float) -> Clip | None:
        track = self.model.get_track(track_id)
        if track.locked:
            raise TrackLockedError(track_id)
        if start_time < 0:
            raise ValidationError("Start time must not be negative", field="start_time")
        for clip in track.clips:
            if clip.id == clip_id:
                clip.start_time = start_time
                return clip
        return None

    # =========================================================================
    # Selection / playback
    # =========================================================================

    def select_clip(self, clip_id: str) -> Clip | None:
        clip = self.model.find_clip(clip_id)
        if clip is not None:
            self.playback.select_clip(clip)
        return clip

    def toggle_playback(self) -> bool:
        return self.playback.toggle_playback()

    def on_time_update(self, seconds: float) -> None:
        self.playback.on_time_update(seconds)

    # =========================================================================
    # Generation
    # =========================================================================

    @property
    def is_generating(self) -> bool:
        return self._pending_generations > 0

    async def generate_video(self, provider: str | None = None) -> GenerationResult:
        self._pending_generations += 1
        try:
            return await self.bridge.generate(self.project_id, provider)
        finally:
            self._pending_generations -= 1
            if self._stopped and self._owns_client and not self.is_generating:
                await self.client.aclose()

    # =========================================================================
    # Rendering
    # =========================================================================

    def render(self) -> TimelineLayout:
        return self.view.render(self.model, self.pool, self.playback, self._zoom_percent)
