"""Bridge between the "generate" action and the AI video-generation service.

Each call to `generate` issues its own `video.create` request; concurrent
calls are not coalesced. Completed jobs are reconciled into the media pool,
and the first asset is auto-placed only while the first video track is empty.
"""

import logging

from src.exceptions import GenerationError, NetworkError
from src.schemas.studio import (
    GenerationDiscarded,
    GenerationFailed,
    GenerationResult,
    GenerationSucceeded,
    VideoJob,
)
from src.schemas.timeline import Clip, MediaAsset
from src.services.studio_rpc_client import StudioRpcClient
from src.services.timeline_model import MediaPool, TimelineModel

logger = logging.getLogger(__name__)


def asset_from_job(job: VideoJob, index: int, duration_s: float) -> MediaAsset:
    """Build the media pool entry for a completed job (index is 0-based)."""
    return MediaAsset(
        id=f"video-{job.id}",
        name=f"Generated Video {index + 1}",
        duration=duration_s,
        kind="video",
        url=job.video_url or "",
        thumbnail=job.video_url,
    )


class GenerationBridge:
    def __init__(
        self,
        client: StudioRpcClient,
        model: TimelineModel,
        pool: MediaPool,
        *,
        default_provider: str = "sora",
        clip_duration_s: float = 5.0,
    ) -> None:
        self._client = client
        self._model = model
        self._pool = pool
        self._default_provider = default_provider
        self._clip_duration_s = clip_duration_s
        self._disposed = False

    @property
    def disposed(self) -> bool:
        return self._disposed

    def dispose(self) -> None:
        """Stop applying results. In-flight requests still complete."""
        self._disposed = True

    async def generate(self, project_id: int, provider: str | None = None) -> GenerationResult:
        provider = provider or self._default_provider
        try:
            job = await self._client.create_video(project_id, provider)
            if self._disposed:
                logger.info("Discarding generation result for project %s (session closed)", project_id)
                return GenerationDiscarded()
            jobs = await self._client.list_videos(project_id)
        except NetworkError as e:
            logger.warning("Failed to generate video for project %s: %s", project_id, e.message)
            if self._disposed:
                return GenerationDiscarded()
            return GenerationFailed(error=e.to_error_info())

        if self._disposed:
            logger.info("Discarding generation result for project %s (session closed)", project_id)
            return GenerationDiscarded()

        assets, placed = self.reconcile(jobs)
        if job.status == "failed":
            error = GenerationError(f"Video generation failed (job {job.id}, provider {provider})")
            return GenerationFailed(error=error.to_error_info())
        return GenerationSucceeded(job=job, assets=assets, placed_clip=placed)

    async def refresh(self, project_id: int) -> list[MediaAsset]:
        """Reload the project's jobs and reconcile them. Returns the ready assets."""
        jobs = await self._client.list_videos(project_id)
        if self._disposed:
            return []
        assets, _ = self.reconcile(jobs)
        return assets

    def reconcile(self, jobs: list[VideoJob]) -> tuple[list[MediaAsset], Clip | None]:
        """Apply a job listing to the media pool and maybe auto-place a clip."""
        ready = [job for job in jobs if job.is_ready]
        assets = [asset_from_job(job, i, self._clip_duration_s) for i, job in enumerate(ready)]
        for asset in assets:
            if self._pool.upsert(asset):
                logger.info("Added %s to media pool (%s)", asset.id, asset.url)
        if not assets:
            return assets, None
        return assets, self._auto_place(assets[0])

    def _auto_place(self, asset: MediaAsset) -> Clip | None:
        track = self._model.first_track_of_kind("video")
        if track is None or track.clips:
            return None
        if track.locked:
            logger.debug("Skipping auto-placement of %s: track %s is locked", asset.id, track.id)
            return None
        clip = Clip(
            id=f"clip-{asset.id}",
            track_id=track.id,
            asset_id=asset.id,
            start_time=0.0,
            duration=asset.duration,
            name=asset.name,
            url=asset.url,
        )
        return self._model.add_clip(track.id, clip)
