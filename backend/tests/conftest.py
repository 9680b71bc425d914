"""
Pytest fixtures for the film studio backend tests.

Everything runs in memory: the RPC client talks to an httpx.MockTransport and
periodic work is driven by ManualTimer instead of the event loop.
"""

import asyncio
import json
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

import httpx
import pytest

from src.schemas.timeline import Clip
from src.services.studio_rpc_client import StudioRpcClient
from src.utils.interval_timer import TickCallback


class ManualTimer:
    """IntervalTimer stand-in; tests call fire() to run one tick."""

    def __init__(self) -> None:
        self.interval_s: float | None = None
        self.callback: TickCallback | None = None
        self.cancelled = False

    @property
    def active(self) -> bool:
        return self.callback is not None and not self.cancelled

    def start(self, interval_s: float, callback: TickCallback) -> None:
        self.interval_s = interval_s
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True

    async def fire(self) -> None:
        assert self.callback is not None, "timer was never started"
        await self.callback()


class FakeStudioBackend:
    """Answers health and tRPC requests from in-memory state."""

    def __init__(self) -> None:
        self.healthy = True
        self.jobs: list[dict[str, Any]] = []
        self.next_job: dict[str, Any] | None = None
        self.fail_procedures: set[str] = set()
        self.calls: list[tuple[str, Any]] = []
        self.project: dict[str, Any] = {"id": 1, "name": "Demo", "content": {}}
        self.reference_images: list[dict[str, Any]] = []
        self.text_responses: dict[str, Any] = {}

    def handle(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        if path == "/api/health":
            if not self.healthy:
                return httpx.Response(503, json={"error": "Service unavailable"})
            return httpx.Response(200, json={"status": "ok", "timestamp": "2026-01-01T00:00:00Z"})

        procedure = path.removeprefix("/api/trpc/")
        if request.method == "GET":
            payload = json.loads(request.url.params.get("input", "null"))
        else:
            payload = json.loads(request.content or b"null")
        self.calls.append((procedure, payload))

        if procedure in self.fail_procedures:
            return httpx.Response(500, json={"error": {"message": f"{procedure} exploded"}})
        return httpx.Response(200, json={"result": {"data": self._answer(procedure, payload)}})

    def _answer(self, procedure: str, payload: Any) -> Any:
        if procedure == "video.list":
            return self.jobs
        if procedure == "video.create":
            job = self.next_job or {"id": len(self.jobs) + 1, "status": "pending", "videoUrl": None}
            job = {**job, "projectId": payload["projectId"], "provider": payload["provider"]}
            self.jobs.append(job)
            return job
        if procedure == "projects.get":
            return self.project
        if procedure == "projects.updateContent":
            self.project["content"]["masterVisual"] = payload["masterVisual"]
            return {"success": True}
        if procedure in self.text_responses:
            return self.text_responses[procedure]
        if procedure == "referenceImages.list":
            return self.reference_images
        if procedure == "referenceImages.upload":
            image = {"id": len(self.reference_images) + 1, "projectId": payload["projectId"],
                     "imageUrl": payload["imageUrl"], "description": payload["description"]}
            self.reference_images.append(image)
            return image
        if procedure == "referenceImages.delete":
            self.reference_images = [i for i in self.reference_images if i["id"] != payload["imageId"]]
            return {"success": True}
        raise AssertionError(f"Unexpected procedure: {procedure}")

    def calls_to(self, procedure: str) -> list[Any]:
        return [payload for name, payload in self.calls if name == procedure]


class GatedHandler:
    """Holds requests whose path contains `fragment` until release() is called.

    Lets a test act (stop a session, dispose a bridge) while a request is in
    flight. Everything else is answered straight away by the backend.
    """

    def __init__(self, backend: FakeStudioBackend, fragment: str) -> None:
        self._backend = backend
        self._fragment = fragment
        self.entered = asyncio.Event()
        self._released = asyncio.Event()

    def release(self) -> None:
        self._released.set()

    async def handle(self, request: httpx.Request) -> httpx.Response:
        if self._fragment in request.url.path:
            self.entered.set()
            await self._released.wait()
        return self._backend.handle(request)


def _completed_job(job_id: int, url: str | None = None) -> dict[str, Any]:
    return {"id": job_id, "status": "completed", "videoUrl": url or f"https://cdn.example.com/{job_id}.mp4"}


@pytest.fixture
def completed_job() -> Callable[..., dict[str, Any]]:
    """Build a `video.list` entry for a finished job."""
    return _completed_job


@pytest.fixture
def backend() -> FakeStudioBackend:
    return FakeStudioBackend()


@pytest.fixture
def make_rpc_client() -> Callable[..., StudioRpcClient]:
    """Build a client that answers through the given request handler."""

    def _make(handler) -> StudioRpcClient:
        return StudioRpcClient(
            base_url="http://studio.test",
            trpc_path="/api/trpc",
            transport=httpx.MockTransport(handler),
        )

    return _make


@pytest.fixture
def rpc_client(backend, make_rpc_client) -> StudioRpcClient:
    # MockTransport holds no connections, so the client needs no closing
    return make_rpc_client(backend.handle)


@pytest.fixture
def gated(backend) -> Callable[[str], GatedHandler]:
    """Build a GatedHandler over the shared fake backend."""
    return lambda fragment: GatedHandler(backend, fragment)


@pytest.fixture
def timer() -> ManualTimer:
    return ManualTimer()


@pytest.fixture
def fixed_clock() -> Callable[[], datetime]:
    return lambda: datetime(2026, 1, 1, 12, 0, tzinfo=UTC)


@pytest.fixture
def make_clip() -> Callable[..., Clip]:
    def _make(clip_id: str = "clip-1", track_id: str = "video-1", start: float = 0.0,
              duration: float = 5.0, url: str | None = None) -> Clip:
        return Clip(
            id=clip_id,
            track_id=track_id,
            asset_id=f"asset-{clip_id}",
            start_time=start,
            duration=duration,
            name=clip_id,
            url=url,
        )

    return _make
