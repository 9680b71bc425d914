"""HTTP client for the studio backend: health check and tRPC procedures.

tRPC over HTTP, non-batched: queries are `GET <trpc>/<procedure>?input=<json>`,
mutations are `POST <trpc>/<procedure>` with the input as JSON body. Successful
responses wrap the payload as `{"result": {"data": ...}}`.
"""

import json
import logging
from typing import Any, TypeVar

import httpx
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from src.config import get_settings
from src.exceptions import NetworkError
from src.schemas.studio import (
    ApiMessage,
    ApiStatus,
    ProjectDetails,
    ReferenceImage,
    TextResult,
    VideoJob,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class StudioRpcClient:
    """Typed wrapper around the procedures the studio calls."""

    def __init__(
        self,
        base_url: str | None = None,
        *,
        trpc_path: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        settings = get_settings()
        self._trpc_path = (trpc_path or settings.trpc_path).rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=base_url or settings.api_base_url,
            timeout=timeout or settings.request_timeout_s,
            transport=transport,
        )

    async def __aenter__(self) -> "StudioRpcClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    @property
    def is_closed(self) -> bool:
        return self._client.is_closed

    # =========================================================================
    # Plain endpoints
    # =========================================================================

    async def get_health(self) -> ApiStatus:
        resp = await self._send("GET", "/api/health", procedure="health")
        return self._parse(ApiStatus, self._json(resp, "health"), "health")

    async def get_test_message(self) -> ApiMessage:
        resp = await self._send("GET", "/api/test", procedure="test")
        return self._parse(ApiMessage, self._json(resp, "test"), "test")

    # =========================================================================
    # video.*
    # =========================================================================

    async def list_videos(self, project_id: int) -> list[VideoJob]:
        data = await self._query("video.list", {"projectId": project_id})
        return self._parse(list[VideoJob], data or [], "video.list")

    async def create_video(self, project_id: int, provider: str) -> VideoJob:
        data = await self._mutate("video.create", {"projectId": project_id, "provider": provider})
        return self._parse(VideoJob, data, "video.create")

    # =========================================================================
    # projects.* / ai.*
    # =========================================================================

    async def get_project(self, project_id: int) -> ProjectDetails:
        data = await self._query("projects.get", {"id": project_id})
        return self._parse(ProjectDetails, data, "projects.get")

    async def update_master_visual(self, project_id: int, master_visual: str) -> None:
        await self._mutate(
            "projects.updateContent",
            {"projectId": project_id, "masterVisual": master_visual},
        )

    async def generate_visual_style(self, script: str) -> TextResult:
        data = await self._mutate("ai.generateVisualStyle", {"script": script})
        return self._parse(TextResult, data, "ai.generateVisualStyle")

    async def refine_visual_style(self, visual_style: str, notes: str) -> TextResult:
        data = await self._mutate(
            "ai.refineVisualStyle",
            {"visualStyle": visual_style, "notes": notes},
        )
        return self._parse(TextResult, data, "ai.refineVisualStyle")

    # =========================================================================
    # referenceImages.*
    # =========================================================================

    async def list_reference_images(self, project_id: int) -> list[ReferenceImage]:
        data = await self._query("referenceImages.list", {"projectId": project_id})
        return self._parse(list[ReferenceImage], data or [], "referenceImages.list")

    async def upload_reference_image(
        self, project_id: int, image_url: str, description: str
    ) -> ReferenceImage | None:
        data = await self._mutate(
            "referenceImages.upload",
            {"projectId": project_id, "imageUrl": image_url, "description": description},
        )
        if not isinstance(data, dict):
            return None
        return self._parse(ReferenceImage, data, "referenceImages.upload")

    async def delete_reference_image(self, image_id: int) -> None:
        await self._mutate("referenceImages.delete", {"imageId": image_id})

    # =========================================================================
    # Transport
    # =========================================================================

    async def _query(self, procedure: str, payload: dict[str, Any]) -> Any:
        resp = await self._send(
            "GET",
            f"{self._trpc_path}/{procedure}",
            procedure=procedure,
            params={"input": json.dumps(payload)},
        )
        return self._unwrap(resp, procedure)

    async def _mutate(self, procedure: str, payload: dict[str, Any]) -> Any:
        resp = await self._send(
            "POST",
            f"{self._trpc_path}/{procedure}",
            procedure=procedure,
            json=payload,
        )
        return self._unwrap(resp, procedure)

    async def _send(self, method: str, url: str, *, procedure: str, **kwargs: Any) -> httpx.Response:
        if self._client.is_closed:
            raise NetworkError(f"Client closed before {procedure} was sent", procedure=procedure)
        try:
            resp = await self._client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.warning("%s %s failed: %s", method, url, e)
            raise NetworkError(f"Failed to reach API ({procedure})", procedure=procedure) from e

        if resp.is_error:
            message = self._error_message(resp) or f"HTTP {resp.status_code}"
            logger.warning("%s %s returned %s: %s", method, url, resp.status_code, message)
            raise NetworkError(f"{procedure} failed: {message}", procedure=procedure)
        return resp

    @staticmethod
    def _error_message(resp: httpx.Response) -> str | None:
        try:
            body = resp.json()
        except ValueError:
            return None
        if isinstance(body, dict):
            error = body.get("error")
            if isinstance(error, dict):
                # tRPC error shape: {"error": {"message": ..., "code": ...}}
                return error.get("message") or (error.get("json") or {}).get("message")
            if isinstance(error, str):
                return error
        return None

    @staticmethod
    def _json(resp: httpx.Response, procedure: str) -> Any:
        try:
            return resp.json()
        except ValueError as e:
            raise NetworkError(f"{procedure} returned invalid JSON", procedure=procedure) from e

    @classmethod
    def _unwrap(cls, resp: httpx.Response, procedure: str) -> Any:
        body = cls._json(resp, procedure)
        try:
            return body["result"]["data"]
        except (KeyError, TypeError) as e:
            raise NetworkError(f"{procedure} returned an unexpected payload", procedure=procedure) from e

    @staticmethod
    def _parse(model: type[T], data: Any, procedure: str) -> T:
        try:
            return TypeAdapter(model).validate_python(data)
        except PydanticValidationError as e:
            logger.warning("Unexpected %s payload: %s", procedure, e)
            raise NetworkError(f"{procedure} returned an unexpected payload", procedure=procedure) from e
