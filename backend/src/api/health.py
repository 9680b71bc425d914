"""Health and smoke-test endpoints."""

from datetime import UTC, datetime

from fastapi import APIRouter

from src.schemas.studio import ApiMessage, ApiStatus

router = APIRouter()


@router.get("/health", response_model=ApiStatus)
async def health_check() -> ApiStatus:
    return ApiStatus(status="ok", timestamp=datetime.now(UTC))


@router.get("/test", response_model=ApiMessage)
async def test_endpoint() -> ApiMessage:
    return ApiMessage(message="AI Film Studio API is working!")
