"""Single-page client bundle serving.

Files that exist in the bundle directory are served with long-lived cache
headers; every other path falls back to index.html so client-side routes
resolve. If index.html itself is missing the response is a JSON 404.
"""

import logging
from pathlib import Path

from fastapi import APIRouter
from fastapi.responses import FileResponse, JSONResponse, Response

from src.config import get_settings
from src.schemas.errors import ErrorResponse

router = APIRouter()
logger = logging.getLogger(__name__)

INDEX_FILE = "index.html"
ASSET_CACHE_CONTROL = "public, max-age=31536000, immutable"
INDEX_CACHE_CONTROL = "no-cache, no-store, must-revalidate"


def client_dist_dir() -> Path:
    return Path(get_settings().client_dist_path).resolve()


def resolve_asset(dist_dir: Path, request_path: str) -> Path | None:
    """Map a URL path onto a file inside dist_dir, or None.

    Paths escaping dist_dir (e.g. via "..") never resolve.
    """
    if not request_path:
        return None
    candidate = (dist_dir / request_path).resolve()
    if not candidate.is_relative_to(dist_dir) or not candidate.is_file():
        return None
    return candidate


def _file_response(path: Path) -> FileResponse:
    cache_control = INDEX_CACHE_CONTROL if path.name == INDEX_FILE else ASSET_CACHE_CONTROL
    return FileResponse(path=str(path), headers={"Cache-Control": cache_control})


@router.get("/{full_path:path}", include_in_schema=False)
async def serve_client(full_path: str) -> Response:
    dist_dir = client_dist_dir()
    asset = resolve_asset(dist_dir, full_path)
    if asset is not None:
        return _file_response(asset)

    index = dist_dir / INDEX_FILE
    if not index.is_file():
        logger.error("Error serving %s: %s not found", full_path or "/", index)
        body = ErrorResponse(error="Not found")
        return JSONResponse(status_code=404, content=body.model_dump(exclude_none=True))
    return _file_response(index)
