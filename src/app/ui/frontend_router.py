"""Serve the single-page frontend and its assets from the configured directory."""

from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter
from fastapi.responses import FileResponse, PlainTextResponse, Response

PREFERRED_PAGE = "screenplayconvertermain.html"
FALLBACK_PAGE = "screenplayconverter.html"
FRONTEND_NOT_FOUND = (
    f"Frontend not found. Place `{PREFERRED_PAGE}` or `{FALLBACK_PAGE}` in the project root."
)
# Web asset types only; sources, configs and dotfiles such as .env stay private.
ASSET_SUFFIXES = frozenset(
    {
        ".html", ".htm", ".css", ".js", ".mjs", ".map",
        ".png", ".jpg", ".jpeg", ".gif", ".svg", ".webp", ".ico",
        ".woff", ".woff2", ".ttf",
    }
)


def resolve_frontend_page(frontend_root: Path) -> Path | None:
    for name in (PREFERRED_PAGE, FALLBACK_PAGE):
        candidate = frontend_root / name
        if candidate.is_file():
            return candidate
    return None


def resolve_frontend_asset(frontend_root: Path, asset_path: str) -> Path | None:
    """Map a request path onto a servable file under ``frontend_root``."""
    parts = Path(asset_path).parts
    if not parts or any(part.startswith(".") for part in parts):
        return None
    root = frontend_root.resolve()
    candidate = (root / asset_path).resolve()
    if not candidate.is_relative_to(root):
        return None
    if candidate.suffix.lower() not in ASSET_SUFFIXES or not candidate.is_file():
        return None
    return candidate


def build_frontend_router(frontend_root: Path) -> APIRouter:
    router = APIRouter(tags=["ui"], include_in_schema=False)

    @router.get("/")
    def index() -> Response:
        page = resolve_frontend_page(frontend_root)
        if page is None:
            return PlainTextResponse(FRONTEND_NOT_FOUND, status_code=404)
        return FileResponse(page, media_type="text/html")

    @router.get("/{asset_path:path}")
    def asset(asset_path: str) -> Response:
        path = resolve_frontend_asset(frontend_root, asset_path)
        if path is None:
            return PlainTextResponse("Not Found", status_code=404)
        return FileResponse(path)

    return router
