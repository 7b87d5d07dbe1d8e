"""Static HTML pages."""
from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, Depends, status
from fastapi.responses import FileResponse, RedirectResponse, Response

from votecast.api.deps import get_optional_identity
from votecast.services.identity import Identity

STATIC_DIR = Path(__file__).resolve().parents[2] / "static"

router = APIRouter(include_in_schema=False)


def _page(name: str) -> FileResponse:
    return FileResponse(STATIC_DIR / name, media_type="text/html")


@router.get("/")
def landing_page(identity: Identity | None = Depends(get_optional_identity)) -> Response:
    if identity is not None:
        return RedirectResponse(url="/vote", status_code=status.HTTP_302_FOUND)
    return _page("index.html")


@router.get("/vote")
def vote_page(identity: Identity | None = Depends(get_optional_identity)) -> Response:
    if identity is None:
        return RedirectResponse(url="/", status_code=status.HTTP_302_FOUND)
    return _page("vote.html")


@router.get("/admin")
def admin_page() -> Response:
    return _page("admin.html")


__all__ = ["STATIC_DIR", "admin_page", "landing_page", "router", "vote_page"]
