"""Top level router registration."""
from fastapi import APIRouter, FastAPI

from votecast.api.routes import auth, health, pages, results, votes


def register_routes(application: FastAPI) -> None:
    """Register all routers with the FastAPI application."""
    api_router = APIRouter(prefix="/api")
    api_router.include_router(votes.router, tags=["votes"])
    api_router.include_router(results.router, tags=["results"])

    application.include_router(health.router, tags=["health"])
    application.include_router(auth.router, prefix="/auth", tags=["auth"])
    application.include_router(api_router)
    application.include_router(pages.router)


__all__ = ["register_routes"]
