"""Application factory for creating and configuring the FastAPI app."""

from pathlib import Path

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi
from fastapi.staticfiles import StaticFiles

from portfolio_site import __version__
from portfolio_site.config import get_settings
from portfolio_site.core.lifespan import lifespan
from portfolio_site.core.middleware import setup_middleware
from portfolio_site.middleware.error_handlers import register_error_handlers
from portfolio_site.routers import (
    comments_router,
    contact_router,
    health_router,
    projects_router,
    spotify_router,
    view_router,
)

STATIC_DIR = Path(__file__).parent.parent / "static"


def custom_openapi(app: FastAPI):
    """OpenAPI schema without the HTML pages and tile fragments."""
    if app.openapi_schema:
        return app.openapi_schema

    openapi_schema = get_openapi(
        title=app.title,
        version=app.version,
        description=app.description,
        routes=app.routes,
    )

    paths = openapi_schema.get("paths", {})
    for path in [p for p in paths if p.startswith("/tiles/") or not p.startswith(("/api/", "/health"))]:
        del paths[path]

    app.openapi_schema = openapi_schema
    return app.openapi_schema


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    settings = get_settings()

    app = FastAPI(
        title="Portfolio Site",
        description="""
        Personal portfolio: introduction, blog, GitHub projects, contact form,
        comment board and a Spotify now-playing widget.

        ## Spotify
        - `POST /api/spotify-token` exchanges the server-side refresh token for an access token
        - `GET /api/spotify/now-playing` shows the widget state

        ## Health
        - `/health` - Basic health check
        - `/health/ready` - Readiness probe
        """,
        version=__version__,
        lifespan=lifespan,
    )

    setup_middleware(app, settings)
    register_error_handlers(app)

    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

    # HTML pages and fragments - no prefix
    app.include_router(view_router.router, tags=["views"])
    app.include_router(health_router.router, tags=["health"])

    # API routes
    app.include_router(spotify_router.router, tags=["spotify"])
    app.include_router(projects_router.router, prefix="/api", tags=["projects"])
    app.include_router(contact_router.router, prefix="/api", tags=["contact"])
    app.include_router(comments_router.router, prefix="/api", tags=["comments"])

    app.openapi = lambda: custom_openapi(app)

    return app
