"""Template rendering utilities for HTML views."""

from datetime import datetime
from pathlib import Path

import httpx
from fastapi import Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from portfolio_site.config import Settings
from portfolio_site.content import SKILLS, get_blog_posts
from portfolio_site.exceptions import PortfolioException
from portfolio_site.logging_config import get_logger, log_with_context
from portfolio_site.models.blog import BlogPost
from portfolio_site.services import github_service
from portfolio_site.services.now_playing import NowPlayingPoller, render_now_playing
from portfolio_site.state_managers import CommentStore

logger = get_logger(__name__)

TEMPLATES_DIR = Path(__file__).parent.parent / "templates"
templates = Jinja2Templates(directory=TEMPLATES_DIR)

# Background colours cycled across comment cards
COMMENT_COLORS = ["red", "blue", "green", "yellow", "purple", "pink", "indigo", "teal"]


class TemplateRenderer:
    """Handles rendering of Jinja2 templates for all site views."""

    @staticmethod
    def _page(request: Request, name: str, settings: Settings, active: str, **context) -> HTMLResponse:
        return templates.TemplateResponse(
            request,
            name,
            {
                "active": active,
                "site_owner": settings.site_owner,
                "year": datetime.now().year,
                **context,
            },
        )

    @staticmethod
    def render_index(request: Request, settings: Settings) -> HTMLResponse:
        """Render the home page (introduction, skills, now playing, comments)."""
        return TemplateRenderer._page(
            request,
            "index.html",
            settings,
            active="home",
            tagline=settings.site_tagline,
            github_username=settings.github_username,
            skills=SKILLS,
        )

    @staticmethod
    def render_blog(request: Request, settings: Settings) -> HTMLResponse:
        return TemplateRenderer._page(request, "blog.html", settings, active="blog", posts=get_blog_posts())

    @staticmethod
    def render_blog_post(request: Request, settings: Settings, post: BlogPost) -> HTMLResponse:
        return TemplateRenderer._page(request, "blog_post.html", settings, active="blog", post=post)

    @staticmethod
    async def render_projects(request: Request, client: httpx.AsyncClient, settings: Settings) -> HTMLResponse:
        """Render the projects page. Upstream failures become an inline error message.

        Args:
            request: FastAPI request object
            client: HTTP client for API calls
            settings: Settings instance

        Returns:
            HTMLResponse with rendered projects page
        """
        try:
            repos = await github_service.list_repositories(client, settings)
            error = None
        except PortfolioException as e:
            log_with_context(
                logger,
                "warning",
                "Failed to load GitHub projects",
                error=e.message,
                error_code=e.code.value,
                event_type="github_projects_error",
            )
            repos = []
            error = "Something went wrong while loading projects"

        return TemplateRenderer._page(
            request,
            "projects.html",
            settings,
            active="projects",
            repos=repos,
            error=error,
        )

    @staticmethod
    def render_contact(request: Request, settings: Settings) -> HTMLResponse:
        return TemplateRenderer._page(request, "contact.html", settings, active="contact")

    @staticmethod
    def render_now_playing_tile(request: Request, poller: NowPlayingPoller) -> HTMLResponse:
        """Render the now-playing widget fragment from the poller's current snapshot."""
        view = render_now_playing(poller.snapshot())
        return templates.TemplateResponse(request, "tiles/now_playing.html", {"view": view})

    @staticmethod
    async def render_comments_tile(request: Request, store: CommentStore) -> HTMLResponse:
        """Render the comment board fragment."""
        comments = await store.list_comments()
        return templates.TemplateResponse(
            request,
            "tiles/comments.html",
            {"comments": comments, "colors": COMMENT_COLORS},
        )
