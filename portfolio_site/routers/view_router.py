"""Page/view routes for serving HTML pages and tile fragments."""

import httpx
from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import HTMLResponse

from portfolio_site.config import Settings, get_settings
from portfolio_site.content import get_blog_post
from portfolio_site.dependencies import get_comment_store, get_http_client, get_now_playing_poller
from portfolio_site.services.now_playing import NowPlayingPoller
from portfolio_site.state_managers import CommentStore
from portfolio_site.views.template_renderer import TemplateRenderer

router = APIRouter()


@router.get("/", response_class=HTMLResponse)
async def index(request: Request, settings: Settings = Depends(get_settings)):
    """Render the home page."""
    return TemplateRenderer.render_index(request, settings)


@router.get("/blog", response_class=HTMLResponse)
async def blog(request: Request, settings: Settings = Depends(get_settings)):
    return TemplateRenderer.render_blog(request, settings)


@router.get("/blog/{post_id}", response_class=HTMLResponse)
async def blog_post(post_id: int, request: Request, settings: Settings = Depends(get_settings)):
    post = get_blog_post(post_id)
    if post is None:
        raise HTTPException(status_code=404, detail="Post not found")
    return TemplateRenderer.render_blog_post(request, settings, post)


@router.get("/projects", response_class=HTMLResponse)
async def projects(
    request: Request,
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
):
    return await TemplateRenderer.render_projects(request, client, settings)


@router.get("/contact", response_class=HTMLResponse)
async def contact(request: Request, settings: Settings = Depends(get_settings)):
    return TemplateRenderer.render_contact(request, settings)


@router.get("/tiles/now-playing", response_class=HTMLResponse)
async def now_playing_tile(request: Request, poller: NowPlayingPoller = Depends(get_now_playing_poller)):
    """Render the now-playing widget fragment."""
    return TemplateRenderer.render_now_playing_tile(request, poller)


@router.get("/tiles/comments", response_class=HTMLResponse)
async def comments_tile(request: Request, store: CommentStore = Depends(get_comment_store)):
    """Render the comment board fragment."""
    return await TemplateRenderer.render_comments_tile(request, store)
