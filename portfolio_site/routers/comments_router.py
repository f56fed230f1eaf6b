"""Comment board API routes."""

from fastapi import APIRouter, Depends, Request, status

from portfolio_site.core.middleware import limiter
from portfolio_site.dependencies import get_comment_store
from portfolio_site.models.comments import Comment, CommentCreate
from portfolio_site.state_managers import CommentStore

router = APIRouter()


@router.get("/comments", response_model=list[Comment], summary="List comments, newest first")
async def list_comments(store: CommentStore = Depends(get_comment_store)):
    return await store.list_comments()


@router.post(
    "/comments",
    response_model=Comment,
    status_code=status.HTTP_201_CREATED,
    summary="Post a comment",
    description="**Rate Limited:** 10 requests/minute per IP",
    responses={422: {"description": "Name or message missing"}},
)
@limiter.limit("10/minute")
async def create_comment(
    request: Request,
    body: CommentCreate,
    store: CommentStore = Depends(get_comment_store),
):
    return await store.add(body)
