"""GitHub projects API routes."""

import httpx
from fastapi import APIRouter, Depends

from portfolio_site.config import Settings, get_settings
from portfolio_site.dependencies import get_http_client
from portfolio_site.models import ErrorResponse, GitHubRepo
from portfolio_site.services import github_service

router = APIRouter()


@router.get(
    "/projects",
    response_model=list[GitHubRepo],
    summary="List public GitHub repositories",
    description="""
    Lists the configured user's public repositories in GitHub's order.
    Results are cached for `GITHUB_CACHE_TTL` seconds (10 minutes by default).
    """,
    responses={
        200: {
            "description": "Successful response",
            "content": {
                "application/json": {
                    "example": [
                        {
                            "id": 1,
                            "name": "portfolio",
                            "description": "My personal site",
                            "html_url": "https://github.com/user/portfolio",
                            "stargazers_count": 3,
                            "language": "Python",
                            "homepage": None,
                        }
                    ]
                }
            },
        },
        500: {"model": ErrorResponse, "description": "GitHub username not configured"},
        502: {"model": ErrorResponse, "description": "GitHub API error"},
    },
)
async def list_projects(
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
):
    return await github_service.list_repositories(client, settings)
