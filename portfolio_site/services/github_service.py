"""GitHub service for the projects page."""

import httpx
from pydantic import TypeAdapter, ValidationError

from portfolio_site.cache import cached, get_cache
from portfolio_site.config import Settings, get_settings
from portfolio_site.exceptions import ConfigurationException, ErrorCode, GitHubAPIException, GitHubException
from portfolio_site.logging_config import get_logger, log_with_context
from portfolio_site.models.github import GitHubRepo

logger = get_logger(__name__)

_repo_list = TypeAdapter(list[GitHubRepo])


async def list_repositories(client: httpx.AsyncClient, settings: Settings | None = None) -> list[GitHubRepo]:
    """List the configured user's public repositories, in GitHub's order.

    Results are cached for `settings.github_cache_ttl` seconds.

    Args:
        client: Shared HTTP client for making requests
        settings: Settings instance (defaults to singleton)

    Returns:
        Repositories (may be cached)

    Raises:
        ConfigurationException: If no GitHub username is configured
        GitHubAPIException: If GitHub answers with a non-success status
        GitHubException: On network or parsing failures
    """
    if settings is None:
        settings = get_settings()

    username = settings.github_username
    if not username:
        raise ConfigurationException(
            "GitHub username is not configured",
            code=ErrorCode.CONFIG_MISSING,
            details={"missing": ["github_username"]},
        )

    url = f"{settings.github_api_url.rstrip('/')}/users/{username}/repos"

    async def fetch_repositories() -> list[GitHubRepo]:
        try:
            response = await client.get(
                url,
                headers={"Accept": "application/vnd.github+json"},
                timeout=10.0,
                follow_redirects=True,
            )
            response.raise_for_status()
            repos = _repo_list.validate_python(response.json())
        except httpx.HTTPStatusError as e:
            raise GitHubAPIException(
                f"GitHub API request failed (HTTP {e.response.status_code})",
                details={"upstream_status": e.response.status_code},
            ) from e
        except httpx.HTTPError as e:
            raise GitHubException(
                f"Failed to fetch repositories: {str(e)}",
                details={"error_type": "network_error"},
            ) from e
        except (ValueError, ValidationError) as e:
            raise GitHubException(
                "Failed to process repository data",
                details={"error_type": "parsing_error"},
            ) from e

        log_with_context(
            logger,
            "info",
            "Fetched GitHub repositories",
            username=username,
            repo_count=len(repos),
            event_type="github_repos_fetched",
        )
        return repos

    return await cached(get_cache(), f"github:repos:{username}", settings.github_cache_ttl, fetch_repositories)
