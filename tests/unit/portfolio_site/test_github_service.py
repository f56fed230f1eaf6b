"""Unit tests for the GitHub service."""

from unittest.mock import MagicMock

import httpx
import pytest

from portfolio_site.exceptions import ConfigurationException, GitHubAPIException, GitHubException
from portfolio_site.services import github_service


def _response(status_code: int, **kwargs) -> httpx.Response:
    return httpx.Response(status_code, request=httpx.Request("GET", "https://api.github.com/users/octocat/repos"), **kwargs)


@pytest.mark.asyncio
async def test_list_repositories_success(mock_http_client, mock_settings, github_repos_payload, clear_cache):
    mock_http_client.get.return_value = _response(200, json=github_repos_payload)

    repos = await github_service.list_repositories(mock_http_client, mock_settings)

    assert [repo.name for repo in repos] == ["portfolio", "dotfiles"]
    assert repos[0].stargazers_count == 5
    assert repos[1].description is None

    url = mock_http_client.get.call_args[0][0]
    assert url == "https://api.github.com/users/octocat/repos"


@pytest.mark.asyncio
async def test_list_repositories_cached(mock_http_client, mock_settings, github_repos_payload, clear_cache):
    mock_http_client.get.return_value = _response(200, json=github_repos_payload)

    await github_service.list_repositories(mock_http_client, mock_settings)
    await github_service.list_repositories(mock_http_client, mock_settings)

    mock_http_client.get.assert_called_once()


@pytest.mark.asyncio
async def test_list_repositories_cache_disabled(mock_http_client, mock_settings, github_repos_payload, clear_cache):
    mock_http_client.get.return_value = _response(200, json=github_repos_payload)
    settings = mock_settings.model_copy(update={"github_cache_ttl": 0})

    await github_service.list_repositories(mock_http_client, settings)
    await github_service.list_repositories(mock_http_client, settings)

    assert mock_http_client.get.call_count == 2


@pytest.mark.asyncio
async def test_list_repositories_requires_username(mock_http_client, mock_settings, clear_cache):
    settings = mock_settings.model_copy(update={"github_username": ""})

    with pytest.raises(ConfigurationException):
        await github_service.list_repositories(mock_http_client, settings)

    mock_http_client.get.assert_not_called()


@pytest.mark.asyncio
async def test_list_repositories_api_error(mock_http_client, mock_settings, clear_cache):
    mock_http_client.get.return_value = _response(404, json={"message": "Not Found"})

    with pytest.raises(GitHubAPIException) as exc_info:
        await github_service.list_repositories(mock_http_client, mock_settings)

    assert exc_info.value.status_code == 502
    assert exc_info.value.details["upstream_status"] == 404


@pytest.mark.asyncio
async def test_list_repositories_network_error(mock_http_client, mock_settings, clear_cache):
    mock_http_client.get.side_effect = httpx.ConnectError("Connection refused", request=MagicMock())

    with pytest.raises(GitHubException) as exc_info:
        await github_service.list_repositories(mock_http_client, mock_settings)

    assert exc_info.value.details["error_type"] == "network_error"


@pytest.mark.asyncio
async def test_list_repositories_unexpected_shape(mock_http_client, mock_settings, clear_cache):
    mock_http_client.get.return_value = _response(200, json={"message": "not a list"})

    with pytest.raises(GitHubException) as exc_info:
        await github_service.list_repositories(mock_http_client, mock_settings)

    assert exc_info.value.details["error_type"] == "parsing_error"
