"""Models for the GitHub projects listing."""

from pydantic import BaseModel, ConfigDict


class GitHubRepo(BaseModel):
    """A public repository as returned by /users/{user}/repos (trimmed)."""

    model_config = ConfigDict(extra="ignore")

    id: int
    name: str
    description: str | None = None
    html_url: str
    stargazers_count: int = 0
    language: str | None = None
    homepage: str | None = None
