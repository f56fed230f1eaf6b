"""Response models shared by the health endpoints and the error handlers."""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, Field

from portfolio_site.exceptions import ErrorCode


class HealthResponse(BaseModel):
    """Liveness response."""

    status: Literal["ok"] = "ok"
    version: str


class ReadinessChecks(BaseModel):
    """Per-dependency readiness results. Filling these in never calls an upstream."""

    http_client: Literal["ok", "failed"]
    spotify_config: Literal["ok", "missing"]
    now_playing: str = Field(..., description="Poller phase, or 'error: <message>' when halted")
    comments: int = Field(..., ge=0, description="Comments currently stored")
    uptime_seconds: int = Field(..., ge=0)
    requests: int = Field(..., ge=0, description="Requests served since startup")


class ReadinessResponse(BaseModel):
    status: Literal["healthy", "unhealthy"]
    version: str
    timestamp: datetime
    checks: ReadinessChecks


class ErrorBody(BaseModel):
    code: ErrorCode
    message: str
    details: dict[str, Any] = Field(default_factory=dict)


class ErrorResponse(BaseModel):
    """Envelope used for every PortfolioException response: `{"error": {...}}`."""

    error: ErrorBody
