"""Portfolio site models"""

from portfolio_site.models.base_models import (
    ErrorBody,
    ErrorResponse,
    HealthResponse,
    ReadinessChecks,
    ReadinessResponse,
)
from portfolio_site.models.blog import BlogPost
from portfolio_site.models.comments import Comment, CommentCreate
from portfolio_site.models.contact import ContactMessage, ContactResult
from portfolio_site.models.github import GitHubRepo
from portfolio_site.models.now_playing import (
    NowPlayingSnapshot,
    NowPlayingView,
    PlaybackStatus,
    PollOutcome,
    PollResult,
    TokenPayload,
    Track,
    WidgetPhase,
)

__all__ = [
    "BlogPost",
    "Comment",
    "CommentCreate",
    "ContactMessage",
    "ContactResult",
    "ErrorBody",
    "ErrorResponse",
    "GitHubRepo",
    "HealthResponse",
    "NowPlayingSnapshot",
    "NowPlayingView",
    "PlaybackStatus",
    "PollOutcome",
    "PollResult",
    "ReadinessChecks",
    "ReadinessResponse",
    "TokenPayload",
    "Track",
    "WidgetPhase",
]
