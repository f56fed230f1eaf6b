"""State managers for application-wide mutable state.

Each manager guards its state with an asyncio.Lock and exposes
initialize/cleanup hooks that the lifespan calls on startup and shutdown.
"""

import asyncio
import uuid
from abc import ABC, abstractmethod
from datetime import UTC, datetime

from portfolio_site.logging_config import get_logger, log_with_context
from portfolio_site.models.comments import Comment, CommentCreate

logger = get_logger(__name__)


class StateManager(ABC):
    """Base class for all state managers."""

    @abstractmethod
    async def initialize(self) -> None:
        """Initialize the state manager (called during app startup)."""
        pass

    @abstractmethod
    async def cleanup(self) -> None:
        """Cleanup resources (called during app shutdown)."""
        pass


class CommentStore(StateManager):
    """In-memory comment board.

    Comments live for the lifetime of the process and are listed newest
    first.
    """

    def __init__(self, max_comments: int = 500):
        self._comments: list[Comment] = []
        self._max_comments = max_comments
        self._lock = asyncio.Lock()

    async def initialize(self) -> None:
        pass

    async def cleanup(self) -> None:
        async with self._lock:
            self._comments.clear()

    async def add(self, new_comment: CommentCreate) -> Comment:
        """Store a comment, stamping it with an id and the current UTC time.

        Args:
            new_comment: Validated comment body

        Returns:
            The stored comment
        """
        comment = Comment(
            id=uuid.uuid4().hex,
            name=new_comment.name,
            message=new_comment.message,
            created_at=datetime.now(UTC),
        )
        async with self._lock:
            self._comments.append(comment)
            # Oldest comments fall off once the board is full
            if len(self._comments) > self._max_comments:
                del self._comments[: len(self._comments) - self._max_comments]
            total = len(self._comments)

        log_with_context(
            logger,
            "info",
            "Comment added",
            comment_id=comment.id,
            total_comments=total,
            event_type="comment_added",
        )
        return comment

    async def list_comments(self) -> list[Comment]:
        """Return all comments, newest first."""
        async with self._lock:
            return sorted(self._comments, key=lambda c: c.created_at, reverse=True)

    async def count(self) -> int:
        async with self._lock:
            return len(self._comments)
