"""ContextStore abstract interface."""

from abc import ABC, abstractmethod
from typing import Any

from registrar.conversation.models import ConversationContext, StoreStats


class ContextStore(ABC):
    """Abstract interface for conversation context storage.

    Contexts expire after a period of inactivity. Expired entries are
    never returned, whether or not a sweep has removed them yet.
    """

    @abstractmethod
    async def get(self, session_id: str) -> ConversationContext | None:
        """Get a context by session ID, refreshing its activity."""
        pass

    @abstractmethod
    async def save(self, context: ConversationContext) -> str:
        """Save a context, returning its session ID."""
        pass

    @abstractmethod
    async def update(self, session_id: str, **fields: Any) -> ConversationContext | None:
        """Merge fields into a stored context."""
        pass

    @abstractmethod
    async def clear(self, session_id: str) -> bool:
        """Remove a context. Returns whether one existed."""
        pass

    @abstractmethod
    async def sweep(self) -> int:
        """Remove every expired context, returning how many were removed."""
        pass

    @abstractmethod
    async def stats(self) -> StoreStats:
        """Summarize stored contexts."""
        pass

    async def get_or_create(
        self, session_id: str, student_id: str | None = None
    ) -> ConversationContext:
        """Return the live context for a session, creating it if needed.

        A student_id is backfilled onto an existing context that lacks one.
        """
        context = await self.get(session_id)
        if context is None:
            context = ConversationContext(session_id=session_id, student_id=student_id)
            await self.save(context)
            return context

        if student_id and not context.student_id:
            updated = await self.update(session_id, student_id=student_id)
            if updated is not None:
                return updated
        return context

    async def add_metadata(self, session_id: str, key: str, value: Any) -> bool:
        """Set one metadata key on a stored context."""
        updated = await self.update(session_id, metadata={key: value})
        return updated is not None

    async def has_active_session(self, session_id: str) -> bool:
        """Check whether a non-expired context exists."""
        return await self.get(session_id) is not None
