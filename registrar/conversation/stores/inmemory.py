"""In-memory implementation of ContextStore."""

import asyncio
from collections.abc import Callable
from datetime import datetime, timedelta
from typing import Any

from registrar.conversation.models import ConversationContext, StoreStats, utc_now
from registrar.conversation.store import ContextStore
from registrar.observability.logging import get_logger

logger = get_logger(__name__)

DEFAULT_TIMEOUT = timedelta(minutes=30)


class InMemoryContextStore(ContextStore):
    """In-memory implementation of ContextStore.

    Stores deep copies so callers never share state with the map, and
    guards every mutation with a single asyncio.Lock. Expiry is lazy:
    get and update drop an entry found past the timeout. Lives only as
    long as the process.
    """

    def __init__(
        self,
        timeout: timedelta = DEFAULT_TIMEOUT,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """Initialize empty storage.

        Args:
            timeout: Inactivity window after which a context expires
            clock: Returns the current time (UTC)
        """
        self._contexts: dict[str, ConversationContext] = {}
        self._timeout = timeout
        self._clock = clock
        self._lock = asyncio.Lock()

    @property
    def timeout(self) -> timedelta:
        return self._timeout

    def _is_expired(self, context: ConversationContext, now: datetime) -> bool:
        return now - context.last_activity_at > self._timeout

    def _live(self, session_id: str, now: datetime) -> ConversationContext | None:
        """Return the stored entry, deleting it if expired. Caller holds the lock."""
        context = self._contexts.get(session_id)
        if context is None:
            return None
        if self._is_expired(context, now):
            del self._contexts[session_id]
            logger.info("context_expired", session_id=session_id)
            return None
        return context

    async def get(self, session_id: str) -> ConversationContext | None:
        """Get a context by session ID, refreshing its activity."""
        async with self._lock:
            now = self._clock()
            context = self._live(session_id, now)
            if context is None:
                return None
            context.last_activity_at = now
            return context.model_copy(deep=True)

    async def save(self, context: ConversationContext) -> str:
        """Save a context, returning its session ID."""
        async with self._lock:
            snapshot = context.model_copy(deep=True)
            snapshot.last_activity_at = self._clock()
            self._contexts[snapshot.session_id] = snapshot
            context.last_activity_at = snapshot.last_activity_at

        logger.debug(
            "context_saved",
            session_id=snapshot.session_id,
            history_size=len(snapshot.history),
        )
        return snapshot.session_id

    async def update(self, session_id: str, **fields: Any) -> ConversationContext | None:
        """Merge fields into a stored context.

        The metadata dict is merged key by key; every other field is
        replaced. Returns None when the session is absent or expired.
        """
        async with self._lock:
            now = self._clock()
            current = self._live(session_id, now)
            if current is None:
                return None

            updated = current.model_copy(deep=True)
            for name, value in fields.items():
                if name == "metadata":
                    updated.metadata = {**updated.metadata, **value}
                else:
                    setattr(updated, name, value)
            updated.last_activity_at = now
            self._contexts[session_id] = updated
            return updated.model_copy(deep=True)

    async def clear(self, session_id: str) -> bool:
        """Remove a context. Returns whether one existed."""
        async with self._lock:
            existed = self._contexts.pop(session_id, None) is not None

        if existed:
            logger.info("context_cleared", session_id=session_id)
        return existed

    async def sweep(self) -> int:
        """Remove every expired context, returning how many were removed."""
        async with self._lock:
            now = self._clock()
            expired = [
                session_id
                for session_id, context in self._contexts.items()
                if self._is_expired(context, now)
            ]
            for session_id in expired:
                del self._contexts[session_id]

        if expired:
            logger.info("contexts_swept", removed=len(expired))
        return len(expired)

    async def stats(self) -> StoreStats:
        """Summarize stored contexts without expiry checks."""
        async with self._lock:
            if not self._contexts:
                return StoreStats()
            oldest = min(self._contexts.values(), key=lambda c: c.last_activity_at)
            return StoreStats(
                active_sessions=len(self._contexts),
                oldest_session_id=oldest.session_id,
            )
