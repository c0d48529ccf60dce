"""Conversation context models."""

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from registrar.conversation.models.enums import MessageRole
from registrar.intent.models import IntentType
from registrar.services.models import StudentProfile


def utc_now() -> datetime:
    """Return current UTC time."""
    return datetime.now(UTC)


class Message(BaseModel):
    """One message in a conversation history."""

    role: MessageRole = Field(..., description="Who wrote the message")
    content: str = Field(..., description="Message text")
    timestamp: datetime = Field(default_factory=utc_now, description="When it was written")


class ConversationContext(BaseModel):
    """Per-session conversation state.

    Owned by the context store. Holds the rolling message history, the
    cached student profile and the last classified intent, plus free-form
    metadata that turns may use to carry values forward.
    """

    model_config = ConfigDict(frozen=False, validate_assignment=True)

    session_id: str = Field(..., description="Unique session identifier")
    student_id: str | None = Field(default=None, description="Identified student")
    history: list[Message] = Field(default_factory=list, description="Oldest first")
    student_profile: StudentProfile | None = Field(
        default=None, description="Cached profile"
    )
    current_intent: IntentType | None = Field(
        default=None, description="Intent of the latest turn"
    )
    entities: dict[str, Any] = Field(
        default_factory=dict, description="Entities from the latest turn"
    )
    metadata: dict[str, Any] = Field(default_factory=dict, description="Free-form data")
    created_at: datetime = Field(default_factory=utc_now, description="Creation time")
    last_activity_at: datetime = Field(
        default_factory=utc_now, description="Last read or write"
    )

    def add_message(
        self, role: MessageRole, content: str, timestamp: datetime | None = None
    ) -> None:
        """Append a message to the history."""
        self.history.append(
            Message(role=role, content=content, timestamp=timestamp or utc_now())
        )

    def trim_history(self, limit: int) -> None:
        """Keep only the newest limit messages."""
        if len(self.history) > limit:
            self.history = self.history[-limit:]


class StoreStats(BaseModel):
    """Snapshot of what a context store holds."""

    active_sessions: int = Field(default=0, ge=0)
    oldest_session_id: str | None = Field(
        default=None, description="Least recently active session"
    )
