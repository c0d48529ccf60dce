"""Test factories for conversation domain models."""

from datetime import datetime

from registrar.conversation.models import ConversationContext, Message, MessageRole
from registrar.services.models import StudentProfile


class ContextFactory:
    """Factory for creating ConversationContext instances for testing."""

    @staticmethod
    def create(
        *,
        session_id: str = "session-1",
        student_id: str | None = None,
        student_profile: StudentProfile | None = None,
        history_size: int = 0,
        created_at: datetime | None = None,
    ) -> ConversationContext:
        """Create a ConversationContext with sensible defaults.

        Args:
            session_id: Session identifier
            student_id: Identified student
            student_profile: Cached profile
            history_size: Number of alternating user/assistant messages
            created_at: Creation and last activity time
        """
        history = [
            Message(
                role=MessageRole.USER if i % 2 == 0 else MessageRole.ASSISTANT,
                content=f"message {i}",
            )
            for i in range(history_size)
        ]
        context = ConversationContext(
            session_id=session_id,
            student_id=student_id,
            student_profile=student_profile,
            history=history,
        )
        if created_at is not None:
            context.created_at = created_at
            context.last_activity_at = created_at
        return context
