"""Conversation domain models.

Contains the Pydantic models for per-session state:
- ConversationContext for the live session
- Message for history entries
- StoreStats for store inspection
"""

from registrar.conversation.models.context import (
    ConversationContext,
    Message,
    StoreStats,
    utc_now,
)
from registrar.conversation.models.enums import MessageRole

__all__ = [
    # Enums
    "MessageRole",
    # Context models
    "ConversationContext",
    "Message",
    "StoreStats",
    "utc_now",
]
