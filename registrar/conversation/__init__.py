"""Conversation state: per-session context, its stores and the sweeper."""

from registrar.conversation.models import (
    ConversationContext,
    Message,
    MessageRole,
    StoreStats,
)
from registrar.conversation.store import ContextStore
from registrar.conversation.stores import InMemoryContextStore
from registrar.conversation.sweeper import ContextSweeper

__all__ = [
    "ContextStore",
    "ContextSweeper",
    "ConversationContext",
    "InMemoryContextStore",
    "Message",
    "MessageRole",
    "StoreStats",
]
