"""Context stores for conversation management."""

from registrar.conversation.store import ContextStore
from registrar.conversation.stores.inmemory import InMemoryContextStore

__all__ = [
    "ContextStore",
    "InMemoryContextStore",
]
