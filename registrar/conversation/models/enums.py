"""Enums for conversation domain."""

from enum import Enum


class MessageRole(str, Enum):
    """Author of a history message."""

    USER = "user"
    ASSISTANT = "assistant"
