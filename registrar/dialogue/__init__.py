"""Student-facing text: greetings, help menus and error guidance."""

from registrar.dialogue.errors import (
    ErrorHandler,
    ErrorHandlingResult,
    ErrorSeverity,
    sanitize_error_message,
)
from registrar.dialogue.greetings import (
    IDENTIFICATION_REQUEST,
    generate_greeting,
    generate_time_based_greeting,
)
from registrar.dialogue.help import UNKNOWN_REQUEST_MESSAGE, generate_help_message

__all__ = [
    "ErrorHandler",
    "ErrorHandlingResult",
    "ErrorSeverity",
    "IDENTIFICATION_REQUEST",
    "UNKNOWN_REQUEST_MESSAGE",
    "generate_greeting",
    "generate_help_message",
    "generate_time_based_greeting",
    "sanitize_error_message",
]
