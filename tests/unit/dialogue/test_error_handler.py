"""Tests for error translation and escalation."""

import pytest

from registrar.dialogue import ErrorHandler, ErrorSeverity, sanitize_error_message
from registrar.dialogue.errors import ERROR_MESSAGES, UNKNOWN_ERROR_MESSAGE
from registrar.errors import (
    ErrorCode,
    GenerationFailedError,
    InvalidStudentIdError,
    NoResultsFoundError,
    ServiceTimeoutError,
    ServiceUnavailableError,
    StudentHasDebtsError,
    StudentNotFoundError,
    UnauthorizedAccessError,
)


@pytest.fixture
def handler():
    return ErrorHandler()


class TestClassification:
    """Tests for severity and escalation."""

    @pytest.mark.parametrize(
        "error,severity,escalate",
        [
            (UnauthorizedAccessError("record"), ErrorSeverity.CRITICAL, True),
            (ServiceUnavailableError("academic"), ErrorSeverity.HIGH, True),
            (GenerationFailedError("pdf"), ErrorSeverity.HIGH, True),
            (ServiceTimeoutError("search", 3000), ErrorSeverity.HIGH, False),
            (StudentHasDebtsError("STU003", 500.0), ErrorSeverity.MEDIUM, False),
            (InvalidStudentIdError("x"), ErrorSeverity.LOW, False),
            (RuntimeError("boom"), ErrorSeverity.MEDIUM, False),
        ],
    )
    def test_severity_and_escalation(self, handler, error, severity, escalate):
        assert handler.classify(error) == severity
        assert handler.requires_escalation(error) is escalate

    def test_retryability(self, handler):
        """Should follow the error's retryable flag."""
        assert handler.can_retry(ServiceUnavailableError("academic")) is True
        assert handler.can_retry(StudentHasDebtsError("STU003", 500.0)) is False
        assert handler.can_retry(RuntimeError("boom")) is True


class TestTranslation:
    """Tests for student-facing text."""

    def test_known_error(self, handler):
        assert handler.translate(StudentNotFoundError("STU9")) == (
            ERROR_MESSAGES[ErrorCode.STUDENT_NOT_FOUND]
        )

    def test_unknown_error(self, handler):
        assert handler.translate(ValueError("x")) == UNKNOWN_ERROR_MESSAGE

    def test_alternatives_are_copies(self, handler):
        """Should not expose the shared alternatives list."""
        alternatives = handler.alternatives(StudentNotFoundError("STU9"))
        alternatives.clear()

        assert handler.alternatives(StudentNotFoundError("STU9"))

    def test_retry_suggestion(self, handler):
        assert handler.retry_suggestion(StudentHasDebtsError("STU003", 1.0)) is None
        assert "certificado" in handler.retry_suggestion(GenerationFailedError("pdf"))
        assert handler.retry_suggestion(RuntimeError("x")) == "Puedes intentar de nuevo."


class TestHandle:
    """Tests for the combined result."""

    def test_handle_domain_error(self, handler):
        result = handler.handle(NoResultsFoundError("cafetería"), {"session_id": "s1"})

        assert result.error_code == "NO_RESULTS_FOUND"
        assert result.can_retry is False
        assert result.requires_escalation is False
        assert len(result.alternatives) == 3

    def test_handle_unexpected_error(self, handler):
        result = handler.handle(KeyError("secret"))

        assert result.error_code == "INTERNAL_ERROR"
        assert result.user_message == UNKNOWN_ERROR_MESSAGE

    def test_format_user_message(self, handler):
        """Should number the alternatives under the message."""
        result = handler.handle(ServiceUnavailableError("academic"))

        message = ErrorHandler.format_user_message(result)

        assert message.startswith(result.user_message)
        assert "\n\nPuedes:\n1. Intenta de nuevo en 5-10 minutos\n2. " in message


class TestSanitize:
    """Tests for sanitize_error_message."""

    def test_strips_technical_detail(self):
        raw = (
            "Failed DB_CONNECTION_ERROR on Redis for "
            "123e4567-e89b-12d3-a456-426614174000\n  at line 42"
        )

        sanitized = sanitize_error_message(raw)

        assert "DB_CONNECTION_ERROR" not in sanitized
        assert "Redis" not in sanitized
        assert "servicio" in sanitized
        assert "[ID]" in sanitized
        assert "line 42" not in sanitized
