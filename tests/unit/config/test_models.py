"""Unit tests for configuration Pydantic models."""

from datetime import timedelta

import pytest
from pydantic import ValidationError

from registrar.config.models import (
    EngineConfig,
    LoggingConfig,
    ProceduresConfig,
    SessionConfig,
)


class TestSessionConfig:
    """Tests for SessionConfig model."""

    def test_timeout_property(self) -> None:
        """timeout converts minutes to a timedelta."""
        assert SessionConfig(timeout_minutes=2.5).timeout == timedelta(seconds=150)

    def test_timeout_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            SessionConfig(timeout_minutes=0)

    def test_history_limit_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            SessionConfig(history_limit=0)


class TestProceduresConfig:
    """Tests for ProceduresConfig model."""

    def test_gpa_range(self) -> None:
        """min_gpa_program_change stays within 0..5."""
        with pytest.raises(ValidationError):
            ProceduresConfig(min_gpa_program_change=6.0)

    def test_credits_can_be_zero(self) -> None:
        config = ProceduresConfig(min_credits_program_change=0)
        assert config.min_credits_program_change == 0

    def test_credit_limit_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            ProceduresConfig(max_credits_per_semester=0)


class TestEngineConfig:
    """Tests for EngineConfig model."""

    def test_invalid_delivery_method(self) -> None:
        with pytest.raises(ValidationError):
            EngineConfig(default_delivery_method="fax")

    def test_knowledge_results_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            EngineConfig(knowledge_max_results=0)


class TestLoggingConfig:
    """Tests for LoggingConfig model."""

    def test_defaults(self) -> None:
        config = LoggingConfig()
        assert config.level == "INFO"
        assert config.format == "json"

    def test_invalid_level(self) -> None:
        with pytest.raises(ValidationError):
            LoggingConfig(level="VERBOSE")
