"""Observability: structured logging with PII redaction."""

from registrar.observability.logging import PIIRedactor, get_logger, setup_logging

__all__ = ["PIIRedactor", "get_logger", "setup_logging"]
