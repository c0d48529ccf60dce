"""Configuration section models."""

from registrar.config.models.engine import EngineConfig
from registrar.config.models.observability import LoggingConfig, ObservabilityConfig
from registrar.config.models.procedures import ProceduresConfig
from registrar.config.models.session import SessionConfig

__all__ = [
    "EngineConfig",
    "LoggingConfig",
    "ObservabilityConfig",
    "ProceduresConfig",
    "SessionConfig",
]
