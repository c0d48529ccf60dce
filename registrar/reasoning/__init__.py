"""Dialogue turn orchestration."""

from registrar.reasoning.actions import ActionExecutor
from registrar.reasoning.engine import FALLBACK_REPLY, ReasoningEngine
from registrar.reasoning.models import (
    ActionResult,
    SituationAnalysis,
    TurnMetadata,
    TurnResponse,
)
from registrar.reasoning.response import ResponseBuilder
from registrar.reasoning.situation import SituationAnalyzer

__all__ = [
    "ActionExecutor",
    "ActionResult",
    "FALLBACK_REPLY",
    "ReasoningEngine",
    "ResponseBuilder",
    "SituationAnalysis",
    "SituationAnalyzer",
    "TurnMetadata",
    "TurnResponse",
]
