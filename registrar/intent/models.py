"""Intent classification models."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class IntentType(str, Enum):
    """What the student is trying to do in a single utterance."""

    GREETING = "greeting"
    REQUEST_CERTIFICATE = "request_certificate"
    QUERY_PROGRAM = "query_program"
    CHECK_ACADEMIC_STATUS = "check_academic_status"
    REQUEST_HELP = "request_help"
    UNKNOWN = "unknown"


class IntentClassification(BaseModel):
    """Result of classifying one utterance."""

    intent: IntentType = Field(..., description="Detected intent")
    confidence: float = Field(..., ge=0.0, le=1.0, description="Rule confidence")
    entities: dict[str, Any] = Field(
        default_factory=dict, description="Values extracted from the utterance"
    )
