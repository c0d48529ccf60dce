"""Turn processing models.

Contains the per-turn intermediate results and the TurnResponse
returned to the channel.
"""

from pydantic import BaseModel, Field

from registrar.advising.models import AcademicAnalysis, ImpedimentAnalysis
from registrar.dialogue.errors import ErrorHandlingResult
from registrar.intent.models import IntentType
from registrar.procedures.models import ProcedureOutcome
from registrar.knowledge.models import KnowledgeAnswer

MISSING_STUDENT_ID = "missing_student_id"
RECORD_UNAVAILABLE = "record_unavailable"
SERVICE_ERROR = "service_error"


class SituationAnalysis(BaseModel):
    """Domain state gathered for the turn's intent."""

    academic_analysis: AcademicAnalysis | None = None
    impediments: ImpedimentAnalysis | None = None


class ActionResult(BaseModel):
    """What the actions for an intent produced."""

    intent: IntentType
    success: bool = True
    error: str | None = Field(
        default=None, description="missing_student_id, record_unavailable, service_error"
    )
    tools_used: list[str] = Field(default_factory=list)
    procedure: ProcedureOutcome | None = None
    knowledge: KnowledgeAnswer | None = None
    academic_analysis: AcademicAnalysis | None = None
    impediments: ImpedimentAnalysis | None = None
    handled_error: ErrorHandlingResult | None = None


class TurnMetadata(BaseModel):
    """Diagnostics attached to every reply."""

    tools_used: list[str] = Field(default_factory=list)
    processing_time_ms: float = Field(default=0.0, ge=0)
    intent: IntentType | None = None
    confidence: float | None = Field(default=None, ge=0.0, le=1.0)
    error_code: str | None = None
    can_retry: bool | None = None


class TurnResponse(BaseModel):
    """Reply for one turn."""

    reply_text: str = Field(..., description="Text shown to the student")
    requires_escalation: bool = Field(
        default=False, description="Hand the conversation to a human"
    )
    metadata: TurnMetadata = Field(default_factory=TurnMetadata)
