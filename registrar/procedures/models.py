"""Procedure automation models.

A procedure runs as an ordered list of steps. Each step moves
pending -> in_progress -> completed | failed and never goes back.
"""

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class ProcedureType(str, Enum):
    """Administrative procedures the assistant can carry out."""

    CERTIFICATE_REQUEST = "certificate_request"
    ENROLLMENT = "enrollment"
    COURSE_REGISTRATION = "course_registration"
    GRADE_APPEAL = "grade_appeal"
    PROGRAM_CHANGE = "program_change"
    WITHDRAWAL = "withdrawal"
    UNKNOWN = "unknown"


class StepStatus(str, Enum):
    """Lifecycle of a procedure step."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    FAILED = "failed"


_ALLOWED_TRANSITIONS: dict[StepStatus, frozenset[StepStatus]] = {
    StepStatus.PENDING: frozenset({StepStatus.IN_PROGRESS}),
    StepStatus.IN_PROGRESS: frozenset({StepStatus.COMPLETED, StepStatus.FAILED}),
    StepStatus.COMPLETED: frozenset(),
    StepStatus.FAILED: frozenset(),
}

BlockedReason = Literal["debts", "system_error"]


class ProcedureClassification(BaseModel):
    """Procedure detected in a free-text request."""

    procedure_type: ProcedureType
    confidence: float = Field(..., ge=0.0, le=1.0)
    parameters: dict[str, Any] = Field(default_factory=dict)


class ValidationResult(BaseModel):
    """Eligibility check outcome.

    Missing requirements are things the student must still supply;
    impediments are hard blocks from their record; warnings never block.
    """

    missing_requirements: list[str] = Field(default_factory=list)
    impediments: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.impediments and not self.missing_requirements


class ProcedureStep(BaseModel):
    """One ordered unit of a procedure execution."""

    model_config = ConfigDict(frozen=False, validate_assignment=True)

    step_number: int = Field(..., ge=1, description="1-based position")
    name: str = Field(..., description="Human-readable step name")
    status: StepStatus = Field(default=StepStatus.PENDING)
    result: Any | None = Field(default=None, description="Step output")
    error: str | None = Field(default=None, description="Failure description")

    def _transition(self, target: StepStatus) -> None:
        if target not in _ALLOWED_TRANSITIONS[self.status]:
            raise ValueError(
                f"Step {self.step_number} cannot move from "
                f"{self.status.value} to {target.value}"
            )
        self.status = target

    def start(self) -> None:
        self._transition(StepStatus.IN_PROGRESS)

    def complete(self, result: Any | None = None) -> None:
        self._transition(StepStatus.COMPLETED)
        self.result = result

    def fail(self, error: str, result: Any | None = None) -> None:
        self._transition(StepStatus.FAILED)
        self.error = error
        self.result = result


class ProcedureExecutionResult(BaseModel):
    """Steps run for one procedure and the message to show the student."""

    model_config = ConfigDict(frozen=False, validate_assignment=True)

    procedure_type: ProcedureType
    steps: list[ProcedureStep] = Field(default_factory=list)
    final_message: str = ""
    tracking_id: str | None = None
    blocked_reason: BlockedReason | None = None

    @property
    def success(self) -> bool:
        return (
            bool(self.steps)
            and self.blocked_reason is None
            and all(step.status == StepStatus.COMPLETED for step in self.steps)
        )

    @property
    def failed_step(self) -> ProcedureStep | None:
        return next((s for s in self.steps if s.status == StepStatus.FAILED), None)

    def begin_step(self, name: str) -> ProcedureStep:
        """Append the next step and mark it in progress.

        Raises:
            ValueError: If an earlier step has failed
        """
        if self.failed_step is not None:
            raise ValueError("Cannot add steps after a failed step")
        step = ProcedureStep(step_number=len(self.steps) + 1, name=name)
        step.start()
        self.steps.append(step)
        return step


class ProcedureOutcome(BaseModel):
    """Full classify, validate, execute pass for one request."""

    classification: ProcedureClassification
    validation: ValidationResult
    execution: ProcedureExecutionResult | None = Field(
        default=None, description="None when validation blocked execution"
    )

    @property
    def success(self) -> bool:
        return self.execution is not None and self.execution.success
