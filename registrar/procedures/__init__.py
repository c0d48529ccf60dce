"""Administrative procedure automation.

Classifies a request into a procedure, validates eligibility against
the student's record, then executes the procedure's ordered steps.
"""

from registrar.procedures.automation import ProcedureAutomation
from registrar.procedures.classifier import (
    PROCEDURE_RULES,
    ProcedureRule,
    classify_procedure,
)
from registrar.procedures.executor import FIXED_PLANS, ProcedureExecutor
from registrar.procedures.models import (
    ProcedureClassification,
    ProcedureExecutionResult,
    ProcedureOutcome,
    ProcedureStep,
    ProcedureType,
    StepStatus,
    ValidationResult,
)
from registrar.procedures.validator import ProcedureValidator

__all__ = [
    # Components
    "ProcedureAutomation",
    "ProcedureExecutor",
    "ProcedureValidator",
    "classify_procedure",
    # Rules
    "FIXED_PLANS",
    "PROCEDURE_RULES",
    "ProcedureRule",
    # Models
    "ProcedureClassification",
    "ProcedureExecutionResult",
    "ProcedureOutcome",
    "ProcedureStep",
    "ProcedureType",
    "StepStatus",
    "ValidationResult",
]
