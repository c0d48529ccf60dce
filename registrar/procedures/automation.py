"""Validate-then-execute composition of the procedure components."""

from typing import Any

from registrar.observability.logging import get_logger
from registrar.procedures.classifier import classify_procedure
from registrar.procedures.executor import ProcedureExecutor
from registrar.procedures.models import (
    ProcedureClassification,
    ProcedureOutcome,
    ProcedureType,
)
from registrar.procedures.validator import ProcedureValidator

logger = get_logger(__name__)


class ProcedureAutomation:
    """Runs a procedure only after its eligibility check passes.

    This is the single entry point that callers should use; the executor
    never validates on its own.
    """

    def __init__(self, validator: ProcedureValidator, executor: ProcedureExecutor) -> None:
        self._validator = validator
        self._executor = executor

    async def run(
        self,
        procedure_type: ProcedureType,
        student_id: str,
        parameters: dict[str, Any] | None = None,
        *,
        classification: ProcedureClassification | None = None,
    ) -> ProcedureOutcome:
        """Validate and, when eligible, execute a known procedure."""
        parameters = parameters or {}
        classification = classification or ProcedureClassification(
            procedure_type=procedure_type, confidence=1.0, parameters=parameters
        )

        validation = await self._validator.validate(procedure_type, student_id, parameters)
        if not validation.is_valid:
            logger.info(
                "procedure_blocked_by_validation",
                procedure_type=procedure_type.value,
                student_id=student_id,
                impediments=validation.impediments,
                missing_requirements=validation.missing_requirements,
            )
            return ProcedureOutcome(classification=classification, validation=validation)

        execution = await self._executor.execute(procedure_type, student_id, parameters)
        return ProcedureOutcome(
            classification=classification,
            validation=validation,
            execution=execution,
        )

    async def handle_request(self, message: str, student_id: str) -> ProcedureOutcome:
        """Classify a free-text request, then validate and execute it."""
        classification = classify_procedure(message)

        logger.info(
            "procedure_classified",
            procedure_type=classification.procedure_type.value,
            confidence=classification.confidence,
            student_id=student_id,
        )

        return await self.run(
            classification.procedure_type,
            student_id,
            classification.parameters,
            classification=classification,
        )
