"""Multi-step execution of administrative procedures.

The executor assumes its caller already validated eligibility; see
ProcedureAutomation. Steps run sequentially and the first failure stops
the procedure.
"""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from registrar.conversation.models import utc_now
from registrar.errors import StudentHasDebtsError
from registrar.observability.logging import get_logger
from registrar.procedures.models import (
    ProcedureExecutionResult,
    ProcedureStep,
    ProcedureType,
    StepStatus,
)
from registrar.services.base import AcademicRecordService, CertificateService
from registrar.services.models import CertificateRequest, CertificateResult

logger = get_logger(__name__)

UNSUPPORTED_MESSAGE = "Tipo de trámite no soportado"
UNEXPECTED_ERROR_MESSAGE = (
    "Ocurrió un error al procesar tu trámite. "
    "Por favor, intenta más tarde o contacta con soporte."
)
DEBTS_MESSAGE = (
    "No puedo generar tu certificado porque tienes deudas pendientes. "
    "Por favor, salda tus deudas y vuelve a intentar."
)
DEBT_CHECK_FAILED_MESSAGE = (
    "No pudimos verificar tu estado financiero. Por favor, intenta más tarde."
)
GENERATION_FAILED_MESSAGE = (
    "No pudimos generar tu certificado. "
    "Por favor, intenta más tarde o contacta con soporte."
)

CERTIFICATE_TYPE_NAMES = {
    "enrollment": "inscripción",
    "grades": "calificaciones",
    "graduation": "graduación",
}


@dataclass(frozen=True)
class FixedPlan:
    """A procedure whose steps always succeed once validated."""

    prefix: str
    steps: tuple[str, ...]
    message: str


FIXED_PLANS: dict[ProcedureType, FixedPlan] = {
    ProcedureType.ENROLLMENT: FixedPlan(
        prefix="INS",
        steps=("Verificación de elegibilidad", "Reserva de cupo", "Generación de factura"),
        message=(
            "Tu inscripción ha sido procesada exitosamente. "
            "Número de seguimiento: {tracking_id}. "
            "Recibirás la factura por correo electrónico."
        ),
    ),
    ProcedureType.COURSE_REGISTRATION: FixedPlan(
        prefix="REG",
        steps=(
            "Verificación de disponibilidad de cupos",
            "Verificación de prerrequisitos",
            "Registro de materia",
        ),
        message=(
            "Tu registro de materia ha sido completado. "
            "Número de confirmación: {tracking_id}. "
            "Puedes ver tu horario en el portal estudiantil."
        ),
    ),
    ProcedureType.GRADE_APPEAL: FixedPlan(
        prefix="APL",
        steps=("Creación de solicitud de apelación", "Notificación al profesor"),
        message=(
            "Tu solicitud de apelación ha sido registrada. "
            "Número de caso: {tracking_id}. "
            "Recibirás una respuesta en un plazo de 5 días hábiles."
        ),
    ),
    ProcedureType.PROGRAM_CHANGE: FixedPlan(
        prefix="CHG",
        steps=(
            "Evaluación de elegibilidad",
            "Creación de solicitud de cambio",
            "Envío a comité académico",
        ),
        message=(
            "Tu solicitud de cambio de programa ha sido enviada al comité académico. "
            "Número de caso: {tracking_id}. "
            "Recibirás una respuesta en 10 días hábiles."
        ),
    ),
    ProcedureType.WITHDRAWAL: FixedPlan(
        prefix="WDR",
        steps=(
            "Verificación de impacto financiero",
            "Procesamiento de retiro",
            "Actualización de registro académico",
        ),
        message=(
            "Tu retiro ha sido procesado. "
            "Número de confirmación: {tracking_id}. "
            "Verifica tu estado de cuenta para ajustes financieros."
        ),
    ),
}


def certificate_confirmation(certificate_type: str, certificate: CertificateResult) -> str:
    """Build the student-facing message for a generated certificate."""
    type_name = CERTIFICATE_TYPE_NAMES.get(certificate_type, certificate_type)

    if certificate.status == "sent" and certificate.delivery is not None:
        message = (
            f"¡Listo! Tu certificado de {type_name} ha sido generado y enviado a "
            f"{certificate.delivery.destination}. "
            "Deberías recibirlo en los próximos minutos."
        )
    elif certificate.download_url:
        message = (
            f"¡Listo! Tu certificado de {type_name} ha sido generado. "
            "Puedes descargarlo desde el siguiente enlace (válido por 24 horas): "
            f"{certificate.download_url}"
        )
    else:
        message = f"¡Listo! Tu certificado de {type_name} ha sido generado exitosamente."

    return f"{message}\n\nNúmero de seguimiento: {certificate.certificate_id}"


class ProcedureExecutor:
    """Runs the step chain of a procedure.

    Certificate requests call the record and certificate services; the
    other procedures run fixed step chains that produce a tracking id.
    """

    def __init__(
        self,
        record_service: AcademicRecordService,
        certificate_service: CertificateService,
        clock: Callable[[], datetime] = utc_now,
        default_delivery_method: str = "email",
    ) -> None:
        self._record_service = record_service
        self._certificate_service = certificate_service
        self._clock = clock
        self._default_delivery_method = default_delivery_method

    async def execute(
        self,
        procedure_type: ProcedureType,
        student_id: str,
        parameters: dict[str, Any] | None = None,
    ) -> ProcedureExecutionResult:
        """Execute a procedure for an already-validated student.

        Args:
            procedure_type: Procedure to run
            student_id: Student it runs for
            parameters: Procedure parameters (certificate_type, delivery_method)

        Returns:
            ProcedureExecutionResult with every step that was attempted
        """
        parameters = parameters or {}
        result = ProcedureExecutionResult(procedure_type=procedure_type)

        logger.info(
            "procedure_execution_started",
            procedure_type=procedure_type.value,
            student_id=student_id,
        )

        try:
            if procedure_type == ProcedureType.CERTIFICATE_REQUEST:
                await self._execute_certificate_request(student_id, parameters, result)
            elif procedure_type in FIXED_PLANS:
                self._execute_fixed_plan(FIXED_PLANS[procedure_type], result)
            else:
                result.final_message = UNSUPPORTED_MESSAGE
                logger.warning(
                    "procedure_unsupported",
                    procedure_type=procedure_type.value,
                    student_id=student_id,
                )
                return result
        except Exception as e:
            logger.error(
                "procedure_execution_error",
                procedure_type=procedure_type.value,
                student_id=student_id,
                error=str(e),
                error_type=type(e).__name__,
            )
            self._abort_open_step(result, "Error inesperado")
            result.blocked_reason = "system_error"
            result.final_message = UNEXPECTED_ERROR_MESSAGE

        logger.info(
            "procedure_execution_finished",
            procedure_type=procedure_type.value,
            student_id=student_id,
            success=result.success,
            steps=len(result.steps),
            tracking_id=result.tracking_id,
            blocked_reason=result.blocked_reason,
        )
        return result

    def tracking_id(self, prefix: str) -> str:
        return f"{prefix}-{int(self._clock().timestamp() * 1000)}"

    def _execute_fixed_plan(self, plan: FixedPlan, result: ProcedureExecutionResult) -> None:
        for name in plan.steps:
            step = result.begin_step(name)
            step.complete()

        result.tracking_id = self.tracking_id(plan.prefix)
        result.final_message = plan.message.format(tracking_id=result.tracking_id)

    async def _execute_certificate_request(
        self,
        student_id: str,
        parameters: dict[str, Any],
        result: ProcedureExecutionResult,
    ) -> None:
        # Identity is established by the channel before a turn reaches us
        identity = result.begin_step("Verificación de identidad")
        identity.complete({"verified": True})

        debts = result.begin_step("Consulta de deudas pendientes")
        try:
            record = await self._record_service.get_record(
                student_id, include_courses=False, include_grades=False
            )
        except Exception as e:
            logger.error("debt_check_failed", student_id=student_id, error=str(e))
            debts.fail("No se pudo consultar el estado de deudas")
            result.blocked_reason = "system_error"
            result.final_message = DEBT_CHECK_FAILED_MESSAGE
            return

        if record.debt_alerts():
            logger.warning("certificate_blocked_by_debts", student_id=student_id)
            debts.fail("Deudas pendientes detectadas", {"has_debts": True})
            result.blocked_reason = "debts"
            result.final_message = DEBTS_MESSAGE
            return
        debts.complete({"has_debts": False})

        certificate_type = parameters.get("certificate_type", "enrollment")
        generation = result.begin_step("Generación de certificado")
        try:
            certificate = await self._certificate_service.generate(
                CertificateRequest(
                    student_id=student_id,
                    certificate_type=certificate_type,
                    delivery_method=parameters.get(
                        "delivery_method", self._default_delivery_method
                    ),
                )
            )
        except StudentHasDebtsError as e:
            logger.warning(
                "certificate_blocked_by_debts",
                student_id=student_id,
                debt_amount=e.debt_amount,
            )
            generation.fail("Deudas pendientes detectadas", {"debt_amount": e.debt_amount})
            result.blocked_reason = "debts"
            result.final_message = (
                "No puedo generar tu certificado porque tienes un saldo pendiente "
                f"de ${e.debt_amount:,.2f}. Por favor, acércate a la oficina de "
                "tesorería o realiza el pago en línea."
            )
            return
        except Exception as e:
            logger.error(
                "certificate_generation_failed",
                student_id=student_id,
                certificate_type=certificate_type,
                error=str(e),
            )
            generation.fail("Error al generar el certificado")
            result.blocked_reason = "system_error"
            result.final_message = GENERATION_FAILED_MESSAGE
            return

        generation.complete(certificate)
        result.tracking_id = certificate.certificate_id
        result.final_message = certificate_confirmation(certificate_type, certificate)

    @staticmethod
    def _abort_open_step(result: ProcedureExecutionResult, error: str) -> None:
        step: ProcedureStep | None = result.steps[-1] if result.steps else None
        if step is not None and step.status == StepStatus.IN_PROGRESS:
            step.fail(error)
