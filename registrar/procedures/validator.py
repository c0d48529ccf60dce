"""Eligibility validation for administrative procedures."""

from collections.abc import Callable

from registrar.config.models import ProceduresConfig
from registrar.observability.logging import get_logger
from registrar.procedures.models import ProcedureType, ValidationResult
from registrar.services.base import AcademicRecordService
from registrar.services.models import AcademicRecord

logger = get_logger(__name__)

LOOKUP_FAILED_IMPEDIMENT = "No se pudo verificar tu información académica"
DEBT_IMPEDIMENT = "Tienes deudas pendientes que deben ser saldadas"
UNKNOWN_PROCEDURE_REQUIREMENT = "Tipo de trámite no reconocido"

RuleCheck = Callable[[AcademicRecord, ValidationResult], None]


class ProcedureValidator:
    """Checks a student's record against per-procedure eligibility rules.

    Never raises: a failed record lookup becomes an impediment, so the
    result fails closed.
    """

    def __init__(
        self,
        record_service: AcademicRecordService,
        config: ProceduresConfig | None = None,
    ) -> None:
        self._record_service = record_service
        self._config = config or ProceduresConfig()
        self._rules: dict[ProcedureType, RuleCheck] = {
            ProcedureType.CERTIFICATE_REQUEST: self._check_certificate_request,
            ProcedureType.ENROLLMENT: self._check_enrollment,
            ProcedureType.COURSE_REGISTRATION: self._check_course_registration,
            ProcedureType.GRADE_APPEAL: self._check_grade_appeal,
            ProcedureType.PROGRAM_CHANGE: self._check_program_change,
            ProcedureType.WITHDRAWAL: self._check_withdrawal,
        }

    async def validate(
        self,
        procedure_type: ProcedureType,
        student_id: str,
        parameters: dict | None = None,
    ) -> ValidationResult:
        """Validate that a student may start a procedure.

        Args:
            procedure_type: Procedure to check
            student_id: Student requesting it
            parameters: Procedure parameters (unused by current rules)

        Returns:
            ValidationResult; is_valid is False when anything blocks
        """
        result = ValidationResult()

        try:
            record = await self._record_service.get_record(
                student_id, include_courses=True, include_grades=True
            )
        except Exception as e:
            logger.error(
                "procedure_validation_lookup_failed",
                procedure_type=procedure_type.value,
                student_id=student_id,
                error=str(e),
            )
            result.impediments.append(LOOKUP_FAILED_IMPEDIMENT)
            return result

        check = self._rules.get(procedure_type)
        if check is None:
            result.missing_requirements.append(UNKNOWN_PROCEDURE_REQUIREMENT)
        else:
            check(record, result)

        logger.info(
            "procedure_validated",
            procedure_type=procedure_type.value,
            student_id=student_id,
            is_valid=result.is_valid,
            impediments=len(result.impediments),
            missing_requirements=len(result.missing_requirements),
            warnings=len(result.warnings),
        )
        return result

    def _check_certificate_request(
        self, record: AcademicRecord, result: ValidationResult
    ) -> None:
        if record.debt_alerts():
            result.impediments.append(DEBT_IMPEDIMENT)
        if record.academic_standing == "probation":
            result.warnings.append("Estás en período de prueba académica")

    def _check_enrollment(self, record: AcademicRecord, result: ValidationResult) -> None:
        if record.in_progress_courses():
            result.impediments.append("Ya tienes materias activas en el semestre actual")
        if record.academic_standing == "probation":
            result.warnings.append(
                "Estás en período de prueba académica. "
                "Consulta con tu asesor antes de inscribirte"
            )

    def _check_course_registration(
        self, record: AcademicRecord, result: ValidationResult
    ) -> None:
        limit = self._config.max_credits_per_semester
        current_credits = sum(c.credits for c in record.in_progress_courses())

        if current_credits >= limit:
            result.impediments.append(
                f"Has alcanzado el límite de créditos por semestre ({limit})"
            )
        if record.academic_standing == "probation":
            result.warnings.append("Estás en período de prueba. Límite reducido de créditos")

    def _check_grade_appeal(self, record: AcademicRecord, result: ValidationResult) -> None:
        if not record.courses:
            result.missing_requirements.append("No tienes materias completadas para apelar")
        result.warnings.append(
            "Verifica que estés dentro del plazo de apelación "
            f"({self._config.appeal_window_days} días)"
        )

    def _check_program_change(
        self, record: AcademicRecord, result: ValidationResult
    ) -> None:
        min_gpa = self._config.min_gpa_program_change
        min_credits = self._config.min_credits_program_change

        if record.gpa < min_gpa:
            result.impediments.append(
                f"Necesitas un GPA mínimo de {min_gpa} para cambiar de programa "
                f"(actual: {record.gpa})"
            )
        if record.completed_credits < min_credits:
            result.impediments.append(
                f"Necesitas al menos {min_credits} créditos completados "
                f"(actual: {record.completed_credits})"
            )

    def _check_withdrawal(self, record: AcademicRecord, result: ValidationResult) -> None:
        if record.courses is not None and not record.in_progress_courses():
            result.missing_requirements.append("No tienes materias activas para retirar")
        result.warnings.append(
            "El retiro puede afectar tu progreso académico y ayuda financiera"
        )
