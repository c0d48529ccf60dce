"""Translation of errors into student-facing guidance.

Maps each RegistrarError kind to a friendly Spanish message, a list of
alternatives, a severity and the escalation and retry signals. Technical
detail goes to the log only.
"""

import re
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from registrar.errors import ErrorCode, RegistrarError
from registrar.observability.logging import get_logger

logger = get_logger(__name__)


class ErrorSeverity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorHandlingResult(BaseModel):
    """Everything a reply needs to explain a failure."""

    user_message: str
    alternatives: list[str] = Field(default_factory=list)
    requires_escalation: bool = False
    severity: ErrorSeverity = ErrorSeverity.MEDIUM
    can_retry: bool = True
    error_code: str = ErrorCode.INTERNAL_ERROR.value


UNKNOWN_ERROR_MESSAGE = (
    "Ocurrió un problema inesperado. Por favor, intenta de nuevo o contacta "
    "con soporte si el problema persiste."
)

ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.STUDENT_NOT_FOUND: (
        "No pude encontrar tu información en el sistema. Por favor, verifica tu "
        "número de identificación."
    ),
    ErrorCode.INVALID_STUDENT_ID: (
        "El número de identificación que proporcionaste no tiene el formato "
        "correcto. Por favor, verifica e intenta de nuevo."
    ),
    ErrorCode.EMPTY_QUERY: (
        "Por favor, proporciona más detalles sobre lo que necesitas saber."
    ),
    ErrorCode.NO_RESULTS_FOUND: (
        "No encontré información sobre tu consulta en nuestra base de conocimiento."
    ),
    ErrorCode.STUDENT_HAS_DEBTS: (
        "No puedo generar tu certificado porque tienes pagos pendientes. Por "
        "favor, regulariza tu situación financiera."
    ),
    ErrorCode.INVALID_CERTIFICATE_TYPE: (
        "El tipo de certificado que solicitaste no está disponible. Por favor, "
        "especifica si necesitas un certificado de inscripción, calificaciones o "
        "graduación."
    ),
    ErrorCode.UNSUPPORTED_PROCEDURE: (
        "Todavía no puedo realizar ese trámite. Por favor, acércate a la oficina "
        "de registro."
    ),
    ErrorCode.GENERATION_FAILED: (
        "Tuve un problema al generar tu certificado. Por favor, intenta de nuevo "
        "en unos minutos."
    ),
    ErrorCode.DELIVERY_FAILED: (
        "Tu certificado fue generado pero tuve problemas al enviarlo. Por favor, "
        "verifica tu correo electrónico o solicita el envío nuevamente."
    ),
    ErrorCode.SERVICE_UNAVAILABLE: (
        "Estoy teniendo dificultades para acceder a algunos servicios en este "
        "momento. Por favor, intenta de nuevo en unos minutos."
    ),
    ErrorCode.TIMEOUT: (
        "La operación está tomando más tiempo del esperado. Por favor, intenta de "
        "nuevo."
    ),
    ErrorCode.UNAUTHORIZED_ACCESS: (
        "Necesito verificar tu identidad antes de continuar. Por favor, "
        "proporciona tu número de identificación de estudiante."
    ),
    ErrorCode.FORBIDDEN_ACCESS: (
        "No tienes los permisos necesarios para realizar esta acción. Si crees "
        "que esto es un error, contacta con soporte."
    ),
}

_ID_ALTERNATIVES = [
    "Verifica tu número de identificación y vuelve a intentar",
    "Contacta con la oficina de registro al (555) 123-4567",
    "Envía un correo a registro@universidad.edu",
]
_CERTIFICATE_ALTERNATIVES = [
    "Intenta solicitar el certificado nuevamente en unos minutos",
    "Contacta con soporte técnico si el problema persiste",
]
_SERVICE_ALTERNATIVES = [
    "Intenta de nuevo en 5-10 minutos",
    "Si es urgente, puedo transferirte con un asesor humano",
]
_DEFAULT_ALTERNATIVES = [
    "Intenta de nuevo en unos minutos",
    "Puedo transferirte con un asesor humano para ayudarte mejor",
]

ALTERNATIVES: dict[ErrorCode, list[str]] = {
    ErrorCode.STUDENT_NOT_FOUND: _ID_ALTERNATIVES,
    ErrorCode.INVALID_STUDENT_ID: _ID_ALTERNATIVES,
    ErrorCode.EMPTY_QUERY: [
        "Reformula tu pregunta con más detalles",
        "Consulta nuestras preguntas frecuentes en el portal web",
    ],
    ErrorCode.NO_RESULTS_FOUND: [
        "Intenta reformular tu pregunta de otra manera",
        "Contacta con la oficina de admisiones para más información",
        "Visita nuestro portal web en www.universidad.edu",
    ],
    ErrorCode.STUDENT_HAS_DEBTS: [
        "Realiza el pago en línea en el portal de pagos",
        "Acércate a la oficina de tesorería",
        "Solicita un plan de pagos llamando al (555) 123-4568",
    ],
    ErrorCode.GENERATION_FAILED: _CERTIFICATE_ALTERNATIVES,
    ErrorCode.DELIVERY_FAILED: _CERTIFICATE_ALTERNATIVES,
    ErrorCode.SERVICE_UNAVAILABLE: _SERVICE_ALTERNATIVES,
    ErrorCode.TIMEOUT: _SERVICE_ALTERNATIVES,
    ErrorCode.UNAUTHORIZED_ACCESS: [
        "Proporciona tu número de identificación de estudiante",
        "Verifica que estés usando las credenciales correctas",
    ],
    ErrorCode.FORBIDDEN_ACCESS: [
        "Contacta con soporte para verificar tus permisos",
        "Puedo transferirte con un asesor que te ayudará",
    ],
}

SEVERITIES: dict[ErrorCode, ErrorSeverity] = {
    ErrorCode.UNAUTHORIZED_ACCESS: ErrorSeverity.CRITICAL,
    ErrorCode.FORBIDDEN_ACCESS: ErrorSeverity.CRITICAL,
    ErrorCode.SERVICE_UNAVAILABLE: ErrorSeverity.HIGH,
    ErrorCode.TIMEOUT: ErrorSeverity.HIGH,
    ErrorCode.GENERATION_FAILED: ErrorSeverity.HIGH,
    ErrorCode.STUDENT_HAS_DEBTS: ErrorSeverity.MEDIUM,
    ErrorCode.DELIVERY_FAILED: ErrorSeverity.MEDIUM,
    ErrorCode.NO_RESULTS_FOUND: ErrorSeverity.MEDIUM,
    ErrorCode.INVALID_STUDENT_ID: ErrorSeverity.LOW,
    ErrorCode.EMPTY_QUERY: ErrorSeverity.LOW,
    ErrorCode.INVALID_CERTIFICATE_TYPE: ErrorSeverity.LOW,
    ErrorCode.STUDENT_NOT_FOUND: ErrorSeverity.LOW,
}

# HIGH errors that a retry by the student cannot fix
_ESCALATING_HIGH = frozenset({ErrorCode.SERVICE_UNAVAILABLE, ErrorCode.GENERATION_FAILED})

_INTERNAL_CODE = re.compile(r"\b[A-Z_]+_ERROR\b")
_SERVICE_NAMES = re.compile(r"\b(DynamoDB|Lambda|Kendra|S3|Redis|PostgreSQL)\b", re.IGNORECASE)
_UUID = re.compile(
    r"\b[a-f0-9]{8}-[a-f0-9]{4}-[a-f0-9]{4}-[a-f0-9]{4}-[a-f0-9]{12}\b",
    re.IGNORECASE,
)


def sanitize_error_message(message: str) -> str:
    """Strip stack lines, internal codes, service names and UUIDs."""
    sanitized = message.split("\n", 1)[0]
    sanitized = _INTERNAL_CODE.sub("", sanitized)
    sanitized = _SERVICE_NAMES.sub("servicio", sanitized)
    sanitized = _UUID.sub("[ID]", sanitized)
    return sanitized.strip()


class ErrorHandler:
    """Builds ErrorHandlingResult values from exceptions."""

    def classify(self, error: Exception) -> ErrorSeverity:
        if isinstance(error, RegistrarError):
            return SEVERITIES.get(error.error_code, ErrorSeverity.MEDIUM)
        return ErrorSeverity.MEDIUM

    def requires_escalation(self, error: Exception) -> bool:
        severity = self.classify(error)
        if severity == ErrorSeverity.CRITICAL:
            return True
        return (
            severity == ErrorSeverity.HIGH
            and isinstance(error, RegistrarError)
            and error.error_code in _ESCALATING_HIGH
        )

    def can_retry(self, error: Exception) -> bool:
        if isinstance(error, RegistrarError):
            return error.retryable
        return True

    def translate(self, error: Exception) -> str:
        if isinstance(error, RegistrarError):
            return ERROR_MESSAGES.get(error.error_code, UNKNOWN_ERROR_MESSAGE)
        return UNKNOWN_ERROR_MESSAGE

    def alternatives(self, error: Exception) -> list[str]:
        if isinstance(error, RegistrarError):
            return list(ALTERNATIVES.get(error.error_code, _DEFAULT_ALTERNATIVES))
        return list(_DEFAULT_ALTERNATIVES)

    def retry_suggestion(self, error: Exception) -> str | None:
        """Suggest retrying, or None when a retry cannot help."""
        if not self.can_retry(error):
            return None
        code = error.error_code if isinstance(error, RegistrarError) else None
        if code in (ErrorCode.SERVICE_UNAVAILABLE, ErrorCode.TIMEOUT):
            return (
                "Por favor, intenta de nuevo en unos minutos cuando el servicio "
                "esté disponible."
            )
        if code in (ErrorCode.GENERATION_FAILED, ErrorCode.DELIVERY_FAILED):
            return "Puedes intentar solicitar el certificado nuevamente ahora."
        if code == ErrorCode.INVALID_STUDENT_ID:
            return "Por favor, verifica tu número de identificación e intenta de nuevo."
        return "Puedes intentar de nuevo."

    def handle(
        self, error: Exception, context: dict[str, Any] | None = None
    ) -> ErrorHandlingResult:
        """Log an error and describe it for the student."""
        code = (
            error.error_code.value
            if isinstance(error, RegistrarError)
            else ErrorCode.INTERNAL_ERROR.value
        )

        logger.error(
            "error_handled",
            error_type=type(error).__name__,
            error_code=code,
            error=sanitize_error_message(str(error)),
            metadata=getattr(error, "metadata", None),
            context=context,
        )

        return ErrorHandlingResult(
            user_message=self.translate(error),
            alternatives=self.alternatives(error),
            requires_escalation=self.requires_escalation(error),
            severity=self.classify(error),
            can_retry=self.can_retry(error),
            error_code=code,
        )

    @staticmethod
    def format_user_message(result: ErrorHandlingResult) -> str:
        """Friendly message followed by the numbered alternatives."""
        message = result.user_message
        if result.alternatives:
            message += "\n\nPuedes:"
            for index, alternative in enumerate(result.alternatives, start=1):
                message += f"\n{index}. {alternative}"
        return message
