"""Exception hierarchy shared by the engine and its collaborators.

All errors inherit from RegistrarError, which carries an error_code,
an HTTP-like status_code and a retryable flag. Collaborators raise
these; validators and classifiers never do, they return structured
results instead.
"""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Machine-readable error codes."""

    STUDENT_NOT_FOUND = "STUDENT_NOT_FOUND"
    INVALID_STUDENT_ID = "INVALID_STUDENT_ID"
    EMPTY_QUERY = "EMPTY_QUERY"
    NO_RESULTS_FOUND = "NO_RESULTS_FOUND"
    STUDENT_HAS_DEBTS = "STUDENT_HAS_DEBTS"
    INVALID_CERTIFICATE_TYPE = "INVALID_CERTIFICATE_TYPE"
    UNSUPPORTED_PROCEDURE = "UNSUPPORTED_PROCEDURE"
    GENERATION_FAILED = "GENERATION_FAILED"
    DELIVERY_FAILED = "DELIVERY_FAILED"
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"
    TIMEOUT = "TIMEOUT"
    UNAUTHORIZED_ACCESS = "UNAUTHORIZED_ACCESS"
    FORBIDDEN_ACCESS = "FORBIDDEN_ACCESS"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class RegistrarError(Exception):
    """Base exception for all domain and collaborator errors.

    Subclasses set error_code, status_code and retryable. metadata holds
    technical detail for logs only; it never reaches reply text.
    """

    status_code: int = 500
    error_code: ErrorCode = ErrorCode.INTERNAL_ERROR
    retryable: bool = True

    def __init__(self, message: str, metadata: dict[str, Any] | None = None) -> None:
        self.message = message
        self.metadata = metadata or {}
        super().__init__(message)


# Not found


class StudentNotFoundError(RegistrarError):
    """Raised when no student exists for the identifier."""

    status_code = 404
    error_code = ErrorCode.STUDENT_NOT_FOUND
    retryable = False

    def __init__(self, student_id: str) -> None:
        super().__init__(f"Student {student_id} not found", {"student_id": student_id})


class NoResultsFoundError(RegistrarError):
    """Raised when a knowledge search matches nothing."""

    status_code = 404
    error_code = ErrorCode.NO_RESULTS_FOUND
    retryable = False

    def __init__(self, query: str) -> None:
        super().__init__(f"No results for query: {query}", {"query": query})


# Invalid input


class InvalidStudentIdError(RegistrarError):
    """Raised when a student identifier is malformed."""

    status_code = 400
    error_code = ErrorCode.INVALID_STUDENT_ID

    def __init__(self, student_id: str) -> None:
        super().__init__(f"Invalid student id: {student_id!r}", {"student_id": student_id})


class EmptyQueryError(RegistrarError):
    """Raised when a knowledge search query is blank."""

    status_code = 400
    error_code = ErrorCode.EMPTY_QUERY
    retryable = False

    def __init__(self) -> None:
        super().__init__("Query must not be empty")


class InvalidCertificateTypeError(RegistrarError):
    """Raised for an unsupported certificate subtype."""

    status_code = 400
    error_code = ErrorCode.INVALID_CERTIFICATE_TYPE
    retryable = False

    def __init__(self, certificate_type: str) -> None:
        super().__init__(
            f"Invalid certificate type: {certificate_type}",
            {"certificate_type": certificate_type},
        )


class UnsupportedProcedureError(RegistrarError):
    """Raised when a procedure type has no execution plan."""

    status_code = 400
    error_code = ErrorCode.UNSUPPORTED_PROCEDURE
    retryable = False

    def __init__(self, procedure_type: str) -> None:
        super().__init__(
            f"Unsupported procedure: {procedure_type}",
            {"procedure_type": procedure_type},
        )


# Precondition blocked


class StudentHasDebtsError(RegistrarError):
    """Raised when outstanding debts block an operation."""

    status_code = 403
    error_code = ErrorCode.STUDENT_HAS_DEBTS
    retryable = False

    def __init__(self, student_id: str, debt_amount: float) -> None:
        super().__init__(
            f"Student {student_id} has pending debts of {debt_amount}",
            {"student_id": student_id, "debt_amount": debt_amount},
        )
        self.debt_amount = debt_amount


# Service failures


class GenerationFailedError(RegistrarError):
    """Raised when certificate generation fails."""

    error_code = ErrorCode.GENERATION_FAILED

    def __init__(self, reason: str) -> None:
        super().__init__(f"Certificate generation failed: {reason}", {"reason": reason})


class DeliveryFailedError(RegistrarError):
    """Raised when a generated certificate cannot be delivered."""

    error_code = ErrorCode.DELIVERY_FAILED

    def __init__(self, reason: str, destination: str) -> None:
        super().__init__(
            f"Certificate delivery to {destination} failed: {reason}",
            {"reason": reason, "destination": destination},
        )


class ServiceUnavailableError(RegistrarError):
    """Raised when a backing service cannot be reached."""

    status_code = 503
    error_code = ErrorCode.SERVICE_UNAVAILABLE

    def __init__(self, service_name: str) -> None:
        super().__init__(
            f"Service {service_name} is temporarily unavailable",
            {"service_name": service_name},
        )


class ServiceTimeoutError(RegistrarError):
    """Raised when a backing service call exceeds its time limit."""

    status_code = 504
    error_code = ErrorCode.TIMEOUT

    def __init__(self, operation: str, timeout_ms: int) -> None:
        super().__init__(
            f"Operation {operation} exceeded {timeout_ms}ms",
            {"operation": operation, "timeout_ms": timeout_ms},
        )


# Identity


class UnauthorizedAccessError(RegistrarError):
    """Raised when the caller's identity has not been established."""

    status_code = 401
    error_code = ErrorCode.UNAUTHORIZED_ACCESS
    retryable = False

    def __init__(self, resource: str) -> None:
        super().__init__(f"Unauthorized access to {resource}", {"resource": resource})


class ForbiddenAccessError(RegistrarError):
    """Raised when the caller may not act on a resource."""

    status_code = 403
    error_code = ErrorCode.FORBIDDEN_ACCESS
    retryable = False

    def __init__(self, resource: str, reason: str) -> None:
        super().__init__(
            f"Access to {resource} forbidden: {reason}",
            {"resource": resource, "reason": reason},
        )
