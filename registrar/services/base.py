"""Abstract interfaces for the external student data services.

Every service signals absence or failure by raising a RegistrarError
subclass, never by returning a sentinel inside a success payload.
"""

from abc import ABC, abstractmethod

from registrar.services.models import (
    AcademicRecord,
    CertificateRequest,
    CertificateResult,
    KnowledgeSearchResult,
    StudentProfile,
)


class ProfileService(ABC):
    """Lookup of unified student profiles."""

    @abstractmethod
    async def get_profile(self, student_id: str) -> StudentProfile:
        """Get a profile.

        Raises:
            InvalidStudentIdError: If the identifier is malformed
            StudentNotFoundError: If no profile exists
        """
        pass


class AcademicRecordService(ABC):
    """Lookup of academic records."""

    @abstractmethod
    async def get_record(
        self,
        student_id: str,
        *,
        include_courses: bool = True,
        include_grades: bool = True,
        semester: str | None = None,
    ) -> AcademicRecord:
        """Get the academic record for a student.

        Raises:
            InvalidStudentIdError: If the identifier is malformed
            StudentNotFoundError: If no record exists
        """
        pass


class CertificateService(ABC):
    """Generation and delivery of academic certificates."""

    @abstractmethod
    async def generate(self, request: CertificateRequest) -> CertificateResult:
        """Generate and deliver a certificate.

        Raises:
            StudentHasDebtsError: If debts block issuance
            InvalidCertificateTypeError: If the subtype is unknown
            GenerationFailedError: If the document cannot be produced
            DeliveryFailedError: If the document cannot be delivered
        """
        pass


class KnowledgeService(ABC):
    """Search over programs, requirements and procedures."""

    @abstractmethod
    async def search(
        self,
        query: str,
        *,
        max_results: int = 5,
        document_types: list[str] | None = None,
        program: str | None = None,
    ) -> KnowledgeSearchResult:
        """Search the knowledge base.

        Raises:
            EmptyQueryError: If the query is blank
            NoResultsFoundError: If nothing matches
        """
        pass
