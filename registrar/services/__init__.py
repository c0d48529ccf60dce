"""External student data services.

Abstract interfaces for profile, academic record, certificate and
knowledge lookups, plus deterministic mocks for development and tests.
"""

from registrar.services.base import (
    AcademicRecordService,
    CertificateService,
    KnowledgeService,
    ProfileService,
)
from registrar.services.mock import (
    MockAcademicRecordService,
    MockCertificateService,
    MockKnowledgeService,
    MockProfileService,
)
from registrar.services.models import (
    AcademicAlert,
    AcademicRecord,
    CertificateRequest,
    CertificateResult,
    Course,
    DeliveryStatus,
    KnowledgeDocument,
    KnowledgeSearchResult,
    ProgramInfo,
    StudentProfile,
)

__all__ = [
    # Interfaces
    "ProfileService",
    "AcademicRecordService",
    "CertificateService",
    "KnowledgeService",
    # Mocks
    "MockProfileService",
    "MockAcademicRecordService",
    "MockCertificateService",
    "MockKnowledgeService",
    # Models
    "AcademicAlert",
    "AcademicRecord",
    "CertificateRequest",
    "CertificateResult",
    "Course",
    "DeliveryStatus",
    "KnowledgeDocument",
    "KnowledgeSearchResult",
    "ProgramInfo",
    "StudentProfile",
]
