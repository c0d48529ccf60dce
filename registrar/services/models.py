"""Models exchanged with the external student data services."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

AcademicStanding = Literal["good", "probation", "warning"]
CourseStatus = Literal["passed", "failed", "in_progress"]
AlertSeverity = Literal["high", "medium", "low"]
DeliveryMethod = Literal["email", "download"]

CERTIFICATE_TYPES: tuple[str, ...] = ("enrollment", "grades", "graduation")


class ProgramInfo(BaseModel):
    """Academic program a student is enrolled in."""

    name: str
    code: str
    enrollment_date: str


class CrmData(BaseModel):
    """Relationship data attached to a profile."""

    last_contact: str
    preferred_channel: str
    tags: list[str] = Field(default_factory=list)


class StudentProfile(BaseModel):
    """Unified student profile."""

    student_id: str
    first_name: str
    last_name: str
    email: str
    phone: str
    program: ProgramInfo | None = None
    academic_status: Literal["active", "inactive", "graduated"] | None = None
    crm_data: CrmData | None = None


class Course(BaseModel):
    """A course in a student's academic record."""

    course_code: str
    course_name: str
    semester: str
    grade: str = ""
    status: CourseStatus
    credits: int = Field(ge=0)


class AcademicAlert(BaseModel):
    """An alert raised against an academic record."""

    type: str = Field(..., description="failed_course, low_gpa, missing_credits, debt")
    message: str
    severity: AlertSeverity


class AcademicRecord(BaseModel):
    """Academic record snapshot for one student."""

    student_id: str
    gpa: float = Field(ge=0.0)
    total_credits: int = Field(ge=0)
    completed_credits: int = Field(ge=0)
    academic_standing: AcademicStanding
    courses: list[Course] | None = None
    alerts: list[AcademicAlert] | None = None

    def in_progress_courses(self) -> list[Course]:
        return [c for c in self.courses or [] if c.status == "in_progress"]

    def debt_alerts(self) -> list[AcademicAlert]:
        """Alerts whose message denotes an outstanding debt."""
        return [a for a in self.alerts or [] if "deuda" in a.message.lower()]


class CertificateRequest(BaseModel):
    """Input for certificate generation."""

    student_id: str
    certificate_type: str = "enrollment"
    delivery_method: DeliveryMethod = "email"
    language: Literal["es", "en"] = "es"


class DeliveryStatus(BaseModel):
    method: str
    destination: str
    sent_at: datetime | None = None


class CertificateResult(BaseModel):
    """Outcome of certificate generation."""

    certificate_id: str
    status: Literal["generated", "sent", "failed"]
    generated_at: datetime
    delivery: DeliveryStatus | None = None
    download_url: str | None = None
    expires_at: datetime | None = None


class KnowledgeDocument(BaseModel):
    """A single knowledge base hit."""

    title: str
    excerpt: str
    relevance_score: float = Field(ge=0.0, le=1.0)
    source: str
    document_type: str


class KnowledgeSearchResult(BaseModel):
    """Knowledge base search response."""

    results: list[KnowledgeDocument] = Field(default_factory=list)
    total_results: int = 0
