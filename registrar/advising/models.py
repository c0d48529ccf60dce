"""Academic advising models."""

from typing import Literal

from pydantic import BaseModel, Field

from registrar.services.models import AlertSeverity


class FailedCourse(BaseModel):
    course_code: str
    course_name: str
    semester: str


class CourseAtRisk(BaseModel):
    """A risk signal taken from a record alert."""

    course_code: str = ""
    description: str
    alert_type: str


class AcademicAnalysis(BaseModel):
    """Issues found in an academic record."""

    failed_courses: list[FailedCourse] = Field(default_factory=list)
    courses_at_risk: list[CourseAtRisk] = Field(default_factory=list)
    low_gpa: bool = False
    gpa_value: float = 0.0

    @property
    def has_issues(self) -> bool:
        return bool(self.failed_courses or self.courses_at_risk or self.low_gpa)


class Impediment(BaseModel):
    kind: Literal["academic", "financial"]
    severity: AlertSeverity
    message: str


class ImpedimentAnalysis(BaseModel):
    """Academic and financial blockers ahead of a procedure."""

    impediments: list[Impediment] = Field(default_factory=list)

    @property
    def has_impediments(self) -> bool:
        return bool(self.impediments)

    @property
    def can_proceed(self) -> bool:
        """Only high-severity impediments block."""
        return not any(i.severity == "high" for i in self.impediments)
