"""Academic record analysis and proactive recommendations."""

from registrar.advising.advisor import (
    analyze_academic_record,
    analyze_impediments,
    generate_proactive_message,
    impediment_message,
)
from registrar.advising.models import (
    AcademicAnalysis,
    CourseAtRisk,
    FailedCourse,
    Impediment,
    ImpedimentAnalysis,
)

__all__ = [
    "AcademicAnalysis",
    "CourseAtRisk",
    "FailedCourse",
    "Impediment",
    "ImpedimentAnalysis",
    "analyze_academic_record",
    "analyze_impediments",
    "generate_proactive_message",
    "impediment_message",
]
