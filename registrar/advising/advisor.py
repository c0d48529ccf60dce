"""Proactive academic advising.

Detects failed courses, risk alerts and a low GPA in a record and turns
them into Spanish recommendations for the student.
"""

from registrar.advising.models import (
    AcademicAnalysis,
    CourseAtRisk,
    FailedCourse,
    Impediment,
    ImpedimentAnalysis,
)
from registrar.observability.logging import get_logger
from registrar.services.models import AcademicRecord

logger = get_logger(__name__)

LOW_GPA_THRESHOLD = 3.0
CRITICAL_GPA_THRESHOLD = 2.5
CRITICAL_FAILURE_COUNT = 2


def analyze_academic_record(record: AcademicRecord) -> AcademicAnalysis:
    """Find failed courses, risk alerts and a low GPA."""
    failed = [
        FailedCourse(
            course_code=c.course_code,
            course_name=c.course_name,
            semester=c.semester,
        )
        for c in record.courses or []
        if c.status == "failed"
    ]
    at_risk = [
        CourseAtRisk(description=a.message, alert_type=a.type)
        for a in record.alerts or []
        if a.type == "failed_course" or a.severity == "high"
    ]

    analysis = AcademicAnalysis(
        failed_courses=failed,
        courses_at_risk=at_risk,
        low_gpa=record.gpa < LOW_GPA_THRESHOLD,
        gpa_value=record.gpa,
    )

    logger.info(
        "academic_record_analyzed",
        student_id=record.student_id,
        has_issues=analysis.has_issues,
        failed_courses=len(failed),
        courses_at_risk=len(at_risk),
        low_gpa=analysis.low_gpa,
    )
    return analysis


def tutoring_recommendation(failed_courses: list[FailedCourse]) -> str:
    if not failed_courses:
        return ""

    names = ", ".join(c.course_name for c in failed_courses)
    if len(failed_courses) == 1:
        return (
            f"Veo que tienes una materia reprobada: {names}. Te recomiendo agendar "
            "una tutoría con el departamento correspondiente para reforzar estos "
            "conceptos. ¿Te gustaría que te ayude a programar una sesión de tutoría?"
        )
    return (
        f"Noto que tienes {len(failed_courses)} materias reprobadas: {names}. "
        "Es importante que recibas apoyo académico. Te recomiendo agendar tutorías "
        "con los departamentos correspondientes. ¿Te gustaría que te ayude a "
        "organizar un plan de recuperación?"
    )


def resource_recommendation(courses_at_risk: list[CourseAtRisk]) -> str:
    if not courses_at_risk:
        return ""

    return (
        "He notado algunas alertas en tu historial académico. Te recomiendo "
        "aprovechar los recursos disponibles como:\n"
        "- Centro de tutorías académicas\n"
        "- Talleres de técnicas de estudio\n"
        "- Asesoría con profesores\n"
        "- Grupos de estudio\n\n"
        "¿Te gustaría más información sobre estos recursos?"
    )


def summer_courses_recommendation(failed_courses: list[FailedCourse]) -> str:
    if not failed_courses:
        return ""

    names = ", ".join(c.course_name for c in failed_courses)
    article = "la materia" if len(failed_courses) == 1 else "las materias"
    return (
        f"Para recuperar {article} {names}, puedes inscribirte en los cursos de "
        "verano. Estos cursos intensivos te permitirán ponerte al día más "
        "rápidamente. ¿Te gustaría conocer los horarios y fechas disponibles?"
    )


def gpa_improvement_recommendation(gpa: float) -> str:
    if gpa >= LOW_GPA_THRESHOLD:
        return ""

    level = (
        "en nivel crítico"
        if gpa < CRITICAL_GPA_THRESHOLD
        else "por debajo del mínimo recomendado"
    )
    return (
        f"Tu promedio académico actual es {gpa:.2f}, lo cual está {level}. "
        "Te sugiero:\n"
        "- Priorizar las materias con mayor peso crediticio\n"
        "- Asistir a todas las tutorías disponibles\n"
        "- Establecer un horario de estudio regular\n"
        "- Considerar reducir la carga académica si es necesario\n\n"
        "¿Te gustaría hablar con un asesor académico para crear un plan de mejora?"
    )


def generate_proactive_message(analysis: AcademicAnalysis) -> str:
    """Combine every applicable recommendation into one message."""
    if not analysis.has_issues:
        return "¡Excelente! Tu rendimiento académico está en buen estado. Sigue así."

    parts = [
        tutoring_recommendation(analysis.failed_courses),
        resource_recommendation(analysis.courses_at_risk),
        gpa_improvement_recommendation(analysis.gpa_value) if analysis.low_gpa else "",
        summer_courses_recommendation(analysis.failed_courses),
    ]
    return "\n\n".join(part for part in parts if part)


def analyze_impediments(record: AcademicRecord) -> ImpedimentAnalysis:
    """Collect blockers to check before starting a procedure."""
    impediments = [
        Impediment(kind="financial", severity=alert.severity, message=alert.message)
        for alert in record.debt_alerts()
    ]

    if record.academic_standing == "probation":
        impediments.append(
            Impediment(
                kind="academic",
                severity="high",
                message="Estás en período de prueba académica",
            )
        )

    failures = sum(1 for c in record.courses or [] if c.status == "failed")
    if failures > CRITICAL_FAILURE_COUNT:
        impediments.append(
            Impediment(
                kind="academic",
                severity="medium",
                message=f"Tienes {failures} materias reprobadas",
            )
        )

    return ImpedimentAnalysis(impediments=impediments)


def impediment_message(analysis: ImpedimentAnalysis) -> str:
    if not analysis.has_impediments:
        return ""

    lines = "\n".join(f"- {i.message}" for i in analysis.impediments)
    if not analysis.can_proceed:
        return (
            "He detectado algunos impedimentos que deben resolverse antes de "
            f"continuar:\n\n{lines}\n\nPor favor, contacta con la oficina "
            "correspondiente para resolver estos asuntos."
        )
    return (
        f"He notado algunos aspectos que deberías considerar:\n\n{lines}\n\n"
        "Aunque puedes continuar con el trámite, te recomiendo atender estos "
        "puntos pronto."
    )
