"""Tests for academic record analysis and recommendations."""

from registrar.advising import (
    AcademicAnalysis,
    analyze_academic_record,
    analyze_impediments,
    generate_proactive_message,
    impediment_message,
)
from registrar.advising.advisor import gpa_improvement_recommendation
from registrar.services import AcademicAlert
from tests.factories import CourseFactory, RecordFactory


class TestAnalyzeAcademicRecord:
    """Tests for analyze_academic_record."""

    def test_clean_record(self):
        """Should find no issues in a good record."""
        analysis = analyze_academic_record(RecordFactory.create(gpa=3.6))

        assert analysis.has_issues is False
        assert analysis.gpa_value == 3.6

    def test_failed_courses(self):
        """Should list each failed course."""
        record = RecordFactory.create(
            courses=[
                CourseFactory.create(course_code="MAT101", course_name="Cálculo I", status="failed"),
                CourseFactory.create(),
            ]
        )

        analysis = analyze_academic_record(record)

        assert [c.course_code for c in analysis.failed_courses] == ["MAT101"]
        assert analysis.has_issues is True

    def test_at_risk_from_alerts(self):
        """Should take failed-course and high-severity alerts as risks."""
        record = RecordFactory.create(
            alerts=[
                AcademicAlert(type="failed_course", message="reprobada", severity="medium"),
                AcademicAlert(type="missing_credits", message="créditos", severity="high"),
                AcademicAlert(type="missing_credits", message="leve", severity="low"),
            ]
        )

        analysis = analyze_academic_record(record)

        assert [r.description for r in analysis.courses_at_risk] == ["reprobada", "créditos"]

    def test_low_gpa(self):
        """Should flag a GPA under 3.0."""
        analysis = analyze_academic_record(RecordFactory.create(gpa=2.9))

        assert analysis.low_gpa is True

    def test_gpa_at_threshold(self):
        analysis = analyze_academic_record(RecordFactory.create(gpa=3.0))

        assert analysis.low_gpa is False


class TestProactiveMessage:
    """Tests for generate_proactive_message."""

    def test_positive_message(self):
        """Should congratulate when there are no issues."""
        message = generate_proactive_message(AcademicAnalysis(gpa_value=3.8))

        assert message.startswith("¡Excelente!")

    def test_single_failed_course(self):
        """Should recommend tutoring and summer courses for one failure."""
        record = RecordFactory.create(
            courses=[CourseFactory.create(course_name="Cálculo I", status="failed")]
        )

        message = generate_proactive_message(analyze_academic_record(record))

        assert "Veo que tienes una materia reprobada: Cálculo I" in message
        assert "Para recuperar la materia Cálculo I" in message

    def test_multiple_failed_courses(self):
        record = RecordFactory.create(
            courses=[
                CourseFactory.create(course_name="Cálculo I", status="failed"),
                CourseFactory.create(course_name="Física I", status="failed"),
            ]
        )

        message = generate_proactive_message(analyze_academic_record(record))

        assert "Noto que tienes 2 materias reprobadas: Cálculo I, Física I" in message
        assert "Para recuperar las materias" in message

    def test_low_gpa_section(self):
        """Should include the GPA improvement plan when the GPA is low."""
        message = generate_proactive_message(
            analyze_academic_record(RecordFactory.create(gpa=2.7))
        )

        assert "Tu promedio académico actual es 2.70" in message
        assert "por debajo del mínimo recomendado" in message

    def test_critical_gpa_wording(self):
        assert "en nivel crítico" in gpa_improvement_recommendation(2.4)

    def test_sections_are_separated(self):
        """Should join recommendations with blank lines."""
        record = RecordFactory.create(
            gpa=2.8,
            courses=[CourseFactory.create(status="failed")],
            alerts=[AcademicAlert(type="failed_course", message="x", severity="medium")],
        )

        message = generate_proactive_message(analyze_academic_record(record))

        assert message.count("\n\n") >= 3
        assert message.index("tutoría") < message.index("He notado algunas alertas")


class TestImpediments:
    """Tests for impediment analysis."""

    def test_debt_blocks(self):
        """Should report a high-severity financial impediment."""
        record = RecordFactory.create(alerts=[RecordFactory.debt_alert()])

        analysis = analyze_impediments(record)

        assert analysis.impediments[0].kind == "financial"
        assert analysis.can_proceed is False

    def test_many_failures_do_not_block(self):
        """Should report more than two failures as a medium impediment."""
        record = RecordFactory.create(
            courses=[CourseFactory.create(status="failed") for _ in range(3)]
        )

        analysis = analyze_impediments(record)

        assert analysis.has_impediments is True
        assert analysis.can_proceed is True
        assert analysis.impediments[0].message == "Tienes 3 materias reprobadas"

    def test_probation(self):
        analysis = analyze_impediments(RecordFactory.create(academic_standing="probation"))

        assert analysis.can_proceed is False

    def test_messages(self):
        """Should word the message by whether the student can proceed."""
        blocking = analyze_impediments(
            RecordFactory.create(alerts=[RecordFactory.debt_alert()])
        )
        advisory = analyze_impediments(
            RecordFactory.create(courses=[CourseFactory.create(status="failed")] * 3)
        )

        assert impediment_message(blocking).startswith("He detectado algunos impedimentos")
        assert impediment_message(advisory).startswith("He notado algunos aspectos")
        assert impediment_message(analyze_impediments(RecordFactory.create())) == ""
