"""Test factories for student service models."""

from registrar.services.models import (
    AcademicAlert,
    AcademicRecord,
    AcademicStanding,
    Course,
    CourseStatus,
    ProgramInfo,
    StudentProfile,
)


class CourseFactory:
    """Factory for creating Course instances for testing."""

    @staticmethod
    def create(
        *,
        course_code: str = "TST101",
        course_name: str = "Curso de Prueba",
        semester: str = "2024-1",
        grade: str = "B",
        status: CourseStatus = "passed",
        credits: int = 4,
    ) -> Course:
        return Course(
            course_code=course_code,
            course_name=course_name,
            semester=semester,
            grade=grade,
            status=status,
            credits=credits,
        )


class RecordFactory:
    """Factory for creating AcademicRecord instances for testing."""

    @staticmethod
    def create(
        *,
        student_id: str = "STU100",
        gpa: float = 3.5,
        total_credits: int = 160,
        completed_credits: int = 60,
        academic_standing: AcademicStanding = "good",
        courses: list[Course] | None = None,
        alerts: list[AcademicAlert] | None = None,
    ) -> AcademicRecord:
        """Create an AcademicRecord with sensible defaults.

        Courses default to one passed course; pass an empty list for none.
        """
        return AcademicRecord(
            student_id=student_id,
            gpa=gpa,
            total_credits=total_credits,
            completed_credits=completed_credits,
            academic_standing=academic_standing,
            courses=[CourseFactory.create()] if courses is None else courses,
            alerts=alerts or [],
        )

    @staticmethod
    def debt_alert(amount: int = 500) -> AcademicAlert:
        return AcademicAlert(
            type="debt",
            message=f"Tienes una deuda pendiente de ${amount}",
            severity="high",
        )


class ProfileFactory:
    """Factory for creating StudentProfile instances for testing."""

    @staticmethod
    def create(
        *,
        student_id: str = "STU100",
        first_name: str = "Ana",
        last_name: str = "Torres",
        program_name: str | None = "Ingeniería Civil",
    ) -> StudentProfile:
        return StudentProfile(
            student_id=student_id,
            first_name=first_name,
            last_name=last_name,
            email=f"{first_name.lower()}@universidad.edu",
            phone="+57 300 000 0000",
            program=(
                ProgramInfo(name=program_name, code="ING-CIV", enrollment_date="2023-01-15")
                if program_name
                else None
            ),
            academic_status="active",
        )
