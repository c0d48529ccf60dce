"""Tests for ProcedureValidator eligibility rules."""

import pytest

from registrar.config.models import ProceduresConfig
from registrar.errors import ServiceUnavailableError
from registrar.procedures import ProcedureType, ProcedureValidator
from registrar.procedures.validator import (
    LOOKUP_FAILED_IMPEDIMENT,
    UNKNOWN_PROCEDURE_REQUIREMENT,
)
from registrar.services import MockAcademicRecordService
from tests.factories import CourseFactory, RecordFactory


def validator_for(record, config=None):
    service = MockAcademicRecordService(records={record.student_id: record})
    return ProcedureValidator(service, config)


def in_progress(credits=4, code="ACT101"):
    return CourseFactory.create(course_code=code, status="in_progress", credits=credits)


class TestLookupFailure:
    """Tests for fail-closed behaviour."""

    @pytest.mark.asyncio
    async def test_lookup_error_becomes_impediment(self):
        """Should block instead of raising when the record is unavailable."""
        service = MockAcademicRecordService(error=ServiceUnavailableError("academic"))
        validator = ProcedureValidator(service)

        result = await validator.validate(ProcedureType.CERTIFICATE_REQUEST, "STU001")

        assert result.is_valid is False
        assert result.impediments == [LOOKUP_FAILED_IMPEDIMENT]

    @pytest.mark.asyncio
    async def test_unknown_student_becomes_impediment(self, record_service):
        """Should block when the student has no record."""
        validator = ProcedureValidator(record_service)

        result = await validator.validate(ProcedureType.ENROLLMENT, "STU999")

        assert result.impediments == [LOOKUP_FAILED_IMPEDIMENT]

    @pytest.mark.asyncio
    async def test_unknown_procedure(self, record_service):
        """Should report a missing requirement for unknown procedures."""
        validator = ProcedureValidator(record_service)

        result = await validator.validate(ProcedureType.UNKNOWN, "STU001")

        assert result.missing_requirements == [UNKNOWN_PROCEDURE_REQUIREMENT]
        assert result.is_valid is False


class TestCertificateRules:
    """Tests for certificate eligibility."""

    @pytest.mark.asyncio
    async def test_debts_block(self):
        """Should block a student with a debt alert."""
        record = RecordFactory.create(alerts=[RecordFactory.debt_alert()])

        result = await validator_for(record).validate(
            ProcedureType.CERTIFICATE_REQUEST, record.student_id
        )

        assert result.impediments == ["Tienes deudas pendientes que deben ser saldadas"]

    @pytest.mark.asyncio
    async def test_probation_warns(self):
        """Should warn but allow a student on probation."""
        record = RecordFactory.create(academic_standing="probation")

        result = await validator_for(record).validate(
            ProcedureType.CERTIFICATE_REQUEST, record.student_id
        )

        assert result.is_valid is True
        assert result.warnings == ["Estás en período de prueba académica"]

    @pytest.mark.asyncio
    async def test_sample_student_with_debt(self, record_service):
        """Should block the sample student who owes tuition."""
        validator = ProcedureValidator(record_service)

        result = await validator.validate(ProcedureType.CERTIFICATE_REQUEST, "STU003")

        assert result.is_valid is False


class TestEnrollmentRules:
    """Tests for enrollment eligibility."""

    @pytest.mark.asyncio
    async def test_active_courses_block(self):
        """Should block enrollment while courses are in progress."""
        record = RecordFactory.create(courses=[in_progress()])

        result = await validator_for(record).validate(
            ProcedureType.ENROLLMENT, record.student_id
        )

        assert result.impediments == ["Ya tienes materias activas en el semestre actual"]

    @pytest.mark.asyncio
    async def test_no_active_courses(self):
        """Should allow enrollment with only finished courses."""
        record = RecordFactory.create()

        result = await validator_for(record).validate(
            ProcedureType.ENROLLMENT, record.student_id
        )

        assert result.is_valid is True


class TestCourseRegistrationRules:
    """Tests for course registration eligibility."""

    @pytest.mark.asyncio
    async def test_credit_limit_reached(self):
        """Should block at the credit limit."""
        record = RecordFactory.create(
            courses=[in_progress(6, "A1"), in_progress(6, "A2"), in_progress(6, "A3")]
        )

        result = await validator_for(record).validate(
            ProcedureType.COURSE_REGISTRATION, record.student_id
        )

        assert result.impediments == [
            "Has alcanzado el límite de créditos por semestre (18)"
        ]

    @pytest.mark.asyncio
    async def test_below_limit(self):
        """Should allow registration below the limit."""
        record = RecordFactory.create(courses=[in_progress(4)])

        result = await validator_for(record).validate(
            ProcedureType.COURSE_REGISTRATION, record.student_id
        )

        assert result.is_valid is True

    @pytest.mark.asyncio
    async def test_configured_limit(self):
        """Should apply the configured credit limit."""
        record = RecordFactory.create(courses=[in_progress(4)])
        config = ProceduresConfig(max_credits_per_semester=4)

        result = await validator_for(record, config).validate(
            ProcedureType.COURSE_REGISTRATION, record.student_id
        )

        assert result.is_valid is False


class TestGradeAppealRules:
    """Tests for grade appeal eligibility."""

    @pytest.mark.asyncio
    async def test_no_courses(self):
        """Should require at least one course to appeal."""
        record = RecordFactory.create(courses=[])

        result = await validator_for(record).validate(
            ProcedureType.GRADE_APPEAL, record.student_id
        )

        assert result.missing_requirements == ["No tienes materias completadas para apelar"]

    @pytest.mark.asyncio
    async def test_appeal_window_warning(self):
        """Should always warn about the appeal window."""
        record = RecordFactory.create()

        result = await validator_for(record).validate(
            ProcedureType.GRADE_APPEAL, record.student_id
        )

        assert result.is_valid is True
        assert result.warnings == [
            "Verifica que estés dentro del plazo de apelación (15 días)"
        ]


class TestProgramChangeRules:
    """Tests for program change eligibility."""

    @pytest.mark.asyncio
    async def test_low_gpa_and_credits(self):
        """Should report both GPA and credit shortfalls."""
        record = RecordFactory.create(gpa=2.0, completed_credits=8)

        result = await validator_for(record).validate(
            ProcedureType.PROGRAM_CHANGE, record.student_id
        )

        assert result.impediments == [
            "Necesitas un GPA mínimo de 2.5 para cambiar de programa (actual: 2.0)",
            "Necesitas al menos 12 créditos completados (actual: 8)",
        ]

    @pytest.mark.asyncio
    async def test_eligible(self):
        """Should allow a change at the thresholds."""
        record = RecordFactory.create(gpa=2.5, completed_credits=12)

        result = await validator_for(record).validate(
            ProcedureType.PROGRAM_CHANGE, record.student_id
        )

        assert result.is_valid is True


class TestWithdrawalRules:
    """Tests for withdrawal eligibility."""

    @pytest.mark.asyncio
    async def test_no_active_courses(self):
        """Should require an active course to withdraw from."""
        record = RecordFactory.create()

        result = await validator_for(record).validate(
            ProcedureType.WITHDRAWAL, record.student_id
        )

        assert result.missing_requirements == ["No tienes materias activas para retirar"]

    @pytest.mark.asyncio
    async def test_active_course_warns(self):
        """Should allow withdrawal with a warning about consequences."""
        record = RecordFactory.create(courses=[in_progress()])

        result = await validator_for(record).validate(
            ProcedureType.WITHDRAWAL, record.student_id
        )

        assert result.is_valid is True
        assert result.warnings == [
            "El retiro puede afectar tu progreso académico y ayuda financiera"
        ]
