"""In-memory mock services for development and testing.

Return deterministic sample data without calling any backend. Each mock
records its calls and can be told to raise a given error, which makes
collaborator failures easy to exercise in tests.
"""

from datetime import UTC, datetime, timedelta
from typing import Any

from registrar.errors import (
    EmptyQueryError,
    InvalidCertificateTypeError,
    InvalidStudentIdError,
    NoResultsFoundError,
    StudentHasDebtsError,
    StudentNotFoundError,
)
from registrar.services.base import (
    AcademicRecordService,
    CertificateService,
    KnowledgeService,
    ProfileService,
)
from registrar.services.models import (
    CERTIFICATE_TYPES,
    AcademicAlert,
    AcademicRecord,
    CertificateRequest,
    CertificateResult,
    Course,
    CrmData,
    DeliveryStatus,
    KnowledgeDocument,
    KnowledgeSearchResult,
    ProgramInfo,
    StudentProfile,
)


def validate_student_id(student_id: str) -> None:
    """Reject blank identifiers and identifiers outside 3..50 chars."""
    if not student_id or not student_id.strip():
        raise InvalidStudentIdError(student_id)
    if len(student_id) < 3 or len(student_id) > 50:
        raise InvalidStudentIdError(student_id)


def detect_academic_alerts(courses: list[Course], gpa: float) -> list[AcademicAlert]:
    """Derive failed-course and low-GPA alerts from a record."""
    alerts: list[AcademicAlert] = []

    failed = [c for c in courses if c.status == "failed"]
    if failed:
        names = ", ".join(c.course_name for c in failed)
        alerts.append(
            AcademicAlert(
                type="failed_course",
                message=f"Tienes {len(failed)} materia(s) reprobada(s): {names}",
                severity="high" if len(failed) > 2 else "medium",
            )
        )

    if gpa < 3.0:
        alerts.append(
            AcademicAlert(
                type="low_gpa",
                message=(
                    f"Tu promedio académico ({gpa:.2f}) está por debajo "
                    "del mínimo recomendado"
                ),
                severity="high" if gpa < 2.5 else "medium",
            )
        )

    return alerts


SAMPLE_PROFILES: dict[str, StudentProfile] = {
    "STU001": StudentProfile(
        student_id="STU001",
        first_name="Carlos",
        last_name="Rodríguez",
        email="carlos.rodriguez@universidad.edu",
        phone="+57 300 123 4567",
        program=ProgramInfo(
            name="Ingeniería Informática",
            code="ING-INF",
            enrollment_date="2022-01-15",
        ),
        academic_status="active",
        crm_data=CrmData(
            last_contact="2024-01-10",
            preferred_channel="email",
            tags=["prospecto", "interesado-maestria"],
        ),
    ),
    "STU002": StudentProfile(
        student_id="STU002",
        first_name="María",
        last_name="González",
        email="maria.gonzalez@universidad.edu",
        phone="+57 310 987 6543",
        program=ProgramInfo(
            name="Administración de Empresas",
            code="ADM-EMP",
            enrollment_date="2021-08-20",
        ),
        academic_status="active",
    ),
    "STU003": StudentProfile(
        student_id="STU003",
        first_name="Andrés",
        last_name="Pérez",
        email="andres.perez@universidad.edu",
        phone="+57 315 555 0101",
        program=ProgramInfo(
            name="Derecho",
            code="DER",
            enrollment_date="2022-08-01",
        ),
        academic_status="active",
    ),
}

SAMPLE_RECORDS: dict[str, AcademicRecord] = {
    "STU001": AcademicRecord(
        student_id="STU001",
        gpa=2.8,
        total_credits=160,
        completed_credits=80,
        academic_standing="warning",
        courses=[
            Course(course_code="MAT101", course_name="Cálculo I", semester="2023-1",
                   grade="D", status="failed", credits=4),
            Course(course_code="PRG101", course_name="Programación I", semester="2023-1",
                   grade="B", status="passed", credits=4),
            Course(course_code="MAT102", course_name="Cálculo II", semester="2023-2",
                   grade="C", status="passed", credits=4),
            Course(course_code="PRG102", course_name="Programación II", semester="2023-2",
                   grade="A", status="passed", credits=4),
            Course(course_code="BD101", course_name="Bases de Datos", semester="2024-1",
                   grade="B", status="in_progress", credits=4),
        ],
    ),
    "STU002": AcademicRecord(
        student_id="STU002",
        gpa=3.8,
        total_credits=160,
        completed_credits=120,
        academic_standing="good",
        courses=[
            Course(course_code="ADM101", course_name="Fundamentos de Administración",
                   semester="2021-2", grade="A", status="passed", credits=3),
            Course(course_code="ECO101", course_name="Microeconomía",
                   semester="2022-1", grade="A", status="passed", credits=3),
            Course(course_code="FIN101", course_name="Finanzas Corporativas",
                   semester="2022-2", grade="B", status="passed", credits=4),
        ],
    ),
    "STU003": AcademicRecord(
        student_id="STU003",
        gpa=3.2,
        total_credits=170,
        completed_credits=64,
        academic_standing="good",
        courses=[
            Course(course_code="DER101", course_name="Introducción al Derecho",
                   semester="2023-1", grade="B", status="passed", credits=4),
            Course(course_code="DER201", course_name="Derecho Civil",
                   semester="2024-1", grade="", status="in_progress", credits=4),
        ],
        alerts=[
            AcademicAlert(
                type="debt",
                message="Tienes una deuda pendiente de $500 con tesorería",
                severity="high",
            ),
        ],
    ),
}

SAMPLE_DEBTS: dict[str, float] = {"STU003": 500.0}

SAMPLE_DOCUMENTS: list[tuple[KnowledgeDocument, tuple[str, ...]]] = [
    (
        KnowledgeDocument(
            title="Pensum Ingeniería Informática 2024",
            excerpt=(
                "El programa de Ingeniería Informática consta de 160 créditos "
                "distribuidos en 10 semestres."
            ),
            relevance_score=0.95,
            source="kb://programs/ing-informatica-pensum.pdf",
            document_type="curriculum",
        ),
        ("ingeniería", "informática", "pensum", "programa", "créditos"),
    ),
    (
        KnowledgeDocument(
            title="Requisitos de Admisión - Pregrado",
            excerpt=(
                "Para ingresar a programas de pregrado se requiere título de "
                "bachiller, examen de admisión aprobado y documentos de identidad."
            ),
            relevance_score=0.88,
            source="kb://admissions/requisitos-pregrado.pdf",
            document_type="requirements",
        ),
        ("admisión", "requisitos", "pregrado", "ingreso"),
    ),
    (
        KnowledgeDocument(
            title="Proceso de Admisión 2024",
            excerpt=(
                "El proceso incluye registro en línea, examen de admisión, "
                "entrevista personal y revisión de documentos."
            ),
            relevance_score=0.85,
            source="kb://admissions/proceso-admision.pdf",
            document_type="admission",
        ),
        ("admisión", "proceso", "ingreso", "aplicar"),
    ),
    (
        KnowledgeDocument(
            title="Fechas de Inscripción 2024-1",
            excerpt=(
                "Las inscripciones estarán abiertas del 15 de noviembre al "
                "15 de diciembre a través del portal estudiantil."
            ),
            relevance_score=0.82,
            source="kb://calendar/inscripciones-2024-1.pdf",
            document_type="calendar",
        ),
        ("inscripción", "fechas", "calendario", "semestre"),
    ),
    (
        KnowledgeDocument(
            title="Programa de Maestría en Administración",
            excerpt=(
                "Maestría en Administración de Empresas con énfasis en gestión "
                "estratégica. Duración: 4 semestres."
            ),
            relevance_score=0.75,
            source="kb://programs/maestria-administracion.pdf",
            document_type="program_info",
        ),
        ("maestría", "administración", "posgrado", "mba", "programa"),
    ),
    (
        KnowledgeDocument(
            title="Proceso de Solicitud de Certificados",
            excerpt=(
                "Los certificados académicos pueden solicitarse en línea. "
                "Requisito: estar al día con pagos."
            ),
            relevance_score=0.7,
            source="kb://procedures/certificados.pdf",
            document_type="procedure",
        ),
        ("certificado", "solicitud", "trámite", "documento"),
    ),
]


class _FailureMixin:
    """Shared call recording and error injection for mocks."""

    def __init__(self, error: Exception | None = None) -> None:
        self._error = error
        self._call_history: list[dict[str, Any]] = []

    @property
    def call_history(self) -> list[dict[str, Any]]:
        """Return history of calls for testing assertions."""
        return self._call_history

    def fail_with(self, error: Exception | None) -> None:
        """Raise error on every subsequent call (None to stop)."""
        self._error = error

    def _record(self, **call: Any) -> None:
        self._call_history.append(call)
        if self._error is not None:
            raise self._error


class MockProfileService(_FailureMixin, ProfileService):
    """Profile lookup over SAMPLE_PROFILES."""

    def __init__(
        self,
        profiles: dict[str, StudentProfile] | None = None,
        error: Exception | None = None,
    ) -> None:
        super().__init__(error)
        self._profiles = SAMPLE_PROFILES if profiles is None else profiles

    async def get_profile(self, student_id: str) -> StudentProfile:
        self._record(student_id=student_id)
        validate_student_id(student_id)

        profile = self._profiles.get(student_id)
        if profile is None:
            raise StudentNotFoundError(student_id)
        return profile.model_copy(deep=True)


class MockAcademicRecordService(_FailureMixin, AcademicRecordService):
    """Academic record lookup over SAMPLE_RECORDS."""

    def __init__(
        self,
        records: dict[str, AcademicRecord] | None = None,
        error: Exception | None = None,
    ) -> None:
        super().__init__(error)
        self._records = SAMPLE_RECORDS if records is None else records

    async def get_record(
        self,
        student_id: str,
        *,
        include_courses: bool = True,
        include_grades: bool = True,
        semester: str | None = None,
    ) -> AcademicRecord:
        self._record(
            student_id=student_id,
            include_courses=include_courses,
            include_grades=include_grades,
            semester=semester,
        )
        validate_student_id(student_id)

        stored = self._records.get(student_id)
        if stored is None:
            raise StudentNotFoundError(student_id)

        courses = list(stored.courses or [])
        if semester:
            courses = [c for c in courses if c.semester == semester]
        if not include_grades:
            courses = [c.model_copy(update={"grade": ""}) for c in courses]

        alerts = list(stored.alerts or []) + detect_academic_alerts(courses, stored.gpa)

        return stored.model_copy(
            update={
                "courses": courses if include_courses else None,
                "alerts": alerts,
            },
            deep=True,
        )


class MockCertificateService(_FailureMixin, CertificateService):
    """Certificate generation that blocks students listed in SAMPLE_DEBTS."""

    def __init__(
        self,
        debts: dict[str, float] | None = None,
        error: Exception | None = None,
    ) -> None:
        super().__init__(error)
        self._debts = SAMPLE_DEBTS if debts is None else debts
        self._sequence = 0

    async def generate(self, request: CertificateRequest) -> CertificateResult:
        self._record(request=request)
        validate_student_id(request.student_id)
        if request.certificate_type not in CERTIFICATE_TYPES:
            raise InvalidCertificateTypeError(request.certificate_type)

        if request.student_id in self._debts:
            raise StudentHasDebtsError(request.student_id, self._debts[request.student_id])

        now = datetime.now(UTC)
        self._sequence += 1
        certificate_id = f"CERT-{int(now.timestamp() * 1000)}-{self._sequence}-{request.student_id}"

        if request.delivery_method == "email":
            return CertificateResult(
                certificate_id=certificate_id,
                status="sent",
                generated_at=now,
                delivery=DeliveryStatus(
                    method="email",
                    destination=f"{request.student_id.lower()}@universidad.edu",
                    sent_at=now,
                ),
            )

        return CertificateResult(
            certificate_id=certificate_id,
            status="generated",
            generated_at=now,
            download_url=f"https://certificados.universidad.edu/descargas/{certificate_id}.pdf",
            expires_at=now + timedelta(hours=24),
        )


class MockKnowledgeService(_FailureMixin, KnowledgeService):
    """Keyword search over SAMPLE_DOCUMENTS."""

    def __init__(
        self,
        documents: list[tuple[KnowledgeDocument, tuple[str, ...]]] | None = None,
        error: Exception | None = None,
    ) -> None:
        super().__init__(error)
        self._documents = SAMPLE_DOCUMENTS if documents is None else documents

    async def search(
        self,
        query: str,
        *,
        max_results: int = 5,
        document_types: list[str] | None = None,
        program: str | None = None,
    ) -> KnowledgeSearchResult:
        self._record(
            query=query,
            max_results=max_results,
            document_types=document_types,
            program=program,
        )
        if not query or not query.strip():
            raise EmptyQueryError()

        query_lower = query.lower()
        matches = [
            doc
            for doc, keywords in self._documents
            if any(keyword in query_lower for keyword in keywords)
            and (not document_types or doc.document_type in document_types)
        ]
        matches.sort(key=lambda d: d.relevance_score, reverse=True)
        matches = matches[:max_results]

        if not matches:
            raise NoResultsFoundError(query)

        return KnowledgeSearchResult(results=matches, total_results=len(matches))
