"""Tests for knowledge query detection and answering."""

import pytest

from registrar.errors import ServiceUnavailableError
from registrar.knowledge import (
    KnowledgeQueryProcessor,
    QueryType,
    detect_query_rule,
    extract_sources,
    format_answer,
)
from registrar.knowledge.processor import NO_RESULTS_MESSAGE, QUERY_RULES
from registrar.services import KnowledgeDocument, MockKnowledgeService


def document(title: str, source: str, document_type: str = "curriculum") -> KnowledgeDocument:
    return KnowledgeDocument(
        title=title,
        excerpt=f"Resumen de {title}",
        relevance_score=0.9,
        source=source,
        document_type=document_type,
    )


class TestDetectQueryRule:
    """Tests for topic detection."""

    @pytest.mark.parametrize(
        "query,expected",
        [
            ("¿Cuál es el pensum de Ingeniería?", QueryType.PENSUM),
            ("¿Qué materias tiene el plan de estudios?", QueryType.PENSUM),
            ("¿Qué requisitos necesito para inscribirme?", QueryType.REQUISITOS),
            ("¿Qué papeles debo llevar?", QueryType.REQUISITOS),
            ("¿Cuándo son las inscripciones?", QueryType.FECHAS),
            ("¿Hasta qué fecha hay plazo?", QueryType.FECHAS),
            ("¿Cómo puedo aplicar para admisión?", QueryType.ADMISION),
            ("Quiero postular este año", QueryType.ADMISION),
            ("¿Qué programas de maestría ofrecen?", QueryType.PROGRAMA),
            ("Háblame de la carrera de derecho", QueryType.PROGRAMA),
            ("¿Dónde está la biblioteca?", QueryType.GENERAL),
        ],
    )
    def test_query_types(self, query, expected):
        assert detect_query_rule(query).query_type == expected

    def test_admission_requirements_are_admission(self):
        """Should route requirement questions about admission to admission."""
        rule = detect_query_rule("¿Cuáles son los requisitos de admisión?")

        assert rule.query_type == QueryType.ADMISION
        assert rule.document_type == "admission"

    def test_general_searches_everything(self):
        """Should end the table with a catch-all without a document filter."""
        general = QUERY_RULES[-1]

        assert general.query_type == QueryType.GENERAL
        assert general.document_type is None
        assert general.matches("cualquier cosa")


class TestFormatting:
    """Tests for answer formatting."""

    def test_excerpts_and_sources(self):
        """Should number excerpts under the topic introduction, then list sources."""
        rule = detect_query_rule("¿Cuál es el pensum?")
        results = [
            document("Pensum 2024", "kb://pensum-2024.pdf"),
            document("Electivas", "kb://electivas.pdf"),
        ]

        answer = format_answer(rule, results)

        assert answer.query_type == QueryType.PENSUM
        assert answer.has_results is True
        assert answer.answer == (
            "Aquí está la información sobre el plan de estudios:\n\n"
            "**1. Pensum 2024**\nResumen de Pensum 2024\n\n"
            "**2. Electivas**\nResumen de Electivas\n\n"
            "---\n**Fuentes:**\n1. kb://pensum-2024.pdf\n2. kb://electivas.pdf"
        )

    def test_sources_deduplicated_in_order(self):
        results = [
            document("A", "kb://b.pdf"),
            document("B", "kb://a.pdf"),
            document("C", "kb://b.pdf"),
            document("D", ""),
        ]

        assert extract_sources(results) == ["kb://b.pdf", "kb://a.pdf"]

    def test_without_sources(self):
        """Should omit the sources section when no result has one."""
        rule = detect_query_rule("¿Dónde está la biblioteca?")

        answer = format_answer(rule, [document("Biblioteca", "")])

        assert answer.sources == []
        assert "Fuentes" not in answer.answer
        assert answer.answer.startswith("Encontré la siguiente información:\n\n")

    @pytest.mark.parametrize(
        "query,hint",
        [
            ("¿Cuál es el pensum?", "departamento académico"),
            ("¿Qué documentos piden?", "requisitos específicos"),
            ("¿Cuándo cierran?", "calendario académico"),
            ("¿Cómo es el ingreso?", "oficina de admisiones"),
            ("¿Qué doctorado hay?", "información académica"),
            ("¿Dónde está la biblioteca?", "reformular tu pregunta"),
        ],
    )
    def test_no_results_hint_per_type(self, query, hint):
        answer = format_answer(detect_query_rule(query), [])

        assert answer.has_results is False
        assert answer.answer.startswith(f"{NO_RESULTS_MESSAGE}\n\n")
        assert hint in answer.answer


class TestKnowledgeQueryProcessor:
    """Tests for the search round trip."""

    @pytest.mark.asyncio
    async def test_filters_by_document_type(self, knowledge_service):
        """Should restrict the search to the topic's document type."""
        processor = KnowledgeQueryProcessor(knowledge_service, max_results=5)

        answer = await processor.process("¿Cuáles son los requisitos de admisión?", program="DER")

        assert knowledge_service.call_history == [
            {
                "query": "¿Cuáles son los requisitos de admisión?",
                "max_results": 5,
                "document_types": ["admission"],
                "program": "DER",
            }
        ]
        assert answer.query_type == QueryType.ADMISION
        assert answer.sources == ["kb://admissions/proceso-admision.pdf"]

    @pytest.mark.asyncio
    async def test_general_query_unfiltered(self, knowledge_service):
        processor = KnowledgeQueryProcessor(knowledge_service)

        await processor.process("Busco información sobre certificados")

        assert knowledge_service.call_history[0]["document_types"] is None

    @pytest.mark.asyncio
    async def test_no_results_is_an_answer(self):
        """Should turn an empty search into a hint rather than an error."""
        processor = KnowledgeQueryProcessor(MockKnowledgeService(documents=[]))

        answer = await processor.process("¿Cuándo son las inscripciones?")

        assert answer.has_results is False
        assert answer.query_type == QueryType.FECHAS
        assert "calendario académico" in answer.answer

    @pytest.mark.asyncio
    async def test_service_errors_propagate(self):
        processor = KnowledgeQueryProcessor(
            MockKnowledgeService(error=ServiceUnavailableError("search"))
        )

        with pytest.raises(ServiceUnavailableError):
            await processor.process("¿Cuál es el pensum?")
