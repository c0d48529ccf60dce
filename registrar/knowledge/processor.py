"""Knowledge base questions: topic detection, filtered search and formatting.

The topic picks the document type the search is restricted to and the
wording of the answer. Rules are evaluated in order, first match wins;
the last rule matches everything.
"""

import re
from collections.abc import Sequence
from dataclasses import dataclass

from registrar.errors import NoResultsFoundError
from registrar.knowledge.models import KnowledgeAnswer, QueryType
from registrar.observability.logging import get_logger
from registrar.services.base import KnowledgeService
from registrar.services.models import KnowledgeDocument

logger = get_logger(__name__)

NO_RESULTS_MESSAGE = (
    "No encontré información específica sobre tu consulta en nuestra base de conocimiento."
)


def _words(*words: str) -> re.Pattern[str]:
    return re.compile(r"\b(" + "|".join(words) + r")\b")


@dataclass(frozen=True)
class QueryRule:
    """How one topic is recognised, searched and answered.

    Attributes:
        query_type: Topic produced on match
        pattern: Keywords searched in the lower-cased query; None matches all
        document_type: Search filter, or None to search every document
        introduction: First line of an answer with results
        no_results_hint: Suggestion appended when nothing is found
        excluded: Fragments that veto the match
    """

    query_type: QueryType
    pattern: re.Pattern[str] | None
    document_type: str | None
    introduction: str
    no_results_hint: str
    excluded: tuple[str, ...] = ()

    def matches(self, text: str) -> bool:
        if any(fragment in text for fragment in self.excluded):
            return False
        return self.pattern is None or self.pattern.search(text) is not None


QUERY_RULES: tuple[QueryRule, ...] = (
    QueryRule(
        query_type=QueryType.PENSUM,
        pattern=_words("pensum", "plan de estudios", "malla curricular", "materias"),
        document_type="curriculum",
        introduction="Aquí está la información sobre el plan de estudios:",
        no_results_hint=(
            "Te recomiendo contactar con el departamento académico para obtener "
            "el pensum actualizado."
        ),
    ),
    QueryRule(
        query_type=QueryType.REQUISITOS,
        pattern=_words("requisitos", "requerimientos", "necesito", "documentos", "papeles"),
        document_type="requirements",
        introduction="Estos son los requisitos que necesitas:",
        no_results_hint=(
            "Puedes contactar con la oficina de admisiones para conocer los "
            "requisitos específicos."
        ),
        excluded=("admisión", "admision"),
    ),
    QueryRule(
        query_type=QueryType.FECHAS,
        pattern=_words(
            "fecha", "fechas", "cuándo", "cuando", "plazo", "plazos",
            "inscripción", "inscripciones", "matrícula",
        ),
        document_type="calendar",
        introduction="Aquí están las fechas importantes:",
        no_results_hint=(
            "Te sugiero revisar el calendario académico en el portal web o "
            "contactar con registro."
        ),
    ),
    QueryRule(
        query_type=QueryType.ADMISION,
        pattern=_words("admisión", "admision", "ingreso", "ingresar", "postular", "aplicar"),
        document_type="admission",
        introduction="Información sobre el proceso de admisión:",
        no_results_hint=(
            "Para información detallada sobre admisiones, contacta con la oficina "
            "de admisiones."
        ),
    ),
    QueryRule(
        query_type=QueryType.PROGRAMA,
        pattern=_words(
            "programa", "carrera", "licenciatura", "maestría", "doctorado", "especialización"
        ),
        document_type="program_info",
        introduction="Información sobre el programa:",
        no_results_hint=(
            "Puedes obtener más información sobre programas en la oficina de "
            "información académica."
        ),
    ),
    QueryRule(
        query_type=QueryType.GENERAL,
        pattern=None,
        document_type=None,
        introduction="Encontré la siguiente información:",
        no_results_hint=(
            "Puedes reformular tu pregunta o contactar con nuestro equipo de soporte."
        ),
    ),
)


def detect_query_rule(query: str) -> QueryRule:
    """Return the first rule matching the query."""
    text = query.lower()
    return next(rule for rule in QUERY_RULES if rule.matches(text))


def extract_sources(results: Sequence[KnowledgeDocument]) -> list[str]:
    """Distinct, non-empty sources in result order."""
    sources: list[str] = []
    for doc in results:
        if doc.source and doc.source not in sources:
            sources.append(doc.source)
    return sources


def format_answer(rule: QueryRule, results: Sequence[KnowledgeDocument]) -> KnowledgeAnswer:
    """Render results as numbered excerpts followed by their sources."""
    if not results:
        return KnowledgeAnswer(
            query_type=rule.query_type,
            answer=f"{NO_RESULTS_MESSAGE}\n\n{rule.no_results_hint}",
        )

    blocks = [rule.introduction]
    blocks.extend(
        f"**{index}. {doc.title}**\n{doc.excerpt}"
        for index, doc in enumerate(results, start=1)
    )

    sources = extract_sources(results)
    if sources:
        listing = "\n".join(f"{index}. {source}" for index, source in enumerate(sources, start=1))
        blocks.append(f"---\n**Fuentes:**\n{listing}")

    return KnowledgeAnswer(
        query_type=rule.query_type,
        answer="\n\n".join(blocks),
        sources=sources,
        has_results=True,
    )


class KnowledgeQueryProcessor:
    """Answers academic information questions from the knowledge base.

    An empty search is an answer with a topic-specific hint. Other
    service errors propagate to the caller.
    """

    def __init__(self, knowledge_service: KnowledgeService, max_results: int = 3) -> None:
        self._knowledge_service = knowledge_service
        self._max_results = max_results

    async def process(self, query: str, program: str | None = None) -> KnowledgeAnswer:
        rule = detect_query_rule(query)
        logger.info(
            "knowledge_query_detected",
            query_type=rule.query_type.value,
            document_type=rule.document_type,
        )

        try:
            found = await self._knowledge_service.search(
                query,
                max_results=self._max_results,
                document_types=[rule.document_type] if rule.document_type else None,
                program=program,
            )
            results = found.results
        except NoResultsFoundError:
            logger.info("knowledge_query_empty", query_type=rule.query_type.value)
            results = []

        answer = format_answer(rule, results)
        logger.info(
            "knowledge_query_answered",
            query_type=answer.query_type.value,
            has_results=answer.has_results,
            sources=len(answer.sources),
        )
        return answer
