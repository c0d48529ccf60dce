"""Situation analysis ahead of action execution."""

from registrar.advising import analyze_academic_record, analyze_impediments
from registrar.conversation.models import ConversationContext
from registrar.intent.models import IntentClassification, IntentType
from registrar.observability.logging import get_logger
from registrar.reasoning.models import SituationAnalysis
from registrar.services.base import AcademicRecordService

logger = get_logger(__name__)

ACADEMIC_CHECK_INTENTS = frozenset(
    {IntentType.REQUEST_CERTIFICATE, IntentType.CHECK_ACADEMIC_STATUS}
)


class SituationAnalyzer:
    """Fetches an academic record snapshot when the intent needs one.

    A failed lookup is logged and leaves the analysis empty; the turn
    carries on.
    """

    def __init__(self, record_service: AcademicRecordService) -> None:
        self._record_service = record_service

    async def analyze(
        self,
        context: ConversationContext,
        classification: IntentClassification,
    ) -> SituationAnalysis:
        analysis = SituationAnalysis()

        if classification.intent not in ACADEMIC_CHECK_INTENTS or not context.student_id:
            return analysis

        try:
            record = await self._record_service.get_record(
                context.student_id, include_courses=True, include_grades=True
            )
        except Exception as e:
            logger.warning(
                "academic_record_unavailable",
                student_id=context.student_id,
                error=str(e),
                error_type=type(e).__name__,
            )
            return analysis

        analysis.academic_analysis = analyze_academic_record(record)
        analysis.impediments = analyze_impediments(record)
        return analysis
