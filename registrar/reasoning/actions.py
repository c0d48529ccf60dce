"""Per-intent action execution."""

from registrar.config.models import EngineConfig
from registrar.conversation.models import ConversationContext
from registrar.dialogue.errors import ErrorHandler
from registrar.errors import RegistrarError
from registrar.intent.models import IntentClassification, IntentType
from registrar.knowledge import KnowledgeQueryProcessor
from registrar.observability.logging import get_logger
from registrar.procedures import ProcedureAutomation, ProcedureType, classify_procedure
from registrar.reasoning.models import (
    MISSING_STUDENT_ID,
    RECORD_UNAVAILABLE,
    SERVICE_ERROR,
    ActionResult,
    SituationAnalysis,
)
from registrar.services.base import KnowledgeService

logger = get_logger(__name__)

GREETING_TOOL = "greeting-generator"
PROCEDURE_TOOL = "procedure-automation"
KNOWLEDGE_TOOL = "query-knowledge-base"
RECORD_TOOL = "check-academic-record"
ADVISOR_TOOL = "academic-advisor"
HELP_TOOL = "help-generator"


class ActionExecutor:
    """Runs the tools an intent calls for and collects their output."""

    def __init__(
        self,
        automation: ProcedureAutomation,
        knowledge_service: KnowledgeService,
        config: EngineConfig | None = None,
        error_handler: ErrorHandler | None = None,
    ) -> None:
        self._automation = automation
        self._config = config or EngineConfig()
        self._knowledge = KnowledgeQueryProcessor(
            knowledge_service, max_results=self._config.knowledge_max_results
        )
        self._error_handler = error_handler or ErrorHandler()

    async def execute(
        self,
        message: str,
        classification: IntentClassification,
        context: ConversationContext,
        situation: SituationAnalysis,
    ) -> ActionResult:
        intent = classification.intent
        result = ActionResult(intent=intent)

        if intent == IntentType.GREETING:
            result.tools_used.append(GREETING_TOOL)

        elif intent == IntentType.REQUEST_CERTIFICATE:
            await self._request_certificate(classification, context, result)

        elif intent == IntentType.QUERY_PROGRAM:
            await self._query_program(classification, message, context, result)

        elif intent == IntentType.CHECK_ACADEMIC_STATUS:
            self._check_academic_status(context, situation, result)

        else:
            await self._help_or_procedure(message, context, result)

        return result

    async def _request_certificate(
        self,
        classification: IntentClassification,
        context: ConversationContext,
        result: ActionResult,
    ) -> None:
        if not context.student_id:
            result.success = False
            result.error = MISSING_STUDENT_ID
            return

        result.tools_used.append(PROCEDURE_TOOL)
        outcome = await self._automation.run(
            ProcedureType.CERTIFICATE_REQUEST,
            context.student_id,
            {
                "certificate_type": classification.entities.get(
                    "certificate_type", "enrollment"
                ),
                "delivery_method": self._config.default_delivery_method,
            },
        )
        result.procedure = outcome
        result.success = outcome.success

    async def _query_program(
        self,
        classification: IntentClassification,
        message: str,
        context: ConversationContext,
        result: ActionResult,
    ) -> None:
        result.tools_used.append(KNOWLEDGE_TOOL)
        query = classification.entities.get("query") or message
        profile = context.student_profile
        program = profile.program.code if profile and profile.program else None

        try:
            result.knowledge = await self._knowledge.process(query, program=program)
        except RegistrarError as e:
            result.success = False
            result.error = SERVICE_ERROR
            result.handled_error = self._error_handler.handle(
                e, {"tool": KNOWLEDGE_TOOL}
            )

    def _check_academic_status(
        self,
        context: ConversationContext,
        situation: SituationAnalysis,
        result: ActionResult,
    ) -> None:
        if not context.student_id:
            result.success = False
            result.error = MISSING_STUDENT_ID
            return

        result.tools_used.extend([RECORD_TOOL, ADVISOR_TOOL])
        result.academic_analysis = situation.academic_analysis
        result.impediments = situation.impediments
        if situation.academic_analysis is None:
            result.success = False
            result.error = RECORD_UNAVAILABLE

    async def _help_or_procedure(
        self,
        message: str,
        context: ConversationContext,
        result: ActionResult,
    ) -> None:
        if self._config.route_procedures and context.student_id:
            procedure = classify_procedure(message)
            if procedure.procedure_type not in (
                ProcedureType.UNKNOWN,
                ProcedureType.CERTIFICATE_REQUEST,
            ):
                logger.info(
                    "procedure_routed",
                    procedure_type=procedure.procedure_type.value,
                    confidence=procedure.confidence,
                )
                result.tools_used.append(PROCEDURE_TOOL)
                outcome = await self._automation.run(
                    procedure.procedure_type,
                    context.student_id,
                    procedure.parameters,
                    classification=procedure,
                )
                result.procedure = outcome
                result.success = outcome.success
                return

        result.tools_used.append(HELP_TOOL)
