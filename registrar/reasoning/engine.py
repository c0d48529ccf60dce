"""Reasoning Engine - turn orchestrator.

Coordinates one request/response cycle: classify the utterance, load the
student's profile, analyze their situation, run the actions for the
intent, build the reply and append both messages to the history.

Handles the context lifecycle through the ContextStore in
handle_message; process_turn works on a context supplied by the caller.
"""

import time
from collections.abc import Callable
from datetime import datetime

from structlog.contextvars import bound_contextvars

from registrar.config.models import EngineConfig, ProceduresConfig, SessionConfig
from registrar.conversation.models import ConversationContext, MessageRole
from registrar.conversation.store import ContextStore
from registrar.dialogue.errors import ErrorHandler
from registrar.errors import ErrorCode
from registrar.intent import IntentClassification, classify_intent
from registrar.observability.logging import get_logger
from registrar.procedures import (
    ProcedureAutomation,
    ProcedureExecutor,
    ProcedureOutcome,
    ProcedureValidator,
)
from registrar.procedures.validator import DEBT_IMPEDIMENT, LOOKUP_FAILED_IMPEDIMENT
from registrar.reasoning.actions import ActionExecutor
from registrar.reasoning.models import ActionResult, TurnMetadata, TurnResponse
from registrar.reasoning.response import ResponseBuilder
from registrar.reasoning.situation import SituationAnalyzer
from registrar.services.base import (
    AcademicRecordService,
    CertificateService,
    KnowledgeService,
    ProfileService,
)

logger = get_logger(__name__)

FALLBACK_REPLY = (
    "Disculpa, tuve un problema al procesar tu solicitud. ¿Podrías intentar de nuevo?"
)

# blocked reason -> (error_code, can_retry)
BLOCKED_SIGNALS: dict[str, tuple[str, bool]] = {
    "debts": (ErrorCode.STUDENT_HAS_DEBTS.value, False),
    "system_error": (ErrorCode.SERVICE_UNAVAILABLE.value, True),
}


def local_now() -> datetime:
    """Return the current time in the local timezone."""
    return datetime.now().astimezone()


def _blocked_reason(outcome: ProcedureOutcome) -> str | None:
    """Why a procedure stopped, whether at validation or during execution."""
    if outcome.execution is not None:
        return outcome.execution.blocked_reason

    impediments = outcome.validation.impediments
    if LOOKUP_FAILED_IMPEDIMENT in impediments:
        return "system_error"
    if DEBT_IMPEDIMENT in impediments:
        return "debts"
    return None


class ReasoningEngine:
    """Orchestrate a dialogue turn.

    The ReasoningEngine runs seven steps per turn:
    1. Intent classification
    2. Context update (current intent)
    3. Profile loading, when a student is identified and none is cached
    4. Situation analysis
    5. Action execution
    6. Response building
    7. History update, trimmed to the newest history_limit messages

    Any unexpected failure yields a fixed apology that requests escalation;
    process_turn never raises.
    """

    def __init__(
        self,
        store: ContextStore,
        profile_service: ProfileService,
        record_service: AcademicRecordService,
        certificate_service: CertificateService,
        knowledge_service: KnowledgeService,
        session_config: SessionConfig | None = None,
        engine_config: EngineConfig | None = None,
        procedures_config: ProceduresConfig | None = None,
        clock: Callable[[], datetime] = local_now,
    ) -> None:
        """Initialize the reasoning engine.

        Args:
            store: Store owning conversation contexts
            profile_service: Student profile lookups
            record_service: Academic record lookups
            certificate_service: Certificate generation
            knowledge_service: Knowledge base search
            session_config: History limit
            engine_config: Knowledge result count, delivery method, routing
            procedures_config: Eligibility thresholds
            clock: Current time for greetings and message timestamps
        """
        self._store = store
        self._profile_service = profile_service
        self._session_config = session_config or SessionConfig()
        self._engine_config = engine_config or EngineConfig()
        self._clock = clock

        error_handler = ErrorHandler()
        self._automation = ProcedureAutomation(
            validator=ProcedureValidator(record_service, procedures_config),
            executor=ProcedureExecutor(
                record_service,
                certificate_service,
                clock=clock,
                default_delivery_method=self._engine_config.default_delivery_method,
            ),
        )
        self._situation_analyzer = SituationAnalyzer(record_service)
        self._action_executor = ActionExecutor(
            automation=self._automation,
            knowledge_service=knowledge_service,
            config=self._engine_config,
            error_handler=error_handler,
        )
        self._response_builder = ResponseBuilder()

    @property
    def automation(self) -> ProcedureAutomation:
        return self._automation

    async def handle_message(
        self,
        session_id: str,
        message: str,
        student_id: str | None = None,
    ) -> TurnResponse:
        """Process a turn for a session, loading and saving its context."""
        with bound_contextvars(session_id=session_id):
            context = await self._store.get_or_create(session_id, student_id)
            response = await self.process_turn(message, context)
            await self._store.save(context)
            return response

    async def process_turn(
        self, message: str, context: ConversationContext
    ) -> TurnResponse:
        """Process a user message against a conversation context.

        Mutates the context in place; the caller saves it.

        Args:
            message: The student's utterance
            context: Live context for the session

        Returns:
            TurnResponse with reply text, escalation flag and diagnostics
        """
        start_time = time.perf_counter()

        logger.info(
            "processing_turn",
            session_id=context.session_id,
            student_id=context.student_id,
            message_length=len(message),
        )

        try:
            # Step 1: Intent classification
            classification = classify_intent(message, context)

            # Step 2: Context update
            context.current_intent = classification.intent
            context.entities = dict(classification.entities)

            logger.info(
                "intent_classified",
                intent=classification.intent.value,
                confidence=classification.confidence,
            )

            # Step 3: Profile
            await self._load_profile(context)

            # Step 4: Situation analysis
            situation = await self._situation_analyzer.analyze(context, classification)

            # Step 5: Actions
            action = await self._action_executor.execute(
                message, classification, context, situation
            )

            # Step 6: Response
            now = self._clock()
            response = self._response_builder.build(action, context, now)

            # Step 7: History
            self._update_history(context, message, response.reply_text, now)

        except Exception as e:
            processing_time_ms = (time.perf_counter() - start_time) * 1000
            logger.error(
                "turn_failed",
                session_id=context.session_id,
                error=str(e),
                error_type=type(e).__name__,
                processing_time_ms=processing_time_ms,
            )
            return TurnResponse(
                reply_text=FALLBACK_REPLY,
                requires_escalation=True,
                metadata=TurnMetadata(
                    processing_time_ms=processing_time_ms,
                    error_code=ErrorCode.INTERNAL_ERROR.value,
                    can_retry=True,
                ),
            )

        response.metadata = self._metadata(classification, action, start_time)

        logger.info(
            "turn_processed",
            session_id=context.session_id,
            intent=classification.intent.value,
            tools_used=response.metadata.tools_used,
            requires_escalation=response.requires_escalation,
            processing_time_ms=response.metadata.processing_time_ms,
        )
        return response

    async def _load_profile(self, context: ConversationContext) -> None:
        if context.student_profile is not None or not context.student_id:
            return

        try:
            context.student_profile = await self._profile_service.get_profile(
                context.student_id
            )
        except Exception as e:
            logger.warning(
                "profile_unavailable",
                student_id=context.student_id,
                error=str(e),
                error_type=type(e).__name__,
            )

    def _update_history(
        self,
        context: ConversationContext,
        message: str,
        reply: str,
        now: datetime,
    ) -> None:
        context.add_message(MessageRole.USER, message, now)
        context.add_message(MessageRole.ASSISTANT, reply, now)
        context.trim_history(self._session_config.history_limit)

    @staticmethod
    def _metadata(
        classification: IntentClassification,
        action: ActionResult,
        start_time: float,
    ) -> TurnMetadata:
        error_code: str | None = None
        can_retry: bool | None = None

        if action.handled_error is not None:
            error_code = action.handled_error.error_code
            can_retry = action.handled_error.can_retry
        elif action.procedure is not None:
            reason = _blocked_reason(action.procedure)
            if reason in BLOCKED_SIGNALS:
                error_code, can_retry = BLOCKED_SIGNALS[reason]

        return TurnMetadata(
            tools_used=list(action.tools_used),
            processing_time_ms=(time.perf_counter() - start_time) * 1000,
            intent=classification.intent,
            confidence=classification.confidence,
            error_code=error_code,
            can_retry=can_retry,
        )
