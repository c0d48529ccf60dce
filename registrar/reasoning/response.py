"""Reply text and escalation for each intent."""

from datetime import datetime

from registrar.advising import generate_proactive_message, impediment_message
from registrar.conversation.models import ConversationContext
from registrar.dialogue import (
    ErrorHandler,
    UNKNOWN_REQUEST_MESSAGE,
    generate_greeting,
    generate_help_message,
    generate_time_based_greeting,
)
from registrar.intent.models import IntentType
from registrar.knowledge import QUERY_RULES, format_answer
from registrar.procedures.models import ProcedureOutcome
from registrar.procedures.validator import LOOKUP_FAILED_IMPEDIMENT
from registrar.reasoning.models import MISSING_STUDENT_ID, ActionResult, TurnResponse

CERTIFICATE_ID_REQUEST = (
    "Para generar tu certificado, necesito que me proporciones tu número de "
    "identificación de estudiante."
)
ACADEMIC_ID_REQUEST = (
    "Para consultar tu estado académico, necesito que me proporciones tu número "
    "de identificación de estudiante."
)
ACADEMIC_UNAVAILABLE = (
    "Lo siento, no pude acceder a tu información académica en este momento. "
    "Por favor, intenta más tarde."
)
PROCEDURE_FAILED = (
    "Lo siento, tuve un problema al procesar tu solicitud. ¿Podrías intentar de nuevo?"
)


class ResponseBuilder:
    """Turns an action result into the reply for the student."""

    def build(
        self,
        action: ActionResult,
        context: ConversationContext,
        now: datetime,
    ) -> TurnResponse:
        intent = action.intent

        if intent == IntentType.GREETING:
            if context.student_profile:
                return self._reply(generate_time_based_greeting(context.student_profile, now))
            return self._reply(generate_greeting(None))

        if intent == IntentType.REQUEST_CERTIFICATE:
            if action.error == MISSING_STUDENT_ID:
                return self._reply(CERTIFICATE_ID_REQUEST)
            return self._procedure_reply(action.procedure)

        if intent == IntentType.QUERY_PROGRAM:
            return self._knowledge_reply(action)

        if intent == IntentType.CHECK_ACADEMIC_STATUS:
            return self._academic_status_reply(action, context)

        if action.procedure is not None:
            return self._procedure_reply(action.procedure)

        if intent == IntentType.REQUEST_HELP:
            return self._reply(generate_help_message(context.student_profile))

        return self._reply(UNKNOWN_REQUEST_MESSAGE)

    @staticmethod
    def _reply(text: str, escalate: bool = False) -> TurnResponse:
        return TurnResponse(reply_text=text, requires_escalation=escalate)

    def _procedure_reply(self, outcome: ProcedureOutcome | None) -> TurnResponse:
        if outcome is None:
            return self._reply(PROCEDURE_FAILED, escalate=True)

        validation = outcome.validation
        execution = outcome.execution

        if execution is None:
            blockers = validation.impediments + validation.missing_requirements
            lines = "\n".join(f"- {item}" for item in blockers)
            text = (
                "No puedo completar tu trámite en este momento por lo siguiente:"
                f"\n\n{lines}\n\n"
                "Por favor, resuelve estos puntos o contacta con la oficina de registro."
            )
            return self._reply(
                text, escalate=LOOKUP_FAILED_IMPEDIMENT in validation.impediments
            )

        text = execution.final_message or PROCEDURE_FAILED
        if execution.success and validation.warnings:
            notes = "\n".join(f"- {w}" for w in validation.warnings)
            text += f"\n\nTen en cuenta:\n{notes}"

        return self._reply(text, escalate=execution.blocked_reason == "system_error")

    def _knowledge_reply(self, action: ActionResult) -> TurnResponse:
        if action.handled_error is not None:
            return self._reply(
                ErrorHandler.format_user_message(action.handled_error),
                escalate=action.handled_error.requires_escalation,
            )

        knowledge = action.knowledge or format_answer(QUERY_RULES[-1], [])
        return self._reply(knowledge.answer)

    def _academic_status_reply(
        self, action: ActionResult, context: ConversationContext
    ) -> TurnResponse:
        if action.error == MISSING_STUDENT_ID:
            return self._reply(ACADEMIC_ID_REQUEST)

        analysis = action.academic_analysis
        if not action.success or analysis is None:
            return self._reply(ACADEMIC_UNAVAILABLE)

        profile = context.student_profile
        text = f"Hola {profile.first_name}. " if profile else "Hola. "

        if analysis.has_issues:
            text += generate_proactive_message(analysis)
        else:
            completed = (
                "todas tus materias"
                if not analysis.failed_courses
                else "la mayoría de tus materias"
            )
            text += (
                "Tu rendimiento académico está excelente. Tienes un promedio de "
                f"{analysis.gpa_value:.2f} y has completado {completed} "
                "exitosamente. ¡Sigue así!"
            )

        impediments = action.impediments
        if impediments is not None and impediments.has_impediments:
            text += "\n\n" + impediment_message(impediments)
        return self._reply(text)
