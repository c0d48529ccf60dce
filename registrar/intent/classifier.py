"""Keyword-rule intent classification.

Rules are evaluated in order and the first match wins. Each rule pairs a
keyword pattern with an optional secondary condition over the utterance
and the conversation so far.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from registrar.intent.models import IntentClassification, IntentType

if TYPE_CHECKING:
    from registrar.conversation.models import ConversationContext

UNKNOWN_CONFIDENCE = 0.5


def _words(*words: str) -> re.Pattern[str]:
    return re.compile(r"\b(" + "|".join(words) + r")\b")


def _contains_any(*fragments: str) -> Callable[[str, ConversationContext], bool]:
    def check(text: str, context: ConversationContext) -> bool:
        return any(fragment in text for fragment in fragments)

    return check


def _history_empty(text: str, context: ConversationContext) -> bool:
    return not context.history


def infer_certificate_type(text: str) -> str:
    """Pick the certificate subtype mentioned in a lower-cased utterance."""
    if any(word in text for word in ("calificacion", "calificación", "notas")):
        return "grades"
    if any(word in text for word in ("graduacion", "graduación", "graduado")):
        return "graduation"
    return "enrollment"


@dataclass(frozen=True)
class IntentRule:
    """One classification rule.

    Attributes:
        intent: Intent produced on match
        pattern: Keywords searched in the lower-cased utterance
        confidence: Confidence reported on match
        condition: Secondary check; must also hold unless either is set
        either: Match when the pattern OR the condition holds
        extract: Builds entities from (lower-cased, raw) utterance
    """

    intent: IntentType
    pattern: re.Pattern[str]
    confidence: float
    condition: Callable[[str, ConversationContext], bool] | None = None
    either: bool = False
    extract: Callable[[str, str], dict[str, Any]] | None = field(default=None)

    def matches(self, text: str, context: ConversationContext) -> bool:
        keyword_hit = self.pattern.search(text) is not None
        if self.condition is None:
            return keyword_hit
        if self.either:
            return keyword_hit or self.condition(text, context)
        return keyword_hit and self.condition(text, context)


INTENT_RULES: tuple[IntentRule, ...] = (
    IntentRule(
        intent=IntentType.GREETING,
        pattern=_words("hola", "buenos días", "buenas tardes", "buenas noches", "hey", "saludos"),
        confidence=0.9,
        condition=_history_empty,
    ),
    IntentRule(
        intent=IntentType.REQUEST_CERTIFICATE,
        pattern=_words("certificado", "constancia", "documento", "certificación", "comprobante"),
        confidence=0.85,
        condition=_contains_any("necesito", "solicitar", "quiero", "generar"),
        extract=lambda text, raw: {"certificate_type": infer_certificate_type(text)},
    ),
    IntentRule(
        intent=IntentType.QUERY_PROGRAM,
        pattern=_words("programa", "carrera", "pensum", "requisitos", "inscripción", "admisión"),
        confidence=0.8,
        condition=_contains_any("cuál", "qué", "cómo", "información"),
        extract=lambda text, raw: {"query": raw},
    ),
    IntentRule(
        intent=IntentType.CHECK_ACADEMIC_STATUS,
        pattern=_words("calificaciones", "notas", "promedio", "gpa", "estado académico", "materias"),
        confidence=0.85,
        condition=_contains_any("mi", "cómo", "ver", "consultar"),
    ),
    IntentRule(
        intent=IntentType.REQUEST_HELP,
        pattern=_words("ayuda", "ayudar", "puedes", "necesito", "apoyo", "asistencia"),
        confidence=0.7,
        condition=_contains_any("?"),
        either=True,
    ),
)


def classify_intent(message: str, context: ConversationContext) -> IntentClassification:
    """Classify an utterance against INTENT_RULES.

    Deterministic and side-effect free. Falls back to UNKNOWN.
    """
    text = message.lower()

    for rule in INTENT_RULES:
        if rule.matches(text, context):
            entities = rule.extract(text, message) if rule.extract else {}
            return IntentClassification(
                intent=rule.intent,
                confidence=rule.confidence,
                entities=entities,
            )

    return IntentClassification(intent=IntentType.UNKNOWN, confidence=UNKNOWN_CONFIDENCE)
