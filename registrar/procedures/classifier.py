"""Keyword-rule classification of administrative procedures.

Procedures use their own taxonomy, richer than the dialogue intents: a
single "request" intent can map onto several procedure types.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from registrar.procedures.models import ProcedureClassification, ProcedureType

UNKNOWN_CONFIDENCE = 0.5


def _words(*words: str) -> re.Pattern[str]:
    return re.compile(r"\b(" + "|".join(words) + r")\b")


def _mentions(*fragments: str) -> Callable[[str], bool]:
    return lambda text: any(fragment in text for fragment in fragments)


def _mentions_word(*words: str) -> Callable[[str], bool]:
    pattern = _words(*words)
    return lambda text: pattern.search(text) is not None


# Checked in order; enrollment when nothing matches.
CERTIFICATE_SUBTYPES: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("grades", ("calificacion", "calificación", "notas")),
    ("graduation", ("graduacion", "graduación", "graduado")),
)


def certificate_parameters(text: str) -> dict[str, Any]:
    """Certificate subtype requested in a lower-cased utterance."""
    for certificate_type, fragments in CERTIFICATE_SUBTYPES:
        if any(fragment in text for fragment in fragments):
            return {"certificate_type": certificate_type}
    return {"certificate_type": "enrollment"}


@dataclass(frozen=True)
class ProcedureRule:
    """One procedure rule: an action keyword plus a qualifying mention."""

    procedure_type: ProcedureType
    pattern: re.Pattern[str]
    qualifier: Callable[[str], bool]
    confidence: float
    extract: Callable[[str], dict[str, Any]] | None = None

    def matches(self, text: str) -> bool:
        return self.pattern.search(text) is not None and self.qualifier(text)


PROCEDURE_RULES: tuple[ProcedureRule, ...] = (
    ProcedureRule(
        procedure_type=ProcedureType.CERTIFICATE_REQUEST,
        pattern=_words("certificado", "constancia", "documento", "certificación", "comprobante"),
        qualifier=_mentions("necesito", "solicitar", "quiero", "generar"),
        confidence=0.9,
        extract=certificate_parameters,
    ),
    ProcedureRule(
        procedure_type=ProcedureType.ENROLLMENT,
        pattern=_words("inscripción", "inscribir", "inscribirme", "matricula", "matrícula", "matricular"),
        qualifier=_mentions("quiero", "necesito", "cómo", "programa"),
        confidence=0.85,
    ),
    ProcedureRule(
        procedure_type=ProcedureType.COURSE_REGISTRATION,
        pattern=_words("registrar", "inscribir", "agregar", "añadir"),
        qualifier=_mentions_word("materias?", "cursos?", "asignaturas?", "clases?"),
        confidence=0.85,
    ),
    ProcedureRule(
        procedure_type=ProcedureType.GRADE_APPEAL,
        pattern=_words("apelar", "reclamar", "revisar", "impugnar"),
        qualifier=_mentions_word("calificación", "nota", "evaluación"),
        confidence=0.8,
    ),
    ProcedureRule(
        procedure_type=ProcedureType.PROGRAM_CHANGE,
        pattern=_words("cambiar", "cambio", "transferir"),
        qualifier=_mentions_word("programa", "carrera"),
        confidence=0.8,
    ),
    ProcedureRule(
        procedure_type=ProcedureType.WITHDRAWAL,
        pattern=_words("retirar", "retiro", "dar de baja", "cancelar"),
        qualifier=_mentions("materia", "curso", "semestre"),
        confidence=0.8,
    ),
)


def classify_procedure(message: str) -> ProcedureClassification:
    """Classify a request against PROCEDURE_RULES, first match wins."""
    text = message.lower()

    for rule in PROCEDURE_RULES:
        if rule.matches(text):
            return ProcedureClassification(
                procedure_type=rule.procedure_type,
                confidence=rule.confidence,
                parameters=rule.extract(text) if rule.extract else {},
            )

    return ProcedureClassification(
        procedure_type=ProcedureType.UNKNOWN, confidence=UNKNOWN_CONFIDENCE
    )
