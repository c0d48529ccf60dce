"""Dialogue intent classification."""

from registrar.intent.classifier import (
    INTENT_RULES,
    IntentRule,
    classify_intent,
    infer_certificate_type,
)
from registrar.intent.models import IntentClassification, IntentType

__all__ = [
    "INTENT_RULES",
    "IntentClassification",
    "IntentRule",
    "IntentType",
    "classify_intent",
    "infer_certificate_type",
]
