"""Knowledge base question answering."""

from registrar.knowledge.models import KnowledgeAnswer, QueryType
from registrar.knowledge.processor import (
    QUERY_RULES,
    KnowledgeQueryProcessor,
    QueryRule,
    detect_query_rule,
    extract_sources,
    format_answer,
)

__all__ = [
    "QUERY_RULES",
    "KnowledgeAnswer",
    "KnowledgeQueryProcessor",
    "QueryRule",
    "QueryType",
    "detect_query_rule",
    "extract_sources",
    "format_answer",
]
