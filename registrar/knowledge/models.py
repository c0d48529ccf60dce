"""Knowledge query models."""

from enum import Enum

from pydantic import BaseModel, Field


class QueryType(str, Enum):
    """Topic of an academic information question."""

    PENSUM = "pensum"
    REQUISITOS = "requisitos"
    FECHAS = "fechas"
    ADMISION = "admision"
    PROGRAMA = "programa"
    GENERAL = "general"


class KnowledgeAnswer(BaseModel):
    """Formatted answer to a knowledge query."""

    query_type: QueryType
    answer: str = Field(..., description="Reply text with excerpts and sources")
    sources: list[str] = Field(default_factory=list, description="Distinct source URIs")
    has_results: bool = False
