"""Turn orchestration configuration."""

from pydantic import BaseModel, Field

from registrar.services.models import DeliveryMethod


class EngineConfig(BaseModel):
    """Configuration for the reasoning engine."""

    knowledge_max_results: int = Field(
        default=3,
        gt=0,
        description="Knowledge base results shown for a program query",
    )
    default_delivery_method: DeliveryMethod = Field(
        default="email",
        description="Delivery method used for certificates requested in chat",
    )
    route_procedures: bool = Field(
        default=True,
        description="Run administrative procedures detected in help/unknown turns",
    )
