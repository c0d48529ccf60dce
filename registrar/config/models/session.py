"""Conversation context store configuration."""

from datetime import timedelta

from pydantic import BaseModel, Field


class SessionConfig(BaseModel):
    """Expiry and history limits for conversation contexts."""

    timeout_minutes: float = Field(
        default=30,
        gt=0,
        description="Inactivity window after which a context expires",
    )
    history_limit: int = Field(
        default=20,
        gt=0,
        description="Maximum messages kept in a context's history",
    )
    sweep_interval_seconds: float = Field(
        default=300,
        gt=0,
        description="Interval of the background expiry sweep",
    )

    @property
    def timeout(self) -> timedelta:
        return timedelta(minutes=self.timeout_minutes)
