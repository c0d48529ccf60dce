"""Procedure eligibility thresholds."""

from pydantic import BaseModel, Field


class ProceduresConfig(BaseModel):
    """Thresholds applied by the procedure validator."""

    max_credits_per_semester: int = Field(
        default=18,
        gt=0,
        description="In-progress credit load that blocks course registration",
    )
    min_gpa_program_change: float = Field(
        default=2.5,
        ge=0.0,
        le=5.0,
        description="Minimum GPA required to change program",
    )
    min_credits_program_change: int = Field(
        default=12,
        ge=0,
        description="Minimum completed credits required to change program",
    )
    appeal_window_days: int = Field(
        default=15,
        gt=0,
        description="Days after grading in which an appeal may be filed",
    )
