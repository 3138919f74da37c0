from pydantic import BaseModel, Field
from typing import List, Optional


class RevenueSummary(BaseModel):
    total_revenue: float = 0.0
    weighted_jobs: float = Field(0.0, description="Team bookings count as 1/n of a job")
    paid_bookings: int = 0
    average_job_value: float = 0.0
    fallback_team_ids: List[Optional[str]] = Field(
        default_factory=list,
        description="Teams whose bookings were credited in full for lack of a member count",
    )
