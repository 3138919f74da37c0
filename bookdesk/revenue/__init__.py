from .schemas import RevenueSummary
from .team_revenue import (
    is_team_booking,
    get_revenue_divisor,
    calculate_booking_revenue,
    get_unique_team_ids,
    summarize_revenue,
)
from .service import TeamRevenueService

__all__ = [
    "RevenueSummary",
    "is_team_booking",
    "get_revenue_divisor",
    "calculate_booking_revenue",
    "get_unique_team_ids",
    "summarize_revenue",
    "TeamRevenueService",
]
