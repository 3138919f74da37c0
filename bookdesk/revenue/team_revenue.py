"""
Team revenue allocation.

A booking assigned to an individual (staff_id set) belongs wholly to that
person, even when a team_id is also present. A team booking (no staff_id)
is split evenly between the team's members. The divisor is, in order:

  1. the team_member_count stored on the booking when it was created
  2. the live member count looked up for its team
  3. 1, so orphaned or unknown teams never divide by zero

The stored snapshot always wins so historical revenue does not move when
people join or leave a team later.
"""

from typing import Any, Iterable, Mapping

from bookdesk.utils import Logger
from .schemas import RevenueSummary

logger = Logger("bookdesk.revenue")


def _field(booking: Any, name: str):
    if isinstance(booking, Mapping):
        return booking.get(name)
    return getattr(booking, name, None)


def _stored_count(booking):
    # zero or negative snapshots are bad data, treated as missing
    stored = _field(booking, "team_member_count")
    if stored is not None and stored > 0:
        return stored
    return None


def is_team_booking(booking) -> bool:
    """A booking with no individual assignee is attributed to its team."""
    return not _field(booking, "staff_id")


def get_revenue_divisor(booking, team_member_counts: Mapping[str, int]) -> int:
    """Number of members a team booking's revenue is split between."""
    stored = _stored_count(booking)
    if stored is not None:
        return stored

    live = team_member_counts.get(_field(booking, "team_id"))
    if live:
        return live

    return 1


def calculate_booking_revenue(booking, team_member_counts: Mapping[str, int]) -> float:
    """
    Revenue credited for one booking.

    Examples:
      {"total_price": 3000, "staff_id": "s1", "team_id": None}          → 3000
      {"total_price": 3000, "staff_id": None, "team_id": "t1"}, {t1: 3} → 1000
    """
    total_price = _field(booking, "total_price") or 0

    if not is_team_booking(booking):
        return total_price

    return total_price / get_revenue_divisor(booking, team_member_counts)


def get_unique_team_ids(bookings: Iterable) -> list[str]:
    """
    Distinct team ids that need a live member-count lookup, in first-seen order.

    Only team bookings without a usable stored team_member_count qualify.
    """
    seen: dict[str, None] = {}
    for booking in bookings:
        team_id = _field(booking, "team_id")
        if not team_id or not is_team_booking(booking):
            continue
        if _stored_count(booking) is not None:
            continue
        seen.setdefault(team_id, None)
    return list(seen)


def _uses_fallback(booking, team_member_counts: Mapping[str, int]) -> bool:
    if _stored_count(booking) is not None:
        return False
    return not team_member_counts.get(_field(booking, "team_id"))


def summarize_revenue(
    bookings: Iterable, team_member_counts: Mapping[str, int]
) -> RevenueSummary:
    """
    Aggregate paid bookings into credited revenue and weighted job count.

    A team booking split between n members counts as 1/n of a job.
    """
    total_revenue = 0.0
    weighted_jobs = 0.0
    paid_bookings = 0
    fallback_teams: list[str] = []

    for booking in bookings:
        if _field(booking, "payment_status") != "paid":
            continue

        paid_bookings += 1
        total_revenue += calculate_booking_revenue(booking, team_member_counts)

        if is_team_booking(booking):
            weighted_jobs += 1 / get_revenue_divisor(booking, team_member_counts)
            team_id = _field(booking, "team_id")
            if _uses_fallback(booking, team_member_counts) and team_id not in fallback_teams:
                fallback_teams.append(team_id)
        else:
            weighted_jobs += 1

    if fallback_teams:
        logger.warning(
            f"No member count for team(s) {fallback_teams}; "
            "their bookings were credited in full"
        )

    average_job_value = total_revenue / weighted_jobs if weighted_jobs > 0 else 0.0

    return RevenueSummary(
        total_revenue=total_revenue,
        weighted_jobs=weighted_jobs,
        paid_bookings=paid_bookings,
        average_job_value=average_job_value,
        fallback_team_ids=fallback_teams,
    )
