"""
Team revenue service — live team sizes for revenue allocation.

Collection: team_members  ({team_id, staff_id, joined_at, left_at})

A membership is active while left_at is null. Database errors are not
caught here; they reach the caller unchanged.
"""

from typing import Iterable

from motor.motor_asyncio import AsyncIOMotorDatabase

from bookdesk.utils import Logger
from .schemas import RevenueSummary
from .team_revenue import get_unique_team_ids, summarize_revenue

logger = Logger("bookdesk.revenue")


class TeamRevenueService:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.team_members = db["team_members"]

    async def get_team_member_counts(self, team_ids: Iterable[str]) -> dict[str, int]:
        """
        Count active members per team.

        Every requested team gets an entry; a team with no active members
        maps to 1 so it can still be used as a divisor.
        """
        team_ids = list(dict.fromkeys(t for t in team_ids if t))
        if not team_ids:
            return {}

        counts = {team_id: 0 for team_id in team_ids}
        cursor = self.team_members.find(
            {"team_id": {"$in": team_ids}, "left_at": None},
            {"team_id": 1},
        )
        async for member in cursor:
            team_id = member.get("team_id")
            if team_id in counts:
                counts[team_id] += 1

        empty = [team_id for team_id, count in counts.items() if count == 0]
        if empty:
            logger.debug(f"Teams without active members, counting as 1: {empty}")

        return {team_id: count or 1 for team_id, count in counts.items()}

    async def snapshot_team_member_count(self, team_id: str) -> int:
        """Member count to store on a new team booking (at least 1)."""
        counts = await self.get_team_member_counts([team_id])
        return counts.get(team_id, 1)

    async def summarize(self, bookings: list[dict]) -> RevenueSummary:
        """Look up the team sizes the bookings need, then aggregate revenue."""
        counts = await self.get_team_member_counts(get_unique_team_ids(bookings))
        return summarize_revenue(bookings, counts)
