"""
Booking status service — validate and apply lifecycle transitions.

Collection: bookings

Every proposed status is checked against the lifecycle table before
anything is written. A bulk change is all-or-nothing at validation time:
one illegal transition rejects the whole batch.
"""

from datetime import datetime, timezone

from motor.motor_asyncio import AsyncIOMotorDatabase

from bookdesk.rbac import Action, Resource, check_permission
from bookdesk.utils import (
    Logger,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
    parse_object_id,
)
from .schemas import StatusChangeResult
from .status import BookingStatus, get_status_label, validate_transition

logger = Logger("bookdesk.bookings")


class BookingStatusService:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.bookings = db["bookings"]

    @staticmethod
    def _ensure_can_update(role) -> None:
        if not check_permission(role, Action.UPDATE, Resource.BOOKINGS):
            raise PermissionDeniedError("Permission denied. Requires: bookings:update")

    @staticmethod
    def _oid(booking_id: str):
        try:
            return parse_object_id(booking_id)
        except ValueError:
            raise ValidationError("Invalid booking ID")

    async def _load(self, booking_ids: list[str]) -> list[dict]:
        """Current documents in the order requested."""
        oids = [self._oid(booking_id) for booking_id in booking_ids]
        cursor = self.bookings.find(
            {"_id": {"$in": oids}, "is_deleted": {"$ne": True}},
            {"status": 1},
        )
        found = {doc["_id"]: doc async for doc in cursor}

        missing = [str(booking_id) for booking_id, oid in zip(booking_ids, oids) if oid not in found]
        if missing:
            raise NotFoundError(f"Booking not found: {', '.join(missing)}")
        return [found[oid] for oid in oids]

    async def change_status(self, booking_id: str, new_status, role) -> StatusChangeResult:
        """Move one booking to `new_status`."""
        results = await self.bulk_change_status([booking_id], new_status, role)
        return results[0]

    async def bulk_change_status(
        self, booking_ids: list[str], new_status, role
    ) -> list[StatusChangeResult]:
        """
        Move several bookings to the same status.

        Raises:
            PermissionDeniedError: role may not update bookings
            NotFoundError: any booking is missing or archived
            InvalidTransitionError: any booking cannot reach `new_status`
        """
        self._ensure_can_update(role)
        if not booking_ids:
            raise ValidationError("No bookings selected")
        target = new_status.value if isinstance(new_status, BookingStatus) else new_status

        docs = await self._load(booking_ids)

        results: list[StatusChangeResult] = []
        to_update = []
        for booking_id, doc in zip(booking_ids, docs):
            current = doc.get("status")
            changed = validate_transition(current, target)
            results.append(
                StatusChangeResult(
                    booking_id=str(booking_id),
                    previous_status=current,
                    new_status=target,
                    changed=changed,
                    message=(
                        f"Status changed to {get_status_label(target)}"
                        if changed
                        else None
                    ),
                )
            )
            if changed:
                to_update.append(doc["_id"])

        if to_update:
            await self.bookings.update_many(
                {"_id": {"$in": to_update}},
                {"$set": {"status": target, "updated_at": datetime.now(timezone.utc)}},
            )
            logger.info(f"Moved {len(to_update)} booking(s) to '{target}'")

        return results
