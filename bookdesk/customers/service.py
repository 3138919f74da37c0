"""
Customer intelligence service — read, classify, write back.

Collections used:
    - customers : relationship_level, relationship_level_locked, tags, notes
    - bookings  : paid bookings aggregated per customer

The read and the conditional write are not atomic. Two concurrent runs
for the same customer resolve as last-write-wins; both compute the same
upgrade from the same data, so the only visible effect is a repeated note.
"""

from datetime import date, datetime, timezone
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from bookdesk.config import get_database
from bookdesk.utils import Logger, NotFoundError, ValidationError, parse_object_id
from .intelligence import build_customer_update, evaluate_customer
from .schemas import CustomerIntelligenceResult, CustomerRecord

logger = Logger("bookdesk.customers")


class CustomerIntelligenceService:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.customers = db["customers"]
        self.bookings = db["bookings"]

    async def get_customer(self, customer_id: str) -> CustomerRecord:
        try:
            oid = parse_object_id(customer_id)
        except ValueError:
            raise ValidationError("Invalid customer ID")

        doc = await self.customers.find_one({"_id": oid, "is_deleted": {"$ne": True}})
        if not doc:
            raise NotFoundError("Customer not found")
        return CustomerRecord(**{**doc, "id": str(doc["_id"])})

    async def get_paid_booking_stats(self, customer_id: str) -> tuple[int, float]:
        """Count and total value of the customer's paid, non-archived bookings."""
        cursor = self.bookings.find(
            {
                "customer_id": str(customer_id),
                "payment_status": "paid",
                "is_deleted": {"$ne": True},
            },
            {"total_price": 1},
        )
        count = 0
        total = 0.0
        async for booking in cursor:
            count += 1
            total += float(booking.get("total_price") or 0)
        return count, total

    async def check_and_update(
        self, customer_id: str, on_date: Optional[date] = None
    ) -> CustomerIntelligenceResult:
        """
        Re-evaluate a customer's tier and auto-tags after a paid booking.

        Locked customers are returned untouched without reading bookings.
        Running this twice on unchanged data writes nothing the second time.
        """
        customer = await self.get_customer(customer_id)

        if customer.relationship_level_locked:
            logger.debug(f"Customer {customer.id} level is locked, skipping")
            return evaluate_customer(customer, 0, 0.0, on_date)

        paid_bookings, total_spend = await self.get_paid_booking_stats(customer.id)
        result = evaluate_customer(customer, paid_bookings, total_spend, on_date)

        update = build_customer_update(customer, result)
        if not update:
            return result

        update["updated_at"] = datetime.now(timezone.utc)
        await self.customers.update_one(
            {"_id": parse_object_id(customer.id)},
            {"$set": update},
        )

        if result.level_changed:
            logger.info(
                f"Customer {customer.id} upgraded "
                f"{result.previous_level.value} → {result.new_level.value}"
            )
        else:
            logger.info(f"Customer {customer.id} tags updated: {result.tags}")

        return result


async def check_and_update_customer_intelligence(
    customer_id: str, db: Optional[AsyncIOMotorDatabase] = None
) -> CustomerIntelligenceResult:
    """
    Re-evaluate one customer after a paid booking.

    Uses the shared database from ``get_database()`` unless `db` is given.
    """
    if db is None:
        db = await get_database()
    return await CustomerIntelligenceService(db).check_and_update(customer_id)
