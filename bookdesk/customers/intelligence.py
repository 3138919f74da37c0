"""
Customer intelligence — relationship tier and auto-tag rules.

Tiers only move upward: new → regular on the first paid booking, and
anything → vip at the booking-count or spend threshold. A vip is never
downgraded automatically, and a locked customer is never touched.
Auto-tags are additive; manually applied tags are always kept.
"""

from datetime import date, datetime
from typing import Iterable, Optional
from zoneinfo import ZoneInfo

from bookdesk.config import settings
from .schemas import CustomerIntelligenceResult, CustomerRecord, RelationshipLevelEnum

HIGH_VALUE_TAG = "High Value"
FREQUENT_BOOKER_TAG = "Frequent Booker"
AUTO_TAGS: tuple[str, ...] = (HIGH_VALUE_TAG, FREQUENT_BOOKER_TAG)

NOTE_SEPARATOR = "\n"


def business_date() -> date:
    """Today's date in the business timezone."""
    return datetime.now(ZoneInfo(settings.business_timezone)).date()


def classify_relationship_level(
    current_level,
    paid_bookings: int,
    total_spend: float,
) -> RelationshipLevelEnum:
    current = RelationshipLevelEnum(current_level or RelationshipLevelEnum.NEW)
    if current == RelationshipLevelEnum.VIP:
        return current

    if (
        paid_bookings >= settings.vip_booking_threshold
        or total_spend >= settings.vip_spend_threshold
    ):
        return RelationshipLevelEnum.VIP

    if paid_bookings >= 1:
        return RelationshipLevelEnum.REGULAR

    return current


def compute_auto_tags(
    existing_tags: Optional[Iterable[str]],
    paid_bookings: int,
    total_spend: float,
) -> list[str]:
    """Existing tags plus any earned auto-tags, de-duplicated, order kept."""
    earned = []
    if total_spend >= settings.high_value_spend_threshold:
        earned.append(HIGH_VALUE_TAG)
    if paid_bookings >= settings.frequent_booker_threshold:
        earned.append(FREQUENT_BOOKER_TAG)
    return list(dict.fromkeys([*(existing_tags or []), *earned]))


def get_auto_tags(tags: Optional[Iterable[str]]) -> list[str]:
    """The subset of a customer's tags that the rules assign."""
    return [tag for tag in tags or [] if tag in AUTO_TAGS]


def build_upgrade_note(
    previous_level,
    new_level,
    paid_bookings: int,
    total_spend: float,
    on_date: date,
) -> str:
    """
    e.g. "[Auto] 2026-02-20 — Relationship upgraded: new → regular (1 completed booking)"
    """
    previous = RelationshipLevelEnum(previous_level).value
    new = RelationshipLevelEnum(new_level).value
    noun = "booking" if paid_bookings == 1 else "bookings"
    spend = (
        f", {settings.currency_symbol}{total_spend:,.0f} total spend"
        if total_spend > 0
        else ""
    )
    return (
        f"[Auto] {on_date.isoformat()} — Relationship upgraded: "
        f"{previous} → {new} ({paid_bookings} completed {noun}{spend})"
    )


def append_note(existing: Optional[str], note: str, max_length: int) -> str:
    """
    Append `note` on its own line, keeping the result within `max_length`.

    The oldest characters are dropped first. The new note is always kept
    whole, even when it alone exceeds `max_length`.
    """
    combined = f"{existing}{NOTE_SEPARATOR}{note}" if existing else note
    if len(combined) <= max_length:
        return combined
    if len(note) >= max_length:
        return note
    return combined[len(combined) - max_length:]


def is_inactive_risk(relationship_level, days_since_last_booking: Optional[int]) -> bool:
    """A vip who has not booked for longer than the inactivity window."""
    return (
        relationship_level == RelationshipLevelEnum.VIP
        and days_since_last_booking is not None
        and days_since_last_booking > settings.inactive_risk_days
    )


def evaluate_customer(
    customer: CustomerRecord,
    paid_bookings: int,
    total_spend: float,
    on_date: Optional[date] = None,
) -> CustomerIntelligenceResult:
    """Decide the tier, tags and audit note for a customer. Writes nothing."""
    current = customer.relationship_level

    if customer.relationship_level_locked:
        return CustomerIntelligenceResult(
            customer_id=customer.id,
            skipped=True,
            previous_level=current,
            new_level=current,
            tags=list(customer.tags),
        )

    new_level = classify_relationship_level(current, paid_bookings, total_spend)
    tags = compute_auto_tags(customer.tags, paid_bookings, total_spend)

    note = None
    if new_level != current:
        note = build_upgrade_note(
            current, new_level, paid_bookings, total_spend, on_date or business_date()
        )

    return CustomerIntelligenceResult(
        customer_id=customer.id,
        previous_level=current,
        new_level=new_level,
        tags=tags,
        tags_changed=tags != list(customer.tags),
        paid_bookings=paid_bookings,
        total_spend=total_spend,
        note=note,
    )


def build_customer_update(
    customer: CustomerRecord,
    result: CustomerIntelligenceResult,
    max_notes_length: Optional[int] = None,
) -> dict:
    """
    The fields to $set for an evaluated customer.

    A tier change writes level, tags and notes; a tags-only change writes
    tags alone; otherwise the result is empty and nothing is written.
    """
    if result.skipped or not result.needs_write:
        return {}

    if not result.level_changed:
        return {"tags": result.tags}

    limit = max_notes_length or settings.customer_notes_max_length
    return {
        "relationship_level": result.new_level.value,
        "tags": result.tags,
        "notes": append_note(customer.notes, result.note, limit),
    }
