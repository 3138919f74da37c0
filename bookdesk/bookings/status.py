"""
Booking lifecycle — status transition rules.

STATUS_TRANSITIONS is the single source of truth for status flow. Each
row contains the status itself, so re-saving an unchanged status is a
legal no-op. Transitions are forward-only: terminal statuses never leave.
"""

from enum import Enum
from types import MappingProxyType
from typing import Mapping

from bookdesk.utils.exceptions import InvalidTransitionError


class BookingStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    NO_SHOW = "no_show"


class PaymentStatus(str, Enum):
    UNPAID = "unpaid"
    PENDING_VERIFICATION = "pending_verification"
    PAID = "paid"
    REFUND_PENDING = "refund_pending"
    REFUNDED = "refunded"


STATUS_TRANSITIONS: Mapping[str, frozenset[str]] = MappingProxyType(
    {
        "pending": frozenset({"pending", "confirmed", "cancelled"}),
        "confirmed": frozenset({"confirmed", "in_progress", "cancelled", "no_show"}),
        "in_progress": frozenset({"in_progress", "completed", "cancelled"}),
        "completed": frozenset({"completed"}),
        "cancelled": frozenset({"cancelled"}),
        "no_show": frozenset({"no_show"}),
    }
)

TERMINAL_STATUSES: frozenset[str] = frozenset(
    status for status, allowed in STATUS_TRANSITIONS.items() if allowed == {status}
)

BOOKING_STATUS_LABELS: Mapping[str, str] = MappingProxyType(
    {
        "pending": "Pending",
        "confirmed": "Confirmed",
        "in_progress": "In Progress",
        "completed": "Completed",
        "cancelled": "Cancelled",
        "no_show": "No Show",
    }
)

_TRANSITION_MESSAGES: Mapping[tuple[str, str], str] = MappingProxyType(
    {
        ("pending", "confirmed"): "Confirm this booking?",
        ("pending", "cancelled"): "Cancel this booking? This action cannot be undone.",
        ("confirmed", "in_progress"): "Mark this booking as in progress?",
        ("confirmed", "cancelled"): "Cancel this booking? This action cannot be undone.",
        ("confirmed", "no_show"): "Mark this booking as no-show? This action cannot be undone.",
        ("in_progress", "completed"): "Mark this booking as completed?",
        ("in_progress", "cancelled"): "Cancel this booking? This action cannot be undone.",
    }
)


def _value(status) -> str:
    return status.value if isinstance(status, Enum) else status


def get_status_label(status) -> str:
    """Human-readable label, e.g. "in_progress" → "In Progress"."""
    status = _value(status)
    return BOOKING_STATUS_LABELS.get(status, status)


def get_available_statuses(current_status) -> frozenset[str]:
    """
    All statuses selectable from the current one, including itself.

    An unknown status yields only itself, so it can still be displayed.
    """
    current_status = _value(current_status)
    return STATUS_TRANSITIONS.get(current_status, frozenset({current_status}))


def get_valid_transitions(current_status) -> frozenset[str]:
    """Statuses the booking can move TO (the current status excluded)."""
    current_status = _value(current_status)
    return get_available_statuses(current_status) - {current_status}


def is_terminal(status) -> bool:
    return _value(status) in TERMINAL_STATUSES


def is_valid_transition(current_status, new_status) -> bool:
    return _value(new_status) in get_valid_transitions(current_status)


def validate_transition(current_status, new_status) -> bool:
    """
    Validate a proposed status change.

    Returns False for the identity no-op (nothing to write), True for a
    legal change. Raises InvalidTransitionError for anything else.
    """
    current_status = _value(current_status)
    new_status = _value(new_status)

    if current_status == new_status:
        return False

    allowed = get_valid_transitions(current_status)
    if new_status not in allowed:
        raise InvalidTransitionError(current_status, new_status, allowed)
    return True


def get_status_transition_message(current_status, new_status) -> str:
    """Confirmation prompt for a status change."""
    current_status = _value(current_status)
    new_status = _value(new_status)

    message = _TRANSITION_MESSAGES.get((current_status, new_status))
    if message:
        return message

    return (
        f"Change status from {get_status_label(current_status)} "
        f"to {get_status_label(new_status)}?"
    )
