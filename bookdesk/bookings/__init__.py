from .status import (
    BookingStatus,
    PaymentStatus,
    STATUS_TRANSITIONS,
    TERMINAL_STATUSES,
    BOOKING_STATUS_LABELS,
    get_status_label,
    get_available_statuses,
    get_valid_transitions,
    is_terminal,
    is_valid_transition,
    validate_transition,
    get_status_transition_message,
)
from .schemas import BookingRecord, StatusChangeResult
from .service import BookingStatusService

__all__ = [
    "BookingStatus",
    "PaymentStatus",
    "STATUS_TRANSITIONS",
    "TERMINAL_STATUSES",
    "BOOKING_STATUS_LABELS",
    "get_status_label",
    "get_available_statuses",
    "get_valid_transitions",
    "is_terminal",
    "is_valid_transition",
    "validate_transition",
    "get_status_transition_message",
    "BookingRecord",
    "StatusChangeResult",
    "BookingStatusService",
]
