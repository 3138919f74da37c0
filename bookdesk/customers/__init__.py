from .schemas import RelationshipLevelEnum, CustomerRecord, CustomerIntelligenceResult
from .intelligence import (
    HIGH_VALUE_TAG,
    FREQUENT_BOOKER_TAG,
    AUTO_TAGS,
    classify_relationship_level,
    compute_auto_tags,
    get_auto_tags,
    build_upgrade_note,
    append_note,
    is_inactive_risk,
    evaluate_customer,
    build_customer_update,
)
from .service import CustomerIntelligenceService, check_and_update_customer_intelligence

__all__ = [
    "RelationshipLevelEnum",
    "CustomerRecord",
    "CustomerIntelligenceResult",
    "HIGH_VALUE_TAG",
    "FREQUENT_BOOKER_TAG",
    "AUTO_TAGS",
    "classify_relationship_level",
    "compute_auto_tags",
    "get_auto_tags",
    "build_upgrade_note",
    "append_note",
    "is_inactive_risk",
    "evaluate_customer",
    "build_customer_update",
    "CustomerIntelligenceService",
    "check_and_update_customer_intelligence",
]
