"""
Customer schemas — relationship tiers and intelligence results.
"""

from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from enum import Enum

from bookdesk.utils import Logger

logger = Logger("bookdesk.customers")


class RelationshipLevelEnum(str, Enum):
    NEW = "new"
    REGULAR = "regular"
    VIP = "vip"


_LEVELS = frozenset(level.value for level in RelationshipLevelEnum)


class CustomerRecord(BaseModel):
    """The customer fields the tier classifier reads."""

    id: Optional[str] = None
    full_name: Optional[str] = None
    relationship_level: RelationshipLevelEnum = RelationshipLevelEnum.NEW
    relationship_level_locked: bool = False
    tags: List[str] = Field(default_factory=list)
    notes: Optional[str] = None

    @field_validator("relationship_level", mode="before")
    @classmethod
    def default_level(cls, v):
        # Rows created before tiers existed carry no level
        if not v:
            return RelationshipLevelEnum.NEW
        if isinstance(v, RelationshipLevelEnum):
            return v
        level = str(v).strip().lower()
        if level not in _LEVELS:
            logger.warning(f"Unknown relationship_level {v!r}, reading as 'new'")
            return RelationshipLevelEnum.NEW
        return RelationshipLevelEnum(level)

    @field_validator("relationship_level_locked", mode="before")
    @classmethod
    def default_locked(cls, v):
        return bool(v)

    @field_validator("tags", mode="before")
    @classmethod
    def default_tags(cls, v):
        return list(v or [])


class CustomerIntelligenceResult(BaseModel):
    customer_id: Optional[str] = None
    skipped: bool = Field(False, description="True when the level is manually locked")
    previous_level: RelationshipLevelEnum
    new_level: RelationshipLevelEnum
    tags: List[str] = Field(default_factory=list)
    tags_changed: bool = False
    paid_bookings: int = 0
    total_spend: float = 0.0
    note: Optional[str] = Field(None, description="Audit note appended on an upgrade")

    @property
    def level_changed(self) -> bool:
        return self.previous_level != self.new_level

    @property
    def needs_write(self) -> bool:
        return self.level_changed or self.tags_changed
