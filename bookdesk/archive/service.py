"""
Archive service — soft delete, restore and permanent delete.

Collection: the resource's own collection (bookings, customers, teams,
service_packages). An archived document keeps its data and carries
is_deleted=True plus deleted_at/deleted_by.
"""

from datetime import datetime, timezone

from motor.motor_asyncio import AsyncIOMotorDatabase

from bookdesk.rbac import (
    can_permanently_delete,
    can_restore,
    can_soft_delete,
    has_feature,
    supports_soft_delete,
)
from bookdesk.rbac.permissions import table_key
from bookdesk.utils import (
    Logger,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
    parse_object_id,
    serialize_mongo_doc,
)

logger = Logger("bookdesk.archive")


class ArchiveService:
    def __init__(self, db: AsyncIOMotorDatabase, resource):
        if not supports_soft_delete(resource):
            raise ValidationError(f"Resource '{table_key(resource)}' does not support soft delete")
        self.db = db
        self.resource = table_key(resource)
        self.collection = db[self.resource]

    def _oid(self, doc_id: str):
        try:
            return parse_object_id(doc_id)
        except ValueError:
            raise ValidationError(f"Invalid {self.resource} ID")

    async def archive(self, doc_id: str, role, deleted_by: str | None = None) -> dict:
        """Soft-delete a document (sets is_deleted=True)."""
        if not can_soft_delete(role, self.resource):
            raise PermissionDeniedError(f"Permission denied. Cannot archive {self.resource}")

        result = await self.collection.update_one(
            {"_id": self._oid(doc_id), "is_deleted": {"$ne": True}},
            {
                "$set": {
                    "is_deleted": True,
                    "deleted_at": datetime.now(timezone.utc),
                    "deleted_by": deleted_by,
                }
            },
        )
        if result.modified_count == 0:
            raise NotFoundError(f"{self.resource} record not found or already archived")

        logger.info(f"Archived {self.resource}/{doc_id}")
        return {"message": "Record archived successfully"}

    async def restore(self, doc_id: str, role) -> dict:
        """Bring an archived document back."""
        if not can_restore(role):
            raise PermissionDeniedError(f"Permission denied. Cannot restore {self.resource}")

        result = await self.collection.update_one(
            {"_id": self._oid(doc_id), "is_deleted": True},
            {
                "$set": {"is_deleted": False, "updated_at": datetime.now(timezone.utc)},
                "$unset": {"deleted_at": "", "deleted_by": ""},
            },
        )
        if result.modified_count == 0:
            raise NotFoundError(f"Archived {self.resource} record not found")

        logger.info(f"Restored {self.resource}/{doc_id}")
        return {"message": "Record restored successfully"}

    async def purge(self, doc_id: str, role) -> dict:
        """Permanently delete a document, archived or not."""
        if not can_permanently_delete(role):
            raise PermissionDeniedError(
                f"Permission denied. Only admin can permanently delete {self.resource}"
            )

        result = await self.collection.delete_one({"_id": self._oid(doc_id)})
        if result.deleted_count == 0:
            raise NotFoundError(f"{self.resource} record not found")

        logger.warning(f"Permanently deleted {self.resource}/{doc_id}")
        return {"message": "Record permanently deleted"}

    async def list_archived(self, role, limit: int = 100) -> list[dict]:
        """Archived documents, newest deletion first, serialized for output."""
        if not has_feature(role, "view_archived"):
            raise PermissionDeniedError("Permission denied. Cannot view archived records")

        cursor = self.collection.find({"is_deleted": True}).sort("deleted_at", -1).limit(limit)
        docs = await cursor.to_list(length=limit)
        return serialize_mongo_doc(docs) or []
