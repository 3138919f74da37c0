"""Soft-delete policy and archive service tests."""

from __future__ import annotations

from datetime import datetime

import pytest
from bson import ObjectId

from bookdesk.archive import ArchiveService
from bookdesk.rbac import (
    SOFT_DELETE_RESOURCES,
    Resource,
    Role,
    can_delete,
    can_permanently_delete,
    can_restore,
    can_soft_delete,
    supports_soft_delete,
)
from bookdesk.utils import NotFoundError, PermissionDeniedError, ValidationError
from tests.utils import FakeDatabase

ROLES = [None, "admin", "manager", "staff", "customer", "guest"]


class TestPolicy:
    def test_soft_delete_capable_resources(self):
        assert SOFT_DELETE_RESOURCES == {"bookings", "customers", "teams", "service_packages"}
        assert supports_soft_delete(Resource.TEAMS)
        assert not supports_soft_delete("staff")
        assert not supports_soft_delete("reports")
        assert not supports_soft_delete(None)

    @pytest.mark.parametrize("role", ROLES)
    @pytest.mark.parametrize("resource", [r.value for r in Resource])
    def test_can_soft_delete_iff_capable_and_privileged(self, role, resource):
        expected = resource in SOFT_DELETE_RESOURCES and role in ("admin", "manager")
        assert can_soft_delete(role, resource) is expected

    @pytest.mark.parametrize("role", ROLES)
    def test_restore_and_permanent_delete(self, role):
        assert can_restore(role) is (role in ("admin", "manager"))
        assert can_permanently_delete(role) is (role == "admin")

    def test_manager_soft_deletes_where_hard_delete_is_denied(self):
        for resource in SOFT_DELETE_RESOURCES:
            assert can_soft_delete(Role.MANAGER, resource)
            assert not can_delete(Role.MANAGER, resource)


@pytest.fixture
def db():
    return FakeDatabase()


class TestArchiveService:
    def test_rejects_resource_without_soft_delete(self, db):
        with pytest.raises(ValidationError):
            ArchiveService(db, "staff")

    @pytest.mark.asyncio
    async def test_manager_archives_and_restores_booking(self, db):
        (booking,) = db["bookings"].seed({"status": "pending"})
        svc = ArchiveService(db, Resource.BOOKINGS)

        await svc.archive(str(booking["_id"]), "manager", deleted_by="user-1")
        assert booking["is_deleted"] is True
        assert booking["deleted_by"] == "user-1"
        assert "deleted_at" in booking

        await svc.restore(str(booking["_id"]), "manager")
        assert booking["is_deleted"] is False
        assert "deleted_at" not in booking

    @pytest.mark.asyncio
    async def test_archiving_twice_is_not_found(self, db):
        (customer,) = db["customers"].seed({"full_name": "A"})
        svc = ArchiveService(db, "customers")

        await svc.archive(str(customer["_id"]), "admin")
        with pytest.raises(NotFoundError):
            await svc.archive(str(customer["_id"]), "admin")

    @pytest.mark.asyncio
    async def test_staff_cannot_archive_or_restore(self, db):
        (team,) = db["teams"].seed({"name": "Team A"})
        svc = ArchiveService(db, "teams")

        with pytest.raises(PermissionDeniedError):
            await svc.archive(str(team["_id"]), "staff")
        with pytest.raises(PermissionDeniedError):
            await svc.restore(str(team["_id"]), "staff")
        assert db["teams"].writes == []

    @pytest.mark.asyncio
    async def test_only_admin_purges(self, db):
        (package,) = db["service_packages"].seed({"name": "Deep clean"})
        svc = ArchiveService(db, "service_packages")

        with pytest.raises(PermissionDeniedError):
            await svc.purge(str(package["_id"]), "manager")
        assert len(db["service_packages"].docs) == 1

        await svc.purge(str(package["_id"]), "admin")
        assert db["service_packages"].docs == []

    @pytest.mark.asyncio
    async def test_missing_and_invalid_ids(self, db):
        svc = ArchiveService(db, "bookings")

        with pytest.raises(NotFoundError):
            await svc.purge(str(ObjectId()), "admin")
        with pytest.raises(NotFoundError):
            await svc.restore(str(ObjectId()), "admin")
        with pytest.raises(ValidationError):
            await svc.archive("not-an-id", "admin")

    @pytest.mark.asyncio
    async def test_list_archived_is_admin_only_and_serialized(self, db):
        older, live, newer = db["bookings"].seed(
            {"status": "cancelled", "is_deleted": True, "deleted_at": datetime(2026, 1, 1)},
            {"status": "pending"},
            {"status": "no_show", "is_deleted": True, "deleted_at": datetime(2026, 3, 1)},
        )
        svc = ArchiveService(db, "bookings")

        with pytest.raises(PermissionDeniedError):
            await svc.list_archived("manager")

        docs = await svc.list_archived("admin")

        assert [d["_id"] for d in docs] == [str(newer["_id"]), str(older["_id"])]
        assert docs[0]["deleted_at"] == "2026-03-01T00:00:00"

    @pytest.mark.asyncio
    async def test_list_archived_empty(self, db):
        assert await ArchiveService(db, "teams").list_archived("admin") == []
