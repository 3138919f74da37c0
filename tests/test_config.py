"""Settings, database manager and shared helper tests."""

from __future__ import annotations

from datetime import datetime

import pytest
from bson import ObjectId

from bookdesk.config import DatabaseManager, Settings, db_manager, get_database, settings
from bookdesk.config.database import INDEXES
from bookdesk.utils import Logger, parse_object_id, serialize_mongo_doc
from tests.utils import FakeDatabase


def test_settings_defaults(monkeypatch):
    monkeypatch.delenv("VIP_BOOKING_THRESHOLD", raising=False)
    s = Settings(_env_file=None)

    assert s.business_timezone == "Asia/Bangkok"
    assert s.customer_notes_max_length == 5000
    assert s.vip_booking_threshold == 5
    assert s.vip_spend_threshold == 15000
    assert s.inactive_risk_days == 120


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("VIP_BOOKING_THRESHOLD", "8")
    monkeypatch.setenv("DATABASE_NAME", "bookdesk_test")

    s = Settings(_env_file=None)

    assert s.vip_booking_threshold == 8
    assert s.database_name == "bookdesk_test"


def test_database_manager_is_a_singleton():
    assert DatabaseManager() is db_manager


def test_database_requires_connect():
    if db_manager.is_connected:
        pytest.skip("a database connection is already open")
    with pytest.raises(RuntimeError):
        db_manager.database


@pytest.fixture
def bound_db():
    db = FakeDatabase()
    db_manager.bind(db)
    yield db
    db_manager.close()


@pytest.mark.asyncio
async def test_get_database_returns_bound_database(bound_db):
    assert db_manager.is_connected
    assert await get_database() is bound_db


@pytest.mark.asyncio
async def test_ensure_indexes_covers_service_lookups(bound_db):
    await db_manager.ensure_indexes()

    for collection, indexes in INDEXES.items():
        created = [c[1] for c in bound_db[collection].calls if c[0] == "create_index"]
        assert created == indexes
    assert [("team_id", 1), ("left_at", 1)] in INDEXES["team_members"]


def test_close_forgets_bound_database(bound_db):
    db_manager.close()
    assert not db_manager.is_connected


@pytest.mark.asyncio
async def test_connect_requires_uri(monkeypatch):
    db_manager.close()
    monkeypatch.setattr(settings, "mongodb_atlas_uri", None)

    with pytest.raises(RuntimeError):
        await get_database()


def test_parse_object_id():
    oid = ObjectId()
    assert parse_object_id(str(oid)) == oid
    assert parse_object_id(oid) is oid
    with pytest.raises(ValueError):
        parse_object_id("123")


def test_serialize_mongo_doc():
    oid = ObjectId()
    doc = {
        "_id": oid,
        "created_at": datetime(2026, 2, 20, 9, 30),
        "items": [{"ref": oid}],
        "meta": {"by": oid},
        "status": "pending",
    }

    assert serialize_mongo_doc(doc) == {
        "_id": str(oid),
        "created_at": "2026-02-20T09:30:00",
        "items": [{"ref": str(oid)}],
        "meta": {"by": str(oid)},
        "status": "pending",
    }
    assert serialize_mongo_doc(None) is None


def test_logger_reuses_handlers():
    first = Logger("bookdesk.test")
    second = Logger("bookdesk.test")

    assert first.name == second.name == "bookdesk.test"
    assert len(first._logger.handlers) == 1
