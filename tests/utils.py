"""Shared helpers for tests (in-memory motor stand-ins, request builder)."""

from __future__ import annotations

import copy
from types import SimpleNamespace
from typing import Any, Dict, List

from bson import ObjectId
from starlette.requests import Request


def _matches(doc: dict, query: dict) -> bool:
    """Evaluate the subset of Mongo query syntax the services use."""
    for key, cond in query.items():
        value = doc.get(key)
        if isinstance(cond, dict) and any(k.startswith("$") for k in cond):
            for op, arg in cond.items():
                if op == "$in":
                    if value not in arg:
                        return False
                elif op == "$ne":
                    if value == arg:
                        return False
                else:
                    raise NotImplementedError(f"Operator {op} not supported by FakeCollection")
        elif value != cond:
            return False
    return True


def _apply_update(doc: dict, update: dict) -> None:
    for key, value in update.get("$set", {}).items():
        doc[key] = value
    for key in update.get("$unset", {}):
        doc.pop(key, None)


class FakeCursor:
    """Async-iterable cursor over a snapshot of matching documents."""

    def __init__(self, docs: List[dict]):
        self._docs = docs
        self._iter = iter(self._docs)

    def __aiter__(self):
        self._iter = iter(self._docs)
        return self

    async def __anext__(self):
        try:
            return next(self._iter)
        except StopIteration:
            raise StopAsyncIteration

    def sort(self, key: str, direction: int = 1):
        # None sorts first ascending, matching Mongo's null ordering
        self._docs.sort(key=lambda d: (d.get(key) is not None, d.get(key)), reverse=direction < 0)
        return self

    def limit(self, n: int):
        self._docs = self._docs[:n]
        return self

    async def to_list(self, length=None):
        return list(self._docs[:length] if length else self._docs)


class FakeCollection:
    """Minimal AsyncIOMotorCollection stub; records every call it receives."""

    def __init__(self, name: str):
        self.name = name
        self.docs: List[dict] = []
        self.calls: List[tuple] = []

    @property
    def writes(self) -> List[tuple]:
        return [c for c in self.calls if c[0] in ("update_one", "update_many", "delete_one", "insert_one")]

    def seed(self, *docs: dict) -> List[dict]:
        for doc in docs:
            doc.setdefault("_id", ObjectId())
            self.docs.append(doc)
        return list(docs)

    def find(self, query: dict | None = None, projection: dict | None = None) -> FakeCursor:
        self.calls.append(("find", query, projection))
        return FakeCursor([copy.deepcopy(d) for d in self.docs if _matches(d, query or {})])

    async def find_one(self, query: dict | None = None, *args, **kwargs):
        self.calls.append(("find_one", query))
        for doc in self.docs:
            if _matches(doc, query or {}):
                return copy.deepcopy(doc)
        return None

    async def insert_one(self, doc: dict):
        self.calls.append(("insert_one", doc))
        doc.setdefault("_id", ObjectId())
        self.docs.append(copy.deepcopy(doc))
        return SimpleNamespace(inserted_id=doc["_id"])

    async def update_one(self, query: dict, update: dict):
        self.calls.append(("update_one", query, update))
        for doc in self.docs:
            if _matches(doc, query):
                _apply_update(doc, update)
                return SimpleNamespace(matched_count=1, modified_count=1)
        return SimpleNamespace(matched_count=0, modified_count=0)

    async def update_many(self, query: dict, update: dict):
        self.calls.append(("update_many", query, update))
        matched = [d for d in self.docs if _matches(d, query)]
        for doc in matched:
            _apply_update(doc, update)
        return SimpleNamespace(matched_count=len(matched), modified_count=len(matched))

    async def create_index(self, keys, **kwargs):
        self.calls.append(("create_index", keys, kwargs))
        return "_".join(f"{field}_{direction}" for field, direction in keys)

    async def delete_one(self, query: dict):
        self.calls.append(("delete_one", query))
        for i, doc in enumerate(self.docs):
            if _matches(doc, query):
                del self.docs[i]
                return SimpleNamespace(deleted_count=1)
        return SimpleNamespace(deleted_count=0)


class FakeDatabase:
    """Dict-like AsyncIOMotorDatabase stub creating collections on demand."""

    def __init__(self):
        self._collections: Dict[str, FakeCollection] = {}

    def __getitem__(self, name: str) -> FakeCollection:
        if name not in self._collections:
            self._collections[name] = FakeCollection(name)
        return self._collections[name]

    def __setitem__(self, name: str, collection: FakeCollection) -> None:
        self._collections[name] = collection


class FailingCollection(FakeCollection):
    """Collection whose reads fail the way an unreachable server does."""

    def __init__(self, name: str, error: Exception):
        super().__init__(name)
        self.error = error

    def find(self, query: dict | None = None, projection: dict | None = None):
        raise self.error

    async def find_one(self, query: dict | None = None, *args, **kwargs):
        raise self.error


def make_request(path: str = "/", role: Any = None, method: str = "GET") -> Request:
    """Build a starlette Request with request.state.user_role set."""
    scope = {
        "type": "http",
        "method": method,
        "path": path,
        "headers": [],
        "query_string": b"",
        "state": {"user_role": role},
    }
    return Request(scope)
