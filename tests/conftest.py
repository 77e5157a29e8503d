"""
Shared fixtures and in-memory fakes for the role and record stores.
"""

import copy
import itertools
import os

# Settings are read at import time
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest

from app.core.policy import Role
from app.features.roles.store import RoleStore
from app.shared.exceptions import NotFoundException, StoreUnavailableException
from app.shared.identity import Identity
from app.shared.store import RecordStore


# ── Fakes ────────────────────────────────────────────────────────────

class InMemoryRecordStore(RecordStore):
    """Dict-backed RecordStore that records every call."""

    _ids = itertools.count(1)

    def __init__(self):
        self.docs = {}
        self.calls = []

    async def insert(self, doc):
        self.calls.append(("insert", None))
        doc_id = f"{next(self._ids):024x}"
        self.docs[doc_id] = {**copy.deepcopy(doc), "id": doc_id}
        return doc_id

    async def get(self, doc_id):
        self.calls.append(("get", doc_id))
        doc = self.docs.get(doc_id)
        return copy.deepcopy(doc) if doc is not None else None

    async def patch(self, doc_id, fields, expected=None):
        self.calls.append(("patch", doc_id))
        doc = self.docs.get(doc_id)
        if doc is None or any(doc.get(key) != value for key, value in (expected or {}).items()):
            return False
        doc.update(copy.deepcopy(fields))
        return True

    async def scan(self, filters=None):
        self.calls.append(("scan", dict(filters or {})))
        return [
            copy.deepcopy(doc)
            for doc in self.docs.values()
            if all(doc.get(key) == value for key, value in (filters or {}).items())
        ]

    def writes(self):
        return [call for call in self.calls if call[0] in ("insert", "patch")]


class FakeRoleStore(RoleStore):
    def __init__(self, roles=None):
        self.roles = dict(roles or {})
        self.lookups = []

    async def get_role(self, user_id):
        self.lookups.append(user_id)
        return self.roles.get(user_id, Role.CITIZEN)

    async def set_role(self, user_id, role):
        if user_id not in self.roles and user_id.startswith("missing"):
            raise NotFoundException("User not found")
        self.roles[user_id] = Role(role)


class FailingRecordStore(RecordStore):
    """Every call fails as if MongoDB were down."""

    async def insert(self, doc):
        raise StoreUnavailableException()

    async def get(self, doc_id):
        raise StoreUnavailableException()

    async def patch(self, doc_id, fields, expected=None):
        raise StoreUnavailableException()

    async def scan(self, filters=None):
        raise StoreUnavailableException()


# ── Fixtures ─────────────────────────────────────────────────────────

USERS = {
    "asha-1": Role.ASHA,
    "asha-2": Role.ASHA,
    "admin-1": Role.ADMIN,
    "citizen-1": Role.CITIZEN,
}


def actor(user_id: str) -> Identity:
    return Identity(user_id=user_id)


@pytest.fixture
def role_store():
    return FakeRoleStore(USERS)


@pytest.fixture
def record_store():
    return InMemoryRecordStore()


@pytest.fixture
def report_store():
    return InMemoryRecordStore()


@pytest.fixture
def record_fields():
    return {
        "disease_name": "Dengue",
        "description": "High fever and joint pain in three households",
        "location": "Rampur",
        "medical_supplies": [{"name": "ORS packets", "quantity": 20}],
    }
