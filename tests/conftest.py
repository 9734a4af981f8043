import copy

import pytest

from lawconsult.dependencies import get_current_user, get_optional_user
from lawconsult.main import app
from lawconsult.models.lawyer import lawyer_model_to_firestore
from lawconsult.models.user import User, UserRole
from lawconsult.data.sample_data import SAMPLE_LAWYERS
from lawconsult.services.firebase_service import firebase_service


class InMemoryFirestore:
    """Dict-backed stand-in for the FirebaseService document methods."""

    def __init__(self):
        self.docs = {}

    async def get_document(self, path):
        data = self.docs.get(path)
        return copy.deepcopy(data) if data is not None else None

    async def set_document(self, path, data):
        self.docs[path] = copy.deepcopy(data)

    async def update_document(self, path, data):
        if path not in self.docs:
            raise KeyError(path)
        self.docs[path].update(copy.deepcopy(data))

    async def stream_collection(self, collection_name):
        prefix = f"{collection_name}/"
        return [
            (path[len(prefix):], copy.deepcopy(data))
            for path, data in self.docs.items()
            if path.startswith(prefix)
        ]

    async def count_collection(self, collection_name):
        return len(await self.stream_collection(collection_name))

    async def query_collection(self, collection_name, filters=None, order_by=None,
                               direction="ASCENDING", limit=None, offset=None,
                               get_total_count=False):
        docs = await self.stream_collection(collection_name)
        if isinstance(filters, dict):
            filters = [(k, "==", v) for k, v in filters.items()]
        for field, op, value in filters or []:
            assert op == "==", f"unsupported operator {op}"
            docs = [(doc_id, data) for doc_id, data in docs if data.get(field) == value]
        total = len(docs) if get_total_count else 0
        if order_by:
            docs.sort(key=lambda d: d[1].get(order_by), reverse=direction == "DESCENDING")
        if offset:
            docs = docs[offset:]
        if limit:
            docs = docs[:limit]
        return docs, total


@pytest.fixture
def store(monkeypatch):
    fake = InMemoryFirestore()
    for name in ("get_document", "set_document", "update_document",
                 "stream_collection", "count_collection", "query_collection"):
        monkeypatch.setattr(firebase_service, name, getattr(fake, name))
    return fake


@pytest.fixture
def directory(store):
    for lawyer in SAMPLE_LAWYERS:
        store.docs[f"lawyers/{lawyer.id}"] = lawyer_model_to_firestore(lawyer)
    return store


@pytest.fixture
def client_user():
    return User(uid="client1", name="Client One", email="client1@example.com", role=UserRole.CLIENT)


@pytest.fixture
def lawyer_user():
    return User(uid="1", name="张明华", email="lawyer1@example.com", role=UserRole.LAWYER)


@pytest.fixture
def admin_user():
    return User(uid="admin", name="Admin", email="admin@example.com", role=UserRole.ADMIN)


@pytest.fixture
def login_as():
    def _login(user):
        app.dependency_overrides[get_current_user] = lambda: user
        app.dependency_overrides[get_optional_user] = lambda: user

    yield _login
    app.dependency_overrides = {}
