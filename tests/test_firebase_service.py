from unittest.mock import MagicMock

import pytest

from lawconsult.services.firebase_service import FirebaseService


def snapshot(doc_id, data, exists=True):
    doc = MagicMock()
    doc.id = doc_id
    doc.exists = exists
    doc.to_dict.return_value = data
    return doc


@pytest.fixture
def service():
    """FirebaseService wired to a mocked Firestore client."""
    svc = FirebaseService()
    original = svc._db
    svc.db = MagicMock()
    yield svc
    svc.db = original


@pytest.mark.asyncio
async def test_get_document(service):
    ref = service.db.collection.return_value.document.return_value
    ref.get.return_value = snapshot("1", {"name": "张明华"})

    assert await service.get_document("lawyers/1") == {"name": "张明华"}
    service.db.collection.assert_called_with("lawyers")
    service.db.collection.return_value.document.assert_called_with("1")

    ref.get.return_value = snapshot("2", None, exists=False)
    assert await service.get_document("lawyers/2") is None


@pytest.mark.asyncio
async def test_invalid_path(service):
    with pytest.raises(ValueError):
        await service.get_document("lawyers")


@pytest.mark.asyncio
async def test_set_and_update_document(service):
    ref = service.db.collection.return_value.document.return_value
    await service.set_document("users/u1", {"name": "A"})
    await service.update_document("users/u1", {"isActive": False})
    ref.set.assert_called_once_with({"name": "A"})
    ref.update.assert_called_once_with({"isActive": False})


@pytest.mark.asyncio
async def test_query_collection_applies_filters_and_paging(service):
    query = service.db.collection.return_value
    query.where.return_value = query
    query.order_by.return_value = query
    query.offset.return_value = query
    query.limit.return_value = query
    query.stream.return_value = [snapshot("c1", {"status": "pending"})]

    docs, total = await service.query_collection(
        "consultations", filters={"status": "pending"}, order_by="createdAt",
        direction="DESCENDING", limit=5, offset=10, get_total_count=True)

    assert docs == [("c1", {"status": "pending"})]
    assert total == 1
    query.where.assert_called_once_with("status", "==", "pending")
    query.order_by.assert_called_once_with("createdAt", direction="DESCENDING")
    query.offset.assert_called_once_with(10)
    query.limit.assert_called_once_with(5)


@pytest.mark.asyncio
async def test_query_collection_rejects_bad_filter(service):
    with pytest.raises(ValueError):
        await service.query_collection("users", filters=[("email", "x")])


@pytest.mark.asyncio
async def test_stream_and_count(service):
    service.db.collection.return_value.stream.return_value = [
        snapshot("a", {"n": 1}), snapshot("b", {"n": 2})]
    assert await service.stream_collection("users") == [("a", {"n": 1}), ("b", {"n": 2})]
    assert await service.count_collection("users") == 2
