from datetime import datetime, timezone

import pytest
from bson import ObjectId
from pymongo import ASCENDING, DESCENDING, ReturnDocument

from ideas_repo import IdeaFields, MongoIdeaStore
from ideas_repo.store import _doc_to_model


def test_is_valid_id_accepts_only_object_id_hex():
    store = MongoIdeaStore()

    assert store.is_valid_id(str(ObjectId()))
    assert not store.is_valid_id("not-an-id")
    assert not store.is_valid_id("")
    assert not store.is_valid_id("zzzzzzzzzzzzzzzzzzzzzzzz")


def test_doc_to_model_maps_mongo_document():
    oid = ObjectId()
    created = datetime(2024, 5, 1, tzinfo=timezone.utc)
    doc = {
        "_id": oid,
        "title": "t",
        "summary": "s",
        "description": "d",
        "tags": ["a"],
        "owner": "user-1",
        "created_at": created,
    }

    idea = _doc_to_model(doc)

    assert idea.id == str(oid)
    assert idea.tags == ["a"]
    assert idea.owner == "user-1"
    assert idea.updated_at == created


def test_idea_serializes_timestamps_in_camel_case():
    now = datetime(2024, 5, 1, tzinfo=timezone.utc)
    idea = _doc_to_model(
        {
            "_id": ObjectId(),
            "title": "t",
            "summary": "s",
            "description": "d",
            "owner": "user-1",
            "created_at": now,
            "updated_at": now,
        }
    )

    dumped = idea.model_dump(by_alias=True)

    assert "createdAt" in dumped and "updatedAt" in dumped
    assert dumped["tags"] == []


class _InsertResult:
    def __init__(self, inserted_id):
        self.inserted_id = inserted_id


class _DeleteResult:
    def __init__(self, deleted_count):
        self.deleted_count = deleted_count


class StubCursor:
    def __init__(self, docs):
        self.docs = docs
        self.sort_spec = None
        self.limit_value = None

    def sort(self, spec):
        self.sort_spec = spec
        return self

    def limit(self, value):
        self.limit_value = value
        return self

    def __aiter__(self):
        return self._iterate()

    async def _iterate(self):
        for doc in self.docs:
            yield doc


class StubCollection:
    """Records what MongoIdeaStore sends and replays canned documents."""

    def __init__(self, docs=None, matched=True):
        self.docs = docs or []
        self.matched = matched
        self.calls = []
        self.cursor = None

    async def insert_one(self, doc):
        self.calls.append(("insert_one", dict(doc)))
        return _InsertResult(ObjectId())

    async def find_one(self, filter):
        self.calls.append(("find_one", filter))
        return self.docs[0] if self.docs else None

    def find(self, filter):
        self.calls.append(("find", filter))
        self.cursor = StubCursor(self.docs)
        return self.cursor

    async def find_one_and_update(self, filter, update, return_document=None):
        self.calls.append(("find_one_and_update", filter, update, return_document))
        if not self.matched:
            return None
        return {**self.docs[0], **update["$set"]}

    async def delete_one(self, filter):
        self.calls.append(("delete_one", filter))
        return _DeleteResult(1 if self.matched else 0)

    async def create_index(self, keys):
        self.calls.append(("create_index", keys))


def _stored_doc(**overrides):
    created = datetime(2024, 5, 1, tzinfo=timezone.utc)
    doc = {
        "_id": ObjectId(),
        "title": "t",
        "summary": "s",
        "description": "d",
        "tags": [],
        "owner": "user-1",
        "created_at": created,
        "updated_at": created,
    }
    doc.update(overrides)
    return doc


@pytest.fixture()
def stub_collection(monkeypatch):
    collection = StubCollection()
    monkeypatch.setattr(MongoIdeaStore, "_collection", lambda self: collection)
    return collection


def _fields(**overrides):
    values = dict(title="New", summary="Sum", description="Desc", tags=["x"])
    values.update(overrides)
    return IdeaFields(**values)


@pytest.mark.asyncio
async def test_insert_stamps_owner_and_timestamps(stub_collection):
    idea = await MongoIdeaStore().insert(_fields(), owner="user-1")

    name, doc = stub_collection.calls[0]
    assert name == "insert_one"
    assert doc["owner"] == "user-1"
    assert doc["title"] == "New" and doc["tags"] == ["x"]
    assert doc["created_at"] == doc["updated_at"]
    assert ObjectId.is_valid(idea.id)
    assert idea.owner == "user-1"


@pytest.mark.asyncio
async def test_find_by_id_queries_object_id(stub_collection):
    oid = ObjectId()
    stub_collection.docs = [_stored_doc(_id=oid)]

    idea = await MongoIdeaStore().find_by_id(str(oid))

    assert stub_collection.calls == [("find_one", {"_id": oid})]
    assert idea.id == str(oid)


@pytest.mark.asyncio
async def test_find_by_id_missing_returns_none(stub_collection):
    assert await MongoIdeaStore().find_by_id(str(ObjectId())) is None


@pytest.mark.asyncio
async def test_find_many_sorts_newest_first_without_limit(stub_collection):
    stub_collection.docs = [_stored_doc(title="b"), _stored_doc(title="a")]

    ideas = await MongoIdeaStore().find_many()

    assert stub_collection.calls == [("find", {})]
    assert stub_collection.cursor.sort_spec == [("created_at", DESCENDING), ("_id", DESCENDING)]
    assert stub_collection.cursor.limit_value is None
    assert [idea.title for idea in ideas] == ["b", "a"]


@pytest.mark.asyncio
async def test_find_many_applies_limit(stub_collection):
    await MongoIdeaStore().find_many(limit=2)

    assert stub_collection.cursor.limit_value == 2


@pytest.mark.asyncio
async def test_save_filters_on_owner_and_returns_document_after(stub_collection):
    oid = ObjectId()
    stub_collection.docs = [_stored_doc(_id=oid)]

    idea = await MongoIdeaStore().save(str(oid), "user-1", _fields())

    name, filter, update, return_document = stub_collection.calls[0]
    assert name == "find_one_and_update"
    assert filter == {"_id": oid, "owner": "user-1"}
    assert set(update["$set"]) == {"title", "summary", "description", "tags", "updated_at"}
    assert "owner" not in update["$set"]
    assert update["$set"]["updated_at"] > stub_collection.docs[0]["created_at"]
    assert return_document is ReturnDocument.AFTER
    assert idea.title == "New"


@pytest.mark.asyncio
async def test_save_without_match_returns_none(stub_collection):
    stub_collection.matched = False

    assert await MongoIdeaStore().save(str(ObjectId()), "user-2", _fields()) is None


@pytest.mark.asyncio
@pytest.mark.parametrize("matched", [True, False])
async def test_delete_filters_on_owner(stub_collection, matched):
    stub_collection.matched = matched
    oid = ObjectId()

    deleted = await MongoIdeaStore().delete(str(oid), "user-1")

    assert stub_collection.calls == [("delete_one", {"_id": oid, "owner": "user-1"})]
    assert deleted is matched


@pytest.mark.asyncio
async def test_ensure_indexes(stub_collection):
    await MongoIdeaStore().ensure_indexes()

    assert stub_collection.calls == [
        ("create_index", [("created_at", DESCENDING), ("_id", DESCENDING)]),
        ("create_index", [("owner", ASCENDING)]),
    ]
