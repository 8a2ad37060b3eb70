"""Pytest fixtures for dynaschema tests."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from copy import deepcopy
from typing import Any
from unittest.mock import AsyncMock

import pytest

from dynaschema.application.ports import (
    DuplicateException,
    LimitException,
    StoreException,
    TruncateException,
)
from dynaschema.domain.entities import (
    Attribute,
    Collection,
    Database,
    Document,
    Index,
    RelationshipOptions,
)
from dynaschema.domain.value_objects import (
    AttributeType,
    IndexType,
    OnDelete,
    Query,
    QueryMethod,
    RelationType,
    Status,
)

DATABASE_ID = "db1"


# --- Query evaluation shared by fake repositories ---


def _value(record: Any, attribute: str) -> Any:
    if isinstance(record, Document):
        if attribute == "$id":
            return record.id
        return record.get(attribute)
    return getattr(record, attribute, None)


def _matches(record: Any, query: Query) -> bool:
    value = _value(record, query.attribute)
    if query.method is QueryMethod.EQUAL:
        return value in query.values
    if query.method is QueryMethod.NOT_EQUAL:
        return value != query.value
    if query.method is QueryMethod.SEARCH:
        haystack = " ".join(str(v) for v in vars(record).values() if isinstance(v, str))
        return str(query.value).lower() in haystack.lower()
    return True


def _apply(records: list[Any], queries: list[Query]) -> list[Any]:
    grouped = Query.group_by_type(queries)
    items = [r for r in records if all(_matches(r, q) for q in grouped.filters)]
    for order in reversed(grouped.orders):
        items.sort(
            key=lambda r, a=order.attribute: str(_value(r, a or "id") or ""),
            reverse=order.method is QueryMethod.ORDER_DESC,
        )
    if grouped.cursor is not None:
        ids = [r.id for r in items]
        position = ids.index(grouped.cursor.id) if grouped.cursor.id in ids else -1
        if grouped.cursor_direction is QueryMethod.CURSOR_AFTER:
            items = items[position + 1 :]
        else:
            items = items[: max(position, 0)]
    start = grouped.offset or 0
    end = start + grouped.limit if grouped.limit is not None else None
    return [deepcopy(r) for r in items[start:end]]


# --- Fake repositories ---


class FakeDatabaseRepository:
    """In-memory database repository."""

    def __init__(self) -> None:
        self._by_id: dict[str, Database] = {}

    def add(self, database: Database) -> Database:
        self._by_id[database.id] = database
        return database

    async def get_by_id(self, database_id: str) -> Database | None:
        return self._by_id.get(database_id)


class FakeAttributeRepository:
    """In-memory attribute repository with failure injection on create/delete."""

    def __init__(self) -> None:
        self._by_id: dict[str, Attribute] = {}
        self.fail_create: dict[str, StoreException] = {}
        self.fail_delete: set[str] = set()

    def for_collection(self, collection: Collection) -> list[Attribute]:
        return [
            deepcopy(a)
            for a in self._by_id.values()
            if a.collection_internal_id == collection.internal_id
        ]

    def all(self) -> list[Attribute]:
        return list(self._by_id.values())

    async def get_by_id(self, attribute_id: str) -> Attribute | None:
        attribute = self._by_id.get(attribute_id)
        return deepcopy(attribute) if attribute else None

    async def find(self, collection: Collection, queries: list[Query]) -> list[Attribute]:
        return _apply(self.for_collection(collection), queries)

    async def count(self, collection: Collection, filters: list[Query], max_count: int) -> int:
        return min(len(_apply(self.for_collection(collection), filters)), max_count)

    async def create(self, attribute: Attribute) -> Attribute:
        if attribute.id in self.fail_create:
            raise self.fail_create[attribute.id]
        if attribute.id in self._by_id:
            raise DuplicateException(attribute.id)
        self._by_id[attribute.id] = deepcopy(attribute)
        return deepcopy(attribute)

    async def update(self, attribute: Attribute) -> Attribute:
        self._by_id[attribute.id] = deepcopy(attribute)
        return deepcopy(attribute)

    async def delete(self, attribute_id: str) -> bool:
        if attribute_id in self.fail_delete:
            raise StoreException(f"cannot delete {attribute_id}")
        return self._by_id.pop(attribute_id, None) is not None


class FakeIndexRepository:
    """In-memory index repository."""

    def __init__(self) -> None:
        self._by_id: dict[str, Index] = {}

    def for_collection(self, collection: Collection) -> list[Index]:
        return [
            deepcopy(i)
            for i in self._by_id.values()
            if i.collection_internal_id == collection.internal_id
        ]

    async def get_by_id(self, index_id: str) -> Index | None:
        index = self._by_id.get(index_id)
        return deepcopy(index) if index else None

    async def find(self, collection: Collection, queries: list[Query]) -> list[Index]:
        return _apply(self.for_collection(collection), queries)

    async def count(self, collection: Collection, filters: list[Query], max_count: int) -> int:
        return min(len(_apply(self.for_collection(collection), filters)), max_count)

    async def create(self, index: Index) -> Index:
        if index.id in self._by_id:
            raise DuplicateException(index.id)
        self._by_id[index.id] = deepcopy(index)
        return deepcopy(index)

    async def update(self, index: Index) -> Index:
        self._by_id[index.id] = deepcopy(index)
        return deepcopy(index)

    async def delete(self, index_id: str) -> bool:
        return self._by_id.pop(index_id, None) is not None


class FakeCollectionRepository:
    """In-memory collection repository; attributes and indexes attached on read."""

    def __init__(self, attributes: FakeAttributeRepository, indexes: FakeIndexRepository) -> None:
        self._by_key: dict[tuple[str, str], Collection] = {}
        self._attributes = attributes
        self._indexes = indexes
        self._sequence = 0
        self.collection_limit: int | None = None

    def _attach(self, collection: Collection) -> Collection:
        loaded = deepcopy(collection)
        loaded.attributes = self._attributes.for_collection(collection)
        loaded.indexes = self._indexes.for_collection(collection)
        return loaded

    def add(self, collection: Collection) -> Collection:
        if not collection.internal_id:
            self._sequence += 1
            collection.internal_id = str(self._sequence)
        self._by_key[(collection.database_id, collection.id)] = deepcopy(collection)
        return collection

    def lookup(self, database_id: str, collection_id: str) -> Collection | None:
        collection = self._by_key.get((database_id, collection_id))
        return self._attach(collection) if collection else None

    async def get_by_id(self, database: Database, collection_id: str) -> Collection | None:
        return self.lookup(database.id, collection_id)

    async def find(self, database: Database, queries: list[Query]) -> list[Collection]:
        records = [self._attach(c) for (db, _), c in self._by_key.items() if db == database.id]
        return _apply(records, queries)

    async def count(self, database: Database, filters: list[Query], max_count: int) -> int:
        return min(len(await self.find(database, filters)), max_count)

    async def create(self, collection: Collection) -> Collection:
        key = (collection.database_id, collection.id)
        if key in self._by_key:
            raise DuplicateException(collection.id)
        if self.collection_limit is not None and len(self._by_key) >= self.collection_limit:
            raise LimitException("Collection limit exceeded")
        return self._attach(self.add(deepcopy(collection)))

    async def update(self, collection: Collection) -> Collection:
        stored = deepcopy(collection)
        stored.attributes, stored.indexes = [], []
        self._by_key[(collection.database_id, collection.id)] = stored
        return self._attach(stored)

    async def delete(self, collection: Collection) -> bool:
        return self._by_key.pop((collection.database_id, collection.id), None) is not None


class FakeDocumentRepository:
    """In-memory document repository; nested related documents are stored too."""

    def __init__(self, collections: FakeCollectionRepository) -> None:
        self._by_collection: dict[str, dict[str, Document]] = {}
        self._collections = collections
        self.fail_with: StoreException | None = None

    def add(self, collection_id: str, document: Document) -> Document:
        self._by_collection.setdefault(collection_id, {})[document.id] = deepcopy(document)
        return document

    def _store_nested(self, collection: Collection, document: Document) -> None:
        for attribute in collection.relationship_attributes():
            value = document.get(attribute.key)
            values = value if isinstance(value, list) else [value]
            related = self._collections.lookup(
                collection.database_id, attribute.options.related_collection
            )
            for child in values:
                if isinstance(child, Document) and related is not None:
                    existing = self._by_collection.get(related.id, {}).get(child.id)
                    if existing is not None:
                        merged = deepcopy(existing)
                        merged.fields.update(child.fields)
                        child = merged
                    self.add(related.id, child)

    async def get_by_id(self, collection: Collection, document_id: str) -> Document | None:
        document = self._by_collection.get(collection.id, {}).get(document_id)
        return deepcopy(document) if document else None

    async def find(self, collection: Collection, queries: list[Query]) -> list[Document]:
        return _apply(list(self._by_collection.get(collection.id, {}).values()), queries)

    async def count(self, collection: Collection, filters: list[Query], max_count: int) -> int:
        return min(len(await self.find(collection, filters)), max_count)

    async def create(self, collection: Collection, document: Document) -> Document:
        if self.fail_with is not None:
            raise self.fail_with
        if document.id in self._by_collection.get(collection.id, {}):
            raise DuplicateException(document.id)
        self._store_nested(collection, document)
        self.add(collection.id, document)
        return deepcopy(document)

    async def update(self, collection: Collection, document: Document) -> Document:
        if self.fail_with is not None:
            raise self.fail_with
        self._store_nested(collection, document)
        self.add(collection.id, document)
        return deepcopy(document)

    async def delete(self, collection: Collection, document_id: str) -> bool:
        return self._by_collection.get(collection.id, {}).pop(document_id, None) is not None


class FakeStoreAdapter:
    """Physical primitives with configurable limits; calls are recorded."""

    def __init__(self, attributes: FakeAttributeRepository) -> None:
        self._attributes = attributes
        self.attribute_limit = 100
        self.index_limit = 64
        self.index_length = 768
        self.truncate = False
        self.calls: list[tuple[str, str, dict[str, Any]]] = []

    def check_attribute(self, collection: Collection, attribute: Attribute) -> None:
        if len(self._attributes.for_collection(collection)) >= self.attribute_limit:
            raise LimitException("Column limit reached")

    async def update_attribute(self, collection: Collection, key: str, **kwargs: Any) -> None:
        if self.truncate:
            raise TruncateException("Resize would truncate data")
        self.calls.append(("update_attribute", key, kwargs))

    async def update_relationship(self, collection: Collection, key: str, **kwargs: Any) -> None:
        self.calls.append(("update_relationship", key, kwargs))

    def limit_for_indexes(self) -> int:
        return self.index_limit

    def max_index_length(self) -> int:
        return self.index_length


# --- Fake DocumentStore ---


class FakeDocumentStore:
    """In-memory DocumentStore with fake repositories."""

    def __init__(self) -> None:
        self.databases = FakeDatabaseRepository()
        self.attributes = FakeAttributeRepository()
        self.indexes = FakeIndexRepository()
        self.collections = FakeCollectionRepository(self.attributes, self.indexes)
        self.documents = FakeDocumentRepository(self.collections)
        self.adapter = FakeStoreAdapter(self.attributes)
        self.purged_documents: list[tuple[str, str]] = []
        self.purged_collections: list[str] = []
        self.databases.add(Database(id=DATABASE_ID, internal_id="1", name="Main"))

    async def purge_cached_document(self, collection_id: str, document_id: str) -> None:
        self.purged_documents.append((collection_id, document_id))

    async def purge_cached_collection(self, collection_id: str) -> None:
        self.purged_collections.append(collection_id)

    def add_collection(self, collection_id: str, **kwargs: Any) -> Collection:
        kwargs.setdefault("permissions", [])
        return self.collections.add(
            Collection(id=collection_id, internal_id="", database_id=DATABASE_ID, **kwargs)
        )

    def add_attribute(
        self,
        collection_id: str,
        key: str,
        type: AttributeType = AttributeType.STRING,
        status: Status = Status.AVAILABLE,
        **kwargs: Any,
    ) -> Attribute:
        collection = self.collections.lookup(DATABASE_ID, collection_id)
        attribute = Attribute(
            id=f"1_{collection.internal_id}_{key}",
            key=key,
            type=type,
            collection_id=collection.id,
            collection_internal_id=collection.internal_id,
            database_internal_id="1",
            status=status,
            **kwargs,
        )
        self.attributes._by_id[attribute.id] = attribute
        return attribute

    def add_relationship(
        self,
        collection_id: str,
        key: str,
        related_collection: str,
        relation_type: RelationType = RelationType.ONE_TO_MANY,
        two_way: bool = False,
        two_way_key: str | None = None,
        status: Status = Status.AVAILABLE,
    ) -> Attribute:
        return self.add_attribute(
            collection_id,
            key,
            type=AttributeType.RELATIONSHIP,
            status=status,
            options=RelationshipOptions(
                related_collection=related_collection,
                relation_type=relation_type,
                two_way=two_way,
                two_way_key=two_way_key or related_collection,
                on_delete=OnDelete.RESTRICT,
            ),
        )

    def add_index(self, collection_id: str, key: str, status: Status = Status.AVAILABLE) -> Index:
        collection = self.collections.lookup(DATABASE_ID, collection_id)
        index = Index(
            id=f"1_{collection.internal_id}_{key}",
            key=key,
            type=IndexType.KEY,
            attributes=["$id"],
            collection_id=collection.id,
            collection_internal_id=collection.internal_id,
            database_internal_id="1",
            status=status,
        )
        self.indexes._by_id[index.id] = index
        return index


def make_store_factory(store: FakeDocumentStore):
    """Async context manager factory yielding the same store on every call."""

    @asynccontextmanager
    async def _factory() -> AsyncIterator[FakeDocumentStore]:
        yield store

    return _factory


# --- Fixtures ---


@pytest.fixture
def store() -> FakeDocumentStore:
    """Fresh in-memory store with database ``db1``."""
    return FakeDocumentStore()


@pytest.fixture
def store_factory(store: FakeDocumentStore):
    return make_store_factory(store)


@pytest.fixture
def schema_queue() -> AsyncMock:
    """AsyncMock standing in for the schema worker queue."""
    return AsyncMock()
