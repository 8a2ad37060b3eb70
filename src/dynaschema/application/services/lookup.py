"""Loading of schema metadata shared by use cases."""

from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from dynaschema.application.ports import META_COLLECTIONS, DocumentStore
from dynaschema.domain.entities import Attribute, Collection, Database, Index
from dynaschema.domain.exceptions import NotFound
from dynaschema.domain.value_objects import Query

T = TypeVar("T")


async def get_database(store: DocumentStore, database_id: str) -> Database:
    database = await store.databases.get_by_id(database_id)
    if not database:
        raise NotFound("Database", database_id)
    return database


async def get_collection(
    store: DocumentStore, database_id: str, collection_id: str
) -> tuple[Database, Collection]:
    database = await get_database(store, database_id)
    collection = await store.collections.get_by_id(database, collection_id)
    if not collection:
        raise NotFound("Collection", collection_id)
    return database, collection


async def get_attribute(store: DocumentStore, attribute_id: str, key: str) -> Attribute:
    attribute = await store.attributes.get_by_id(attribute_id)
    if not attribute:
        raise NotFound("Attribute", key)
    return attribute


async def get_index(store: DocumentStore, index_id: str, key: str) -> Index:
    index = await store.indexes.get_by_id(index_id)
    if not index:
        raise NotFound("Index", key)
    return index


async def purge_collection(store: DocumentStore, collection_id: str) -> None:
    """Drop cached definitions of a collection."""
    await store.purge_cached_document(META_COLLECTIONS, collection_id)
    await store.purge_cached_collection(collection_id)


async def resolve_cursor(
    queries: list[Query], load: Callable[[Any], Awaitable[T | None]]
) -> list[Query]:
    """Replace the cursor value (an id or key) with the record it names."""
    resolved: list[Query] = []
    cursor_seen = False
    for query in queries:
        if query.is_cursor and not cursor_seen:
            cursor_seen = True
            record = await load(query.value)
            if record is None:
                raise NotFound("Cursor", str(query.value), code="general_cursor_not_found")
            query = query.with_value(record)
        resolved.append(query)
    return resolved


async def list_with_total(
    queries: list[Query],
    *,
    load_cursor: Callable[[Any], Awaitable[T | None]],
    find: Callable[[list[Query]], Awaitable[list[T]]],
    count: Callable[[list[Query], int], Awaitable[int]],
    limit_count: int,
) -> tuple[list[T], int]:
    """Run a paged listing and count the total over the filter predicates only."""
    queries = await resolve_cursor(queries, load_cursor)
    grouped = Query.group_by_type(queries)
    items = await find(queries)
    total = await count(grouped.filters, limit_count)
    return items, total
