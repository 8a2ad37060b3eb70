"""Unit tests for UpdateAttributeUseCase."""

import pytest

from dynaschema.application.dto.attribute_input import (
    FLOAT_MAX,
    FLOAT_MIN,
    INT_MAX,
    AttributeUpdate,
)
from dynaschema.application.ports import DuplicateException
from dynaschema.application.use_cases.attribute.update_attribute import UpdateAttributeUseCase
from dynaschema.domain.exceptions import (
    AlreadyExists,
    InvalidValue,
    TruncateUnsupported,
    TypeMismatch,
)
from dynaschema.domain.value_objects import (
    AttributeFormat,
    AttributeType,
    OnDelete,
    RelationType,
    Status,
)

from tests.conftest import DATABASE_ID, FakeDocumentStore


@pytest.fixture
def use_case(store_factory, schema_queue) -> UpdateAttributeUseCase:
    return UpdateAttributeUseCase(store_factory, schema_queue)


@pytest.fixture
def books(store: FakeDocumentStore) -> FakeDocumentStore:
    store.add_collection("books")
    store.add_collection("authors")
    store.add_attribute("books", "title", size=128)
    store.add_attribute(
        "books",
        "pages",
        type=AttributeType.INTEGER,
        format=AttributeFormat.INT_RANGE,
        format_options={"min": 0, "max": 1000},
        size=4,
    )
    store.add_attribute(
        "books",
        "state",
        format=AttributeFormat.ENUM,
        format_options={"elements": ["draft", "published"]},
        size=255,
    )
    return store


@pytest.mark.asyncio
async def test_update_in_place(use_case, books, schema_queue) -> None:
    result = await use_case.execute(
        DATABASE_ID, "books", "title", AttributeUpdate(type=AttributeType.STRING, default="Untitled")
    )

    assert result.default == "Untitled"
    assert (await books.attributes.get_by_id("1_1_title")).default == "Untitled"
    assert books.adapter.calls[0][0] == "update_attribute"
    schema_queue.notify_update_attribute.assert_awaited_once()


@pytest.mark.asyncio
async def test_not_available_is_rejected(use_case, books) -> None:
    books.add_attribute("books", "draft", status=Status.PROCESSING, size=10)
    with pytest.raises(InvalidValue) as exc_info:
        await use_case.execute(
            DATABASE_ID, "books", "draft", AttributeUpdate(type=AttributeType.STRING)
        )
    assert exc_info.value.code == "attribute_not_available"


@pytest.mark.asyncio
async def test_type_change_is_type_mismatch(use_case, books) -> None:
    with pytest.raises(TypeMismatch):
        await use_case.execute(
            DATABASE_ID, "books", "title", AttributeUpdate(type=AttributeType.INTEGER)
        )


@pytest.mark.asyncio
async def test_format_change_is_type_mismatch(use_case, books) -> None:
    with pytest.raises(TypeMismatch):
        await use_case.execute(
            DATABASE_ID,
            "books",
            "title",
            AttributeUpdate(type=AttributeType.STRING, format=AttributeFormat.EMAIL),
        )


@pytest.mark.asyncio
async def test_filter_change_is_type_mismatch(use_case, books) -> None:
    with pytest.raises(TypeMismatch):
        await use_case.execute(
            DATABASE_ID,
            "books",
            "title",
            AttributeUpdate(type=AttributeType.STRING, filters=["encrypt"]),
        )


@pytest.mark.asyncio
async def test_default_with_required_is_invalid(use_case, books) -> None:
    with pytest.raises(InvalidValue):
        await use_case.execute(
            DATABASE_ID,
            "books",
            "title",
            AttributeUpdate(type=AttributeType.STRING, required=True, default="x"),
        )


@pytest.mark.asyncio
async def test_range_is_revalidated(use_case, books) -> None:
    result = await use_case.execute(
        DATABASE_ID, "books", "pages", AttributeUpdate(type=AttributeType.INTEGER, max=2000, default=1500)
    )
    assert result.format_options == {"min": 0, "max": 2000}

    with pytest.raises(InvalidValue):
        await use_case.execute(
            DATABASE_ID, "books", "pages", AttributeUpdate(type=AttributeType.INTEGER, default=5000)
        )
    with pytest.raises(InvalidValue):
        await use_case.execute(
            DATABASE_ID, "books", "pages", AttributeUpdate(type=AttributeType.INTEGER, min=10, max=1)
        )


@pytest.mark.asyncio
async def test_range_without_stored_bounds_uses_type_limits(use_case, books) -> None:
    books.add_attribute(
        "books", "score", type=AttributeType.FLOAT, format=AttributeFormat.FLOAT_RANGE
    )
    books.add_attribute(
        "books",
        "sales",
        type=AttributeType.INTEGER,
        format=AttributeFormat.INT_RANGE,
        format_options={"min": 0, "max": None},
    )

    score = await use_case.execute(
        DATABASE_ID, "books", "score", AttributeUpdate(type=AttributeType.FLOAT, default=2.5)
    )
    sales = await use_case.execute(
        DATABASE_ID, "books", "sales", AttributeUpdate(type=AttributeType.INTEGER, default=10**12)
    )

    assert score.format_options == {"min": FLOAT_MIN, "max": FLOAT_MAX}
    assert sales.format_options == {"min": 0, "max": INT_MAX}

    with pytest.raises(InvalidValue):
        await use_case.execute(
            DATABASE_ID, "books", "sales", AttributeUpdate(type=AttributeType.INTEGER, default=-1)
        )

@pytest.mark.asyncio
async def test_enum_elements_are_revalidated(use_case, books) -> None:
    result = await use_case.execute(
        DATABASE_ID,
        "books",
        "state",
        AttributeUpdate(type=AttributeType.STRING, elements=["draft", "archived"], default="archived"),
    )
    assert result.format_options == {"elements": ["draft", "archived"]}

    with pytest.raises(InvalidValue):
        await use_case.execute(
            DATABASE_ID, "books", "state", AttributeUpdate(type=AttributeType.STRING, default="gone")
        )


@pytest.mark.asyncio
async def test_truncate_is_truncate_unsupported(use_case, books) -> None:
    books.adapter.truncate = True
    with pytest.raises(TruncateUnsupported):
        await use_case.execute(
            DATABASE_ID, "books", "title", AttributeUpdate(type=AttributeType.STRING, size=4)
        )


@pytest.mark.asyncio
async def test_rename_moves_record_to_new_id(use_case, books) -> None:
    result = await use_case.execute(
        DATABASE_ID, "books", "title", AttributeUpdate(type=AttributeType.STRING, new_key="name")
    )

    assert result.id == "1_1_name"
    assert result.key == "name"
    assert await books.attributes.get_by_id("1_1_title") is None


@pytest.mark.asyncio
async def test_failed_rename_restores_original(use_case, books) -> None:
    books.attributes.fail_create["1_1_name"] = DuplicateException("taken")

    with pytest.raises(AlreadyExists):
        await use_case.execute(
            DATABASE_ID, "books", "title", AttributeUpdate(type=AttributeType.STRING, new_key="name")
        )

    restored = await books.attributes.get_by_id("1_1_title")
    assert restored is not None
    assert restored.key == "title"
    assert restored.size == 128


@pytest.mark.asyncio
async def test_failed_relationship_rename_leaves_mirror_untouched(use_case, books) -> None:
    books.add_relationship(
        "books", "author", "authors", RelationType.MANY_TO_ONE, two_way=True, two_way_key="books"
    )
    books.add_relationship(
        "authors", "books", "books", RelationType.MANY_TO_ONE, two_way=True, two_way_key="author"
    )
    books.attributes.fail_create["1_1_writer"] = DuplicateException("taken")

    with pytest.raises(AlreadyExists):
        await use_case.execute(
            DATABASE_ID,
            "books",
            "author",
            AttributeUpdate(
                type=AttributeType.RELATIONSHIP, on_delete=OnDelete.CASCADE, new_key="writer"
            ),
        )

    primary = await books.attributes.get_by_id("1_1_author")
    mirror = await books.attributes.get_by_id("1_2_books")
    assert primary.options.two_way_key == "books"
    assert mirror.options.two_way_key == "author"
    assert mirror.options.on_delete is OnDelete.RESTRICT

@pytest.mark.asyncio
async def test_relationship_changes_reach_mirror(use_case, books) -> None:
    books.add_relationship(
        "books", "author", "authors", RelationType.MANY_TO_ONE, two_way=True, two_way_key="books"
    )
    books.add_relationship(
        "authors", "books", "books", RelationType.MANY_TO_ONE, two_way=True, two_way_key="author"
    )

    result = await use_case.execute(
        DATABASE_ID,
        "books",
        "author",
        AttributeUpdate(type=AttributeType.RELATIONSHIP, on_delete=OnDelete.CASCADE, new_key="writer"),
    )

    mirror = await books.attributes.get_by_id("1_2_books")
    assert result.key == "writer"
    assert result.options.on_delete is OnDelete.CASCADE
    assert mirror.options.on_delete is OnDelete.CASCADE
    assert mirror.options.two_way_key == "writer"
    assert books.adapter.calls[0][0] == "update_relationship"
