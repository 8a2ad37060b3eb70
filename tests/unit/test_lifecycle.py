"""Unit tests for status transitions and worker confirmations."""

import pytest

from dynaschema.application.services.lifecycle import confirm, transition
from dynaschema.application.use_cases.lifecycle.confirm_attribute import ConfirmAttributeUseCase
from dynaschema.application.use_cases.lifecycle.confirm_index import ConfirmIndexUseCase
from dynaschema.domain.entities import Attribute
from dynaschema.domain.exceptions import InvalidValue
from dynaschema.domain.value_objects import AttributeType, Status, WorkerOutcome

from tests.conftest import DATABASE_ID


def _attribute(status: Status) -> Attribute:
    return Attribute(id="1_1_title", key="title", type=AttributeType.STRING, status=status)


@pytest.mark.parametrize(
    "start,target",
    [
        (Status.PROCESSING, Status.AVAILABLE),
        (Status.PROCESSING, Status.FAILED),
        (Status.AVAILABLE, Status.DELETING),
    ],
)
def test_allowed_transitions(start: Status, target: Status) -> None:
    attribute = _attribute(start)
    transition(attribute, target)
    assert attribute.status is target


@pytest.mark.parametrize(
    "start,target",
    [
        (Status.AVAILABLE, Status.PROCESSING),
        (Status.FAILED, Status.AVAILABLE),
        (Status.DELETING, Status.AVAILABLE),
        (Status.PROCESSING, Status.DELETING),
    ],
)
def test_illegal_transitions(start: Status, target: Status) -> None:
    attribute = _attribute(start)
    with pytest.raises(InvalidValue) as exc_info:
        transition(attribute, target)
    assert exc_info.value.code == "status_transition_invalid"
    assert attribute.status is start


def test_confirm_failed_records_error() -> None:
    attribute = _attribute(Status.PROCESSING)
    assert confirm(attribute, WorkerOutcome.FAILED, "column too large") is False
    assert attribute.status is Status.FAILED
    assert attribute.error == "column too large"


def test_confirm_removed_requires_deleting() -> None:
    assert confirm(_attribute(Status.DELETING), WorkerOutcome.REMOVED) is True
    with pytest.raises(InvalidValue):
        confirm(_attribute(Status.AVAILABLE), WorkerOutcome.REMOVED)


@pytest.mark.asyncio
async def test_confirm_attribute_applied(store, store_factory) -> None:
    store.add_collection("books")
    store.add_attribute("books", "title", size=64, status=Status.PROCESSING)

    result = await ConfirmAttributeUseCase(store_factory).execute(
        DATABASE_ID, "books", "title", WorkerOutcome.APPLIED
    )

    assert result.status is Status.AVAILABLE
    assert (await store.attributes.get_by_id("1_1_title")).status is Status.AVAILABLE
    assert "books" in store.purged_collections


@pytest.mark.asyncio
async def test_confirm_attribute_removed_deletes_record(store, store_factory) -> None:
    store.add_collection("books")
    store.add_attribute("books", "title", size=64, status=Status.DELETING)

    result = await ConfirmAttributeUseCase(store_factory).execute(
        DATABASE_ID, "books", "title", WorkerOutcome.REMOVED
    )

    assert result is None
    assert await store.attributes.get_by_id("1_1_title") is None


@pytest.mark.asyncio
async def test_confirm_index_failed(store, store_factory) -> None:
    store.add_collection("books")
    store.add_index("books", "by_id", status=Status.PROCESSING)

    result = await ConfirmIndexUseCase(store_factory).execute(
        DATABASE_ID, "books", "by_id", WorkerOutcome.FAILED, "duplicate entries"
    )

    assert result.status is Status.FAILED
    assert result.error == "duplicate entries"


@pytest.mark.asyncio
async def test_confirm_index_rejects_out_of_order_outcome(store, store_factory) -> None:
    store.add_collection("books")
    store.add_index("books", "by_id")

    with pytest.raises(InvalidValue):
        await ConfirmIndexUseCase(store_factory).execute(
            DATABASE_ID, "books", "by_id", WorkerOutcome.APPLIED
        )
