"""Composition root wiring."""

import pytest

from dynaschema import __version__
from dynaschema.config import Settings
from dynaschema.domain.authorization import Authorization
from dynaschema.main import build_engine, main

from tests.conftest import DATABASE_ID


def test_main_prints_version(capsys: pytest.CaptureFixture[str]) -> None:
    main()
    assert capsys.readouterr().out.strip() == f"dynaschema v{__version__}"


@pytest.mark.asyncio
async def test_engine_runs_a_collection_and_document_round(store_factory, schema_queue) -> None:
    engine = build_engine(
        store_factory, schema_queue, Settings(_env_file=None, relationship_max_depth=2)
    )

    await engine.create_collection.execute(
        DATABASE_ID, "notes", "Notes", permissions=["read:any", "create:any"]
    )
    created = await engine.create_document.execute(
        Authorization(["any"]), DATABASE_ID, "notes", "n1", {"text": "hi"}, permissions=[]
    )
    documents, total = await engine.list_documents.execute(
        Authorization(["any"]), DATABASE_ID, "notes"
    )

    assert created.id == "n1"
    assert [d.id for d in documents] == ["n1"]
    assert total == 1
