"""Application entry point and composition root."""

from dataclasses import dataclass

from falcon.asgi import App

from dynaschema import __version__
from dynaschema.application.ports import DocumentStoreFactory, SchemaQueue
from dynaschema.application.use_cases.attribute.create_attribute import CreateAttributeUseCase
from dynaschema.application.use_cases.attribute.delete_attribute import DeleteAttributeUseCase
from dynaschema.application.use_cases.attribute.get_attribute import GetAttributeUseCase
from dynaschema.application.use_cases.attribute.list_attributes import ListAttributesUseCase
from dynaschema.application.use_cases.attribute.update_attribute import UpdateAttributeUseCase
from dynaschema.application.use_cases.collection.create_collection import (
    CreateCollectionUseCase,
)
from dynaschema.application.use_cases.collection.delete_collection import (
    DeleteCollectionUseCase,
)
from dynaschema.application.use_cases.collection.get_collection import GetCollectionUseCase
from dynaschema.application.use_cases.collection.list_collections import ListCollectionsUseCase
from dynaschema.application.use_cases.collection.update_collection import (
    UpdateCollectionUseCase,
)
from dynaschema.application.use_cases.document.create_document import CreateDocumentUseCase
from dynaschema.application.use_cases.document.delete_document import DeleteDocumentUseCase
from dynaschema.application.use_cases.document.get_document import GetDocumentUseCase
from dynaschema.application.use_cases.document.list_documents import ListDocumentsUseCase
from dynaschema.application.use_cases.document.update_document import UpdateDocumentUseCase
from dynaschema.application.use_cases.index.create_index import CreateIndexUseCase
from dynaschema.application.use_cases.index.delete_index import DeleteIndexUseCase
from dynaschema.application.use_cases.index.get_index import GetIndexUseCase
from dynaschema.application.use_cases.index.list_indexes import ListIndexesUseCase
from dynaschema.application.use_cases.lifecycle.confirm_attribute import ConfirmAttributeUseCase
from dynaschema.application.use_cases.lifecycle.confirm_index import ConfirmIndexUseCase
from dynaschema.config import Settings, get_settings
from dynaschema.interfaces.api.app import create_app
from dynaschema.logging_config import configure_logging


@dataclass
class Engine:
    """All use cases wired to one document store and one schema queue."""

    create_attribute: CreateAttributeUseCase
    get_attribute: GetAttributeUseCase
    list_attributes: ListAttributesUseCase
    update_attribute: UpdateAttributeUseCase
    delete_attribute: DeleteAttributeUseCase
    create_index: CreateIndexUseCase
    get_index: GetIndexUseCase
    list_indexes: ListIndexesUseCase
    delete_index: DeleteIndexUseCase
    confirm_attribute: ConfirmAttributeUseCase
    confirm_index: ConfirmIndexUseCase
    create_collection: CreateCollectionUseCase
    get_collection: GetCollectionUseCase
    list_collections: ListCollectionsUseCase
    update_collection: UpdateCollectionUseCase
    delete_collection: DeleteCollectionUseCase
    create_document: CreateDocumentUseCase
    get_document: GetDocumentUseCase
    list_documents: ListDocumentsUseCase
    update_document: UpdateDocumentUseCase
    delete_document: DeleteDocumentUseCase


def main() -> None:
    """CLI entry point."""
    print(f"dynaschema v{__version__}")


def build_engine(
    store_factory: DocumentStoreFactory,
    schema_queue: SchemaQueue,
    settings: Settings | None = None,
) -> Engine:
    """Composition root - wire use cases to the given store and queue."""
    settings = settings or get_settings()
    depth = settings.relationship_max_depth
    return Engine(
        create_attribute=CreateAttributeUseCase(store_factory, schema_queue),
        get_attribute=GetAttributeUseCase(store_factory),
        list_attributes=ListAttributesUseCase(store_factory, settings.limit_count),
        update_attribute=UpdateAttributeUseCase(store_factory, schema_queue),
        delete_attribute=DeleteAttributeUseCase(store_factory, schema_queue),
        create_index=CreateIndexUseCase(
            store_factory, schema_queue, settings.array_index_length
        ),
        get_index=GetIndexUseCase(store_factory),
        list_indexes=ListIndexesUseCase(store_factory, settings.limit_count),
        delete_index=DeleteIndexUseCase(store_factory, schema_queue),
        confirm_attribute=ConfirmAttributeUseCase(store_factory),
        confirm_index=ConfirmIndexUseCase(store_factory),
        create_collection=CreateCollectionUseCase(store_factory, settings.max_roles),
        get_collection=GetCollectionUseCase(store_factory),
        list_collections=ListCollectionsUseCase(store_factory, settings.limit_count),
        update_collection=UpdateCollectionUseCase(store_factory, settings.max_roles),
        delete_collection=DeleteCollectionUseCase(store_factory, schema_queue),
        create_document=CreateDocumentUseCase(store_factory, depth, settings.max_roles),
        get_document=GetDocumentUseCase(store_factory, depth),
        list_documents=ListDocumentsUseCase(store_factory, depth, settings.limit_count),
        update_document=UpdateDocumentUseCase(store_factory, depth, settings.max_roles),
        delete_document=DeleteDocumentUseCase(store_factory, depth),
    )


def create_dynaschema_app(settings: Settings | None = None) -> App:
    """Build the Falcon app with logging configured."""
    settings = settings or get_settings()
    configure_logging(settings)
    return create_app()


if __name__ == "__main__":
    main()
