"""Collection- and document-level access checks."""

from dynaschema.domain.authorization import Authorization
from dynaschema.domain.entities import Collection, Document
from dynaschema.domain.exceptions import NotFound, Unauthorized
from dynaschema.domain.value_objects import PermissionAction


def ensure_enabled(auth: Authorization, collection: Collection) -> None:
    """Disabled collections are hidden from callers without a privileged role."""
    if not collection.enabled and not auth.is_privileged():
        raise NotFound("Collection", collection.id)


def can_access(
    auth: Authorization,
    action: PermissionAction,
    collection: Collection,
    document: Document | None = None,
) -> bool:
    """Collection-level grant, plus a document-level grant under document security.

    Document-level permissions carry no ``create`` action, so creation is
    governed by the collection alone.
    """
    if not auth.is_valid(action, collection.permissions):
        return False
    if (
        collection.document_security
        and document is not None
        and action != PermissionAction.CREATE
    ):
        return auth.is_valid(action, document.permissions)
    return True


def authorize(
    auth: Authorization,
    action: PermissionAction,
    collection: Collection,
    document: Document | None = None,
) -> None:
    if not can_access(auth, action, collection, document):
        raise Unauthorized(auth.last_message)
