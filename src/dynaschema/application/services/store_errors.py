"""Translation of document store exceptions into domain errors."""

from collections.abc import Iterator
from contextlib import contextmanager

from dynaschema.application.ports import (
    DuplicateException,
    LimitException,
    StoreAuthorizationException,
    StoreException,
    StructureException,
    TruncateException,
)
from dynaschema.domain.exceptions import (
    AlreadyExists,
    DynaSchemaError,
    InvalidValue,
    LimitExceeded,
    TruncateUnsupported,
    Unauthorized,
)


def to_domain_error(exc: StoreException, resource: str) -> DynaSchemaError | StoreException:
    """Typed error for ``exc``; unknown store exceptions are returned unchanged."""
    name = resource.lower()
    if isinstance(exc, DuplicateException):
        return AlreadyExists(
            f"{resource} with the requested key already exists", code=f"{name}_already_exists"
        )
    if isinstance(exc, LimitException):
        return LimitExceeded(
            str(exc) or f"{resource} limit exceeded", code=f"{name}_limit_exceeded"
        )
    if isinstance(exc, TruncateException):
        return TruncateUnsupported(
            str(exc) or "Resize would truncate existing data", code=f"{name}_invalid_resize"
        )
    if isinstance(exc, StructureException):
        return InvalidValue(str(exc), code=f"{name}_invalid_structure")
    if isinstance(exc, StoreAuthorizationException):
        return Unauthorized(str(exc))
    return exc


@contextmanager
def store_errors(resource: str) -> Iterator[None]:
    """Re-raise store exceptions from the enclosed block as domain errors."""
    try:
        yield
    except StoreException as exc:
        mapped = to_domain_error(exc, resource)
        if mapped is exc:
            raise
        raise mapped from exc
