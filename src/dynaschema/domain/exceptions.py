"""Domain exceptions.

Every error raised by the engine belongs to one of a fixed set of kinds. The
kind is stable and machine-readable; ``code`` narrows it down to the concrete
condition and ``status_code`` is the HTTP status the boundary should render.
"""


class DynaSchemaError(Exception):
    """Base exception for dynaschema."""

    kind = "general"
    status_code = 500
    default_code = "general_server_error"

    def __init__(self, message: str = "", code: str | None = None) -> None:
        super().__init__(message or self.__class__.__doc__ or self.kind)
        self.message = message or (self.__class__.__doc__ or self.kind).strip()
        self.code = code or self.default_code


class NotFound(DynaSchemaError):
    """Requested resource was not found."""

    kind = "not_found"
    status_code = 404
    default_code = "resource_not_found"

    def __init__(self, resource: str, identifier: str = "", code: str | None = None) -> None:
        message = f"{resource} '{identifier}' not found" if identifier else f"{resource} not found"
        super().__init__(message, code or f"{resource.lower()}_not_found")
        self.resource = resource
        self.identifier = identifier


class AlreadyExists(DynaSchemaError):
    """Resource with the requested key already exists."""

    kind = "already_exists"
    status_code = 409
    default_code = "resource_already_exists"


class LimitExceeded(DynaSchemaError):
    """Maximum number of schema elements reached."""

    kind = "limit_exceeded"
    status_code = 400
    default_code = "limit_exceeded"


class InvalidValue(DynaSchemaError):
    """Validation failed for input data."""

    kind = "invalid_value"
    status_code = 400
    default_code = "value_invalid"


class Unauthorized(DynaSchemaError):
    """Actor does not have permission for the requested action."""

    kind = "unauthorized"
    status_code = 401
    default_code = "user_unauthorized"


class TypeMismatch(DynaSchemaError):
    """Attribute type or filter does not match the stored attribute."""

    kind = "type_mismatch"
    status_code = 400
    default_code = "attribute_type_invalid"


class TruncateUnsupported(DynaSchemaError):
    """Resize would discard existing data."""

    kind = "truncate_unsupported"
    status_code = 400
    default_code = "attribute_invalid_resize"
