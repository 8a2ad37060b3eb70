"""Domain validators."""

from dynaschema.domain.validators.index import IndexValidator
from dynaschema.domain.validators.roles import RolesValidator
from dynaschema.domain.validators.values import RangeValidator, TextValidator

__all__ = [
    "IndexValidator",
    "RangeValidator",
    "RolesValidator",
    "TextValidator",
]
