"""Attribute DTOs and per-kind constructors.

Each constructor applies the defaults of its attribute kind and validates
the default value before the generic create path runs.
"""

import sys
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from dynaschema.domain.exceptions import InvalidValue
from dynaschema.domain.validators import RangeValidator, TextValidator
from dynaschema.domain.value_objects import (
    AttributeFormat,
    AttributeType,
    OnDelete,
    RelationType,
)

INT_MIN = -(2**63)
INT_MAX = 2**63 - 1
INT32_MAX = 2147483647
FLOAT_MIN = -sys.float_info.max
FLOAT_MAX = sys.float_info.max

EMAIL_SIZE = 254
IP_SIZE = 39
URL_SIZE = 2000
KEY_SIZE = 255

ENCRYPT_FILTER = "encrypt"


@dataclass
class RelationshipInput:
    """Caller-supplied relationship options. The side is always decided by the engine."""

    related_collection: str
    relation_type: RelationType
    two_way: bool = False
    two_way_key: str | None = None
    on_delete: OnDelete = OnDelete.RESTRICT


@dataclass
class AttributeInput:
    """Input for creating an attribute."""

    key: str
    type: AttributeType
    size: int = 0
    required: bool = False
    array: bool = False
    default: Any = None
    format: AttributeFormat | None = None
    format_options: dict[str, Any] = field(default_factory=dict)
    filters: list[str] = field(default_factory=list)
    relationship: RelationshipInput | None = None


@dataclass
class AttributeUpdate:
    """Input for updating an attribute. ``type`` must match the stored attribute."""

    type: AttributeType
    required: bool = False
    default: Any = None
    size: int | None = None
    format: AttributeFormat | None = None
    filters: list[str] | None = None
    min: float | None = None
    max: float | None = None
    elements: list[str] | None = None
    on_delete: OnDelete | None = None
    new_key: str | None = None


def _check_default(validator: TextValidator | RangeValidator, default: Any) -> None:
    if default is not None and not validator.is_valid(default):
        raise InvalidValue(validator.description, code="attribute_value_invalid")


def _check_range(minimum: float, maximum: float) -> None:
    if minimum > maximum:
        raise InvalidValue(
            "Minimum value must be lesser than maximum value",
            code="attribute_value_invalid",
        )


def string_attribute(
    key: str,
    size: int,
    required: bool = False,
    default: str | None = None,
    array: bool = False,
    encrypt: bool = False,
) -> AttributeInput:
    _check_default(TextValidator(size), default)
    return AttributeInput(
        key=key,
        type=AttributeType.STRING,
        size=size,
        required=required,
        default=default,
        array=array,
        filters=[ENCRYPT_FILTER] if encrypt else [],
    )


def email_attribute(
    key: str, required: bool = False, default: str | None = None, array: bool = False
) -> AttributeInput:
    _check_default(TextValidator(EMAIL_SIZE), default)
    return AttributeInput(
        key=key,
        type=AttributeType.STRING,
        size=EMAIL_SIZE,
        required=required,
        default=default,
        array=array,
        format=AttributeFormat.EMAIL,
    )


def enum_attribute(
    key: str,
    elements: list[str],
    required: bool = False,
    default: str | None = None,
    array: bool = False,
    size: int = KEY_SIZE,
) -> AttributeInput:
    validate_enum_elements(elements, default)
    return AttributeInput(
        key=key,
        type=AttributeType.STRING,
        size=size,
        required=required,
        default=default,
        array=array,
        format=AttributeFormat.ENUM,
        format_options={"elements": list(elements)},
    )


def validate_enum_elements(elements: list[str] | None, default: Any) -> None:
    """Enum elements must be non-empty strings and contain the default."""
    if not elements:
        raise InvalidValue("Enum elements must not be empty", code="attribute_value_invalid")
    for element in elements:
        if not element:
            raise InvalidValue(
                "Each enum element must not be empty", code="attribute_value_invalid"
            )
    if default is not None and default not in elements:
        raise InvalidValue("Default value not found in elements", code="attribute_value_invalid")


def ip_attribute(
    key: str, required: bool = False, default: str | None = None, array: bool = False
) -> AttributeInput:
    _check_default(TextValidator(IP_SIZE), default)
    return AttributeInput(
        key=key,
        type=AttributeType.STRING,
        size=IP_SIZE,
        required=required,
        default=default,
        array=array,
        format=AttributeFormat.IP,
    )


def url_attribute(
    key: str, required: bool = False, default: str | None = None, array: bool = False
) -> AttributeInput:
    _check_default(TextValidator(URL_SIZE), default)
    return AttributeInput(
        key=key,
        type=AttributeType.STRING,
        size=URL_SIZE,
        required=required,
        default=default,
        array=array,
        format=AttributeFormat.URL,
    )


def integer_attribute(
    key: str,
    required: bool = False,
    default: int | None = None,
    array: bool = False,
    min: int | None = None,
    max: int | None = None,
) -> AttributeInput:
    minimum = INT_MIN if min is None else min
    maximum = INT_MAX if max is None else max
    _check_range(minimum, maximum)
    _check_default(RangeValidator(minimum, maximum, AttributeType.INTEGER), default)
    return AttributeInput(
        key=key,
        type=AttributeType.INTEGER,
        # 8 bytes once values no longer fit a 32-bit column
        size=8 if maximum > INT32_MAX else 4,
        required=required,
        default=default,
        array=array,
        format=AttributeFormat.INT_RANGE,
        format_options={"min": minimum, "max": maximum},
    )


def float_attribute(
    key: str,
    required: bool = False,
    default: float | None = None,
    array: bool = False,
    min: float | None = None,
    max: float | None = None,
) -> AttributeInput:
    minimum = FLOAT_MIN if min is None else min
    maximum = FLOAT_MAX if max is None else max
    _check_range(minimum, maximum)
    _check_default(RangeValidator(minimum, maximum, AttributeType.FLOAT), default)
    return AttributeInput(
        key=key,
        type=AttributeType.FLOAT,
        required=required,
        default=default,
        array=array,
        format=AttributeFormat.FLOAT_RANGE,
        format_options={"min": minimum, "max": maximum},
    )


def boolean_attribute(
    key: str, required: bool = False, default: bool | None = None, array: bool = False
) -> AttributeInput:
    if default is not None and not isinstance(default, bool):
        raise InvalidValue("Value must be a valid boolean", code="attribute_value_invalid")
    return AttributeInput(
        key=key,
        type=AttributeType.BOOLEAN,
        required=required,
        default=default,
        array=array,
    )


def datetime_attribute(
    key: str, required: bool = False, default: str | None = None, array: bool = False
) -> AttributeInput:
    if default is not None:
        try:
            datetime.fromisoformat(default)
        except (TypeError, ValueError):
            raise InvalidValue(
                "Value must be valid date in ISO 8601 format", code="attribute_value_invalid"
            ) from None
    return AttributeInput(
        key=key,
        type=AttributeType.DATETIME,
        required=required,
        default=default,
        array=array,
    )


def relationship_attribute(
    key: str,
    related_collection: str,
    relation_type: RelationType,
    two_way: bool = False,
    two_way_key: str | None = None,
    on_delete: OnDelete = OnDelete.SET_NULL,
) -> AttributeInput:
    return AttributeInput(
        key=key,
        type=AttributeType.RELATIONSHIP,
        relationship=RelationshipInput(
            related_collection=related_collection,
            relation_type=relation_type,
            two_way=two_way,
            two_way_key=two_way_key or related_collection,
            on_delete=on_delete,
        ),
    )
