"""Attribute types, formats and relationship options."""

from enum import StrEnum


class AttributeType(StrEnum):
    """Supported attribute value types."""

    STRING = "string"
    INTEGER = "integer"
    FLOAT = "double"
    BOOLEAN = "boolean"
    DATETIME = "datetime"
    RELATIONSHIP = "relationship"


class AttributeFormat(StrEnum):
    """Formats layered on top of a base attribute type."""

    EMAIL = "email"
    ENUM = "enum"
    IP = "ip"
    URL = "url"
    INT_RANGE = "intRange"
    FLOAT_RANGE = "floatRange"

    def supports(self, attribute_type: AttributeType) -> bool:
        """Whether this format can be applied to ``attribute_type``."""
        return _FORMAT_TYPES[self] == attribute_type


_FORMAT_TYPES: dict[AttributeFormat, AttributeType] = {
    AttributeFormat.EMAIL: AttributeType.STRING,
    AttributeFormat.ENUM: AttributeType.STRING,
    AttributeFormat.IP: AttributeType.STRING,
    AttributeFormat.URL: AttributeType.STRING,
    AttributeFormat.INT_RANGE: AttributeType.INTEGER,
    AttributeFormat.FLOAT_RANGE: AttributeType.FLOAT,
}


class RelationType(StrEnum):
    """Cardinality of a relationship."""

    ONE_TO_ONE = "oneToOne"
    ONE_TO_MANY = "oneToMany"
    MANY_TO_ONE = "manyToOne"
    MANY_TO_MANY = "manyToMany"


class RelationSide(StrEnum):
    """Which collection of a two-way relationship owns the attribute."""

    PARENT = "parent"
    CHILD = "child"


class OnDelete(StrEnum):
    """Behavior of related documents when a document is deleted."""

    CASCADE = "cascade"
    RESTRICT = "restrict"
    SET_NULL = "setNull"


class IndexType(StrEnum):
    """Supported index types."""

    KEY = "key"
    UNIQUE = "unique"
    FULLTEXT = "fulltext"


class IndexOrder(StrEnum):
    """Sort order of an indexed attribute."""

    ASC = "asc"
    DESC = "desc"
