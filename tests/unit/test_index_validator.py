"""Unit tests for IndexValidator."""

from dynaschema.domain.entities import Attribute, Index
from dynaschema.domain.validators import IndexValidator
from dynaschema.domain.value_objects import AttributeType, IndexType


def _attributes() -> list[Attribute]:
    return [
        Attribute(id="title", key="title", type=AttributeType.STRING, size=256),
        Attribute(id="body", key="body", type=AttributeType.STRING, size=1024),
        Attribute(id="tags", key="tags", type=AttributeType.STRING, size=64, array=True),
        Attribute(id="labels", key="labels", type=AttributeType.STRING, size=64, array=True),
        Attribute(id="score", key="score", type=AttributeType.FLOAT),
    ]


def _index(index_type: IndexType, attributes: list[str], lengths=None) -> Index:
    return Index(id="i", key="i", type=index_type, attributes=attributes, lengths=lengths or [])


def test_valid_key_index() -> None:
    validator = IndexValidator(_attributes(), 768)
    assert validator.is_valid(_index(IndexType.KEY, ["title", "score"], [256, None]))


def test_empty_attributes() -> None:
    validator = IndexValidator(_attributes(), 768)
    assert not validator.is_valid(_index(IndexType.KEY, []))
    assert validator.description == "No attributes provided for index"


def test_duplicate_attributes_case_insensitive() -> None:
    attributes = [*_attributes(), Attribute(id="Title", key="Title", type=AttributeType.STRING, size=8)]
    validator = IndexValidator(attributes, 768)
    assert not validator.is_valid(_index(IndexType.KEY, ["title", "Title"]))
    assert validator.description == "Duplicate attributes provided"


def test_fulltext_requires_strings() -> None:
    validator = IndexValidator(_attributes(), 768)
    assert not validator.is_valid(_index(IndexType.FULLTEXT, ["title", "score"]))
    assert "must be of type string" in validator.description


def test_only_one_array_attribute() -> None:
    validator = IndexValidator(_attributes(), 768)
    assert not validator.is_valid(_index(IndexType.KEY, ["tags", "labels"]))


def test_array_attribute_only_in_key_index() -> None:
    validator = IndexValidator(_attributes(), 768)
    assert not validator.is_valid(_index(IndexType.UNIQUE, ["tags"]))


def test_combined_length_exceeds_maximum() -> None:
    validator = IndexValidator(_attributes(), 768)
    assert not validator.is_valid(_index(IndexType.KEY, ["title", "body"], [256, 1024]))
    assert validator.description == "Index length is longer than the maximum: 768"


def test_requested_length_larger_than_size() -> None:
    validator = IndexValidator(_attributes(), 0)
    assert not validator.is_valid(_index(IndexType.KEY, ["title"], [300]))
    assert validator.description.startswith("Index length 300 is larger than the size for title")
