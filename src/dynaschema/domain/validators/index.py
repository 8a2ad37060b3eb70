"""Structural validation of index definitions."""

from dynaschema.domain.entities import Attribute, Index
from dynaschema.domain.value_objects import AttributeType, IndexType

DEFAULT_ARRAY_INDEX_LENGTH = 255


class IndexValidator:
    """Checks an index against the collection's attributes and the adapter's key limit.

    ``max_length`` is the maximum combined key length supported by the
    adapter; 0 disables the check.
    """

    def __init__(
        self,
        attributes: list[Attribute],
        max_length: int,
        array_index_length: int = DEFAULT_ARRAY_INDEX_LENGTH,
    ) -> None:
        self._attributes = {a.key: a for a in attributes}
        self._max_length = max_length
        self._array_index_length = array_index_length
        self.description = "Invalid index"

    def is_valid(self, index: Index) -> bool:
        return (
            self._check_empty(index)
            and self._check_attributes_exist(index)
            and self._check_duplicates(index)
            and self._check_fulltext(index)
            and self._check_array(index)
            and self._check_length(index)
        )

    def _check_empty(self, index: Index) -> bool:
        if not index.attributes:
            self.description = "No attributes provided for index"
            return False
        return True

    def _check_attributes_exist(self, index: Index) -> bool:
        for key in index.attributes:
            if key not in self._attributes:
                self.description = f'Invalid index attribute "{key}" not found'
                return False
        return True

    def _check_duplicates(self, index: Index) -> bool:
        seen: set[str] = set()
        for key in index.attributes:
            if key.lower() in seen:
                self.description = "Duplicate attributes provided"
                return False
            seen.add(key.lower())
        return True

    def _check_fulltext(self, index: Index) -> bool:
        if index.type != IndexType.FULLTEXT:
            return True
        for key in index.attributes:
            if self._attributes[key].type != AttributeType.STRING:
                self.description = (
                    f'Attribute "{key}" cannot be part of a FULLTEXT index, must be of type string'
                )
                return False
        return True

    def _check_array(self, index: Index) -> bool:
        arrays = [key for key in index.attributes if self._attributes[key].array]
        if len(arrays) > 1:
            self.description = "An index may only contain one array attribute"
            return False
        if arrays and index.type != IndexType.KEY:
            self.description = f'"{index.type}" index is forbidden on array attributes'
            return False
        return True

    def _check_length(self, index: Index) -> bool:
        if index.type == IndexType.FULLTEXT:
            return True

        total = 0
        for position, key in enumerate(index.attributes):
            attribute = self._attributes[key]
            requested = index.lengths[position] if position < len(index.lengths) else None
            if attribute.array:
                attribute_size = self._array_index_length
                length = self._array_index_length
            elif attribute.type == AttributeType.STRING:
                attribute_size = attribute.size
                length = requested if requested is not None else attribute_size
            elif attribute.type == AttributeType.FLOAT:
                attribute_size = length = 2
            else:
                attribute_size = length = 1

            if length > attribute_size:
                self.description = (
                    f"Index length {length} is larger than the size for {key}: {attribute_size}"
                )
                return False

            total += length
            if self._max_length > 0 and total > self._max_length:
                self.description = f"Index length is longer than the maximum: {self._max_length}"
                return False
        return True
