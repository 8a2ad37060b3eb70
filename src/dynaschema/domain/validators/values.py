"""Default-value validators for attribute definitions."""

from typing import Any

from dynaschema.domain.value_objects import AttributeType


class TextValidator:
    """Accepts strings no longer than ``length`` (0 means unlimited)."""

    def __init__(self, length: int, min_length: int = 0) -> None:
        self._length = length
        self._min_length = min_length
        self.description = f"Value must be a valid string and no longer than {length} chars"

    def is_valid(self, value: Any) -> bool:
        if not isinstance(value, str):
            return False
        if len(value) < self._min_length:
            return False
        return not (self._length and len(value) > self._length)


class RangeValidator:
    """Accepts numbers of the given type inside ``[minimum, maximum]``."""

    def __init__(self, minimum: float, maximum: float, attribute_type: AttributeType) -> None:
        self._min = minimum
        self._max = maximum
        self._type = attribute_type
        self.description = f"Value must be a valid range between {minimum:,} and {maximum:,}"

    def is_valid(self, value: Any) -> bool:
        if isinstance(value, bool):
            return False
        if self._type == AttributeType.INTEGER:
            if not isinstance(value, int):
                return False
        elif not isinstance(value, (int, float)):
            return False
        return self._min <= value <= self._max
