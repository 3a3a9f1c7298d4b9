"""Type classification for resolved values and defaults."""

from __future__ import annotations

import enum
import numbers
from collections.abc import Sequence

from .paths import MISSING


class TypeTag(str, enum.Enum):
    """Closed set of structural type tags.

    Arrays and ``None`` get their own tags instead of falling into ``object``,
    so a list default only matches a list result.
    """

    ARRAY = "array"
    NULL = "null"
    OBJECT = "object"
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    UNDEFINED = "undefined"

    def __str__(self) -> str:
        return self.value


def classify(value: object) -> TypeTag:
    """Return the ``TypeTag`` for ``value``. Never raises."""

    if value is MISSING:
        return TypeTag.UNDEFINED
    if value is None:
        return TypeTag.NULL
    if isinstance(value, bool):
        return TypeTag.BOOLEAN
    if isinstance(value, str):
        return TypeTag.STRING
    if isinstance(value, numbers.Number):
        return TypeTag.NUMBER
    if isinstance(value, Sequence) and not isinstance(value, (bytes, bytearray)):
        return TypeTag.ARRAY
    return TypeTag.OBJECT


__all__ = ["TypeTag", "classify"]
