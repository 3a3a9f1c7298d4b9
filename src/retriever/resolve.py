"""Default resolution policy for accessor calls."""

from __future__ import annotations

import enum
from collections.abc import Mapping
from dataclasses import dataclass

from .errors import NOT_PROVIDED
from .paths import MISSING
from .types import TypeTag, classify

EMPTY_KEY = "__isEmpty"


class EventKind(str, enum.Enum):
    NONE = "none"
    DATA_MISSING = "dataMissing"
    TYPE_MISMATCH = "typeMismatch"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class AccessResult:
    value: object
    type_tag: TypeTag
    event: EventKind = EventKind.NONE

    @property
    def ok(self) -> bool:
        return self.event is EventKind.NONE


def empty_sentinel() -> dict[str, bool]:
    """Return a fresh ``{"__isEmpty": True}`` marker."""

    return {EMPTY_KEY: True}


def is_empty_sentinel(value: object) -> bool:
    return isinstance(value, Mapping) and dict(value) == {EMPTY_KEY: True}


def effective_default(default: object = NOT_PROVIDED) -> tuple[object, TypeTag]:
    """Apply the omitted and empty-mapping substitutions to ``default``.

    An omitted default becomes ``""``. An empty mapping becomes the
    ``{"__isEmpty": True}`` sentinel; only real keys count, so attributes a
    ``dict`` subclass defines on its class do not make it non-empty.
    """

    if default is NOT_PROVIDED or default is MISSING:
        return "", TypeTag.STRING

    tag = classify(default)
    if tag is TypeTag.OBJECT and isinstance(default, Mapping) and len(default) == 0:
        return empty_sentinel(), tag
    return default, tag


def resolve(raw: object, default: object = NOT_PROVIDED) -> AccessResult:
    """Decide the final value for a traversal result ``raw``.

    A present ``raw`` whose tag equals the effective default's tag is returned
    as is. A present ``raw`` with another tag, ``None`` included, yields the
    default with ``typeMismatch``. An absent ``raw`` yields the default with
    ``dataMissing``.
    """

    fallback, default_tag = effective_default(default)
    raw_tag = classify(raw)

    if raw_tag is TypeTag.UNDEFINED:
        return AccessResult(fallback, default_tag, EventKind.DATA_MISSING)
    if raw_tag is not default_tag:
        return AccessResult(fallback, default_tag, EventKind.TYPE_MISMATCH)
    return AccessResult(raw, raw_tag)


def exists(raw: object) -> bool:
    return classify(raw) not in (TypeTag.UNDEFINED, TypeTag.NULL)


__all__ = [
    "EMPTY_KEY",
    "AccessResult",
    "EventKind",
    "effective_default",
    "empty_sentinel",
    "exists",
    "is_empty_sentinel",
    "resolve",
]
