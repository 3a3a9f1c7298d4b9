"""Path normalization and traversal helpers for nested documents."""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from typing import TypeAlias

Key: TypeAlias = str | int
Path: TypeAlias = tuple[Key, ...]
PathExpr: TypeAlias = str | int | Sequence[Key]

_INDEX_GROUP = re.compile(r"\[(\d+)\]")


class _Missing:
    """Sentinel for values that are absent from a document.

    Plays the role of an ``undefined`` value: traversal returns it when a path
    cannot be resolved, and callers may store it in a document to mark a key
    that is present but carries no value.
    """

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: _Missing = _Missing()


def normalize(path: PathExpr, *, first_index_only: bool = False) -> Path:
    """Turn a path expression into a tuple of access keys.

    Strings are split on ``.`` after every bracketed index ``[N]`` has been
    rewritten into its own segment, so ``"a.b[0].c"`` becomes
    ``("a", "b", "0", "c")``. With ``first_index_only`` only the first bracket
    group is rewritten, matching the historical single-pass behaviour.

    Sequences of keys pass through unchanged, which keeps normalization
    idempotent. Empty segments are kept as ``""`` keys.
    """

    if isinstance(path, str):
        count = 1 if first_index_only else 0
        rewritten = _INDEX_GROUP.sub(_split_index, path, count=count)
        return tuple(rewritten.split("."))

    if isinstance(path, (bytes, bytearray)):
        return (path.decode("utf-8", errors="replace"),)

    if isinstance(path, Sequence):
        return tuple(path)

    return (path,)


def _split_index(match: re.Match[str]) -> str:
    # a leading group must not open the path with an empty key
    return f".{match[1]}" if match.start() else match[1]


def render(path: PathExpr) -> str:
    """Render a path expression as a dotted string for diagnostics."""

    if isinstance(path, str):
        return path
    return ".".join(str(key) for key in normalize(path))


def traverse(root: object, path: Path) -> object:
    """Resolve ``path`` through nested mappings and sequences.

    Returns ``MISSING`` as soon as any hop is unavailable: the current value is
    not a container, the key is absent, or the stored child is itself
    ``MISSING``. Never raises for absent or malformed intermediate values.
    """

    current: object = root
    for key in path:
        if isinstance(current, Mapping):
            current = _mapping_child(current, key)
        elif _is_indexable_sequence(current):
            current = _sequence_child(current, key)
        else:
            return MISSING

        if current is MISSING:
            return MISSING

    return current


def _mapping_child(mapping: Mapping[object, object], key: Key) -> object:
    for candidate in _key_candidates(key):
        try:
            if candidate in mapping:
                return mapping[candidate]
        except (LookupError, TypeError):
            continue
    return MISSING


def _key_candidates(key: Key) -> tuple[Key, ...]:
    if isinstance(key, str):
        if _is_digits(key):
            return (key, int(key))
        return (key,)
    if isinstance(key, int) and not isinstance(key, bool):
        return (key, str(key))
    return (key,)


def _sequence_child(sequence: Sequence[object], key: Key) -> object:
    index = _coerce_index(key)
    if index is None or index >= len(sequence):
        return MISSING
    try:
        return sequence[index]
    except (LookupError, TypeError):
        return MISSING


def _coerce_index(key: Key) -> int | None:
    if isinstance(key, str):
        return int(key) if _is_digits(key) else None
    if isinstance(key, int) and not isinstance(key, bool):
        return key if key >= 0 else None
    return None


def _is_digits(key: str) -> bool:
    return key.isascii() and key.isdigit()


def _is_indexable_sequence(value: object) -> bool:
    if isinstance(value, (str, bytes, bytearray)):
        return False
    return isinstance(value, Sequence)


__all__ = [
    "MISSING",
    "Key",
    "Path",
    "PathExpr",
    "normalize",
    "render",
    "traverse",
]
