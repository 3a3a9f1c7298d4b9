"""Public accessor API."""

from __future__ import annotations

from .config import RETRIEVER_CONFIG
from .diagnostics import Diagnostics
from .errors import NOT_PROVIDED
from .paths import PathExpr, normalize, render, traverse
from .resolve import AccessResult, EventKind, resolve
from .resolve import exists as _exists


class Retriever:
    """Safe, defaulted access into nested data with its own diagnostics.

    Each instance owns a ``Diagnostics`` context, so separate retrievers never
    share counters or log buffers.
    """

    def __init__(self, diagnostics: Diagnostics | None = None) -> None:
        self.diagnostics = diagnostics if diagnostics is not None else Diagnostics()

    def access(
        self, root: object, path: PathExpr, default: object = NOT_PROVIDED
    ) -> AccessResult:
        """Resolve ``path`` and return the full ``AccessResult`` without logging."""

        keys = normalize(path, first_index_only=RETRIEVER_CONFIG.first_index_only)
        return resolve(traverse(root, keys), default)

    def get(
        self,
        root: object,
        path: PathExpr,
        default: object = NOT_PROVIDED,
        *,
        should_warn: bool = False,
        level: str | None = None,
    ) -> object:
        """Return the value at ``path``, or the effective default.

        Silent unless ``should_warn`` is set.
        """

        result = self.access(root, path, default)
        if should_warn:
            self._record(result, path, level)
        return result.value

    def need(
        self,
        root: object,
        path: PathExpr,
        default: object = NOT_PROVIDED,
        level: str | None = None,
    ) -> object:
        """Like ``get`` but always reports missing data and type mismatches."""

        result = self.access(root, path, default)
        self._record(result, path, level)
        return result.value

    def has(self, root: object, path: PathExpr, *, should_warn: bool = False) -> bool:
        """Return whether ``path`` resolves to a value that is not ``None``."""

        keys = normalize(path, first_index_only=RETRIEVER_CONFIG.first_index_only)
        found = _exists(traverse(root, keys))
        if not found and should_warn:
            self.diagnostics.record(EventKind.DATA_MISSING, render(path), False)
        return found

    def set_logger(self, logger: object) -> None:
        self.diagnostics.set_logger(logger)

    def start_logging(self, logger: object) -> None:
        self.diagnostics.start_logging(logger)

    def end_logging(self, summary_only: bool | None = None) -> None:
        self.diagnostics.end_logging(summary_only)

    def flush_logs(self, summary_only: bool | None = None) -> None:
        self.diagnostics.flush_logs(summary_only)

    def _record(self, result: AccessResult, path: PathExpr, level: str | None) -> None:
        if result.ok:
            return
        self.diagnostics.record(result.event, render(path), result.value, level)


DEFAULT_RETRIEVER = Retriever()

access = DEFAULT_RETRIEVER.access
get = DEFAULT_RETRIEVER.get
need = DEFAULT_RETRIEVER.need
has = DEFAULT_RETRIEVER.has
set_logger = DEFAULT_RETRIEVER.set_logger
start_logging = DEFAULT_RETRIEVER.start_logging
end_logging = DEFAULT_RETRIEVER.end_logging
flush_logs = DEFAULT_RETRIEVER.flush_logs


__all__ = [
    "DEFAULT_RETRIEVER",
    "Retriever",
    "access",
    "end_logging",
    "flush_logs",
    "get",
    "has",
    "need",
    "set_logger",
    "start_logging",
]
