"""Diagnostics for missing data and type mismatches.

A ``Diagnostics`` context collects ``DiagnosticEvent``s produced by accessor
calls and hands them to a ``DiagnosticSink``. It runs in one of two modes:

- immediate: ``set_logger`` forwards every event to the sink as it happens.
- buffered: ``start_logging`` opens a session that counts events and buffers
  rendered lines until ``flush_logs`` or ``end_logging`` reports them.

A context without a sink is valid; every operation on it is a no-op.
"""

from __future__ import annotations

import json
import logging
import threading
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Literal

from pydantic import BaseModel, ConfigDict, computed_field

from .config import RETRIEVER_CONFIG
from .errors import InvalidLoggerError
from .resolve import EventKind
from .runtime.logging import get_logger

logger = get_logger("diagnostics")

_METHOD_ALIASES: dict[str, tuple[str, ...]] = {
    "warn": ("warning", "warn"),
    "warning": ("warning", "warn"),
    "log": ("log", "info"),
}


class DiagnosticEvent(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    event: Literal["dataMissing", "typeMismatch"]
    path: str
    default: str

    def render(self) -> str:
        return f"event: {self.event}, path: {self.path}, default: {self.default}"


class DiagnosticStats(BaseModel):
    model_config = ConfigDict(extra="forbid")

    data_missing: int = 0
    type_mismatch: int = 0

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total(self) -> int:
        return self.data_missing + self.type_mismatch

    def count(self, event: EventKind) -> None:
        if event is EventKind.DATA_MISSING:
            self.data_missing += 1
        elif event is EventKind.TYPE_MISMATCH:
            self.type_mismatch += 1

    def summary(self) -> str:
        return (
            f"Warnings: {self.total}, dataMissing: {self.data_missing}, "
            f"typeMismatch: {self.type_mismatch}"
        )


def render_default(value: object) -> str:
    """Render a default value for a diagnostic line."""

    try:
        return json.dumps(value, sort_keys=True, default=repr)
    except (TypeError, ValueError):
        return repr(value)


class DiagnosticSink(ABC):
    """Destination for rendered diagnostic messages."""

    @abstractmethod
    def emit(self, level: str, message: str) -> None: ...


class MethodSink(DiagnosticSink):
    """Sink for logger objects exposing one method per severity.

    ``level`` picks the method by name (``warn``, ``info``, ``error`` ...).
    ``warn`` and ``warning`` stand in for each other so both console-style
    loggers and ``logging.Logger`` instances work. Unknown levels are dropped.
    """

    def __init__(self, target: object, default_method: str = "warn") -> None:
        if self._resolve(target, default_method) is None:
            raise InvalidLoggerError(
                target, f"no callable {default_method!r} method"
            )
        self.target = target
        self.default_method = default_method

    @staticmethod
    def _resolve(target: object, name: str) -> Callable[..., object] | None:
        if name == "log" and isinstance(target, logging.Logger):
            # Logger.log takes the level as its first argument
            name = "info"
        for candidate in _METHOD_ALIASES.get(name, (name,)):
            method = getattr(target, candidate, None)
            if callable(method):
                return method
        return None

    def emit(self, level: str, message: str) -> None:
        method = self._resolve(self.target, level or self.default_method)
        if method is None:
            return
        method(message)


class CallbackSink(DiagnosticSink):
    """Sink for a single logging callback taking the message."""

    def __init__(self, callback: Callable[[str], object]) -> None:
        if not callable(callback):
            raise InvalidLoggerError(callback, "callback is not callable")
        self.callback = callback

    def emit(self, level: str, message: str) -> None:
        self.callback(message)


def sink_for(target: object) -> DiagnosticSink | None:
    """Adapt a logger-like object into a sink.

    Returns ``None`` for ``None`` and for objects that are neither
    method-style loggers nor callables.
    """

    if target is None:
        return None
    if isinstance(target, DiagnosticSink):
        return target
    try:
        if MethodSink._resolve(target, "warn") is not None:
            return MethodSink(target)
        return CallbackSink(target)  # type: ignore[arg-type]
    except InvalidLoggerError as exc:
        logger.debug("diagnostics disabled: %s", exc)
        return None


class Diagnostics:
    """Owns a sink plus the counters and buffer of one logging session."""

    def __init__(self, sink: DiagnosticSink | None = None, *, buffered: bool = True) -> None:
        self._lock = threading.Lock()
        self._sink = sink
        self._buffered = buffered
        self._enabled = sink is not None
        self._stats = DiagnosticStats()
        self._events: list[DiagnosticEvent] = []

    @property
    def sink(self) -> DiagnosticSink | None:
        return self._sink

    @property
    def enabled(self) -> bool:
        return self._enabled and self._sink is not None

    @property
    def buffered(self) -> bool:
        return self._buffered

    @property
    def stats(self) -> DiagnosticStats:
        with self._lock:
            return self._stats.model_copy()

    @property
    def events(self) -> tuple[DiagnosticEvent, ...]:
        with self._lock:
            return tuple(self._events)

    def set_logger(self, target: object) -> None:
        """Forward every future event straight to ``target``.

        Passing ``None`` or an unusable logger disables diagnostics.
        """

        with self._lock:
            self._sink = sink_for(target)
            self._buffered = False
            self._enabled = self._sink is not None
            self._reset()

    def start_logging(self, target: object) -> None:
        """Open a buffered session, resetting counters and the log buffer.

        Ignored when ``target`` cannot be used as a logger.
        """

        sink = sink_for(target)
        if sink is None:
            return
        with self._lock:
            self._sink = sink
            self._buffered = True
            self._enabled = True
            self._reset()

    def end_logging(self, summary_only: bool | None = None) -> None:
        """Close the session and report whatever it buffered."""

        with self._lock:
            self._enabled = False
        self.flush_logs(summary_only)

    def flush_logs(self, summary_only: bool | None = None) -> None:
        """Emit the summary line and, unless ``summary_only``, the event log.

        Clears counters and buffer afterwards. No-op without a sink or when
        nothing was recorded.
        """

        if summary_only is None:
            summary_only = RETRIEVER_CONFIG.summary_only
        with self._lock:
            sink = self._sink
            if sink is None or not self._events:
                return
            summary = self._stats.summary()
            lines = [event.render() for event in self._events]
            self._reset()

        self._emit(sink, RETRIEVER_CONFIG.default_level, summary)
        if not summary_only:
            self._emit(sink, RETRIEVER_CONFIG.default_level, "\n".join(lines))

    def record(
        self,
        event: EventKind,
        path: str,
        default: object,
        level: str | None = None,
    ) -> None:
        """Record ``event`` for ``path``; no-op while diagnostics are disabled."""

        if event is EventKind.NONE or not self.enabled:
            return

        entry = DiagnosticEvent(
            event=event.value, path=path, default=render_default(default)
        )
        logger.debug(entry.render(), extra={"retriever_event": entry.event})

        with self._lock:
            sink = self._sink
            self._stats.count(event)
            if self._buffered:
                self._events.append(entry)
                return

        if sink is not None:
            self._emit(sink, level or RETRIEVER_CONFIG.default_level, entry.render())

    def _reset(self) -> None:
        self._stats = DiagnosticStats()
        self._events = []

    @staticmethod
    def _emit(sink: DiagnosticSink, level: str, message: str) -> None:
        try:
            sink.emit(level, message)
        except Exception:
            logger.debug("diagnostics sink %r failed", sink, exc_info=True)


__all__ = [
    "CallbackSink",
    "DiagnosticEvent",
    "DiagnosticSink",
    "DiagnosticStats",
    "Diagnostics",
    "MethodSink",
    "render_default",
    "sink_for",
]
