from collections.abc import Generator
from contextlib import contextmanager
from dataclasses import dataclass, field

import pytest

from .accessor import DEFAULT_RETRIEVER
from .config import RETRIEVER_CONFIG, DiagnosticLevel
from .diagnostics import Diagnostics, DiagnosticSink


@dataclass
class RecordingSink(DiagnosticSink):
    """Sink that keeps every emitted ``(level, message)`` pair."""

    records: list[tuple[str, str]] = field(default_factory=list)

    def emit(self, level: str, message: str) -> None:
        self.records.append((level, message))

    @property
    def messages(self) -> list[str]:
        return [message for _, message in self.records]

    def clear(self) -> None:
        self.records.clear()


@dataclass(frozen=True)
class _RetrieverConfigSnapshot:
    log_level: str
    default_level: DiagnosticLevel
    summary_only: bool
    first_index_only: bool

    @classmethod
    def capture(cls) -> "_RetrieverConfigSnapshot":
        return cls(
            log_level=RETRIEVER_CONFIG.log_level,
            default_level=RETRIEVER_CONFIG.default_level,
            summary_only=RETRIEVER_CONFIG.summary_only,
            first_index_only=RETRIEVER_CONFIG.first_index_only,
        )

    def restore(self) -> None:
        RETRIEVER_CONFIG.log_level = self.log_level
        RETRIEVER_CONFIG.default_level = self.default_level
        RETRIEVER_CONFIG.summary_only = self.summary_only
        RETRIEVER_CONFIG.first_index_only = self.first_index_only


def _apply_test_config() -> None:
    RETRIEVER_CONFIG.default_level = "warn"
    RETRIEVER_CONFIG.summary_only = False
    RETRIEVER_CONFIG.first_index_only = False


@contextmanager
def retriever_test_env() -> Generator[Diagnostics, None, None]:
    """Give the module-level API a fresh diagnostics context and default config."""

    snapshot = _RetrieverConfigSnapshot.capture()
    previous = DEFAULT_RETRIEVER.diagnostics
    diagnostics = Diagnostics()
    DEFAULT_RETRIEVER.diagnostics = diagnostics
    _apply_test_config()
    try:
        yield diagnostics
    finally:
        DEFAULT_RETRIEVER.diagnostics = previous
        snapshot.restore()


@pytest.fixture()
def retriever_diagnostics() -> Generator[Diagnostics, None, None]:
    """Isolate the module-level diagnostics state for the test."""
    with retriever_test_env() as diagnostics:
        yield diagnostics


@pytest.fixture()
def recording_sink() -> RecordingSink:
    return RecordingSink()
