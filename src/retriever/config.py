from __future__ import annotations

import os
from typing import Literal, cast

DiagnosticLevel = Literal["warn", "warning", "info", "debug", "error", "log"]

_DIAGNOSTIC_LEVELS: tuple[str, ...] = ("warn", "warning", "info", "debug", "error", "log")
_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off", ""}


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise ValueError(f"{name} must be a boolean flag, got {raw!r}")


def _env_level(name: str, default: DiagnosticLevel) -> DiagnosticLevel:
    raw = os.getenv(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value not in _DIAGNOSTIC_LEVELS:
        raise ValueError(
            f"{name} must be one of {', '.join(_DIAGNOSTIC_LEVELS)}; got {raw!r}"
        )
    return cast(DiagnosticLevel, value)


class RetrieverConfig:
    """Process-wide defaults, read from ``RETRIEVER_*`` environment variables."""

    def __init__(self) -> None:
        self.log_level: str = os.getenv("RETRIEVER_LOG_LEVEL", "WARNING").upper()
        self.default_level: DiagnosticLevel = _env_level(
            "RETRIEVER_DIAGNOSTIC_LEVEL", "warn"
        )
        self.summary_only: bool = _env_bool("RETRIEVER_SUMMARY_ONLY", False)
        self.first_index_only: bool = _env_bool("RETRIEVER_FIRST_INDEX_ONLY", False)

    def __repr__(self) -> str:
        return (
            f"RetrieverConfig(log_level={self.log_level!r}, "
            f"default_level={self.default_level!r}, "
            f"summary_only={self.summary_only!r}, "
            f"first_index_only={self.first_index_only!r})"
        )


RETRIEVER_CONFIG = RetrieverConfig()


__all__ = ["DiagnosticLevel", "RETRIEVER_CONFIG", "RetrieverConfig"]
