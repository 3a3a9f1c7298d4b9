from __future__ import annotations


class RetrieverError(Exception):
    """Base class for retriever errors."""


class InvalidLoggerError(RetrieverError, TypeError):
    """Raised when a diagnostics sink is built around an unusable logger."""

    def __init__(self, logger: object, reason: str) -> None:
        self.logger = logger
        self.reason = reason
        super().__init__(f"cannot use {type(logger).__name__} as a logger: {reason}")


class _NotProvided:
    """Marker for an omitted default argument."""

    def __repr__(self) -> str:
        return "NOT_PROVIDED"


NOT_PROVIDED = _NotProvided()


__all__ = ["InvalidLoggerError", "NOT_PROVIDED", "RetrieverError"]
