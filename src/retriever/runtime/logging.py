from __future__ import annotations

import logging
import os

from rich.console import Console
from rich.text import Text

from ..config import RETRIEVER_CONFIG

LOGGER_NAME = "retriever"

_EVENT_COLORS = {
    "dataMissing": "yellow",
    "typeMismatch": "magenta",
}
_LEVEL_STYLES = {
    "DEBUG": "dim",
    "INFO": "blue",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "bold red",
}


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the library logger, or one of its children."""

    if not name:
        return logging.getLogger(LOGGER_NAME)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


class _RetrieverRichConsoleHandler(logging.Handler):
    def __init__(self, *, console: Console | None = None) -> None:
        super().__init__()
        self._console = console or Console(stderr=True)

    @staticmethod
    def _format_location(record: logging.LogRecord) -> str:
        return f"[{os.path.basename(record.pathname)}:{record.lineno}]"

    @staticmethod
    def _format_message_text(record: logging.LogRecord) -> Text:
        message = record.getMessage()
        text = Text(message)
        event = getattr(record, "retriever_event", None)
        color = _EVENT_COLORS.get(str(event)) if event is not None else None
        if color is None:
            return text
        token = str(event)
        start = message.find(token)
        if start != -1:
            text.stylize(color, start, start + len(token))
        return text

    def emit(self, record: logging.LogRecord) -> None:
        try:
            line = Text()
            line.append(
                f"{record.levelname:<8}",
                style=_LEVEL_STYLES.get(record.levelname, ""),
            )
            line.append(" ")
            line.append(self._format_message_text(record))
            line.append(" ")
            line.append(self._format_location(record), style="dim")
            self._console.print(line, soft_wrap=True, highlight=False)
        except Exception:
            self.handleError(record)


def configure_logging(level: str | int | None = None) -> logging.Logger:
    """Install the rich console handler once and set the library log level."""

    root = logging.getLogger()
    if not any(isinstance(h, _RetrieverRichConsoleHandler) for h in root.handlers):
        root.addHandler(_RetrieverRichConsoleHandler())

    logger = get_logger()
    logger.setLevel(level if level is not None else RETRIEVER_CONFIG.log_level)
    return logger


__all__ = ["LOGGER_NAME", "configure_logging", "get_logger"]
