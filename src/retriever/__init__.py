"""
Retriever: safe, defaulted access into nested data.

This package uses a src-layout. Import the package as `retriever`.
"""

from importlib.metadata import version

__version__ = version("retriever")

from .accessor import (
    DEFAULT_RETRIEVER,
    Retriever,
    access,
    end_logging,
    flush_logs,
    get,
    has,
    need,
    set_logger,
    start_logging,
)
from .config import RETRIEVER_CONFIG, RetrieverConfig
from .diagnostics import (
    CallbackSink,
    DiagnosticEvent,
    DiagnosticSink,
    DiagnosticStats,
    Diagnostics,
    MethodSink,
    sink_for,
)
from .errors import NOT_PROVIDED, InvalidLoggerError, RetrieverError
from .paths import MISSING, normalize, traverse
from .resolve import AccessResult, EventKind, effective_default, resolve
from .runtime import configure_logging, get_logger
from .types import TypeTag, classify

__all__ = [
    "__version__",
    "AccessResult",
    "CallbackSink",
    "DEFAULT_RETRIEVER",
    "DiagnosticEvent",
    "DiagnosticSink",
    "DiagnosticStats",
    "Diagnostics",
    "EventKind",
    "InvalidLoggerError",
    "MISSING",
    "MethodSink",
    "NOT_PROVIDED",
    "RETRIEVER_CONFIG",
    "Retriever",
    "RetrieverConfig",
    "RetrieverError",
    "TypeTag",
    "access",
    "classify",
    "configure_logging",
    "effective_default",
    "end_logging",
    "flush_logs",
    "get",
    "get_logger",
    "has",
    "need",
    "normalize",
    "resolve",
    "set_logger",
    "sink_for",
    "start_logging",
    "traverse",
]
