from retriever.testing import recording_sink, retriever_diagnostics

__all__ = ["recording_sink", "retriever_diagnostics"]
