"""Application layer: the completion engine, its providers and configuration."""

from kompl.application.config import CompletionConfig
from kompl.application.context import PythonContextParser
from kompl.application.documentation import documentation
from kompl.application.engine import SAME_CONTEXT, CompletionEngine

__all__ = [
    "CompletionConfig",
    "CompletionEngine",
    "PythonContextParser",
    "SAME_CONTEXT",
    "documentation",
]
