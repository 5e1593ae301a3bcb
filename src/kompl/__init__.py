"""kompl: fuzzy identifier completion over a cached search-path index."""

from kompl.application import SAME_CONTEXT, CompletionConfig, CompletionEngine
from kompl.core.matching import MatchPolicy
from kompl.core.types import Candidate, ContextHint, ContextKind, MetadataFlag

__version__ = "0.1.0"

__all__ = [
    "CompletionEngine",
    "CompletionConfig",
    "SAME_CONTEXT",
    "MatchPolicy",
    "Candidate",
    "ContextHint",
    "ContextKind",
    "MetadataFlag",
]
