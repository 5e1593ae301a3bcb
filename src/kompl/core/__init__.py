"""Core building blocks: matching, ranking, value types and caching."""

from kompl.core.matching import MatchPolicy, boundary_matches, matches, skip_fuzzy_matches
from kompl.core.ranking import rank, rank_names, sort_key
from kompl.core.types import (
    Candidate,
    CandidateMetadata,
    CandidateOrigin,
    ContextHint,
    ContextKind,
    MetadataFlag,
)

__all__ = [
    "MatchPolicy",
    "skip_fuzzy_matches",
    "boundary_matches",
    "matches",
    "rank",
    "rank_names",
    "sort_key",
    "Candidate",
    "CandidateMetadata",
    "CandidateOrigin",
    "ContextHint",
    "ContextKind",
    "MetadataFlag",
]
