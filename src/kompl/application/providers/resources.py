"""
Resource provider: non-code files on the search path, offered inside strings.
"""

from __future__ import annotations

from kompl.core.types import Candidate, CandidateOrigin, ContextKind
from kompl.infrastructure.search_path import SymbolIndex

from .base import CompletionRequest, filter_names

RESOURCE_SEPARATORS = "/"


class ResourceProvider:
    """Completes resource paths when the cursor sits in a string literal."""

    name = "resources"

    def __init__(self, index: SymbolIndex) -> None:
        self._index = index

    def can_handle(self, request: CompletionRequest) -> bool:
        return request.context_kind is ContextKind.STRING

    def get_candidates(self, request: CompletionRequest) -> list[Candidate]:
        return filter_names(
            request,
            request.prefix,
            dict.fromkeys(request.index_or(self._index).resources()),
            CandidateOrigin.RESOURCE,
            RESOURCE_SEPARATORS,
        )
