"""
Keyword provider: reserved words and soft keywords of the language.
"""

from __future__ import annotations

import keyword

from kompl.core.types import Candidate, CandidateOrigin, ContextKind

from .base import CompletionRequest, filter_names

IDENTIFIER_SEPARATORS = "_"


class KeywordProvider:
    """Suggests Python keywords wherever an expression or statement may start."""

    name = "keywords"

    def __init__(self) -> None:
        self._keywords = tuple(sorted(set(keyword.kwlist) | set(keyword.softkwlist)))

    def can_handle(self, request: CompletionRequest) -> bool:
        return request.context_kind in (None, ContextKind.EXPRESSION, ContextKind.CALL)

    def get_candidates(self, request: CompletionRequest) -> list[Candidate]:
        if "." in request.prefix:
            return []
        return filter_names(
            request, request.prefix, self._keywords, CandidateOrigin.KEYWORD, IDENTIFIER_SEPARATORS
        )
