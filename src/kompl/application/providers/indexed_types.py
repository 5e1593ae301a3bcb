"""
Indexed type provider: fully qualified names from the grouped index view.
"""

from __future__ import annotations

from kompl.core.types import Candidate, CandidateOrigin, ContextKind
from kompl.infrastructure.search_path import SymbolIndex

from .base import CompletionRequest, filter_names
from .modules import MODULE_SEPARATORS


class IndexedTypeProvider:
    """Completes compiled/stub entry names scoped by their first segment.

    Without a ``.`` in the prefix the top-level segments themselves are
    offered; once the first segment is typed in full, the names grouped
    under it are matched against the whole prefix.
    """

    name = "types"

    def __init__(self, index: SymbolIndex) -> None:
        self._index = index

    def can_handle(self, request: CompletionRequest) -> bool:
        return request.context_kind in (None, ContextKind.EXPRESSION, ContextKind.CALL, ContextKind.IMPORT)

    def get_candidates(self, request: CompletionRequest) -> list[Candidate]:
        grouped = request.index_or(self._index).grouped_names()
        prefix = request.prefix
        if "." in prefix:
            names = grouped.get(prefix.split(".", 1)[0], frozenset())
        else:
            names = {head for head in grouped if head} | grouped.get("", frozenset())
        return filter_names(request, prefix, sorted(names), CandidateOrigin.TYPE, MODULE_SEPARATORS)
