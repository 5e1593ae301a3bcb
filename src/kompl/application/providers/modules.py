"""
Module name provider: dotted module names found on the search path.
"""

from __future__ import annotations

import sys

from kompl.core.types import Candidate, CandidateOrigin, ContextKind
from kompl.infrastructure.search_path import SymbolIndex

from .base import CompletionRequest, filter_names

MODULE_SEPARATORS = "."


class ModuleNameProvider:
    """Completes module names from the index plus modules already imported.

    ``co.ab`` matches ``collections.abc`` because each dotted segment of the
    prefix may stand for a whole segment of the name.
    """

    name = "modules"

    def __init__(self, index: SymbolIndex) -> None:
        self._index = index

    def can_handle(self, request: CompletionRequest) -> bool:
        return request.context_kind in (None, ContextKind.EXPRESSION, ContextKind.CALL, ContextKind.IMPORT)

    def get_candidates(self, request: CompletionRequest) -> list[Candidate]:
        names = set(request.index_or(self._index).module_names())
        names.update(name for name in list(sys.modules) if not name.startswith("_"))
        return filter_names(
            request,
            request.prefix,
            sorted(names),
            CandidateOrigin.MODULE,
            MODULE_SEPARATORS,
            lookup=sys.modules.__getitem__,
        )
