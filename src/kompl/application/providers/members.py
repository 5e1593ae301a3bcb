"""
Scope member provider: names bound in the scope module and builtins.
"""

from __future__ import annotations

import builtins
import sys
from types import ModuleType
from typing import Any

from kompl.core.types import Candidate, CandidateOrigin, ContextKind
from kompl.logger import get_logger

from .base import CompletionRequest, filter_names, safe_dir, visible_names
from .keywords import IDENTIFIER_SEPARATORS

logger = get_logger("providers.members")


def find_module(name: str, namespace: dict[str, Any]) -> ModuleType | None:
    """Resolve ``name`` to an already imported module without importing anything.

    Aliases bound in ``namespace`` win over ``sys.modules`` entries.
    """
    head, _, rest = name.partition(".")
    bound = namespace.get(head)
    if isinstance(bound, ModuleType):
        module: Any = bound
        for part in rest.split(".") if rest else ():
            module = getattr(module, part, None)
        if isinstance(module, ModuleType):
            return module
    module = sys.modules.get(name)
    return module if isinstance(module, ModuleType) else None


class ScopeMemberProvider:
    """Completes unqualified names from the scope and ``module.member`` names.

    ``np.ar`` completes members of whatever module ``np`` is bound to in the
    scope (or of the imported module ``np``), and ``from os import <prefix>``
    completes members of ``os``.
    """

    name = "members"

    def can_handle(self, request: CompletionRequest) -> bool:
        kind = request.context_kind
        if kind is ContextKind.IMPORT_FROM:
            return request.context.target is not None
        return kind in (None, ContextKind.EXPRESSION, ContextKind.CALL)

    def get_candidates(self, request: CompletionRequest) -> list[Candidate]:
        namespace = request.namespace
        prefix = request.prefix

        if request.context_kind is ContextKind.IMPORT_FROM:
            module = find_module(request.context.target, namespace)
            if module is None:
                logger.debug(f"No imported module {request.context.target!r} for from-import completion")
                return []
            return self._module_members(request, module, prefix, qualifier="")

        if "." in prefix:
            qualifier, member_prefix = prefix.rsplit(".", 1)
            module = find_module(qualifier, namespace)
            if module is None:
                return []
            return self._module_members(request, module, member_prefix, qualifier=qualifier + ".")

        names = set(namespace) | set(dir(builtins))

        def lookup(name: str) -> Any:
            if name in namespace:
                return namespace[name]
            return getattr(builtins, name)

        return filter_names(
            request,
            prefix,
            visible_names(sorted(names), prefix),
            CandidateOrigin.MEMBER,
            IDENTIFIER_SEPARATORS,
            lookup=lookup,
        )

    def _module_members(
        self, request: CompletionRequest, module: ModuleType, prefix: str, qualifier: str
    ) -> list[Candidate]:
        return filter_names(
            request,
            prefix,
            visible_names(safe_dir(module), prefix),
            CandidateOrigin.MEMBER,
            IDENTIFIER_SEPARATORS,
            qualifier=qualifier,
            lookup=lambda name: getattr(module, name),
        )
