"""
Attribute provider: members of a live object reached from the scope.
"""

from __future__ import annotations

from types import ModuleType

from kompl.core.types import Candidate, CandidateOrigin, ContextKind
from kompl.logger import get_logger

from .base import CompletionRequest, filter_names, resolve_name, safe_dir, visible_names
from .keywords import IDENTIFIER_SEPARATORS

logger = get_logger("providers.attributes")


class AttributeProvider:
    """Completes ``obj.<prefix>`` using ``dir()`` of the object ``obj`` names.

    The object comes either from an attribute context (the snippet around the
    cursor was ``obj.__prefix__``) or from a qualified prefix ``obj.attr``.
    Modules are left to the scope member provider.
    """

    name = "attributes"

    def can_handle(self, request: CompletionRequest) -> bool:
        if request.context_kind is ContextKind.ATTRIBUTE:
            return request.context.target is not None
        return request.context_kind in (None, ContextKind.EXPRESSION, ContextKind.CALL) and "." in request.prefix

    def get_candidates(self, request: CompletionRequest) -> list[Candidate]:
        if request.context_kind is ContextKind.ATTRIBUTE:
            target, member_prefix, qualifier = request.context.target, request.prefix, ""
        else:
            target, member_prefix = request.prefix.rsplit(".", 1)
            qualifier = target + "."

        try:
            value = resolve_name(target, request.namespace)
        except LookupError:
            logger.debug(f"Cannot resolve {target!r} in scope for attribute completion")
            return []
        if isinstance(value, ModuleType):
            return []

        return filter_names(
            request,
            member_prefix,
            visible_names(safe_dir(value), member_prefix),
            CandidateOrigin.ATTRIBUTE,
            IDENTIFIER_SEPARATORS,
            qualifier=qualifier,
            lookup=lambda name: getattr(value, name),
        )
