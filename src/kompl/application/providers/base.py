"""
Provider interfaces for completion candidates.

Every source of names (keywords, scope members, modules, attributes, indexed
types, resources) is a provider. The engine asks each enabled provider
whether it can serve the request and merges what they return.
"""

from __future__ import annotations

import builtins
from collections.abc import Callable, Container, Iterable
from dataclasses import dataclass, field
from types import ModuleType
from typing import Any, Protocol

from kompl.application.config import CompletionConfig
from kompl.application.providers.metadata import MISSING, describe
from kompl.core.matching import matches
from kompl.core.types import Candidate, CandidateOrigin, ContextHint, ContextKind
from kompl.infrastructure.search_path import SymbolIndex


@dataclass(slots=True)
class CompletionRequest:
    """Everything a provider needs to produce candidates for one keystroke."""

    prefix: str
    scope: ModuleType | None = None
    context: ContextHint | None = None
    config: CompletionConfig = field(default_factory=CompletionConfig)
    # Index matching the layout and archive settings of ``config``; None
    # leaves index-backed providers on the index they were built with
    index: SymbolIndex | None = None

    @property
    def namespace(self) -> dict[str, Any]:
        """Globals of the scope module, empty without a scope."""
        if self.scope is None:
            return {}
        return vars(self.scope)

    @property
    def context_kind(self) -> ContextKind | None:
        return None if self.context is None else self.context.kind

    def matches(self, prefix: str, candidate: str, separators: Container[str]) -> bool:
        """Apply the configured matching policy."""
        return matches(prefix, candidate, self.config.policy, separators)

    def index_or(self, default: SymbolIndex) -> SymbolIndex:
        return default if self.index is None else self.index


class CompletionProvider(Protocol):
    """Contract implemented by all candidate providers."""

    name: str

    def can_handle(self, request: CompletionRequest) -> bool:
        """Return ``True`` when this provider should produce candidates."""

        ...

    def get_candidates(self, request: CompletionRequest) -> list[Candidate]:
        """Return candidates matching ``request.prefix``."""

        ...


def resolve_name(name: str, namespace: dict[str, Any]) -> Any:
    """Resolve a dotted name by namespace lookup and ``getattr``; never evaluates code.

    Raises:
        LookupError: If any segment cannot be resolved
    """
    head, *rest = name.split(".")
    if head in namespace:
        value = namespace[head]
    elif hasattr(builtins, head):
        value = getattr(builtins, head)
    else:
        raise LookupError(name)
    for part in rest:
        try:
            value = getattr(value, part)
        except Exception as error:
            raise LookupError(name) from error
    return value


def filter_names(
    request: CompletionRequest,
    prefix: str,
    names: Iterable[str],
    origin: CandidateOrigin,
    separators: Container[str],
    qualifier: str = "",
    lookup: Callable[[str], Any] | None = None,
) -> list[Candidate]:
    """Match ``names`` against ``prefix`` and wrap hits as candidates.

    An empty ``prefix`` (e.g. the part after ``os.``) accepts every name.

    Args:
        request: The completion request (policy and metadata flags)
        prefix: The part of the typed prefix the names are matched against
        names: Raw names from the provider
        origin: Tag recorded on every candidate
        separators: Separator class for this kind of name
        qualifier: Text prepended to every produced candidate
        lookup: Returns the runtime object behind a name, used for metadata
    """
    flags = request.config.metadata
    match_all = not prefix
    candidates: list[Candidate] = []
    for name in names:
        if not match_all and not request.matches(prefix, name, separators):
            continue
        metadata = None
        if flags:
            value = MISSING
            if lookup is not None:
                try:
                    value = lookup(name)
                except Exception:
                    value = MISSING
            metadata = describe(value, flags, default_type=origin.value)
        candidates.append(Candidate(text=qualifier + name, origin=origin, metadata=metadata))
    return candidates


def visible_names(names: Iterable[str], prefix: str) -> list[str]:
    """Drop underscore-prefixed names unless the user is typing one."""
    if prefix.startswith("_"):
        return list(names)
    return [name for name in names if not name.startswith("_")]


def safe_dir(value: Any) -> list[str]:
    try:
        return dir(value)
    except Exception:
        return []
