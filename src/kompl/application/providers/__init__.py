"""
Candidate providers for the completion engine.

Each provider serves one source of names and implements the
``CompletionProvider`` protocol (``can_handle`` + ``get_candidates``).
"""

from kompl.infrastructure.search_path import SymbolIndex

from .attributes import AttributeProvider
from .base import CompletionProvider, CompletionRequest, filter_names, resolve_name
from .keywords import KeywordProvider
from .members import ScopeMemberProvider
from .modules import ModuleNameProvider
from .resources import ResourceProvider
from .indexed_types import IndexedTypeProvider


def default_providers(index: SymbolIndex) -> list[CompletionProvider]:
    """The provider set registered by a default engine, in merge order."""
    return [
        ScopeMemberProvider(),
        AttributeProvider(),
        KeywordProvider(),
        ModuleNameProvider(index),
        IndexedTypeProvider(index),
        ResourceProvider(index),
    ]


__all__ = [
    "CompletionProvider",
    "CompletionRequest",
    "filter_names",
    "resolve_name",
    "default_providers",
    "AttributeProvider",
    "KeywordProvider",
    "ScopeMemberProvider",
    "ModuleNameProvider",
    "IndexedTypeProvider",
    "ResourceProvider",
]
