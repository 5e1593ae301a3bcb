"""Per-candidate metadata (documentation presence, arity, type tag)."""

from __future__ import annotations

import inspect
from typing import Any

from kompl.core.types import CandidateMetadata, MetadataFlag

MISSING: Any = object()


def type_tag(value: Any) -> str:
    if inspect.ismodule(value):
        return "module"
    if inspect.isclass(value):
        return "class"
    if inspect.ismethod(value) or inspect.ismethoddescriptor(value):
        return "method"
    if callable(value):
        return "function"
    return "variable"


def arities(value: Any) -> tuple[int, ...] | None:
    """Possible positional argument counts, or None when unknown/not callable.

    A signature with defaults yields every count from the required ones up to
    the total; a ``*args`` parameter adds no upper bound beyond what is listed.
    """
    if not callable(value):
        return None
    try:
        signature = inspect.signature(value)
    except (TypeError, ValueError):
        return None
    required = 0
    total = 0
    for parameter in signature.parameters.values():
        if parameter.kind not in (parameter.POSITIONAL_ONLY, parameter.POSITIONAL_OR_KEYWORD):
            continue
        total += 1
        if parameter.default is parameter.empty:
            required += 1
    return tuple(range(required, total + 1))


def describe(value: Any, flags: frozenset[MetadataFlag], default_type: str | None = None) -> CandidateMetadata:
    """Collect the requested metadata for ``value``.

    ``MISSING`` stands for a candidate with no runtime object (module names
    from the index, keywords, resources); only its ``default_type`` is known.
    """
    if value is MISSING:
        return CandidateMetadata(
            has_doc=False if MetadataFlag.DOC in flags else None,
            type_tag=default_type if MetadataFlag.TYPE in flags else None,
        )
    return CandidateMetadata(
        has_doc=bool(inspect.getdoc(value)) if MetadataFlag.DOC in flags else None,
        arity=arities(value) if MetadataFlag.ARITY in flags else None,
        type_tag=type_tag(value) if MetadataFlag.TYPE in flags else None,
    )
