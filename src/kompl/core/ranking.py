"""Ordering of accepted completion candidates.

Shorter names surface first; names of equal length are ordered lexically.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TypeVar

from kompl.core.types import Candidate

__all__ = ["sort_key", "dedupe", "rank", "rank_names"]

C = TypeVar("C", bound=Candidate)


def sort_key(text: str) -> tuple[int, str]:
    return len(text), text


def dedupe(candidates: Iterable[C]) -> list[C]:
    """Keep the first candidate seen for each text, preserving arrival order."""
    seen: set[str] = set()
    unique: list[C] = []
    for candidate in candidates:
        if candidate.text in seen:
            continue
        seen.add(candidate.text)
        unique.append(candidate)
    return unique


def rank(candidates: Iterable[C]) -> list[C]:
    """Deduplicate and order candidates by length, then lexically."""
    return sorted(dedupe(candidates), key=lambda candidate: sort_key(candidate.text))


def rank_names(names: Iterable[str]) -> list[str]:
    """Order plain strings the same way ``rank`` orders candidates."""
    return sorted(set(names), key=sort_key)
