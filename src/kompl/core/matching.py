"""Prefix matching policies for completion candidates.

Both policies answer the same question: could ``candidate`` be what the user
meant by typing ``prefix``? Neither scores; a candidate either matches or it
does not. Comparison is case-sensitive.

Policy A (``skip_fuzzy_matches``) lets the prefix drop whole segments of the
candidate, e.g. ``re_me`` matches ``remove_method``. A separator typed in the
prefix lines up with the separator that ends the skipped segment.

Policy B (``boundary_matches``) also skips forward to the next separator on a
mismatch, but never consumes a separator from the prefix while doing so: the
prefix is re-tried from the same position right after the candidate's
separator. ``remme`` matches ``remove_method`` while ``re_me`` does not.

Callers must not pass an empty prefix.
"""

from __future__ import annotations

from collections.abc import Callable, Container
from enum import Enum

__all__ = [
    "MatchPolicy",
    "SeparatorPredicate",
    "skip_fuzzy_matches",
    "boundary_matches",
    "separator_predicate",
    "matches",
]

SeparatorPredicate = Callable[[str], bool]


class MatchPolicy(str, Enum):
    """Selects which matching algorithm providers apply."""

    SKIP_FUZZY = "a"
    BOUNDARY = "b"

    @classmethod
    def parse(cls, value: str | "MatchPolicy" | None) -> "MatchPolicy":
        """Parse ``"a"``/``"b"`` (or the member names); ``None`` means the default."""
        if value is None:
            return cls.SKIP_FUZZY
        if isinstance(value, MatchPolicy):
            return value
        normalized = value.strip().lower()
        for policy in cls:
            if normalized in (policy.value, policy.name.lower(), policy.name.lower().replace("_", "-")):
                return policy
        raise ValueError(f"Unknown match policy: {value!r}")


def _can_start(prefix: str, candidate: str) -> bool:
    if not candidate:
        return False
    return candidate.startswith(prefix) or prefix[:1] == candidate[:1]


def skip_fuzzy_matches(prefix: str, candidate: str, separators: Container[str] = ".") -> bool:
    """Policy A: match ``prefix`` against ``candidate``, skipping whole segments.

    On a mismatch the candidate is advanced until one of ``separators``; that
    separator is consumed, and if the prefix is also sitting on a separator
    it is consumed as well, so ``re_me`` aligns with ``remove_method``.
    """
    if not _can_start(prefix, candidate):
        return False

    pre, sym = 0, 0
    skipping = False
    while True:
        if pre == len(prefix):
            return True
        if sym == len(candidate):
            return False
        if skipping:
            if candidate[sym] in separators:
                if prefix[pre] in separators:
                    pre += 1
                skipping = False
            sym += 1
        elif prefix[pre] == candidate[sym]:
            pre += 1
            sym += 1
        else:
            skipping = True
            sym += 1


def boundary_matches(prefix: str, candidate: str, is_separator: SeparatorPredicate) -> bool:
    """Policy B: skip to just past the next separator, keeping the prefix position.

    ``is_separator`` decides which candidate characters end a segment. The
    prefix is only ever consumed by literal equality.
    """
    if not _can_start(prefix, candidate):
        return False

    pre, sym = 0, 0
    skipping = False
    while True:
        if pre == len(prefix):
            return True
        if sym == len(candidate):
            return False
        if skipping:
            if is_separator(candidate[sym]):
                skipping = False
            sym += 1
        elif prefix[pre] == candidate[sym]:
            pre += 1
            sym += 1
        else:
            skipping = True
            sym += 1


def separator_predicate(separators: Container[str]) -> SeparatorPredicate:
    """Build a policy B predicate from a separator class."""

    def is_separator(char: str) -> bool:
        return char in separators

    return is_separator


def matches(
    prefix: str,
    candidate: str,
    policy: MatchPolicy = MatchPolicy.SKIP_FUZZY,
    separators: Container[str] = ".",
) -> bool:
    """Dispatch to the configured policy using one separator class for both."""
    if policy is MatchPolicy.BOUNDARY:
        return boundary_matches(prefix, candidate, separator_predicate(separators))
    return skip_fuzzy_matches(prefix, candidate, separators)
