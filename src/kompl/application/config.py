"""Configuration for the completion engine."""

import os
from dataclasses import dataclass, field, replace
from typing import Optional

from dotenv import load_dotenv

from kompl.core.matching import MatchPolicy
from kompl.core.types import MetadataFlag
from kompl.logger import get_logger
from kompl.utils import parse_bool, split_csv

logger = get_logger("config")


@dataclass(frozen=True)
class CompletionConfig:
    """Options threaded explicitly through every provider call."""

    # Matching
    policy: MatchPolicy = MatchPolicy.SKIP_FUZZY

    # Indexing
    scan_archives: bool = True
    layout: str = "python"

    # Extra candidate fields; empty means plain strings are returned
    metadata: frozenset[MetadataFlag] = field(default_factory=frozenset)

    # Provider names to consult; None enables every registered provider
    sources: Optional[frozenset[str]] = None

    def source_enabled(self, name: str) -> bool:
        return self.sources is None or name in self.sources

    def with_overrides(self, **changes) -> "CompletionConfig":
        """Return a copy with the given non-None fields replaced."""
        return replace(self, **{key: value for key, value in changes.items() if value is not None})

    @classmethod
    def from_env(cls) -> "CompletionConfig":
        """Build a config from ``KOMPL_*`` environment variables (and a ``.env`` file).

        Unknown values are logged and replaced by the defaults.
        """
        load_dotenv()
        defaults = cls()

        policy = defaults.policy
        raw_policy = os.getenv("KOMPL_MATCH_POLICY")
        if raw_policy:
            try:
                policy = MatchPolicy.parse(raw_policy)
            except ValueError:
                logger.warning(f"Ignoring unknown KOMPL_MATCH_POLICY={raw_policy!r}")

        metadata = defaults.metadata
        raw_metadata = split_csv(os.getenv("KOMPL_METADATA"))
        if raw_metadata:
            try:
                metadata = MetadataFlag.parse_many(raw_metadata)
            except ValueError:
                logger.warning(f"Ignoring unknown KOMPL_METADATA={raw_metadata!r}")

        sources = split_csv(os.getenv("KOMPL_SOURCES"))

        return cls(
            policy=policy,
            scan_archives=parse_bool(os.getenv("KOMPL_SCAN_ARCHIVES"), defaults.scan_archives),
            layout=os.getenv("KOMPL_LAYOUT", defaults.layout) or defaults.layout,
            metadata=metadata,
            sources=frozenset(sources) if sources else None,
        )
