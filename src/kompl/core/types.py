"""Value types shared by the completion layers."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class CandidateOrigin(str, Enum):
    """Which provider produced a candidate."""

    KEYWORD = "keyword"
    MEMBER = "member"
    MODULE = "module"
    ATTRIBUTE = "attribute"
    TYPE = "type"
    RESOURCE = "resource"


class MetadataFlag(str, Enum):
    """Extra per-candidate fields a caller can ask for."""

    DOC = "doc"
    ARITY = "arity"
    TYPE = "type"

    @classmethod
    def parse_many(cls, values: list[str]) -> frozenset["MetadataFlag"]:
        flags = set()
        for value in values:
            flags.add(cls(value.strip().lower()))
        return frozenset(flags)


@dataclass(frozen=True, slots=True)
class CandidateMetadata:
    """Optional details about a candidate; unrequested fields stay ``None``."""

    has_doc: bool | None = None
    arity: tuple[int, ...] | None = None
    type_tag: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.has_doc is not None:
            data["doc"] = self.has_doc
        if self.arity is not None:
            data["arity"] = list(self.arity)
        if self.type_tag is not None:
            data["type"] = self.type_tag
        return data


@dataclass(frozen=True, slots=True)
class Candidate:
    """A completable name together with the provider that produced it."""

    text: str
    origin: CandidateOrigin
    metadata: CandidateMetadata | None = field(default=None, compare=False)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"candidate": self.text, "origin": self.origin.value}
        if self.metadata is not None:
            data.update(self.metadata.to_dict())
        return data


class ContextKind(str, Enum):
    """What the code around the cursor expects at the completion point."""

    ATTRIBUTE = "attribute"
    CALL = "call"
    IMPORT = "import"
    IMPORT_FROM = "import_from"
    STRING = "string"
    EXPRESSION = "expression"


@dataclass(frozen=True, slots=True)
class ContextHint:
    """Structured result of parsing a snippet around the cursor.

    Attributes:
        kind: Shape of the completion site
        target: Source text of the related expression (the object for
            ``obj.<prefix>``, the callee for calls, the module for
            ``from x import <prefix>``); ``None`` when there is none
        snippet: The original snippet the hint was parsed from
    """

    kind: ContextKind
    target: str | None = None
    snippet: str | None = None
