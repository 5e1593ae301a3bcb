"""Parsing of code surrounding the cursor into a completion hint.

A snippet is ordinary Python source in which the text being completed is
replaced by a marker (``__prefix__`` by default)::

    >>> PythonContextParser().parse("text.__prefix__").kind
    <ContextKind.ATTRIBUTE: 'attribute'>

Snippets cut off mid-expression are repaired by closing any open brackets
before parsing. Anything that still fails to parse, or has no marker, means
"no context".
"""

from __future__ import annotations

import ast

from kompl.core.types import ContextHint, ContextKind
from kompl.logger import get_logger

logger = get_logger("context")

DEFAULT_MARKER = "__prefix__"

_CLOSERS = {"(": ")", "[": "]", "{": "}"}


def _close_brackets(snippet: str) -> str:
    stack: list[str] = []
    quote: str | None = None
    for char in snippet:
        if quote:
            if char == quote:
                quote = None
        elif char in "'\"":
            quote = char
        elif char in _CLOSERS:
            stack.append(_CLOSERS[char])
        elif stack and char == stack[-1]:
            stack.pop()
    return snippet + "".join(reversed(stack))


class PythonContextParser:
    """Locates the marker in a snippet's syntax tree and classifies its position."""

    def __init__(self, marker: str = DEFAULT_MARKER) -> None:
        self.marker = marker

    def parse(self, snippet: str) -> ContextHint | None:
        if not snippet or self.marker not in snippet:
            return None

        tree = self._parse_tree(snippet)
        if tree is None:
            logger.debug(f"Unparseable context snippet: {snippet!r}")
            return None

        parents: dict[ast.AST, ast.AST] = {}
        for node in ast.walk(tree):
            for child in ast.iter_child_nodes(node):
                parents[child] = node

        for node in ast.walk(tree):
            kind, target = self._classify(node, parents)
            if kind is not None:
                return ContextHint(kind=kind, target=target, snippet=snippet)
        return None

    def _parse_tree(self, snippet: str) -> ast.AST | None:
        for source in (snippet, _close_brackets(snippet)):
            try:
                return ast.parse(source)
            except (SyntaxError, ValueError):
                continue
        return None

    def _classify(
        self, node: ast.AST, parents: dict[ast.AST, ast.AST]
    ) -> tuple[ContextKind | None, str | None]:
        marker = self.marker

        if isinstance(node, ast.Attribute) and node.attr == marker:
            return ContextKind.ATTRIBUTE, ast.unparse(node.value)

        if isinstance(node, ast.ImportFrom) and any(alias.name == marker for alias in node.names):
            module = "." * node.level + (node.module or "")
            return ContextKind.IMPORT_FROM, module or None

        if isinstance(node, ast.Import) and any(marker in alias.name for alias in node.names):
            return ContextKind.IMPORT, None

        if isinstance(node, ast.Constant) and isinstance(node.value, str) and marker in node.value:
            return ContextKind.STRING, None

        if isinstance(node, ast.Name) and node.id == marker:
            parent = parents.get(node)
            if isinstance(parent, ast.Call) and node is not parent.func:
                return ContextKind.CALL, ast.unparse(parent.func)
            return ContextKind.EXPRESSION, None

        return None, None
