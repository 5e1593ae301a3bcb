"""Documentation lookup for a resolved symbol."""

from __future__ import annotations

import inspect
import sys
from typing import Any

from kompl.application.providers.base import resolve_name
from kompl.logger import get_logger

logger = get_logger("documentation")


def _resolve(symbol: str, namespace: dict[str, Any]) -> Any:
    try:
        return resolve_name(symbol, namespace)
    except LookupError:
        pass

    # Fall back to the longest already imported module prefix
    parts = symbol.split(".")
    for size in range(len(parts), 0, -1):
        module = sys.modules.get(".".join(parts[:size]))
        if module is None:
            continue
        value: Any = module
        for part in parts[size:]:
            value = getattr(value, part)
        return value
    raise LookupError(symbol)


def documentation(symbol: str, namespace: dict[str, Any] | None = None) -> str:
    """
    Render the signature and docstring of ``symbol``.

    Args:
        symbol: Dotted name, resolved through ``namespace``, builtins and
            imported modules
        namespace: Globals of the scope to resolve unqualified names in

    Returns:
        The rendered documentation, or an empty string when the symbol cannot
        be resolved
    """
    if not symbol or not symbol.strip():
        return ""
    try:
        value = _resolve(symbol.strip(), namespace or {})
    except Exception:
        logger.debug(f"No documentation for unresolvable symbol {symbol!r}")
        return ""

    header = symbol.strip()
    if callable(value):
        try:
            header += str(inspect.signature(value))
        except (TypeError, ValueError):
            pass
    doc = inspect.getdoc(value) or ""
    return f"{header}\n\n{doc}" if doc else header
