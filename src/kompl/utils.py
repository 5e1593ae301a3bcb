"""
Utility functions for kompl.
"""

import os


def get_project_root() -> str:
    """
    Get the project root directory (parent of src/kompl).

    Returns:
        Absolute path to the project root directory
    """
    return os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


def parse_bool(value: str | None, default: bool) -> bool:
    """Interpret an environment-style flag ("true"/"1"/"yes"), falling back to ``default``."""
    if value is None or not value.strip():
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def split_csv(value: str | None) -> list[str]:
    """Split a comma-separated setting into trimmed, non-empty items."""
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]
