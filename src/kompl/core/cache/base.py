"""Base cache protocol and types.

This module re-exports the Cache protocol from protocols.py for convenience.
"""

# Re-export Cache protocol from protocols to avoid duplication
from kompl.core.protocols import Cache

__all__ = ["Cache"]
