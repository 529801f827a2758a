"""
Public API for the block_registry package.
Usage:
    from block_registry import BlockRegistry
"""
from .registry import BlockRegistry
from .specs import BUILTIN_SPECS, LINE_COLUMNS

__all__ = ["BlockRegistry", "BUILTIN_SPECS", "LINE_COLUMNS"]
