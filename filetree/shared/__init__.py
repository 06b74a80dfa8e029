"""
Shared utilities for filetree.

Provides access to common functionality used across filetree modules.
"""

from filetree.shared.gate import (
    GateLogger,
    ConfigLoader,
    PathUtils,
    get_logger,
)

__all__ = [
    "GateLogger",
    "ConfigLoader",
    "PathUtils",
    "get_logger",
]
