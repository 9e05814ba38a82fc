"""Utility functions for arborist.

This package provides utility modules:
- directory: Scoped working-directory changes
"""

from .directory import change_directory

__all__ = [
    "change_directory",
]
