"""Core functionality for arborist."""

from .orchestrator import Arborist

__all__ = ["Arborist"]
