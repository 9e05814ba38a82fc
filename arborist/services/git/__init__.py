"""Git-related services for arborist."""

from .inspector import RepositoryInspector
from .worktrees import WorkspaceManager

__all__ = [
    "RepositoryInspector",
    "WorkspaceManager",
]
