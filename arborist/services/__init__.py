"""Services used by the arborist orchestrator."""

from .process_runner import ProcessRunner
from .naming import IsolationNamer
from .git import RepositoryInspector, WorkspaceManager

__all__ = [
    "ProcessRunner",
    "IsolationNamer",
    "RepositoryInspector",
    "WorkspaceManager",
]
