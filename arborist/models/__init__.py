"""Data models for arborist."""

from .repository import RepositoryInfo, WorkspaceStatus
from .isolation import IsolationHandle
from .worktree import WorktreeInfo
from .process import ProcessResult

__all__ = [
    "RepositoryInfo",
    "WorkspaceStatus",
    "IsolationHandle",
    "WorktreeInfo",
    "ProcessResult",
]
