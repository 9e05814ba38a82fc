"""Isolation handle model."""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class IsolationHandle:
    """A labelled branch/worktree pair a command runs in."""

    label: str
    branch_name: str
    workspace_path: Path

    def __str__(self) -> str:
        return f"{self.branch_name} @ {self.workspace_path}"
