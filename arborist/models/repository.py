"""Repository data models."""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class RepositoryInfo:
    """Identity of the repository arborist was started in."""

    root: Path  # Common git dir for bare repos, toplevel otherwise
    current_branch: str  # "HEAD" when detached
    current_commit: str
    is_bare: bool

    @property
    def is_detached(self) -> bool:
        """True if HEAD does not point at a branch."""
        return self.current_branch == "HEAD"


@dataclass(frozen=True)
class WorkspaceStatus:
    """State of an isolated workspace after the user command has finished."""

    has_uncommitted_changes: bool
    commits_ahead: int = 0

    @property
    def should_retain(self) -> bool:
        """Keep the workspace if it holds anything the user could lose."""
        return self.has_uncommitted_changes or self.commits_ahead > 0
