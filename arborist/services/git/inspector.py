"""Repository inspection service for arborist."""

import os
from pathlib import Path
from typing import Optional

from arborist.exceptions import GitOperationError
from arborist.logging_config import get_logger
from arborist.models.repository import RepositoryInfo, WorkspaceStatus
from arborist.services.naming import path_to_str
from arborist.services.process_runner import ProcessRunner

logger = get_logger(__name__)


class RepositoryInspector:
    """Answers questions about the repository in the current directory.

    Every query shells out to git in the working directory current at call
    time, so the same inspector follows the orchestrator into a worktree.
    """

    def __init__(self, runner: Optional[ProcessRunner] = None):
        self.runner = runner or ProcessRunner()

    def _git(self, operation: str, *args: str) -> str:
        """Run git and return its stripped stdout.

        Raises:
            GitOperationError: If git exits with a nonzero status
        """
        result = self.runner.git(*args)
        if not result.succeeded:
            raise GitOperationError(operation, result.stderr.strip())
        return result.stdout.strip()

    def is_inside_work_tree(self) -> bool:
        """Check whether the current directory belongs to a repository.

        Only the exit status counts: inside a bare repository git prints
        "false" but still succeeds, which makes it a repository here.
        """
        return self.runner.git("rev-parse", "--is-inside-work-tree").succeeded

    def common_git_dir(self) -> Path:
        """Control directory of the primary repository, even from a linked worktree."""
        common_dir = self._git("rev-parse --git-common-dir", "rev-parse", "--git-common-dir")
        # Relative to the current directory when not inside a linked worktree
        return Path(os.path.abspath(common_dir))

    def is_bare_repository(self) -> bool:
        common_dir = path_to_str(self.common_git_dir())
        output = self._git(
            "rev-parse --is-bare-repository", "-C", common_dir, "rev-parse", "--is-bare-repository"
        )
        return output == "true"

    def repository_root(self, is_bare: Optional[bool] = None) -> Path:
        """Base directory of the repository.

        Bare repositories have no toplevel, so their common git dir serves
        as the root that co-located worktrees hang off.
        """
        if is_bare is None:
            is_bare = self.is_bare_repository()
        if is_bare:
            return self.common_git_dir()
        return Path(self._git("rev-parse --show-toplevel", "rev-parse", "--show-toplevel"))

    def current_branch(self) -> str:
        return self._git("rev-parse --abbrev-ref HEAD", "rev-parse", "--abbrev-ref", "HEAD")

    def current_commit(self) -> str:
        return self._git("rev-parse HEAD", "rev-parse", "HEAD")

    def has_uncommitted_changes(self) -> bool:
        return bool(self._git("status", "status", "--porcelain"))

    def commits_ahead_of_upstream(self) -> int:
        """Number of commits on HEAD that are not on its upstream branch.

        Returns:
            0 when no upstream is configured
        """
        upstream = self.runner.git("rev-parse", "--abbrev-ref", "@{upstream}")
        if not upstream.succeeded:
            logger.debug("No upstream configured, treating as 0 commits ahead")
            return 0

        count = self._git("rev-list --count", "rev-list", "--count", "@{upstream}..HEAD")
        try:
            return max(int(count), 0)
        except ValueError:
            logger.debug(f"Unexpected rev-list output: {count!r}")
            return 0

    def get_repo_info(self) -> Optional[RepositoryInfo]:
        """Collect the repository identity, or None outside a repository."""
        if not self.is_inside_work_tree():
            return None

        is_bare = self.is_bare_repository()
        info = RepositoryInfo(
            root=self.repository_root(is_bare),
            current_branch=self.current_branch(),
            current_commit=self.current_commit(),
            is_bare=is_bare,
        )
        logger.debug(f"Repository info: {info}")
        return info

    def get_workspace_status(self) -> WorkspaceStatus:
        return WorkspaceStatus(
            has_uncommitted_changes=self.has_uncommitted_changes(),
            commits_ahead=self.commits_ahead_of_upstream(),
        )
