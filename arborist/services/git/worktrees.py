"""Worktree operations service for arborist."""

import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from arborist.exceptions import ArboristIOError, GitOperationError
from arborist.logging_config import get_logger
from arborist.models.worktree import WorktreeInfo
from arborist.services.naming import path_to_str
from arborist.services.process_runner import ProcessRunner

logger = get_logger(__name__)

PathLike = Union[str, Path]


def _same_path(left: str, right: str) -> bool:
    return os.path.realpath(left) == os.path.realpath(right)


class WorkspaceManager:
    """Service for creating and tearing down isolated worktrees."""

    def __init__(self, runner: Optional[ProcessRunner] = None):
        """Initialize the workspace manager.

        Args:
            runner: Process runner used for git invocations
        """
        self.runner = runner or ProcessRunner()

    def list_worktrees(self) -> List[WorktreeInfo]:
        """Get detailed information about all worktrees of the current repository.

        Raises:
            GitOperationError: If git cannot list worktrees
        """
        result = self.runner.git("worktree", "list", "--porcelain")
        if not result.succeeded:
            raise GitOperationError("worktree list", result.stderr.strip())

        # Porcelain format, one block per worktree separated by blank lines:
        # worktree /path/to/worktree
        # HEAD commit_sha
        # branch refs/heads/branch-name   (or "detached" / "bare")
        worktree_list: List[WorktreeInfo] = []
        current_worktree: Dict[str, Any] = {}

        def flush():
            path = current_worktree.get("path", "")
            if path:
                worktree_list.append(
                    WorktreeInfo(
                        path=path,
                        branch_name=current_worktree.get("branch", ""),
                        commit_sha=current_worktree.get("HEAD", ""),
                        is_main=not worktree_list,  # First entry is always the main one
                        is_orphaned=not os.path.exists(path),
                    )
                )
            current_worktree.clear()

        for line in result.stdout.split("\n"):
            line = line.strip()

            if not line:
                flush()
                continue

            if line.startswith("worktree "):
                current_worktree["path"] = line.split(" ", 1)[1]
            elif line.startswith("HEAD "):
                current_worktree["HEAD"] = line.split(" ", 1)[1]
            elif line.startswith("branch "):
                branch_ref = line.split(" ", 1)[1]
                if branch_ref.startswith("refs/heads/"):
                    current_worktree["branch"] = branch_ref[len("refs/heads/"):]
                else:
                    current_worktree["branch"] = ""
            elif line.startswith("detached"):
                current_worktree["branch"] = ""

        # Last entry has no trailing blank line once stdout is stripped
        flush()

        logger.debug(f"Found {len(worktree_list)} worktrees")
        for wt in worktree_list:
            logger.debug(f"  {wt}")
        return worktree_list

    def find(self, path: PathLike) -> Optional[WorktreeInfo]:
        """Return the worktree registered at exactly this path, if any."""
        path_str = path_to_str(path)
        for wt in self.list_worktrees():
            if _same_path(wt.path, path_str):
                return wt
        return None

    def exists(self, path: PathLike) -> bool:
        """Check whether a worktree is registered at exactly this path."""
        return self.find(path) is not None

    def prune(self) -> None:
        """Drop registrations of worktrees whose directories are gone.

        Raises:
            GitOperationError: If git fails to prune
        """
        result = self.runner.git("worktree", "prune")
        if not result.succeeded:
            raise GitOperationError("worktree prune", result.stderr.strip())
        logger.debug("Pruned orphaned worktree metadata")

    def branch_exists(self, branch: str) -> bool:
        return self.runner.git("rev-parse", "--verify", "--quiet", f"refs/heads/{branch}").succeeded

    def _ensure_parent_dir(self, path: Path) -> None:
        parent = path.parent
        if parent.exists():
            return
        try:
            parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ArboristIOError(f"Failed to create worktree base directory {parent}: {e}", e) from e
        logger.debug(f"Created worktree base directory {parent}")

    def create(
        self,
        path: PathLike,
        branch: str,
        base_commit: str,
        upstream_branch: Optional[str] = None,
    ) -> bool:
        """Create a worktree on a new branch, or reuse the one already there.

        A registration whose directory has been deleted is pruned first. If
        the branch survived it is checked out again, keeping its commits and
        its existing upstream.

        Args:
            path: Worktree directory
            branch: Name of the branch to create
            base_commit: Commit the new branch starts from
            upstream_branch: Branch the new branch should track

        Returns:
            True if a worktree was created, False if an existing one was reused

        Raises:
            GitOperationError: If git fails to add the worktree or set its upstream
            ArboristIOError: If the parent directory cannot be created
        """
        path = Path(path)
        self._ensure_parent_dir(path)

        existing = self.find(path)
        if existing is not None:
            if not existing.is_orphaned:
                logger.info(f"Worktree already exists at {path}, reusing it")
                return False
            logger.info(f"Worktree directory {path} is missing, pruning stale registration")
            self.prune()

        path_str = path_to_str(path)
        if self.branch_exists(branch):
            result = self.runner.git("worktree", "add", path_str, branch)
            new_branch = False
        else:
            result = self.runner.git("worktree", "add", "-b", branch, path_str, base_commit)
            new_branch = True
        if not result.succeeded:
            raise GitOperationError("worktree add", f"Failed to create worktree: {result.stderr.strip()}")
        logger.info(f"Created worktree at {path} on branch '{branch}'")

        if upstream_branch and new_branch:
            result = self.runner.git("-C", path_str, "branch", "--set-upstream-to", upstream_branch)
            if not result.succeeded:
                raise GitOperationError(
                    "branch --set-upstream-to",
                    f"Failed to set upstream tracking branch: {result.stderr.strip()}",
                )
            logger.debug(f"Branch '{branch}' now tracks '{upstream_branch}'")

        return True

    def remove(self, path: PathLike) -> tuple[bool, Optional[str]]:
        """Force-remove the worktree at the specified path.

        Returns:
            Tuple of (success, error_message). error_message is None on success.
        """
        path_str = path_to_str(path)
        result = self.runner.git("worktree", "remove", path_str, "--force")
        if not result.succeeded:
            stderr = result.stderr.strip()
            if stderr:
                error_msg = f"git worktree remove failed (exit {result.exit_code}): {stderr}"
            else:
                error_msg = f"git worktree remove failed with exit code {result.exit_code}"
            logger.debug(f"Failed to remove worktree at {path_str}: {error_msg}")
            return False, error_msg

        logger.info(f"Removed worktree at {path_str}")
        return True, None

    def delete_branch(self, branch: str) -> None:
        """Force-delete a local branch.

        Raises:
            GitOperationError: If git refuses to delete the branch
        """
        result = self.runner.git("branch", "-D", branch)
        if not result.succeeded:
            raise GitOperationError("branch -D", result.stderr.strip())
        logger.info(f"Deleted branch '{branch}'")

    def remove_with_branch(self, path: PathLike, branch: str) -> None:
        """Remove a worktree and then its branch.

        The branch is only deleted once the worktree is gone.

        Raises:
            GitOperationError: If either step fails
        """
        removed, error_msg = self.remove(path)
        if not removed:
            raise GitOperationError("worktree remove", error_msg)
        self.delete_branch(branch)
