"""Isolation label and workspace path derivation."""

import hashlib
import os
import random
import tempfile
from pathlib import Path
from typing import Optional, Sequence

from arborist.constants import BARE_WORKTREE_PREFIX, BRANCH_PREFIX, LABEL_PALETTE, TEMP_WORKTREE_DIR
from arborist.exceptions import InvalidPathError
from arborist.logging_config import get_logger
from arborist.models.isolation import IsolationHandle
from arborist.models.repository import RepositoryInfo

logger = get_logger(__name__)


def path_to_str(path) -> str:
    """Return the path as text, rejecting paths that have no UTF-8 form."""
    path_str = os.fspath(path)
    if isinstance(path_str, bytes):
        try:
            return path_str.decode("utf-8")
        except UnicodeDecodeError:
            raise InvalidPathError(path_str) from None
    try:
        path_str.encode("utf-8")
    except UnicodeEncodeError:
        raise InvalidPathError(path_str) from None
    return path_str


class IsolationNamer:
    """Chooses isolation labels and derives branch names and worktree paths."""

    def __init__(
        self,
        palette: Sequence[str] = LABEL_PALETTE,
        branch_prefix: str = BRANCH_PREFIX,
        temp_dir: Optional[str] = None,
        rng: Optional[random.Random] = None,
    ):
        """Initialize the namer.

        Args:
            palette: Labels to choose from
            branch_prefix: Namespace for created branches
            temp_dir: Base directory for non-bare worktrees (None = system temp dir)
            rng: Random source for random mode
        """
        if not palette:
            raise ValueError("palette cannot be empty")
        self.palette = tuple(palette)
        self.branch_prefix = branch_prefix
        self.temp_dir = temp_dir
        self.rng = rng or random.Random()

    def deterministic_label(self, parent_pid: Optional[int] = None) -> str:
        """Label derived from the parent process id.

        Repeated runs from the same shell get the same label and so reuse
        the same branch and worktree.
        """
        if parent_pid is None:
            parent_pid = os.getppid()
        return self.palette[parent_pid % len(self.palette)]

    def random_label(self) -> str:
        """Label picked uniformly from the palette."""
        return self.rng.choice(self.palette)

    def select_label(self, random_mode: bool = False) -> str:
        label = self.random_label() if random_mode else self.deterministic_label()
        logger.debug(f"Selected label '{label}' ({'random' if random_mode else 'deterministic'})")
        return label

    def branch_name(self, label: str) -> str:
        return f"{self.branch_prefix}/{label}"

    @staticmethod
    def repo_hash(repo_root) -> str:
        """SHA-256 hex digest of the repository root path."""
        return hashlib.sha256(path_to_str(repo_root).encode("utf-8")).hexdigest()

    def base_temp_dir(self) -> Path:
        return Path(self.temp_dir or tempfile.gettempdir())

    def workspace_path(self, repo: RepositoryInfo, label: str) -> Path:
        """Worktree location for a label.

        Bare repositories keep their worktrees next to the repository data;
        other repositories get one under the temp directory, keyed by a hash
        of the repository root.
        """
        if repo.is_bare:
            return Path(repo.root) / f"{BARE_WORKTREE_PREFIX}{label}"
        return self.base_temp_dir() / TEMP_WORKTREE_DIR / self.repo_hash(repo.root) / label

    def build_handle(self, repo: RepositoryInfo, label: str) -> IsolationHandle:
        return IsolationHandle(
            label=label,
            branch_name=self.branch_name(label),
            workspace_path=self.workspace_path(repo, label),
        )
