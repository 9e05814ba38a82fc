"""Runs a command inside an isolated branch and worktree."""

from typing import Optional, Sequence, Union

from arborist.config import Config
from arborist.logging_config import get_logger
from arborist.models.isolation import IsolationHandle
from arborist.models.repository import RepositoryInfo
from arborist.services.git.inspector import RepositoryInspector
from arborist.services.git.worktrees import WorkspaceManager
from arborist.services.naming import IsolationNamer
from arborist.services.process_runner import ProcessRunner
from arborist.utils.directory import change_directory

logger = get_logger(__name__)


class Arborist:
    """Main class: inspect, isolate, execute, then clean up or retain."""

    def __init__(
        self,
        config: Union[Config, dict, None] = None,
        runner: Optional[ProcessRunner] = None,
        inspector: Optional[RepositoryInspector] = None,
        namer: Optional[IsolationNamer] = None,
        workspaces: Optional[WorkspaceManager] = None,
    ):
        """Initialize Arborist.

        Args:
            config: Configuration dict or Config object
            runner: Process runner shared by the services
            inspector: Repository inspector
            namer: Isolation namer
            workspaces: Workspace manager
        """
        if config is None:
            config = Config()
        elif isinstance(config, dict):
            config = Config.from_dict(config)
        self.config = config

        self.runner = runner or ProcessRunner()
        self.inspector = inspector or RepositoryInspector(self.runner)
        self.workspaces = workspaces or WorkspaceManager(self.runner)
        self.namer = namer or IsolationNamer(
            palette=config.palette,
            branch_prefix=config.branch_prefix,
            temp_dir=config.temp_dir,
        )

    def run(self, command: Sequence[str]) -> int:
        """Run a command, isolated when inside a git repository.

        Args:
            command: Program and arguments

        Returns:
            The command's exit code

        Raises:
            ArboristError: If inspection, isolation or cleanup fails
        """
        if not command:
            logger.info("Empty command, nothing to run")
            return 0

        logger.info("Checking repository...")
        repo = self.inspector.get_repo_info()

        if repo is None:
            logger.info("Not a git repository, running command directly...")
            return self.runner.execute(command)

        logger.info(f"{'Bare' if repo.is_bare else 'Normal'} repository detected")
        logger.info(f"Repository: {repo.root}")
        logger.info(f"Branch: {repo.current_branch}")
        return self._run_isolated(repo, command)

    def prepare(self, repo: RepositoryInfo) -> IsolationHandle:
        """Pick a label and create (or reuse) its branch and worktree."""
        label = self.namer.select_label(self.config.random_label)
        handle = self.namer.build_handle(repo, label)

        logger.info(f"Preparing worktree at: {handle.workspace_path}")
        upstream = None if repo.is_detached else repo.current_branch
        created = self.workspaces.create(
            handle.workspace_path,
            handle.branch_name,
            repo.current_commit,
            upstream,
        )
        if created:
            logger.info(f"Created worktree with branch '{handle.branch_name}'")
        else:
            logger.info("Using existing worktree")
        return handle

    def _run_isolated(self, repo: RepositoryInfo, command: Sequence[str]) -> int:
        handle = self.prepare(repo)

        with change_directory(handle.workspace_path):
            logger.info("Changed to worktree directory")
            try:
                exit_code = self.runner.execute(command)
            except KeyboardInterrupt:
                # Post-run state is unknown; never discard on interrupt
                logger.warning(f"Interrupted, keeping worktree at: {handle.workspace_path}")
                raise

            logger.info("Checking worktree status...")
            status = self.inspector.get_workspace_status()

            if status.has_uncommitted_changes:
                logger.info("Note: Uncommitted changes exist in worktree")
            elif status.commits_ahead > 0:
                logger.info(f"Note: {status.commits_ahead} unpushed commit(s) exist")

            if status.should_retain:
                logger.info(f"Keeping worktree at: {handle.workspace_path}")
                return exit_code

        # Outside the worktree again before removing it
        logger.info("No changes detected, removing worktree...")
        self.workspaces.remove_with_branch(handle.workspace_path, handle.branch_name)
        logger.info("Worktree and branch removed")
        return exit_code
