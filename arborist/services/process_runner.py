"""Process execution service for arborist."""

import subprocess
from typing import Optional, Sequence

from arborist.exceptions import ArboristIOError
from arborist.logging_config import get_logger
from arborist.models.process import ProcessResult

logger = get_logger(__name__)


def _load_gitpython():
    """Import GitPython on first use.

    GitPython looks for a git executable at import time and raises
    ImportError when there is none.
    """
    try:
        import git
    except ImportError as e:
        raise ArboristIOError(f"Failed to load GitPython: {e}", e) from e
    return git


class ProcessRunner:
    """Runs external programs without raising on nonzero exit codes.

    Internal queries capture their output; the user's command is attached
    to the terminal instead.
    """

    def capture(self, program: str, args: Sequence[str] = (), cwd: Optional[str] = None) -> ProcessResult:
        """Run a program and capture its output.

        Args:
            program: Executable name or path
            args: Arguments passed to the program
            cwd: Working directory (None = current directory at call time)

        Returns:
            ProcessResult with exit code, stdout (trailing newline stripped) and stderr

        Raises:
            ArboristIOError: If the program cannot be spawned or GitPython cannot be loaded
        """
        git = _load_gitpython()
        command = [program, *args]
        logger.debug(f"Running: {' '.join(command)}")
        try:
            status, stdout, stderr = git.Git(cwd).execute(
                command,
                with_extended_output=True,
                with_exceptions=False,
            )
        except git.exc.GitCommandNotFound as e:
            raise ArboristIOError(f"Failed to run '{program}': {e}", e) from e
        except OSError as e:
            raise ArboristIOError(f"Failed to run '{program}': {e}", e) from e

        result = ProcessResult(exit_code=status, stdout=stdout, stderr=stderr)
        if not result.succeeded:
            logger.debug(f"'{' '.join(command)}' exited with {status}: {stderr.strip()}")
        return result

    def git(self, *args: str, cwd: Optional[str] = None) -> ProcessResult:
        """Run a git subcommand and capture its output."""
        return self.capture("git", args, cwd=cwd)

    def inherit(self, program: str, args: Sequence[str] = (), cwd: Optional[str] = None) -> int:
        """Run a program attached to the caller's terminal.

        Returns:
            The program's exit code; a child killed by a signal counts as 1

        Raises:
            ArboristIOError: If the program cannot be spawned
        """
        command = [program, *args]
        logger.debug(f"Executing: {' '.join(command)}")
        try:
            completed = subprocess.run(command, cwd=cwd, check=False)
        except OSError as e:
            raise ArboristIOError(f"Failed to run '{program}': {e}", e) from e

        if completed.returncode < 0:
            logger.debug(f"'{program}' terminated by signal {-completed.returncode}")
            return 1
        return completed.returncode

    def execute(self, command: Sequence[str], cwd: Optional[str] = None) -> int:
        """Run a user command given as a list of tokens.

        An empty command is a no-op that succeeds.
        """
        if not command:
            return 0
        return self.inherit(command[0], command[1:], cwd=cwd)
