"""Pytest fixtures for arborist tests"""
import logging
import tempfile
from pathlib import Path

import git
import pytest


@pytest.fixture
def temp_dir(monkeypatch):
    """Create a temporary directory git will not search above."""
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir).resolve()
        monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(path.parent))
        yield path


@pytest.fixture(autouse=True)
def restore_root_logger():
    """setup_logging() replaces root handlers; put them back after each test."""
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level
    yield
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)


@pytest.fixture
def mock_config(temp_dir):
    """Create a configuration dictionary that keeps worktrees inside temp_dir."""
    return {
        'verbose': False,
        'debug': False,
        'random_label': False,
        'temp_dir': str(temp_dir / "tmp"),
    }


def _configure_identity(repo):
    with repo.config_writer() as writer:
        writer.set_value("user", "name", "Test User")
        writer.set_value("user", "email", "test@example.com")


@pytest.fixture
def git_repo(temp_dir):
    """Create a real Git repository with one commit on main."""
    repo_path = temp_dir / "test_repo"
    repo_path.mkdir()

    repo = git.Repo.init(repo_path)
    _configure_identity(repo)

    test_file = repo_path / "README.md"
    test_file.write_text("# Test Repository\n")
    repo.index.add(["README.md"])
    repo.index.commit("Initial commit")

    repo.git.branch('-M', 'main')

    yield repo

    repo.close()


@pytest.fixture
def bare_repo(git_repo, temp_dir):
    """Create a bare clone of git_repo."""
    bare_path = temp_dir / "repo.git"
    repo = git_repo.clone(str(bare_path), bare=True)
    _configure_identity(repo)

    yield repo

    repo.close()


@pytest.fixture
def empty_repo(temp_dir):
    """Create a Git repository without any commits."""
    repo_path = temp_dir / "empty_repo"
    repo_path.mkdir()
    repo = git.Repo.init(repo_path)

    yield repo

    repo.close()
