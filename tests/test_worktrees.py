"""Tests for WorkspaceManager"""
import logging
import shutil
from pathlib import Path
from unittest.mock import Mock

import pytest

from arborist.exceptions import GitOperationError
from arborist.models.process import ProcessResult
from arborist.services.git.worktrees import WorkspaceManager


def branch_names(repo):
    return [head.name for head in repo.heads]


@pytest.fixture
def in_repo(git_repo, monkeypatch):
    monkeypatch.chdir(git_repo.working_dir)
    return git_repo


class TestListWorktrees:
    """Test worktree listing."""

    def test_main_worktree_listed_first(self, in_repo):
        worktrees = WorkspaceManager().list_worktrees()

        assert len(worktrees) == 1
        assert worktrees[0].is_main is True
        assert worktrees[0].branch_name == "main"
        assert worktrees[0].is_orphaned is False

    def test_porcelain_parsing(self):
        """Test parsing of bare, branch and detached entries."""
        runner = Mock()
        runner.git.return_value = ProcessResult(
            exit_code=0,
            stdout=(
                "worktree /repo.git\n"
                "bare\n"
                "\n"
                "worktree /repo.git/arborist-teal\n"
                "HEAD 1111111111111111111111111111111111111111\n"
                "branch refs/heads/arborist/teal\n"
                "\n"
                "worktree /elsewhere\n"
                "HEAD 2222222222222222222222222222222222222222\n"
                "detached"
            ),
        )

        worktrees = WorkspaceManager(runner).list_worktrees()

        assert [wt.path for wt in worktrees] == ["/repo.git", "/repo.git/arborist-teal", "/elsewhere"]
        assert [wt.is_main for wt in worktrees] == [True, False, False]
        assert worktrees[1].branch_name == "arborist/teal"
        assert worktrees[1].commit_sha.startswith("1111")
        assert worktrees[2].branch_name == ""

    def test_list_failure_raises(self):
        runner = Mock()
        runner.git.return_value = ProcessResult(exit_code=128, stderr="fatal: not a git repository")

        with pytest.raises(GitOperationError, match="not a git repository"):
            WorkspaceManager(runner).list_worktrees()


class TestCreate:
    """Test worktree creation."""

    def test_create_worktree(self, in_repo, temp_dir):
        manager = WorkspaceManager()
        path = temp_dir / "tmp" / "arborist" / "hash" / "teal"

        created = manager.create(path, "arborist/teal", in_repo.head.commit.hexsha)

        assert created is True
        assert path.is_dir()
        assert (path / "README.md").exists()
        assert manager.exists(path) is True
        assert "arborist/teal" in branch_names(in_repo)

    def test_create_is_idempotent(self, in_repo, temp_dir):
        """Test a second create reuses the existing worktree."""
        manager = WorkspaceManager()
        path = temp_dir / "wt" / "teal"
        commit = in_repo.head.commit.hexsha

        assert manager.create(path, "arborist/teal", commit) is True
        assert manager.create(path, "arborist/teal", commit) is False
        assert len(manager.list_worktrees()) == 2

    def test_create_sets_upstream(self, in_repo, temp_dir):
        manager = WorkspaceManager()
        path = temp_dir / "wt" / "amber"

        manager.create(path, "arborist/amber", in_repo.head.commit.hexsha, upstream_branch="main")

        upstream = in_repo.git.rev_parse("--abbrev-ref", "arborist/amber@{upstream}")
        assert upstream == "main"

    def test_create_with_bad_commit_fails(self, in_repo, temp_dir):
        manager = WorkspaceManager()

        with pytest.raises(GitOperationError, match="Failed to create worktree"):
            manager.create(temp_dir / "wt" / "red", "arborist/red", "not-a-commit")

    def test_create_with_bad_upstream_fails(self, in_repo, temp_dir):
        manager = WorkspaceManager()

        with pytest.raises(GitOperationError, match="Failed to set upstream tracking branch"):
            manager.create(temp_dir / "wt" / "red", "arborist/red", "main", upstream_branch="no-such-branch")

    def test_exists_matches_whole_path(self, in_repo, temp_dir):
        """Test a path that is a prefix of a worktree path does not match."""
        manager = WorkspaceManager()
        manager.create(temp_dir / "wt" / "teal", "arborist/teal", "main")

        assert manager.exists(temp_dir / "wt" / "tea") is False
        assert manager.exists(temp_dir / "wt") is False
        assert manager.exists(temp_dir / "wt" / "teal") is True


    def test_deleted_worktree_directory_is_recreated(self, in_repo, temp_dir):
        """Test a registered worktree whose directory is gone is pruned and added again."""
        manager = WorkspaceManager()
        path = temp_dir / "wt" / "teal"
        manager.create(path, "arborist/teal", "main", upstream_branch="main")
        in_repo.git.execute(["git", "-C", str(path), "commit", "--allow-empty", "-m", "kept"])
        shutil.rmtree(path)

        assert manager.find(path).is_orphaned is True
        assert manager.create(path, "arborist/teal", "main", upstream_branch="main") is True

        assert (path / "README.md").exists()
        assert manager.find(path).is_orphaned is False
        assert len(manager.list_worktrees()) == 2
        assert in_repo.git.log("-1", "--format=%s", "arborist/teal") == "kept"
        assert in_repo.git.rev_parse("--abbrev-ref", "arborist/teal@{upstream}") == "main"

    def test_existing_branch_is_checked_out(self, in_repo, temp_dir):
        """Test a leftover branch without a worktree is reused rather than recreated."""
        in_repo.create_head("arborist/red")
        manager = WorkspaceManager()
        path = temp_dir / "wt" / "red"

        assert manager.branch_exists("arborist/red") is True
        assert manager.create(path, "arborist/red", "main") is True
        assert manager.find(path).branch_name == "arborist/red"


class TestRemove:
    """Test worktree removal."""

    def test_remove_with_branch_round_trip(self, in_repo, temp_dir):
        manager = WorkspaceManager()
        path = temp_dir / "wt" / "teal"
        manager.create(path, "arborist/teal", in_repo.head.commit.hexsha)

        manager.remove_with_branch(path, "arborist/teal")

        assert manager.exists(path) is False
        assert not path.exists()
        assert "arborist/teal" not in branch_names(in_repo)

    def test_remove_discards_dirty_worktree(self, in_repo, temp_dir):
        manager = WorkspaceManager()
        path = temp_dir / "wt" / "teal"
        manager.create(path, "arborist/teal", "main")
        (path / "scratch.txt").write_text("scratch\n")

        success, error_msg = manager.remove(path)

        assert success is True
        assert error_msg is None
        assert not path.exists()

    def test_remove_missing_worktree_is_reported(self, in_repo, temp_dir):
        """Test removal failures are returned rather than raised."""
        success, error_msg = WorkspaceManager().remove(temp_dir / "nowhere")

        assert success is False
        assert "git worktree remove failed" in error_msg

    def test_failed_removal_keeps_branch(self, in_repo, temp_dir):
        """Test the branch is not deleted when the worktree could not be removed."""
        in_repo.create_head("arborist/red")

        with pytest.raises(GitOperationError):
            WorkspaceManager().remove_with_branch(temp_dir / "nowhere", "arborist/red")

        assert "arborist/red" in branch_names(in_repo)

    def test_failed_removal_is_not_logged_as_error(self, in_repo, temp_dir, caplog):
        """Test the failure reaches the caller once, through the exception."""
        in_repo.create_head("arborist/red")

        with caplog.at_level(logging.DEBUG):
            with pytest.raises(GitOperationError, match="git worktree remove failed"):
                WorkspaceManager().remove_with_branch(temp_dir / "nowhere", "arborist/red")

        assert not [record for record in caplog.records if record.levelno >= logging.ERROR]

    def test_delete_missing_branch_fails(self, in_repo):
        with pytest.raises(GitOperationError, match="branch -D"):
            WorkspaceManager().delete_branch("arborist/missing")
