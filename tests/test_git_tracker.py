"""Unit tests for git_tracker module."""

from unittest.mock import patch, MagicMock
import subprocess

from tooltip_generator.git_tracker import (
    is_git_repo,
    get_head_commit,
    get_changed_files,
    GitChangeSet,
)


def _diff_responses(committed="", unstaged="", staged="", untracked=""):
    def mock_run(cmd, **kwargs):
        if cmd[:3] == ["git", "diff", "--name-status"]:
            if len(cmd) == 5:
                return MagicMock(returncode=0, stdout=committed)
            if "--cached" in cmd:
                return MagicMock(returncode=0, stdout=staged)
            return MagicMock(returncode=0, stdout=unstaged)
        if cmd[:2] == ["git", "ls-files"]:
            return MagicMock(returncode=0, stdout=untracked)
        return MagicMock(returncode=0, stdout="")

    return mock_run


class TestIsGitRepo:
    def test_returns_true_for_git_repo(self):
        with patch("tooltip_generator.git_tracker.subprocess.run") as mock_run:
            mock_run.return_value = MagicMock(returncode=0, stdout="true\n")
            assert is_git_repo("/some/path") is True

    def test_returns_false_for_non_git(self):
        with patch("tooltip_generator.git_tracker.subprocess.run") as mock_run:
            mock_run.return_value = MagicMock(returncode=128, stdout="")
            assert is_git_repo("/some/path") is False

    def test_returns_false_when_git_not_installed(self):
        with patch("tooltip_generator.git_tracker.subprocess.run") as mock_run:
            mock_run.side_effect = FileNotFoundError
            assert is_git_repo("/some/path") is False

    def test_returns_false_on_timeout(self):
        with patch("tooltip_generator.git_tracker.subprocess.run") as mock_run:
            mock_run.side_effect = subprocess.TimeoutExpired(cmd="git", timeout=10)
            assert is_git_repo("/some/path") is False


class TestGetHeadCommit:
    def test_returns_commit_hash(self):
        with patch("tooltip_generator.git_tracker.subprocess.run") as mock_run:
            mock_run.return_value = MagicMock(returncode=0, stdout="abc123\n")
            assert get_head_commit("/some/path") == "abc123"

    def test_returns_none_on_failure(self):
        with patch("tooltip_generator.git_tracker.subprocess.run") as mock_run:
            mock_run.return_value = MagicMock(returncode=128, stdout="")
            assert get_head_commit("/some/path") is None


class TestGetChangedFiles:
    def test_returns_empty_when_since_ref_is_none(self):
        changeset = get_changed_files("/some/path", None)
        assert changeset.is_empty

    def test_committed_modification(self):
        mock_run = _diff_responses(committed="M\tAssets/Player.cs\n")
        with patch("tooltip_generator.git_tracker.subprocess.run", side_effect=mock_run):
            changeset = get_changed_files("/some/path", "abc123")
        assert changeset.modified == ["Assets/Player.cs"]

    def test_layers_are_merged(self):
        mock_run = _diff_responses(
            committed="A\tAssets/New.cs\n",
            unstaged="M\tAssets/Old.cs\n",
            staged="D\tAssets/Gone.cs\n",
            untracked="Assets/Draft.cs\n",
        )
        with patch("tooltip_generator.git_tracker.subprocess.run", side_effect=mock_run):
            changeset = get_changed_files("/some/path", "abc123")
        assert changeset.added == ["Assets/Draft.cs", "Assets/New.cs"]
        assert changeset.modified == ["Assets/Old.cs"]
        assert changeset.deleted == ["Assets/Gone.cs"]

    def test_rename_splits_into_delete_and_add(self):
        mock_run = _diff_responses(committed="R100\tAssets/A.cs\tAssets/B.cs\n")
        with patch("tooltip_generator.git_tracker.subprocess.run", side_effect=mock_run):
            changeset = get_changed_files("/some/path", "abc123")
        assert changeset.deleted == ["Assets/A.cs"]
        assert changeset.added == ["Assets/B.cs"]

    def test_deleted_then_readded_is_modified(self):
        mock_run = _diff_responses(committed="D\tAssets/A.cs\n", untracked="Assets/A.cs\n")
        with patch("tooltip_generator.git_tracker.subprocess.run", side_effect=mock_run):
            changeset = get_changed_files("/some/path", "abc123")
        assert changeset.modified == ["Assets/A.cs"]
        assert changeset.added == []
        assert changeset.deleted == []

    def test_failed_git_commands_ignored(self):
        with patch("tooltip_generator.git_tracker.subprocess.run") as mock_run:
            mock_run.return_value = MagicMock(returncode=128, stdout="fatal")
            changeset = get_changed_files("/some/path", "abc123")
        assert changeset.is_empty


class TestGitChangeSet:
    def test_to_visit_excludes_deleted(self):
        changeset = GitChangeSet(modified=["b.cs"], added=["a.cs", "b.cs"], deleted=["c.cs"])
        assert changeset.to_visit == ["a.cs", "b.cs"]
