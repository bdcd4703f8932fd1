"""Tests for GitExecutor"""
import pytest
from unittest.mock import Mock, patch
import git

from git_phantom.exceptions import GitCommandFailed
from git_phantom.services.git.executor import GitExecutor, GitResult


def _fake_git(status, stdout="", stderr=""):
    fake = Mock()
    fake.execute.return_value = (status, stdout, stderr)
    return fake


class TestGitExecutorFailurePolicy:
    """Test how exit codes and stderr are classified."""

    def test_success_trims_trailing_whitespace(self):
        """Test that stdout and stderr lose trailing whitespace only."""
        executor = GitExecutor()
        with patch.object(executor, "_get_git", return_value=_fake_git(0, "  out\n\n", "note \n")):
            result = executor.execute(["status"])
        assert result == GitResult(stdout="  out", stderr="note")

    def test_nonzero_with_stderr_raises(self):
        """Test that a non-zero exit with stderr output is an error."""
        executor = GitExecutor()
        fake = _fake_git(128, "", "fatal: not a git repository\n")
        with patch.object(executor, "_get_git", return_value=fake):
            with pytest.raises(GitCommandFailed) as exc_info:
                executor.execute(["rev-parse", "--show-toplevel"])

        assert str(exc_info.value) == "fatal: not a git repository"
        assert exc_info.value.status == 128
        assert exc_info.value.args_list == ["rev-parse", "--show-toplevel"]

    def test_nonzero_without_stderr_is_soft(self):
        """Test that a non-zero exit with empty stderr still returns output."""
        executor = GitExecutor()
        with patch.object(executor, "_get_git", return_value=_fake_git(1, "partial\n", "")):
            result = executor.execute(["diff", "--quiet"])
        assert result.stdout == "partial"
        assert result.stderr == ""

    def test_whitespace_only_stderr_is_soft(self):
        """Test that stderr made of whitespace does not count as an error."""
        executor = GitExecutor()
        with patch.object(executor, "_get_git", return_value=_fake_git(1, "", "  \n")):
            result = executor.execute(["show-ref", "--verify", "refs/heads/nope"])
        assert result.stdout == ""

    def test_missing_git_binary(self):
        """Test that a missing git executable becomes GitCommandFailed."""
        executor = GitExecutor()
        fake = Mock()
        fake.execute.side_effect = git.exc.GitCommandNotFound("git", "not found")
        with patch.object(executor, "_get_git", return_value=fake):
            with pytest.raises(GitCommandFailed):
                executor.execute(["status"])


class TestGitExecutorInvocation:
    """Test the argument vector and working directory passed to git."""

    def test_argument_vector_and_default_cwd(self):
        """Test that arguments are passed as a list with 'git' prepended."""
        executor = GitExecutor(cwd="/repo")
        fake = _fake_git(0)
        with patch.object(executor, "_get_git", return_value=fake) as get_git:
            executor.execute(["worktree", "list", "--porcelain"])

        get_git.assert_called_once_with("/repo")
        command = fake.execute.call_args[0][0]
        assert command == ["git", "worktree", "list", "--porcelain"]
        assert fake.execute.call_args[1]["with_exceptions"] is False

    def test_explicit_cwd_overrides_default(self):
        """Test that a per-call cwd wins over the executor default."""
        executor = GitExecutor(cwd="/repo")
        with patch.object(executor, "_get_git", return_value=_fake_git(0)) as get_git:
            executor.execute(["status"], cwd="/elsewhere")
        get_git.assert_called_once_with("/elsewhere")

    def test_env_is_passed_through(self):
        """Test that extra environment variables reach git."""
        executor = GitExecutor()
        fake = _fake_git(0)
        with patch.object(executor, "_get_git", return_value=fake):
            executor.execute(["status"], env={"GIT_TRACE": "0"})
        assert fake.execute.call_args[1]["env"] == {"GIT_TRACE": "0"}

    def test_execute_in_directory_uses_dash_c(self):
        """Test that execute_in_directory targets another tree with -C."""
        executor = GitExecutor()
        fake = _fake_git(0, " M file.txt\n")
        with patch.object(executor, "_get_git", return_value=fake):
            result = executor.execute_in_directory("/wt", ["status", "--porcelain"])

        assert fake.execute.call_args[0][0] == ["git", "-C", "/wt", "status", "--porcelain"]
        assert result.stdout == " M file.txt"


class TestGitExecutorRealRepo:
    """Test against a real repository."""

    def test_rev_parse_in_real_repo(self, git_repo, repo_root):
        """Test running a real git command."""
        executor = GitExecutor(cwd=repo_root)
        result = executor.execute(["branch", "--show-current"])
        assert result.stdout == "main"

    def test_real_failure_raises(self, git_repo, repo_root):
        """Test that a real git error raises with git's message."""
        executor = GitExecutor(cwd=repo_root)
        with pytest.raises(GitCommandFailed) as exc_info:
            executor.execute(["checkout", "no-such-branch"])
        assert "no-such-branch" in str(exc_info.value)
