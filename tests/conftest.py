"""Pytest fixtures for git-phantom tests"""
import tempfile
from pathlib import Path
from unittest.mock import Mock
import pytest
import git

from git_phantom.services.git.executor import GitExecutor, GitResult


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def git_repo(temp_dir):
    """Create a real Git repository for testing."""
    repo_path = temp_dir / "test_repo"
    repo_path.mkdir()

    # Initialize repository
    repo = git.Repo.init(repo_path)

    # Configure git user for commits
    repo.config_writer().set_value("user", "name", "Test User").release()
    repo.config_writer().set_value("user", "email", "test@example.com").release()

    # Create initial commit on main branch
    test_file = repo_path / "README.md"
    test_file.write_text("# Test Repository\n")
    repo.index.add(["README.md"])
    repo.index.commit("Initial commit")

    # Rename master to main if needed
    try:
        repo.git.branch('-M', 'main')
    except Exception:
        pass

    yield repo

    # Cleanup
    repo.close()


@pytest.fixture
def repo_root(git_repo):
    """Resolved path of the test repository's working tree."""
    return str(Path(git_repo.working_dir).resolve())


@pytest.fixture
def mock_executor():
    """Create a mock GitExecutor returning empty output."""
    executor = Mock(spec=GitExecutor)
    executor.cwd = None
    executor.execute.return_value = GitResult(stdout="", stderr="")
    executor.execute_in_directory.return_value = GitResult(stdout="", stderr="")
    return executor


@pytest.fixture
def porcelain_output():
    """Porcelain listing with the main tree and two managed worktrees."""
    return (
        "worktree /repo\n"
        "HEAD 1111111111111111111111111111111111111111\n"
        "branch refs/heads/main\n"
        "\n"
        "worktree /repo/.git/phantom/worktrees/feature-a\n"
        "HEAD 2222222222222222222222222222222222222222\n"
        "branch refs/heads/feature-a\n"
        "\n"
        "worktree /repo/.git/phantom/worktrees/spike\n"
        "HEAD 3333333333333333333333333333333333333333\n"
        "detached\n"
    )
