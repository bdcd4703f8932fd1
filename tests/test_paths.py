"""Tests for worktree path resolution and name validation"""
import os
import pytest

from git_phantom.constants import GARDENS, RUINS, WORKTREES
from git_phantom.exceptions import InvalidWorktreeNameError, ValidationError
from git_phantom.services.paths import (
    get_phantom_directory,
    get_worktree_path,
    validate_worktree_name,
    worktree_exists,
)


class TestPaths:
    """Test path computation."""

    def test_phantom_directory(self):
        """Test the worktrees namespace directory."""
        assert get_phantom_directory("/repo") == os.path.join("/repo", ".git", "phantom", "worktrees")

    def test_garden_directory(self):
        """Test the gardens namespace directory."""
        assert get_phantom_directory("/repo", GARDENS) == os.path.join("/repo", ".git", "phantom", "gardens")

    def test_ruins_directory_and_branch(self):
        """Test the ruins namespace directory and branch prefix."""
        assert get_phantom_directory("/repo", RUINS) == os.path.join("/repo", ".git", "phantom", "ruins")
        assert RUINS.branch_for("old") == "phantom/ruins/old"
        assert RUINS.name_for_branch("phantom/ruins/old") == "old"

    def test_worktree_path(self):
        """Test that the path is the namespace directory joined with the name."""
        assert get_worktree_path("/repo", "feature-x") == "/repo/.git/phantom/worktrees/feature-x"

    def test_deterministic(self):
        """Test that the same inputs always give the same path."""
        assert get_worktree_path("/repo", "a") == get_worktree_path("/repo", "a")

    def test_distinct_names_distinct_paths(self):
        """Test that different names never share a path."""
        names = ["a", "b", "feature/a", "feature-a", "a.b"]
        paths = {get_worktree_path("/repo", name) for name in names}
        assert len(paths) == len(names)

    def test_namespaces_do_not_collide(self):
        """Test that the same name in two namespaces gives two paths."""
        assert get_worktree_path("/repo", "x", WORKTREES) != get_worktree_path("/repo", "x", GARDENS)

    def test_worktree_exists(self, temp_dir):
        """Test existence checks on real and missing paths."""
        assert worktree_exists(str(temp_dir)) is True
        assert worktree_exists(str(temp_dir / "missing")) is False


class TestValidateWorktreeName:
    """Test worktree name validation."""

    @pytest.mark.parametrize("name", ["feature-x", "fix_1", "feature/login", "v1.2"])
    def test_valid_names(self, name):
        """Test that ordinary names pass."""
        validate_worktree_name(name)

    def test_empty_name(self):
        """Test that an empty name is rejected."""
        with pytest.raises(ValidationError, match="cannot be empty"):
            validate_worktree_name("")

    @pytest.mark.parametrize("name", ["has space", "semi;colon", "tilde~", "star*"])
    def test_invalid_characters(self, name):
        """Test that unsafe characters are rejected."""
        with pytest.raises(InvalidWorktreeNameError):
            validate_worktree_name(name)

    def test_parent_traversal(self):
        """Test that '..' is rejected."""
        with pytest.raises(InvalidWorktreeNameError, match="consecutive dots"):
            validate_worktree_name("../escape")

    def test_absolute_path(self):
        """Test that absolute names are rejected."""
        with pytest.raises(InvalidWorktreeNameError, match="absolute"):
            validate_worktree_name("/etc")

    @pytest.mark.parametrize("name", [".", "a/./b", "a//b", "feature/"])
    def test_empty_or_dot_segments(self, name):
        """Test that names aliasing the namespace directory are rejected."""
        with pytest.raises(InvalidWorktreeNameError, match="segments"):
            validate_worktree_name(name)

    def test_invalid_name_exit_code(self):
        """Test that name errors are validation errors."""
        with pytest.raises(ValidationError) as exc_info:
            validate_worktree_name("bad name")
        assert exc_info.value.exit_code == 3
