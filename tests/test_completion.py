"""Tests for shell completion scripts"""
import pytest

from git_phantom.cli.completion import COMMANDS, completion_script
from git_phantom.exceptions import ValidationError


class TestCompletionScripts:
    """Test generated completion scripts."""

    @pytest.mark.parametrize("shell", ["fish", "zsh", "bash"])
    def test_every_command_listed(self, shell):
        """Test that every command appears in every script."""
        script = completion_script(shell)
        for command in COMMANDS:
            assert command.name in script

    @pytest.mark.parametrize("shell", ["fish", "zsh", "bash"])
    def test_worktree_names_from_list(self, shell):
        """Test that worktree names come from `phantom list --names`."""
        assert "phantom list --names" in completion_script(shell)

    def test_fish_options(self):
        """Test that fish completes create options."""
        script = completion_script("fish")
        assert '__fish_seen_subcommand_from create" -l tmux-vertical' in script
        assert '-l copy-file -d "Copy a file from the repository root" -x' in script

    def test_zsh_header(self):
        assert completion_script("zsh").startswith("#compdef phantom")

    def test_bash_registration(self):
        assert completion_script("bash").endswith("complete -F _phantom phantom")

    def test_shell_name_case_insensitive(self):
        assert completion_script("FISH") == completion_script("fish")

    def test_unsupported_shell(self):
        """Test that unknown shells are a validation error."""
        with pytest.raises(ValidationError, match="Unsupported shell: tcsh"):
            completion_script("tcsh")
