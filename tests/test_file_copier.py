"""Tests for copying files into new worktrees"""
import pytest
from unittest.mock import patch

from git_phantom.services.file_copier import FileCopyError, copy_files


class TestCopyFiles:
    """Test copy_files."""

    def test_copies_nested_files(self, temp_dir):
        """Test that nested paths are recreated in the target."""
        source = temp_dir / "src"
        target = temp_dir / "dst"
        (source / "config").mkdir(parents=True)
        (source / "config" / "local.json").write_text("{}")
        (source / ".env").write_text("A=1\n")
        target.mkdir()

        result = copy_files(str(source), str(target), [".env", "config/local.json"])

        assert result.copied_files == [".env", "config/local.json"]
        assert result.skipped_files == []
        assert (target / "config" / "local.json").read_text() == "{}"
        assert (target / ".env").read_text() == "A=1\n"

    def test_skips_missing_and_directories(self, temp_dir):
        """Test that missing files and directories are skipped."""
        (temp_dir / "src" / "somedir").mkdir(parents=True)
        (temp_dir / "dst").mkdir()

        result = copy_files(str(temp_dir / "src"), str(temp_dir / "dst"), ["missing", "somedir"])

        assert result.copied_files == []
        assert result.skipped_files == ["missing", "somedir"]

    def test_copy_failure(self, temp_dir):
        """Test that an unreadable source raises FileCopyError."""
        (temp_dir / "src").mkdir()
        (temp_dir / "src" / ".env").write_text("A=1\n")

        with patch("git_phantom.services.file_copier.shutil.copy2", side_effect=PermissionError(13, "Permission denied")):
            with pytest.raises(FileCopyError) as exc_info:
                copy_files(str(temp_dir / "src"), str(temp_dir / "dst"), [".env"])

        assert exc_info.value.file == ".env"
        assert str(exc_info.value) == "Failed to copy .env: Permission denied"

    @pytest.mark.parametrize("name", ["../outside.txt", "config/../../outside.txt", "."])
    def test_rejects_paths_leaving_directories(self, temp_dir, name):
        """Test that relative paths out of the repository are never copied."""
        source = temp_dir / "repo" / "src"
        target = temp_dir / "repo" / "dst"
        (source / "config").mkdir(parents=True)
        (temp_dir / "repo" / "outside.txt").write_text("secret\n")

        result = copy_files(str(source), str(target), [name])

        assert result.copied_files == []
        assert result.rejected_files == [name]
        assert not target.exists()

    def test_rejects_absolute_paths(self, temp_dir):
        """Test that absolute paths are rejected instead of copied onto themselves."""
        source = temp_dir / "src"
        source.mkdir()
        outside = temp_dir / "hosts"
        outside.write_text("127.0.0.1 localhost\n")

        with patch("git_phantom.services.file_copier.shutil.copy2") as copy2:
            result = copy_files(str(source), str(temp_dir / "dst"), [str(outside)])

        copy2.assert_not_called()
        assert result.rejected_files == [str(outside)]
        assert outside.read_text() == "127.0.0.1 localhost\n"

    def test_rejected_paths_do_not_stop_others(self, temp_dir):
        source = temp_dir / "src"
        source.mkdir()
        (source / ".env").write_text("A=1\n")

        result = copy_files(str(source), str(temp_dir / "dst"), ["/etc/hosts", ".env"])

        assert result.rejected_files == ["/etc/hosts"]
        assert result.copied_files == [".env"]
