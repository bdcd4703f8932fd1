"""Tests for logging configuration"""
import logging
import pytest

from git_phantom.utils.logging import get_logger, setup_logging


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Put the root logger back the way pytest configured it."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


class TestSetupLogging:
    """Test log level and handler selection."""

    def test_default_level(self):
        setup_logging()
        assert logging.getLogger().level == logging.WARNING

    def test_verbose_level(self):
        setup_logging(verbose=True)
        assert logging.getLogger().level == logging.INFO

    def test_debug_writes_log_file(self, temp_dir):
        """Test that debug mode logs to a file as well."""
        setup_logging(debug=True, log_dir=temp_dir)
        get_logger("git_phantom.core.worktree_manager").debug("creating worktree")
        for handler in logging.getLogger().handlers:
            handler.flush()

        content = (temp_dir / "git-phantom.log").read_text()
        assert "core.worktree_manager - DEBUG - creating worktree" in content

    def test_handlers_replaced(self):
        """Test that repeated setup does not stack handlers."""
        setup_logging()
        setup_logging()
        assert len(logging.getLogger().handlers) == 1

    def test_gitpython_quiet(self):
        setup_logging(verbose=True)
        assert logging.getLogger("git").level == logging.WARNING


class TestGetLogger:
    def test_strips_package_prefix(self):
        assert get_logger("git_phantom.services.git.executor").name == "services.git.executor"

    def test_other_names_unchanged(self):
        assert get_logger("tests").name == "tests"
