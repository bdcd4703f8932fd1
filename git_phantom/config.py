"""Configuration handling for git-phantom"""

import json
import os
from dataclasses import dataclass, field
from typing import List, Mapping

from git_phantom.constants import DEFAULT_SHELL, PROJECT_CONFIG_FILE
from git_phantom.exceptions import ConfigParseError, ConfigValidationError
from git_phantom.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass
class Config:
    """Runtime options for one invocation."""

    verbose: bool = False
    debug: bool = False
    shell: str = DEFAULT_SHELL

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_shell()

    def _validate_shell(self):
        """Validate shell is not empty."""
        if not self.shell or not self.shell.strip():
            raise ValueError("shell cannot be empty")
        self.shell = self.shell.strip()

    def to_dict(self) -> dict:
        return {
            "verbose": self.verbose,
            "debug": self.debug,
            "shell": self.shell,
        }

    def get(self, key: str, default=None):
        """Get config value by key."""
        return getattr(self, key, default)

    @classmethod
    def from_dict(cls, config_dict: dict) -> "Config":
        """Create Config from dictionary, ignoring unknown keys."""
        known_fields = {"verbose", "debug", "shell"}
        filtered = {k: v for k, v in config_dict.items() if k in known_fields}
        return cls(**filtered)

    @classmethod
    def from_env(cls, env: Mapping[str, str], verbose: bool = False, debug: bool = False) -> "Config":
        """Build the runtime config, taking the shell from $SHELL."""
        return cls(verbose=verbose, debug=debug, shell=env.get("SHELL") or DEFAULT_SHELL)


@dataclass
class ProjectConfig:
    """Per-repository settings read from phantom.config.json."""

    copy_files: List[str] = field(default_factory=list)
    post_create_commands: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: object) -> "ProjectConfig":
        """Validate the parsed JSON document and build a ProjectConfig.

        Raises:
            ConfigValidationError: the document has the wrong shape
        """
        if not isinstance(data, dict):
            raise ConfigValidationError("Configuration must be an object")

        post_create = data.get("postCreate")
        if post_create is None:
            return cls()
        if not isinstance(post_create, dict):
            raise ConfigValidationError("postCreate must be an object")

        return cls(
            copy_files=_string_list(post_create, "copyFiles"),
            post_create_commands=_string_list(post_create, "commands"),
        )


def _string_list(section: dict, key: str) -> List[str]:
    value = section.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ConfigValidationError(f"postCreate.{key} must be an array")
    if not all(isinstance(item, str) for item in value):
        raise ConfigValidationError(f"postCreate.{key} must contain only strings")
    return list(value)


def load_project_config(git_root: str) -> ProjectConfig:
    """Load phantom.config.json from the repository root.

    A missing file is not an error: the defaults apply.

    Raises:
        ConfigParseError: the file is not valid JSON
        ConfigValidationError: the file has the wrong shape
    """
    config_path = os.path.join(git_root, PROJECT_CONFIG_FILE)
    try:
        with open(config_path, encoding="utf-8") as f:
            content = f.read()
    except FileNotFoundError:
        logger.debug(f"No {PROJECT_CONFIG_FILE} in {git_root}")
        return ProjectConfig()

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ConfigParseError(str(e)) from e

    config = ProjectConfig.from_dict(data)
    logger.debug(f"Loaded {config_path}: {config}")
    return config