"""Copying untracked files such as .env into a freshly created worktree."""

import os
import shutil
from dataclasses import dataclass, field
from typing import Iterable, List

from git_phantom.exceptions import PhantomError
from git_phantom.utils.logging import get_logger

logger = get_logger(__name__)


class FileCopyError(PhantomError):
    """Exception raised when a file exists but cannot be copied."""

    def __init__(self, file: str, message: str):
        self.file = file
        super().__init__(f"Failed to copy {file}: {message}")


@dataclass
class CopyFilesResult:
    copied_files: List[str] = field(default_factory=list)
    skipped_files: List[str] = field(default_factory=list)
    rejected_files: List[str] = field(default_factory=list)


def _stays_inside(base_dir: str, file: str) -> bool:
    base = os.path.normpath(os.path.abspath(base_dir))
    path = os.path.normpath(os.path.join(base, file))
    return path != base and os.path.commonpath([base, path]) == base


def copy_files(source_dir: str, target_dir: str, files: Iterable[str]) -> CopyFilesResult:
    """Copy relative paths from source_dir to the same place under target_dir.

    Missing sources and anything that is not a regular file are skipped.
    Absolute paths and paths leading out of either directory are rejected
    with a warning and never read or written.

    Raises:
        FileCopyError: on the first file that exists but cannot be copied
    """
    result = CopyFilesResult()

    for file in files:
        if os.path.isabs(file) or not (
            _stays_inside(source_dir, file) and _stays_inside(target_dir, file)
        ):
            logger.warning(f"Refusing to copy {file}: path is outside the repository")
            result.rejected_files.append(file)
            continue

        source_path = os.path.join(source_dir, file)
        target_path = os.path.join(target_dir, file)

        if not os.path.isfile(source_path):
            logger.debug(f"Skipping {file}: not a regular file in {source_dir}")
            result.skipped_files.append(file)
            continue

        try:
            os.makedirs(os.path.dirname(target_path), exist_ok=True)
            shutil.copy2(source_path, target_path)
        except OSError as e:
            raise FileCopyError(file, e.strerror or str(e)) from e

        logger.debug(f"Copied {file} to {target_dir}")
        result.copied_files.append(file)

    return result
