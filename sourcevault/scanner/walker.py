"""Directory walking with filtering of build output, binaries and large files."""

import fnmatch
import os
from pathlib import Path
from typing import Any

from sourcevault.utils.logging import logger

SKIP_DIRS = {
    ".git",
    ".hg",
    ".svn",
    ".sourcevault",
    "__pycache__",
    ".mypy_cache",
    ".pytest_cache",
    ".ruff_cache",
    ".tox",
    ".venv",
    "venv",
    "node_modules",
    "dist",
    "build",
    ".idea",
    ".vscode",
}


def is_text_file(file_path: Path) -> bool:
    """Check if file is text (not binary).

    Args:
        file_path: Path to the file to check

    Returns:
        True if file is text, False if binary
    """
    try:
        with open(file_path, "rb") as f:
            chunk = f.read(8192)
    except (FileNotFoundError, PermissionError):
        return False
    if b"\0" in chunk:
        return False
    try:
        chunk.decode("utf-8")
    except UnicodeDecodeError:
        return False
    return True


def load_gitignore_patterns(root_path: Path) -> set[str]:
    """Load plain directory names from .gitignore if it exists.

    Only entries without wildcards or slashes are kept.
    """
    gitignore_path = root_path / ".gitignore"
    patterns = set()
    if not gitignore_path.exists():
        return patterns

    try:
        with open(gitignore_path, encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if not line or line.startswith("#"):
                    continue
                pattern = line.rstrip("/")
                if "/" not in pattern and "*" not in pattern:
                    patterns.add(pattern)
    except OSError as e:
        logger.warning(f"Could not read {gitignore_path}: {e}")
    return patterns


class FileWalker:
    """Collects the text files of a project, sorted by relative path."""

    def __init__(self, root_path: Path, config: dict[str, Any], exclude_patterns: list[str] | None = None):
        """Initialize the file walker.

        Args:
            root_path: Root directory to walk
            config: Runtime configuration
            exclude_patterns: fnmatch patterns of files to leave out
        """
        self.root_path = Path(root_path)
        self.config = config
        self.exclude_patterns = exclude_patterns or []
        self.skip_dirs = SKIP_DIRS | load_gitignore_patterns(self.root_path)

        self.stats = {
            "total_files": 0,
            "text_files": 0,
            "binary_files": 0,
            "large_files": 0,
            "skipped_dirs": 0,
        }

    def _accept(self, file: Path) -> bool:
        relative_path = file.relative_to(self.root_path).as_posix()
        for pattern in self.exclude_patterns:
            if fnmatch.fnmatch(file.name, pattern) or fnmatch.fnmatch(relative_path, pattern):
                return False

        try:
            if file.is_symlink():
                return False
            file_size = file.stat().st_size
        except OSError:
            return False

        if file_size >= self.config["limits"]["max_file_size"]:
            self.stats["large_files"] += 1
            return False
        if not is_text_file(file):
            self.stats["binary_files"] += 1
            return False

        self.stats["text_files"] += 1
        return True

    def walk(self) -> list[str]:
        """Return the relative POSIX paths of every accepted file."""
        files = []
        for dirpath, dirnames, filenames in os.walk(self.root_path):
            self.stats["skipped_dirs"] += len([d for d in dirnames if d in self.skip_dirs])
            dirnames[:] = [d for d in dirnames if d not in self.skip_dirs]

            for filename in filenames:
                self.stats["total_files"] += 1
                file = Path(dirpath) / filename
                if self._accept(file):
                    files.append(file.relative_to(self.root_path).as_posix())

        files.sort()
        logger.debug(f"Walked {self.root_path}: {self.stats}")
        return files
