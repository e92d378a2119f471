"""Line attribution from git blame."""

import subprocess
from pathlib import Path

from sourcevault.scm.models import Changeset
from sourcevault.utils.logging import logger

NOT_COMMITTED_REVISION = "0" * 40


def parse_line_porcelain(output: str) -> list[Changeset | None]:
    """Turn `git blame --line-porcelain` output into one changeset per line.

    Uncommitted lines map to None.
    """
    changesets: list[Changeset | None] = []
    commit = None
    headers: dict[str, str] = {}

    for raw in output.split("\n"):
        if raw.startswith("\t"):
            changesets.append(_to_changeset(commit, headers))
            commit = None
            headers = {}
            continue
        key, _, value = raw.partition(" ")
        if commit is None:
            # each group opens with "<sha> <orig line> <final line> [<count>]"
            commit = key
            continue
        headers[key] = value

    return changesets


def _to_changeset(commit: str | None, headers: dict[str, str]) -> Changeset | None:
    if not commit or commit == NOT_COMMITTED_REVISION or "author-time" not in headers:
        return None
    author = headers.get("author-mail", "").strip("<>") or headers.get("author") or None
    return Changeset(date=int(headers["author-time"]) * 1000, author=author, revision=commit)


class GitBlameCollector:
    """Runs git blame per file under a project root.

    Any git failure means "no SCM data" for that file: it is logged and
    None is returned.
    """

    def __init__(self, root_path: Path, timeout: int = 30):
        self.root_path = Path(root_path).resolve()
        self.timeout = timeout

    def blame(self, relative_path: str) -> list[Changeset | None] | None:
        cmd = ["git", "blame", "--line-porcelain", "--", relative_path]
        try:
            result = subprocess.run(
                cmd,
                cwd=str(self.root_path),
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired:
            logger.warning(f"git blame timed out after {self.timeout} seconds for {relative_path}")
            return None
        except FileNotFoundError:
            logger.warning("Git command not found, no SCM data collected")
            return None

        if result.returncode != 0:
            logger.debug(f"No git blame for {relative_path}: {result.stderr.strip()}")
            return None

        changesets = parse_line_porcelain(result.stdout)
        if not any(c is not None for c in changesets):
            return None
        return changesets
