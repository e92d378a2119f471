"""SCM attribution of file lines."""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from sourcevault.exceptions import ReportError


@dataclass(frozen=True)
class Changeset:
    """Who last touched a line, when (epoch ms), and in which revision."""

    date: int
    author: str | None = None
    revision: str | None = None

    @classmethod
    def from_dict(cls, obj: dict[str, Any]) -> "Changeset":
        date = obj.get("date")
        if not isinstance(date, int) or isinstance(date, bool):
            raise ReportError(f"changeset: field 'date' must be an integer, got {date!r}")
        return cls(date=date, author=obj.get("author") or None, revision=obj.get("revision") or None)

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"date": self.date}
        if self.author is not None:
            out["author"] = self.author
        if self.revision is not None:
            out["revision"] = self.revision
        return out


class ScmInfo:
    """Changeset of every line of one file.

    Lines are 1-based. A line without a changeset returns None.
    """

    def __init__(self, changesets_by_line: Sequence[Changeset | None]):
        if not any(c is not None for c in changesets_by_line):
            raise ValueError("ScmInfo requires at least one changeset")
        self._changesets = list(changesets_by_line)

    def get_changeset_for_line(self, line: int) -> Changeset | None:
        if line < 1 or line > len(self._changesets):
            return None
        return self._changesets[line - 1]
