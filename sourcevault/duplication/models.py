"""Duplicated blocks detected for a file."""

from dataclasses import dataclass
from typing import Any

from sourcevault.exceptions import ReportError


@dataclass(frozen=True, order=True)
class TextBlock:
    """Inclusive line range. Natural order is by start line, then end line."""

    start: int
    end: int

    def __post_init__(self):
        if self.start < 1 or self.end < self.start:
            raise ValueError(f"Invalid text block [{self.start}, {self.end}]")

    def contains(self, line: int) -> bool:
        return self.start <= line <= self.end


@dataclass(frozen=True)
class Duplicate:
    """A copy of the original block.

    file_key is None for a copy inside the same file (inner duplicate).
    """

    text_block: TextBlock
    file_key: str | None = None

    @property
    def is_inner(self) -> bool:
        return self.file_key is None


@dataclass(frozen=True)
class Duplication:
    original: TextBlock
    duplicates: tuple[Duplicate, ...]

    @classmethod
    def from_dict(cls, obj: dict[str, Any]) -> "Duplication":
        try:
            original = TextBlock(obj["original"]["start"], obj["original"]["end"])
            duplicates = tuple(
                Duplicate(TextBlock(d["start"], d["end"]), d.get("file_key"))
                for d in obj.get("duplicates", [])
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ReportError(f"duplication: malformed entry {obj!r}") from e
        if not duplicates:
            raise ReportError(f"duplication: original {original} has no duplicates")
        return cls(original=original, duplicates=duplicates)

    def to_dict(self) -> dict[str, Any]:
        duplicates = []
        for duplicate in self.duplicates:
            entry: dict[str, Any] = {
                "start": duplicate.text_block.start,
                "end": duplicate.text_block.end,
            }
            if duplicate.file_key is not None:
                entry["file_key"] = duplicate.file_key
            duplicates.append(entry)
        return {
            "original": {"start": self.original.start, "end": self.original.end},
            "duplicates": duplicates,
        }
