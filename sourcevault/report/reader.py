"""Lazy reader over an analysis report directory.

Per-component streams are returned as CloseableIterator so the caller can
hold them for exactly one file visit. A missing stream file means "no data"
and yields an empty iterator.
"""

import json
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any, TypeVar

from sourcevault.duplication.models import Duplication
from sourcevault.exceptions import ReportError
from sourcevault.scm.models import Changeset

from .closeable import CloseableIterator
from .models import (
    ComponentRecord,
    LineCoverage,
    LineSignificantCode,
    Metadata,
    Symbol,
    SyntaxHighlightingRule,
)

T = TypeVar("T")

METADATA_FILE = "metadata.json"


def component_file_name(kind: str, ref: int, suffix: str) -> str:
    return f"{kind}-{ref}.{suffix}"


def iter_source_lines(handle) -> Iterator[str]:
    """Yield lines without their terminator.

    A trailing line break produces a final empty line. An empty file yields
    nothing.
    """
    ended_with_break = False
    for raw in handle:
        ended_with_break = raw.endswith(("\n", "\r"))
        yield raw.rstrip("\r\n")
    if ended_with_break:
        yield ""


class ReportReader:
    """Reads the files written by ReportWriter."""

    def __init__(self, report_dir: Path):
        self.report_dir = Path(report_dir)
        if not self.report_dir.is_dir():
            raise ReportError(f"Report directory not found: {self.report_dir}")

    def read_metadata(self) -> Metadata:
        return Metadata.from_dict(self._read_json(self.report_dir / METADATA_FILE, required=True))

    def read_component(self, ref: int) -> ComponentRecord:
        path = self.report_dir / component_file_name("component", ref, "json")
        return ComponentRecord.from_dict(self._read_json(path, required=True))

    def read_component_coverage(self, ref: int) -> CloseableIterator[LineCoverage]:
        return self._jsonl("coverages", ref, LineCoverage.from_dict)

    def read_component_syntax_highlighting(self, ref: int) -> CloseableIterator[SyntaxHighlightingRule]:
        return self._jsonl("syntax-highlightings", ref, SyntaxHighlightingRule.from_dict)

    def read_component_symbols(self, ref: int) -> CloseableIterator[Symbol]:
        return self._jsonl("symbols", ref, Symbol.from_dict)

    def read_component_significant_code(self, ref: int) -> CloseableIterator[LineSignificantCode] | None:
        """Return None when the report carries no significant code for the component."""
        path = self.report_dir / component_file_name("significant-code", ref, "jsonl")
        if not path.exists():
            return None
        return self._jsonl("significant-code", ref, LineSignificantCode.from_dict)

    def read_component_changesets(self, ref: int) -> list[Changeset | None] | None:
        """Changeset per line (index 0 is line 1), or None without SCM data."""
        path = self.report_dir / component_file_name("changesets", ref, "json")
        payload = self._read_json(path, required=False)
        if payload is None:
            return None

        changesets = [Changeset.from_dict(c) for c in payload.get("changesets", [])]
        by_line: list[Changeset | None] = []
        for index in payload.get("changeset_index_by_line", []):
            if index is None:
                by_line.append(None)
                continue
            if not isinstance(index, int) or not 0 <= index < len(changesets):
                raise ReportError(f"{path}: changeset index {index!r} out of range")
            by_line.append(changesets[index])
        return by_line

    def read_component_duplications(self, ref: int) -> list[Duplication]:
        path = self.report_dir / component_file_name("duplications", ref, "json")
        payload = self._read_json(path, required=False)
        if payload is None:
            return []
        return [Duplication.from_dict(d) for d in payload.get("duplications", [])]

    def read_file_source(self, ref: int) -> CloseableIterator[str] | None:
        path = self.report_dir / component_file_name("source", ref, "txt")
        if not path.exists():
            return None
        handle = open(path, encoding="utf-8", newline="")
        return CloseableIterator(iter_source_lines(handle), on_close=handle.close)

    def _jsonl(self, kind: str, ref: int, decode: Callable[[dict[str, Any]], T]) -> CloseableIterator[T]:
        path = self.report_dir / component_file_name(kind, ref, "jsonl")
        if not path.exists():
            return CloseableIterator.empty()
        handle = open(path, encoding="utf-8")
        return CloseableIterator(_decode_jsonl(path, handle, decode), on_close=handle.close)

    @staticmethod
    def _read_json(path: Path, required: bool) -> dict[str, Any] | None:
        if not path.exists():
            if required:
                raise ReportError(f"Missing report file: {path}")
            return None
        try:
            with open(path, encoding="utf-8") as f:
                payload = json.load(f)
        except json.JSONDecodeError as e:
            raise ReportError(f"Invalid JSON in {path}: {e}") from e
        if not isinstance(payload, dict):
            raise ReportError(f"{path}: expected a JSON object")
        return payload


def _decode_jsonl(path: Path, handle, decode: Callable[[dict[str, Any]], T]) -> Iterator[T]:
    for line_number, raw in enumerate(handle, start=1):
        stripped = raw.strip()
        if not stripped:
            continue
        try:
            obj = json.loads(stripped)
        except json.JSONDecodeError as e:
            raise ReportError(f"Invalid JSON in {path} at line {line_number}: {e}") from e
        if not isinstance(obj, dict):
            raise ReportError(f"{path} line {line_number}: expected a JSON object")
        yield decode(obj)
