"""Writes an analysis report directory in the layout ReportReader expects."""

import json
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Any

from sourcevault.duplication.models import Duplication
from sourcevault.scm.models import Changeset

from .models import (
    ComponentRecord,
    LineCoverage,
    LineSignificantCode,
    Metadata,
    Symbol,
    SyntaxHighlightingRule,
)
from .reader import METADATA_FILE, component_file_name


class ReportWriter:
    """Each write_* call replaces the corresponding file."""

    def __init__(self, report_dir: Path):
        self.report_dir = Path(report_dir)
        self.report_dir.mkdir(parents=True, exist_ok=True)

    def write_metadata(self, metadata: Metadata) -> None:
        self._write_json(self.report_dir / METADATA_FILE, metadata.to_dict())

    def write_component(self, component: ComponentRecord) -> None:
        self._write_json(self._path("component", component.ref, "json"), component.to_dict())

    def write_file_source(self, ref: int, text: str) -> None:
        with open(self._path("source", ref, "txt"), "w", encoding="utf-8", newline="") as f:
            f.write(text)

    def write_component_coverage(self, ref: int, coverage: Iterable[LineCoverage]) -> None:
        self._write_jsonl(self._path("coverages", ref, "jsonl"), (c.to_dict() for c in coverage))

    def write_component_syntax_highlighting(self, ref: int, rules: Iterable[SyntaxHighlightingRule]) -> None:
        self._write_jsonl(self._path("syntax-highlightings", ref, "jsonl"), (r.to_dict() for r in rules))

    def write_component_symbols(self, ref: int, symbols: Iterable[Symbol]) -> None:
        self._write_jsonl(self._path("symbols", ref, "jsonl"), (s.to_dict() for s in symbols))

    def write_component_significant_code(self, ref: int, ranges: Iterable[LineSignificantCode]) -> None:
        self._write_jsonl(self._path("significant-code", ref, "jsonl"), (r.to_dict() for r in ranges))

    def write_component_changesets(self, ref: int, changesets_by_line: Sequence[Changeset | None]) -> None:
        """Store each distinct changeset once and reference it per line."""
        changesets: list[Changeset] = []
        index_by_changeset: dict[Changeset, int] = {}
        index_by_line: list[int | None] = []
        for changeset in changesets_by_line:
            if changeset is None:
                index_by_line.append(None)
                continue
            if changeset not in index_by_changeset:
                index_by_changeset[changeset] = len(changesets)
                changesets.append(changeset)
            index_by_line.append(index_by_changeset[changeset])

        self._write_json(
            self._path("changesets", ref, "json"),
            {
                "changesets": [c.to_dict() for c in changesets],
                "changeset_index_by_line": index_by_line,
            },
        )

    def write_component_duplications(self, ref: int, duplications: Iterable[Duplication]) -> None:
        self._write_json(
            self._path("duplications", ref, "json"),
            {"duplications": [d.to_dict() for d in duplications]},
        )

    def _path(self, kind: str, ref: int, suffix: str) -> Path:
        return self.report_dir / component_file_name(kind, ref, suffix)

    @staticmethod
    def _write_json(path: Path, payload: dict[str, Any]) -> None:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(payload, f, sort_keys=True)
            f.write("\n")

    @staticmethod
    def _write_jsonl(path: Path, rows: Iterable[dict[str, Any]]) -> None:
        with open(path, "w", encoding="utf-8") as f:
            for row in rows:
                f.write(json.dumps(row, sort_keys=True))
                f.write("\n")
