"""Builds an analysis report from a project directory."""

import io
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from sourcevault.report.models import ComponentRecord, LineCoverage, Metadata
from sourcevault.report.reader import iter_source_lines
from sourcevault.report.writer import ReportWriter
from sourcevault.system import System2
from sourcevault.utils.logging import logger

from .blame import GitBlameCollector
from .coverage import load_coverage_json
from .python_syntax import PythonSyntax
from .walker import FileWalker

PROJECT_REF = 1

LANGUAGES_BY_SUFFIX = {
    ".py": "py",
    ".pyi": "py",
    ".js": "js",
    ".jsx": "js",
    ".ts": "ts",
    ".tsx": "ts",
    ".java": "java",
    ".go": "go",
    ".rs": "rust",
    ".md": "md",
}


@dataclass
class ScanResult:
    project_key: str
    files: int = 0
    directories: int = 0
    with_scm: int = 0
    with_coverage: int = 0
    with_highlighting: int = 0


class ReportBuilder:
    """Walks a project and writes everything known about each file into a report."""

    def __init__(
        self,
        root_path: Path,
        report_dir: Path,
        config: dict[str, Any],
        project_key: str | None = None,
        coverage_file: Path | None = None,
        scm_enabled: bool = True,
        system2: System2 | None = None,
    ):
        self.root_path = Path(root_path).resolve()
        self.writer = ReportWriter(report_dir)
        self.config = config
        self.project_key = project_key or self.root_path.name
        self.coverage_file = coverage_file
        self.scm_enabled = scm_enabled and config["scm"]["enabled"]
        self.system2 = system2 or System2()
        self._next_ref = PROJECT_REF + 1

    def build(self) -> ScanResult:
        result = ScanResult(project_key=self.project_key)
        paths = FileWalker(self.root_path, self.config).walk()

        coverage_by_path: dict[str, list[LineCoverage]] = {}
        if self.coverage_file is not None:
            coverage_by_path = load_coverage_json(self.coverage_file, self.root_path)

        blame = None
        if self.scm_enabled:
            blame = GitBlameCollector(self.root_path, timeout=self.config["limits"]["blame_timeout"])

        children = self._write_directory("", _tree_of(paths), coverage_by_path, blame, result)
        self.writer.write_component(
            ComponentRecord(ref=PROJECT_REF, type="PROJECT", key=self.project_key, children=tuple(children))
        )
        self.writer.write_metadata(
            Metadata(project_key=self.project_key, root_component_ref=PROJECT_REF, analysis_date=self.system2.now())
        )
        logger.info(
            f"Report for {self.project_key}: {result.files} files, {result.with_scm} with SCM, "
            f"{result.with_coverage} with coverage, {result.with_highlighting} highlighted"
        )
        return result

    def _write_directory(self, prefix, tree, coverage_by_path, blame, result) -> list[int]:
        refs = []
        for name in sorted(tree):
            path = f"{prefix}{name}"
            subtree = tree[name]
            if subtree is None:
                text = self._read_text(path)
                if text is None:
                    continue
                ref = self._allocate_ref()
                refs.append(ref)
                self._write_file(ref, path, text, coverage_by_path.get(path), blame, result)
                continue
            ref = self._allocate_ref()
            refs.append(ref)
            children = self._write_directory(f"{path}/", subtree, coverage_by_path, blame, result)
            self.writer.write_component(
                ComponentRecord(ref=ref, type="DIRECTORY", path=path, children=tuple(children))
            )
            result.directories += 1
        return refs

    def _read_text(self, path: str) -> str | None:
        try:
            with open(self.root_path / path, encoding="utf-8", newline="") as f:
                return f.read()
        except UnicodeDecodeError as e:
            logger.warning(f"Skipping {path}, not valid UTF-8: {e}")
            return None

    def _write_file(self, ref, path, text, coverage, blame, result) -> None:
        self.writer.write_file_source(ref, text)
        result.files += 1

        language = LANGUAGES_BY_SUFFIX.get(Path(path).suffix)
        self.writer.write_component(
            ComponentRecord(ref=ref, type="FILE", path=path, lines=_count_lines(text), language=language)
        )

        if coverage:
            self.writer.write_component_coverage(ref, coverage)
            result.with_coverage += 1

        if blame is not None:
            changesets = blame.blame(path)
            if changesets is not None:
                self.writer.write_component_changesets(ref, changesets)
                result.with_scm += 1

        if language == "py":
            analyzed = PythonSyntax(text).analyze(path)
            if analyzed is not None:
                rules, significant_code = analyzed
                self.writer.write_component_syntax_highlighting(ref, rules)
                self.writer.write_component_significant_code(ref, significant_code)
                result.with_highlighting += 1

    def _allocate_ref(self) -> int:
        ref = self._next_ref
        self._next_ref += 1
        return ref


def _tree_of(paths: list[str]) -> dict[str, Any]:
    """Nest relative paths into dicts; files map to None."""
    tree: dict[str, Any] = {}
    for path in paths:
        *directories, name = path.split("/")
        node = tree
        for directory in directories:
            node = node.setdefault(directory, {})
        node[name] = None
    return tree


def _count_lines(text: str) -> int:
    return sum(1 for _ in iter_source_lines(io.StringIO(text, newline="")))
