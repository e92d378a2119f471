"""Pytest configuration and fixtures."""

from pathlib import Path

import pytest

from sourcevault.component import Component, ComponentType, ReportAttributes, build_component_tree, component_uuid
from sourcevault.duplication import DuplicationRepository
from sourcevault.report import ComponentRecord, Metadata, ReportReader, ReportWriter
from sourcevault.scm import ScmInfoRepository
from sourcevault.source import SourceLinesHashRepository, SourceLinesRepository
from sourcevault.step import PersistFileSourcesStep
from sourcevault.store import DatabaseManager
from sourcevault.system import FixedClock

PROJECT_KEY = "proj"


class ProjectReport:
    """Writes a one-level project report: a project whose children are all files."""

    def __init__(self, report_dir: Path, project_key: str = PROJECT_KEY):
        self.report_dir = report_dir
        self.writer = ReportWriter(report_dir)
        self.project_key = project_key
        self.file_refs: list[int] = []

    def add_file(
        self,
        path: str,
        text: str | None,
        coverage=None,
        highlighting=None,
        symbols=None,
        changesets=None,
        duplications=None,
        significant_code=None,
    ) -> int:
        """Add a file; text=None leaves its source out of the report."""
        ref = len(self.file_refs) + 2
        self.file_refs.append(ref)
        self.writer.write_component(ComponentRecord(ref=ref, type="FILE", path=path))
        if text is not None:
            self.writer.write_file_source(ref, text)
        if coverage is not None:
            self.writer.write_component_coverage(ref, coverage)
        if highlighting is not None:
            self.writer.write_component_syntax_highlighting(ref, highlighting)
        if symbols is not None:
            self.writer.write_component_symbols(ref, symbols)
        if changesets is not None:
            self.writer.write_component_changesets(ref, changesets)
        if duplications is not None:
            self.writer.write_component_duplications(ref, duplications)
        if significant_code is not None:
            self.writer.write_component_significant_code(ref, significant_code)
        return ref

    def build(self) -> ReportReader:
        self.writer.write_component(
            ComponentRecord(ref=1, type="PROJECT", key=self.project_key, children=tuple(self.file_refs))
        )
        self.writer.write_metadata(Metadata(project_key=self.project_key, root_component_ref=1))
        return ReportReader(self.report_dir)


@pytest.fixture
def new_report(tmp_path):
    """Factory of empty project reports, each in its own directory."""
    counter = iter(range(1, 1000))

    def _new(project_key: str = PROJECT_KEY) -> ProjectReport:
        return ProjectReport(tmp_path / f"report-{next(counter)}", project_key)

    return _new


@pytest.fixture
def database(tmp_path):
    """Create a temporary sources database with its schema."""
    manager = DatabaseManager(tmp_path / "sources.db")
    manager.create_schema()
    yield manager
    manager.close()


@pytest.fixture
def clock():
    return FixedClock(1_000)


def make_file(path: str = "src/a.py", ref: int = 2) -> Component:
    key = f"{PROJECT_KEY}:{path}"
    return Component(
        type=ComponentType.FILE,
        key=key,
        uuid=component_uuid(key),
        name=path.rsplit("/", 1)[-1],
        report_attributes=ReportAttributes(ref=ref, path=path),
    )


def run_step(report_reader: ReportReader, database: DatabaseManager, clock: FixedClock):
    """Run the persist step over a report and return its stats."""
    return PersistFileSourcesStep(
        db=database,
        system2=clock,
        root=build_component_tree(report_reader),
        report_reader=report_reader,
        source_lines_repository=SourceLinesRepository(report_reader),
        scm_info_repository=ScmInfoRepository(report_reader),
        duplication_repository=DuplicationRepository(report_reader),
        source_lines_hash_repository=SourceLinesHashRepository(report_reader),
    ).execute()
