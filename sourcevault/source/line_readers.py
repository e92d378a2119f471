"""Per-file set of line readers and the resources they hold."""

from collections.abc import Callable
from typing import Protocol

from sourcevault.component.tree import Component
from sourcevault.duplication.repository import DuplicationRepository
from sourcevault.report.reader import ReportReader
from sourcevault.scm.models import Changeset
from sourcevault.scm.repository import ScmInfoRepository
from sourcevault.utils.logging import logger

from .linereader import (
    CoverageLineReader,
    DuplicationLineReader,
    HighlightingLineReader,
    LineReader,
    RangeOffsetConverter,
    ScmLineReader,
    SymbolsLineReader,
)


class Closeable(Protocol):
    def close(self) -> None: ...


class ResourceScope:
    """Owns every resource acquired during one file visit.

    On exit, all registered resources are closed in reverse registration
    order. Every close is attempted even if an earlier one fails. A close
    failure never replaces an exception raised by the body; when the body
    succeeded, the first close failure is raised once all closes ran.
    """

    def __init__(self):
        self._resources: list[Closeable] = []

    def register(self, resource: Closeable):
        self._resources.append(resource)
        return resource

    def close(self) -> BaseException | None:
        """Close everything and return the first failure, if any."""
        first_error = None
        while self._resources:
            resource = self._resources.pop()
            try:
                resource.close()
            except Exception as e:
                logger.warning(f"Failed to release {type(resource).__name__}: {e}")
                if first_error is None:
                    first_error = e
        return first_error

    def __enter__(self) -> "ResourceScope":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        error = self.close()
        if exc is None and error is not None:
            raise error
        return False


class LineReaders:
    """The readers of one file, in the order they annotate each line.

    Coverage, then SCM when the file has SCM data, then highlighting,
    symbols and duplication. Later readers see what earlier ones wrote.
    """

    def __init__(self, readers: list[LineReader], scm_line_reader: ScmLineReader | None):
        self.readers = readers
        self._scm_line_reader = scm_line_reader

    @classmethod
    def open(
        cls,
        scope: ResourceScope,
        report_reader: ReportReader,
        scm_info_repository: ScmInfoRepository,
        duplication_repository: DuplicationRepository,
        file: Component,
    ) -> "LineReaders":
        """Acquire the report streams of the file into scope and build the readers."""
        ref = file.report_attributes.ref
        readers: list[LineReader] = []

        coverage = _acquire(scope, report_reader.read_component_coverage, ref)
        readers.append(CoverageLineReader(coverage))

        scm_line_reader = None
        scm_info = scm_info_repository.get_scm_info(file)
        if scm_info is not None:
            scm_line_reader = ScmLineReader(scm_info)
            readers.append(scm_line_reader)

        range_offset_converter = RangeOffsetConverter()
        highlighting = _acquire(scope, report_reader.read_component_syntax_highlighting, ref)
        readers.append(HighlightingLineReader(file, highlighting, range_offset_converter))

        symbols = _acquire(scope, report_reader.read_component_symbols, ref)
        readers.append(SymbolsLineReader(file, symbols, range_offset_converter))

        readers.append(DuplicationLineReader(duplication_repository.get_duplications(file)))
        return cls(readers, scm_line_reader)

    @property
    def latest_change_with_revision(self) -> Changeset | None:
        if self._scm_line_reader is None:
            return None
        return self._scm_line_reader.latest_change_with_revision


def _acquire(scope: ResourceScope, open_stream: Callable[[int], Closeable], ref: int):
    return scope.register(open_stream(ref))
