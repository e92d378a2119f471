"""Line hits and branch conditions from the coverage report."""

from collections.abc import Iterator

from sourcevault.report.models import LineCoverage
from sourcevault.source.file_source_data import LineBuilder

from .base import LineReader


class CoverageLineReader(LineReader):
    """Consumes coverage records sorted by line, one look-ahead record at a time."""

    def __init__(self, coverage_iterator: Iterator[LineCoverage]):
        self._coverage_iterator = coverage_iterator
        self._current: LineCoverage | None = None

    def read(self, line_builder: LineBuilder) -> None:
        coverage = self._next_coverage_matching_line(line_builder.line)
        if coverage is None:
            return
        if coverage.hits is not None:
            line_builder.line_hits = 1 if coverage.hits else 0
        if coverage.conditions is not None and coverage.covered_conditions is not None:
            line_builder.conditions = coverage.conditions
            line_builder.covered_conditions = coverage.covered_conditions
        self._current = None

    def _next_coverage_matching_line(self, line: int) -> LineCoverage | None:
        # records for lines already passed can never match again
        while self._current is None or self._current.line < line:
            self._current = next(self._coverage_iterator, None)
            if self._current is None:
                return None
        if self._current.line == line:
            return self._current
        return None
