"""Versioned per-line hashes.

Version 0 hashes the whole line, version 1 only the significant code span
reported for the line. Both ignore spaces and tabs, and hash an empty reduced
line to the empty string.
"""

from enum import IntEnum
from typing import TYPE_CHECKING

from sourcevault.component.tree import Component
from sourcevault.exceptions import ReportError
from sourcevault.utils.helpers import md5_hex

if TYPE_CHECKING:
    from sourcevault.report.reader import ReportReader


class LineHashVersion(IntEnum):
    WITHOUT_SIGNIFICANT_CODE = 0
    WITH_SIGNIFICANT_CODE = 1


def compute_line_hash(line: str) -> str:
    reduced = line.replace(" ", "").replace("\t", "")
    if not reduced:
        return ""
    return md5_hex(reduced)


class LineHashesComputer:
    """Accumulates the hash of each line, in order."""

    def __init__(self):
        self._line_hashes: list[str] = []

    def add_line(self, line: str) -> None:
        self._line_hashes.append(compute_line_hash(line))

    def get_line_hashes(self) -> list[str]:
        return list(self._line_hashes)


class SignificantCodeLineHashesComputer(LineHashesComputer):
    """Hashes only the significant code span of each line."""

    def __init__(self, ranges_by_line: dict[int, tuple[int, int]]):
        super().__init__()
        self._ranges_by_line = ranges_by_line

    def add_line(self, line: str) -> None:
        line_number = len(self._line_hashes) + 1
        span = self._ranges_by_line.get(line_number)
        if span is None:
            self._line_hashes.append("")
            return
        start, end = span
        self._line_hashes.append(compute_line_hash(line[start:end]))


class SourceLinesHashRepository:
    """Chooses the line hash version of a file and builds its computer.

    Significant code ranges of the last queried file are kept so the version
    lookup and the computer creation read the report only once.
    """

    def __init__(self, report_reader: "ReportReader"):
        self._report_reader = report_reader
        self._cached_uuid: str | None = None
        self._cached_ranges: dict[int, tuple[int, int]] | None = None

    def get_line_hashes_version(self, file: Component) -> LineHashVersion:
        if self._significant_code_ranges(file) is not None:
            return LineHashVersion.WITH_SIGNIFICANT_CODE
        return LineHashVersion.WITHOUT_SIGNIFICANT_CODE

    def get_line_hashes_computer_to_persist(self, file: Component) -> LineHashesComputer:
        ranges = self._significant_code_ranges(file)
        if ranges is None:
            return LineHashesComputer()
        return SignificantCodeLineHashesComputer(ranges)

    def _significant_code_ranges(self, file: Component) -> dict[int, tuple[int, int]] | None:
        if self._cached_uuid == file.uuid:
            return self._cached_ranges

        ranges: dict[int, tuple[int, int]] | None = None
        significant_code = self._report_reader.read_component_significant_code(file.report_attributes.ref)
        if significant_code is not None:
            ranges = {}
            with significant_code:
                for line_range in significant_code:
                    if line_range.line in ranges:
                        raise ReportError(
                            f"Duplicate significant code range for line {line_range.line} of {file.key}"
                        )
                    ranges[line_range.line] = (line_range.start_offset, line_range.end_offset)

        self._cached_uuid = file.uuid
        self._cached_ranges = ranges
        return ranges
