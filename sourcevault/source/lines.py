"""Raw line text of files, read from the analysis report."""

from typing import TYPE_CHECKING

from sourcevault.component.tree import Component, ComponentType
from sourcevault.report.closeable import CloseableIterator

if TYPE_CHECKING:
    from sourcevault.report.reader import ReportReader


class SourceLinesRepository:
    def __init__(self, report_reader: "ReportReader"):
        self._report_reader = report_reader

    def read_lines(self, file: Component) -> CloseableIterator[str]:
        """Open a forward iterator over the lines of a file.

        Raises:
            ValueError: If the component is not a file
            FileNotFoundError: If the report holds no source for the file
        """
        if file.type is not ComponentType.FILE:
            raise ValueError(f"Component {file.key} is not a file")
        lines = self._report_reader.read_file_source(file.report_attributes.ref)
        if lines is None:
            raise FileNotFoundError(f"File source not found in report for {file.key}")
        return lines
