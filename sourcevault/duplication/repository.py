"""Resolved duplications per file, backed by the analysis report."""

from typing import TYPE_CHECKING

from sourcevault.component.tree import Component

from .models import Duplication

if TYPE_CHECKING:
    from sourcevault.report.reader import ReportReader


class DuplicationRepository:
    def __init__(self, report_reader: "ReportReader"):
        self._report_reader = report_reader

    def get_duplications(self, file: Component) -> list[Duplication]:
        return self._report_reader.read_component_duplications(file.report_attributes.ref)
