"""Per-file SCM information backed by the analysis report."""

from typing import TYPE_CHECKING

from sourcevault.component.tree import Component
from sourcevault.utils.logging import logger

from .models import ScmInfo

if TYPE_CHECKING:
    from sourcevault.report.reader import ReportReader


class ScmInfoRepository:
    """Serves ScmInfo per file, memoized for the lifetime of the repository."""

    def __init__(self, report_reader: "ReportReader"):
        self._report_reader = report_reader
        self._cache: dict[str, ScmInfo | None] = {}

    def get_scm_info(self, file: Component) -> ScmInfo | None:
        """Return the SCM info of the file, or None when none was reported."""
        if file.uuid not in self._cache:
            self._cache[file.uuid] = self._load(file)
        return self._cache[file.uuid]

    def _load(self, file: Component) -> ScmInfo | None:
        changesets = self._report_reader.read_component_changesets(file.report_attributes.ref)
        if not changesets or all(c is None for c in changesets):
            logger.debug(f"No SCM info for {file.key}")
            return None
        return ScmInfo(changesets)
