"""Author, date and revision of each line from SCM data."""

from sourcevault.scm.models import Changeset, ScmInfo
from sourcevault.source.file_source_data import LineBuilder

from .base import LineReader


class ScmLineReader(LineReader):
    def __init__(self, scm_info: ScmInfo):
        self._scm_info = scm_info
        self.latest_change_with_revision: Changeset | None = None

    def read(self, line_builder: LineBuilder) -> None:
        changeset = self._scm_info.get_changeset_for_line(line_builder.line)
        if changeset is None:
            return
        if changeset.author is not None:
            line_builder.scm_author = changeset.author
        if changeset.revision is not None:
            line_builder.scm_revision = changeset.revision
            self._update_latest_change_with_revision(changeset)
        line_builder.scm_date = changeset.date

    def _update_latest_change_with_revision(self, changeset: Changeset) -> None:
        # on equal dates the changeset seen last wins
        latest = self.latest_change_with_revision
        if latest is None or changeset.date >= latest.date:
            self.latest_change_with_revision = changeset
