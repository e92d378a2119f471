"""Step merging every file of the project and persisting what changed.

Files are processed one at a time, each committed on its own as soon as it
is written, so no two encoded files are held at once. The first failure
aborts the step; files committed before it stay stored.
"""

from collections.abc import Mapping
from dataclasses import dataclass

from sourcevault.component.crawler import CrawlerDepthLimit, DepthTraversalCrawler, Order, TypeAwareVisitor
from sourcevault.component.tree import Component
from sourcevault.duplication.repository import DuplicationRepository
from sourcevault.exceptions import PersistSourcesError
from sourcevault.report.reader import ReportReader
from sourcevault.scm.models import Changeset
from sourcevault.scm.repository import ScmInfoRepository
from sourcevault.source.compute import ComputeFileSourceData
from sourcevault.source.file_source_data import FileSourceData, encode_source_data
from sourcevault.source.line_hashes import SourceLinesHashRepository
from sourcevault.source.line_readers import LineReaders, ResourceScope
from sourcevault.source.lines import SourceLinesRepository
from sourcevault.store.database import DatabaseManager
from sourcevault.store.file_source_dao import FileSourceDao, FileSourceDto, FileSourceHashes
from sourcevault.system import System2
from sourcevault.utils.helpers import md5_hex
from sourcevault.utils.logging import logger

from .decision import PersistAction, decide
from .previous_state import load_previous_state


@dataclass
class PersistStats:
    """Outcome counts of one run."""

    inserted: int = 0
    updated: int = 0
    skipped: int = 0

    @property
    def files(self) -> int:
        return self.inserted + self.updated + self.skipped

    def record(self, action: PersistAction) -> None:
        if action is PersistAction.INSERT:
            self.inserted += 1
        elif action is PersistAction.UPDATE:
            self.updated += 1
        else:
            self.skipped += 1


class PersistFileSourcesStep:
    description = "Persist sources"

    def __init__(
        self,
        db: DatabaseManager,
        system2: System2,
        root: Component,
        report_reader: ReportReader,
        source_lines_repository: SourceLinesRepository,
        scm_info_repository: ScmInfoRepository,
        duplication_repository: DuplicationRepository,
        source_lines_hash_repository: SourceLinesHashRepository,
    ):
        self.db = db
        self.system2 = system2
        self.root = root
        self.report_reader = report_reader
        self.source_lines_repository = source_lines_repository
        self.scm_info_repository = scm_info_repository
        self.duplication_repository = duplication_repository
        self.source_lines_hash_repository = source_lines_hash_repository

    def execute(self) -> PersistStats:
        logger.info(f"{self.description}: project {self.root.key}")
        visitor = FileSourceVisitor(self)
        try:
            DepthTraversalCrawler(visitor).visit(self.root)
        finally:
            if self.db.conn.in_transaction:
                self.db.rollback()
        stats = visitor.stats
        logger.info(
            f"{self.description}: {stats.files} files, {stats.inserted} inserted, "
            f"{stats.updated} updated, {stats.skipped} unchanged"
        )
        return stats


class FileSourceVisitor(TypeAwareVisitor):
    def __init__(self, step: PersistFileSourcesStep):
        super().__init__(CrawlerDepthLimit.FILE, Order.PRE_ORDER)
        self.step = step
        self.dao = FileSourceDao(step.db)
        self.stats = PersistStats()
        self.project_uuid: str | None = None
        self.previous_file_sources: Mapping[str, FileSourceHashes] = {}

    def visit_project(self, project: Component) -> None:
        self.project_uuid = project.uuid
        self.previous_file_sources = load_previous_state(self.dao, project.uuid)

    def visit_file(self, file: Component) -> None:
        step = self.step
        try:
            with ResourceScope() as scope:
                lines = scope.register(step.source_lines_repository.read_lines(file))
                line_readers = LineReaders.open(
                    scope,
                    step.report_reader,
                    step.scm_info_repository,
                    step.duplication_repository,
                    file,
                )
                line_hashes_computer = step.source_lines_hash_repository.get_line_hashes_computer_to_persist(file)
                file_source_data = ComputeFileSourceData(lines, line_readers.readers, line_hashes_computer).compute()
                self._check_line_count(file, len(file_source_data.lines))
                self._persist_source(file_source_data, file, line_readers.latest_change_with_revision)
        except Exception as e:
            raise PersistSourcesError(file.key) from e

    @staticmethod
    def _check_line_count(file: Component, read: int) -> None:
        declared = file.file_attributes.lines if file.file_attributes else 0
        if declared and declared != read:
            logger.warning(f"{file.key} declares {declared} lines but {read} were read")

    def _persist_source(
        self, file_source_data: FileSourceData, file: Component, latest_change_with_revision: Changeset | None
    ) -> None:
        data = encode_source_data(file_source_data.lines)
        previous = self.previous_file_sources.get(file.uuid)
        now = self.step.system2.now()

        candidate = FileSourceDto(
            project_uuid=self.project_uuid,
            file_uuid=file.uuid,
            binary_data=data,
            data_hash=md5_hex(data),
            src_hash=file_source_data.src_hash,
            line_hashes=file_source_data.line_hashes,
            line_hashes_version=int(self.step.source_lines_hash_repository.get_line_hashes_version(file)),
            revision=latest_change_with_revision.revision if latest_change_with_revision else None,
            created_at=previous.created_at if previous is not None else now,
            updated_at=now,
        )

        action = decide(previous, candidate)
        if action is PersistAction.INSERT:
            self.step.db.begin_transaction()
            self.dao.insert(candidate)
            self.step.db.commit()
        elif action is PersistAction.UPDATE:
            self.step.db.begin_transaction()
            self.dao.update(candidate)
            self.step.db.commit()
        self.stats.record(action)
        logger.debug(f"{action.value} {file.key} ({len(file_source_data.line_hashes)} lines)")
