"""Data access for the file_sources table."""

from collections.abc import Iterator, Sequence
from dataclasses import dataclass

from sourcevault.utils.constants import DATA_TYPE_SOURCE

from .database import DatabaseManager

LINE_HASHES_SEPARATOR = "\n"


@dataclass(frozen=True)
class FileSourceDto:
    """A complete stored record of one file."""

    project_uuid: str
    file_uuid: str
    binary_data: bytes
    data_hash: str
    src_hash: str
    line_hashes: tuple[str, ...]
    line_hashes_version: int
    revision: str | None
    created_at: int
    updated_at: int
    data_type: str = DATA_TYPE_SOURCE


@dataclass(frozen=True)
class FileSourceHashes:
    """The comparison fields of a stored record, without its data."""

    file_uuid: str
    data_hash: str | None
    src_hash: str | None
    revision: str | None
    line_hashes_version: int | None
    created_at: int


def _join_line_hashes(line_hashes: Sequence[str]) -> str | None:
    if not line_hashes:
        return None
    return LINE_HASHES_SEPARATOR.join(line_hashes)


def _split_line_hashes(value: str | None) -> tuple[str, ...]:
    if value is None:
        return ()
    return tuple(value.split(LINE_HASHES_SEPARATOR))


class FileSourceDao:
    """Reads and writes file_sources rows on the manager's connection.

    Writes are not committed here; the caller owns the transaction.
    """

    def __init__(self, db: DatabaseManager):
        self._db = db

    def insert(self, dto: FileSourceDto) -> None:
        self._db.conn.execute(
            """INSERT INTO file_sources (project_uuid, file_uuid, data_type, binary_data, data_hash,
                   src_hash, line_hashes, line_hashes_version, revision, created_at, updated_at)
               VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)""",
            (
                dto.project_uuid,
                dto.file_uuid,
                dto.data_type,
                dto.binary_data,
                dto.data_hash,
                dto.src_hash,
                _join_line_hashes(dto.line_hashes),
                dto.line_hashes_version,
                dto.revision,
                dto.created_at,
                dto.updated_at,
            ),
        )

    def update(self, dto: FileSourceDto) -> None:
        """Replace the data of an existing record. created_at is never changed."""
        self._db.conn.execute(
            """UPDATE file_sources
               SET project_uuid = ?, binary_data = ?, data_hash = ?, src_hash = ?, line_hashes = ?,
                   line_hashes_version = ?, revision = ?, updated_at = ?
               WHERE file_uuid = ? AND data_type = ?""",
            (
                dto.project_uuid,
                dto.binary_data,
                dto.data_hash,
                dto.src_hash,
                _join_line_hashes(dto.line_hashes),
                dto.line_hashes_version,
                dto.revision,
                dto.updated_at,
                dto.file_uuid,
                dto.data_type,
            ),
        )

    def scroll_hashes_for_project(
        self, project_uuid: str, data_type: str = DATA_TYPE_SOURCE
    ) -> Iterator[FileSourceHashes]:
        """Stream the comparison fields of every record of a project, row by row."""
        cursor = self._db.conn.execute(
            """SELECT file_uuid, data_hash, src_hash, revision, line_hashes_version, created_at
               FROM file_sources
               WHERE project_uuid = ? AND data_type = ?""",
            (project_uuid, data_type),
        )
        try:
            for row in cursor:
                yield FileSourceHashes(
                    file_uuid=row["file_uuid"],
                    data_hash=row["data_hash"],
                    src_hash=row["src_hash"],
                    revision=row["revision"],
                    line_hashes_version=row["line_hashes_version"],
                    created_at=row["created_at"],
                )
        finally:
            cursor.close()

    def select_by_file_uuid(self, file_uuid: str, data_type: str = DATA_TYPE_SOURCE) -> FileSourceDto | None:
        row = self._db.conn.execute(
            "SELECT * FROM file_sources WHERE file_uuid = ? AND data_type = ?",
            (file_uuid, data_type),
        ).fetchone()
        if row is None:
            return None
        return FileSourceDto(
            project_uuid=row["project_uuid"],
            file_uuid=row["file_uuid"],
            binary_data=row["binary_data"],
            data_hash=row["data_hash"],
            src_hash=row["src_hash"],
            line_hashes=_split_line_hashes(row["line_hashes"]),
            line_hashes_version=row["line_hashes_version"],
            revision=row["revision"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
            data_type=row["data_type"],
        )
