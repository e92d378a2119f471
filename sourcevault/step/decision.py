"""Whether a freshly merged file must be inserted, updated or left alone."""

from dataclasses import dataclass
from enum import Enum

from sourcevault.store.file_source_dao import FileSourceDto, FileSourceHashes


class PersistAction(Enum):
    INSERT = "INSERT"
    UPDATE = "UPDATE"
    SKIP = "SKIP"


@dataclass(frozen=True)
class SourceChanges:
    """Field by field difference between a stored record and a new one."""

    content_changed: bool
    source_changed: bool
    revision_changed: bool
    version_changed: bool

    @classmethod
    def between(cls, previous: FileSourceHashes, candidate: FileSourceDto) -> "SourceChanges":
        return cls(
            content_changed=candidate.data_hash != previous.data_hash,
            source_changed=candidate.src_hash != previous.src_hash,
            revision_changed=candidate.revision != previous.revision,
            # a new line hash algorithm alone is enough to rewrite the record
            version_changed=candidate.line_hashes_version != previous.line_hashes_version,
        )

    @property
    def any(self) -> bool:
        return self.content_changed or self.source_changed or self.revision_changed or self.version_changed


def decide(previous: FileSourceHashes | None, candidate: FileSourceDto) -> PersistAction:
    if previous is None:
        return PersistAction.INSERT
    if SourceChanges.between(previous, candidate).any:
        return PersistAction.UPDATE
    return PersistAction.SKIP
