"""Index of what is already stored for a project."""

from collections.abc import Mapping
from types import MappingProxyType

from sourcevault.store.file_source_dao import FileSourceDao, FileSourceHashes
from sourcevault.utils.constants import DATA_TYPE_SOURCE
from sourcevault.utils.logging import logger


def load_previous_state(dao: FileSourceDao, project_uuid: str) -> Mapping[str, FileSourceHashes]:
    """Load the comparison fields of every stored source of the project.

    Rows go straight from the cursor into the index, keyed by file uuid.
    The whole project is loaded at once, without paging. The returned
    mapping is read-only.
    """
    index: dict[str, FileSourceHashes] = {}
    for hashes in dao.scroll_hashes_for_project(project_uuid, DATA_TYPE_SOURCE):
        index[hashes.file_uuid] = hashes
    logger.debug(f"Loaded {len(index)} previous file sources for project {project_uuid}")
    return MappingProxyType(index)
