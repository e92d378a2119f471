"""Duplicated block indexes of each line."""

from collections.abc import Iterable

from sourcevault.duplication.models import Duplication, TextBlock
from sourcevault.source.file_source_data import LineBuilder

from .base import LineReader


class DuplicationLineReader(LineReader):
    """Numbers every block of the file from 1, in natural block order.

    Blocks are the originals plus duplicates found in the same file.
    Duplicates living in other files belong to those files.
    """

    def __init__(self, duplications: Iterable[Duplication]):
        self._index_by_block = _index_blocks(duplications)

    def read(self, line_builder: LineBuilder) -> None:
        line = line_builder.line
        # sorted so the stored data does not depend on dict ordering
        for index in sorted(i for block, i in self._index_by_block.items() if block.contains(line)):
            line_builder.add_duplication(index)


def _index_blocks(duplications: Iterable[Duplication]) -> dict[TextBlock, int]:
    blocks: set[TextBlock] = set()
    for duplication in duplications:
        blocks.add(duplication.original)
        blocks.update(d.text_block for d in duplication.duplicates if d.is_inner)
    return {block: index for index, block in enumerate(sorted(blocks), start=1)}
