"""Single pass merge of a file's lines with its line readers."""

import hashlib
from collections.abc import Iterator, Sequence

from .file_source_data import FileSourceData, LineBuilder
from .line_hashes import LineHashesComputer
from .linereader import LineReader


class ComputeFileSourceData:
    """Merges lines, reader annotations and hashes.

    The lines are consumed once, lazily. Each line is annotated by every
    reader in order, then hashed.
    """

    def __init__(
        self,
        lines: Iterator[str],
        readers: Sequence[LineReader],
        line_hashes_computer: LineHashesComputer,
    ):
        self._lines = lines
        self._readers = readers
        self._line_hashes_computer = line_hashes_computer

    def compute(self) -> FileSourceData:
        src_md5 = hashlib.md5()
        builders: list[LineBuilder] = []
        for line_number, source in enumerate(self._lines, start=1):
            if line_number > 1:
                src_md5.update(b"\n")
            src_md5.update(source.encode("utf-8"))
            builders.append(self._read_line(line_number, source))
        return FileSourceData(
            lines=tuple(builders),
            src_hash=src_md5.hexdigest(),
            line_hashes=tuple(self._line_hashes_computer.get_line_hashes()),
        )

    def _read_line(self, line_number: int, source: str) -> LineBuilder:
        line_builder = LineBuilder(line=line_number, source=source)
        for reader in self._readers:
            reader.read(line_builder)
        self._line_hashes_computer.add_line(source)
        return line_builder
