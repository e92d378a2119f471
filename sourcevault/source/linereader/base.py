"""Contract shared by every line reader."""

from abc import ABC, abstractmethod

from sourcevault.source.file_source_data import LineBuilder


class LineReader(ABC):
    """Annotates lines with one kind of metadata.

    Readers are called once per line, in increasing line order. A reader
    holding nothing for a line leaves the builder untouched.
    """

    @abstractmethod
    def read(self, line_builder: LineBuilder) -> None:
        pass
