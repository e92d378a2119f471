"""Syntax highlighting segments of each line.

A line gets "start,end,css" segments joined by ";". Rules spanning several
lines stay pending until their end line is reached.
"""

from collections.abc import Iterator

from sourcevault.component.tree import Component
from sourcevault.exceptions import RangeOffsetConverterError
from sourcevault.report.models import SyntaxHighlightingRule
from sourcevault.source.file_source_data import LineBuilder
from sourcevault.utils.logging import logger

from .base import LineReader
from .range_offset import OFFSET_SEPARATOR, SYMBOLS_SEPARATOR, RangeOffsetConverter


class HighlightingLineReader(LineReader):
    def __init__(
        self,
        file: Component,
        highlighting_iterator: Iterator[SyntaxHighlightingRule],
        range_offset_converter: RangeOffsetConverter,
    ):
        self._file = file
        self._highlighting_iterator = highlighting_iterator
        self._range_offset_converter = range_offset_converter
        self._pending: list[SyntaxHighlightingRule] = []
        self._current: SyntaxHighlightingRule | None = None
        self._failed = False

    def read(self, line_builder: LineBuilder) -> None:
        if self._failed:
            return
        try:
            self._process_highlightings(line_builder)
        except RangeOffsetConverterError as e:
            self._failed = True
            logger.warning(
                f"Inconsistency detected in highlighting data at line {line_builder.line}. "
                f"Highlighting will be ignored for file '{self._file.key}': {e}"
            )

    def _process_highlightings(self, line_builder: LineBuilder) -> None:
        line = line_builder.line
        self._collect_rules_starting_at(line)

        segments = []
        still_pending = []
        for rule in self._pending:
            if rule.range.start_line > line:
                still_pending.append(rule)
                continue
            offsets = self._range_offset_converter.offset_to_string(rule.range, line, len(line_builder.source))
            if offsets:
                segments.append(f"{offsets}{OFFSET_SEPARATOR}{rule.type.css_class}")
            # blank lines inside a multi-line rule keep it pending
            if rule.range.end_line != line:
                still_pending.append(rule)
        self._pending = still_pending

        if segments:
            line_builder.highlighting = SYMBOLS_SEPARATOR.join(segments)

    def _collect_rules_starting_at(self, line: int) -> None:
        while True:
            if self._current is None:
                self._current = next(self._highlighting_iterator, None)
            if self._current is None or self._current.range.start_line != line:
                return
            self._pending.append(self._current)
            self._current = None
