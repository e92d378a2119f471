"""Symbol declarations and references of each line.

Symbols are numbered 1..n in declaration order so ids are stable for the
same input. A line gets "start,end,id" segments joined by ";".
"""

from collections import defaultdict
from collections.abc import Iterable

from sourcevault.component.tree import Component
from sourcevault.exceptions import RangeOffsetConverterError
from sourcevault.report.models import Symbol, TextRange
from sourcevault.source.file_source_data import LineBuilder
from sourcevault.utils.logging import logger

from .base import LineReader
from .range_offset import OFFSET_SEPARATOR, SYMBOLS_SEPARATOR, RangeOffsetConverter


def _declaration_order(symbol: Symbol) -> tuple[int, int, int, int]:
    return symbol.declaration.sort_key()


class SymbolsLineReader(LineReader):
    def __init__(self, file: Component, symbols: Iterable[Symbol], range_offset_converter: RangeOffsetConverter):
        self._file = file
        self._range_offset_converter = range_offset_converter
        self._symbols = sorted(symbols, key=_declaration_order)
        self._ids_by_symbol = {symbol: index for index, symbol in enumerate(self._symbols, start=1)}
        self._symbols_per_line = self._build_symbols_per_line(self._symbols)
        self._failed = False

    def read(self, line_builder: LineBuilder) -> None:
        if self._failed:
            return
        try:
            self._process_symbols(line_builder)
        except RangeOffsetConverterError as e:
            self._failed = True
            logger.warning(
                f"Inconsistency detected in symbols data at line {line_builder.line}. "
                f"Symbols will be ignored for file '{self._file.key}': {e}"
            )

    def _process_symbols(self, line_builder: LineBuilder) -> None:
        line = line_builder.line
        line_length = len(line_builder.source)
        segments = []
        for symbol in sorted(self._symbols_per_line.get(line, ()), key=_declaration_order):
            symbol_id = self._ids_by_symbol[symbol]
            for text_range in (symbol.declaration, *symbol.references):
                if not text_range.start_line <= line <= text_range.end_line:
                    continue
                offsets = self._range_offset_converter.offset_to_string(text_range, line, line_length)
                if offsets:
                    segments.append(f"{offsets}{OFFSET_SEPARATOR}{symbol_id}")
        if segments:
            line_builder.symbols = SYMBOLS_SEPARATOR.join(segments)

    @staticmethod
    def _build_symbols_per_line(symbols: list[Symbol]) -> dict[int, set[Symbol]]:
        per_line: dict[int, set[Symbol]] = defaultdict(set)
        for symbol in symbols:
            for text_range in (symbol.declaration, *symbol.references):
                for line in _lines_of(text_range):
                    per_line[line].add(symbol)
        return per_line


def _lines_of(text_range: TextRange) -> range:
    return range(text_range.start_line, text_range.end_line + 1)
