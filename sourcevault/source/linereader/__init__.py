"""Line readers: each one annotates lines with one kind of metadata."""

from .base import LineReader
from .coverage import CoverageLineReader
from .duplication import DuplicationLineReader
from .highlighting import HighlightingLineReader
from .range_offset import RangeOffsetConverter
from .scm import ScmLineReader
from .symbols import SymbolsLineReader

__all__ = [
    "CoverageLineReader",
    "DuplicationLineReader",
    "HighlightingLineReader",
    "LineReader",
    "RangeOffsetConverter",
    "ScmLineReader",
    "SymbolsLineReader",
]
