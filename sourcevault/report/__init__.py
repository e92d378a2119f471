"""Analysis report: decoded models, a lazy reader and a writer."""

from .closeable import CloseableIterator
from .models import (
    ComponentRecord,
    HighlightingType,
    LineCoverage,
    LineSignificantCode,
    Metadata,
    Symbol,
    SyntaxHighlightingRule,
    TextRange,
)
from .reader import ReportReader
from .writer import ReportWriter

__all__ = [
    "CloseableIterator",
    "ComponentRecord",
    "HighlightingType",
    "LineCoverage",
    "LineSignificantCode",
    "Metadata",
    "ReportReader",
    "ReportWriter",
    "Symbol",
    "SyntaxHighlightingRule",
    "TextRange",
]
