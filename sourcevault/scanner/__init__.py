"""Builds analysis reports from a project checkout."""

from .blame import GitBlameCollector, parse_line_porcelain
from .coverage import file_line_coverage, load_coverage_json
from .python_syntax import PythonSyntax
from .report_builder import ReportBuilder, ScanResult
from .walker import FileWalker

__all__ = [
    "FileWalker",
    "GitBlameCollector",
    "PythonSyntax",
    "ReportBuilder",
    "ScanResult",
    "file_line_coverage",
    "load_coverage_json",
    "parse_line_porcelain",
]
