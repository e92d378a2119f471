"""Merging of file lines with their per-line metadata."""

from .compute import ComputeFileSourceData
from .file_source_data import FileSourceData, LineBuilder, decode_source_data, encode_source_data
from .line_hashes import LineHashesComputer, LineHashVersion, SourceLinesHashRepository, compute_line_hash
from .line_readers import LineReaders, ResourceScope
from .lines import SourceLinesRepository

__all__ = [
    "ComputeFileSourceData",
    "FileSourceData",
    "LineBuilder",
    "LineHashVersion",
    "LineHashesComputer",
    "LineReaders",
    "ResourceScope",
    "SourceLinesHashRepository",
    "SourceLinesRepository",
    "compute_line_hash",
    "decode_source_data",
    "encode_source_data",
]
