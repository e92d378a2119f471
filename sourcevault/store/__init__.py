"""Persistent store of file sources (SQLite)."""

from .database import DatabaseManager
from .file_source_dao import FileSourceDao, FileSourceDto, FileSourceHashes
from .schema import FILE_SOURCES, TABLES, Column, TableSchema

__all__ = [
    "FILE_SOURCES",
    "TABLES",
    "Column",
    "DatabaseManager",
    "FileSourceDao",
    "FileSourceDto",
    "FileSourceHashes",
    "TableSchema",
]
