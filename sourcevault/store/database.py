"""SQLite connection management for the sources database."""

import sqlite3
from pathlib import Path

from sourcevault.exceptions import StoreError
from sourcevault.utils.logging import logger

from .schema import TABLES


class DatabaseManager:
    """Owns the connection to the sources database.

    Transactions are explicit: begin_transaction() before writing, then
    commit() or rollback().
    """

    def __init__(self, db_path: str | Path):
        self.db_path = str(db_path)

        self.conn = sqlite3.connect(self.db_path, timeout=60)
        self.conn.row_factory = sqlite3.Row
        self.conn.execute("PRAGMA journal_mode=WAL")
        self.conn.execute("PRAGMA synchronous=NORMAL")

    def create_schema(self) -> None:
        """Create all tables and indexes from the schema definitions."""
        cursor = self.conn.cursor()
        for table_schema in TABLES.values():
            cursor.execute(table_schema.create_table_sql())
            for create_index_sql in table_schema.create_indexes_sql():
                cursor.execute(create_index_sql)
        self.conn.commit()
        logger.debug(f"Schema ready in {self.db_path}")

    def begin_transaction(self) -> None:
        """Start a new transaction."""
        self.conn.execute("BEGIN IMMEDIATE")

    def commit(self) -> None:
        """Commit the current transaction."""
        try:
            self.conn.commit()
        except sqlite3.Error as e:
            self.conn.rollback()
            raise StoreError(f"Failed to commit database changes: {e}") from e

    def rollback(self) -> None:
        """Rollback the current transaction."""
        self.conn.rollback()

    def close(self) -> None:
        """Close the database connection."""
        self.conn.close()

    def __enter__(self) -> "DatabaseManager":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is not None and self.conn.in_transaction:
            self.rollback()
        self.close()
