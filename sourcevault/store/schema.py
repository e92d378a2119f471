"""Schema definitions for the sources database.

Tables are declared once here; DatabaseManager.create_schema() generates the
DDL from these definitions.
"""

from dataclasses import dataclass, field

from sourcevault.utils.constants import DATA_TYPE_SOURCE, DATA_TYPE_TEST


@dataclass
class Column:
    """Represents a database column with type and constraints."""

    name: str
    type: str
    nullable: bool = True
    default: str | None = None
    primary_key: bool = False
    autoincrement: bool = False
    check: str | None = None

    def to_sql(self) -> str:
        """Generate SQL column definition."""
        parts = [self.name, self.type]
        if not self.nullable:
            parts.append("NOT NULL")
        if self.default is not None:
            parts.append(f"DEFAULT {self.default}")
        if self.primary_key:
            parts.append("PRIMARY KEY")
            if self.autoincrement and self.type.upper() == "INTEGER":
                parts.append("AUTOINCREMENT")
        if self.check:
            parts.append(f"CHECK({self.check})")
        return " ".join(parts)


@dataclass
class TableSchema:
    """Represents a complete table schema."""

    name: str
    columns: list[Column]
    indexes: list[tuple[str, list[str]]] = field(default_factory=list)
    unique_constraints: list[list[str]] = field(default_factory=list)

    def create_table_sql(self) -> str:
        """Generate CREATE TABLE statement."""
        col_defs = [col.to_sql() for col in self.columns]
        for unique_cols in self.unique_constraints:
            col_defs.append(f"UNIQUE({', '.join(unique_cols)})")
        return f"CREATE TABLE IF NOT EXISTS {self.name} (\n    " + ",\n    ".join(col_defs) + "\n)"

    def create_indexes_sql(self) -> list[str]:
        """Generate CREATE INDEX statements."""
        return [
            f"CREATE INDEX IF NOT EXISTS {idx_name} ON {self.name} ({', '.join(idx_cols)})"
            for idx_name, idx_cols in self.indexes
        ]


FILE_SOURCES = TableSchema(
    name="file_sources",
    columns=[
        Column("id", "INTEGER", primary_key=True, autoincrement=True),
        Column("project_uuid", "TEXT", nullable=False),
        Column("file_uuid", "TEXT", nullable=False),
        Column(
            "data_type",
            "TEXT",
            nullable=False,
            check=f"data_type IN ('{DATA_TYPE_SOURCE}', '{DATA_TYPE_TEST}')",
        ),
        Column("binary_data", "BLOB"),
        Column("data_hash", "TEXT"),
        Column("src_hash", "TEXT"),
        # one hash per line, joined with "\n"; NULL for a file without lines
        Column("line_hashes", "TEXT"),
        Column("line_hashes_version", "INTEGER"),
        Column("revision", "TEXT"),
        Column("created_at", "INTEGER", nullable=False),
        Column("updated_at", "INTEGER", nullable=False),
    ],
    indexes=[
        ("idx_file_sources_project_uuid", ["project_uuid"]),
    ],
    unique_constraints=[["file_uuid", "data_type"]],
)

TABLES: dict[str, TableSchema] = {
    FILE_SOURCES.name: FILE_SOURCES,
}
