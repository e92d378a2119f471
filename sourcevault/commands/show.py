"""Print the stored sources of one file."""

from pathlib import Path

import click
from rich.table import Table
from rich.text import Text

from sourcevault.component import component_uuid
from sourcevault.config_runtime import load_runtime_config
from sourcevault.source import decode_source_data
from sourcevault.store import DatabaseManager, FileSourceDao
from sourcevault.ui import console
from sourcevault.utils.error_handler import handle_exceptions


@click.command("show")
@click.argument("file_key")
@click.option("--root", default=".", type=click.Path(file_okay=False), help="Directory holding .sourcevault/config.json")
@click.option("--db", type=click.Path(dir_okay=False), help="Sources database (default: paths.db)")
@handle_exceptions
def show(file_key, root, db):
    """Print the stored lines of FILE_KEY (<project key>:<path>).

    EXAMPLES:
      svault show myproject:src/app.py
    """
    cfg = load_runtime_config(root)
    db_path = Path(db) if db else Path(root) / cfg["paths"]["db"]
    if not db_path.exists():
        raise click.ClickException(f"Sources database not found: {db_path}\nRun 'svault persist' first.")

    with DatabaseManager(db_path) as database:
        dto = FileSourceDao(database).select_by_file_uuid(component_uuid(file_key))
    if dto is None:
        raise click.ClickException(f"No stored sources for {file_key}")

    console.print(f"[path]{file_key}[/path]  revision={dto.revision or '-'}  data_hash={dto.data_hash}")
    table = Table(show_edge=False)
    for column in ("Line", "Hits", "Author", "Revision", "Dup", "Source"):
        table.add_column(column)
    for line in decode_source_data(dto.binary_data):
        table.add_row(
            str(line["line"]),
            _optional(line.get("line_hits")),
            _optional(line.get("scm_author")),
            _optional(line.get("scm_revision"))[:8],
            ",".join(str(i) for i in line.get("duplication", [])),
            Text(line["source"]),
        )
    console.print(table)


def _optional(value) -> str:
    return "" if value is None else str(value)
