"""Merge every file of a report and persist the ones that changed."""

from pathlib import Path

import click
from rich.table import Table

from sourcevault.component import build_component_tree
from sourcevault.config_runtime import load_runtime_config
from sourcevault.duplication import DuplicationRepository
from sourcevault.report import ReportReader
from sourcevault.scm import ScmInfoRepository
from sourcevault.source import SourceLinesHashRepository, SourceLinesRepository
from sourcevault.step import PersistFileSourcesStep
from sourcevault.store import DatabaseManager
from sourcevault.system import System2
from sourcevault.ui import console, print_header, print_success
from sourcevault.utils.error_handler import handle_exceptions


@click.command("persist")
@click.option("--root", default=".", type=click.Path(file_okay=False), help="Directory holding .sourcevault/config.json")
@click.option("--report", type=click.Path(file_okay=False), help="Report directory (default: paths.report_dir)")
@click.option("--db", type=click.Path(dir_okay=False), help="Sources database (default: paths.db)")
@handle_exceptions
def persist(root, report, db):
    """Store the sources of every file of a report.

    Each file is merged with its coverage, SCM, highlighting, symbols and
    duplications, then inserted, updated, or left alone when nothing
    changed since the last run. Each write is committed on its own; the
    first failing file stops the run.

    EXAMPLES:
      svault persist
      svault persist --report build/report --db build/sources.db
    """
    cfg = load_runtime_config(root)
    report_dir = Path(report) if report else Path(root) / cfg["paths"]["report_dir"]
    db_path = Path(db) if db else Path(root) / cfg["paths"]["db"]
    db_path.parent.mkdir(parents=True, exist_ok=True)

    print_header("PERSIST SOURCES")
    report_reader = ReportReader(report_dir)
    root_component = build_component_tree(report_reader)

    with DatabaseManager(db_path) as database:
        database.create_schema()
        stats = PersistFileSourcesStep(
            db=database,
            system2=System2(),
            root=root_component,
            report_reader=report_reader,
            source_lines_repository=SourceLinesRepository(report_reader),
            scm_info_repository=ScmInfoRepository(report_reader),
            duplication_repository=DuplicationRepository(report_reader),
            source_lines_hash_repository=SourceLinesHashRepository(report_reader),
        ).execute()

    table = Table(title=f"Project {root_component.key}")
    table.add_column("Outcome", style="bold")
    table.add_column("Files", justify="right")
    table.add_row("Inserted", str(stats.inserted))
    table.add_row("Updated", str(stats.updated))
    table.add_row("Unchanged", str(stats.skipped))
    console.print(table)
    print_success(f"{stats.files} files persisted to {db_path}")
