"""Build an analysis report from a project directory."""

from pathlib import Path

import click

from sourcevault.config_runtime import load_runtime_config
from sourcevault.scanner import ReportBuilder
from sourcevault.ui import console, print_header
from sourcevault.utils.error_handler import handle_exceptions


@click.command("scan")
@click.option(
    "--root",
    default=".",
    type=click.Path(exists=True, file_okay=False),
    help="Root directory of the project to scan",
)
@click.option("--out", type=click.Path(file_okay=False), help="Report directory (default: paths.report_dir)")
@click.option("--project-key", help="Project key (default: name of the root directory)")
@click.option(
    "--coverage",
    "coverage_file",
    type=click.Path(exists=True, dir_okay=False),
    help="coverage.py JSON report to import",
)
@click.option("--no-scm", is_flag=True, help="Skip git blame")
@handle_exceptions
def scan(root, out, project_key, coverage_file, no_scm):
    """Walk a project and write its analysis report.

    The report holds the text of every file plus what is known about its
    lines: git blame changesets, coverage.py line and branch coverage, and
    for Python files syntax highlighting and significant code spans.

    EXAMPLES:
      svault scan --root . --coverage coverage.json
      svault scan --root ../service --project-key service --no-scm
    """
    cfg = load_runtime_config(root)
    report_dir = Path(out) if out else Path(root) / cfg["paths"]["report_dir"]

    print_header("SCAN")
    result = ReportBuilder(
        root_path=Path(root),
        report_dir=report_dir,
        config=cfg,
        project_key=project_key,
        coverage_file=Path(coverage_file) if coverage_file else None,
        scm_enabled=not no_scm,
    ).build()

    console.print(f"Project:     [cmd]{result.project_key}[/cmd]")
    console.print(f"Files:       {result.files} in {result.directories} directories")
    console.print(f"SCM:         {result.with_scm} files")
    console.print(f"Coverage:    {result.with_coverage} files")
    console.print(f"Highlighted: {result.with_highlighting} files")
    console.print(f"Report:      [path]{report_dir}[/path]")
