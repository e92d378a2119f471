"""Import of coverage.py JSON reports (`coverage json`)."""

import json
from collections import defaultdict
from pathlib import Path
from typing import Any

from sourcevault.exceptions import ReportError
from sourcevault.report.models import LineCoverage
from sourcevault.utils.helpers import normalize_path
from sourcevault.utils.logging import logger


def load_coverage_json(coverage_file: Path, root_path: Path) -> dict[str, list[LineCoverage]]:
    """Parse a coverage.py JSON report into sorted line coverage per file.

    Keys are POSIX paths relative to root_path. Absolute paths outside the
    root are dropped.

    Raises:
        ReportError: If the file is not valid coverage.py JSON
    """
    try:
        with open(coverage_file, encoding="utf-8") as f:
            payload = json.load(f)
    except json.JSONDecodeError as e:
        raise ReportError(f"Invalid JSON in coverage file {coverage_file}: {e}") from e

    if not isinstance(payload, dict) or not isinstance(payload.get("files"), dict):
        raise ReportError(f"Unrecognized coverage format in {coverage_file} (expected coverage.py JSON)")

    root = Path(root_path).resolve()
    by_file: dict[str, list[LineCoverage]] = {}
    for path, metrics in payload["files"].items():
        relative = _relative_to_root(path, root)
        if relative is None:
            logger.debug(f"Coverage for {path} is outside {root}, ignored")
            continue
        by_file[relative] = file_line_coverage(metrics)

    logger.info(f"Loaded coverage of {len(by_file)} files from {coverage_file}")
    return by_file


def file_line_coverage(metrics: dict[str, Any]) -> list[LineCoverage]:
    """Build per-line coverage from one file entry of a coverage.py report.

    Branch arcs are counted on their source line; negative line numbers
    (exits) are ignored.
    """
    executed = set(metrics.get("executed_lines", []))
    missing = set(metrics.get("missing_lines", []))

    conditions: dict[int, int] = defaultdict(int)
    covered: dict[int, int] = defaultdict(int)
    for source, _ in metrics.get("executed_branches", []):
        conditions[source] += 1
        covered[source] += 1
    for source, _ in metrics.get("missing_branches", []):
        conditions[source] += 1

    coverage = []
    for line in sorted((executed | missing | set(conditions)) - {0}):
        if line < 0:
            continue
        hits = True if line in executed else (False if line in missing else None)
        coverage.append(
            LineCoverage(
                line=line,
                hits=hits,
                conditions=conditions[line] if line in conditions else None,
                covered_conditions=covered[line] if line in conditions else None,
            )
        )
    return coverage


def _relative_to_root(path: str, root: Path) -> str | None:
    candidate = Path(path)
    if not candidate.is_absolute():
        return normalize_path(path)
    try:
        return candidate.resolve().relative_to(root).as_posix()
    except ValueError:
        return None
