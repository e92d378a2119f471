"""Merged per-line source data and its binary encoding.

The encoded blob is compact, key-sorted JSON compressed with zlib, so the
same lines always produce the same bytes (and therefore the same data hash).
"""

import json
import zlib
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

COMPRESSION_LEVEL = 6


@dataclass
class LineBuilder:
    """One line being assembled; readers set only the fields they know."""

    line: int
    source: str
    line_hits: int | None = None
    conditions: int | None = None
    covered_conditions: int | None = None
    scm_author: str | None = None
    scm_date: int | None = None
    scm_revision: str | None = None
    highlighting: str | None = None
    symbols: str | None = None
    duplication: list[int] = field(default_factory=list)

    def add_duplication(self, index: int) -> None:
        self.duplication.append(index)

    def to_dict(self) -> dict[str, Any]:
        """Serialize with unset fields left out."""
        out: dict[str, Any] = {"line": self.line, "source": self.source}
        for name in (
            "line_hits",
            "conditions",
            "covered_conditions",
            "scm_author",
            "scm_date",
            "scm_revision",
            "highlighting",
            "symbols",
        ):
            value = getattr(self, name)
            if value is not None:
                out[name] = value
        if self.duplication:
            out["duplication"] = list(self.duplication)
        return out


@dataclass(frozen=True)
class FileSourceData:
    """Output of one merge pass over a file."""

    lines: tuple[LineBuilder, ...]
    src_hash: str
    line_hashes: tuple[str, ...]


def encode_source_data(lines: Sequence[LineBuilder]) -> bytes:
    payload = json.dumps(
        {"lines": [line.to_dict() for line in lines]},
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
    )
    return zlib.compress(payload.encode("utf-8"), COMPRESSION_LEVEL)


def decode_source_data(data: bytes) -> list[dict[str, Any]]:
    return json.loads(zlib.decompress(data).decode("utf-8"))["lines"]
