"""Decoded records of the analysis report.

Each record maps one JSON object of the report directory. from_dict()
raises ReportError on missing or mistyped fields rather than guessing.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from sourcevault.exceptions import ReportError


def _require_int(obj: dict[str, Any], key: str, where: str) -> int:
    value = obj.get(key)
    if not isinstance(value, int) or isinstance(value, bool):
        raise ReportError(f"{where}: field '{key}' must be an integer, got {value!r}")
    return value


def _optional_int(obj: dict[str, Any], key: str, where: str) -> int | None:
    if obj.get(key) is None:
        return None
    return _require_int(obj, key, where)


@dataclass(frozen=True)
class TextRange:
    """Range of text, lines are 1-based and offsets 0-based."""

    start_line: int
    start_offset: int
    end_line: int
    end_offset: int

    @classmethod
    def from_dict(cls, obj: dict[str, Any]) -> "TextRange":
        if not isinstance(obj, dict):
            raise ReportError(f"text range must be an object, got {obj!r}")
        return cls(
            start_line=_require_int(obj, "start_line", "text range"),
            start_offset=_require_int(obj, "start_offset", "text range"),
            end_line=_require_int(obj, "end_line", "text range"),
            end_offset=_require_int(obj, "end_offset", "text range"),
        )

    def to_dict(self) -> dict[str, int]:
        return {
            "start_line": self.start_line,
            "start_offset": self.start_offset,
            "end_line": self.end_line,
            "end_offset": self.end_offset,
        }

    def sort_key(self) -> tuple[int, int, int, int]:
        return (self.start_line, self.start_offset, self.end_line, self.end_offset)


@dataclass(frozen=True)
class LineCoverage:
    """Coverage counters of a single line. Absent counters stay None."""

    line: int
    hits: bool | None = None
    conditions: int | None = None
    covered_conditions: int | None = None

    @classmethod
    def from_dict(cls, obj: dict[str, Any]) -> "LineCoverage":
        hits = obj.get("hits")
        if hits is not None and not isinstance(hits, bool):
            raise ReportError(f"coverage: field 'hits' must be a boolean, got {hits!r}")
        return cls(
            line=_require_int(obj, "line", "coverage"),
            hits=hits,
            conditions=_optional_int(obj, "conditions", "coverage"),
            covered_conditions=_optional_int(obj, "covered_conditions", "coverage"),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"line": self.line}
        if self.hits is not None:
            out["hits"] = self.hits
        if self.conditions is not None:
            out["conditions"] = self.conditions
        if self.covered_conditions is not None:
            out["covered_conditions"] = self.covered_conditions
        return out


class HighlightingType(Enum):
    """Syntax highlighting categories, valued by their css class."""

    ANNOTATION = "a"
    CONSTANT = "c"
    COMMENT = "cd"
    CPP_DOC = "cppd"
    STRUCTURED_COMMENT = "j"
    KEYWORD = "k"
    HIGHLIGHTING_STRING = "s"
    KEYWORD_LIGHT = "h"
    PREPROCESS_DIRECTIVE = "p"

    @property
    def css_class(self) -> str:
        return self.value


@dataclass(frozen=True)
class SyntaxHighlightingRule:
    range: TextRange
    type: HighlightingType

    @classmethod
    def from_dict(cls, obj: dict[str, Any]) -> "SyntaxHighlightingRule":
        type_name = obj.get("type")
        try:
            highlighting_type = HighlightingType[type_name]
        except KeyError as e:
            raise ReportError(f"highlighting: unknown type {type_name!r}") from e
        return cls(range=TextRange.from_dict(obj.get("range")), type=highlighting_type)

    def to_dict(self) -> dict[str, Any]:
        return {"range": self.range.to_dict(), "type": self.type.name}


@dataclass(frozen=True)
class Symbol:
    """A declared symbol and every place it is referenced in the same file."""

    declaration: TextRange
    references: tuple[TextRange, ...] = ()

    @classmethod
    def from_dict(cls, obj: dict[str, Any]) -> "Symbol":
        references = obj.get("references") or []
        if not isinstance(references, list):
            raise ReportError(f"symbol: field 'references' must be a list, got {references!r}")
        return cls(
            declaration=TextRange.from_dict(obj.get("declaration")),
            references=tuple(TextRange.from_dict(r) for r in references),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "declaration": self.declaration.to_dict(),
            "references": [r.to_dict() for r in self.references],
        }


@dataclass(frozen=True)
class LineSignificantCode:
    """Span of a line holding significant code (comments and blanks excluded)."""

    line: int
    start_offset: int
    end_offset: int

    @classmethod
    def from_dict(cls, obj: dict[str, Any]) -> "LineSignificantCode":
        return cls(
            line=_require_int(obj, "line", "significant code"),
            start_offset=_require_int(obj, "start_offset", "significant code"),
            end_offset=_require_int(obj, "end_offset", "significant code"),
        )

    def to_dict(self) -> dict[str, int]:
        return {"line": self.line, "start_offset": self.start_offset, "end_offset": self.end_offset}


@dataclass(frozen=True)
class ComponentRecord:
    """One component entry of the report."""

    ref: int
    type: str
    path: str | None = None
    key: str | None = None
    lines: int = 0
    language: str | None = None
    children: tuple[int, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, obj: dict[str, Any]) -> "ComponentRecord":
        component_type = obj.get("type")
        if component_type not in ("PROJECT", "DIRECTORY", "FILE"):
            raise ReportError(f"component: unknown type {component_type!r}")
        children = obj.get("children") or []
        if not isinstance(children, list) or not all(isinstance(c, int) for c in children):
            raise ReportError(f"component: 'children' must be a list of refs, got {children!r}")
        return cls(
            ref=_require_int(obj, "ref", "component"),
            type=component_type,
            path=obj.get("path"),
            key=obj.get("key"),
            lines=obj.get("lines") or 0,
            language=obj.get("language"),
            children=tuple(children),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "ref": self.ref,
            "type": self.type,
            "lines": self.lines,
            "children": list(self.children),
        }
        if self.path is not None:
            out["path"] = self.path
        if self.key is not None:
            out["key"] = self.key
        if self.language is not None:
            out["language"] = self.language
        return out


@dataclass(frozen=True)
class Metadata:
    project_key: str
    root_component_ref: int
    analysis_date: int = 0

    @classmethod
    def from_dict(cls, obj: dict[str, Any]) -> "Metadata":
        project_key = obj.get("project_key")
        if not isinstance(project_key, str) or not project_key:
            raise ReportError(f"metadata: 'project_key' must be a non-empty string, got {project_key!r}")
        return cls(
            project_key=project_key,
            root_component_ref=_require_int(obj, "root_component_ref", "metadata"),
            analysis_date=obj.get("analysis_date") or 0,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "project_key": self.project_key,
            "root_component_ref": self.root_component_ref,
            "analysis_date": self.analysis_date,
        }
