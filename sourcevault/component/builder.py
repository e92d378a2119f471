"""Rebuilds the component tree from the report's component records."""

from typing import TYPE_CHECKING

from sourcevault.exceptions import ReportError

from .tree import (
    Component,
    ComponentType,
    FileAttributes,
    ReportAttributes,
    component_uuid,
    file_key,
)

if TYPE_CHECKING:
    from sourcevault.report.reader import ReportReader


def build_component_tree(report_reader: "ReportReader") -> Component:
    """Read the tree from the report root, depth first.

    Raises:
        ReportError: If a ref is missing, reused, or the root is not a project
    """
    metadata = report_reader.read_metadata()
    seen: set[int] = set()
    root = _build(report_reader, metadata.project_key, metadata.root_component_ref, seen)
    if root.type is not ComponentType.PROJECT:
        raise ReportError(f"Root component {metadata.root_component_ref} is not a project")
    return root


def _build(report_reader: "ReportReader", project_key: str, ref: int, seen: set[int]) -> Component:
    if ref in seen:
        raise ReportError(f"Component ref {ref} appears more than once in the tree")
    seen.add(ref)

    record = report_reader.read_component(ref)
    try:
        component_type = ComponentType(record.type)
    except ValueError as e:
        raise ReportError(f"Component ref {ref} has unknown type {record.type!r}") from e

    if component_type is ComponentType.PROJECT:
        key = record.key or project_key
        name = project_key
    else:
        if not record.path:
            raise ReportError(f"Component ref {ref} has no path")
        key = record.key or file_key(project_key, record.path)
        name = record.path.rstrip("/").rsplit("/", 1)[-1]

    file_attributes = None
    if component_type is ComponentType.FILE:
        if record.children:
            raise ReportError(f"File component {ref} cannot have children")
        file_attributes = FileAttributes(lines=record.lines)

    return Component(
        type=component_type,
        key=key,
        uuid=component_uuid(key),
        name=name,
        report_attributes=ReportAttributes(ref=ref, path=record.path),
        file_attributes=file_attributes,
        children=[_build(report_reader, project_key, child, seen) for child in record.children],
    )
