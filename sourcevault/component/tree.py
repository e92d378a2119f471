"""Component tree model: a project made of directories and files."""

import uuid
from dataclasses import dataclass, field
from enum import Enum

COMPONENT_UUID_NAMESPACE = uuid.UUID("6f1c6f0e-1c0a-4a57-9b52-3d5d0c1a7e21")


class ComponentType(Enum):
    """Kinds of component, ordered from the root down."""

    PROJECT = "PROJECT"
    DIRECTORY = "DIRECTORY"
    FILE = "FILE"

    @property
    def depth(self) -> int:
        return _DEPTHS[self]


_DEPTHS = {
    ComponentType.PROJECT: 0,
    ComponentType.DIRECTORY: 1,
    ComponentType.FILE: 2,
}


@dataclass(frozen=True)
class ReportAttributes:
    """Where a component lives inside the analysis report."""

    ref: int
    path: str | None = None


@dataclass(frozen=True)
class FileAttributes:
    """File-only facts known before sources are read."""

    lines: int = 0


@dataclass
class Component:
    """A node of the component tree."""

    type: ComponentType
    key: str
    uuid: str
    name: str
    report_attributes: ReportAttributes
    file_attributes: FileAttributes | None = None
    children: list["Component"] = field(default_factory=list)


def component_uuid(key: str) -> str:
    """Derive a stable uuid from a component key so identities survive reruns."""
    return str(uuid.uuid5(COMPONENT_UUID_NAMESPACE, key))


def file_key(project_key: str, path: str) -> str:
    return f"{project_key}:{path}"
