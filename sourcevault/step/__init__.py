"""Persist step and the pieces it decides with."""

from .decision import PersistAction, SourceChanges, decide
from .persist_file_sources import FileSourceVisitor, PersistFileSourcesStep, PersistStats
from .previous_state import load_previous_state

__all__ = [
    "FileSourceVisitor",
    "PersistAction",
    "PersistFileSourcesStep",
    "PersistStats",
    "SourceChanges",
    "decide",
    "load_previous_state",
]
