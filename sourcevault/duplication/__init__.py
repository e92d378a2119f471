"""Duplicated text blocks."""

from .models import Duplicate, Duplication, TextBlock
from .repository import DuplicationRepository

__all__ = [
    "Duplicate",
    "Duplication",
    "DuplicationRepository",
    "TextBlock",
]
