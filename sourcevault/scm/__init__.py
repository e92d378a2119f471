"""Source control attribution."""

from .models import Changeset, ScmInfo
from .repository import ScmInfoRepository

__all__ = [
    "Changeset",
    "ScmInfo",
    "ScmInfoRepository",
]
