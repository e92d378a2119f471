"""Shared utilities for sourcevault."""

from .helpers import md5_hex, normalize_path

__all__ = [
    "md5_hex",
    "normalize_path",
]
