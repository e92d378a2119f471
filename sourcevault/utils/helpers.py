"""Small hashing and path helpers shared across modules."""

import hashlib


def md5_hex(data: bytes | str) -> str:
    """Return the lowercase hex MD5 digest of bytes or UTF-8 text."""
    if isinstance(data, str):
        data = data.encode("utf-8")
    return hashlib.md5(data).hexdigest()


def normalize_path(path: str) -> str:
    """Normalize separators to forward slashes and drop leading './'."""
    normalized = path.replace("\\", "/")
    while normalized.startswith("./"):
        normalized = normalized[2:]
    return normalized
