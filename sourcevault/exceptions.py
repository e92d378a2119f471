"""Custom exceptions for sourcevault.

Contains exception classes for the failure modes that callers are expected
to tell apart. Everything else propagates as-is.
"""


class SourceVaultError(Exception):
    """Base class for all sourcevault errors."""


class PersistSourcesError(SourceVaultError):
    """Raised when the sources of one file cannot be merged or stored.

    Aborts the whole persist step. Commits made for files visited earlier
    are kept.

    Attributes:
        file_key: Key of the file component that failed
    """

    def __init__(self, file_key: str):
        super().__init__(f"Cannot persist sources of {file_key}")
        self.file_key = file_key


class RangeOffsetConverterError(SourceVaultError):
    """Raised when a text range is inconsistent with the line it is applied to."""


class ReportError(SourceVaultError):
    """Raised when analysis report data is missing or malformed."""


class StoreError(SourceVaultError):
    """Raised when the persistent store rejects an operation."""
