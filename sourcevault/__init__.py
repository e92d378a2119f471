"""sourcevault - per-file source aggregation and incremental persistence."""

__version__ = "0.4.0"
