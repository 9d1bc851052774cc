"""Batch ingestion of commit files."""

from .loader import (
    CommitRow,
    IngestReport,
    RejectedRecord,
    load_file,
    load_into,
    read_csv,
    read_jsonl,
    read_rows,
)

__all__ = [
    "CommitRow",
    "IngestReport",
    "RejectedRecord",
    "load_file",
    "load_into",
    "read_csv",
    "read_jsonl",
    "read_rows",
]
