"""Commit history: records, windows, and the append-only store."""

from .models import CommitRecord, TaskKind, TimeWindow
from .store import CommitStore, validate_commit

__all__ = [
    "CommitRecord",
    "CommitStore",
    "TaskKind",
    "TimeWindow",
    "validate_commit",
]
