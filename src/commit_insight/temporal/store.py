"""Append-only commit history with kind-partitioned and windowed views."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from typing import Any, Optional

from ..exceptions import InvalidCommitError
from .models import CommitRecord, TaskKind, TimeWindow

logger = logging.getLogger(__name__)

_KINDS = frozenset(kind.value for kind in TaskKind)


def validate_commit(developer: Any, timestamp: Any, task: Any, files: Any) -> frozenset[str]:
    """Check one commit's fields, returning its files as a frozenset.

    Raises:
        InvalidCommitError: On the first field that fails. Checks run in the
            order developer, files, timestamp, task, file names.
    """
    if developer is None or not isinstance(developer, str):
        raise InvalidCommitError("developer", "must be a string", developer)
    if not developer.strip():
        raise InvalidCommitError("developer", "must not be empty", developer)

    if files is None or isinstance(files, (str, bytes, Mapping)) or not isinstance(files, Iterable):
        raise InvalidCommitError("files", "must be a collection of file names", files)
    files = list(files)
    if not files:
        raise InvalidCommitError("files", "must not be empty", files)

    if not isinstance(timestamp, int) or isinstance(timestamp, bool):
        raise InvalidCommitError("timestamp", "must be an integer", timestamp)
    if timestamp < 0:
        raise InvalidCommitError("timestamp", "must not be negative", timestamp)

    if task is None or not isinstance(task, str):
        raise InvalidCommitError("task", "must be a string", task)
    if len(task) < 2:
        raise InvalidCommitError("task", "expected '<B|F>-<id>'", task)
    if task[0] not in _KINDS:
        raise InvalidCommitError("task", "kind must be 'B' (bug) or 'F' (feature)", task)
    if task[1] != "-":
        raise InvalidCommitError("task", "kind must be followed by '-'", task)
    if not task[2:].strip():
        raise InvalidCommitError("task", "identifier must not be empty", task)

    for name in files:
        if name is None or not isinstance(name, str):
            raise InvalidCommitError("files", "file names must be strings", name)
        if not name.strip():
            raise InvalidCommitError("files", "file names must not be empty", name)

    return frozenset(files)


class CommitStore:
    """Ordered, append-only collection of CommitRecord.

    Records are kept in insertion order in one full history list and in one
    list per TaskKind. Nothing is ever removed.
    """

    def __init__(self) -> None:
        self._records: list[CommitRecord] = []
        self._by_kind: dict[TaskKind, list[CommitRecord]] = {kind: [] for kind in TaskKind}

    def record(
        self, developer: str, timestamp: int, task: str, files: Iterable[str]
    ) -> CommitRecord:
        """Validate and append one commit.

        Raises:
            InvalidCommitError: If any field is malformed. The store is unchanged.
        """
        file_set = validate_commit(developer, timestamp, task, files)
        commit = CommitRecord(timestamp=timestamp, files=file_set, task=task, developer=developer)
        self._records.append(commit)
        self._by_kind[commit.kind].append(commit)
        logger.debug(
            "Recorded %s by %s at %d (%d files)", task, developer, timestamp, len(file_set)
        )
        return commit

    def all_records(self) -> tuple[CommitRecord, ...]:
        return tuple(self._records)

    def records_of_kind(self, kind: TaskKind) -> tuple[CommitRecord, ...]:
        return tuple(self._by_kind[TaskKind(kind)])

    @staticmethod
    def filter_by_window(
        records: Iterable[CommitRecord], window: Optional[TimeWindow]
    ) -> list[CommitRecord]:
        """Records whose timestamp falls in ``window``; all of them if ``window`` is None."""
        if window is None:
            return list(records)
        return [r for r in records if window.contains(r.timestamp)]

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[CommitRecord]:
        return iter(self._records)
