"""Data models for commit history."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TaskKind(str, Enum):
    """Kind of work item a commit belongs to, taken from the task prefix."""

    BUG = "B"
    FEATURE = "F"

    @classmethod
    def of(cls, task: str) -> TaskKind:
        """Kind of a well-formed task identifier such as ``"B-12"``."""
        return cls(task[0])


@dataclass(frozen=True)
class CommitRecord:
    timestamp: int
    files: frozenset[str]
    task: str  # "<B|F>-<id>"
    developer: str

    @property
    def kind(self) -> TaskKind:
        return TaskKind.of(self.task)


@dataclass(frozen=True)
class TimeWindow:
    """Inclusive ``[start, end]`` timestamp range."""

    start: int
    end: int

    @property
    def is_valid(self) -> bool:
        return self.start >= 0 and self.end >= 0 and self.end >= self.start

    def contains(self, timestamp: int) -> bool:
        return self.start <= timestamp <= self.end
