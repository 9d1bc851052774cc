"""
Commit Insight - change analytics over a project's commit history

Clusters files into components by how often they change together, and
derives experts, broad features, repeated bugs and busiest files from the
history, optionally restricted to a time window.
"""

__version__ = "0.1.0"

from .analytics import AnalyticsEngine, EngineSummary
from .exceptions import (
    CommitInsightError,
    InvalidCommitError,
    InvalidLimitError,
    InvalidThresholdError,
)
from .graph import CoChangeGraph, ComponentClusterer
from .temporal import CommitRecord, CommitStore, TaskKind, TimeWindow

__all__ = [
    "AnalyticsEngine",
    "EngineSummary",
    "CoChangeGraph",
    "ComponentClusterer",
    "CommitRecord",
    "CommitStore",
    "TaskKind",
    "TimeWindow",
    "CommitInsightError",
    "InvalidCommitError",
    "InvalidThresholdError",
    "InvalidLimitError",
]
