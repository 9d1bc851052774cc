"""Result models for the analytics engine."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Optional

from ..temporal.models import TimeWindow


@dataclass(frozen=True)
class EngineSummary:
    """Point-in-time counts describing an AnalyticsEngine."""

    total_commits: int
    bug_commits: int
    feature_commits: int
    commits_in_scope: int
    developers: int
    files: int  # vertices of the active graph
    cochange_edges: int  # edges of the active graph
    component_threshold: int
    component_count: int
    window: Optional[TimeWindow] = None

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class _ComponentCache:
    threshold: int
    graph_version: int
    components: list[frozenset[str]] = field(default_factory=list)
    index: dict[str, int] = field(default_factory=dict)  # file -> position in components
