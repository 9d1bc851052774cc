"""Analytics over a commit history: components, experts, broad features,
repeated bugs and busiest files, optionally restricted to a time window.

Two graphs are kept. The global graph is updated on every ingestion; the
window graph is rebuilt from the store whenever the window changes and holds
only in-window commits. Clustering always reads whichever graph is active.

Not thread-safe: callers serialize mutating calls against queries.
"""

from __future__ import annotations

from collections import Counter, defaultdict
from collections.abc import Iterable
from typing import TYPE_CHECKING, Optional

from ..exceptions import InvalidLimitError, InvalidThresholdError
from ..logging_config import get_logger
from ..graph.clustering import Component
from ..graph.cochange import CoChangeGraph
from ..ingestion.loader import CommitRow, IngestReport, load_into
from ..temporal.models import CommitRecord, TaskKind, TimeWindow
from ..temporal.store import CommitStore
from .models import EngineSummary, _ComponentCache

if TYPE_CHECKING:
    from ..config import AnalyticsConfig

logger = get_logger(__name__)

DEFAULT_COMPONENT_THRESHOLD = 1


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class AnalyticsEngine:
    """Owns the commit store, both co-change graphs, the window and the
    cached component partition."""

    def __init__(self, default_threshold: int = DEFAULT_COMPONENT_THRESHOLD) -> None:
        if not _is_int(default_threshold) or default_threshold < 1:
            raise InvalidThresholdError("default component threshold", default_threshold)
        self.store = CommitStore()
        self.global_graph = CoChangeGraph()
        self.window_graph = CoChangeGraph()
        self._window: Optional[TimeWindow] = None
        self._default_threshold = default_threshold
        self._threshold: Optional[int] = None
        # Bumped whenever the active graph's contents or identity change
        self._graph_version = 0
        self._cache: Optional[_ComponentCache] = None

    @classmethod
    def from_config(cls, config: AnalyticsConfig) -> AnalyticsEngine:
        return cls(default_threshold=config.component_threshold)

    # ── State ─────────────────────────────────────────────────────

    @property
    def window(self) -> Optional[TimeWindow]:
        return self._window

    @property
    def component_threshold(self) -> int:
        return self._threshold if self._threshold is not None else self._default_threshold

    @property
    def active_graph(self) -> CoChangeGraph:
        return self.window_graph if self._window is not None else self.global_graph

    # ── Mutation ──────────────────────────────────────────────────

    def ingest_commit(
        self, developer: str, timestamp: int, task: str, files: Iterable[str]
    ) -> CommitRecord:
        """Record one commit and add it to the co-change graphs.

        Raises:
            InvalidCommitError: If the commit is malformed. Nothing is changed.
        """
        commit = self.store.record(developer, timestamp, task, files)
        self.global_graph.ingest(commit.files)
        if self._window is not None and self._window.contains(commit.timestamp):
            self.window_graph.ingest(commit.files)
        self._graph_version += 1
        return commit

    def ingest_many(self, rows: Iterable[CommitRow]) -> IngestReport:
        """Ingest a batch, collecting malformed rows instead of stopping."""
        return load_into(self, rows)

    def set_time_window(self, start: int, end: int) -> bool:
        """Restrict every query to commits with ``start <= timestamp <= end``.

        Returns False, leaving the current window in place, when either bound
        is negative or ``end < start``.
        """
        if not (_is_int(start) and _is_int(end)):
            return False
        window = TimeWindow(start, end)
        if not window.is_valid:
            return False

        self.window_graph.clear()
        in_window = 0
        for commit in self.store:
            if window.contains(commit.timestamp):
                self.window_graph.ingest(commit.files)
                in_window += 1
        self._window = window
        self._graph_version += 1
        logger.debug(
            "Window [%d, %d]: %d of %d commits, %d files",
            start,
            end,
            in_window,
            len(self.store),
            self.window_graph.vertex_count,
        )
        return True

    def clear_time_window(self) -> None:
        self._window = None
        self.window_graph.clear()
        self._graph_version += 1

    def set_component_threshold(self, threshold: int) -> bool:
        """Cluster the active graph at ``threshold`` and cache the result.

        Returns False for a threshold of zero or less.
        """
        if not _is_int(threshold) or threshold <= 0:
            return False
        self._threshold = threshold
        self._recluster(threshold)
        return True

    # ── Queries ───────────────────────────────────────────────────

    def software_components(self) -> set[Component]:
        return set(self._components().components)

    def component_of(self, file: str) -> Optional[Component]:
        """The component holding ``file``, or None if it is not in scope."""
        cache = self._components()
        cid = cache.index.get(file)
        return cache.components[cid] if cid is not None else None

    def repeated_bug_tasks(self, threshold: int) -> set[str]:
        """Bug tasks in which some file was committed at least ``threshold`` times."""
        self._check_threshold("repeated_bug_tasks", threshold)

        task_files: dict[str, Counter[str]] = defaultdict(Counter)
        for commit in self._in_scope(TaskKind.BUG):
            task_files[commit.task].update(commit.files)

        return {
            task
            for task, counts in task_files.items()
            if max(counts.values()) >= threshold
        }

    def broad_feature_tasks(self, threshold: int) -> set[str]:
        """Feature tasks whose files touch at least ``threshold`` components."""
        self._check_threshold("broad_feature_tasks", threshold)

        task_files: dict[str, set[str]] = defaultdict(set)
        for commit in self._in_scope(TaskKind.FEATURE):
            task_files[commit.task].update(commit.files)

        return self._spanning(task_files, threshold)

    def experts_of(self, threshold: int) -> set[str]:
        """Developers whose files touch at least ``threshold`` components."""
        self._check_threshold("experts_of", threshold)

        developer_files: dict[str, set[str]] = defaultdict(set)
        for commit in self._in_scope():
            developer_files[commit.developer].update(commit.files)

        return self._spanning(developer_files, threshold)

    def file_tallies(self) -> dict[str, int]:
        """Number of in-scope commits touching each file."""
        tally: Counter[str] = Counter()
        for commit in self._in_scope():
            tally.update(commit.files)
        return dict(tally)

    def busiest_files(self, limit: int) -> list[str]:
        """Most frequently committed files, busiest first.

        Returns the top ``limit`` files plus every further file tied with the
        file at rank ``limit``, so the result can be longer than ``limit``.
        Equal tallies are ordered by file name.
        """
        if not _is_int(limit) or limit < 1:
            raise InvalidLimitError(limit)

        ranked = sorted(self.file_tallies().items(), key=lambda item: (-item[1], item[0]))
        if len(ranked) <= limit:
            return [name for name, _ in ranked]

        boundary = ranked[limit - 1][1]
        end = limit
        while end < len(ranked) and ranked[end][1] == boundary:
            end += 1
        return [name for name, _ in ranked[:end]]

    def summary(self) -> EngineSummary:
        in_scope = self._in_scope()
        graph = self.active_graph
        return EngineSummary(
            total_commits=len(self.store),
            bug_commits=len(self.store.records_of_kind(TaskKind.BUG)),
            feature_commits=len(self.store.records_of_kind(TaskKind.FEATURE)),
            commits_in_scope=len(in_scope),
            developers=len({c.developer for c in in_scope}),
            files=graph.vertex_count,
            cochange_edges=graph.edge_count,
            component_threshold=self.component_threshold,
            component_count=len(self._components().components),
            window=self._window,
        )

    # ── Internals ─────────────────────────────────────────────────

    def _in_scope(self, kind: Optional[TaskKind] = None) -> list[CommitRecord]:
        records = self.store.all_records() if kind is None else self.store.records_of_kind(kind)
        return self.store.filter_by_window(records, self._window)

    def _components(self) -> _ComponentCache:
        threshold = self.component_threshold
        cache = self._cache
        if (
            cache is None
            or cache.threshold != threshold
            or cache.graph_version != self._graph_version
        ):
            cache = self._recluster(threshold)
        return cache

    def _recluster(self, threshold: int) -> _ComponentCache:
        components = self.active_graph.cluster(threshold)
        index = {f: cid for cid, component in enumerate(components) for f in component}
        self._cache = _ComponentCache(
            threshold=threshold,
            graph_version=self._graph_version,
            components=components,
            index=index,
        )
        logger.debug(
            "Recomputed %d components at threshold %d (%s)",
            len(components),
            threshold,
            "windowed" if self._window is not None else "global",
        )
        return self._cache

    def _spanning(self, grouped_files: dict[str, set[str]], threshold: int) -> set[str]:
        """Keys whose files fall into at least ``threshold`` distinct components."""
        index = self._components().index
        flagged = set()
        for key, files in grouped_files.items():
            touched = {index[f] for f in files if f in index}
            if len(touched) >= threshold:
                flagged.add(key)
        return flagged

    @staticmethod
    def _check_threshold(operation: str, threshold: int) -> None:
        if not _is_int(threshold) or threshold < 1:
            raise InvalidThresholdError(operation, threshold)
