"""Co-change graph: files as vertices, shared commits as edge weights."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from itertools import combinations

from .clustering import Component, ComponentClusterer


class CoChangeGraph:
    """Undirected weighted graph over file paths, updated one commit at a time.

    ``adjacency[a][b]`` is the number of ingested commits containing both
    ``a`` and ``b``. Both sides are kept, there are no self-loops, and
    weights only grow until ``clear()``.

    Vertices keep first-insertion order. Files first seen in the same commit
    are inserted by name, so the order is reproducible whatever collection
    type the commit's files arrive in.
    """

    def __init__(self) -> None:
        self.adjacency: dict[str, dict[str, int]] = {}
        self.edge_count = 0

    def ingest(self, files: Iterable[str]) -> None:
        """Add one commit's files."""
        ordered = sorted(set(files))
        for f in ordered:
            self.adjacency.setdefault(f, {})

        for a, b in combinations(ordered, 2):
            edges_a = self.adjacency[a]
            if b not in edges_a:
                self.edge_count += 1
            edges_a[b] = edges_a.get(b, 0) + 1
            edges_b = self.adjacency[b]
            edges_b[a] = edges_b.get(a, 0) + 1

    def clear(self) -> None:
        self.adjacency.clear()
        self.edge_count = 0

    def is_empty(self) -> bool:
        return not self.adjacency

    def vertices(self) -> list[str]:
        return list(self.adjacency)

    @property
    def vertex_count(self) -> int:
        return len(self.adjacency)

    def neighbors(self, vertex: str) -> dict[str, int]:
        """Neighbor -> weight for ``vertex`` (empty if unknown)."""
        return dict(self.adjacency.get(vertex, {}))

    def weight(self, a: str, b: str) -> int:
        return self.adjacency.get(a, {}).get(b, 0)

    def cluster(self, threshold: int) -> list[Component]:
        """Group vertices into components, see ComponentClusterer."""
        return ComponentClusterer(threshold).cluster(self)

    def __contains__(self, vertex: object) -> bool:
        return vertex in self.adjacency

    def __iter__(self) -> Iterator[str]:
        return iter(self.adjacency)

    def __len__(self) -> int:
        return len(self.adjacency)
