"""Threshold-based component clustering over a co-change graph.

The policy is greedy, single-pass and deliberately non-transitive:

    for v in vertices (canonical order):
        C = component already holding v, else a new component {v}
        for g, w in neighbors(v):
            if w >= threshold and g is unclaimed:
                add g to C

A neighbor's own edges are only expanded when the outer loop reaches it, and
a neighbor already claimed by an earlier component stays there. Two files
linked only through a vertex claimed elsewhere can therefore end up in
different components. The resulting partition depends on vertex order and is
what downstream analytics (experts, broad features) count against, so it must
not be replaced by a connected-components pass.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..exceptions import InvalidThresholdError

if TYPE_CHECKING:
    from .cochange import CoChangeGraph

logger = logging.getLogger(__name__)

Component = frozenset[str]


class ComponentClusterer:
    """Partition a CoChangeGraph's vertices for a fixed co-change threshold."""

    def __init__(self, threshold: int):
        if not isinstance(threshold, int) or isinstance(threshold, bool) or threshold < 1:
            raise InvalidThresholdError("cluster", threshold)
        self.threshold = threshold

    def cluster(self, graph: CoChangeGraph) -> list[Component]:
        """Return components in creation order."""
        # Arena of member lists plus vertex -> arena index
        members: list[list[str]] = []
        owner: dict[str, int] = {}

        for vertex, edges in graph.adjacency.items():
            cid = owner.get(vertex)
            if cid is None:
                cid = len(members)
                members.append([vertex])
                owner[vertex] = cid

            for neighbor, weight in edges.items():
                if weight >= self.threshold and neighbor not in owner:
                    owner[neighbor] = cid
                    members[cid].append(neighbor)

        components = [frozenset(group) for group in members]
        logger.debug(
            "Clustered %d vertices into %d components (threshold=%d)",
            len(owner),
            len(components),
            self.threshold,
        )
        return components
