"""Relationship graph and preference clustering."""
from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Dict, Iterable, List

from .models import CONFLICT, PREFERENCE, Relationship

logger = logging.getLogger(__name__)


@dataclass
class RelationshipGraph:
    """Symmetric adjacency lists for preference and conflict edges.

    Lists keep first-seen order so every later stage is deterministic.
    """

    preference_of: Dict[str, List[str]] = field(default_factory=dict)
    conflict_of: Dict[str, List[str]] = field(default_factory=dict)

    def in_conflict(self, a: str, b: str) -> bool:
        return b in self.conflict_of.get(a, ())

    def prefers(self, a: str, b: str) -> bool:
        return b in self.preference_of.get(a, ())


def _add_edge(adjacency: Dict[str, List[str]], a: str, b: str) -> None:
    for x, y in ((a, b), (b, a)):
        partners = adjacency.setdefault(x, [])
        if y not in partners:
            partners.append(y)


def build_relationship_graph(
    relationships: Iterable[Relationship], guest_ids: Iterable[str]
) -> RelationshipGraph:
    """Index relationships in both directions.

    Relationships that name a guest outside ``guest_ids``, relate a guest to
    itself or carry an unknown type are stale data and skipped.
    """
    known = set(guest_ids)
    graph = RelationshipGraph()
    skipped = 0
    for r in relationships:
        a, b = r.guest_id, r.related_guest_id
        if a not in known or b not in known or a == b:
            skipped += 1
            continue
        if r.relationship_type == PREFERENCE:
            _add_edge(graph.preference_of, a, b)
        elif r.relationship_type == CONFLICT:
            _add_edge(graph.conflict_of, a, b)
        else:
            skipped += 1
    if skipped:
        logger.debug("Ignored %d relationships with unknown guests or types", skipped)
    return graph


def preference_clusters(guest_ids: Iterable[str], preference_of: Dict[str, List[str]]) -> List[List[str]]:
    """Connected components of the preference graph, largest first.

    Members are listed in breadth-first visit order. Guests without a
    preference partner are left out. Equal sized clusters keep the order of
    their earliest member in ``guest_ids``.
    """
    visited = set()
    clusters: List[List[str]] = []
    for start in guest_ids:
        if start in visited:
            continue
        visited.add(start)
        cluster = [start]
        queue = deque(preference_of.get(start, ()))
        while queue:
            current = queue.popleft()
            if current in visited:
                continue
            visited.add(current)
            cluster.append(current)
            for partner in preference_of.get(current, ()):
                if partner not in visited:
                    queue.append(partner)
        if len(cluster) > 1:
            clusters.append(cluster)
    # sorted() is stable
    return sorted(clusters, key=len, reverse=True)
