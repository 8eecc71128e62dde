"""
Preference and conflict aware seating heuristic.

Stages, run once and in order:
    1. preference clusters (largest first) are seated together where they fit
    2. remaining guests go to the best table left
    3. a balancing pass moves single guests from crowded to sparse tables
Every stage takes a table state and returns a new one.
"""
from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .graph import RelationshipGraph, build_relationship_graph, preference_clusters
from .models import Guest, PlacementPolicy, Relationship, SeatingPlan, Table, copy_tables

logger = logging.getLogger(__name__)

Adjacency = Dict[str, List[str]]


# ----------------------------- table helpers -----------------------------
def _has_conflict(guest_id: str, table: Table, conflict_of: Adjacency) -> bool:
    partners = conflict_of.get(guest_id, ())
    return any(other in partners for other in table.guests)


def _most_room(tables: Sequence[Table], with_room_only: bool = True) -> Optional[Table]:
    """Table with the greatest remaining capacity, first one on ties."""
    best: Optional[Table] = None
    for table in tables:
        if with_room_only and not table.has_room:
            continue
        if best is None or table.remaining > best.remaining:
            best = table
    return best


def _first_safe_table(guest_id: str, tables: Sequence[Table], conflict_of: Adjacency) -> Optional[Table]:
    """First table with room and no conflicting guest already seated."""
    for table in tables:
        if table.has_room and not _has_conflict(guest_id, table, conflict_of):
            return table
    return None


# ----------------------------- stages -----------------------------
def place_clusters(
    clusters: Iterable[List[str]],
    tables: Sequence[Table],
    conflict_of: Adjacency,
    policy: PlacementPolicy = PlacementPolicy.BEST_EFFORT,
) -> List[Table]:
    """Seat preference clusters, trying to keep each cluster at one table.

    Members that do not fit are left unseated for :func:`place_residual`.
    """
    state = copy_tables(tables)
    if not state:
        return state

    for cluster in clusters:
        target = next((t for t in state if t.remaining >= len(cluster)), None)
        if target is None:
            target = _most_room(state, with_room_only=False)

        occupants = target.copy()
        if policy is PlacementPolicy.STRICT:
            # A preference chain can link two guests who also conflict.
            occupants.guests.extend(cluster)
        if not any(_has_conflict(gid, occupants, conflict_of) for gid in cluster):
            seats = max(0, min(len(cluster), target.remaining))
            target.guests.extend(cluster[:seats])
            logger.debug("Seated %d of cluster %s at %s", seats, cluster, target.name)
            continue

        # Conflicts at the target: seat members one by one.
        for gid in cluster:
            table = _first_safe_table(gid, state, conflict_of)
            if table is None and policy is PlacementPolicy.BEST_EFFORT:
                table = _most_room(state)
                if table is not None:
                    logger.warning("Accepted conflict seating %s at %s", gid, table.name)
            if table is not None:
                table.guests.append(gid)
    return state


def place_residual(
    guest_ids: Iterable[str],
    tables: Sequence[Table],
    conflict_of: Adjacency,
    preference_of: Adjacency,
    policy: PlacementPolicy = PlacementPolicy.BEST_EFFORT,
) -> Tuple[List[Table], List[str]]:
    """Seat every guest not yet at a table.

    Returns the new table state and the guests left unseated, which is only
    non-empty with no tables or under the strict policy.
    """
    state = copy_tables(tables)
    seated = {gid for t in state for gid in t.guests}
    unseated: List[str] = []

    for gid in guest_ids:
        if gid in seated:
            continue
        seated.add(gid)
        if not state:
            unseated.append(gid)
            continue

        table = _first_safe_table(gid, state, conflict_of)
        if table is None and policy is PlacementPolicy.BEST_EFFORT:
            partners = preference_of.get(gid, ())
            table = next(
                (t for t in state if t.has_room and any(o in partners for o in t.guests)),
                None,
            )
            if table is None:
                table = _most_room(state)
            if table is None:
                table = state[0]
                logger.warning("All tables full, overflowing %s at %s", gid, table.name)
            elif _has_conflict(gid, table, conflict_of):
                logger.warning("Accepted conflict seating %s at %s", gid, table.name)

        if table is None:
            unseated.append(gid)
        else:
            table.guests.append(gid)
    return state, unseated


def balance_tables(
    tables: Sequence[Table],
    conflict_of: Adjacency,
    preference_of: Adjacency,
    overfill_factor: float = 1.2,
    underfill_factor: float = 0.8,
) -> List[Table]:
    """Move guests from overfilled to underfilled tables where it is safe.

    Best effort. A move never fills a table past capacity and never seats a
    guest next to someone they conflict with.
    """
    state = copy_tables(tables)
    if len(state) < 2:
        return state

    total_capacity = sum(t.capacity for t in state)
    if total_capacity <= 0:
        return state
    average = sum(len(t.guests) for t in state) / total_capacity

    sized = [t for t in state if t.capacity > 0]
    overfilled = [t for t in sized if len(t.guests) / t.capacity > average * overfill_factor]
    underfilled = [t for t in sized if len(t.guests) / t.capacity < average * underfill_factor]
    if not overfilled or not underfilled:
        return state

    for source in overfilled:
        for target in underfilled:
            if not target.has_room:
                continue
            movable = [gid for gid in source.guests if not _has_conflict(gid, target, conflict_of)]
            if not movable:
                continue

            def affinity(gid: str) -> int:
                partners = preference_of.get(gid, ())
                return sum(1 for other in target.guests if other in partners)

            guest = max(movable, key=affinity)  # first of the best on ties
            source.guests.remove(guest)
            target.guests.append(guest)
            logger.debug("Balanced %s from %s to %s", guest, source.name, target.name)
    return state


# ----------------------------- model -----------------------------
class SeatingModel:
    """Greedy seating assistant over guests, tables and relationships."""

    def __init__(
        self,
        policy: PlacementPolicy | str = PlacementPolicy.BEST_EFFORT,
        balance: bool = True,
        overfill_factor: float = 1.2,
        underfill_factor: float = 0.8,
    ) -> None:
        self.policy = PlacementPolicy.parse(policy)
        self.balance = balance
        self.overfill_factor = float(overfill_factor)
        self.underfill_factor = float(underfill_factor)
        # Inputs
        self.guests: List[Guest] = []
        self.tables: List[Table] = []
        self.graph = RelationshipGraph()

    def build(
        self, guests: List[Guest], tables: List[Table], relationships: List[Relationship]
    ) -> None:
        """Store model data and index relationships."""
        self.guests = list(guests)
        self.tables = list(tables)
        self.graph = build_relationship_graph(relationships, (g.id for g in self.guests))

    def solve(self) -> SeatingPlan:
        """Propose a seating plan. Inputs are left untouched."""
        guest_ids = [g.id for g in self.guests]
        state = copy_tables(self.tables, empty=True)
        graph = self.graph

        clusters = preference_clusters(guest_ids, graph.preference_of)
        logger.debug("Found %d preference clusters", len(clusters))

        state = place_clusters(clusters, state, graph.conflict_of, self.policy)
        state, unseated = place_residual(
            guest_ids, state, graph.conflict_of, graph.preference_of, self.policy
        )
        if self.balance:
            state = balance_tables(
                state,
                graph.conflict_of,
                graph.preference_of,
                overfill_factor=self.overfill_factor,
                underfill_factor=self.underfill_factor,
            )

        plan = SeatingPlan(tables=state, unseated=unseated, policy=self.policy)
        logger.info(
            "Seated %d of %d guests at %d tables (%d unseated, %d over capacity)",
            plan.seated_count(),
            len(guest_ids),
            len(state),
            len(unseated),
            len(plan.over_capacity()),
        )
        return plan


def suggest_seating(
    guests: List[Guest],
    tables: List[Table],
    relationships: List[Relationship],
    **options,
) -> SeatingPlan:
    """One call shortcut for ``SeatingModel(**options)``, build and solve."""
    model = SeatingModel(**options)
    model.build(guests, tables, relationships)
    return model.solve()
