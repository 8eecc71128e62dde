"""
Per table report for a seating plan.

A proposal can be accepted with soft failures: a table seated past its
capacity, or two conflicting guests sharing a table. The report makes both
visible:
    over capacity: more guests seated than the table holds
    conflict: at least one conflicting pair at the table
    ok: neither
"""
from __future__ import annotations

from itertools import combinations
from typing import Dict, List

from .graph import RelationshipGraph
from .models import SeatingPlan

OK = "ok"
HAS_CONFLICT = "conflict"
OVER_CAPACITY = "over capacity"


def compute_table_stats(members: List[str], capacity: int, graph: RelationshipGraph) -> Dict[str, int | float]:
    """Count seated guests, fill ratio and relationship pairs for one table."""
    conflict_pairs = preference_pairs = 0
    for a, b in combinations(members, 2):
        if graph.in_conflict(a, b):
            conflict_pairs += 1
        if graph.prefers(a, b):
            preference_pairs += 1
    seated = len(members)
    return {
        "seated": seated,
        "capacity": capacity,
        "fill_ratio": seated / capacity if capacity > 0 else 0.0,
        "conflict_pairs": conflict_pairs,
        "preference_pairs": preference_pairs,
    }


def grade_tables(stats: List[Dict[str, int | float]]) -> List[Dict[str, int | float | str]]:
    """Attach a status to each stats row. Over capacity wins over conflict."""
    graded = []
    for s in stats:
        if s["seated"] > s["capacity"]:
            status = OVER_CAPACITY
        elif s["conflict_pairs"] > 0:
            status = HAS_CONFLICT
        else:
            status = OK
        out = dict(s)
        out["status"] = status
        graded.append(out)
    return graded


def plan_report(plan: SeatingPlan, graph: RelationshipGraph) -> List[Dict[str, int | float | str]]:
    """Graded stats rows for every table in ``plan``, in table order."""
    stats = []
    for table in plan.tables:
        s = compute_table_stats(table.guests, table.capacity, graph)
        s["table"] = table.name
        s["members"] = "|".join(table.guests)
        stats.append(s)
    return grade_tables(stats)


def needs_attention(report: List[Dict[str, int | float | str]]) -> bool:
    return any(row["status"] != OK for row in report)
