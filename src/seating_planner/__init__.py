"""Wedding seating planner package."""
from .models import Guest, Table, Relationship, PlacementPolicy, SeatingPlan
from .csv_loader import (
    load_guests,
    load_relationships,
    load_tables,
    load_all,
)
from .graph import RelationshipGraph, build_relationship_graph, preference_clusters
from .solver import SeatingModel, suggest_seating
from .report import plan_report
from .apply import ApplyResult, apply_plan

__all__ = [
    "Guest",
    "Table",
    "Relationship",
    "PlacementPolicy",
    "SeatingPlan",
    "load_guests",
    "load_relationships",
    "load_tables",
    "load_all",
    "RelationshipGraph",
    "build_relationship_graph",
    "preference_clusters",
    "SeatingModel",
    "suggest_seating",
    "plan_report",
    "ApplyResult",
    "apply_plan",
]
