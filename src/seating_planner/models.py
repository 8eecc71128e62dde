"""Data models for the seating planner."""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple
import math


PREFERENCE = "preference"
CONFLICT = "conflict"
RELATIONSHIP_TYPES = (PREFERENCE, CONFLICT)

TABLE_SHAPES = ("round", "rectangle", "oval")


def parse_optional(value: object) -> Optional[str]:
    """Return a stripped string or ``None`` for empty cells.

    ``pandas`` provides ``float('nan')`` for missing values which is
    treated as empty.
    """
    if value is None:
        return None
    if isinstance(value, float) and math.isnan(value):
        return None
    text = str(value).strip()
    if not text or text.lower() == "nan":
        return None
    return text


class PlacementPolicy(str, Enum):
    """What to do with a guest when no valid table is left."""

    # Seat anyway: accept a conflict, or overflow a full table.
    BEST_EFFORT = "best_effort"
    # Leave the guest unseated instead.
    STRICT = "strict"

    @classmethod
    def parse(cls, value: "PlacementPolicy | str") -> "PlacementPolicy":
        if isinstance(value, cls):
            return value
        text = str(value).strip().lower().replace("-", "_")
        for policy in cls:
            if policy.value == text:
                return policy
        raise ValueError(f"Unknown placement policy: {value!r}")


@dataclass
class Guest:
    """Representation of a wedding guest."""

    id: str
    name: str
    email: Optional[str] = None
    dietary_restrictions: Optional[str] = None
    rsvp_status: str = "pending"
    table_assignment: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, object]) -> "Guest":
        return cls(
            id=str(data["id"]),
            name=str(data.get("name", data["id"])),
            email=parse_optional(data.get("email")),
            dietary_restrictions=parse_optional(
                data.get("dietary_restrictions", data.get("dietaryRestrictions"))
            ),
            rsvp_status=parse_optional(data.get("rsvp_status", data.get("rsvpStatus"))) or "pending",
            table_assignment=parse_optional(
                data.get("table_assignment", data.get("tableAssignment"))
            ),
        )


@dataclass
class Table:
    """Dinner table with the ids of the guests seated at it."""

    id: str
    name: str
    capacity: int
    shape: str = "round"
    guests: List[str] = field(default_factory=list)

    @property
    def remaining(self) -> int:
        return self.capacity - len(self.guests)

    @property
    def has_room(self) -> bool:
        return len(self.guests) < self.capacity

    def copy(self, empty: bool = False) -> "Table":
        """Working copy. The guest list is never shared with the original."""
        return replace(self, guests=[] if empty else list(self.guests))

    def to_dict(self) -> Dict[str, object]:
        return {
            "id": self.id,
            "name": self.name,
            "shape": self.shape,
            "capacity": self.capacity,
            "guests": list(self.guests),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, object]) -> "Table":
        name = str(data["name"])
        return cls(
            id=str(data.get("id", name)),
            name=name,
            capacity=int(data.get("capacity", 0)),
            shape=parse_optional(data.get("shape")) or "round",
            guests=[str(g) for g in data.get("guests", []) or []],
        )


@dataclass
class Relationship:
    """Preference or conflict between two guests."""

    guest_id: str
    related_guest_id: str
    relationship_type: str

    @classmethod
    def from_dict(cls, data: Dict[str, object]) -> "Relationship":
        return cls(
            guest_id=str(data.get("guest_id", data.get("guestId"))),
            related_guest_id=str(data.get("related_guest_id", data.get("relatedGuestId"))),
            relationship_type=str(
                data.get("relationship_type", data.get("relationshipType", ""))
            ).strip().lower(),
        )


def copy_tables(tables: Iterable[Table], empty: bool = False) -> List[Table]:
    return [t.copy(empty=empty) for t in tables]


@dataclass
class SeatingPlan:
    """Proposed table assignment.

    ``tables`` are working copies owned by the plan. ``unseated`` holds the
    guests that could not be placed, in guest input order.
    """

    tables: List[Table]
    unseated: List[str] = field(default_factory=list)
    policy: PlacementPolicy = PlacementPolicy.BEST_EFFORT

    def assignments(self) -> Dict[str, str]:
        """Map guest id to the name of its table."""
        out: Dict[str, str] = {}
        for table in self.tables:
            for gid in table.guests:
                out[gid] = table.name
        return out

    def table_for(self, guest_id: str) -> Optional[Table]:
        for table in self.tables:
            if guest_id in table.guests:
                return table
        return None

    def seated_count(self) -> int:
        return sum(len(t.guests) for t in self.tables)

    def over_capacity(self) -> List[Table]:
        return [t for t in self.tables if len(t.guests) > t.capacity]

    def conflicts(self, conflict_of: Dict[str, List[str]]) -> List[Tuple[str, str, str]]:
        """Return ``(table name, guest, guest)`` for conflicting pairs seated together."""
        found: List[Tuple[str, str, str]] = []
        for table in self.tables:
            for i, a in enumerate(table.guests):
                partners = conflict_of.get(a, ())
                for b in table.guests[i + 1:]:
                    if b in partners:
                        found.append((table.name, a, b))
        return found

    def to_dicts(self) -> List[Dict[str, object]]:
        return [t.to_dict() for t in self.tables]
