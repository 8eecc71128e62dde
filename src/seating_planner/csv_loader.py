"""CSV loading utilities."""
from __future__ import annotations

from pathlib import Path
from typing import IO, Any, List, Sequence, Tuple, Union

import pandas as pd

from .models import (
    RELATIONSHIP_TYPES,
    TABLE_SHAPES,
    Guest,
    Relationship,
    Table,
    parse_optional,
)

Source = Union[Path, str, IO[Any]]


def _read(path: Source, required: Sequence[str], label: str) -> pd.DataFrame:
    # Ids stay strings: "007" must not become 7.
    df = pd.read_csv(path, dtype=str, keep_default_na=False)
    df.columns = [str(c).strip() for c in df.columns]
    missing = [col for col in required if col not in df.columns]
    if missing:
        raise ValueError(f"{label}: missing columns: {', '.join(missing)}")
    return df


def load_guests(path: Source) -> List[Guest]:
    """Load guests from ``guests.csv``. Guest ids must be unique."""
    df = _read(path, ["id", "name"], "guests.csv")
    guests: List[Guest] = []
    seen = set()
    for _, row in df.iterrows():
        gid = str(row["id"]).strip()
        if not gid:
            raise ValueError("guests.csv: empty guest id")
        if gid in seen:
            raise ValueError(f"guests.csv: duplicate guest id: {gid}")
        seen.add(gid)
        guests.append(
            Guest(
                id=gid,
                name=str(row["name"]).strip(),
                email=parse_optional(row.get("email")),
                dietary_restrictions=parse_optional(row.get("dietary_restrictions")),
                rsvp_status=parse_optional(row.get("rsvp_status")) or "pending",
                table_assignment=parse_optional(row.get("table_assignment")),
            )
        )
    return guests


def load_tables(path: Source) -> List[Table]:
    """Load table definitions. ``id`` defaults to the table name."""
    df = _read(path, ["name", "capacity"], "tables.csv")
    tables: List[Table] = []
    for _, row in df.iterrows():
        name = str(row["name"]).strip()
        try:
            capacity = int(str(row["capacity"]).strip())
        except ValueError:
            raise ValueError(f"tables.csv: invalid capacity for {name}: {row['capacity']!r}") from None
        if capacity < 0:
            raise ValueError(f"tables.csv: negative capacity for {name}")
        shape = (parse_optional(row.get("shape")) or "round").lower()
        if shape not in TABLE_SHAPES:
            raise ValueError(f"tables.csv: unknown shape for {name}: {shape}")
        tables.append(
            Table(
                id=parse_optional(row.get("id")) or name,
                name=name,
                capacity=capacity,
                shape=shape,
            )
        )
    return tables


def load_relationships(path: Source) -> List[Relationship]:
    """Load preference and conflict relationships.

    Rows naming unknown guests are kept; the solver ignores them.
    """
    df = _read(path, ["guest_id", "related_guest_id", "relationship_type"], "relationships.csv")
    relationships: List[Relationship] = []
    for idx, row in df.iterrows():
        rtype = str(row["relationship_type"]).strip().lower()
        if rtype not in RELATIONSHIP_TYPES:
            raise ValueError(f"relationships.csv: row {idx + 2}: unknown relationship type: {rtype!r}")
        relationships.append(
            Relationship(
                guest_id=str(row["guest_id"]).strip(),
                related_guest_id=str(row["related_guest_id"]).strip(),
                relationship_type=rtype,
            )
        )
    return relationships


def load_all(
    guests_path: Source, tables_path: Source, relationships_path: Source
) -> Tuple[List[Guest], List[Table], List[Relationship]]:
    """Convenience wrapper returning guests, tables and relationships."""
    return load_guests(guests_path), load_tables(tables_path), load_relationships(relationships_path)
