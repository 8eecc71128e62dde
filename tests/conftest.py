import pathlib

import pytest

from seating_planner.models import Guest, Relationship, Table


@pytest.fixture
def data_dir() -> pathlib.Path:
    return pathlib.Path(__file__).parent / "data"


@pytest.fixture
def make_guests():
    def _make(*ids):
        return [Guest(id=gid, name=gid.upper()) for gid in ids]
    return _make


@pytest.fixture
def make_tables():
    """Tables T1..Tn with the given capacities and optional seated guests."""
    def _make(*capacities, seated=None):
        seated = seated or {}
        return [
            Table(id=f"t{i}", name=f"T{i}", capacity=cap, guests=list(seated.get(f"T{i}", [])))
            for i, cap in enumerate(capacities, start=1)
        ]
    return _make


@pytest.fixture
def rel():
    def _make(a, b, kind="preference"):
        return Relationship(guest_id=a, related_guest_id=b, relationship_type=kind)
    return _make
