import io

import pytest

from seating_planner import csv_loader


def test_load_all(data_dir):
    guests, tables, relationships = csv_loader.load_all(
        data_dir / "guests.csv", data_dir / "tables.csv", data_dir / "relationships.csv"
    )
    assert [g.id for g in guests] == ["g1", "g2", "g3", "g4", "g5", "g6", "g7", "g8"]
    assert guests[0].email == "alice@example.com"
    assert guests[1].dietary_restrictions == "vegetarian"
    assert guests[0].dietary_restrictions is None
    assert guests[3].rsvp_status == "pending"

    assert [(t.id, t.name, t.capacity, t.shape) for t in tables] == [
        ("t1", "Head Table", 4, "rectangle"),
        ("t2", "Garden", 4, "round"),
        ("t3", "Terrace", 2, "oval"),
    ]
    assert all(t.guests == [] for t in tables)

    # stale rows are kept by the loader
    assert len(relationships) == 6
    assert relationships[-1].related_guest_id == "ghost"


def test_ids_stay_strings():
    guests = csv_loader.load_guests(io.StringIO("id,name\n007,Bond\n"))
    assert guests[0].id == "007"


def test_table_defaults():
    tables = csv_loader.load_tables(io.StringIO("name,capacity\nRose,6\n"))
    assert (tables[0].id, tables[0].shape) == ("Rose", "round")


@pytest.mark.parametrize(
    "loader, text, message",
    [
        (csv_loader.load_guests, "id,full_name\n1,Ann\n", "missing columns: name"),
        (csv_loader.load_guests, "id,name\n1,Ann\n1,Bea\n", "duplicate guest id: 1"),
        (csv_loader.load_tables, "name,capacity\nRose,six\n", "invalid capacity"),
        (csv_loader.load_tables, "name,capacity,shape\nRose,6,hexagon\n", "unknown shape"),
        (
            csv_loader.load_relationships,
            "guest_id,related_guest_id,relationship_type\n1,2,rival\n",
            "unknown relationship type",
        ),
    ],
)
def test_malformed_files(loader, text, message):
    with pytest.raises(ValueError, match=message):
        loader(io.StringIO(text))
