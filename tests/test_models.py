import pytest

from seating_planner.models import Guest, PlacementPolicy, Relationship, SeatingPlan, Table


def test_from_dict_accepts_dashboard_keys():
    guest = Guest.from_dict({"id": 1, "name": "Alex", "dietaryRestrictions": "vegan", "rsvpStatus": "confirmed"})
    assert (guest.id, guest.dietary_restrictions, guest.rsvp_status) == ("1", "vegan", "confirmed")

    table = Table.from_dict({"id": "t1", "name": "Rose", "capacity": 8, "shape": "oval", "guests": ["1"]})
    assert (table.capacity, table.shape, table.guests) == (8, "oval", ["1"])

    r = Relationship.from_dict({"guestId": "1", "relatedGuestId": "2", "relationshipType": "Conflict"})
    assert (r.guest_id, r.related_guest_id, r.relationship_type) == ("1", "2", "conflict")


def test_table_copy_does_not_share_guests():
    table = Table(id="t1", name="Rose", capacity=2, guests=["a"])
    copy = table.copy()
    copy.guests.append("b")
    assert table.guests == ["a"]
    assert table.copy(empty=True).guests == []
    assert table.remaining == 1 and table.has_room


def test_plan_helpers():
    plan = SeatingPlan(
        tables=[
            Table(id="t1", name="Rose", capacity=1, guests=["a", "b"]),
            Table(id="t2", name="Lily", capacity=2, guests=["c"]),
        ],
        unseated=["d"],
    )
    assert plan.assignments() == {"a": "Rose", "b": "Rose", "c": "Lily"}
    assert plan.table_for("c").name == "Lily"
    assert plan.table_for("d") is None
    assert [t.name for t in plan.over_capacity()] == ["Rose"]
    assert plan.conflicts({"a": ["b"], "b": ["a"]}) == [("Rose", "a", "b")]
    assert plan.to_dicts()[1] == {"id": "t2", "name": "Lily", "shape": "round", "capacity": 2, "guests": ["c"]}


@pytest.mark.parametrize("value, expected", [
    ("strict", PlacementPolicy.STRICT),
    ("best-effort", PlacementPolicy.BEST_EFFORT),
    (PlacementPolicy.STRICT, PlacementPolicy.STRICT),
])
def test_policy_parse(value, expected):
    assert PlacementPolicy.parse(value) is expected
