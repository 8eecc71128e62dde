from seating_planner.graph import build_relationship_graph, preference_clusters


def test_edges_are_symmetric_and_deduplicated(rel):
    graph = build_relationship_graph(
        [rel("a", "b"), rel("b", "a"), rel("a", "c", "conflict")],
        ["a", "b", "c"],
    )
    assert graph.preference_of == {"a": ["b"], "b": ["a"]}
    assert graph.conflict_of == {"a": ["c"], "c": ["a"]}
    assert graph.in_conflict("c", "a")
    assert graph.prefers("b", "a")
    assert not graph.prefers("a", "c")


def test_stale_relationships_are_ignored(rel):
    graph = build_relationship_graph(
        [rel("a", "ghost"), rel("a", "a"), rel("a", "b", "enemy"), rel("ghost", "b", "conflict")],
        ["a", "b"],
    )
    assert graph.preference_of == {}
    assert graph.conflict_of == {}


def test_clusters_follow_breadth_first_order():
    preference_of = {
        "a": ["b", "c"],
        "b": ["a", "d"],
        "c": ["a"],
        "d": ["b"],
    }
    assert preference_clusters(["a", "b", "c", "d"], preference_of) == [["a", "b", "c", "d"]]


def test_singletons_dropped_and_largest_first(rel):
    ids = ["s", "x1", "x2", "y1", "y2", "y3", "z1", "z2"]
    graph = build_relationship_graph(
        [rel("x1", "x2"), rel("y1", "y2"), rel("y2", "y3"), rel("z1", "z2")], ids
    )
    clusters = preference_clusters(ids, graph.preference_of)
    assert clusters == [["y1", "y2", "y3"], ["x1", "x2"], ["z1", "z2"]]


def test_cluster_membership_does_not_depend_on_guest_order(rel):
    ids = ["a", "b", "c", "d", "e"]
    graph = build_relationship_graph([rel("a", "c"), rel("c", "e"), rel("b", "d")], ids)
    forward = preference_clusters(ids, graph.preference_of)
    backward = preference_clusters(list(reversed(ids)), graph.preference_of)
    assert sorted(map(frozenset, forward), key=sorted) == sorted(map(frozenset, backward), key=sorted)
    assert preference_clusters(ids, graph.preference_of) == forward
