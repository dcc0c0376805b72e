import pytest

from facility_network.network.hub_identifier import (
    accessibility_score,
    build_neighbor_sets,
    identify_hub_facilities,
    score_hubs,
    select_diverse_hubs,
)
from facility_network.shared.models import NetworkEdge, OptimizationNode


def _node(fid, region, quality=50.0, nearest=10.0):
    return OptimizationNode(
        facility_id=fid,
        name=f"Facility {fid}",
        lat=5.6,
        lng=-0.19,
        region=region,
        quality_score=quality,
        response_time_minutes=20.0,
        nearest_facility_distance=nearest,
        nearest_facility_name="Other",
    )


def _edge(a, b):
    return NetworkEdge(
        from_id=a,
        to_id=b,
        from_name=a,
        to_name=b,
        distance=10.0,
        travel_time=20.0,
        weight=20.0,
    )


def test_neighbor_sets_ignore_repeated_edges():
    neighbors = build_neighbor_sets([_edge("A", "B"), _edge("B", "A"), _edge("A", "C")])
    assert neighbors["A"] == {"B", "C"}
    assert neighbors["B"] == {"A"}


def test_hub_score_formula():
    node = _node("A", "Ashanti", quality=80, nearest=30)
    neighbors = build_neighbor_sets([_edge("A", "B"), _edge("A", "C")])
    candidate = score_hubs([node], neighbors)[0]
    assert candidate.unique_connections == 2
    assert candidate.hub_score == pytest.approx(0.4 * 2 + 0.4 * 80 + 0.2 * 70)


def test_accessibility_floor_for_remote_nodes():
    assert accessibility_score(250.0) == 1.0
    assert accessibility_score(0.0) == 100.0


def test_first_three_hubs_come_from_distinct_regions():
    nodes = [
        _node("A1", "Accra", quality=95),
        _node("A2", "Accra", quality=94),
        _node("A3", "Accra", quality=93),
        _node("B1", "Ashanti", quality=70),
        _node("C1", "Volta", quality=60),
        _node("B2", "Ashanti", quality=50),
    ]
    hubs = select_diverse_hubs(score_hubs(nodes, {}))
    ids = [hub.node.facility_id for hub in hubs]
    assert ids == ["A1", "B1", "C1", "B2"]
    assert len({hub.node.region for hub in hubs[:3]}) == 3


def test_ties_keep_input_order():
    nodes = [_node("X", "R1"), _node("Y", "R2"), _node("Z", "R3")]
    hubs = identify_hub_facilities(nodes, {})
    assert [hub.node.facility_id for hub in hubs] == ["X", "Y", "Z"]


def test_skipped_candidates_are_not_revisited():
    nodes = [_node(f"N{i}", "Accra", quality=90 - i) for i in range(4)]
    hubs = identify_hub_facilities(nodes, {})
    assert [hub.node.facility_id for hub in hubs] == ["N0"]
