import pytest

from conftest import make_facility
from facility_network.geo.haversine import haversine_km
from facility_network.geo.travel_time import MAX_DISPLAY_DISTANCE_KM
from facility_network.network.constants import MAX_EDGE_DISTANCE_KM
from facility_network.network.graph_builder import build_network_graph
from facility_network.shared.models import CleanedFacility
from facility_network.shared.utils import round_half_up


def _build(*facilities):
    return build_network_graph([CleanedFacility.model_validate(item) for item in facilities])


def test_empty_input_builds_empty_graph():
    graph = _build()
    assert graph.nodes == []
    assert graph.edges == []
    assert graph.distance_matrix == []


def test_invalid_coordinates_are_skipped():
    graph = _build(
        make_facility("A", 5.6, -0.19),
        make_facility("B", 5.65, -0.19, valid=False),
        {"id": "C", "name": "No coords", "valid_coordinates": True},
    )
    assert [node.facility_id for node in graph.nodes] == ["A"]


def test_close_facilities_get_urban_edge():
    graph = _build(make_facility("A", 5.60, -0.19), make_facility("B", 5.65, -0.19))
    assert len(graph.edges) == 1
    edge = graph.edges[0]
    raw = haversine_km(5.60, -0.19, 5.65, -0.19)
    assert edge.from_id == "A"
    assert edge.to_id == "B"
    assert edge.distance == round_half_up(raw, 1)
    assert edge.travel_time == round_half_up(raw / 30 * 60, 1)


def test_distant_pair_in_grid_block_gets_rural_edge():
    graph = _build(make_facility("A", 0.0, 0.0), make_facility("B", 0.0, 2.2))
    edge = graph.edges[0]
    raw = haversine_km(0.0, 0.0, 0.0, 2.2)
    assert raw > 20
    assert edge.travel_time == round_half_up(raw / 60 * 60, 1)


def test_edge_weight_discounts_higher_quality_target():
    graph = _build(
        make_facility("A", 5.60, -0.19, quality=40),
        make_facility("B", 5.65, -0.19, quality=90),
    )
    edge = graph.edges[0]
    assert edge.weight == pytest.approx(edge.travel_time * 0.9)


def test_edges_are_unique_per_pair():
    graph = _build(
        make_facility("A", 5.60, -0.19),
        make_facility("B", 5.65, -0.19),
        make_facility("C", 5.62, -0.25),
    )
    pairs = [frozenset((edge.from_id, edge.to_id)) for edge in graph.edges]
    assert len(pairs) == 3
    assert len(set(pairs)) == 3
    for edge in graph.edges:
        assert edge.distance <= MAX_EDGE_DISTANCE_KM


def test_response_time_is_fastest_incident_edge():
    graph = _build(
        make_facility("A", 5.60, -0.19),
        make_facility("B", 5.65, -0.19),
        make_facility("C", 6.60, -0.19),
    )
    node_a = graph.nodes[0]
    fastest = min(
        edge.travel_time for edge in graph.edges if "A" in (edge.from_id, edge.to_id)
    )
    assert node_a.response_time_minutes == fastest
    assert node_a.nearest_facility_name == "Facility B"


def test_isolated_pair_uses_full_scan_fallback():
    graph = _build(
        make_facility("N", 9.5, 0.0, region="North"),
        make_facility("S", 5.0, 0.0, region="South"),
    )
    assert graph.edges == []
    raw = haversine_km(9.5, 0.0, 5.0, 0.0)
    assert raw > 490
    north, south = graph.nodes
    assert north.nearest_facility_name == "Facility S"
    assert south.nearest_facility_name == "Facility N"
    assert north.nearest_facility_distance == round_half_up(raw, 1)
    assert north.response_time_minutes == north.nearest_facility_distance
    assert len(graph.distance_matrix) == 2


def test_single_node_gets_capped_nearest_distance():
    graph = _build(make_facility("A", 5.6, -0.19))
    node = graph.nodes[0]
    assert node.nearest_facility_distance == MAX_DISPLAY_DISTANCE_KM
    assert node.nearest_facility_name == "None"
    assert node.response_time_minutes == 2400.0
    assert graph.distance_matrix == []


def test_missing_quality_and_region_use_defaults():
    graph = _build(
        {
            "id": 7,
            "name": "Bare",
            "valid_coordinates": True,
            "coordinates": {"lat": 5.6, "lng": -0.19},
        }
    )
    node = graph.nodes[0]
    assert node.facility_id == "7"
    assert node.quality_score == 50.0
    assert node.region == "Unknown"


def test_region_label_is_kept_verbatim():
    graph = _build(make_facility("A", 5.6, -0.19, region=" Volta "))
    assert graph.nodes[0].region == " Volta "
