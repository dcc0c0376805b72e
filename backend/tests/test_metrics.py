from facility_network.network.metrics import calculate_metrics, pareto_score
from facility_network.shared.models import FacilityDistance


def _row(fid, distance):
    return FacilityDistance(
        facility_id=fid,
        facility_name=fid,
        nearest_facility_id="X",
        nearest_facility_name="X",
        distance_km=distance,
        travel_time_minutes=distance,
    )


def test_response_time_distribution():
    metrics = calculate_metrics(
        [10.0, 20.0, 30.0, 200.0],
        node_count=4,
        edge_count=3,
        distance_matrix=[],
        gap_count=2,
    )
    assert metrics.average_response_time == 65.0
    assert metrics.median_response_time == 30.0
    assert metrics.p95_response_time == 200.0
    assert metrics.coverage_percentage == 75.0
    assert metrics.network_efficiency == 50.0
    assert metrics.pareto_score == 60
    assert metrics.total_facilities == 4


def test_distance_stats_skip_capped_rows():
    metrics = calculate_metrics(
        [10.0, 20.0, 30.0],
        node_count=3,
        edge_count=0,
        distance_matrix=[_row("A", 10.4), _row("B", 20.6), _row("C", 2400.0)],
        gap_count=0,
    )
    assert metrics.avg_inter_facility_distance == 16
    assert metrics.min_inter_facility_distance == 10
    assert metrics.max_inter_facility_distance == 21


def test_empty_sample_degrades_to_zero():
    metrics = calculate_metrics([], node_count=0, edge_count=0, distance_matrix=[], gap_count=0)
    assert metrics.average_response_time == 0.0
    assert metrics.coverage_percentage == 0.0
    assert metrics.network_efficiency == 0.0
    assert metrics.avg_inter_facility_distance == 0
    assert metrics.pareto_score == 60


def test_pareto_equity_term_can_go_negative():
    assert pareto_score(0.0, 200.0, 30) == -40
