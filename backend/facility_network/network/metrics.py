from __future__ import annotations

import math
from typing import List

from facility_network.geo.travel_time import MAX_DISPLAY_DISTANCE_KM
from facility_network.network.constants import (
    PARETO_COVERAGE_WEIGHT,
    PARETO_EQUITY_WEIGHT,
    PARETO_GAP_PENALTY,
    PARETO_TIME_WEIGHT,
    WHO_ACCESS_THRESHOLD_MIN,
)
from facility_network.shared.models import FacilityDistance, OptimizationMetrics
from facility_network.shared.utils import round_half_up, round_int


def calculate_metrics(
    response_times: List[float],
    node_count: int,
    edge_count: int,
    distance_matrix: List[FacilityDistance],
    gap_count: int,
) -> OptimizationMetrics:
    n = len(response_times)
    total = 0.0
    within_threshold = 0
    for minutes in response_times:
        total += minutes
        if minutes <= WHO_ACCESS_THRESHOLD_MIN:
            within_threshold += 1

    sorted_times = sorted(response_times)
    average = total / n if n else 0.0
    median = sorted_times[n // 2] if n else 0.0
    p95 = sorted_times[math.floor(n * 0.95)] if n else 0.0
    coverage = (within_threshold / n) * 100 if n else 0.0

    max_edges = node_count * (node_count - 1) / 2
    efficiency = (edge_count / max_edges) * 100 if max_edges > 0 else 0.0

    distances = [
        row.distance_km
        for row in distance_matrix
        if math.isfinite(row.distance_km) and row.distance_km < MAX_DISPLAY_DISTANCE_KM
    ]

    return OptimizationMetrics(
        average_response_time=round_half_up(average, 1),
        median_response_time=round_half_up(median, 1),
        p95_response_time=round_half_up(p95, 1),
        coverage_percentage=round_half_up(coverage, 1),
        network_efficiency=round_half_up(efficiency, 1),
        pareto_score=pareto_score(coverage, average, gap_count),
        total_facilities=node_count,
        avg_inter_facility_distance=round_int(sum(distances) / len(distances)) if distances else 0,
        max_inter_facility_distance=round_int(max(distances)) if distances else 0,
        min_inter_facility_distance=round_int(min(distances)) if distances else 0,
    )


def pareto_score(coverage_percentage: float, average_response_time: float, gap_count: int) -> int:
    """
    Blend coverage, speed and equity into one number.

    The equity term is not clamped; past ten gaps it goes negative.
    """
    time_score = max(0.0, 100 - average_response_time)
    equity_score = 100 - gap_count * PARETO_GAP_PENALTY
    return round_int(
        coverage_percentage * PARETO_COVERAGE_WEIGHT
        + time_score * PARETO_TIME_WEIGHT
        + equity_score * PARETO_EQUITY_WEIGHT
    )
