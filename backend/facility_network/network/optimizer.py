"""
Network optimization entry point.

Runs the whole pipeline in one synchronous call:

    spatial grid -> graph -> hubs + coverage gaps -> metrics + statistics -> insights

Nothing is cached between calls; equal inputs always produce equal results.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Optional, Union

from facility_network.config.profiles import CountryProfile, default_country_profile
from facility_network.network.coverage_gaps import detect_coverage_gaps
from facility_network.network.graph_builder import build_network_graph
from facility_network.network.hub_identifier import (
    build_neighbor_sets,
    identify_hub_facilities,
)
from facility_network.network.insights import generate_critical_insights
from facility_network.network.metrics import calculate_metrics
from facility_network.network.statistics import calculate_statistics
from facility_network.shared.models import (
    CleanedFacility,
    OptimizationResult,
    RegionSummary,
)

logger = logging.getLogger(__name__)

FacilityInput = Union[CleanedFacility, Dict[str, Any]]
RegionInput = Union[RegionSummary, Dict[str, Any]]


def optimize_network(
    facilities: Iterable[FacilityInput],
    region_summaries: Iterable[RegionInput],
    profile: Optional[CountryProfile] = None,
) -> OptimizationResult:
    profile = profile or default_country_profile()
    facility_models = [_coerce(CleanedFacility, item) for item in facilities]
    regions = [_coerce(RegionSummary, item) for item in region_summaries]

    graph = build_network_graph(facility_models)
    neighbors = build_neighbor_sets(graph.edges)
    hubs = identify_hub_facilities(graph.nodes, neighbors)
    coverage_gaps = detect_coverage_gaps(graph.nodes, regions, profile)

    response_times = [node.response_time_minutes for node in graph.nodes]
    metrics = calculate_metrics(
        response_times,
        node_count=len(graph.nodes),
        edge_count=len(graph.edges),
        distance_matrix=graph.distance_matrix,
        gap_count=len(coverage_gaps),
    )
    statistical_analysis = calculate_statistics(response_times)
    insights = generate_critical_insights(
        graph.nodes, neighbors, hubs, coverage_gaps, metrics, profile
    )

    logger.info(
        "Network optimization: facilities=%s nodes=%s edges=%s gaps=%s pareto=%s",
        len(facility_models),
        len(graph.nodes),
        len(graph.edges),
        len(coverage_gaps),
        metrics.pareto_score,
    )

    return OptimizationResult(
        nodes=graph.nodes,
        edges=graph.edges,
        hub_facilities=[hub.node.facility_id for hub in hubs],
        coverage_gaps=coverage_gaps,
        metrics=metrics,
        statistical_analysis=statistical_analysis,
        critical_insights=insights,
        facility_distance_matrix=graph.distance_matrix,
    )


def _coerce(model, item):
    if isinstance(item, model):
        return item
    return model.model_validate(item)


__all__ = ["optimize_network"]
