from __future__ import annotations

import math
from collections import defaultdict
from typing import Dict, List, Optional, Tuple

from facility_network.config.profiles import CountryProfile
from facility_network.geo.haversine import haversine_km
from facility_network.geo.travel_time import (
    estimate_tiered_travel_time_minutes,
    estimate_travel_time_minutes,
    format_distance_km,
)
from facility_network.network.constants import (
    ACTION_ENHANCE_EXISTING,
    ACTION_MOBILE_UNIT,
    ACTION_PERMANENT_FACILITY,
    FALLBACK_GAP_DISTANCE_KM,
    GAP_POPULATION_BASE,
    GAP_POPULATION_PER_FACILITY,
    MOBILE_UNIT_THRESHOLD_MIN,
    PERMANENT_FACILITY_THRESHOLD_MIN,
    WHO_ACCESS_THRESHOLD_MIN,
)
from facility_network.shared.models import (
    CoverageGap,
    GeoPoint,
    OptimizationNode,
    RegionSummary,
)
from facility_network.shared.utils import round_half_up


def detect_coverage_gaps(
    nodes: List[OptimizationNode],
    regions: List[RegionSummary],
    profile: CountryProfile,
) -> List[CoverageGap]:
    """
    Flag every region whose average access time exceeds the WHO standard.

    Regions with facilities are judged by the mean nearest-neighbour distance
    of their own facilities; regions without any are judged by the distance
    from their gazetteer centroid to the closest facility in the country.
    """
    nodes_by_region: Dict[str, List[OptimizationNode]] = defaultdict(list)
    for node in nodes:
        nodes_by_region[node.region].append(node)

    gaps: List[CoverageGap] = []
    for region in regions:
        members = match_region_nodes(region.name, nodes_by_region)
        if members:
            avg_distance = _mean_nearest_distance(members)
            avg_time = estimate_tiered_travel_time_minutes(avg_distance)
            centroid = GeoPoint(
                lat=sum(node.lat for node in members) / len(members),
                lng=sum(node.lng for node in members) / len(members),
            )
        else:
            centroid = resolve_region_centroid(region.name, profile)
            nearest_distance, _ = find_nearest_node(centroid, nodes)
            avg_distance = nearest_distance if nearest_distance is not None else FALLBACK_GAP_DISTANCE_KM
            avg_time = estimate_travel_time_minutes(avg_distance, urban=False)

        if avg_time <= WHO_ACCESS_THRESHOLD_MIN:
            continue

        gaps.append(
            CoverageGap(
                region_name=region.name,
                centroid=centroid,
                nearest_facility_distance=format_distance_km(avg_distance),
                nearest_facility_time=round_half_up(avg_time, 1),
                population_estimate=estimate_region_population(region),
                urgency_score=min(avg_time / WHO_ACCESS_THRESHOLD_MIN, 1.0),
                recommended_action=recommend_action(avg_time),
            )
        )

    gaps.sort(key=lambda gap: gap.urgency_score, reverse=True)
    return gaps


def match_region_nodes(
    region_name: str,
    nodes_by_region: Dict[str, List[OptimizationNode]],
) -> List[OptimizationNode]:
    """
    Exact label match first, then case-insensitive containment either way.

    The fallback may pull in several labels ("Western" also matches
    "Western North"); all their nodes are concatenated.
    """
    exact = nodes_by_region.get(region_name)
    if exact:
        return list(exact)
    region_lower = region_name.lower()
    matched: List[OptimizationNode] = []
    for label, members in nodes_by_region.items():
        label_lower = label.lower()
        if region_lower in label_lower or label_lower in region_lower:
            matched.extend(members)
    return matched


def resolve_region_centroid(region_name: str, profile: CountryProfile) -> GeoPoint:
    name = region_name.strip()
    centroids = profile.region_centroids
    if name in centroids:
        return centroids[name]
    name_lower = name.lower()
    for key, point in centroids.items():
        key_lower = key.lower()
        if name_lower in key_lower or key_lower in name_lower:
            return point
    return profile.center


def find_nearest_node(
    point: GeoPoint,
    nodes: List[OptimizationNode],
) -> Tuple[Optional[float], Optional[OptimizationNode]]:
    min_distance = math.inf
    nearest: Optional[OptimizationNode] = None
    for node in nodes:
        distance = haversine_km(point.lat, point.lng, node.lat, node.lng)
        if distance < min_distance:
            min_distance = distance
            nearest = node
    if nearest is None:
        return None, None
    return min_distance, nearest


def estimate_region_population(region: RegionSummary) -> int:
    return max(region.total_facilities, 1) * GAP_POPULATION_PER_FACILITY + GAP_POPULATION_BASE


def recommend_action(avg_time_minutes: float) -> str:
    if avg_time_minutes > MOBILE_UNIT_THRESHOLD_MIN:
        return ACTION_MOBILE_UNIT
    if avg_time_minutes > PERMANENT_FACILITY_THRESHOLD_MIN:
        return ACTION_PERMANENT_FACILITY
    return ACTION_ENHANCE_EXISTING


def _mean_nearest_distance(members: List[OptimizationNode]) -> float:
    distances = [
        node.nearest_facility_distance
        for node in members
        if math.isfinite(node.nearest_facility_distance) and node.nearest_facility_distance > 0
    ]
    if not distances:
        return 0.0
    return sum(distances) / len(distances)
