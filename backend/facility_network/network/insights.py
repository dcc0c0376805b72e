from __future__ import annotations

import math
from typing import Dict, List, Set

from facility_network.config.profiles import CountryProfile
from facility_network.geo.travel_time import MAX_DISPLAY_TIME_MIN, format_distance_km
from facility_network.network.constants import (
    BOTTLENECK_CRITICAL_DISTANCE_KM,
    BOTTLENECK_DISTANCE_KM,
    BOTTLENECK_MAX_CONNECTIONS,
    CLINIC_POPULATION_MIN,
    CRITICAL_URGENCY,
    GRADE_THRESHOLDS,
    HIGH_URGENCY,
    HOSPITAL_POPULATION_MIN,
    HUB_COVERAGE_RADIUS_FACTOR,
    HUB_COVERAGE_RADIUS_OFFSET_KM,
    HUB_POPULATION_BASE,
    HUB_POPULATION_PER_CONNECTION,
    HUB_POPULATION_PER_QUALITY_POINT,
    MAX_BOTTLENECKS,
    MAX_RECOMMENDED_FACILITIES,
    NEAREST_REGIONAL_FACILITY,
    NETWORK_SPREAD_CRITICAL_KM,
    NETWORK_SPREAD_DISTANCE_KM,
    RECOMMENDATION_MIN_URGENCY,
    WHO_ACCESS_THRESHOLD_MIN,
)
from facility_network.network.coverage_gaps import find_nearest_node
from facility_network.network.hub_identifier import HubCandidate
from facility_network.shared.models import (
    CoverageGap,
    CriticalInsights,
    GeoPoint,
    NetworkBottleneck,
    OptimalLocation,
    OptimizationMetrics,
    OptimizationNode,
    PopulationCenter,
    RecommendedFacility,
)
from facility_network.shared.utils import round_int


def generate_critical_insights(
    nodes: List[OptimizationNode],
    neighbors: Dict[str, Set[str]],
    hubs: List[HubCandidate],
    coverage_gaps: List[CoverageGap],
    metrics: OptimizationMetrics,
    profile: CountryProfile,
) -> CriticalInsights:
    compliance = who_compliance_score(nodes)
    return CriticalInsights(
        optimal_hub_locations=build_hub_locations(hubs, profile),
        recommended_new_facilities=recommend_new_facilities(coverage_gaps, nodes),
        underserved_population_centers=[_population_center(gap) for gap in coverage_gaps],
        network_bottlenecks=find_bottlenecks(nodes, neighbors, metrics),
        who_compliance_score=compliance,
        accessibility_grade=accessibility_grade(compliance),
    )


def who_compliance_score(nodes: List[OptimizationNode]) -> int:
    if not nodes:
        return 0
    within = sum(1 for node in nodes if node.response_time_minutes <= WHO_ACCESS_THRESHOLD_MIN)
    return round_int((within / len(nodes)) * 100)


def accessibility_grade(compliance_score: int) -> str:
    for threshold, grade in GRADE_THRESHOLDS:
        if compliance_score >= threshold:
            return grade
    return "F"


def build_hub_locations(hubs: List[HubCandidate], profile: CountryProfile) -> List[OptimalLocation]:
    locations: List[OptimalLocation] = []
    for index, hub in enumerate(hubs):
        node = hub.node
        coverage_radius = round_int(
            hub.nearest_distance * HUB_COVERAGE_RADIUS_FACTOR + HUB_COVERAGE_RADIUS_OFFSET_KM
        )
        population = (
            HUB_POPULATION_BASE
            + node.quality_score * HUB_POPULATION_PER_QUALITY_POINT
            + hub.unique_connections * HUB_POPULATION_PER_CONNECTION
            + profile.population_bonus_for(node.region)
        )
        quality = _format_number(node.quality_score)
        if index == 0:
            reason = (
                f"Best network position: {hub.unique_connections} direct links, "
                f"quality {quality}/100, {node.region}"
            )
        else:
            reason = (
                f"{node.region}: {hub.unique_connections} connections, "
                f"quality {quality}, coverage {coverage_radius}km"
            )
        locations.append(
            OptimalLocation(
                name=node.name,
                coordinates=GeoPoint(lat=node.lat, lng=node.lng),
                current_coverage_radius=coverage_radius,
                population_served=round_int(population),
                rank=index + 1,
                reason=reason,
            )
        )
    return locations


def recommend_new_facilities(
    coverage_gaps: List[CoverageGap],
    nodes: List[OptimizationNode],
) -> List[RecommendedFacility]:
    eligible = [
        gap
        for gap in coverage_gaps
        if gap.urgency_score >= RECOMMENDATION_MIN_URGENCY
        and gap.nearest_facility_time > WHO_ACCESS_THRESHOLD_MIN
    ]
    recommendations: List[RecommendedFacility] = []
    for gap in eligible[:MAX_RECOMMENDED_FACILITIES]:
        distance, nearest = find_nearest_node(gap.centroid, nodes)
        recommendations.append(
            RecommendedFacility(
                suggested_location=gap.centroid,
                facility_type=_facility_type(gap.population_estimate),
                priority=_priority(gap.urgency_score),
                estimated_population_served=gap.population_estimate,
                nearest_existing_facility=nearest.name if nearest else NEAREST_REGIONAL_FACILITY,
                distance_from_nearest=format_distance_km(math.inf if distance is None else distance),
                justification=(
                    f"{gap.region_name}: {round_int(gap.nearest_facility_time)} min access time "
                    f"exceeds WHO 90-min standard. {gap.recommended_action}"
                ),
            )
        )
    return recommendations


def find_bottlenecks(
    nodes: List[OptimizationNode],
    neighbors: Dict[str, Set[str]],
    metrics: OptimizationMetrics,
) -> List[NetworkBottleneck]:
    bottlenecks: List[NetworkBottleneck] = []
    for node in nodes:
        if len(bottlenecks) >= MAX_BOTTLENECKS:
            break
        connections = len(neighbors.get(node.facility_id, ()))
        distance = node.nearest_facility_distance
        if connections <= BOTTLENECK_MAX_CONNECTIONS and distance > BOTTLENECK_DISTANCE_KM:
            bottlenecks.append(
                NetworkBottleneck(
                    location=node.name,
                    issue=(
                        f"Isolated facility with {connections} connection(s). "
                        f"Nearest: {_format_number(distance)}km"
                    ),
                    severity="critical" if distance > BOTTLENECK_CRITICAL_DISTANCE_KM else "high",
                    recommendation="Establish intermediate health post or improve road access",
                )
            )

    spread = metrics.avg_inter_facility_distance
    if len(bottlenecks) < MAX_BOTTLENECKS and spread > NETWORK_SPREAD_DISTANCE_KM:
        bottlenecks.append(
            NetworkBottleneck(
                location="Network-wide",
                issue=f"Average inter-facility distance ({spread}km) exceeds optimal range",
                severity="critical" if spread > NETWORK_SPREAD_CRITICAL_KM else "medium",
                recommendation="Prioritize mobile health units for remote areas",
            )
        )
    return bottlenecks


def _population_center(gap: CoverageGap) -> PopulationCenter:
    return PopulationCenter(
        name=gap.region_name,
        coordinates=gap.centroid,
        estimated_population=gap.population_estimate,
        nearest_facility_distance=format_distance_km(gap.nearest_facility_distance),
        nearest_facility_name=NEAREST_REGIONAL_FACILITY,
        access_time_minutes=min(gap.nearest_facility_time, MAX_DISPLAY_TIME_MIN),
        meets_who_standard=gap.nearest_facility_time <= WHO_ACCESS_THRESHOLD_MIN,
    )


def _facility_type(population: int) -> str:
    if population > HOSPITAL_POPULATION_MIN:
        return "hospital"
    if population > CLINIC_POPULATION_MIN:
        return "clinic"
    return "health_center"


def _priority(urgency: float) -> str:
    if urgency >= CRITICAL_URGENCY:
        return "critical"
    if urgency >= HIGH_URGENCY:
        return "high"
    return "medium"


def _format_number(value: float) -> str:
    # 72.0 -> "72", 72.5 -> "72.5"
    if float(value).is_integer():
        return str(int(value))
    return str(value)
