from __future__ import annotations

import logging
import math
from typing import Dict, Iterable, List, NamedTuple, Optional, Tuple

from pydantic import BaseModel, Field

from facility_network.geo.haversine import haversine_km
from facility_network.geo.spatial_grid import SpatialGrid
from facility_network.geo.travel_time import (
    estimate_tiered_travel_time_minutes,
    estimate_travel_time_minutes,
    format_distance_km,
)
from facility_network.network.constants import (
    DEFAULT_QUALITY_SCORE,
    EDGE_QUALITY_WEIGHT,
    GRAPH_SEARCH_RADIUS_CELLS,
    MAX_EDGE_DISTANCE_KM,
    NO_NEAREST_FACILITY,
    UNKNOWN_REGION,
)
from facility_network.shared.models import (
    CleanedFacility,
    FacilityDistance,
    NetworkEdge,
    OptimizationNode,
)

logger = logging.getLogger(__name__)

EdgeKey = Tuple[int, int]


class NetworkGraph(BaseModel):
    nodes: List[OptimizationNode] = Field(default_factory=list)
    edges: List[NetworkEdge] = Field(default_factory=list)
    distance_matrix: List[FacilityDistance] = Field(default_factory=list)


class _Site(NamedTuple):
    facility_id: str
    name: str
    lat: float
    lng: float
    region: str
    capabilities: Tuple[str, ...]
    quality_score: float


class _Nearest(NamedTuple):
    distance_km: float
    index: Optional[int]


def build_network_graph(facilities: Iterable[CleanedFacility]) -> NetworkGraph:
    """
    Build the facility graph in one pass over a spatial grid.

    Every pair closer than MAX_EDGE_DISTANCE_KM found in the local grid block
    becomes one undirected edge, oriented from the lower to the higher input
    index. A node whose block holds no other facility gets its nearest
    neighbour from a full scan, so its nearest distance is always finite.
    """
    sites = [_to_site(item) for item in facilities if _has_coordinates(item)]
    if not sites:
        return NetworkGraph()

    grid = SpatialGrid([(site.lat, site.lng) for site in sites])
    edges_by_key: Dict[EdgeKey, NetworkEdge] = {}
    nearest: List[_Nearest] = []

    for i, site in enumerate(sites):
        min_distance = math.inf
        nearest_index: Optional[int] = None
        for j in grid.nearby(site.lat, site.lng, GRAPH_SEARCH_RADIUS_CELLS):
            if i == j:
                continue
            other = sites[j]
            distance = haversine_km(site.lat, site.lng, other.lat, other.lng)
            if distance < min_distance:
                min_distance = distance
                nearest_index = j
            if distance <= MAX_EDGE_DISTANCE_KM:
                key = (i, j) if i < j else (j, i)
                if key not in edges_by_key:
                    edges_by_key[key] = _build_edge(sites[key[0]], sites[key[1]], distance)

        if nearest_index is None and len(sites) > 1:
            logger.debug("No grid neighbour for %s, scanning all facilities", site.facility_id)
            min_distance, nearest_index = _exhaustive_nearest(sites, i)
        nearest.append(_Nearest(min_distance, nearest_index))

    edge_times = _min_edge_time_by_index(edges_by_key)
    nodes = [
        _build_node(site, nearest[i], sites, edge_times.get(i))
        for i, site in enumerate(sites)
    ]
    distance_matrix = [
        _build_distance_row(site, nearest[i], sites)
        for i, site in enumerate(sites)
        if nearest[i].index is not None
    ]
    return NetworkGraph(
        nodes=nodes,
        edges=list(edges_by_key.values()),
        distance_matrix=distance_matrix,
    )


def compute_response_time(nearest_distance_km: float, min_edge_time: Optional[float]) -> float:
    """Fastest incident edge, or the rural drive to the nearest facility when isolated."""
    if min_edge_time is not None:
        return min_edge_time
    return estimate_travel_time_minutes(nearest_distance_km, urban=False)


def _has_coordinates(facility: CleanedFacility) -> bool:
    return bool(facility.valid_coordinates and facility.coordinates is not None)


def _to_site(facility: CleanedFacility) -> _Site:
    quality = facility.data_quality_score
    return _Site(
        facility_id=facility.id,
        name=facility.name,
        lat=float(facility.coordinates.lat),
        lng=float(facility.coordinates.lng),
        region=facility.region or UNKNOWN_REGION,
        capabilities=tuple(facility.capabilities),
        quality_score=DEFAULT_QUALITY_SCORE if quality is None else float(quality),
    )


def _build_edge(origin: _Site, target: _Site, distance_km: float) -> NetworkEdge:
    travel_time = estimate_tiered_travel_time_minutes(distance_km)
    quality_delta = (target.quality_score - origin.quality_score) / 100
    return NetworkEdge(
        from_id=origin.facility_id,
        to_id=target.facility_id,
        from_name=origin.name,
        to_name=target.name,
        distance=format_distance_km(distance_km),
        travel_time=travel_time,
        weight=travel_time * (1 - quality_delta * EDGE_QUALITY_WEIGHT),
    )


def _exhaustive_nearest(sites: List[_Site], index: int) -> _Nearest:
    site = sites[index]
    min_distance = math.inf
    nearest_index: Optional[int] = None
    for j, other in enumerate(sites):
        if j == index:
            continue
        distance = haversine_km(site.lat, site.lng, other.lat, other.lng)
        if distance < min_distance:
            min_distance = distance
            nearest_index = j
    return _Nearest(min_distance, nearest_index)


def _min_edge_time_by_index(edges_by_key: Dict[EdgeKey, NetworkEdge]) -> Dict[int, float]:
    fastest: Dict[int, float] = {}
    for (i, j), edge in edges_by_key.items():
        for index in (i, j):
            current = fastest.get(index)
            if current is None or edge.travel_time < current:
                fastest[index] = edge.travel_time
    return fastest


def _build_node(
    site: _Site,
    nearest: _Nearest,
    sites: List[_Site],
    min_edge_time: Optional[float],
) -> OptimizationNode:
    nearest_distance = format_distance_km(nearest.distance_km)
    nearest_name = sites[nearest.index].name if nearest.index is not None else NO_NEAREST_FACILITY
    return OptimizationNode(
        facility_id=site.facility_id,
        name=site.name,
        lat=site.lat,
        lng=site.lng,
        region=site.region,
        capabilities=site.capabilities,
        quality_score=site.quality_score,
        response_time_minutes=compute_response_time(nearest_distance, min_edge_time),
        nearest_facility_distance=nearest_distance,
        nearest_facility_name=nearest_name,
    )


def _build_distance_row(site: _Site, nearest: _Nearest, sites: List[_Site]) -> FacilityDistance:
    other = sites[nearest.index]
    return FacilityDistance(
        facility_id=site.facility_id,
        facility_name=site.name,
        nearest_facility_id=other.facility_id,
        nearest_facility_name=other.name,
        distance_km=format_distance_km(nearest.distance_km),
        travel_time_minutes=estimate_travel_time_minutes(nearest.distance_km, urban=False),
    )
