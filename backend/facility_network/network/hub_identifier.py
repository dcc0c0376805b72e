from __future__ import annotations

from collections import defaultdict
from typing import Dict, List, NamedTuple, Set

from facility_network.network.constants import (
    HUB_ACCESSIBILITY_WEIGHT,
    HUB_CONNECTION_WEIGHT,
    HUB_COUNT,
    HUB_DIVERSE_SLOTS,
    HUB_QUALITY_WEIGHT,
)
from facility_network.shared.models import NetworkEdge, OptimizationNode


class HubCandidate(NamedTuple):
    node: OptimizationNode
    unique_connections: int
    hub_score: float
    nearest_distance: float


def build_neighbor_sets(edges: List[NetworkEdge]) -> Dict[str, Set[str]]:
    neighbors: Dict[str, Set[str]] = defaultdict(set)
    for edge in edges:
        neighbors[edge.from_id].add(edge.to_id)
        neighbors[edge.to_id].add(edge.from_id)
    return neighbors


def accessibility_score(nearest_distance_km: float) -> float:
    """Closeness to the nearest facility on a 0-100 scale, floored at 1."""
    return max(1.0, 100 - nearest_distance_km)


def score_hubs(
    nodes: List[OptimizationNode],
    neighbors: Dict[str, Set[str]],
) -> List[HubCandidate]:
    candidates: List[HubCandidate] = []
    for node in nodes:
        unique_connections = len(neighbors.get(node.facility_id, ()))
        nearest = node.nearest_facility_distance
        hub_score = (
            HUB_CONNECTION_WEIGHT * unique_connections
            + HUB_QUALITY_WEIGHT * node.quality_score
            + HUB_ACCESSIBILITY_WEIGHT * accessibility_score(nearest)
        )
        candidates.append(HubCandidate(node, unique_connections, hub_score, nearest))
    return candidates


def select_diverse_hubs(
    candidates: List[HubCandidate],
    limit: int = HUB_COUNT,
    diverse_slots: int = HUB_DIVERSE_SLOTS,
) -> List[HubCandidate]:
    """
    Pick the best hubs while spreading the leading picks across regions.

    ``sorted`` is stable, so equal scores keep input order.
    """
    ranked = sorted(candidates, key=lambda item: item.hub_score, reverse=True)
    selected: List[HubCandidate] = []
    used_regions: Set[str] = set()
    for candidate in ranked:
        if len(selected) >= limit:
            break
        if len(selected) < diverse_slots and candidate.node.region in used_regions:
            continue
        selected.append(candidate)
        used_regions.add(candidate.node.region)
    return selected


def identify_hub_facilities(
    nodes: List[OptimizationNode],
    neighbors: Dict[str, Set[str]],
    limit: int = HUB_COUNT,
) -> List[HubCandidate]:
    return select_diverse_hubs(score_hubs(nodes, neighbors), limit=limit)
