from __future__ import annotations

import math
from typing import Dict

from facility_network.shared.utils import round_half_up

TRAVEL_SPEEDS_KMPH: Dict[str, float] = {
    "urban": 30,
    "suburban": 45,
    "rural": 60,
}
# Below this distance a trip is assumed to stay on urban roads.
URBAN_DISTANCE_KM = 20.0
# Roughly the diagonal span of a country; anything larger is a data artefact.
MAX_DISPLAY_DISTANCE_KM = 2400.0
MAX_DISPLAY_TIME_MIN = 2880.0


def is_urban_distance(distance_km: float) -> bool:
    return distance_km < URBAN_DISTANCE_KM


def format_distance_km(distance_km: float) -> float:
    if not math.isfinite(distance_km) or distance_km > MAX_DISPLAY_DISTANCE_KM:
        return MAX_DISPLAY_DISTANCE_KM
    return round_half_up(distance_km, 1)


def estimate_travel_time_minutes(distance_km: float, urban: bool = False) -> float:
    if not math.isfinite(distance_km):
        return MAX_DISPLAY_TIME_MIN
    capped = min(distance_km, MAX_DISPLAY_DISTANCE_KM)
    speed_kmph = TRAVEL_SPEEDS_KMPH["urban"] if urban else TRAVEL_SPEEDS_KMPH["rural"]
    return min(round_half_up((capped / speed_kmph) * 60, 1), MAX_DISPLAY_TIME_MIN)


def estimate_tiered_travel_time_minutes(distance_km: float) -> float:
    """Travel time using the urban speed for short trips and the rural speed otherwise."""
    return estimate_travel_time_minutes(distance_km, urban=is_urban_distance(distance_km))
