import math

import pytest

from facility_network.geo.haversine import haversine_km
from facility_network.geo.travel_time import (
    MAX_DISPLAY_DISTANCE_KM,
    MAX_DISPLAY_TIME_MIN,
    estimate_tiered_travel_time_minutes,
    estimate_travel_time_minutes,
    format_distance_km,
)
from facility_network.shared.utils import round_half_up


def test_haversine_one_degree_latitude():
    assert haversine_km(0.0, 0.0, 1.0, 0.0) == pytest.approx(111.19, rel=0.001)


def test_haversine_is_symmetric():
    assert haversine_km(5.6, -0.19, 6.69, -1.62) == haversine_km(6.69, -1.62, 5.6, -0.19)


def test_travel_time_increases_with_distance():
    assert estimate_travel_time_minutes(10) < estimate_travel_time_minutes(50)


def test_urban_speed_used_below_twenty_km():
    assert estimate_tiered_travel_time_minutes(15.0) == 30.0
    assert estimate_tiered_travel_time_minutes(30.0) == 30.0


def test_travel_time_is_capped():
    assert estimate_travel_time_minutes(math.inf) == MAX_DISPLAY_TIME_MIN
    assert estimate_travel_time_minutes(10_000) == MAX_DISPLAY_DISTANCE_KM


def test_format_distance_caps_and_rounds():
    assert format_distance_km(math.inf) == MAX_DISPLAY_DISTANCE_KM
    assert format_distance_km(5000.0) == MAX_DISPLAY_DISTANCE_KM
    assert format_distance_km(12.345) == 12.3
    assert format_distance_km(0.25) == 0.3


def test_round_half_up_matches_dashboard_rounding():
    assert round_half_up(0.25, 1) == 0.3
    assert round_half_up(2.5) == 3.0
    assert round_half_up(-2.5) == -2.0
