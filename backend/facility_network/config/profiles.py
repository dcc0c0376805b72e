"""
Country profiles: the dataset-specific knowledge the optimizer needs.

A profile carries the region centroid gazetteer used when a region has no
facilities of its own, the country center used when a region is unknown, and
the population bonuses applied to hub locations in known metropolitan regions.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from pydantic import BaseModel, Field, ValidationError

from facility_network.shared.models import GeoPoint

logger = logging.getLogger(__name__)


class UnknownCountryProfileError(KeyError):
    """Raised when a profile code is not present in the loaded registry."""


class RegionPopulationBonus(BaseModel):
    match: str = Field(..., min_length=1)
    bonus: int = Field(ge=0)


class CountryProfile(BaseModel):
    code: str
    name: str
    center: GeoPoint
    region_centroids: Dict[str, GeoPoint] = Field(default_factory=dict)
    # Checked in order; the first case-insensitive substring match wins.
    region_population_bonuses: List[RegionPopulationBonus] = Field(default_factory=list)
    default_population_bonus: int = Field(default=30000, ge=0)

    def population_bonus_for(self, region: str) -> int:
        region_lower = region.lower()
        for entry in self.region_population_bonuses:
            if entry.match.lower() in region_lower:
                return entry.bonus
        return self.default_population_bonus


DEFAULT_COUNTRY_PROFILES: Dict[str, Dict[str, Any]] = {
    "GH": {
        "code": "GH",
        "name": "Ghana",
        "center": {"lat": 7.9465, "lng": -1.0232},
        "region_centroids": {
            "Greater Accra": {"lat": 5.6037, "lng": -0.1870},
            "Ashanti": {"lat": 6.6885, "lng": -1.6244},
            "Western": {"lat": 5.0527, "lng": -2.2565},
            "Eastern": {"lat": 6.3333, "lng": -0.5000},
            "Central": {"lat": 5.5000, "lng": -1.0000},
            "Northern": {"lat": 9.5000, "lng": -1.0000},
            "Upper East": {"lat": 10.7833, "lng": -0.8167},
            "Upper West": {"lat": 10.2500, "lng": -2.0833},
            "Volta": {"lat": 6.5781, "lng": 0.4502},
            "Brong Ahafo": {"lat": 7.9500, "lng": -1.6750},
            "Bono": {"lat": 7.5000, "lng": -2.5000},
            "Bono East": {"lat": 7.7500, "lng": -1.0000},
            "Ahafo": {"lat": 7.0000, "lng": -2.5000},
            "Savannah": {"lat": 9.0000, "lng": -1.5000},
            "North East": {"lat": 10.5000, "lng": -0.2500},
            "Oti": {"lat": 7.5000, "lng": 0.3000},
            "Western North": {"lat": 6.0000, "lng": -2.5000},
        },
        "region_population_bonuses": [
            {"match": "accra", "bonus": 100000},
            {"match": "ashanti", "bonus": 80000},
        ],
        "default_population_bonus": 30000,
    },
}

DEFAULT_COUNTRY_CODE = "GH"


def default_country_profile() -> CountryProfile:
    return CountryProfile.model_validate(DEFAULT_COUNTRY_PROFILES[DEFAULT_COUNTRY_CODE])


def load_country_profile(
    path: Optional[Union[str, Path]] = None,
    code: str = DEFAULT_COUNTRY_CODE,
) -> CountryProfile:
    """
    Load a profile from a YAML registry of the form ``countries: {CODE: {...}}``.

    Missing or unreadable files fall back to the built-in registry, and an
    entry that fails validation falls back to the default profile. An unknown
    code raises UnknownCountryProfileError.
    """
    registry = _load_registry(path)
    key = code.strip().upper()
    raw = registry.get(key)
    if raw is None:
        raise UnknownCountryProfileError(key)
    try:
        payload = dict(raw)
        payload.setdefault("code", key)
        return CountryProfile.model_validate(payload)
    except (ValidationError, TypeError, ValueError) as exc:
        logger.warning("Country profile %s is invalid (%s), using defaults: %s", key, exc, path)
        return default_country_profile()


def _load_registry(path: Optional[Union[str, Path]]) -> Dict[str, Dict[str, Any]]:
    if path is None:
        return DEFAULT_COUNTRY_PROFILES
    if not os.path.exists(path):
        logger.warning("Country profile file not found, using defaults: %s", path)
        return DEFAULT_COUNTRY_PROFILES
    try:
        with open(path, "r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle) or {}
    except (OSError, yaml.YAMLError) as exc:
        logger.warning("Country profile file unreadable (%s), using defaults: %s", exc, path)
        return DEFAULT_COUNTRY_PROFILES
    countries = data.get("countries") if isinstance(data, dict) else None
    if not isinstance(countries, dict) or not countries:
        logger.warning("Country profile file has no 'countries' mapping, using defaults: %s", path)
        return DEFAULT_COUNTRY_PROFILES
    return {str(key).strip().upper(): value for key, value in countries.items()}

