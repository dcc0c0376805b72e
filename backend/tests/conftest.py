"""Pytest fixtures and path setup for the facility network tests."""
import sys
from pathlib import Path

import pytest

backend_dir = Path(__file__).resolve().parent.parent
if str(backend_dir) not in sys.path:
    sys.path.insert(0, str(backend_dir))


def make_facility(fid, lat, lng, region="Greater Accra", quality=50.0, valid=True):
    return {
        "id": fid,
        "name": f"Facility {fid}",
        "valid_coordinates": valid,
        "coordinates": {"lat": lat, "lng": lng},
        "capabilities": ["emergency"],
        "data_quality_score": quality,
        "region": region,
    }


def make_region(name, total=1):
    return {"name": name, "total_facilities": total, "facility_types": {"hospital": total}}


@pytest.fixture
def facility_factory():
    return make_facility


@pytest.fixture
def region_factory():
    return make_region
