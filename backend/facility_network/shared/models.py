from __future__ import annotations

from typing import Dict, List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


class FacilityCoordinates(BaseModel):
    lat: float
    lng: float


class CleanedFacility(BaseModel):
    """Facility record as handed over by the upstream cleaning step."""

    id: str
    name: str
    valid_coordinates: bool = False
    coordinates: Optional[FacilityCoordinates] = None
    capabilities: List[str] = Field(default_factory=list)
    data_quality_score: Optional[float] = Field(default=None, ge=0, le=100)
    region: Optional[str] = None

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, value):
        return str(value)


class RegionSummary(BaseModel):
    name: str
    total_facilities: int = Field(default=0, ge=0)
    hospitals: int = Field(default=0, ge=0)
    clinics: int = Field(default=0, ge=0)
    health_centers: int = Field(default=0, ge=0)
    facility_types: Dict[str, int] = Field(default_factory=dict)


class GeoPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    lat: float
    lng: float


class OptimizationNode(BaseModel):
    model_config = ConfigDict(frozen=True)

    facility_id: str
    name: str
    lat: float
    lng: float
    region: str
    capabilities: Tuple[str, ...] = ()
    quality_score: float = Field(ge=0, le=100)
    response_time_minutes: float = Field(ge=0)
    nearest_facility_distance: float = Field(ge=0)
    nearest_facility_name: str


class NetworkEdge(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    from_id: str = Field(alias="from")
    to_id: str = Field(alias="to")
    from_name: str
    to_name: str
    distance: float = Field(ge=0)
    travel_time: float = Field(ge=0)
    weight: float


class FacilityDistance(BaseModel):
    model_config = ConfigDict(frozen=True)

    facility_id: str
    facility_name: str
    nearest_facility_id: str
    nearest_facility_name: str
    distance_km: float = Field(ge=0)
    travel_time_minutes: float = Field(ge=0)


class CoverageGap(BaseModel):
    region_name: str
    centroid: GeoPoint
    nearest_facility_distance: float = Field(ge=0)
    nearest_facility_time: float = Field(ge=0)
    population_estimate: int = Field(ge=0)
    urgency_score: float = Field(ge=0, le=1)
    recommended_action: str


class OptimizationMetrics(BaseModel):
    average_response_time: float
    median_response_time: float
    p95_response_time: float
    coverage_percentage: float = Field(ge=0, le=100)
    network_efficiency: float = Field(ge=0, le=100)
    # Unclamped: a long gap list legitimately drags this below zero.
    pareto_score: int
    total_facilities: int = Field(ge=0)
    avg_inter_facility_distance: int
    max_inter_facility_distance: int
    min_inter_facility_distance: int


class StatisticalAnalysis(BaseModel):
    p_value: float = Field(ge=0, le=1)
    confidence_interval: Tuple[float, float]
    effect_size: float
    sample_size: int = Field(ge=0)
    standard_error: float = Field(ge=0)
    significance_level: Literal["significant", "marginal", "not_significant"]


class OptimalLocation(BaseModel):
    name: str
    coordinates: GeoPoint
    current_coverage_radius: int
    population_served: int
    rank: int = Field(ge=1)
    reason: str


class RecommendedFacility(BaseModel):
    suggested_location: GeoPoint
    facility_type: Literal["hospital", "clinic", "health_center"]
    priority: Literal["critical", "high", "medium"]
    estimated_population_served: int
    nearest_existing_facility: str
    distance_from_nearest: float = Field(ge=0)
    justification: str


class PopulationCenter(BaseModel):
    name: str
    coordinates: GeoPoint
    estimated_population: int
    nearest_facility_distance: float = Field(ge=0)
    nearest_facility_name: str
    access_time_minutes: float = Field(ge=0)
    meets_who_standard: bool


class NetworkBottleneck(BaseModel):
    location: str
    issue: str
    severity: Literal["critical", "high", "medium"]
    recommendation: str


class CriticalInsights(BaseModel):
    optimal_hub_locations: List[OptimalLocation] = Field(default_factory=list)
    recommended_new_facilities: List[RecommendedFacility] = Field(default_factory=list)
    underserved_population_centers: List[PopulationCenter] = Field(default_factory=list)
    network_bottlenecks: List[NetworkBottleneck] = Field(default_factory=list)
    who_compliance_score: int = Field(ge=0, le=100)
    accessibility_grade: Literal["A", "B", "C", "D", "F"]


class OptimizationResult(BaseModel):
    nodes: List[OptimizationNode] = Field(default_factory=list)
    edges: List[NetworkEdge] = Field(default_factory=list)
    hub_facilities: List[str] = Field(default_factory=list)
    coverage_gaps: List[CoverageGap] = Field(default_factory=list)
    metrics: OptimizationMetrics
    statistical_analysis: StatisticalAnalysis
    critical_insights: CriticalInsights
    facility_distance_matrix: List[FacilityDistance] = Field(default_factory=list)
