"""
Empirical constants of the network optimizer, tuned against the Ghana facility
dataset. Hub rankings and every score in the result depend on these values.
"""

# WHO guidance: care should be reachable within 90 minutes.
WHO_ACCESS_THRESHOLD_MIN = 90.0

# Graph construction.
MAX_EDGE_DISTANCE_KM = 300.0
GRAPH_SEARCH_RADIUS_CELLS = 4
# Share of the endpoint quality difference that discounts (or inflates) an edge weight.
EDGE_QUALITY_WEIGHT = 0.2

# Hub scoring: connectivity, quality (0-100) and accessibility (0-100).
HUB_CONNECTION_WEIGHT = 0.4
HUB_QUALITY_WEIGHT = 0.4
HUB_ACCESSIBILITY_WEIGHT = 0.2
HUB_COUNT = 5
# No two of the first N hubs may share a region.
HUB_DIVERSE_SLOTS = 3
DEFAULT_QUALITY_SCORE = 50.0
UNKNOWN_REGION = "Unknown"
NO_NEAREST_FACILITY = "None"

# Coverage gaps.
FALLBACK_GAP_DISTANCE_KM = 100.0
GAP_POPULATION_PER_FACILITY = 30000
GAP_POPULATION_BASE = 50000
MOBILE_UNIT_THRESHOLD_MIN = 180.0
PERMANENT_FACILITY_THRESHOLD_MIN = 120.0
ACTION_MOBILE_UNIT = "Deploy mobile health unit immediately"
ACTION_PERMANENT_FACILITY = "Establish permanent facility within 2 years"
ACTION_ENHANCE_EXISTING = "Enhance existing facility capabilities"

# Pareto score.
PARETO_COVERAGE_WEIGHT = 0.4
PARETO_TIME_WEIGHT = 0.4
PARETO_EQUITY_WEIGHT = 0.2
PARETO_GAP_PENALTY = 10

# Statistics.
CONFIDENCE_Z_SCORE = 1.96
LARGE_SAMPLE_MIN = 30
SMALL_SAMPLE_P_VALUE = 0.05
MIN_P_VALUE = 0.0001
SIGNIFICANT_P = 0.01
MARGINAL_P = 0.05

# Insights.
HUB_POPULATION_BASE = 50000
HUB_POPULATION_PER_QUALITY_POINT = 500
HUB_POPULATION_PER_CONNECTION = 8000
HUB_COVERAGE_RADIUS_FACTOR = 0.6
HUB_COVERAGE_RADIUS_OFFSET_KM = 2
RECOMMENDATION_MIN_URGENCY = 0.5
MAX_RECOMMENDED_FACILITIES = 5
CRITICAL_URGENCY = 0.9
HIGH_URGENCY = 0.7
HOSPITAL_POPULATION_MIN = 100000
CLINIC_POPULATION_MIN = 30000
NEAREST_REGIONAL_FACILITY = "Nearest Regional Facility"
BOTTLENECK_MAX_CONNECTIONS = 1
BOTTLENECK_DISTANCE_KM = 50.0
BOTTLENECK_CRITICAL_DISTANCE_KM = 100.0
MAX_BOTTLENECKS = 5
NETWORK_SPREAD_DISTANCE_KM = 80.0
NETWORK_SPREAD_CRITICAL_KM = 150.0
GRADE_THRESHOLDS = ((90, "A"), (75, "B"), (60, "C"), (40, "D"))
