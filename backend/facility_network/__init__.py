from facility_network.network.optimizer import optimize_network
from facility_network.shared.models import CleanedFacility, OptimizationResult, RegionSummary

__all__ = ["optimize_network", "CleanedFacility", "OptimizationResult", "RegionSummary"]
