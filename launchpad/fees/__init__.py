"""Fee Estimation Module - simulated network fees and launch costs."""

from .models import FeeConfig, FeeEstimate, LaunchStep, LaunchCostPlan
from .estimator import FeeEstimator

__all__ = [
    "FeeConfig",
    "FeeEstimate",
    "LaunchStep",
    "LaunchCostPlan",
    "FeeEstimator",
]
