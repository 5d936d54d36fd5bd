"""
Cost estimation.

Turns a finished design into a manufacturing cost breakdown (materials,
labor, overhead, profit) and a multi-year lifecycle cost including the
energy cost of losses.
"""

from .models import (
    CostBreakdown,
    CostComparison,
    CostEstimationOptions,
    DesignComparison,
    LifecycleCostResult,
    LifecycleOptions,
)
from .estimate import compare_costs, compare_designs, cost_frame, estimate_cost
from .lifecycle import estimate_lifecycle_cost
