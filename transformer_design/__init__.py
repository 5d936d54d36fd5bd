"""
Transformer Design Engine
=========================

Deterministic electromagnetic design and cost estimation for oil-immersed
core-type power and distribution transformers:
- Core, winding, loss, impedance, thermal, tank and BOM calculation
- Manufacturing cost breakdown and lifecycle (loss) cost
- Flat record serialization for storage and marketplace listings

Architecture:
- catalog/: Steel, conductor, cooling, vector group data and unit prices
- design/: Design pipeline (requirements -> TransformerDesign)
- costing/: Cost and lifecycle cost estimation
- records.py: Flat record conversion
- cli.py: Command line interface
"""

from .design import DesignRequirements, DesignProfile, TransformerDesign, compute_design
from .costing import CostEstimationOptions, LifecycleOptions, estimate_cost, estimate_lifecycle_cost
from .errors import (
    ImpedanceOutOfTolerance,
    InvalidOption,
    InvalidRequirement,
    TransformerDesignError,
    UndersizedConductor,
)

__version__ = "1.0.0"

__all__ = [
    "DesignRequirements",
    "DesignProfile",
    "TransformerDesign",
    "compute_design",
    "CostEstimationOptions",
    "LifecycleOptions",
    "estimate_cost",
    "estimate_lifecycle_cost",
    "ImpedanceOutOfTolerance",
    "InvalidOption",
    "InvalidRequirement",
    "TransformerDesignError",
    "UndersizedConductor",
]
