"""
Lifecycle cost: purchase price plus undiscounted energy cost of losses.
"""

from __future__ import annotations

import logging
from typing import Optional

from ..design.models import DesignRequirements, TransformerDesign
from ..errors import InvalidOption
from .estimate import estimate_cost
from .models import LifecycleCostResult, LifecycleOptions

logger = logging.getLogger(__name__)

HOURS_PER_YEAR = 8760.0
MAX_LOAD_FACTOR = 1.5


def annual_energy_loss(no_load_loss: float, load_loss: float, load_factor: float) -> float:
    """kWh lost per year for a constant average load factor."""
    return (no_load_loss * HOURS_PER_YEAR + load_loss * HOURS_PER_YEAR * load_factor ** 2) / 1000.0


def estimate_lifecycle_cost(
    design: TransformerDesign,
    requirements: DesignRequirements,
    options: Optional[LifecycleOptions] = None,
) -> LifecycleCostResult:
    """
    No discounting is applied: total = initial + annual loss cost x years.
    """
    options = options or LifecycleOptions()
    if not options.electricity_rate >= 0:
        raise InvalidOption("electricity_rate", f"must be non-negative, got {options.electricity_rate}")
    if not options.operating_years > 0:
        raise InvalidOption("operating_years", f"must be positive, got {options.operating_years}")
    if not 0 <= options.load_factor <= MAX_LOAD_FACTOR:
        raise InvalidOption("load_factor", f"must be in [0, {MAX_LOAD_FACTOR}], got {options.load_factor}")

    initial = estimate_cost(design, requirements, options).total_cost
    energy = annual_energy_loss(design.losses.no_load_loss, design.losses.load_loss, options.load_factor)
    annual = energy * options.electricity_rate
    total_loss = annual * options.operating_years
    total = initial + total_loss

    result = LifecycleCostResult(
        initial_cost=initial,
        annual_energy_loss_kwh=energy,
        annual_loss_cost=annual,
        operating_years=options.operating_years,
        electricity_rate=options.electricity_rate,
        load_factor=options.load_factor,
        total_loss_cost=total_loss,
        total_lifecycle_cost=total,
        loss_share=total_loss / total,
    )
    logger.debug(
        "lifecycle: initial $%.2f + %.0f years x $%.2f = $%.2f",
        initial, options.operating_years, annual, total,
    )
    return result
