"""
Thermal Model
=============

Steady-state temperature rises over ambient. Radiator panels are added
until tank walls plus radiators can dissipate the total loss at the
reference oil rise; the resulting rise follows ``loss^x`` with the cooling
class exponent.
"""

from __future__ import annotations

import logging
import math
from typing import List

from ..catalog.materials import get_cooling_class
from ..errors import InvalidRequirement
from .models import DesignRequirements, LossBreakdown, TankDesign, ThermalResult
from .profile import DEFAULT_PROFILE, DesignProfile

logger = logging.getLogger(__name__)

TEMPERATURE_RISE_CLASSES = (55.0, 65.0)


def reference_oil_rise(requirements: DesignRequirements) -> float:
    """Top-oil rise the radiators are sized for (K)."""
    if requirements.temperature_rise not in TEMPERATURE_RISE_CLASSES:
        raise InvalidRequirement(
            "temperature_rise", f"must be 55 or 65 K, got {requirements.temperature_rise}"
        )
    cooling = get_cooling_class(requirements.cooling_class)
    return requirements.temperature_rise - cooling.winding_gradient


def design_thermal(
    losses: LossBreakdown,
    tank: TankDesign,
    requirements: DesignRequirements,
    profile: DesignProfile = DEFAULT_PROFILE,
) -> ThermalResult:
    cooling = get_cooling_class(requirements.cooling_class)
    h = cooling.heat_transfer_coeff
    dt_ref = reference_oil_rise(requirements)
    p = losses.total_loss

    required_m2 = p / (h * dt_ref)
    radiators = max(0, math.ceil(round(required_m2 - tank.surface_area, 9) / profile.radiator_panel_area))
    area = tank.surface_area + radiators * profile.radiator_panel_area

    top_oil = dt_ref * (p / (h * area * dt_ref)) ** cooling.oil_rise_exponent
    average = top_oil + cooling.winding_gradient
    hot_spot = average * cooling.hot_spot_factor
    fans = math.ceil(radiators / profile.radiators_per_fan) if cooling.fans else 0

    result = ThermalResult(
        oil_volume=tank.oil_volume,
        radiating_area=area,
        radiator_panels=radiators,
        fans=fans,
        top_oil_rise=top_oil,
        average_winding_rise=average,
        hot_spot_rise=hot_spot,
    )
    logger.debug(
        "thermal: %d radiators, %.1f m2, top oil %.1f K, winding %.1f K, hot spot %.1f K",
        radiators, area, top_oil, average, hot_spot,
    )
    return result


def thermal_warnings(
    thermal: ThermalResult,
    requirements: DesignRequirements,
    profile: DesignProfile = DEFAULT_PROFILE,
) -> List[str]:
    limit = float(requirements.temperature_rise)
    warnings: List[str] = []
    if thermal.top_oil_rise > limit:
        warnings.append(f"Top oil rise {thermal.top_oil_rise:.1f} K exceeds the {limit:.0f} K limit")
    if thermal.average_winding_rise > limit:
        warnings.append(f"Average winding rise {thermal.average_winding_rise:.1f} K exceeds the {limit:.0f} K class")
    hot_limit = limit + profile.hot_spot_limit_margin
    if thermal.hot_spot_rise > hot_limit:
        warnings.append(f"Hot-spot rise {thermal.hot_spot_rise:.1f} K exceeds the {hot_limit:.0f} K limit")
    return warnings
