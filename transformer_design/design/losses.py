"""
Loss & Efficiency Model
=======================

No-load loss from core mass and flux density, load loss from winding
resistances, and the efficiency-vs-load curve at unity power factor.
"""

from __future__ import annotations

import logging
import math

import numpy as np

from ..catalog.materials import get_steel_grade
from .models import CoreDesign, DesignRequirements, EfficiencyPoint, LossBreakdown, WindingDesign
from .profile import DEFAULT_PROFILE, DesignProfile

logger = logging.getLogger(__name__)


def no_load_loss(core: CoreDesign, profile: DesignProfile = DEFAULT_PROFILE) -> float:
    grade = get_steel_grade(core.steel_grade)
    flux_ratio = core.flux_density / profile.reference_flux_density
    return core.core_weight * grade.specific_loss * flux_ratio ** profile.loss_exponent * profile.building_factor


def i2r_loss(hv: WindingDesign, lv: WindingDesign, phases: int) -> float:
    return phases * (hv.rated_current ** 2 * hv.dc_resistance + lv.rated_current ** 2 * lv.dc_resistance)


def efficiency(rated_power: float, no_load: float, load_loss: float, load_percent, power_factor: float = 1.0):
    """
    Efficiency (%) at ``load_percent``; accepts a scalar or an array of loads.
    """
    p = np.asarray(load_percent, dtype=float) / 100.0
    output = rated_power * 1000.0 * p * power_factor
    losses = no_load + load_loss * p ** 2
    eta = output / (output + losses) * 100.0
    return float(eta) if eta.ndim == 0 else eta


def max_efficiency_load(no_load: float, load_loss: float) -> float:
    """% load where load loss equals no-load loss."""
    return math.sqrt(no_load / load_loss) * 100.0


def calculate_losses(
    core: CoreDesign,
    hv: WindingDesign,
    lv: WindingDesign,
    requirements: DesignRequirements,
    profile: DesignProfile = DEFAULT_PROFILE,
) -> LossBreakdown:
    p0 = no_load_loss(core, profile)
    i2r = i2r_loss(hv, lv, requirements.phases)
    eddy = i2r * profile.eddy_loss_fraction
    stray = i2r * profile.stray_loss_fraction
    pk = i2r + eddy + stray

    lo, hi = profile.efficiency_load_range
    step = profile.efficiency_load_step
    loads = np.arange(lo, hi + step / 2.0, step)
    curve = efficiency(requirements.rated_power, p0, pk, loads)
    curve_losses = p0 + pk * (loads / 100.0) ** 2

    p_star = max_efficiency_load(p0, pk)
    losses = LossBreakdown(
        no_load_loss=p0,
        i2r_loss=i2r,
        eddy_loss=eddy,
        stray_loss=stray,
        load_loss=pk,
        total_loss=p0 + pk,
        efficiency=tuple(
            EfficiencyPoint(load_percent=float(p), efficiency=float(e), losses=float(w))
            for p, e, w in zip(loads, curve, curve_losses)
        ),
        max_efficiency=efficiency(requirements.rated_power, p0, pk, p_star),
        max_efficiency_load=p_star,
    )
    logger.debug(
        "losses: P0=%.0f W Pk=%.0f W peak efficiency %.3f%% at %.1f%% load",
        p0, pk, losses.max_efficiency, p_star,
    )
    return losses
