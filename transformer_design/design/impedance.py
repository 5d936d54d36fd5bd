"""
Impedance Calculator
====================

%R from winding I2R, %X from the classic concentric-winding leakage formula
(ampere-turn diagram of two rectangular blocks separated by the main gap):

    X = 2 pi f mu0 N^2 Lmt (a/3 + g + b/3) / Hw

referred to the HV side and expressed on the per-phase HV base impedance.
"""

from __future__ import annotations

import logging
import math

from .models import DesignRequirements, ImpedanceResult, LossBreakdown, WindingDesign
from .profile import DEFAULT_PROFILE, DesignProfile

logger = logging.getLogger(__name__)

MU_0 = 4.0e-7 * math.pi


def base_impedance(voltage: float, rated_power: float, phases: int) -> float:
    """Per-phase base impedance (ohm) on the winding's rated voltage."""
    return voltage ** 2 / (rated_power * 1000.0 / phases)


def percent_reactance(
    hv: WindingDesign,
    lv: WindingDesign,
    requirements: DesignRequirements,
) -> float:
    gap = hv.inner_radius - lv.outer_radius
    atd = (lv.winding_thickness / 3.0 + gap + hv.winding_thickness / 3.0) / 1000.0
    mean_turn = math.pi * (lv.inner_radius + hv.outer_radius) / 1000.0
    height = min(hv.winding_height, lv.winding_height) / 1000.0

    x_ohm = 2.0 * math.pi * requirements.frequency * MU_0 * hv.turns ** 2 * mean_turn * atd / height
    return x_ohm / base_impedance(hv.voltage, requirements.rated_power, requirements.phases) * 100.0


def voltage_regulation(percent_r: float, percent_x: float, power_factor: float = 1.0) -> float:
    """Full-load regulation (%) for a lagging power factor, second-order approximation."""
    cos_phi = power_factor
    sin_phi = math.sqrt(max(0.0, 1.0 - cos_phi ** 2))
    first = percent_r * cos_phi + percent_x * sin_phi
    second = (percent_x * cos_phi - percent_r * sin_phi) ** 2 / 200.0
    return first + second


def calculate_impedance(
    hv: WindingDesign,
    lv: WindingDesign,
    losses: LossBreakdown,
    requirements: DesignRequirements,
    profile: DesignProfile = DEFAULT_PROFILE,
) -> ImpedanceResult:
    percent_r = losses.i2r_loss / (requirements.rated_power * 1000.0) * 100.0
    percent_x = percent_reactance(hv, lv, requirements)
    percent_z = math.hypot(percent_r, percent_x)
    target = float(requirements.target_impedance)

    result = ImpedanceResult(
        percent_r=percent_r,
        percent_x=percent_x,
        percent_z=percent_z,
        xr_ratio=percent_x / percent_r,
        target_impedance=target,
        within_tolerance=abs(percent_z - target) <= profile.impedance_tolerance * target,
        regulation_unity_pf=voltage_regulation(percent_r, percent_x, 1.0),
        regulation_lagging_pf=voltage_regulation(percent_r, percent_x, 0.8),
        short_circuit_multiple=100.0 / percent_z,
    )
    logger.debug("impedance: %%R=%.3f %%X=%.3f %%Z=%.3f (target %.2f)", percent_r, percent_x, percent_z, target)
    return result
