"""
Core Design Calculator
======================

Derives the stepped core-type core from rating and steel grade:
volts per turn, flux density, cross-sections, diameter, steps, window and
yoke geometry, and core mass.
"""

from __future__ import annotations

import logging
import math
from typing import Optional

from ..catalog.materials import SteelGrade, get_steel_grade
from ..errors import InvalidRequirement
from .geometry import step_dimensions, stepped_area
from .models import CoreDesign, DesignRequirements
from .profile import DEFAULT_PROFILE, DesignProfile

logger = logging.getLogger(__name__)

SUPPORTED_FREQUENCIES = (50.0, 60.0)


def require_finite(field: str, value: float) -> None:
    if not math.isfinite(value):
        raise InvalidRequirement(field, f"must be a finite number, got {value}")


def check_core_requirements(requirements: DesignRequirements) -> SteelGrade:
    require_finite("rated_power", requirements.rated_power)
    if requirements.flux_density is not None:
        require_finite("flux_density", requirements.flux_density)
    if not requirements.rated_power > 0:
        raise InvalidRequirement("rated_power", f"must be positive, got {requirements.rated_power}")
    if requirements.frequency not in SUPPORTED_FREQUENCIES:
        raise InvalidRequirement("frequency", f"must be 50 or 60 Hz, got {requirements.frequency}")
    if requirements.phases not in (1, 3):
        raise InvalidRequirement("phases", f"must be 1 or 3, got {requirements.phases}")
    grade = get_steel_grade(requirements.steel_grade)
    if requirements.flux_density is not None and not 0 < requirements.flux_density <= grade.max_flux_density:
        raise InvalidRequirement(
            "flux_density",
            f"must be in (0, {grade.max_flux_density}] T for {grade.name}, got {requirements.flux_density}",
        )
    return grade


def limb_count(phases: int) -> int:
    return 3 if phases == 3 else 2


def volts_per_turn(rated_power: float, phases: int, profile: DesignProfile = DEFAULT_PROFILE) -> float:
    k = profile.volts_per_turn_k if phases == 3 else profile.single_phase_volts_per_turn_k
    return k * math.sqrt(rated_power)


def core_step_count(diameter: float, profile: DesignProfile = DEFAULT_PROFILE) -> int:
    for upper, steps in profile.step_table:
        if diameter < upper:
            return steps
    return profile.max_core_steps


def core_utilization(steps: int, profile: DesignProfile = DEFAULT_PROFILE) -> float:
    """Stepped area over circle area for ``steps`` steps."""
    return dict(profile.step_utilization).get(steps, profile.utilization_factor)


def window_height_ratio(rated_power: float, profile: DesignProfile = DEFAULT_PROFILE) -> float:
    """Window height over core diameter; taller windows for larger ratings."""
    lo, hi = profile.window_ratio_bounds
    ratio = profile.window_ratio_base + (math.log10(rated_power) - 2.0) * profile.window_ratio_slope
    return min(hi, max(lo, ratio))


def _core_mass(net_cm2: float, path_mm: float, density: float) -> float:
    return net_cm2 * 1e-4 * path_mm * 1e-3 * density


def resize_window(
    core: CoreDesign,
    *,
    window_height: Optional[float] = None,
    window_width: Optional[float] = None,
) -> CoreDesign:
    """
    Same core section with a new window; limb height, magnetic path and mass follow.
    """
    grade = get_steel_grade(core.steel_grade)
    wh = core.window_height if window_height is None else float(window_height)
    ww = core.window_width if window_width is None else float(window_width)

    limbs = core.limb_count
    limb_width = math.sqrt(core.net_cross_section) * 10.0
    yoke_length = (limbs - 1) * ww + limbs * limb_width
    path = limbs * wh + 2.0 * yoke_length

    return core.model_copy(
        update={
            "window_height": wh,
            "window_width": ww,
            "limb_height": wh,
            "magnetic_path_length": path,
            "core_weight": _core_mass(core.net_cross_section, path, grade.density),
        }
    )


def design_core(
    requirements: DesignRequirements,
    profile: DesignProfile = DEFAULT_PROFILE,
    *,
    window_height: Optional[float] = None,
) -> CoreDesign:
    grade = check_core_requirements(requirements)

    kva = float(requirements.rated_power)
    f = float(requirements.frequency)
    b = float(requirements.flux_density or grade.operating_flux_density)

    et = volts_per_turn(kva, requirements.phases, profile)
    net = et / (4.44 * f * b) * 1e4
    gross = net / grade.stacking_factor
    # steps come from a first estimate; the final diameter uses their fill
    estimate = math.sqrt(4.0 * gross / (math.pi * profile.utilization_factor)) * 10.0
    steps = core_step_count(estimate, profile)
    utilization = core_utilization(steps, profile)
    diameter = float(round(math.sqrt(4.0 * gross / (math.pi * utilization)) * 10.0))

    if window_height is None:
        window_height = float(round(diameter * window_height_ratio(kva, profile)))
    window_width = float(round(diameter * profile.window_width_factor))
    limb_width = math.sqrt(net) * 10.0

    core = CoreDesign(
        steel_grade=grade.id.value,
        volts_per_turn=et,
        flux_density=b,
        net_cross_section=net,
        gross_cross_section=gross,
        stacking_factor=grade.stacking_factor,
        utilization_factor=utilization,
        core_diameter=diameter,
        core_steps=steps,
        step_dimensions=step_dimensions(diameter, steps),
        stepped_area=stepped_area(diameter, steps),
        window_width=window_width,
        window_height=window_height,
        yoke_height=float(round(limb_width * profile.yoke_height_factor)),
        limb_height=window_height,
        limb_count=limb_count(requirements.phases),
        magnetic_path_length=0.0,
        core_weight=0.0,
    )
    core = resize_window(core)
    logger.debug(
        "core: Et=%.3f V/turn B=%.2f T net=%.1f cm2 d=%.0f mm steps=%d window=%.0fx%.0f mm mass=%.1f kg",
        et, b, net, diameter, steps, core.window_width, core.window_height, core.core_weight,
    )
    return core
