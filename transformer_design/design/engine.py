from __future__ import annotations

import logging
import math
import warnings
from dataclasses import dataclass
from typing import List, Optional

from ..catalog.materials import (
    get_conductor_material,
    get_cooling_class,
    get_load_profile,
    get_steel_grade,
    get_vector_group,
    steel_guidance,
)
from ..errors import ImpedanceOutOfTolerance, InvalidRequirement
from .bom import build_bom
from .core import check_core_requirements, design_core, require_finite, resize_window
from .impedance import calculate_impedance
from .losses import calculate_losses
from .models import CoreDesign, DesignRequirements, ImpedanceResult, LossBreakdown, TransformerDesign, WindingDesign
from .profile import DEFAULT_PROFILE, DesignProfile
from .tank import design_tank
from .thermal import design_thermal, reference_oil_rise, thermal_warnings
from .winding import design_windings, main_gap

logger = logging.getLogger(__name__)

MIN_TARGET_IMPEDANCE = 2.0
MAX_TARGET_IMPEDANCE = 15.0


@dataclass(frozen=True)
class _ActivePart:
    core: CoreDesign
    hv: WindingDesign
    lv: WindingDesign
    losses: LossBreakdown
    impedance: ImpedanceResult


def validate_requirements(requirements: DesignRequirements) -> List[str]:
    """
    Reject requirements the engine cannot design for.

    Raises InvalidRequirement naming the first offending field. Returns
    advisory notes that do not block the design.
    """
    check_core_requirements(requirements)
    for field in ("primary_voltage", "secondary_voltage", "target_impedance"):
        require_finite(field, getattr(requirements, field))

    if not requirements.secondary_voltage > 0:
        raise InvalidRequirement("secondary_voltage", f"must be positive, got {requirements.secondary_voltage}")
    if not requirements.primary_voltage > requirements.secondary_voltage:
        raise InvalidRequirement(
            "primary_voltage",
            f"must exceed the secondary voltage ({requirements.primary_voltage:g} <= {requirements.secondary_voltage:g} V)",
        )
    if not MIN_TARGET_IMPEDANCE <= requirements.target_impedance <= MAX_TARGET_IMPEDANCE:
        raise InvalidRequirement(
            "target_impedance",
            f"must be between {MIN_TARGET_IMPEDANCE:g}% and {MAX_TARGET_IMPEDANCE:g}%, got {requirements.target_impedance}",
        )
    get_conductor_material(requirements.conductor_type)
    get_cooling_class(requirements.cooling_class)
    group = get_vector_group(requirements.vector_group)
    get_load_profile(requirements.load_profile)
    reference_oil_rise(requirements)

    notes: List[str] = []
    advice = steel_guidance(requirements.load_profile, requirements.steel_grade)
    if advice:
        notes.append(advice)
    if requirements.phases == 1:
        notes.append(f"Vector group {group.name} does not apply to a single-phase unit")
    if requirements.rated_power > 10000:
        notes.append("Ratings above 10 MVA are outside the calibrated range of the empirical constants")
    return notes


def fit_window_width(
    core: CoreDesign,
    hv: WindingDesign,
    requirements: DesignRequirements,
    profile: DesignProfile = DEFAULT_PROFILE,
) -> CoreDesign:
    """Widen the window so the HV coils (two per window on three-phase cores) fit."""
    coils_per_window = 2 if requirements.phases == 3 else 1
    needed = coils_per_window * (hv.outer_radius - core.core_radius) + main_gap(requirements.primary_voltage, profile)
    width = max(core.window_width, float(math.ceil(needed)))
    return resize_window(core, window_width=width)


def _design_active_part(
    requirements: DesignRequirements,
    profile: DesignProfile,
    window_height: Optional[float],
) -> _ActivePart:
    core = design_core(requirements, profile, window_height=window_height)
    hv, lv = design_windings(requirements, core, profile)
    core = fit_window_width(core, hv, requirements, profile)
    losses = calculate_losses(core, hv, lv, requirements, profile)
    impedance = calculate_impedance(hv, lv, losses, requirements, profile)
    return _ActivePart(core, hv, lv, losses, impedance)


def compute_design(
    requirements: DesignRequirements,
    profile: DesignProfile = DEFAULT_PROFILE,
) -> TransformerDesign:
    """
    Full design from requirements:
    - core and windings, with the window height adjusted toward the target %Z
    - losses, efficiency curve, impedance
    - tank, oil, thermal rises, bill of materials

    Raises InvalidRequirement (or UndersizedConductor) and never returns a
    partial design. A %Z outside tolerance is reported as an
    ImpedanceOutOfTolerance warning on an otherwise complete design.
    """
    notes = validate_requirements(requirements)
    target = float(requirements.target_impedance)

    part = _design_active_part(requirements, profile, None)
    lo, hi = (f * part.core.core_diameter for f in profile.window_height_bounds)
    iterations = 1
    while iterations < profile.impedance_max_iterations:
        deviation = part.impedance.percent_z - target
        if abs(deviation) <= profile.impedance_convergence:
            break
        scale = 1.0 + profile.impedance_damping * (part.impedance.percent_z / target - 1.0)
        window_height = float(round(min(hi, max(lo, part.core.window_height * scale))))
        if window_height == part.core.window_height:
            break
        part = _design_active_part(requirements, profile, window_height)
        iterations += 1
        logger.debug(
            "impedance pass %d: window height %.0f mm -> %%Z %.3f", iterations, window_height, part.impedance.percent_z
        )

    tank = design_tank(part.core, part.hv, part.lv, requirements, profile)
    thermal = design_thermal(part.losses, tank, requirements, profile)
    bom = build_bom(part.core, part.hv, part.lv, tank, thermal, requirements, profile)

    issues: List[str] = []
    if not part.impedance.within_tolerance:
        message = (
            f"Impedance {part.impedance.percent_z:.2f}% is outside ±{profile.impedance_tolerance:.0%} "
            f"of the {target:g}% target"
        )
        issues.append(message)
        warnings.warn(message, ImpedanceOutOfTolerance, stacklevel=2)
    issues += thermal_warnings(thermal, requirements, profile)
    for issue in issues:
        logger.warning("%s: %s", requirements.name, issue)

    return TransformerDesign(
        requirements=requirements,
        core=part.core,
        hv_winding=part.hv,
        lv_winding=part.lv,
        losses=part.losses,
        impedance=part.impedance,
        thermal=thermal,
        tank=tank,
        bom=bom,
        iterations=iterations,
        warnings=tuple(issues),
        notes=tuple(notes),
    )


def design_summary(design: TransformerDesign) -> str:
    """Multi-line human readable summary of a design."""
    req = design.requirements
    grade = get_steel_grade(req.steel_grade)
    cooling = get_cooling_class(req.cooling_class)
    core, hv, lv = design.core, design.hv_winding, design.lv_winding
    losses, imp, th = design.losses, design.impedance, design.thermal

    lines = [
        f"{req.name}: {req.rated_power:g} kVA, {req.primary_voltage:g}/{req.secondary_voltage:g} V, "
        f"{req.phases}-phase {req.frequency:g} Hz, {cooling.name}",
        f"Core: {grade.name}, {core.flux_density:.2f} T, diameter {core.core_diameter:.0f} mm "
        f"({core.core_steps} steps), window {core.window_width:.0f} x {core.window_height:.0f} mm, "
        f"{core.core_weight:.0f} kg",
        f"HV: {hv.turns} turns, {hv.rated_current:.1f} A, {hv.conductor_description}, {hv.layers} layers",
        f"LV: {lv.turns} turns, {lv.rated_current:.1f} A, {lv.conductor_description}, {lv.layers} layers",
        f"Losses: no-load {losses.no_load_loss:.0f} W, load {losses.load_loss:.0f} W, "
        f"peak efficiency {losses.max_efficiency:.2f}% at {losses.max_efficiency_load:.0f}% load",
        f"Impedance: {imp.percent_z:.2f}% (target {imp.target_impedance:g}%), X/R {imp.xr_ratio:.1f}",
        f"Thermal: top oil {th.top_oil_rise:.1f} K, winding {th.average_winding_rise:.1f} K, "
        f"hot spot {th.hot_spot_rise:.1f} K, {th.radiator_panels} radiators",
        f"Tank: {design.tank.length:.0f} x {design.tank.width:.0f} x {design.tank.height:.0f} mm, "
        f"{design.tank.oil_volume:.0f} L oil, total {design.bom.total_weight:.0f} kg",
    ]
    lines += [f"Warning: {w}" for w in design.warnings]
    lines += [f"Note: {n}" for n in design.notes]
    return "\n".join(lines)
