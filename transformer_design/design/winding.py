"""
Winding Design Calculator
=========================

Concentric layer windings: LV next to the core, HV outside it across the
main insulation gap. Turns come from the core's volts per turn; the
conductor is sized to keep current density inside the material's band.
"""

from __future__ import annotations

import logging
import math
from typing import Tuple

from ..catalog.conductors import select_conductor
from ..catalog.materials import bil_for_voltage, get_conductor_material, get_cooling_class
from ..errors import InvalidRequirement, UndersizedConductor
from .core import require_finite
from .models import CoreDesign, DesignRequirements, WindingDesign, WindingSide
from .profile import DEFAULT_PROFILE, DesignProfile

logger = logging.getLogger(__name__)


def rated_current(rated_power: float, voltage: float, phases: int) -> float:
    """Line current (A) for kVA and line voltage."""
    if phases == 3:
        return rated_power * 1000.0 / (math.sqrt(3.0) * voltage)
    return rated_power * 1000.0 / voltage


def main_gap(primary_voltage: float, profile: DesignProfile = DEFAULT_PROFILE) -> float:
    """HV-LV radial gap (mm) from the HV voltage class BIL."""
    return max(profile.min_main_gap, bil_for_voltage(primary_voltage) * profile.main_gap_per_bil)


def design_winding(
    side: WindingSide,
    requirements: DesignRequirements,
    core: CoreDesign,
    inner_radius: float,
    profile: DesignProfile = DEFAULT_PROFILE,
) -> WindingDesign:
    field = "primary_voltage" if side == WindingSide.HV else "secondary_voltage"
    voltage = float(requirements.primary_voltage if side == WindingSide.HV else requirements.secondary_voltage)
    material = get_conductor_material(requirements.conductor_type)
    cooling = get_cooling_class(requirements.cooling_class)

    require_finite(field, voltage)
    if not voltage > 0:
        raise InvalidRequirement(field, f"must be positive, got {voltage}")
    turns = int(round(voltage / core.volts_per_turn))
    if turns < 1:
        raise InvalidRequirement(
            field,
            f"{voltage:g} V is below the core's {core.volts_per_turn:.2f} V per turn; the winding would have zero turns",
        )

    current = rated_current(requirements.rated_power, voltage, requirements.phases)
    target_density = material.typical_current_density * cooling.current_density_factor
    if side == WindingSide.LV:
        target_density *= profile.lv_current_density_factor
    conductor = select_conductor(current, current / target_density)
    density = current / conductor.area

    if density > material.max_current_density:
        raise UndersizedConductor(
            field,
            f"{side.value.upper()} current density {density:.2f} A/mm2 exceeds the {material.name.lower()} "
            f"limit of {material.max_current_density} A/mm2; choose a different conductor or rating",
            current_density=density,
            limit=material.max_current_density,
        )
    if density < material.min_current_density:
        raise InvalidRequirement(
            field,
            f"{side.value.upper()} current density {density:.2f} A/mm2 is below the {material.name.lower()} "
            f"minimum of {material.min_current_density} A/mm2 (conductor table cannot size {current:.3g} A)",
        )

    covering = 2.0 * profile.conductor_insulation
    axial_pitch = conductor.axial_size + covering
    radial_pitch = conductor.radial_size + covering
    height = core.window_height - 2.0 * profile.end_clearance
    if height < axial_pitch:
        raise InvalidRequirement(field, f"window height {core.window_height:.0f} mm cannot hold one turn")

    turns_per_layer = int(height // axial_pitch)
    layers = int(math.ceil(turns / turns_per_layer))
    thickness = layers * radial_pitch + (layers - 1) * profile.interlayer_insulation
    outer_radius = inner_radius + thickness
    mean_turn = math.pi * (inner_radius + outer_radius)

    length_m = mean_turn * turns / 1000.0
    area_m2 = conductor.area * 1e-6
    resistance = material.resistivity_at(profile.reference_temperature) * length_m / area_m2
    weight = area_m2 * length_m * material.density * requirements.phases

    winding = WindingDesign(
        side=side,
        voltage=voltage,
        turns=turns,
        rated_current=current,
        current_density=density,
        conductor_size=conductor.area,
        conductor_type=material.id.value,
        conductor_form=conductor.form.value,
        conductor_description=conductor.description,
        strands=conductor.strands,
        turns_per_layer=turns_per_layer,
        layers=layers,
        inner_radius=inner_radius,
        outer_radius=outer_radius,
        mean_turn_length=mean_turn,
        winding_height=height,
        winding_thickness=thickness,
        dc_resistance=resistance,
        conductor_weight=weight,
    )
    logger.debug(
        "%s winding: N=%d I=%.2f A J=%.2f A/mm2 %s layers=%d r=%.1f-%.1f mm R=%.5f ohm",
        side.value, turns, current, density, conductor.description, layers, inner_radius, outer_radius, resistance,
    )
    return winding


def design_windings(
    requirements: DesignRequirements,
    core: CoreDesign,
    profile: DesignProfile = DEFAULT_PROFILE,
) -> Tuple[WindingDesign, WindingDesign]:
    """Returns (hv, lv). LV is wound first, directly over the core."""
    lv = design_winding(WindingSide.LV, requirements, core, core.core_radius + profile.core_clearance, profile)
    gap = main_gap(requirements.primary_voltage, profile)
    hv = design_winding(WindingSide.HV, requirements, core, lv.outer_radius + gap, profile)
    return hv, lv
