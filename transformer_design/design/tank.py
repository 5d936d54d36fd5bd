"""
Tank sizing and oil volume.

The tank wraps the core-and-coil assembly with electrical clearances from
the HV BIL class. Oil fills whatever the active part does not occupy.
"""

from __future__ import annotations

import logging

from ..catalog.materials import (
    OIL_DENSITY,
    OIL_EXPANSION_COEFF,
    TANK_STEEL_DENSITY,
    bil_for_voltage,
    get_conductor_material,
    get_steel_grade,
)
from ..errors import InvalidRequirement
from .models import CoreDesign, DesignRequirements, TankDesign, WindingDesign
from .profile import DEFAULT_PROFILE, DesignProfile

logger = logging.getLogger(__name__)

HIGH_VOLTAGE_BUSHING_THRESHOLD = 25000.0  # V
BUSHING_HEIGHT_HIGH = 600.0  # mm
BUSHING_HEIGHT_STANDARD = 400.0  # mm


def insulation_weight(hv: WindingDesign, lv: WindingDesign, profile: DesignProfile = DEFAULT_PROFILE) -> float:
    return (hv.conductor_weight + lv.conductor_weight) * profile.insulation_mass_fraction


def assembly_length(core: CoreDesign, hv: WindingDesign, phases: int) -> float:
    """Length (mm) of the core frame or the row of HV coils, whichever is longer."""
    d = core.core_diameter
    limbs = core.limb_count
    core_frame = (limbs - 1) * core.window_width + limbs * d
    coil_row = (phases - 1) * (core.window_width + d) + 2.0 * hv.outer_radius
    return max(core_frame, coil_row)


def design_tank(
    core: CoreDesign,
    hv: WindingDesign,
    lv: WindingDesign,
    requirements: DesignRequirements,
    profile: DesignProfile = DEFAULT_PROFILE,
) -> TankDesign:
    bil = bil_for_voltage(requirements.primary_voltage)
    side_clearance = profile.tank_side_clearance + profile.tank_side_clearance_per_bil * bil

    length = assembly_length(core, hv, requirements.phases) + 2.0 * profile.tank_end_clearance
    width = 2.0 * hv.outer_radius + 2.0 * side_clearance
    height = (
        core.window_height + 2.0 * core.yoke_height + profile.tank_bottom_clearance + profile.tank_top_clearance
    )
    bushing = (
        BUSHING_HEIGHT_HIGH if requirements.primary_voltage > HIGH_VOLTAGE_BUSHING_THRESHOLD else BUSHING_HEIGHT_STANDARD
    )

    walls_m2 = 2.0 * (length + width) * height / 1e6
    plate_m2 = walls_m2 + 2.0 * length * width / 1e6
    tank_weight = plate_m2 * profile.tank_wall_thickness / 1000.0 * TANK_STEEL_DENSITY * profile.tank_stiffening_factor

    material = get_conductor_material(requirements.conductor_type)
    steel = get_steel_grade(core.steel_grade)
    conductor_l = (hv.conductor_weight + lv.conductor_weight) / material.density * 1000.0
    core_l = core.core_weight / steel.density * 1000.0
    insulation_l = insulation_weight(hv, lv, profile) / profile.insulation_density * 1000.0
    active_l = core_l + conductor_l + insulation_l

    internal_l = length * width * height / 1e6
    oil_l = internal_l - active_l
    if oil_l <= 0:
        raise InvalidRequirement("rated_power", "active part does not fit the tank envelope")
    oil_kg = oil_l * OIL_DENSITY
    conservator_l = (
        oil_l * profile.conservator_expansion_range * OIL_EXPANSION_COEFF * profile.conservator_margin
        + profile.conservator_reserve
    )

    tank = TankDesign(
        length=length,
        width=width,
        height=height,
        overall_height=height + bushing,
        wall_thickness=profile.tank_wall_thickness,
        surface_area=walls_m2,
        internal_volume=internal_l,
        active_part_volume=active_l,
        oil_volume=oil_l,
        oil_weight=oil_kg,
        conservator_volume=conservator_l,
        tank_weight=tank_weight,
        total_weight=core.core_weight + hv.conductor_weight + lv.conductor_weight + tank_weight + oil_kg,
    )
    logger.debug(
        "tank: %.0f x %.0f x %.0f mm, %.0f kg steel, %.0f L oil, total %.0f kg",
        length, width, height, tank_weight, oil_l, tank.total_weight,
    )
    return tank
