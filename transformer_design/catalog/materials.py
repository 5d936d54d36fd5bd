"""
Materials and Standards Catalog
===============================

Closed enums keyed into static tables: electrical steel grades, winding
conductors, cooling classes, vector groups, load profiles, insulating oils
and BIL levels. New entries are additive; every lookup goes through the
enum so an unknown id is rejected at the boundary.

Specific losses are at 1.7 T, 60 Hz (IEEE C57.12.00 datasheet basis).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple, Type, TypeVar

from ..errors import InvalidRequirement


class SteelGradeId(str, Enum):
    """Electrical steel grades"""
    M2 = "m2"
    M3 = "m3"
    M4 = "m4"
    M5 = "m5"
    M6 = "m6"
    HI_B = "hi-b"
    LASER = "laser"
    AMORPHOUS_SA1 = "amorphous-sa1"
    AMORPHOUS_HB1M = "amorphous-hb1m"


class SteelFamily(str, Enum):
    GOES = "goes"
    AMORPHOUS = "amorphous"


class ConductorMaterialId(str, Enum):
    COPPER = "copper"
    ALUMINUM = "aluminum"


class CoolingClassId(str, Enum):
    ONAN = "onan"
    ONAN_ONAF = "onan-onaf"
    ONAN_ONAF_OFAF = "onan-onaf-ofaf"


class Connection(str, Enum):
    DELTA = "delta"
    WYE = "wye"


class VectorGroupId(str, Enum):
    DYN11 = "dyn11"
    DYN1 = "dyn1"
    YND11 = "ynd11"
    DD0 = "dd0"
    YY0 = "yy0"


class LoadProfileId(str, Enum):
    LIGHT_VARIABLE = "light-variable"
    MEDIUM = "medium"
    HEAVY_CONSTANT = "heavy-constant"


class OilType(str, Enum):
    MINERAL = "mineral"
    NATURAL_ESTER = "naturalEster"
    SYNTHETIC_ESTER = "syntheticEster"
    SILICON = "silicon"


@dataclass(frozen=True)
class SteelGrade:
    """
    Core lamination material.

    Attributes:
        operating_flux_density: Rated design flux density (T) used by the core calculator
        max_flux_density: Saturation-side limit (T); overrides may not exceed it
        specific_loss: W/kg at 1.7 T, 60 Hz
        density: kg/m³
    """
    id: SteelGradeId
    name: str
    family: SteelFamily
    thickness_mm: float
    specific_loss: float
    density: float
    stacking_factor: float
    max_flux_density: float
    operating_flux_density: float


@dataclass(frozen=True)
class ConductorMaterial:
    id: ConductorMaterialId
    name: str
    resistivity_20c: float  # ohm-m
    temp_coeff: float  # per K
    density: float  # kg/m³
    min_current_density: float  # A/mm²
    max_current_density: float  # A/mm²
    typical_current_density: float  # A/mm², ONAN HV basis

    def resistivity_at(self, temperature_c: float) -> float:
        return self.resistivity_20c * (1.0 + self.temp_coeff * (temperature_c - 20.0))


@dataclass(frozen=True)
class CoolingClass:
    id: CoolingClassId
    name: str
    description: str
    heat_transfer_coeff: float  # W/(m²·K), tank/radiator to air
    current_density_factor: float
    oil_rise_exponent: float
    winding_gradient: float  # K, average winding over top oil
    hot_spot_factor: float
    fans: bool
    forced_oil: bool
    rating_multipliers: Tuple[float, ...]


@dataclass(frozen=True)
class VectorGroup:
    id: VectorGroupId
    name: str
    description: str
    phase_shift_deg: int
    hv_connection: Connection
    lv_connection: Connection
    hv_neutral: bool
    lv_neutral: bool


@dataclass(frozen=True)
class LoadProfile:
    id: LoadProfileId
    name: str
    description: str
    avg_load_percent: float
    recommended_steel: Optional[SteelFamily]  # None: either family


STEEL_GRADES: Dict[SteelGradeId, SteelGrade] = {
    SteelGradeId.M2: SteelGrade(SteelGradeId.M2, "M2 (27M2) - Premium", SteelFamily.GOES, 0.27, 0.96, 7650, 0.96, 1.72, 1.63),
    SteelGradeId.M3: SteelGrade(SteelGradeId.M3, "M3 (27M3) - High Grade", SteelFamily.GOES, 0.27, 1.05, 7650, 0.96, 1.70, 1.61),
    SteelGradeId.M4: SteelGrade(SteelGradeId.M4, "M4 (27M4) - Standard", SteelFamily.GOES, 0.27, 1.17, 7650, 0.95, 1.68, 1.60),
    SteelGradeId.M5: SteelGrade(SteelGradeId.M5, "M5 (30M5) - Economy", SteelFamily.GOES, 0.30, 1.30, 7650, 0.95, 1.65, 1.57),
    SteelGradeId.M6: SteelGrade(SteelGradeId.M6, "M6 (35M6) - Basic", SteelFamily.GOES, 0.35, 1.50, 7650, 0.94, 1.60, 1.52),
    SteelGradeId.HI_B: SteelGrade(SteelGradeId.HI_B, "Hi-B - Ultra Premium", SteelFamily.GOES, 0.23, 0.85, 7650, 0.97, 1.75, 1.66),
    SteelGradeId.LASER: SteelGrade(SteelGradeId.LASER, "Laser-Scribed", SteelFamily.GOES, 0.23, 0.80, 7650, 0.97, 1.75, 1.66),
    SteelGradeId.AMORPHOUS_SA1: SteelGrade(
        SteelGradeId.AMORPHOUS_SA1, "Amorphous 2605SA1", SteelFamily.AMORPHOUS, 0.025, 0.25, 7180, 0.85, 1.56, 1.35
    ),
    SteelGradeId.AMORPHOUS_HB1M: SteelGrade(
        SteelGradeId.AMORPHOUS_HB1M, "Amorphous 2605HB1M", SteelFamily.AMORPHOUS, 0.025, 0.22, 7320, 0.85, 1.63, 1.40
    ),
}

CONDUCTOR_MATERIALS: Dict[ConductorMaterialId, ConductorMaterial] = {
    ConductorMaterialId.COPPER: ConductorMaterial(
        ConductorMaterialId.COPPER, "Copper", 1.724e-8, 0.00393, 8900, 2.0, 3.5, 3.0
    ),
    ConductorMaterialId.ALUMINUM: ConductorMaterial(
        ConductorMaterialId.ALUMINUM, "Aluminum", 2.82e-8, 0.00403, 2700, 1.5, 2.5, 2.2
    ),
}

COOLING_CLASSES: Dict[CoolingClassId, CoolingClass] = {
    CoolingClassId.ONAN: CoolingClass(
        CoolingClassId.ONAN, "ONAN", "Self-Cooled Only",
        heat_transfer_coeff=9.0, current_density_factor=1.00, oil_rise_exponent=0.80,
        winding_gradient=15.0, hot_spot_factor=1.10, fans=False, forced_oil=False,
        rating_multipliers=(1.0,),
    ),
    CoolingClassId.ONAN_ONAF: CoolingClass(
        CoolingClassId.ONAN_ONAF, "ONAN/ONAF", "Self-Cooled + Fans (Dual Rating)",
        heat_transfer_coeff=12.0, current_density_factor=1.05, oil_rise_exponent=0.85,
        winding_gradient=17.0, hot_spot_factor=1.15, fans=True, forced_oil=False,
        rating_multipliers=(1.0, 1.33),
    ),
    CoolingClassId.ONAN_ONAF_OFAF: CoolingClass(
        CoolingClassId.ONAN_ONAF_OFAF, "ONAN/ONAF/OFAF", "Full Triple Rating",
        heat_transfer_coeff=15.0, current_density_factor=1.10, oil_rise_exponent=0.90,
        winding_gradient=20.0, hot_spot_factor=1.20, fans=True, forced_oil=True,
        rating_multipliers=(1.0, 1.33, 1.67),
    ),
}

VECTOR_GROUPS: Dict[VectorGroupId, VectorGroup] = {
    VectorGroupId.DYN11: VectorGroup(VectorGroupId.DYN11, "Dyn11", "Delta-Wye, 30° lag", -30, Connection.DELTA, Connection.WYE, False, True),
    VectorGroupId.DYN1: VectorGroup(VectorGroupId.DYN1, "Dyn1", "Delta-Wye, 30° lead", 30, Connection.DELTA, Connection.WYE, False, True),
    VectorGroupId.YND11: VectorGroup(VectorGroupId.YND11, "YNd11", "Wye-Delta, 30° lag", -30, Connection.WYE, Connection.DELTA, True, False),
    VectorGroupId.DD0: VectorGroup(VectorGroupId.DD0, "Dd0", "Delta-Delta, 0°", 0, Connection.DELTA, Connection.DELTA, False, False),
    VectorGroupId.YY0: VectorGroup(VectorGroupId.YY0, "Yy0", "Wye-Wye, 0°", 0, Connection.WYE, Connection.WYE, False, False),
}

LOAD_PROFILES: Dict[LoadProfileId, LoadProfile] = {
    LoadProfileId.LIGHT_VARIABLE: LoadProfile(
        LoadProfileId.LIGHT_VARIABLE, "Light / Variable",
        "Residential, commercial - avg <40% load, high no-load hours", 30, SteelFamily.AMORPHOUS,
    ),
    LoadProfileId.MEDIUM: LoadProfile(
        LoadProfileId.MEDIUM, "Medium / Mixed",
        "General industrial - avg 40-60% load, mixed duty", 50, None,
    ),
    LoadProfileId.HEAVY_CONSTANT: LoadProfile(
        LoadProfileId.HEAVY_CONSTANT, "Heavy / Constant",
        "Continuous process - avg >60% load, high utilization", 75, SteelFamily.GOES,
    ),
}

OIL_NAMES: Dict[OilType, str] = {
    OilType.MINERAL: "Mineral Transformer Oil (Type I)",
    OilType.NATURAL_ESTER: "Natural Ester (FR3)",
    OilType.SYNTHETIC_ESTER: "Synthetic Ester (Midel 7131)",
    OilType.SILICON: "Silicone Fluid",
}

OIL_DENSITY = 0.87  # kg/L at 20°C
OIL_EXPANSION_COEFF = 0.00075  # per °C
TANK_STEEL_DENSITY = 7850  # kg/m³

# Upper voltage class (kV) -> BIL (kV)
BIL_LEVELS: Tuple[Tuple[float, float], ...] = (
    (1.2, 30),
    (2.5, 45),
    (5.0, 60),
    (8.7, 75),
    (15.0, 95),
    (25.0, 125),
    (35.0, 150),
    (46.0, 200),
    (69.0, 250),
)
BIL_ABOVE_69KV = 350

STEEL_GUIDANCE: Dict[SteelFamily, str] = {
    SteelFamily.AMORPHOUS: (
        "Amorphous cores cut no-load loss by 70-80% and suit light or variable loads, "
        "at a higher material cost and a larger core"
    ),
    SteelFamily.GOES: (
        "Grain-oriented steel allows a more compact core at lower material cost "
        "and suits heavy constant loads"
    ),
}


E = TypeVar("E", bound=Enum)


def parse_id(enum_cls: Type[E], value: object, field: str) -> E:
    """Convert a catalog id (or enum member) to its enum, rejecting unknown ids."""
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise InvalidRequirement(field, f"unknown id {value!r} (expected one of: {allowed})") from None


def get_steel_grade(grade_id: str) -> SteelGrade:
    return STEEL_GRADES[parse_id(SteelGradeId, grade_id, "steel_grade")]


def get_conductor_material(material_id: str) -> ConductorMaterial:
    return CONDUCTOR_MATERIALS[parse_id(ConductorMaterialId, material_id, "conductor_type")]


def get_cooling_class(cooling_id: str) -> CoolingClass:
    return COOLING_CLASSES[parse_id(CoolingClassId, cooling_id, "cooling_class")]


def get_vector_group(group_id: str) -> VectorGroup:
    return VECTOR_GROUPS[parse_id(VectorGroupId, group_id, "vector_group")]


def get_load_profile(profile_id: str) -> LoadProfile:
    return LOAD_PROFILES[parse_id(LoadProfileId, profile_id, "load_profile")]


def bil_for_voltage(voltage_v: float) -> float:
    """Basic impulse level (kV) for the voltage class containing ``voltage_v``."""
    kv = voltage_v / 1000.0
    for upper_kv, bil in BIL_LEVELS:
        if kv <= upper_kv:
            return float(bil)
    return float(BIL_ABOVE_69KV)


def steel_guidance(load_profile_id: str, steel_grade_id: str) -> Optional[str]:
    """
    Advisory text when the chosen steel family does not match the load profile.

    Returns None when the choice is consistent. Never alters the design math.
    """
    profile = get_load_profile(load_profile_id)
    grade = get_steel_grade(steel_grade_id)
    if profile.recommended_steel is None or profile.recommended_steel == grade.family:
        return None
    return (
        f"{profile.name} load profile: {profile.recommended_steel.value.upper()} steel is usually preferred "
        f"over {grade.name}. {STEEL_GUIDANCE[profile.recommended_steel]}."
    )
