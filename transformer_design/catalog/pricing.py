"""
Pricing Catalog
===============

Approximate market prices (USD) for budgetary estimation. Actual costs vary
with supplier, quantity, location and market conditions.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple, Type, TypeVar

from ..errors import InvalidOption
from .conductors import ConductorForm
from .materials import ConductorMaterialId, OilType, SteelGradeId


class TapChangerType(str, Enum):
    NO_LOAD = "noLoad"
    ON_LOAD = "onLoad"


class ManufacturingRegionId(str, Enum):
    USA = "usa"
    NORTH_AMERICA = "northAmerica"
    GLOBAL = "global"
    CHINA = "china"


@dataclass(frozen=True)
class ManufacturingRegion:
    id: ManufacturingRegionId
    label: str
    labor_multiplier: float
    lead_time_weeks: Tuple[int, int]
    feoc_compliant: bool


STEEL_PRICES: Dict[SteelGradeId, float] = {
    SteelGradeId.M2: 3.80,
    SteelGradeId.M3: 3.40,
    SteelGradeId.M4: 3.00,
    SteelGradeId.M5: 2.70,
    SteelGradeId.M6: 2.40,
    SteelGradeId.HI_B: 4.20,
    SteelGradeId.LASER: 4.80,
    SteelGradeId.AMORPHOUS_SA1: 8.50,
    SteelGradeId.AMORPHOUS_HB1M: 9.20,
}

# $/kg by material and conductor form
CONDUCTOR_PRICES: Dict[ConductorMaterialId, Dict[ConductorForm, float]] = {
    ConductorMaterialId.COPPER: {ConductorForm.ROUND: 9.50, ConductorForm.STRIP: 10.20},
    ConductorMaterialId.ALUMINUM: {ConductorForm.ROUND: 3.80, ConductorForm.STRIP: 4.20},
}

INSULATION_PRICE_PER_KG = 6.50  # paper, pressboard, cylinders, tapes

OIL_PRICES: Dict[OilType, float] = {  # $/L
    OilType.MINERAL: 2.20,
    OilType.NATURAL_ESTER: 4.50,
    OilType.SYNTHETIC_ESTER: 6.80,
    OilType.SILICON: 12.00,
}

TANK_STEEL_PER_KG = 1.80
TANK_FABRICATION_MULTIPLIER = 2.5
CONSERVATOR_PER_LITER = 8.00
LIFTING_LUG_EACH = 85.0
LIFTING_LUGS = 4
WHEELS_PER_SET = 450.0
DRAINS_AND_VALVES = 320.0

# Upper voltage class (kV) -> (hv, lv) price per bushing
BUSHING_PRICES: Tuple[Tuple[float, float, float], ...] = (
    (2.4, 280, 180),
    (4.16, 350, 180),
    (7.2, 450, 200),
    (12.0, 580, 220),
    (15.0, 720, 220),
    (23.0, 950, 250),
    (34.5, 1400, 280),
    (46.0, 2100, 320),
    (69.0, 3500, 350),
)
# (hv, lv) for voltage classes above 69 kV, the 350 kV BIL class
BUSHING_PRICE_ABOVE_69KV: Tuple[float, float] = (5800, 380)

RADIATOR_PANEL = 480.0
COOLING_FAN = 280.0
FLOW_INDICATOR = 120.0

# (kVA threshold for medium, kVA threshold for large, small, medium, large)
TAP_CHANGER_COSTS: Dict[TapChangerType, Tuple[float, float, float, float, float]] = {
    TapChangerType.NO_LOAD: (1000, 5000, 1200, 1800, 2800),
    TapChangerType.ON_LOAD: (2500, 10000, 15000, 25000, 45000),
}

STANDARD_ACCESSORIES: Tuple[Tuple[str, float], ...] = (
    ("Nameplate and rating plate", 85),
    ("Grounding pad", 45),
    ("Pressure relief device", 380),
    ("Oil level indicator", 180),
    ("Oil temperature indicator", 220),
    ("Liquid level gauge", 150),
    ("Sampling valve", 65),
    ("Silica gel breather", 180),
)
BUCHHOLZ_RELAY = ("Buchholz relay", 650.0)
BUCHHOLZ_MIN_KVA = 1000
WINDING_TEMPERATURE_INDICATOR = ("Winding temperature indicator", 480.0)
WTI_MIN_KVA = 2500

# Labor: hours per kg of finished transformer, minimum hours, $/h
ASSEMBLY_LABOR = (0.025, 40.0, 65.0)
TESTING_LABOR = (0.008, 16.0, 85.0)
ENGINEERING_LABOR = (0.005, 8.0, 120.0)

COMPLEXITY_ON_LOAD_TAP = 0.15
COMPLEXITY_FORCED_COOLING = 0.10
COMPLEXITY_AMORPHOUS = 0.10

FACILITY_OVERHEAD = 0.15
QUALITY_CONTROL = 0.05
WARRANTY_RESERVE = 0.03
DEFAULT_PROFIT_MARGIN = 0.12
SHIPPING_BASE = 250.0
SHIPPING_PER_KG = 0.35

MANUFACTURING_REGIONS: Dict[ManufacturingRegionId, ManufacturingRegion] = {
    ManufacturingRegionId.USA: ManufacturingRegion(ManufacturingRegionId.USA, "USA", 1.0, (26, 52), True),
    ManufacturingRegionId.NORTH_AMERICA: ManufacturingRegion(
        ManufacturingRegionId.NORTH_AMERICA, "North America", 0.92, (20, 40), True
    ),
    ManufacturingRegionId.GLOBAL: ManufacturingRegion(
        ManufacturingRegionId.GLOBAL, "Global (excl. China)", 0.80, (16, 36), True
    ),
    ManufacturingRegionId.CHINA: ManufacturingRegion(ManufacturingRegionId.CHINA, "China", 0.65, (12, 24), False),
}


E = TypeVar("E", bound=Enum)


def parse_option(enum_cls: Type[E], value: object, field: str) -> E:
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise InvalidOption(field, f"unknown option {value!r} (expected one of: {allowed})") from None


def get_oil_price(oil_type: str) -> float:
    return OIL_PRICES[parse_option(OilType, oil_type, "oil_type")]


def get_region(region_id: str) -> ManufacturingRegion:
    return MANUFACTURING_REGIONS[parse_option(ManufacturingRegionId, region_id, "region")]


def get_bushing_price(voltage_v: float, side: str) -> float:
    """Price of one bushing for the voltage class containing ``voltage_v``."""
    kv = voltage_v / 1000.0
    for upper_kv, hv, lv in BUSHING_PRICES:
        if kv <= upper_kv:
            return float(hv if side == "hv" else lv)
    hv, lv = BUSHING_PRICE_ABOVE_69KV
    return float(hv if side == "hv" else lv)


def get_tap_changer_cost(kva: float, tap_changer_type: str) -> float:
    medium_at, large_at, small, medium, large = TAP_CHANGER_COSTS[
        parse_option(TapChangerType, tap_changer_type, "tap_changer_type")
    ]
    if kva < medium_at:
        return small
    if kva < large_at:
        return medium
    return large
