"""
Bill of materials: every physical material with quantity, unit and mass.
Category totals are sums over the line items.
"""

from __future__ import annotations

from typing import List, Tuple

import pandas as pd

from ..catalog.materials import OIL_DENSITY, get_conductor_material, get_steel_grade, get_vector_group
from .models import (
    BillOfMaterials,
    BomCategory,
    BomItem,
    CoreDesign,
    DesignRequirements,
    TankDesign,
    ThermalResult,
    WindingDesign,
)
from .profile import DEFAULT_PROFILE, DesignProfile
from .tank import insulation_weight

HV_BUSHING_WEIGHT = 25.0  # kg each
LV_BUSHING_WEIGHT = 8.0
FITTINGS_WEIGHT = 50.0  # valves, relays, gauges, breather


def bushing_counts(requirements: DesignRequirements) -> Tuple[int, int]:
    """(hv, lv) bushings, including neutrals brought out by the vector group."""
    if requirements.phases == 1:
        return 2, 2
    group = get_vector_group(requirements.vector_group)
    return 3 + int(group.hv_neutral), 3 + int(group.lv_neutral)


def _winding_item(code: str, label: str, winding: WindingDesign, phases: int) -> BomItem:
    material = get_conductor_material(winding.conductor_type)
    return BomItem(
        code=code,
        category=BomCategory.WINDING,
        description=f"{label} winding conductor",
        specification=(
            f"{material.name} {winding.conductor_description}, {winding.turns} turns x {phases} "
            f"phase{'s' if phases > 1 else ''}, {winding.layers} layers"
        ),
        quantity=winding.conductor_weight,
        unit="kg",
        weight=winding.conductor_weight,
    )


def build_bom(
    core: CoreDesign,
    hv: WindingDesign,
    lv: WindingDesign,
    tank: TankDesign,
    thermal: ThermalResult,
    requirements: DesignRequirements,
    profile: DesignProfile = DEFAULT_PROFILE,
) -> BillOfMaterials:
    grade = get_steel_grade(core.steel_grade)
    insulation_kg = insulation_weight(hv, lv, profile)
    hv_bushings, lv_bushings = bushing_counts(requirements)

    items: List[BomItem] = [
        BomItem(
            code="core-steel",
            category=BomCategory.CORE,
            description="Core laminations",
            specification=(
                f"{grade.name}, {grade.thickness_mm} mm, {core.core_steps}-step, "
                f"diameter {core.core_diameter:.0f} mm"
            ),
            quantity=core.core_weight,
            unit="kg",
            weight=core.core_weight,
        ),
        _winding_item("hv-conductor", "HV", hv, requirements.phases),
        _winding_item("lv-conductor", "LV", lv, requirements.phases),
        BomItem(
            code="insulation",
            category=BomCategory.INSULATION,
            description="Paper, pressboard and cylinders",
            specification="Kraft paper, pressboard barriers and spacers",
            quantity=insulation_kg,
            unit="kg",
            weight=insulation_kg,
        ),
        BomItem(
            code="tank",
            category=BomCategory.TANK,
            description="Tank, cover and base",
            specification=(
                f"{tank.length:.0f} x {tank.width:.0f} x {tank.height:.0f} mm, "
                f"{tank.wall_thickness:g} mm plate"
            ),
            quantity=1,
            unit="ea",
            weight=tank.tank_weight,
        ),
        BomItem(
            code="conservator",
            category=BomCategory.TANK,
            description="Conservator",
            specification=f"{tank.conservator_volume:.0f} L capacity",
            quantity=tank.conservator_volume,
            unit="L",
        ),
        BomItem(
            code="oil",
            category=BomCategory.OIL,
            description="Insulating oil",
            specification=f"{OIL_DENSITY} kg/L",
            quantity=tank.oil_volume,
            unit="L",
            weight=tank.oil_weight,
        ),
    ]

    if thermal.radiator_panels:
        items.append(
            BomItem(
                code="radiators",
                category=BomCategory.ACCESSORIES,
                description="Radiator panels",
                specification=f"{profile.radiator_panel_area:g} m2 each",
                quantity=thermal.radiator_panels,
                unit="ea",
                weight=thermal.radiator_panels * profile.radiator_panel_weight,
            )
        )
    if thermal.fans:
        items.append(
            BomItem(
                code="fans",
                category=BomCategory.ACCESSORIES,
                description="Cooling fans",
                quantity=thermal.fans,
                unit="ea",
                weight=thermal.fans * profile.fan_weight,
            )
        )
    items += [
        BomItem(
            code="hv-bushings",
            category=BomCategory.ACCESSORIES,
            description="HV bushings",
            specification=f"{requirements.primary_voltage / 1000:g} kV class",
            quantity=hv_bushings,
            unit="ea",
            weight=hv_bushings * HV_BUSHING_WEIGHT,
        ),
        BomItem(
            code="lv-bushings",
            category=BomCategory.ACCESSORIES,
            description="LV bushings",
            specification=f"{requirements.secondary_voltage / 1000:g} kV class",
            quantity=lv_bushings,
            unit="ea",
            weight=lv_bushings * LV_BUSHING_WEIGHT,
        ),
        BomItem(
            code="fittings",
            category=BomCategory.ACCESSORIES,
            description="Fittings and protection devices",
            specification="Valves, gauges, relief device, breather",
            quantity=1,
            unit="set",
            weight=FITTINGS_WEIGHT,
        ),
    ]

    def _total(category: BomCategory) -> float:
        return sum(i.weight for i in items if i.category == category and i.weight is not None)

    return BillOfMaterials(
        items=tuple(items),
        total_steel_weight=_total(BomCategory.CORE),
        total_conductor_weight=_total(BomCategory.WINDING),
        total_insulation_weight=_total(BomCategory.INSULATION),
        total_tank_weight=_total(BomCategory.TANK),
        total_oil_volume=tank.oil_volume,
        total_oil_weight=_total(BomCategory.OIL),
        total_accessory_weight=_total(BomCategory.ACCESSORIES),
        total_weight=sum(i.weight for i in items if i.weight is not None),
    )


def bom_frame(bom: BillOfMaterials) -> pd.DataFrame:
    """BOM line items as a table (one row per item)."""
    return pd.DataFrame(
        [
            {
                "code": i.code,
                "category": i.category.value,
                "description": i.description,
                "specification": i.specification or "",
                "quantity": round(i.quantity, 2),
                "unit": i.unit,
                "weight_kg": None if i.weight is None else round(i.weight, 2),
            }
            for i in bom.items
        ],
        columns=["code", "category", "description", "specification", "quantity", "unit", "weight_kg"],
    )
