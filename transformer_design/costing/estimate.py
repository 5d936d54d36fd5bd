"""
Cost Estimation Engine
======================

Prices a finished design: BOM quantities times unit prices for materials,
weight-driven labor hours with a complexity factor, then overheads and
profit. Amounts are carried in integer cents so that every total is the
exact sum of the reported components.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence

import pandas as pd

from ..catalog import pricing
from ..catalog.conductors import ConductorForm
from ..catalog.materials import (
    ConductorMaterialId,
    SteelFamily,
    get_cooling_class,
    get_steel_grade,
)
from ..catalog.pricing import TapChangerType, parse_option
from ..design.models import DesignRequirements, TransformerDesign, WindingDesign
from ..errors import InvalidOption
from .models import CostBreakdown, CostComparison, CostEstimationOptions, DesignComparison

logger = logging.getLogger(__name__)


def _cents(amount: float) -> int:
    return int(round(amount * 100.0))


def _dollars(cents: int) -> float:
    return cents / 100.0


def resolve_tap_changer(options: CostEstimationOptions) -> TapChangerType:
    tap = parse_option(TapChangerType, options.tap_changer_type, "tap_changer_type")
    return TapChangerType.ON_LOAD if options.include_oltc else tap


def _conductor_cost(winding: WindingDesign) -> float:
    material = ConductorMaterialId(winding.conductor_type)
    form = ConductorForm(winding.conductor_form)
    return winding.conductor_weight * pricing.CONDUCTOR_PRICES[material][form]


def accessory_items(rated_power: float) -> List[tuple]:
    items = list(pricing.STANDARD_ACCESSORIES)
    if rated_power > pricing.BUCHHOLZ_MIN_KVA:
        items.append(pricing.BUCHHOLZ_RELAY)
    if rated_power > pricing.WTI_MIN_KVA:
        items.append(pricing.WINDING_TEMPERATURE_INDICATOR)
    return items


def complexity_factor(design: TransformerDesign, tap: TapChangerType) -> float:
    req = design.requirements
    factor = 1.0
    if tap == TapChangerType.ON_LOAD:
        factor += pricing.COMPLEXITY_ON_LOAD_TAP
    if get_cooling_class(req.cooling_class).fans:
        factor += pricing.COMPLEXITY_FORCED_COOLING
    if get_steel_grade(req.steel_grade).family == SteelFamily.AMORPHOUS:
        factor += pricing.COMPLEXITY_AMORPHOUS
    return factor


def _material_cents(
    design: TransformerDesign,
    requirements: DesignRequirements,
    oil_price: float,
    tap: TapChangerType,
) -> Dict[str, int]:
    bom = design.bom
    grade = get_steel_grade(requirements.steel_grade)
    cooling = get_cooling_class(requirements.cooling_class)

    tank = (
        bom.item("tank").weight * pricing.TANK_STEEL_PER_KG * pricing.TANK_FABRICATION_MULTIPLIER
        + bom.quantity("conservator") * pricing.CONSERVATOR_PER_LITER
        + pricing.LIFTING_LUGS * pricing.LIFTING_LUG_EACH
        + pricing.WHEELS_PER_SET
        + pricing.DRAINS_AND_VALVES
    )
    bushings = (
        bom.quantity("hv-bushings") * pricing.get_bushing_price(requirements.primary_voltage, "hv")
        + bom.quantity("lv-bushings") * pricing.get_bushing_price(requirements.secondary_voltage, "lv")
    )
    cooling_cost = (
        bom.quantity("radiators") * pricing.RADIATOR_PANEL
        + bom.quantity("fans") * pricing.COOLING_FAN
        + (pricing.FLOW_INDICATOR if cooling.forced_oil else 0.0)
    )

    return {
        "core_steel": _cents(bom.total_steel_weight * pricing.STEEL_PRICES[grade.id]),
        "conductors": _cents(_conductor_cost(design.hv_winding)) + _cents(_conductor_cost(design.lv_winding)),
        "insulation": _cents(bom.total_insulation_weight * pricing.INSULATION_PRICE_PER_KG),
        "oil": _cents(bom.total_oil_volume * oil_price),
        "tank": _cents(tank),
        "bushings": _cents(bushings),
        "cooling": _cents(cooling_cost),
        "tap_changer": _cents(pricing.get_tap_changer_cost(requirements.rated_power, tap.value)),
        "accessories": _cents(sum(price for _, price in accessory_items(requirements.rated_power))),
    }


def estimate_cost(
    design: TransformerDesign,
    requirements: DesignRequirements,
    options: Optional[CostEstimationOptions] = None,
) -> CostBreakdown:
    """
    Manufacturing cost breakdown for ``design``.

    Raises InvalidOption for an unknown oil type, tap changer type or region,
    or a profit margin outside [0, 1).
    """
    options = options or CostEstimationOptions()
    oil_price = pricing.get_oil_price(options.oil_type)
    tap = resolve_tap_changer(options)
    region = pricing.get_region(options.region)
    if not 0.0 <= options.profit_margin < 1.0:
        raise InvalidOption("profit_margin", f"must be in [0, 1), got {options.profit_margin}")

    materials = _material_cents(design, requirements, oil_price, tap)
    total_materials = sum(materials.values())

    weight = design.bom.total_weight
    complexity = complexity_factor(design, tap)
    labor: Dict[str, int] = {}
    for name, (hours_per_kg, min_hours, rate) in (
        ("assembly", pricing.ASSEMBLY_LABOR),
        ("testing", pricing.TESTING_LABOR),
        ("engineering", pricing.ENGINEERING_LABOR),
    ):
        hours = max(min_hours, weight * hours_per_kg) * complexity
        labor[name] = _cents(hours * rate * region.labor_multiplier)
    total_labor = sum(labor.values())

    direct = total_materials + total_labor
    facility = _cents(_dollars(direct) * pricing.FACILITY_OVERHEAD)
    quality = _cents(_dollars(direct) * pricing.QUALITY_CONTROL)
    shipping = _cents(pricing.SHIPPING_BASE + pricing.SHIPPING_PER_KG * weight)
    warranty = _cents(_dollars(direct + facility + quality + shipping) * pricing.WARRANTY_RESERVE)
    subtotal = direct + facility + quality + shipping + warranty
    profit = _cents(_dollars(subtotal) * options.profit_margin)
    total = subtotal + profit

    cost = CostBreakdown(
        **{k: _dollars(v) for k, v in materials.items()},
        total_materials=_dollars(total_materials),
        **{k: _dollars(v) for k, v in labor.items()},
        total_labor=_dollars(total_labor),
        facility_overhead=_dollars(facility),
        quality_control=_dollars(quality),
        shipping=_dollars(shipping),
        warranty_reserve=_dollars(warranty),
        subtotal=_dollars(subtotal),
        profit_margin=_dollars(profit),
        total_cost=_dollars(total),
        cost_per_kva=round(_dollars(total) / requirements.rated_power, 2),
        cost_per_kg=round(_dollars(total) / weight, 2),
        oil_type=options.oil_type,
        tap_changer_type=tap.value,
        region=region.id.value,
        lead_time_weeks=region.lead_time_weeks,
        feoc_compliant=region.feoc_compliant,
    )
    logger.debug(
        "cost: materials $%.2f labor $%.2f total $%.2f ($%.2f/kVA)",
        cost.total_materials, cost.total_labor, cost.total_cost, cost.cost_per_kva,
    )
    return cost


def compare_costs(
    design: TransformerDesign,
    requirements: DesignRequirements,
    option_sets: Sequence[CostEstimationOptions],
) -> List[CostComparison]:
    """Price several option sets; deltas are relative to the first."""
    if not option_sets:
        raise InvalidOption("option_sets", "at least one option set is required")
    costs = [estimate_cost(design, requirements, o) for o in option_sets]
    base = costs[0].total_cost
    return [
        CostComparison(
            options=o,
            cost=c,
            delta_total=round(c.total_cost - base, 2),
            delta_percent=(c.total_cost - base) / base * 100.0,
        )
        for o, c in zip(option_sets, costs)
    ]


def compare_designs(
    designs: Sequence[TransformerDesign],
    options: Optional[CostEstimationOptions] = None,
) -> List[DesignComparison]:
    """
    Price several designs under one option set, e.g. the same rating on two
    steel grades. Each design is priced against its own requirements; deltas
    are relative to the first design.
    """
    if not designs:
        raise InvalidOption("designs", "at least one design is required")
    costs = [estimate_cost(d, d.requirements, options) for d in designs]
    base = costs[0].total_cost
    return [
        DesignComparison(
            name=d.requirements.name,
            steel_grade=d.core.steel_grade,
            cost=c,
            delta_total=round(c.total_cost - base, 2),
            delta_percent=(c.total_cost - base) / base * 100.0,
        )
        for d, c in zip(designs, costs)
    ]


COST_GROUPS = (
    ("materials", ("core_steel", "conductors", "insulation", "oil", "tank", "bushings", "cooling", "tap_changer", "accessories")),
    ("labor", ("assembly", "testing", "engineering")),
    ("overhead", ("facility_overhead", "quality_control", "shipping", "warranty_reserve")),
    ("profit", ("profit_margin",)),
)


def cost_frame(cost: CostBreakdown) -> pd.DataFrame:
    """Cost components as a table with their share of the total."""
    rows = [
        {"group": group, "item": name, "amount": getattr(cost, name)}
        for group, names in COST_GROUPS
        for name in names
    ]
    df = pd.DataFrame(rows, columns=["group", "item", "amount"])
    df["share_pct"] = (df["amount"] / cost.total_cost * 100.0).round(2)
    return df
