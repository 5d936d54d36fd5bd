from __future__ import annotations

from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field


class CostEstimationOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    oil_type: str = Field("mineral", description="mineral, naturalEster, syntheticEster or silicon.")
    tap_changer_type: str = Field("noLoad", description="noLoad or onLoad.")
    include_oltc: bool = Field(False, description="Force an on-load tap changer regardless of tap_changer_type.")
    profit_margin: float = Field(0.12, description="Profit margin applied to the subtotal (fraction).")
    region: str = Field("usa", description="Manufacturing region: usa, northAmerica, global, china.")


class LifecycleOptions(CostEstimationOptions):
    electricity_rate: float = Field(0.10, description="Energy price ($/kWh).")
    operating_years: float = Field(25.0, description="Operating horizon (years).")
    load_factor: float = Field(0.5, description="Average load as a fraction of rating.")


class CostBreakdown(BaseModel):
    """
    Manufacturing cost in USD. Every component is rounded to cents and every
    total is the sum of its rounded components.
    """

    model_config = ConfigDict(frozen=True)

    # Materials
    core_steel: float
    conductors: float
    insulation: float
    oil: float
    tank: float
    bushings: float
    cooling: float
    tap_changer: float
    accessories: float
    total_materials: float

    # Labor
    assembly: float
    testing: float
    engineering: float
    total_labor: float

    # Overhead
    facility_overhead: float
    quality_control: float
    shipping: float
    warranty_reserve: float

    subtotal: float
    profit_margin: float
    total_cost: float

    cost_per_kva: float
    cost_per_kg: float

    oil_type: str
    tap_changer_type: str
    region: str
    lead_time_weeks: Tuple[int, int]
    feoc_compliant: bool


class CostComparison(BaseModel):
    model_config = ConfigDict(frozen=True)

    options: CostEstimationOptions
    cost: CostBreakdown
    delta_total: float = Field(..., description="Total cost minus the first option set's total.")
    delta_percent: float


class DesignComparison(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Design name.")
    steel_grade: str
    cost: CostBreakdown
    delta_total: float = Field(..., description="Total cost minus the first design's total.")
    delta_percent: float


class LifecycleCostResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    initial_cost: float
    annual_energy_loss_kwh: float
    annual_loss_cost: float
    operating_years: float
    electricity_rate: float
    load_factor: float
    total_loss_cost: float
    total_lifecycle_cost: float
    loss_share: float = Field(..., description="Share of lifecycle cost spent on losses (fraction).")
