from __future__ import annotations

from enum import Enum
from typing import Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class _ValueObject(BaseModel):
    model_config = ConfigDict(frozen=True)


class DesignRequirements(_ValueObject):
    """
    Electrical requirements for one design run.

    Ranges are checked by the engine (``validate_requirements``) so that a bad
    value surfaces as ``InvalidRequirement`` with the offending field.
    """

    name: str = Field("Transformer", description="Design name.")
    rated_power: float = Field(..., description="Rated power (kVA).")
    primary_voltage: float = Field(..., description="HV line voltage (V).")
    secondary_voltage: float = Field(..., description="LV line voltage (V).")
    frequency: float = Field(60.0, description="Frequency (Hz), 50 or 60.")
    phases: int = Field(3, description="1 or 3.")
    vector_group: str = Field("dyn11", description="Vector group id.")
    target_impedance: float = Field(5.75, description="Target %Z.")
    cooling_class: str = Field("onan", description="Cooling class id.")
    conductor_type: str = Field("copper", description="Winding conductor material id.")
    steel_grade: str = Field("m4", description="Core steel grade id.")
    load_profile: str = Field("medium", description="Load profile id (advisory only).")
    temperature_rise: float = Field(65.0, description="Average winding rise class (K), 55 or 65.")
    flux_density: Optional[float] = Field(
        None, description="Optional operating flux density override (T). Defaults to the steel grade value."
    )


class StepDimension(_ValueObject):
    width: float  # mm
    height: float  # mm


class CoreDesign(_ValueObject):
    steel_grade: str
    volts_per_turn: float
    flux_density: float  # T
    net_cross_section: float  # cm²
    gross_cross_section: float  # cm²
    stacking_factor: float
    utilization_factor: float
    core_diameter: float  # mm
    core_steps: int
    step_dimensions: Tuple[StepDimension, ...]
    stepped_area: float  # cm², gross area actually covered by the steps
    window_width: float  # mm
    window_height: float  # mm
    yoke_height: float  # mm
    limb_height: float  # mm
    limb_count: int
    magnetic_path_length: float  # mm
    core_weight: float  # kg

    @property
    def core_radius(self) -> float:
        return self.core_diameter / 2.0


class WindingSide(str, Enum):
    HV = "hv"
    LV = "lv"


class WindingDesign(_ValueObject):
    """
    One phase coil. ``conductor_weight`` covers the coils of every phase.
    """

    side: WindingSide
    voltage: float  # V
    turns: int
    rated_current: float  # A
    current_density: float  # A/mm²
    conductor_size: float  # mm²
    conductor_type: str
    conductor_form: str
    conductor_description: str
    strands: int
    turns_per_layer: int
    layers: int
    inner_radius: float  # mm
    outer_radius: float  # mm
    mean_turn_length: float  # mm
    winding_height: float  # mm
    winding_thickness: float  # mm
    dc_resistance: float  # ohm at reference temperature
    conductor_weight: float  # kg


class EfficiencyPoint(_ValueObject):
    load_percent: float
    efficiency: float  # %
    losses: float  # W


class LossBreakdown(_ValueObject):
    no_load_loss: float  # W
    i2r_loss: float
    eddy_loss: float
    stray_loss: float
    load_loss: float
    total_loss: float
    efficiency: Tuple[EfficiencyPoint, ...]
    max_efficiency: float  # %
    max_efficiency_load: float  # % load


class ImpedanceResult(_ValueObject):
    percent_r: float
    percent_x: float
    percent_z: float
    xr_ratio: float
    target_impedance: float
    within_tolerance: bool
    regulation_unity_pf: float  # %
    regulation_lagging_pf: float  # % at 0.8 PF lagging
    short_circuit_multiple: float  # x rated current


class TankDesign(_ValueObject):
    length: float  # mm
    width: float
    height: float
    overall_height: float  # with bushings
    wall_thickness: float
    surface_area: float  # m², side walls
    internal_volume: float  # L
    active_part_volume: float  # L
    oil_volume: float  # L
    oil_weight: float  # kg
    conservator_volume: float  # L
    tank_weight: float  # kg
    total_weight: float  # kg, core + windings + tank + oil


class ThermalResult(_ValueObject):
    oil_volume: float  # L
    radiating_area: float  # m²
    radiator_panels: int
    fans: int
    top_oil_rise: float  # K
    average_winding_rise: float
    hot_spot_rise: float


class BomCategory(str, Enum):
    CORE = "core"
    WINDING = "winding"
    INSULATION = "insulation"
    TANK = "tank"
    OIL = "oil"
    ACCESSORIES = "accessories"


class BomItem(_ValueObject):
    code: str
    category: BomCategory
    description: str
    specification: Optional[str] = None
    quantity: float
    unit: str
    weight: Optional[float] = None  # kg


class BillOfMaterials(_ValueObject):
    items: Tuple[BomItem, ...]
    total_steel_weight: float
    total_conductor_weight: float
    total_insulation_weight: float
    total_tank_weight: float
    total_oil_volume: float  # L
    total_oil_weight: float
    total_accessory_weight: float
    total_weight: float

    def category_weights(self) -> Dict[str, float]:
        totals: Dict[str, float] = {c.value: 0.0 for c in BomCategory}
        for item in self.items:
            if item.weight is not None:
                totals[item.category.value] += item.weight
        return totals

    def item(self, code: str) -> BomItem:
        for item in self.items:
            if item.code == code:
                return item
        raise KeyError(code)

    def quantity(self, code: str) -> float:
        """Quantity of an item, 0 when the design has none."""
        for item in self.items:
            if item.code == code:
                return item.quantity
        return 0.0


class TransformerDesign(_ValueObject):
    requirements: DesignRequirements
    core: CoreDesign
    hv_winding: WindingDesign
    lv_winding: WindingDesign
    losses: LossBreakdown
    impedance: ImpedanceResult
    thermal: ThermalResult
    tank: TankDesign
    bom: BillOfMaterials
    iterations: int = Field(1, description="Design passes run by the impedance adjustment.")
    warnings: Tuple[str, ...] = ()
    notes: Tuple[str, ...] = ()
