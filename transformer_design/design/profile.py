"""
Design profile: every empirical constant the engine uses, in one table.

Defaults are provisional engineering values for an oil-immersed distribution
and medium power family. Load an alternative family from JSON with
``DesignProfile.model_validate_json``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field, PositiveFloat, PositiveInt, confloat, model_validator


class DesignProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = Field("default", description="Design family name.")

    # Core
    volts_per_turn_k: PositiveFloat = Field(0.45, description="Et = K x sqrt(kVA) for three-phase cores.")
    single_phase_volts_per_turn_k: PositiveFloat = Field(
        0.60, description="Et = K x sqrt(kVA) for single-phase cores, whose one wound limb carries the full rating."
    )
    utilization_factor: confloat(gt=0, le=1) = Field(
        0.90, description="Stepped-core area over circle area for step counts missing from step_utilization."
    )
    step_utilization: Tuple[Tuple[int, float], ...] = Field(
        ((3, 0.848), (5, 0.905), (7, 0.931), (9, 0.946), (11, 0.955)),
        description="(steps, stepped area over circle area) for the step layout in geometry.py.",
    )
    window_width_factor: PositiveFloat = Field(1.2, description="Initial window width as a multiple of core diameter.")
    yoke_height_factor: PositiveFloat = Field(1.1, description="Yoke height as a multiple of the limb width.")
    window_ratio_base: PositiveFloat = Field(2.5, description="Window height / diameter at 100 kVA.")
    window_ratio_slope: float = Field(0.3, description="Increase of the window ratio per decade of kVA.")
    window_ratio_bounds: Tuple[float, float] = Field((2.5, 3.5), description="Clamp for the window ratio.")
    step_table: Tuple[Tuple[float, int], ...] = Field(
        ((100.0, 3), (150.0, 5), (250.0, 7), (350.0, 9)),
        description="(diameter upper bound mm, steps); larger cores use max_core_steps.",
    )
    max_core_steps: PositiveInt = Field(11, description="Steps for cores above the last table entry.")

    # Losses
    building_factor: confloat(ge=1.0, le=1.5) = Field(1.15, description="Joint/stacking allowance on core loss.")
    loss_exponent: PositiveFloat = Field(2.0, description="Core loss scaling with flux density ratio.")
    reference_flux_density: PositiveFloat = Field(1.7, description="Flux density of the catalog specific loss (T).")
    eddy_loss_fraction: confloat(ge=0, lt=1) = Field(0.05, description="Winding eddy loss as a fraction of I2R.")
    stray_loss_fraction: confloat(ge=0, lt=1) = Field(0.03, description="Structural stray loss as a fraction of I2R.")
    efficiency_load_step: PositiveFloat = Field(5.0, description="Efficiency curve sampling step (% load).")
    efficiency_load_range: Tuple[float, float] = Field((5.0, 125.0), description="First and last sampled % load.")

    # Windings
    reference_temperature: float = Field(75.0, description="Conductor resistance reference temperature (C).")
    lv_current_density_factor: confloat(gt=0, le=1) = Field(
        0.95, description="LV target current density relative to HV."
    )
    core_clearance: PositiveFloat = Field(15.0, description="Core to LV winding radial clearance (mm).")
    end_clearance: PositiveFloat = Field(30.0, description="Winding to yoke clearance at each end (mm).")
    conductor_insulation: PositiveFloat = Field(0.3, description="Conductor covering per side (mm).")
    interlayer_insulation: PositiveFloat = Field(0.5, description="Insulation between layers (mm).")
    min_main_gap: PositiveFloat = Field(15.0, description="Minimum HV-LV gap (mm).")
    main_gap_per_bil: PositiveFloat = Field(0.25, description="HV-LV gap per kV of BIL (mm/kV).")

    # Impedance
    impedance_tolerance: confloat(gt=0, lt=1) = Field(0.15, description="Relative %Z tolerance around the target.")
    impedance_max_iterations: PositiveInt = Field(8, description="Window height adjustment passes.")
    impedance_convergence: PositiveFloat = Field(0.3, description="Stop when |%Z - target| is within this (% points).")
    impedance_damping: confloat(gt=0, le=1) = Field(0.7, description="Damping on the window height rescale.")
    window_height_bounds: Tuple[float, float] = Field(
        (2.0, 8.0), description="Window height clamp as multiples of core diameter."
    )

    # Tank
    tank_end_clearance: PositiveFloat = Field(100.0, description="Core frame to tank end wall (mm).")
    tank_side_clearance: PositiveFloat = Field(75.0, description="Base HV coil to side wall clearance (mm).")
    tank_side_clearance_per_bil: PositiveFloat = Field(0.2, description="Additional side clearance per kV BIL (mm/kV).")
    tank_bottom_clearance: PositiveFloat = Field(100.0, description="Core to tank bottom (mm).")
    tank_top_clearance: PositiveFloat = Field(150.0, description="Core to cover for leads and gas space (mm).")
    tank_wall_thickness: PositiveFloat = Field(6.0, description="Tank plate thickness (mm).")
    tank_stiffening_factor: PositiveFloat = Field(1.3, description="Stiffeners, cover and base allowance on plate mass.")
    insulation_density: PositiveFloat = Field(1100.0, description="Oil-impregnated paper/pressboard density (kg/m3).")
    insulation_mass_fraction: confloat(gt=0, lt=1) = Field(0.15, description="Insulation mass over conductor mass.")
    conservator_expansion_range: PositiveFloat = Field(120.0, description="Oil temperature swing covered (K).")
    conservator_margin: PositiveFloat = Field(1.5, description="Conservator volume margin.")
    conservator_reserve: confloat(ge=0) = Field(20.0, description="Conservator minimum reserve (L).")

    # Thermal
    radiator_panel_area: PositiveFloat = Field(2.5, description="Cooling surface per radiator panel (m2).")
    radiator_panel_weight: PositiveFloat = Field(32.0, description="Radiator panel mass (kg).")
    radiators_per_fan: PositiveInt = Field(2, description="Radiator panels served by one fan.")
    fan_weight: PositiveFloat = Field(15.0, description="Fan assembly mass (kg).")
    hot_spot_limit_margin: PositiveFloat = Field(15.0, description="Hot-spot rise allowance over the rise class (K).")

    @model_validator(mode="after")
    def _ordered_bounds(self) -> "DesignProfile":
        for name in ("window_ratio_bounds", "efficiency_load_range", "window_height_bounds"):
            lo, hi = getattr(self, name)
            if not 0 < lo < hi:
                raise ValueError(f"{name} must satisfy 0 < low < high")
        for steps, fill in self.step_utilization:
            if steps < 1 or not 0 < fill <= 1:
                raise ValueError("step_utilization entries must be (steps >= 1, 0 < fill <= 1)")
        return self


DEFAULT_PROFILE = DesignProfile()


def load_profile(path: str | Path) -> DesignProfile:
    return DesignProfile.model_validate_json(Path(path).read_text())
