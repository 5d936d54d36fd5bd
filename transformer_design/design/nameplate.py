"""
Transformer Nameplate
=====================

Operating view of an issued design: ratings, per-unit impedance, loading
status, losses and regulation at a given load, fault current, tap
impedance and overload capability.
"""

from dataclasses import dataclass
from typing import Dict, Tuple
import math

from ..catalog.materials import get_cooling_class
from .impedance import voltage_regulation
from .models import TransformerDesign
from .winding import rated_current

NORMAL_HOT_SPOT_LIMIT = 110.0  # °C
EMERGENCY_HOT_SPOT_LIMIT = 140.0  # °C


@dataclass
class Nameplate:
    """
    Nameplate data of a designed transformer.

    Attributes:
        name: Transformer identifier
        kva_rating: Base (self-cooled) rating
        primary_v: HV line voltage
        secondary_v: LV line voltage
        percent_z: Impedance on own base (%)
        x_r_ratio: X/R ratio
        tap_range: Tap adjustment range (e.g., +/- 5%)
    """
    name: str
    kva_rating: float
    primary_v: float
    secondary_v: float
    phases: int
    frequency: float
    hv_turns: int
    lv_turns: int
    percent_z: float
    x_r_ratio: float
    no_load_loss_w: float
    load_loss_w: float
    hot_spot_rise: float
    cooling_exponent: float
    rating_multipliers: Tuple[float, ...] = (1.0,)
    tap_range: Tuple[float, float] = (-0.05, 0.05)
    ambient_c: float = 30.0

    def __post_init__(self):
        """Validate nameplate parameters."""
        if self.kva_rating <= 0:
            raise ValueError("kva_rating must be positive")
        if self.primary_v <= 0 or self.secondary_v <= 0:
            raise ValueError("Voltage ratings must be positive")
        if self.percent_z <= 0:
            raise ValueError("percent_z must be positive")

    @classmethod
    def from_design(cls, design: TransformerDesign, ambient_c: float = 30.0) -> "Nameplate":
        req = design.requirements
        cooling = get_cooling_class(req.cooling_class)
        return cls(
            name=req.name,
            kva_rating=req.rated_power,
            primary_v=req.primary_voltage,
            secondary_v=req.secondary_voltage,
            phases=req.phases,
            frequency=req.frequency,
            hv_turns=design.hv_winding.turns,
            lv_turns=design.lv_winding.turns,
            percent_z=design.impedance.percent_z,
            x_r_ratio=design.impedance.xr_ratio,
            no_load_loss_w=design.losses.no_load_loss,
            load_loss_w=design.losses.load_loss,
            hot_spot_rise=design.thermal.hot_spot_rise,
            cooling_exponent=cooling.oil_rise_exponent,
            rating_multipliers=cooling.rating_multipliers,
            ambient_c=ambient_c,
        )

    @property
    def turns_ratio(self) -> float:
        """Actual turns ratio (HV/LV)."""
        return self.hv_turns / self.lv_turns

    @property
    def voltage_ratio(self) -> float:
        return self.primary_v / self.secondary_v

    @property
    def resistance_pu(self) -> float:
        return self.percent_z / 100.0 / math.sqrt(1 + self.x_r_ratio ** 2)

    @property
    def reactance_pu(self) -> float:
        return self.percent_z / 100.0 * self.x_r_ratio / math.sqrt(1 + self.x_r_ratio ** 2)

    @property
    def ratings_kva(self) -> Tuple[float, ...]:
        """Self-cooled rating followed by each forced-cooling stage."""
        return tuple(float(round(self.kva_rating * m)) for m in self.rating_multipliers)

    @property
    def rating_display(self) -> str:
        return "/".join(f"{r:g}" for r in self.ratings_kva) + " kVA"

    def rated_current(self, side: str = "hv") -> float:
        voltage = self.primary_v if side == "hv" else self.secondary_v
        return rated_current(self.kva_rating, voltage, self.phases)

    def short_circuit_current(self, side: str = "hv") -> float:
        """Symmetrical bolted-fault current (A) with an infinite source."""
        return self.rated_current(side) * 100.0 / self.percent_z

    def get_loading(self, load_kva: float) -> dict:
        """
        Loading against the top (forced-cooled) rating.

        Returns:
            Dict with loading percentage and status
        """
        top_rating = self.ratings_kva[-1]
        loading_pct = load_kva / top_rating * 100

        if loading_pct <= 80:
            status = "normal"
        elif loading_pct <= 100:
            status = "elevated"
        elif loading_pct <= 120:
            status = "emergency"
        else:
            status = "overload"

        return {
            "load_kva": load_kva,
            "loading_pct": loading_pct,
            "status": status,
            "margin_kva": top_rating - load_kva,
            "feasible": load_kva <= top_rating,
        }

    def get_losses(self, load_pu: float) -> Dict[str, float]:
        """Losses (W) at a per-unit load on the base rating."""
        load_loss = self.load_loss_w * load_pu ** 2
        return {
            "no_load_w": self.no_load_loss_w,
            "load_loss_w": load_loss,
            "total_w": self.no_load_loss_w + load_loss,
        }

    def regulation(self, power_factor: float = 1.0, load_pu: float = 1.0) -> float:
        """Voltage regulation (%) at a lagging power factor and per-unit load."""
        return voltage_regulation(
            self.resistance_pu * 100.0 * load_pu, self.reactance_pu * 100.0 * load_pu, power_factor
        )

    def impedance_at_tap(self, tap: float) -> float:
        """
        %Z at a tap position given as a fraction of HV turns (+0.025 = +2.5%).

        Impedance on the tapped winding scales with turns squared.
        """
        lo, hi = self.tap_range
        if not lo - 1e-9 <= tap <= hi + 1e-9:
            raise ValueError(f"tap {tap:+.3f} outside range {lo:+.3f}..{hi:+.3f}")
        return self.percent_z * (1.0 + tap) ** 2

    def overload_capability(self) -> Dict[str, float]:
        """
        Permissible per-unit load for the normal and emergency hot-spot limits.

        Hot-spot rise scales with loss^x, and load loss with load^2.
        """
        def _permissible(limit_c: float) -> float:
            allowed_rise = limit_c - self.ambient_c
            if allowed_rise <= 0:
                return 0.0
            return (allowed_rise / self.hot_spot_rise) ** (1.0 / (2.0 * self.cooling_exponent))

        return {
            "normal_pu": _permissible(NORMAL_HOT_SPOT_LIMIT),
            "emergency_pu": _permissible(EMERGENCY_HOT_SPOT_LIMIT),
        }
