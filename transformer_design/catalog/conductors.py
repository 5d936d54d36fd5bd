"""
Winding conductor sizes: round AWG magnet wire and rectangular strip.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class ConductorForm(str, Enum):
    ROUND = "round"
    STRIP = "strip"


@dataclass(frozen=True)
class AWGWire:
    awg: int  # 0 = 1/0, -1 = 2/0, -2 = 3/0, -3 = 4/0
    diameter: float  # mm
    area: float  # mm²

    @property
    def label(self) -> str:
        if self.awg <= 0:
            return f"{1 - self.awg}/0 AWG"
        return f"{self.awg} AWG"


@dataclass(frozen=True)
class ConductorSelection:
    """
    Conductor chosen for one turn.

    Strands of a strip conductor are laid side by side radially, so one turn
    occupies ``axial_size`` along the limb and ``radial_size`` across it.
    """
    form: ConductorForm
    description: str
    area: float  # total copper/aluminum area per turn, mm²
    strands: int
    axial_size: float  # bare, mm
    radial_size: float  # bare, mm


# Largest to smallest
AWG_TABLE: Tuple[AWGWire, ...] = (
    AWGWire(-3, 11.684, 107.22),
    AWGWire(-2, 10.405, 85.03),
    AWGWire(-1, 9.266, 67.43),
    AWGWire(0, 8.251, 53.49),
    AWGWire(1, 7.348, 42.41),
    AWGWire(2, 6.544, 33.63),
    AWGWire(3, 5.827, 26.67),
    AWGWire(4, 5.189, 21.15),
    AWGWire(5, 4.621, 16.77),
    AWGWire(6, 4.115, 13.30),
    AWGWire(7, 3.665, 10.55),
    AWGWire(8, 3.264, 8.366),
    AWGWire(9, 2.906, 6.634),
    AWGWire(10, 2.588, 5.261),
    AWGWire(11, 2.305, 4.172),
    AWGWire(12, 2.053, 3.309),
    AWGWire(13, 1.828, 2.624),
    AWGWire(14, 1.628, 2.081),
    AWGWire(15, 1.450, 1.650),
    AWGWire(16, 1.291, 1.309),
    AWGWire(17, 1.150, 1.038),
    AWGWire(18, 1.024, 0.823),
    AWGWire(19, 0.912, 0.653),
    AWGWire(20, 0.812, 0.518),
    AWGWire(21, 0.723, 0.411),
    AWGWire(22, 0.644, 0.326),
    AWGWire(23, 0.573, 0.258),
    AWGWire(24, 0.511, 0.205),
    AWGWire(25, 0.455, 0.162),
    AWGWire(26, 0.405, 0.129),
    AWGWire(27, 0.361, 0.102),
    AWGWire(28, 0.321, 0.0810),
    AWGWire(29, 0.286, 0.0642),
    AWGWire(30, 0.255, 0.0509),
)

STRIP_THICKNESSES: Tuple[float, ...] = (1.5, 2.0, 2.5, 3.0)  # mm
STRIP_WIDTHS: Tuple[float, ...] = (6.0, 8.0, 10.0, 12.0, 14.0)  # mm
MAX_PARALLEL_STRANDS = 96

# Round wire is used below both limits
ROUND_WIRE_MAX_CURRENT = 100.0  # A
ROUND_WIRE_MAX_AREA = 100.0  # mm²


def smallest_awg(required_area: float) -> Optional[AWGWire]:
    """Smallest gauge whose area covers ``required_area``; None if even 4/0 is too small."""
    for wire in reversed(AWG_TABLE):
        if wire.area >= required_area:
            return wire
    return None


def best_strip(required_area: float) -> ConductorSelection:
    """
    Fewest parallel rectangular strips covering ``required_area``, then the
    least total area. When no combination reaches the area the largest
    bundle is returned and the caller's density check rejects it.
    """
    best: Optional[Tuple[float, int, float, float]] = None
    for thickness in STRIP_THICKNESSES:
        for width in STRIP_WIDTHS:
            strand_area = thickness * width
            n = max(1, math.ceil(required_area / strand_area - 1e-9))
            if n > MAX_PARALLEL_STRANDS:
                continue
            candidate = (n * strand_area, n, thickness, width)
            if best is None or n < best[1] or (n == best[1] and candidate[0] < best[0] - 1e-9):
                best = candidate

    if best is None:
        thickness, width = STRIP_THICKNESSES[-1], STRIP_WIDTHS[-1]
        best = (MAX_PARALLEL_STRANDS * thickness * width, MAX_PARALLEL_STRANDS, thickness, width)

    area, n, thickness, width = best
    return ConductorSelection(
        form=ConductorForm.STRIP,
        description=f"{n} x {thickness:g} x {width:g} mm strip",
        area=area,
        strands=n,
        axial_size=width,
        radial_size=n * thickness,
    )


def select_conductor(current: float, required_area: float) -> ConductorSelection:
    """Round AWG wire for small currents, parallel strip otherwise."""
    if current < ROUND_WIRE_MAX_CURRENT and required_area < ROUND_WIRE_MAX_AREA:
        wire = smallest_awg(required_area)
        if wire is not None:
            return ConductorSelection(
                form=ConductorForm.ROUND,
                description=wire.label,
                area=wire.area,
                strands=1,
                axial_size=wire.diameter,
                radial_size=wire.diameter,
            )
    return best_strip(required_area)
