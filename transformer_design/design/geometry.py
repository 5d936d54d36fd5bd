"""
Stepped core cross-section geometry.

Used by the core sizing and by drawing code, so both see the same steps.
The core diameter is sized with the fill of this layout
(``DesignProfile.step_utilization``), so the stepped area matches the gross
section the core mass is computed from. Step ``i`` of ``n`` sits at angle
``i/(n+1) * pi/2``: its full width is ``2r cos(theta)`` and it extends the
stack half-height to ``r sin(theta)``.
"""

from __future__ import annotations

import math
from typing import List, Tuple

import numpy as np

from .models import StepDimension


def step_angles(steps: int) -> np.ndarray:
    if steps < 1:
        raise ValueError("steps must be >= 1")
    i = np.arange(1, steps + 1, dtype=float)
    return i / (steps + 1) * (math.pi / 2.0)


def step_dimensions(diameter: float, steps: int) -> Tuple[StepDimension, ...]:
    """Widest step first. Heights are the full (both-sides) band height in mm."""
    r = diameter / 2.0
    theta = step_angles(steps)
    widths = 2.0 * r * np.cos(theta)
    half_heights = r * np.sin(theta)
    heights = 2.0 * np.diff(np.concatenate(([0.0], half_heights)))
    return tuple(
        StepDimension(width=round(float(w), 1), height=round(float(h), 1))
        for w, h in zip(widths, heights)
    )


def stepped_area(diameter: float, steps: int) -> float:
    """Area covered by the steps (cm²), unrounded."""
    r = diameter / 2.0
    theta = step_angles(steps)
    widths = 2.0 * r * np.cos(theta)
    heights = 2.0 * np.diff(np.concatenate(([0.0], r * np.sin(theta))))
    return float(np.sum(widths * heights)) / 100.0


def step_outline(diameter: float, steps: int) -> List[Tuple[float, float]]:
    """
    Closed polygon (mm, centred on the limb axis) tracing the stepped section.

    Starts at the top-right corner of the narrowest step and runs clockwise.
    """
    r = diameter / 2.0
    theta = step_angles(steps)
    half_w = r * np.cos(theta)
    half_h = r * np.sin(theta)

    right: List[Tuple[float, float]] = []
    for k in range(steps - 1, -1, -1):
        upper = float(half_h[k])
        lower = float(half_h[k - 1]) if k > 0 else 0.0
        right.append((float(half_w[k]), upper))
        right.append((float(half_w[k]), lower))
    # mirror the quarter outline into the other three quadrants
    lower_right = [(x, -y) for x, y in reversed(right)][1:]
    left = [(-x, y) for x, y in reversed(right + lower_right)]
    return right + lower_right + left
