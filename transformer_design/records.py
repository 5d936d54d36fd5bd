"""
Flat Record Serialization
=========================

Converts designs and cost breakdowns to and from flat key/value records
(dotted keys, list indices as path parts) for storage and marketplace
listing submission.

OUTPUT SCHEMA (listing_record):
{
    "name": "...",
    "rated_power_kva": kVA,
    "primary_voltage": V,
    "secondary_voltage": V,
    "phases": 1|3,
    "frequency": 50|60,
    "vector_group": "...",
    "cooling_class": "...",
    "steel_grade": "...",
    "conductor_type": "...",
    "impedance_percent": %Z,        # DECIMAL(5,2)
    "efficiency_percent": %,        # DECIMAL(5,2), at rated load
    "no_load_loss_w": W,            # DECIMAL(10,2)
    "load_loss_w": W,               # DECIMAL(10,2)
    "total_weight_kg": kg,          # DECIMAL(10,2)
    "estimated_cost": USD | null,   # DECIMAL(12,2)
}
"""

import math
from typing import Any, Dict, Mapping, Optional

from .costing.models import CostBreakdown
from .design.models import TransformerDesign

SEPARATOR = "."


def flatten(data: Mapping[str, Any], prefix: str = "") -> Dict[str, Any]:
    """
    Flatten nested mappings and sequences into dotted keys.

    Args:
        data: Nested structure of dicts, lists/tuples and scalars
        prefix: Key prefix for recursion

    Returns:
        Dict of dotted key -> scalar
    """
    flat: Dict[str, Any] = {}
    for key, value in data.items():
        path = f"{prefix}{SEPARATOR}{key}" if prefix else str(key)
        if isinstance(value, Mapping):
            flat.update(flatten(value, path))
        elif isinstance(value, (list, tuple)):
            flat.update(flatten({str(i): v for i, v in enumerate(value)}, path))
        else:
            flat[path] = value
    return flat


def _listify(node: Any) -> Any:
    if not isinstance(node, dict):
        return node
    children = {k: _listify(v) for k, v in node.items()}
    if children and all(k.isdigit() for k in children):
        return [children[k] for k in sorted(children, key=int)]
    return children


def unflatten(flat: Mapping[str, Any]) -> Dict[str, Any]:
    """Inverse of ``flatten``; all-digit key levels become lists."""
    root: Dict[str, Any] = {}
    for path, value in flat.items():
        parts = path.split(SEPARATOR)
        node = root
        for part in parts[:-1]:
            node = node.setdefault(part, {})
            if not isinstance(node, dict):
                raise ValueError(f"conflicting keys at {path!r}")
        node[parts[-1]] = value
    return _listify(root)


def design_to_record(design: TransformerDesign) -> Dict[str, Any]:
    return flatten(design.model_dump(mode="json"))


def design_from_record(record: Mapping[str, Any]) -> TransformerDesign:
    return TransformerDesign.model_validate(unflatten(record))


def cost_to_record(cost: CostBreakdown) -> Dict[str, Any]:
    return flatten(cost.model_dump(mode="json"))


def cost_from_record(record: Mapping[str, Any]) -> CostBreakdown:
    return CostBreakdown.model_validate(unflatten(record))


def safe_decimal(value: Optional[float], max_digits: int, decimal_places: int = 2) -> Optional[float]:
    """Round and cap to a DECIMAL(max_digits, decimal_places) column; None for missing or non-finite."""
    if value is None:
        return None
    number = float(value)
    if not math.isfinite(number):
        return None
    cap = 10 ** (max_digits - decimal_places) - 10 ** (-decimal_places)
    return round(min(number, cap), decimal_places)


def rated_load_efficiency(design: TransformerDesign) -> float:
    for point in design.losses.efficiency:
        if math.isclose(point.load_percent, 100.0):
            return point.efficiency
    return design.losses.max_efficiency


def listing_record(design: TransformerDesign, cost: Optional[CostBreakdown] = None) -> Dict[str, Any]:
    """Marketplace listing fields for a design, sanitized to the listing table's column precision."""
    req = design.requirements
    return {
        "name": req.name,
        "rated_power_kva": req.rated_power,
        "primary_voltage": req.primary_voltage,
        "secondary_voltage": req.secondary_voltage,
        "phases": req.phases,
        "frequency": req.frequency,
        "vector_group": req.vector_group,
        "cooling_class": req.cooling_class,
        "steel_grade": req.steel_grade,
        "conductor_type": req.conductor_type,
        "impedance_percent": safe_decimal(design.impedance.percent_z, 5),
        "efficiency_percent": safe_decimal(rated_load_efficiency(design), 5),
        "no_load_loss_w": safe_decimal(design.losses.no_load_loss, 10),
        "load_loss_w": safe_decimal(design.losses.load_loss, 10),
        "total_weight_kg": safe_decimal(design.bom.total_weight, 10),
        "estimated_cost": safe_decimal(cost.total_cost, 12) if cost is not None else None,
    }

