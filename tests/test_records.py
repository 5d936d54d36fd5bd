import math

import pytest

from transformer_design.records import (
    cost_from_record,
    cost_to_record,
    design_from_record,
    design_to_record,
    flatten,
    listing_record,
    safe_decimal,
    unflatten,
)


def test_flatten_and_unflatten():
    nested = {"a": {"b": 1, "c": [10, {"d": 2}]}, "e": "x"}
    flat = flatten(nested)
    assert flat == {"a.b": 1, "a.c.0": 10, "a.c.1.d": 2, "e": "x"}
    assert unflatten(flat) == nested


def test_unflatten_rejects_conflicting_keys():
    with pytest.raises(ValueError):
        unflatten({"a": 1, "a.b": 2})


def test_design_record_round_trip(design):
    record = design_to_record(design)
    assert record["requirements.rated_power"] == 1500.0
    assert record["hv_winding.side"] == "hv"
    assert "core.step_dimensions.0.width" in record
    assert all("." in key for key in record if key not in ("iterations",))
    assert design_from_record(record) == design


def test_cost_record_round_trip(cost):
    record = cost_to_record(cost)
    assert record["lead_time_weeks.1"] == 52
    assert cost_from_record(record) == cost


@pytest.mark.parametrize(
    "value,digits,expected",
    [
        (5.7349, 5, 5.73),
        (123456.789, 5, 999.99),
        (12345678.0, 10, 12345678.0),
        (None, 5, None),
        (math.nan, 5, None),
        (math.inf, 10, None),
    ],
)
def test_safe_decimal(value, digits, expected):
    assert safe_decimal(value, digits) == expected


def test_listing_record(design, cost):
    listing = listing_record(design, cost)
    assert listing["name"] == "Pad-mount 1500"
    assert listing["rated_power_kva"] == 1500.0
    assert listing["impedance_percent"] == round(design.impedance.percent_z, 2)
    assert listing["efficiency_percent"] == round(design.losses.efficiency[19].efficiency, 2)
    assert listing["total_weight_kg"] == round(design.bom.total_weight, 2)
    assert listing["estimated_cost"] == cost.total_cost
    assert listing_record(design)["estimated_cost"] is None
