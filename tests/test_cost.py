import pytest

from transformer_design.costing import (
    CostEstimationOptions,
    LifecycleOptions,
    compare_costs,
    compare_designs,
    cost_frame,
    estimate_cost,
    estimate_lifecycle_cost,
)
from transformer_design.costing.lifecycle import annual_energy_loss
from transformer_design.design import compute_design
from transformer_design.errors import InvalidOption

from conftest import make_requirements

MATERIALS = ("core_steel", "conductors", "insulation", "oil", "tank", "bushings", "cooling", "tap_changer", "accessories")
LABOR = ("assembly", "testing", "engineering")


def _sum(cost, names):
    return sum(getattr(cost, n) for n in names)


class TestEstimateCost:
    def test_totals_are_sums_of_components(self, cost):
        assert cost.total_materials == pytest.approx(_sum(cost, MATERIALS), abs=0.005)
        assert cost.total_labor == pytest.approx(_sum(cost, LABOR), abs=0.005)
        subtotal = (
            cost.total_materials
            + cost.total_labor
            + cost.facility_overhead
            + cost.quality_control
            + cost.shipping
            + cost.warranty_reserve
        )
        assert cost.subtotal == pytest.approx(subtotal, abs=0.005)
        assert cost.total_cost == pytest.approx(cost.subtotal + cost.profit_margin, abs=0.005)

    def test_components_are_whole_cents(self, cost):
        for name in MATERIALS + LABOR + ("shipping", "warranty_reserve", "total_cost"):
            value = getattr(cost, name)
            assert round(value, 2) == value

    def test_overheads(self, cost, design):
        direct = cost.total_materials + cost.total_labor
        assert cost.facility_overhead == pytest.approx(0.15 * direct, abs=0.01)
        assert cost.quality_control == pytest.approx(0.05 * direct, abs=0.01)
        assert cost.shipping == pytest.approx(250.0 + 0.35 * design.bom.total_weight, abs=0.01)
        assert cost.profit_margin == pytest.approx(0.12 * cost.subtotal, abs=0.01)

    def test_material_prices(self, cost, design):
        assert cost.core_steel == pytest.approx(design.bom.total_steel_weight * 3.00, abs=0.01)
        assert cost.oil == pytest.approx(design.bom.total_oil_volume * 2.20, abs=0.01)
        assert cost.bushings == pytest.approx(3 * 720.0 + 4 * 180.0)
        assert cost.tap_changer == 1800.0
        assert cost.accessories == pytest.approx(1305.0 + 650.0)
        assert cost.cooling == pytest.approx(480.0 * design.thermal.radiator_panels)

    def test_labor_minimums_and_rates(self, cost, design):
        weight = design.bom.total_weight
        assert cost.assembly == pytest.approx(max(40.0, 0.025 * weight) * 65.0, abs=0.01)
        assert cost.testing == pytest.approx(max(16.0, 0.008 * weight) * 85.0, abs=0.01)
        assert cost.engineering == pytest.approx(max(8.0, 0.005 * weight) * 120.0, abs=0.01)

    def test_ratios_and_region(self, cost, design):
        assert cost.cost_per_kva == pytest.approx(cost.total_cost / 1500.0, abs=0.005)
        assert cost.cost_per_kg == pytest.approx(cost.total_cost / design.bom.total_weight, abs=0.005)
        assert cost.region == "usa"
        assert cost.lead_time_weeks == (26, 52)
        assert cost.feoc_compliant

    def test_oil_type_only_changes_oil_and_derived_overheads(self, cost, design, requirements):
        ester = estimate_cost(design, requirements, CostEstimationOptions(oil_type="naturalEster"))
        assert ester.oil > cost.oil
        assert ester.total_materials - ester.oil == pytest.approx(cost.total_materials - cost.oil, abs=0.005)
        assert ester.total_labor == cost.total_labor
        assert ester.shipping == cost.shipping
        assert ester.facility_overhead > cost.facility_overhead
        assert ester.total_cost > cost.total_cost

    def test_mineral_to_synthetic_ester(self, cost, design, requirements):
        synthetic = estimate_cost(design, requirements, CostEstimationOptions(oil_type="syntheticEster"))
        assert synthetic.oil_type == "syntheticEster"
        assert synthetic.oil == pytest.approx(design.bom.total_oil_volume * 6.80, abs=0.01)
        assert synthetic.oil > cost.oil
        others = [n for n in MATERIALS if n != "oil"]
        assert _sum(synthetic, others) == pytest.approx(_sum(cost, others), abs=0.005)
        assert synthetic.total_labor == cost.total_labor
        assert synthetic.shipping == cost.shipping
        assert synthetic.total_cost > cost.total_cost

    def test_on_load_tap_changer(self, cost, design, requirements):
        oltc = estimate_cost(design, requirements, CostEstimationOptions(include_oltc=True))
        assert oltc.tap_changer_type == "onLoad"
        assert oltc.tap_changer == 15000.0
        assert oltc.assembly == pytest.approx(cost.assembly * 1.15, abs=0.02)

    def test_region_labor(self, cost, design, requirements):
        china = estimate_cost(design, requirements, CostEstimationOptions(region="china"))
        assert china.total_labor < cost.total_labor
        assert china.total_materials == cost.total_materials
        assert not china.feoc_compliant

    def test_amorphous_costs_more_steel(self, cost):
        req = make_requirements(steel_grade="amorphous-sa1")
        amorphous = estimate_cost(compute_design(req), req)
        assert amorphous.core_steel > cost.core_steel

    @pytest.mark.parametrize(
        "options,field",
        [
            ({"oil_type": "olive"}, "oil_type"),
            ({"tap_changer_type": "manual"}, "tap_changer_type"),
            ({"region": "atlantis"}, "region"),
            ({"profit_margin": 1.0}, "profit_margin"),
            ({"profit_margin": -0.1}, "profit_margin"),
        ],
    )
    def test_invalid_options(self, design, requirements, options, field):
        with pytest.raises(InvalidOption) as exc:
            estimate_cost(design, requirements, CostEstimationOptions(**options))
        assert exc.value.field == field


def test_compare_costs(design, requirements):
    comparisons = compare_costs(
        design,
        requirements,
        [CostEstimationOptions(), CostEstimationOptions(oil_type="silicon")],
    )
    assert comparisons[0].delta_total == 0.0
    assert comparisons[1].delta_total > 0
    assert comparisons[1].delta_percent > 0
    with pytest.raises(InvalidOption):
        compare_costs(design, requirements, [])


def test_compare_designs_on_two_steels(design):
    amorphous = compute_design(make_requirements(name="Pad-mount 1500 AM", steel_grade="amorphous-sa1"))
    rows = compare_designs([design, amorphous])
    assert [r.name for r in rows] == ["Pad-mount 1500", "Pad-mount 1500 AM"]
    assert [r.steel_grade for r in rows] == ["m4", "amorphous-sa1"]
    assert rows[0].delta_total == 0.0
    assert rows[1].cost.core_steel > rows[0].cost.core_steel
    assert rows[1].delta_total == pytest.approx(rows[1].cost.total_cost - rows[0].cost.total_cost, abs=0.005)

    silicon = compare_designs([design, amorphous], CostEstimationOptions(oil_type="silicon"))
    assert all(r.cost.oil_type == "silicon" for r in silicon)
    with pytest.raises(InvalidOption):
        compare_designs([])


def test_cost_frame(cost):
    df = cost_frame(cost)
    assert len(df) == len(MATERIALS) + len(LABOR) + 4 + 1
    assert df["amount"].sum() == pytest.approx(cost.total_cost, abs=0.05)
    assert df["share_pct"].sum() == pytest.approx(100.0, abs=0.2)
    assert set(df["group"]) == {"materials", "labor", "overhead", "profit"}


class TestLifecycle:
    def test_energy_and_totals(self, design, requirements, cost):
        result = estimate_lifecycle_cost(design, requirements)
        energy = annual_energy_loss(design.losses.no_load_loss, design.losses.load_loss, 0.5)
        assert energy == pytest.approx(
            (design.losses.no_load_loss * 8760 + design.losses.load_loss * 8760 * 0.25) / 1000.0
        )
        assert result.initial_cost == cost.total_cost
        assert result.annual_energy_loss_kwh == pytest.approx(energy)
        assert result.annual_loss_cost == pytest.approx(energy * 0.10)
        assert result.total_loss_cost == pytest.approx(energy * 0.10 * 25)
        assert result.total_lifecycle_cost == pytest.approx(result.initial_cost + result.total_loss_cost)
        assert 0 < result.loss_share < 1

    def test_monotonic_in_rate_years_and_load(self, design, requirements):
        base = estimate_lifecycle_cost(design, requirements).total_lifecycle_cost
        for change in ({"electricity_rate": 0.15}, {"operating_years": 30}, {"load_factor": 0.8}):
            higher = estimate_lifecycle_cost(design, requirements, LifecycleOptions(**change))
            assert higher.total_lifecycle_cost > base

    def test_zero_rate_is_initial_cost(self, design, requirements, cost):
        result = estimate_lifecycle_cost(design, requirements, LifecycleOptions(electricity_rate=0.0))
        assert result.total_lifecycle_cost == cost.total_cost

    @pytest.mark.parametrize(
        "options,field",
        [
            ({"electricity_rate": -0.01}, "electricity_rate"),
            ({"operating_years": 0}, "operating_years"),
            ({"load_factor": -0.1}, "load_factor"),
            ({"load_factor": 2.0}, "load_factor"),
        ],
    )
    def test_invalid_options(self, design, requirements, options, field):
        with pytest.raises(InvalidOption) as exc:
            estimate_lifecycle_cost(design, requirements, LifecycleOptions(**options))
        assert exc.value.field == field
