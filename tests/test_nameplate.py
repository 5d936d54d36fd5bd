import math

import pytest

from transformer_design.design import Nameplate, compute_design

from conftest import make_requirements


@pytest.fixture
def plate(design):
    return Nameplate.from_design(design)


def test_ratios(plate):
    assert plate.turns_ratio == pytest.approx(792 / 28)
    assert plate.voltage_ratio == pytest.approx(13800.0 / 480.0)


def test_per_unit_impedance(plate):
    assert math.hypot(plate.resistance_pu, plate.reactance_pu) == pytest.approx(plate.percent_z / 100.0)
    assert plate.reactance_pu / plate.resistance_pu == pytest.approx(plate.x_r_ratio)


def test_ratings_by_cooling_stage(plate):
    assert plate.ratings_kva == (1500.0,)
    assert plate.rating_display == "1500 kVA"

    forced = Nameplate.from_design(compute_design(make_requirements(cooling_class="onan-onaf-ofaf")))
    assert forced.ratings_kva == (1500.0, 1995.0, 2505.0)
    assert forced.rating_display == "1500/1995/2505 kVA"


def test_currents(plate):
    assert plate.rated_current("hv") == pytest.approx(1500e3 / (math.sqrt(3) * 13800.0))
    assert plate.rated_current("lv") == pytest.approx(1500e3 / (math.sqrt(3) * 480.0))
    assert plate.short_circuit_current("lv") == pytest.approx(plate.rated_current("lv") * 100.0 / plate.percent_z)


@pytest.mark.parametrize("load,status", [(1000.0, "normal"), (1500.0, "elevated"), (1700.0, "emergency"), (2000.0, "overload")])
def test_loading_status(plate, load, status):
    loading = plate.get_loading(load)
    assert loading["status"] == status
    assert loading["feasible"] == (load <= 1500.0)


def test_losses_at_load(plate):
    half = plate.get_losses(0.5)
    assert half["load_loss_w"] == pytest.approx(plate.load_loss_w / 4.0)
    assert half["total_w"] == pytest.approx(plate.no_load_loss_w + plate.load_loss_w / 4.0)


def test_regulation_scales_with_load(plate):
    assert plate.regulation(0.8, 0.5) < plate.regulation(0.8, 1.0)
    assert plate.regulation(1.0, 1.0) < plate.regulation(0.8, 1.0)


def test_impedance_at_tap(plate):
    assert plate.impedance_at_tap(0.0) == pytest.approx(plate.percent_z)
    assert plate.impedance_at_tap(0.05) == pytest.approx(plate.percent_z * 1.05 ** 2)
    assert plate.impedance_at_tap(-0.025) < plate.percent_z
    with pytest.raises(ValueError):
        plate.impedance_at_tap(0.10)


def test_overload_capability(plate):
    capability = plate.overload_capability()
    assert capability["normal_pu"] == pytest.approx((80.0 / plate.hot_spot_rise) ** (1.0 / 1.6))
    assert 1.0 < capability["normal_pu"] < capability["emergency_pu"]


def test_validation():
    with pytest.raises(ValueError):
        Nameplate(
            name="bad",
            kva_rating=0.0,
            primary_v=13800.0,
            secondary_v=480.0,
            phases=3,
            frequency=60.0,
            hv_turns=792,
            lv_turns=28,
            percent_z=5.75,
            x_r_ratio=4.0,
            no_load_loss_w=2000.0,
            load_loss_w=20000.0,
            hot_spot_rise=70.0,
            cooling_exponent=0.8,
        )
