import math
import warnings

import numpy as np
import pytest

from transformer_design import ImpedanceOutOfTolerance, compute_design
from transformer_design.design.winding import main_gap

from conftest import make_requirements

# Ratings, phases, frequencies, steels and conductors spanning the design range
FAMILY = {
    "25kva-1ph-60hz-m4-cu": dict(
        rated_power=25.0, phases=1, primary_voltage=7200.0, secondary_voltage=240.0
    ),
    "100kva-1ph-50hz-m4-al": dict(
        rated_power=100.0, phases=1, frequency=50.0, primary_voltage=11000.0, secondary_voltage=230.0,
        conductor_type="aluminum",
    ),
    "500kva-50hz-m5-cu": dict(
        rated_power=500.0, frequency=50.0, primary_voltage=11000.0, secondary_voltage=415.0, steel_grade="m5"
    ),
    "1500kva-60hz-amorphous-al": dict(steel_grade="amorphous-sa1", conductor_type="aluminum"),
    "2500kva-50hz-m3-cu": dict(
        rated_power=2500.0, frequency=50.0, primary_voltage=22000.0, secondary_voltage=415.0, steel_grade="m3"
    ),
    "5000kva-60hz-hib-cu": dict(
        rated_power=5000.0, primary_voltage=34500.0, secondary_voltage=4160.0, steel_grade="hi-b"
    ),
}


def _design(**overrides):
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", ImpedanceOutOfTolerance)
        return compute_design(make_requirements(**overrides))


@pytest.fixture(scope="module", params=list(FAMILY), ids=list(FAMILY))
def member(request):
    return _design(**FAMILY[request.param])


def test_efficiency_is_unimodal(member):
    eta = np.array([p.efficiency for p in member.losses.efficiency])
    peak = int(np.argmax(eta))
    diffs = np.diff(eta)
    assert np.all(diffs[:peak] > 0)
    assert np.all(diffs[peak:] < 0)
    assert member.losses.max_efficiency >= eta.max()


def test_efficiency_peak_near_loss_balance(member):
    losses = member.losses
    p_star = math.sqrt(losses.no_load_loss / losses.load_loss) * 100.0
    assert losses.max_efficiency_load == pytest.approx(p_star)
    peak = int(np.argmax([p.efficiency for p in losses.efficiency]))
    assert abs(losses.efficiency[peak].load_percent - p_star) <= 5.0


def test_bom_weights_add_up(member):
    bom = member.bom
    parts = (
        bom.total_steel_weight
        + bom.total_conductor_weight
        + bom.total_insulation_weight
        + bom.total_tank_weight
        + bom.total_oil_weight
        + bom.total_accessory_weight
    )
    assert bom.total_weight == pytest.approx(parts, rel=1e-4)
    assert bom.total_steel_weight == pytest.approx(member.core.core_weight)


def test_stepped_section_covers_gross_section(member):
    core = member.core
    assert len(core.step_dimensions) == core.core_steps
    assert core.stepped_area == pytest.approx(core.gross_cross_section, rel=0.02)


def test_window_fits_coils(member):
    core, hv = member.core, member.hv_winding
    coils = 2 if member.requirements.phases == 3 else 1
    gap = main_gap(member.requirements.primary_voltage)
    assert core.window_width >= coils * (hv.outer_radius - core.core_radius) + gap - 1e-9


def test_out_of_band_impedance_is_reported(member):
    if not member.impedance.within_tolerance:
        assert any(w.startswith("Impedance") for w in member.warnings)


@pytest.mark.parametrize("case", ["25kva-1ph-60hz-m4-cu", "500kva-50hz-m5-cu", "5000kva-60hz-hib-cu"])
def test_amorphous_trades_section_for_no_load_loss(case):
    silicon = _design(**FAMILY[case])
    amorphous = _design(**{**FAMILY[case], "steel_grade": "amorphous-sa1"})
    assert amorphous.core.flux_density < silicon.core.flux_density
    assert amorphous.core.gross_cross_section > silicon.core.gross_cross_section
    assert amorphous.losses.no_load_loss < silicon.losses.no_load_loss


def test_50hz_needs_a_larger_section():
    at_60 = _design(frequency=60.0)
    at_50 = _design(frequency=50.0)
    assert at_50.core.net_cross_section == pytest.approx(at_60.core.net_cross_section * 60.0 / 50.0)
    assert at_50.core.core_diameter > at_60.core.core_diameter
    assert at_50.hv_winding.turns == at_60.hv_winding.turns
