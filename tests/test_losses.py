import math

import numpy as np
import pytest

from transformer_design.design.losses import efficiency, max_efficiency_load


def test_efficiency_scalar_and_array():
    eta = efficiency(1000.0, 1000.0, 10000.0, 100.0)
    assert isinstance(eta, float)
    assert eta == pytest.approx(1e6 / (1e6 + 11000.0) * 100.0)

    curve = efficiency(1000.0, 1000.0, 10000.0, np.array([50.0, 100.0]))
    assert curve.shape == (2,)
    assert curve[1] == pytest.approx(eta)


def test_efficiency_with_power_factor():
    assert efficiency(1000.0, 1000.0, 10000.0, 100.0, power_factor=0.8) < efficiency(1000.0, 1000.0, 10000.0, 100.0)


def test_max_efficiency_load():
    assert max_efficiency_load(1000.0, 4000.0) == pytest.approx(50.0)


class TestScenarioLosses:
    def test_components(self, design):
        losses = design.losses
        assert losses.eddy_loss == pytest.approx(0.05 * losses.i2r_loss)
        assert losses.stray_loss == pytest.approx(0.03 * losses.i2r_loss)
        assert losses.load_loss == pytest.approx(losses.i2r_loss + losses.eddy_loss + losses.stray_loss)
        assert losses.total_loss == pytest.approx(losses.no_load_loss + losses.load_loss)

    def test_no_load_loss_from_core_mass(self, design):
        expected = design.core.core_weight * 1.17 * (1.60 / 1.7) ** 2 * 1.15
        assert design.losses.no_load_loss == pytest.approx(expected)

    def test_i2r_uses_line_currents(self, design):
        hv, lv = design.hv_winding, design.lv_winding
        expected = 3 * (hv.rated_current ** 2 * hv.dc_resistance + lv.rated_current ** 2 * lv.dc_resistance)
        assert design.losses.i2r_loss == pytest.approx(expected)

    def test_curve_sampling(self, design):
        loads = [p.load_percent for p in design.losses.efficiency]
        assert loads[0] == 5.0
        assert loads[-1] == 125.0
        assert len(loads) == 25
        for point in design.losses.efficiency:
            expected = design.losses.no_load_loss + design.losses.load_loss * (point.load_percent / 100.0) ** 2
            assert point.losses == pytest.approx(expected)

    def test_curve_is_unimodal_around_peak(self, design):
        losses = design.losses
        eta = np.array([p.efficiency for p in losses.efficiency])
        peak = int(np.argmax(eta))
        diffs = np.diff(eta)
        assert np.all(diffs[:peak] > 0)
        assert np.all(diffs[peak:] < 0)

        p_star = math.sqrt(losses.no_load_loss / losses.load_loss) * 100.0
        assert losses.max_efficiency_load == pytest.approx(p_star)
        assert abs(losses.efficiency[peak].load_percent - p_star) <= 5.0
        assert losses.max_efficiency >= eta.max()
        assert 25.0 < p_star < 100.0
