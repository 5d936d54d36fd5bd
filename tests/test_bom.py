import pytest

from transformer_design.design.bom import bom_frame, bushing_counts
from transformer_design.design.models import BomCategory

from conftest import make_requirements


@pytest.mark.parametrize(
    "vector_group,expected",
    [("dyn11", (3, 4)), ("dyn1", (3, 4)), ("ynd11", (4, 3)), ("dd0", (3, 3)), ("yy0", (3, 3))],
)
def test_bushing_counts(vector_group, expected):
    assert bushing_counts(make_requirements(vector_group=vector_group)) == expected


def test_single_phase_bushings(single_phase_requirements):
    assert bushing_counts(single_phase_requirements) == (2, 2)


class TestScenarioBom:
    def test_weights_are_consistent(self, design):
        bom = design.bom
        assert bom.total_steel_weight == pytest.approx(design.core.core_weight)
        assert bom.total_conductor_weight == pytest.approx(
            design.hv_winding.conductor_weight + design.lv_winding.conductor_weight
        )
        assert bom.total_oil_weight == pytest.approx(design.tank.oil_weight)
        assert bom.total_oil_volume == pytest.approx(design.tank.oil_volume)
        assert bom.total_tank_weight == pytest.approx(design.tank.tank_weight)

        parts = (
            bom.total_steel_weight
            + bom.total_conductor_weight
            + bom.total_insulation_weight
            + bom.total_tank_weight
            + bom.total_oil_weight
            + bom.total_accessory_weight
        )
        assert bom.total_weight == pytest.approx(parts, rel=1e-4)
        assert sum(bom.category_weights().values()) == pytest.approx(bom.total_weight)

    def test_items(self, design):
        bom = design.bom
        codes = [i.code for i in bom.items]
        assert len(codes) == len(set(codes))
        for code in ("core-steel", "hv-conductor", "lv-conductor", "insulation", "tank", "oil", "hv-bushings"):
            assert code in codes
        assert bom.item("core-steel").category == BomCategory.CORE
        assert bom.quantity("hv-bushings") == 3
        assert bom.quantity("lv-bushings") == 4
        assert bom.quantity("radiators") == design.thermal.radiator_panels
        assert bom.quantity("fans") == 0
        assert bom.item("conservator").weight is None
        assert bom.total_insulation_weight == pytest.approx(0.15 * bom.total_conductor_weight)
        with pytest.raises(KeyError):
            bom.item("transformer-gnome")

    def test_frame(self, design):
        df = bom_frame(design.bom)
        assert len(df) == len(design.bom.items)
        assert list(df.columns) == ["code", "category", "description", "specification", "quantity", "unit", "weight_kg"]
        assert df.loc[df["code"] == "core-steel", "category"].item() == "core"
