import json

import pandas as pd
import pytest

from transformer_design.cli import main

REQUIREMENTS = {
    "name": "Pad-mount 1500",
    "rated_power": 1500,
    "primary_voltage": 13800,
    "secondary_voltage": 480,
    "frequency": 60,
    "phases": 3,
    "vector_group": "dyn11",
    "target_impedance": 5.75,
    "cooling_class": "onan",
    "conductor_type": "copper",
    "steel_grade": "m4",
}


@pytest.fixture
def paths(tmp_path):
    def _write(data):
        p = tmp_path / "req.json"
        p.write_text(json.dumps(data))
        return p

    return tmp_path, _write


def test_full_run(paths, capsys):
    tmp_path, write = paths
    req = write(REQUIREMENTS)
    design_out = tmp_path / "design.json"
    cost_out = tmp_path / "cost.json"
    bom_out = tmp_path / "bom.csv"
    listing_out = tmp_path / "listing.json"

    code = main(
        [
            "-i", str(req),
            "-o", str(design_out),
            "--cost-output", str(cost_out),
            "--bom-csv", str(bom_out),
            "--listing-output", str(listing_out),
            "--oil-type", "naturalEster",
        ]
    )
    assert code == 0

    design = json.loads(design_out.read_text())
    assert design["requirements"]["rated_power"] == 1500.0
    assert design["hv_winding"]["turns"] == 792

    costs = json.loads(cost_out.read_text())
    assert costs["cost"]["oil_type"] == "naturalEster"
    assert costs["lifecycle"]["initial_cost"] == costs["cost"]["total_cost"]

    bom = pd.read_csv(bom_out)
    assert "core-steel" in set(bom["code"])

    listing = json.loads(listing_out.read_text())
    assert listing["estimated_cost"] == costs["cost"]["total_cost"]

    out = capsys.readouterr().out
    assert "Pad-mount 1500" in out
    assert "Lifecycle" in out


def test_profile_override(paths):
    tmp_path, write = paths
    req = write(REQUIREMENTS)
    profile = tmp_path / "profile.json"
    profile.write_text(json.dumps({"name": "lossy", "building_factor": 1.3}))
    out = tmp_path / "design.json"
    code = main(["-i", str(req), "--profile", str(profile), "-o", str(out), "--cost-output", str(tmp_path / "c.json")])
    assert code == 0


def test_warnings_exit_code(paths, capsys):
    tmp_path, write = paths
    req = write({**REQUIREMENTS, "target_impedance": 2.0})
    code = main(["-i", str(req), "-o", str(tmp_path / "d.json"), "--cost-output", str(tmp_path / "c.json")])
    assert code == 1
    assert "Impedance" in capsys.readouterr().err


def test_missing_input(tmp_path, capsys):
    assert main(["-i", str(tmp_path / "nope.json")]) == 2
    assert "Input error" in capsys.readouterr().err


def test_schema_error(paths, capsys):
    _, write = paths
    data = {k: v for k, v in REQUIREMENTS.items() if k != "rated_power"}
    assert main(["-i", str(write(data))]) == 2
    assert "validation" in capsys.readouterr().err


def test_design_error(paths, capsys):
    tmp_path, write = paths
    req = write({**REQUIREMENTS, "rated_power": 0})
    assert main(["-i", str(req), "-o", str(tmp_path / "d.json")]) == 2
    assert "rated_power" in capsys.readouterr().err


def test_bad_cost_option(paths, capsys):
    tmp_path, write = paths
    req = write(REQUIREMENTS)
    code = main(["-i", str(req), "-o", str(tmp_path / "d.json"), "--region", "atlantis"])
    assert code == 2
    assert "region" in capsys.readouterr().err


def test_infinite_rating(paths, capsys):
    tmp_path, write = paths
    req = write({**REQUIREMENTS, "rated_power": float("inf")})
    assert main(["-i", str(req), "-o", str(tmp_path / "d.json")]) == 2
    assert "rated_power" in capsys.readouterr().err
