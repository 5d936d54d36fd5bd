"""Pytest configuration and shared fixtures."""

import pytest

from transformer_design import DesignRequirements, compute_design
from transformer_design.costing import estimate_cost


def make_requirements(**overrides) -> DesignRequirements:
    """1500 kVA, 13.8 kV / 480 V, 60 Hz, Dyn11, M4, copper, ONAN."""
    data = dict(
        name="Pad-mount 1500",
        rated_power=1500.0,
        primary_voltage=13800.0,
        secondary_voltage=480.0,
        frequency=60.0,
        phases=3,
        vector_group="dyn11",
        target_impedance=5.75,
        cooling_class="onan",
        conductor_type="copper",
        steel_grade="m4",
        load_profile="medium",
        temperature_rise=65.0,
    )
    data.update(overrides)
    return DesignRequirements(**data)


@pytest.fixture(scope="session")
def requirements():
    return make_requirements()


@pytest.fixture(scope="session")
def design(requirements):
    return compute_design(requirements)


@pytest.fixture(scope="session")
def cost(design, requirements):
    return estimate_cost(design, requirements)


@pytest.fixture(scope="session")
def single_phase_requirements():
    """50 kVA pole-mount, 7.2 kV / 240 V."""
    return make_requirements(
        name="Pole-mount 50",
        rated_power=50.0,
        primary_voltage=7200.0,
        secondary_voltage=240.0,
        phases=1,
    )
