"""
Pytest configuration and shared fixtures.
"""

import pytest

from terramech.models.contact import ContactGeometry
from terramech.models.inputs import WheelSoilInputs
from terramech.models.soil import SoilParameterSet
from terramech.physics.diagnostics import RecordingObserver
from terramech.physics.integrator import ContactIntegrator
from terramech.physics.stress import StressField


@pytest.fixture
def sandy_soil() -> SoilParameterSet:
    """Provide the sandy preset."""
    return SoilParameterSet.from_preset("sandy")


@pytest.fixture
def loam_soil() -> SoilParameterSet:
    """Provide the loam preset."""
    return SoilParameterSet.from_preset("loam")


@pytest.fixture
def frictionless_soil() -> SoilParameterSet:
    """Purely cohesive soil (phi = 0)."""
    return SoilParameterSet.custom(
        "Frictionless",
        k1=2.0,
        k2=17659.75,
        n=0.77,
        cohesion=130.0,
        friction_angle_deg=0.0,
        shear_modulus=0.038,
        density=1600.0,
    )


@pytest.fixture
def scenario_a() -> ContactGeometry:
    """Small rover wheel on sand at 20% slip."""
    return ContactGeometry(tire_width=0.2, tire_radius=0.3, contact_length=0.1, slip_ratio=0.2)


@pytest.fixture
def scenario_b() -> ContactGeometry:
    """Larger wheel at 10% slip."""
    return ContactGeometry(tire_width=0.4, tire_radius=0.5, contact_length=0.2, slip_ratio=0.1)


@pytest.fixture
def recorder() -> RecordingObserver:
    """In-memory diagnostic sink."""
    return RecordingObserver()


@pytest.fixture
def sandy_field(sandy_soil, recorder) -> StressField:
    """Sandy stress field with the default 45 degree entry angle."""
    return StressField(sandy_soil, observer=recorder)


@pytest.fixture
def sandy_integrator(sandy_field) -> ContactIntegrator:
    return ContactIntegrator(sandy_field)


@pytest.fixture
def scenario_a_inputs() -> WheelSoilInputs:
    """Scenario A as an input document."""
    return WheelSoilInputs(
        soil="sandy",
        tire_width_m=0.2,
        tire_radius_m=0.3,
        contact_length_m=0.1,
        slip_ratio=0.2,
    )
