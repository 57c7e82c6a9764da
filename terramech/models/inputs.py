"""
Input models for a wheel-soil contact analysis.

These models carry what the surrounding vehicle model supplies per wheel:
terrain, tire geometry, slip ratio, plus the engine configuration.
"""

from typing import Union

from pydantic import BaseModel, Field

from terramech.models.config import EntryAnglePolicy, IntegrationConfig, SolverConfig
from terramech.models.contact import ContactGeometry
from terramech.models.soil import SoilParameterSet


class CustomSoilSpec(BaseModel):
    """
    User-defined soil, as written in an input document.

    The friction angle is given in degrees and converted once when the
    parameter set is built.
    """
    name: str = Field(..., description="Terrain name")
    k1: float = Field(..., description="Reece coefficient k1 [-]")
    k2: float = Field(..., description="Reece coefficient k2 [-]")
    n: float = Field(..., description="Reece exponent n [-]")
    cohesion_Pa: float = Field(..., description="Cohesion [Pa]")
    friction_angle_deg: float = Field(..., description="Angle of shearing resistance [deg]")
    shear_modulus_m: float = Field(..., description="Shear deformation modulus Kx = Ky [m]")
    density_kg_m3: float = Field(..., description="Soil density [kg/m^3]")

    def to_soil(self) -> SoilParameterSet:
        return SoilParameterSet.custom(
            self.name,
            k1=self.k1,
            k2=self.k2,
            n=self.n,
            cohesion=self.cohesion_Pa,
            friction_angle_deg=self.friction_angle_deg,
            shear_modulus=self.shear_modulus_m,
            density=self.density_kg_m3,
        )


class WheelSoilInputs(BaseModel):
    """
    One wheel on one terrain.

    Geometry is passed through unchecked; the engine itself enforces no
    bounds on width, radius, contact length or slip.
    """

    soil: Union[str, CustomSoilSpec] = Field(
        default="sandy",
        description="Preset soil name, or a custom soil definition",
    )

    # Tire geometry
    tire_width_m: float = Field(..., description="Tire width b in meters")
    tire_radius_m: float = Field(..., description="Tire radius r in meters")
    contact_length_m: float = Field(
        ...,
        description="Pressure-plate main dimension (contact length proxy) in meters",
    )

    # Kinematics
    slip_ratio: float = Field(
        default=0.0,
        description="Longitudinal slip ratio, conventionally in [-1, 1]",
    )

    # Engine configuration
    entry_angle: EntryAnglePolicy = Field(
        default_factory=EntryAnglePolicy,
        description="How the contact entry angle is chosen",
    )
    integration: IntegrationConfig = Field(
        default_factory=IntegrationConfig,
        description="Angular discretisation of the contact arc",
    )
    solver: SolverConfig = Field(
        default_factory=SolverConfig,
        description="Line search constants",
    )
    diagnostics: bool = Field(
        default=False,
        description="Log per-sample stress values at DEBUG level",
    )

    def get_soil(self) -> SoilParameterSet:
        """
        Resolve the soil definition.

        Raises:
            UnknownPresetError: if a preset name is not in the catalog
        """
        if isinstance(self.soil, CustomSoilSpec):
            return self.soil.to_soil()
        return SoilParameterSet.from_preset(self.soil)

    def geometry(self) -> ContactGeometry:
        return ContactGeometry(
            tire_width=self.tire_width_m,
            tire_radius=self.tire_radius_m,
            contact_length=self.contact_length_m,
            slip_ratio=self.slip_ratio,
        )

    model_config = {
        "json_schema_extra": {
            "example": {
                "soil": "sandy",
                "tire_width_m": 0.2,
                "tire_radius_m": 0.3,
                "contact_length_m": 0.1,
                "slip_ratio": 0.2,
                "entry_angle": {"mode": "fixed", "fixed_angle_deg": 45.0},
                "integration": {"angular_step_deg": 10.0, "exit_angle_deg": -5.0},
                "diagnostics": False,
            }
        }
    }


def example_inputs() -> WheelSoilInputs:
    """Scenario used by `make-example` and the /example endpoint."""
    return WheelSoilInputs(
        soil="sandy",
        tire_width_m=0.2,
        tire_radius_m=0.3,
        contact_length_m=0.1,
        slip_ratio=0.2,
    )
