"""
Soil material constants for the Reece / Janosi-Hanamoto terrain model.

A SoilParameterSet is built once per terrain assignment and shared read-only
by every stress evaluation on that terrain.
"""

from enum import Enum

from pydantic import BaseModel, Field

from terramech.units import deg_to_rad, rad_to_deg


class TerrainClass(str, Enum):
    """Terrain classification of a soil parameter set."""
    SANDY_BRENDAN = "sandy"
    YOLO_LOAM_BRENDAN = "loam"
    CUSTOM = "custom"


class UnknownPresetError(KeyError):
    """Raised when a soil preset name is not in the catalog."""

    def __init__(self, name: str, known: list[str]):
        self.name = name
        self.known = known
        super().__init__(name)

    def __str__(self) -> str:
        return f"Unknown soil preset '{self.name}'. Known presets: {', '.join(self.known)}"


class SoilParameterSet(BaseModel):
    """
    Immutable material constants for one terrain.

    Pressure-sinkage follows the Reece form, shear follows Janosi-Hanamoto.
    The friction angle is always stored in radians.

    No physical validation is done here. Negative or otherwise nonphysical
    values are accepted and show up downstream as numeric degeneracies.
    """
    name: str = Field(..., description="Terrain name")
    classification: TerrainClass = Field(
        default=TerrainClass.CUSTOM,
        description="Preset classification, or custom",
    )
    k1: float = Field(..., description="Reece cohesive pressure-sinkage coefficient [-]")
    k2: float = Field(..., description="Reece frictional pressure-sinkage coefficient [-]")
    n: float = Field(..., description="Pressure-sinkage exponent [-]")
    cohesion: float = Field(..., description="Cohesion [Pa]")
    friction_angle: float = Field(..., description="Angle of shearing resistance [rad]")
    shear_modulus_x: float = Field(..., description="Longitudinal shear deformation modulus Kx [m]")
    shear_modulus_y: float = Field(..., description="Lateral shear deformation modulus Ky [m]")
    density: float = Field(..., description="Soil density [kg/m^3]")

    model_config = {"frozen": True}

    @classmethod
    def from_preset(cls, name: str) -> "SoilParameterSet":
        """
        Look up a soil from the preset catalog.

        Accepts the short preset name ("sandy"), the enum member name
        ("SANDY_BRENDAN") or the legacy catalog name ("SandyBrendan"),
        case-insensitively.

        Raises:
            UnknownPresetError: if the name matches no preset
        """
        key = _normalize_preset_name(name)
        if key not in _PRESETS:
            raise UnknownPresetError(name, list_presets())
        return _PRESETS[key]

    @classmethod
    def custom(
        cls,
        name: str,
        k1: float,
        k2: float,
        n: float,
        cohesion: float,
        friction_angle_deg: float,
        shear_modulus: float,
        density: float,
    ) -> "SoilParameterSet":
        """
        Build a user-defined soil.

        Args:
            name: Terrain name
            k1: Reece coefficient [-]
            k2: Reece coefficient [-]
            n: Reece exponent [-]
            cohesion: Cohesion [Pa]
            friction_angle_deg: Angle of shearing resistance in DEGREES
            shear_modulus: Shear deformation parameter, used for Kx and Ky [m]
            density: Soil density [kg/m^3]
        """
        return cls(
            name=name,
            classification=TerrainClass.CUSTOM,
            k1=k1,
            k2=k2,
            n=n,
            cohesion=cohesion,
            friction_angle=deg_to_rad(friction_angle_deg),
            shear_modulus_x=shear_modulus,
            shear_modulus_y=shear_modulus,
            density=density,
        )

    @property
    def friction_angle_deg(self) -> float:
        """Friction angle in degrees, for display."""
        return rad_to_deg(self.friction_angle)


def _preset(
    classification: TerrainClass,
    name: str,
    k1: float,
    k2: float,
    n: float,
    cohesion: float,
    friction_angle_deg: float,
    shear_modulus: float,
    density: float,
) -> SoilParameterSet:
    soil = SoilParameterSet.custom(
        name, k1, k2, n, cohesion, friction_angle_deg, shear_modulus, density
    )
    return soil.model_copy(update={"classification": classification})


# Chan (2008) soil data sets
_PRESETS: dict[str, SoilParameterSet] = {
    TerrainClass.SANDY_BRENDAN.value: _preset(
        TerrainClass.SANDY_BRENDAN, "SandyBrendan",
        k1=2.0, k2=17659.75, n=0.77, cohesion=130.0,
        friction_angle_deg=31.1, shear_modulus=0.038, density=1600.0,
    ),
    TerrainClass.YOLO_LOAM_BRENDAN.value: _preset(
        TerrainClass.YOLO_LOAM_BRENDAN, "YoloLoamBrendan",
        k1=3.25, k2=4600.0, n=0.99, cohesion=22670.0,
        friction_angle_deg=22.0, shear_modulus=0.015, density=1258.0,
    ),
}

_ALIASES = {
    "sandybrendan": TerrainClass.SANDY_BRENDAN.value,
    "sandy_brendan": TerrainClass.SANDY_BRENDAN.value,
    "yololoambrendan": TerrainClass.YOLO_LOAM_BRENDAN.value,
    "yolo_loam_brendan": TerrainClass.YOLO_LOAM_BRENDAN.value,
}


def _normalize_preset_name(name: str) -> str:
    key = name.strip().lower()
    return _ALIASES.get(key, key)


def list_presets() -> list[str]:
    """Names of all soil presets in the catalog."""
    return list(_PRESETS.keys())
