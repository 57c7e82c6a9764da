"""
Value types exchanged between the stress field, the integrator and callers.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ContactGeometry:
    """
    Wheel geometry and kinematics for one evaluation.

    No bounds are enforced: the engine takes whatever the vehicle model
    supplies.
    """
    tire_width: float       # b [m]
    tire_radius: float      # r [m]
    contact_length: float   # pressure-plate main dimension [m]
    slip_ratio: float       # conventionally in [-1, 1]

    def with_slip(self, slip_ratio: float) -> "ContactGeometry":
        """Copy of this geometry at another slip ratio."""
        return ContactGeometry(
            tire_width=self.tire_width,
            tire_radius=self.tire_radius,
            contact_length=self.contact_length,
            slip_ratio=slip_ratio,
        )


@dataclass(frozen=True)
class StressSample:
    """Radial and shear stress at one contact angle."""
    angle: float          # [rad]
    radial_stress: float  # [Pa]
    shear_stress: float   # [Pa]


@dataclass(frozen=True)
class ReactionResult:
    """Integrated reactions over the full contact arc."""
    vertical_load: float      # W [N]
    motion_resistance: float  # R [N]
    thrust: float             # F [N]
    torque: float             # M [N*m]

    @property
    def drawbar_pull(self) -> float:
        """Net tractive force: thrust minus motion resistance [N]."""
        return self.thrust - self.motion_resistance
