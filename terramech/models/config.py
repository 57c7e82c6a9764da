"""
Configuration constants for the integrator, the line search and the
entry-angle policy.

These are injected into each engine instance rather than held as module
globals, so several terrain/vehicle configurations can run side by side.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from terramech.units import degrees


class IntegrationConfig(BaseModel):
    """Angular discretisation of the contact arc."""
    angular_step_deg: float = Field(
        default=10.0,
        gt=0,
        description="Nominal angular increment target in degrees",
    )
    exit_angle_deg: float = Field(
        default=-5.0,
        description="Fixed exit (rear) angle of the contact arc in degrees",
    )

    model_config = {"frozen": True}

    @property
    def angular_step(self) -> float:
        """Nominal angular increment in radians."""
        return degrees(self.angular_step_deg)

    @property
    def exit_angle(self) -> float:
        """Exit angle in radians."""
        return degrees(self.exit_angle_deg)


class SolverConfig(BaseModel):
    """Constants of the bracketing + parabolic interpolation line search."""
    initial_step: float = Field(
        default=0.1,
        gt=0,
        description="Starting trial step in radians, halved until the objective decreases",
    )
    max_iterations: int = Field(
        default=100,
        gt=0,
        description="Iteration cap shared by the bracketing and refinement phases",
    )
    tolerance: float = Field(
        default=0.01,
        gt=0,
        description="Convergence tolerance on successive vertex estimates (rad)",
    )
    reference_angle_deg: float = Field(
        default=20.0,
        description="Constant returned by the reference line search",
    )

    model_config = {"frozen": True}

    @property
    def reference_angle(self) -> float:
        return degrees(self.reference_angle_deg)


class EntryAngleMode(str, Enum):
    """How the contact entry angle is chosen."""
    FIXED = "fixed"
    SOLVED = "solved"


class EntryAnglePolicy(BaseModel):
    """
    Selects the entry-angle strategy.

    `fixed` uses a constant angle (45 degrees unless overridden).
    `solved` runs the equilibrium line search, optionally against a
    target vertical load.
    """
    mode: EntryAngleMode = Field(default=EntryAngleMode.FIXED, description="Strategy selector")
    fixed_angle_deg: float = Field(
        default=45.0,
        description="Entry angle for the fixed strategy in degrees",
    )
    target_load_N: Optional[float] = Field(
        default=None,
        description="Vertical load the solved strategy balances (N). "
                    "If None the search minimises the integrated vertical load.",
    )

    model_config = {"frozen": True}

    @property
    def fixed_angle(self) -> float:
        return degrees(self.fixed_angle_deg)
