"""
Output models for wheel-soil contact analyses.

These are the documents returned by the CLI and the HTTP API.
"""

from typing import Optional

from pydantic import BaseModel, Field

from terramech.models.contact import ReactionResult, StressSample
from terramech.units import rad_to_deg


class ReactionForces(BaseModel):
    """
    Integrated contact reactions.

    Forces in Newtons, torque in Newton-meters.
    """
    vertical_load_N: float = Field(..., description="Vertical load W supported by the contact arc")
    motion_resistance_N: float = Field(..., description="External motion resistance R")
    thrust_N: float = Field(..., description="Thrust F from the soil shear stress")
    torque_Nm: float = Field(..., description="Driving torque M from the soil shear stress")
    drawbar_pull_N: float = Field(..., description="Net tractive force F - R")

    @classmethod
    def from_result(cls, result: ReactionResult) -> "ReactionForces":
        return cls(
            vertical_load_N=result.vertical_load,
            motion_resistance_N=result.motion_resistance,
            thrust_N=result.thrust,
            torque_Nm=result.torque,
            drawbar_pull_N=result.drawbar_pull,
        )


class ContactAnalysisResult(BaseModel):
    """Reactions of one wheel at one slip ratio, with the arc it was integrated over."""
    soil_name: str = Field(..., description="Terrain name")
    classification: str = Field(..., description="Preset classification or 'custom'")
    slip_ratio: float = Field(..., description="Slip ratio used")
    entry_angle_mode: str = Field(..., description="Entry angle strategy: fixed or solved")
    entry_angle_deg: float = Field(..., description="Contact entry angle [deg]")
    exit_angle_deg: float = Field(..., description="Contact exit angle [deg]")
    peak_stress_angle_deg: float = Field(..., description="Angle of maximum radial stress [deg]")
    vertical_step_count: int = Field(..., description="Step count of the vertical load pass")
    arc_step_count: int = Field(..., description="Step count of the resistance/thrust/torque passes")
    reactions: ReactionForces = Field(..., description="Integrated reactions")
    warnings: list[str] = Field(
        default_factory=list,
        description="Numeric degeneracies met during the analysis",
    )
    assumptions: list[str] = Field(
        default_factory=list,
        description="Modelling assumptions behind the numbers",
    )


class SlipSweepPoint(BaseModel):
    """Reactions at one slip ratio of a sweep."""
    slip_ratio: float
    entry_angle_deg: float
    reactions: ReactionForces


class SlipSweepResult(BaseModel):
    """Reactions across a range of slip ratios."""
    soil_name: str = Field(..., description="Terrain name")
    slip_ratios_swept: list[float] = Field(..., description="Slip ratios evaluated")
    points: list[SlipSweepPoint] = Field(..., description="Reactions per slip ratio")
    peak_drawbar_pull_slip: Optional[float] = Field(
        default=None,
        description="Slip ratio with the largest drawbar pull",
    )
    warnings: list[str] = Field(default_factory=list)


class StressProfilePoint(BaseModel):
    """Stress at one angle of the contact arc."""
    angle_deg: float
    radial_stress_Pa: float
    shear_stress_Pa: float

    @classmethod
    def from_sample(cls, sample: StressSample) -> "StressProfilePoint":
        return cls(
            angle_deg=rad_to_deg(sample.angle),
            radial_stress_Pa=sample.radial_stress,
            shear_stress_Pa=sample.shear_stress,
        )


class StressProfileResult(BaseModel):
    """Stress distribution over the contact arc."""
    soil_name: str
    slip_ratio: float
    entry_angle_deg: float
    exit_angle_deg: float
    peak_stress_angle_deg: float
    points: list[StressProfilePoint]
    warnings: list[str] = Field(default_factory=list)

    @property
    def peak_radial_stress_Pa(self) -> float:
        return max((p.radial_stress_Pa for p in self.points), default=0.0)


class BracketReport(BaseModel):
    """A line search bracket in degrees."""
    lower_deg: float
    inner_deg: float
    upper_deg: float


class LineSearchReport(BaseModel):
    """Trace of one equilibrium line search."""
    soil_name: str
    slip_ratio: float
    target_load_N: Optional[float] = Field(
        default=None,
        description="Target vertical load, or None when the load itself is minimised",
    )
    estimate_deg: float = Field(..., description="Solved entry angle [deg]")
    reference_angle_deg: float = Field(
        ...,
        description="Constant the reference line search returns in place of the estimate",
    )
    vertical_load_at_estimate_N: float = Field(..., description="Vertical load with the arc ending at the estimate")
    state: str = Field(..., description="Final solver state")
    states: list[str] = Field(default_factory=list, description="Solver state transitions")
    converged: bool
    bracket_found: bool
    initial_step_rad: float
    bracketing_iterations: int
    refinement_iterations: int
    bracket: BracketReport
    estimates_deg: list[float] = Field(default_factory=list, description="Successive vertex estimates")
    warnings: list[str] = Field(default_factory=list)
