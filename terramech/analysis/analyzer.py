"""
Contact analysis facade.

Builds the stress field, integrator and solver for one set of wheel/soil
inputs and turns their results into output documents.
"""

from typing import Optional

from terramech.models.config import EntryAngleMode
from terramech.models.inputs import WheelSoilInputs
from terramech.models.outputs import (
    BracketReport,
    ContactAnalysisResult,
    LineSearchReport,
    ReactionForces,
    SlipSweepPoint,
    SlipSweepResult,
    StressProfilePoint,
    StressProfileResult,
)
from terramech.physics.diagnostics import RecordingObserver, make_observer
from terramech.physics.entry_angle import build_strategy
from terramech.physics.integrator import ContactIntegrator
from terramech.physics.line_search import MIN_TRIAL_INTERVALS, EquilibriumSolver
from terramech.physics.stress import StressField
from terramech.units import rad_to_deg

ASSUMPTIONS = [
    "Rigid wheel on homogeneous soil, single pass (no compaction memory)",
    "Reece pressure-sinkage with front/rear stress forms switching at the peak-stress angle",
    "Janosi-Hanamoto shear with longitudinal modulus Kx only",
    "Fixed exit angle; entry angle from the configured strategy",
    "Fixed-step rectangle-sum quadrature over the contact arc",
]


class ContactAnalyzer:
    """
    Runs contact analyses for one wheel on one terrain.

    Raises UnknownPresetError at construction when the input names a soil
    preset that is not in the catalog.
    """

    # Slip ratios sampled by a sweep when none are given
    SLIP_SAMPLES = [-0.2, 0.0, 0.1, 0.2, 0.3, 0.4, 0.5, 0.7, 0.9]

    def __init__(self, inputs: WheelSoilInputs):
        """
        Initialize analyzer with wheel/soil inputs.

        Args:
            inputs: Terrain, tire geometry, slip and engine configuration
        """
        self.inputs = inputs
        self.soil = inputs.get_soil()
        self.geometry = inputs.geometry()
        self.recorder = RecordingObserver(forward_to=make_observer(inputs.diagnostics))
        self.strategy = build_strategy(inputs.entry_angle, inputs.solver)
        self.field = StressField(self.soil, self.strategy, inputs.integration, self.recorder)
        # a solved angle is integrated on the grid the search balanced it on
        solved = inputs.entry_angle.mode == EntryAngleMode.SOLVED
        self.integrator = ContactIntegrator(self.field, MIN_TRIAL_INTERVALS if solved else 0)

    def analyze(self) -> ContactAnalysisResult:
        """Integrate the four reactions at the input slip ratio."""
        self.recorder.clear()
        geometry = self.geometry
        entry = self.strategy.resolve(self.field, geometry)
        exit_ = self.field.exit_angle()
        reactions = self.integrator.evaluate(geometry, entry)

        return ContactAnalysisResult(
            soil_name=self.soil.name,
            classification=self.soil.classification.value,
            slip_ratio=geometry.slip_ratio,
            entry_angle_mode=self.inputs.entry_angle.mode.value,
            entry_angle_deg=rad_to_deg(entry),
            exit_angle_deg=rad_to_deg(exit_),
            peak_stress_angle_deg=rad_to_deg(self.field.max_radial_stress_angle(geometry.slip_ratio)),
            vertical_step_count=self.integrator.vertical_steps(entry),
            arc_step_count=self.integrator.arc_steps(entry),
            reactions=ReactionForces.from_result(reactions),
            warnings=self.recorder.warnings(),
            assumptions=list(ASSUMPTIONS),
        )

    def run_sweep(self, slip_ratios: Optional[list[float]] = None) -> SlipSweepResult:
        """
        Evaluate the reactions across a range of slip ratios.

        Args:
            slip_ratios: Slip ratios to evaluate (defaults to SLIP_SAMPLES)
        """
        self.recorder.clear()
        slips = list(slip_ratios) if slip_ratios else list(self.SLIP_SAMPLES)
        points = []
        for slip in slips:
            geometry = self.geometry.with_slip(slip)
            entry = self.strategy.resolve(self.field, geometry)
            reactions = self.integrator.evaluate(geometry, entry)
            points.append(
                SlipSweepPoint(
                    slip_ratio=slip,
                    entry_angle_deg=rad_to_deg(entry),
                    reactions=ReactionForces.from_result(reactions),
                )
            )

        peak = max(points, key=lambda p: p.reactions.drawbar_pull_N, default=None)
        return SlipSweepResult(
            soil_name=self.soil.name,
            slip_ratios_swept=slips,
            points=points,
            peak_drawbar_pull_slip=peak.slip_ratio if peak is not None else None,
            warnings=self.recorder.warnings(),
        )

    def stress_profile(self, samples: int = 51) -> StressProfileResult:
        """Radial and shear stress on a uniform grid over the contact arc."""
        self.recorder.clear()
        geometry = self.geometry
        entry = self.strategy.resolve(self.field, geometry)
        profile = self.integrator.profile(geometry, samples)
        return StressProfileResult(
            soil_name=self.soil.name,
            slip_ratio=geometry.slip_ratio,
            entry_angle_deg=rad_to_deg(entry),
            exit_angle_deg=rad_to_deg(self.field.exit_angle()),
            peak_stress_angle_deg=rad_to_deg(self.field.max_radial_stress_angle(geometry.slip_ratio)),
            points=[StressProfilePoint.from_sample(s) for s in profile],
            warnings=self.recorder.warnings(),
        )

    def solve(self, target_load: Optional[float] = None) -> LineSearchReport:
        """
        Run the equilibrium line search and report its trace.

        Args:
            target_load: Vertical load to balance (N). Falls back to the
                         input policy's target, then to load minimisation.
        """
        self.recorder.clear()
        if target_load is None:
            target_load = self.inputs.entry_angle.target_load_N

        solver = EquilibriumSolver(
            self.soil,
            config=self.inputs.solver,
            integration=self.inputs.integration,
            observer=self.recorder,
        )
        result = solver.search(self.geometry, target_load)
        load = solver.vertical_load(result.estimate, self.geometry)

        return LineSearchReport(
            soil_name=self.soil.name,
            slip_ratio=self.geometry.slip_ratio,
            target_load_N=target_load,
            estimate_deg=rad_to_deg(result.estimate),
            reference_angle_deg=self.inputs.solver.reference_angle_deg,
            vertical_load_at_estimate_N=load,
            state=result.state.value,
            states=[s.value for s in result.states],
            converged=result.converged,
            bracket_found=result.bracket_found,
            initial_step_rad=result.step,
            bracketing_iterations=result.bracketing_iterations,
            refinement_iterations=result.refinement_iterations,
            bracket=BracketReport(
                lower_deg=rad_to_deg(result.bracket.lower),
                inner_deg=rad_to_deg(result.bracket.inner),
                upper_deg=rad_to_deg(result.bracket.upper),
            ),
            estimates_deg=[rad_to_deg(a) for a in result.estimates],
            warnings=self.recorder.warnings(),
        )
