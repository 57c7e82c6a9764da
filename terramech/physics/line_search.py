"""
Equilibrium entry-angle search.

A two-phase, derivative-free 1-D minimisation over trial entry angles:

1. Bracketing: shrink the starting step until the objective decreases from
   zero, then walk a golden-ratio-scaled sequence of trial points forward
   until the objective stops decreasing.
2. Refinement: successive parabolic interpolation through the bracket
   until consecutive vertex estimates agree within tolerance.

Neither phase raises. Hitting an iteration cap is logged and the search
carries on with its best current estimate.
"""

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional

from terramech.models.config import IntegrationConfig, SolverConfig
from terramech.models.contact import ContactGeometry
from terramech.models.soil import SoilParameterSet
from terramech.physics.diagnostics import NullObserver, StressObserver
from terramech.physics.entry_angle import FixedAngle
from terramech.physics.integrator import ContactIntegrator
from terramech.physics.numerics import safe_div
from terramech.physics.stress import StressField

logger = logging.getLogger(__name__)

GOLDEN_RATIO = (1 + math.sqrt(5)) / 2

# Trial entry angles stay within a quarter turn so the integration grid stays bounded.
MAX_TRIAL_ANGLE = math.pi / 2

# Trial arcs narrower than two angular steps are split into two intervals, so
# every trial angle past the exit angle has an interior sample.
MIN_TRIAL_INTERVALS = 2


class SolverState(str, Enum):
    """Line search progress."""
    BRACKETING = "bracketing"
    REFINING = "refining"
    CONVERGED = "converged"
    MAX_ITERATIONS_REACHED = "max_iterations_reached"


@dataclass(frozen=True)
class Bracket:
    """Three trial angles with the minimum expected between lower and upper."""
    lower: float
    inner: float
    upper: float


@dataclass
class LineSearchResult:
    """Outcome and trace of one line search."""
    estimate: float
    bracket: Bracket
    state: SolverState
    step: float
    bracket_found: bool
    bracketing_iterations: int
    refinement_iterations: int
    target_load: Optional[float] = None
    brackets: list[Bracket] = field(default_factory=list)
    estimates: list[float] = field(default_factory=list)
    states: list[SolverState] = field(default_factory=list)

    @property
    def converged(self) -> bool:
        return self.state == SolverState.CONVERGED


def golden_step(q: int, delta: float) -> float:
    """
    Trial point q of the bracketing walk.

    alpha_q = delta + sum(delta * GOLDEN_RATIO**i for i < q)
    """
    alpha = delta
    for i in range(q):
        alpha += delta * GOLDEN_RATIO ** i
    return alpha


def parabola_coefficients(
    lower: float,
    inner: float,
    upper: float,
    f_lower: float,
    f_inner: float,
    f_upper: float,
    observer: Optional[StressObserver] = None,
) -> tuple[float, float]:
    """
    Divided-difference coefficients (A1, A2) of the quadratic through
    three points.
    """
    slope_inner = safe_div(f_inner - f_lower, inner - lower, "parabola_coefficients", observer)
    slope_upper = safe_div(f_upper - f_lower, upper - lower, "parabola_coefficients", observer)
    a2 = safe_div(slope_upper - slope_inner, upper - inner, "parabola_coefficients", observer)
    a1 = slope_inner - a2 * (lower + inner)
    return a1, a2


class EquilibriumSolver:
    """
    Line search for the entry angle that balances the contact patch.

    The objective at a trial angle alpha is the vertical load of a stress
    field pinned to alpha. Given a target load, the objective becomes the
    squared load error instead.
    """

    def __init__(
        self,
        soil: SoilParameterSet,
        config: Optional[SolverConfig] = None,
        integration: Optional[IntegrationConfig] = None,
        observer: Optional[StressObserver] = None,
    ):
        self.soil = soil
        self.config = config or SolverConfig()
        self.integration = integration or IntegrationConfig()
        self.observer = observer or NullObserver()

    def vertical_load(self, entry_angle: float, geometry: ContactGeometry) -> float:
        """
        Integrated vertical load with the contact arc ending at entry_angle [N].

        An arc that does not reach past the exit angle carries no load.
        """
        if entry_angle <= self.integration.exit_angle:
            return 0.0
        stress_field = StressField(self.soil, FixedAngle(entry_angle), self.integration, self.observer)
        integrator = ContactIntegrator(stress_field, min_intervals=MIN_TRIAL_INTERVALS)
        return integrator.vertical_stress(entry_angle, geometry)

    def objective(
        self,
        entry_angle: float,
        geometry: ContactGeometry,
        target_load: Optional[float] = None,
    ) -> float:
        load = self.vertical_load(entry_angle, geometry)
        if target_load is None:
            return load
        return (load - target_load) ** 2

    def _note(self, message: str) -> None:
        logger.info(message)
        self.observer.on_solver_note(message)

    def _vertex(self, bracket: Bracket, f: Callable[[float], float]) -> float:
        a1, a2 = parabola_coefficients(
            bracket.lower, bracket.inner, bracket.upper,
            f(bracket.lower), f(bracket.inner), f(bracket.upper),
            self.observer,
        )
        vertex = -safe_div(a1, 2 * a2, "parabola_vertex", self.observer)
        return min(max(0.0, vertex), MAX_TRIAL_ANGLE)

    def search(self, geometry: ContactGeometry, target_load: Optional[float] = None) -> LineSearchResult:
        """
        Run both phases and return the full trace.

        Args:
            geometry: Wheel geometry and slip
            target_load: Vertical load to balance (N), or None to minimise the load

        Returns:
            LineSearchResult with the final estimate, bracket and state
        """
        cap = self.config.max_iterations
        values: dict[float, float] = {}

        def f(alpha: float) -> float:
            if alpha not in values:
                values[alpha] = self.objective(alpha, geometry, target_load)
            return values[alpha]

        # Phase 1a - shrink the starting step until the objective decreases
        step = self.config.initial_step
        n = 0
        while f(0.0) < f(step) and n < cap:
            step /= 2
            n += 1

        # Phase 1b - golden section walk, zero as the first lower point
        states = [SolverState.BRACKETING]
        q = 0
        bracket = Bracket(0.0, golden_step(0, step), golden_step(1, step))
        brackets = [bracket]
        n = 1
        while (
            n < cap
            and golden_step(q + 2, step) <= MAX_TRIAL_ANGLE
            and f(golden_step(q, step)) > f(golden_step(q + 1, step))
        ):
            q += 1
            bracket = Bracket(golden_step(q - 1, step), golden_step(q, step), golden_step(q + 1, step))
            brackets.append(bracket)
            n += 1

        # Flat optimum, take one more step
        if f(golden_step(q, step)) == f(golden_step(q + 1, step)):
            q += 1
            bracket = Bracket(golden_step(q - 1, step), golden_step(q, step), golden_step(q + 1, step))
            brackets.append(bracket)

        bracket_found = f(bracket.inner) <= f(bracket.upper)
        if n == cap or not bracket_found:
            self._note("No bracket found in line search")
        bracketing_iterations = n

        # Phase 2 - polynomial interpolation
        states.append(SolverState.REFINING)
        n = 1
        alpha_bar = self._vertex(bracket, f)
        estimates = [alpha_bar]
        deviation = abs(alpha_bar - bracket.inner)

        if f(bracket.lower) == f(bracket.upper):
            # symmetric bracket, take the first minimum point
            alpha_bar = bracket.lower
            deviation = 0.0
        else:
            lower, inner, upper = bracket.lower, bracket.inner, bracket.upper
            while n < cap and deviation > self.config.tolerance:
                n += 1
                alpha_bar = self._vertex(Bracket(lower, inner, upper), f)
                estimates.append(alpha_bar)
                deviation = abs(alpha_bar - inner)

                if inner < alpha_bar:
                    if f(inner) < f(alpha_bar):
                        upper = alpha_bar
                    else:
                        lower, inner = inner, alpha_bar
                else:
                    if f(inner) < f(alpha_bar):
                        lower = alpha_bar
                    else:
                        upper, inner = inner, alpha_bar
            bracket = Bracket(lower, inner, upper)
            brackets.append(bracket)

        if bracket.lower == bracket.upper:
            bracket_found = False
            self._note("Line search bracket collapsed to a single point")

        if deviation <= self.config.tolerance:
            state = SolverState.CONVERGED
        else:
            state = SolverState.MAX_ITERATIONS_REACHED
            self._note(f"Line search stopped after {n} iterations, deviation {deviation:.4g}")

        logger.debug(
            "Line search %s: estimate %.6f rad after %d + %d iterations",
            state.value, alpha_bar, bracketing_iterations, n,
        )
        return LineSearchResult(
            estimate=alpha_bar,
            bracket=bracket,
            state=state,
            step=step,
            bracket_found=bracket_found,
            bracketing_iterations=bracketing_iterations,
            refinement_iterations=n,
            target_load=target_load,
            brackets=brackets,
            estimates=estimates,
            states=states + [state],
        )

    def line_search(self, geometry: ContactGeometry) -> float:
        """
        Reference behaviour: run the full search, discard its estimate and
        return the configured constant (20 degrees).
        """
        result = self.search(geometry)
        logger.debug(
            "Discarding line search estimate %.6f rad, returning %.6f rad",
            result.estimate, self.config.reference_angle,
        )
        return self.config.reference_angle
