"""
Wheel-soil contact mechanics.

This package provides:
- Radial and shear stress around the contact arc (Reece, Janosi-Hanamoto)
- Fixed-step integration into vertical load, resistance, thrust and torque
- The equilibrium entry-angle line search
- Entry-angle strategies, guarded arithmetic and the diagnostic observer

All calculations are single-wheel, single-pass terramechanics.
NOT a vehicle dynamics model.
"""

from terramech.physics.diagnostics import (
    DegeneracyKind,
    NumericDegeneracy,
    StressObserver,
    NullObserver,
    LoggingObserver,
    RecordingObserver,
    make_observer,
)
from terramech.physics.entry_angle import (
    EntryAngleStrategy,
    FixedAngle,
    SolvedAngle,
    build_strategy,
)
from terramech.physics.stress import (
    RadialBranch,
    StressField,
    radial_branch,
    reece_coefficient,
    reece_front_stress,
    reece_rear_stress,
)
from terramech.physics.integrator import (
    ContactIntegrator,
    vertical_step_count,
    arc_step_count,
)
from terramech.physics.line_search import (
    Bracket,
    EquilibriumSolver,
    LineSearchResult,
    SolverState,
    golden_step,
)

__all__ = [
    # Diagnostics
    "DegeneracyKind",
    "NumericDegeneracy",
    "StressObserver",
    "NullObserver",
    "LoggingObserver",
    "RecordingObserver",
    "make_observer",
    # Entry angle
    "EntryAngleStrategy",
    "FixedAngle",
    "SolvedAngle",
    "build_strategy",
    # Stress
    "RadialBranch",
    "StressField",
    "radial_branch",
    "reece_coefficient",
    "reece_front_stress",
    "reece_rear_stress",
    # Integration
    "ContactIntegrator",
    "vertical_step_count",
    "arc_step_count",
    # Line search
    "Bracket",
    "EquilibriumSolver",
    "LineSearchResult",
    "SolverState",
    "golden_step",
]
