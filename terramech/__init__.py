"""
Wheel-soil contact patch engine (terramech)

Classical terramechanics for a rigid wheel rolling and slipping on
deformable soil: Reece pressure-sinkage and Janosi-Hanamoto shear stress
around the contact arc, integrated into vertical load, motion resistance,
thrust and driving torque.

Usage:
    python -m terramech presets
    python -m terramech make-example
    python -m terramech analyze --input example_input.json
    python -m terramech sweep --input example_input.json
    python -m terramech serve --port 8000
"""

__version__ = "0.1.0"
__author__ = "Terramech Project"

from terramech.models.soil import SoilParameterSet, TerrainClass, UnknownPresetError
from terramech.models.contact import ContactGeometry, ReactionResult, StressSample
from terramech.models.inputs import WheelSoilInputs
from terramech.physics.stress import StressField
from terramech.physics.integrator import ContactIntegrator
from terramech.physics.line_search import EquilibriumSolver
from terramech.physics.entry_angle import FixedAngle, SolvedAngle
from terramech.analysis.analyzer import ContactAnalyzer

__all__ = [
    "SoilParameterSet",
    "TerrainClass",
    "UnknownPresetError",
    "ContactGeometry",
    "ReactionResult",
    "StressSample",
    "WheelSoilInputs",
    "StressField",
    "ContactIntegrator",
    "EquilibriumSolver",
    "FixedAngle",
    "SolvedAngle",
    "ContactAnalyzer",
]
