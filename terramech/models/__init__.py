"""
Data models for the wheel-soil contact engine: soil parameters, geometry,
configuration, and the input/output documents.
"""

from terramech.models.soil import SoilParameterSet, TerrainClass, UnknownPresetError, list_presets
from terramech.models.config import (
    IntegrationConfig,
    SolverConfig,
    EntryAngleMode,
    EntryAnglePolicy,
)
from terramech.models.contact import ContactGeometry, StressSample, ReactionResult
from terramech.models.inputs import CustomSoilSpec, WheelSoilInputs, example_inputs
from terramech.models.outputs import (
    ReactionForces,
    ContactAnalysisResult,
    SlipSweepPoint,
    SlipSweepResult,
    StressProfilePoint,
    StressProfileResult,
    BracketReport,
    LineSearchReport,
)

__all__ = [
    "SoilParameterSet",
    "TerrainClass",
    "UnknownPresetError",
    "list_presets",
    "IntegrationConfig",
    "SolverConfig",
    "EntryAngleMode",
    "EntryAnglePolicy",
    "ContactGeometry",
    "StressSample",
    "ReactionResult",
    "CustomSoilSpec",
    "WheelSoilInputs",
    "example_inputs",
    "ReactionForces",
    "ContactAnalysisResult",
    "SlipSweepPoint",
    "SlipSweepResult",
    "StressProfilePoint",
    "StressProfileResult",
    "BracketReport",
    "LineSearchReport",
]
