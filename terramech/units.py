"""
Unit registry and helpers for dimensional conversions.

Uses pint so angle and pressure conversions at the edges of the model
(soil catalog, request documents, console output) are explicit.
"""

import math

import pint

# Create a shared unit registry for the entire application
ureg = pint.UnitRegistry()

# Shorthand for creating quantities
Q_ = ureg.Quantity


def deg_to_rad(angle_deg: float) -> float:
    """Convert an angle in degrees to radians."""
    return Q_(angle_deg, "degree").to("radian").magnitude


def rad_to_deg(angle_rad: float) -> float:
    """Convert an angle in radians to degrees."""
    return Q_(angle_rad, "radian").to("degree").magnitude


def pa_to_kpa(pressure_pa: float) -> float:
    return Q_(pressure_pa, "pascal").to("kilopascal").magnitude


def degrees(angle_deg: float) -> float:
    """
    Plain-float degree to radian conversion for model constants.

    Constants that feed step-count truncation use this path so the
    arithmetic is exactly `angle * (pi / 180)`.
    """
    return math.radians(angle_deg)
