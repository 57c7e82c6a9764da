"""
Diagnostic side channel for the contact-patch engine.

The stress field and the integrator report per-sample values and numeric
degeneracies to a StressObserver. The default observer does nothing, so the
numeric core stays a pure function of its inputs; LoggingObserver routes the
same events to the standard logging module.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

logger = logging.getLogger(__name__)


class DegeneracyKind(str, Enum):
    """Kinds of in-loop numerical degeneracy."""
    ZERO_DIVISOR = "zero_divisor"
    FRACTIONAL_POWER = "fractional_power"
    OVERFLOW = "overflow"


@dataclass(frozen=True)
class NumericDegeneracy:
    """A recoverable numeric anomaly, replaced by a fallback value."""
    kind: DegeneracyKind
    where: str
    detail: str
    fallback: float = 0.0

    def describe(self) -> str:
        return f"{self.kind.value} in {self.where}: {self.detail} (using {self.fallback})"


class StressObserver:
    """
    Receiver for diagnostic events.

    Subclass and override the hooks you care about; every hook is a no-op
    by default.
    """

    def on_stress_sample(self, angle: float, radial_stress: float, shear_stress: float) -> None:
        pass

    def on_shear_displacement(self, angle: float, displacement: float) -> None:
        pass

    def on_degeneracy(self, event: NumericDegeneracy) -> None:
        pass

    def on_solver_note(self, message: str) -> None:
        pass


class NullObserver(StressObserver):
    """Observer that discards every event."""


class LoggingObserver(StressObserver):
    """Observer that writes every event to a logger at DEBUG level."""

    def __init__(self, log: Optional[logging.Logger] = None):
        self.log = log or logger

    def on_stress_sample(self, angle, radial_stress, shear_stress):
        self.log.debug("Normal stress at %.6f rad = %.6g Pa", angle, radial_stress)
        self.log.debug("Shear stress at %.6f rad = %.6g Pa", angle, shear_stress)

    def on_shear_displacement(self, angle, displacement):
        self.log.debug("Shear displacement at %.6f rad = %.6g m", angle, displacement)

    def on_degeneracy(self, event):
        self.log.debug("Degeneracy event: %s", event.describe())

    def on_solver_note(self, message):
        self.log.debug("Line search: %s", message)


class RecordingObserver(StressObserver):
    """
    Observer that keeps events in memory and optionally forwards them.

    Used by the analyzer to turn degeneracies into result warnings, and by
    tests to inspect the diagnostic stream.
    """

    def __init__(self, forward_to: Optional[StressObserver] = None):
        self.forward_to = forward_to or NullObserver()
        self.samples: list[tuple[float, float, float]] = []
        self.displacements: list[tuple[float, float]] = []
        self.degeneracies: list[NumericDegeneracy] = []
        self.notes: list[str] = []

    def clear(self) -> None:
        self.samples.clear()
        self.displacements.clear()
        self.degeneracies.clear()
        self.notes.clear()

    def warnings(self) -> list[str]:
        """Distinct degeneracy descriptions followed by solver notes, in first-seen order."""
        seen = dict.fromkeys(event.describe() for event in self.degeneracies)
        return list(seen) + list(dict.fromkeys(self.notes))

    def on_stress_sample(self, angle, radial_stress, shear_stress):
        self.samples.append((angle, radial_stress, shear_stress))
        self.forward_to.on_stress_sample(angle, radial_stress, shear_stress)

    def on_shear_displacement(self, angle, displacement):
        self.displacements.append((angle, displacement))
        self.forward_to.on_shear_displacement(angle, displacement)

    def on_degeneracy(self, event):
        self.degeneracies.append(event)
        self.forward_to.on_degeneracy(event)

    def on_solver_note(self, message):
        self.notes.append(message)
        self.forward_to.on_solver_note(message)


def make_observer(diagnostics: bool) -> StressObserver:
    """Pick the observer for a diagnostics on/off switch."""
    return LoggingObserver() if diagnostics else NullObserver()
