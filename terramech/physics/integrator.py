"""
Fixed-step quadrature of the contact stress field (Wong 2010, eqs. 12.5-12.9).

Each reaction is its own full pass over the arc [exit_angle, entry_angle];
nothing is cached between them.

Two step-count conventions are in use and are kept apart on purpose:

- vertical load: steps = int(width / target), sampled at steps + 1 points
  with spacing width / steps
- resistance, thrust, torque: steps = int(width / target + 1), sampled at
  steps points with spacing width / (steps - 1)
"""

import logging
import math
from typing import Optional

from terramech.models.contact import ContactGeometry, ReactionResult, StressSample
from terramech.physics.numerics import safe_div
from terramech.physics.stress import StressField

logger = logging.getLogger(__name__)


def vertical_step_count(entry_angle: float, exit_angle: float, angular_step: float) -> int:
    """Truncate-then-use step count of the vertical load pass."""
    return int((entry_angle - exit_angle) / angular_step)


def arc_step_count(entry_angle: float, exit_angle: float, angular_step: float) -> int:
    """Add-one-then-truncate step count of the other three passes."""
    return int((entry_angle - exit_angle) / angular_step + 1)


class ContactIntegrator:
    """
    Integrates a StressField into vertical load, motion resistance,
    thrust and torque.

    The entry angle passed to each operation sets the integration domain.
    The stress shape itself comes from the field's own entry-angle strategy.

    With min_intervals > 0, arcs narrower than that many angular steps are
    split into min_intervals equal intervals instead of hitting a zero step
    count. Arcs at least that wide integrate exactly as with the default.
    """

    def __init__(self, field: StressField, min_intervals: int = 0):
        self.field = field
        self.min_intervals = min_intervals

    @property
    def angular_step(self) -> float:
        return self.field.integration.angular_step

    def vertical_steps(self, entry_angle: float) -> int:
        """Step count of the vertical load pass (sampled at steps + 1 points)."""
        steps = vertical_step_count(entry_angle, self.field.exit_angle(), self.angular_step)
        if self.min_intervals:
            return max(steps, self.min_intervals)
        return steps

    def arc_steps(self, entry_angle: float) -> int:
        """Step count of the other three passes (sampled at steps points)."""
        steps = arc_step_count(entry_angle, self.field.exit_angle(), self.angular_step)
        if self.min_intervals:
            return max(steps, self.min_intervals + 1)
        return steps

    def vertical_grid(self, entry_angle: float) -> tuple[list[float], float]:
        """Sample angles and spacing for the vertical load pass."""
        exit_angle = self.field.exit_angle()
        steps = self.vertical_steps(entry_angle)
        delta = safe_div(entry_angle - exit_angle, steps, "vertical_stress", self.field.observer)
        return [exit_angle + delta * i for i in range(steps + 1)], delta

    def arc_grid(self, entry_angle: float) -> tuple[list[float], float]:
        """Sample angles and spacing for the resistance, thrust and torque passes."""
        exit_angle = self.field.exit_angle()
        steps = self.arc_steps(entry_angle)
        delta = safe_div(entry_angle - exit_angle, steps - 1, "arc_integration", self.field.observer)
        return [exit_angle + delta * i for i in range(steps)], delta

    def vertical_stress(self, entry_angle: float, geometry: ContactGeometry) -> float:
        """
        Vertical load supported by the contact arc, W [N] (Wong 2010, eq. 12.5).

        Also the objective of the equilibrium line search.
        """
        field = self.field
        angles, delta = self.vertical_grid(entry_angle)
        total = 0.0
        for theta in angles:
            normal = field.radial_stress(theta, geometry)
            shear = field.shear_stress(theta, normal, geometry)
            field.observer.on_stress_sample(theta, normal, shear)
            if theta < 0:
                # rear part, exit -> 0
                total -= (normal * math.cos(theta) - shear * math.sin(theta)) * delta
            else:
                total += (normal * math.cos(theta) + shear * math.sin(theta)) * delta
        return geometry.tire_width * geometry.tire_radius / 2 * total

    def motion_resistance(self, entry_angle: float, geometry: ContactGeometry) -> float:
        """External motion resistance from the normal stress, R [N] (Wong 2010, eq. 12.6)."""
        angles, delta = self.arc_grid(entry_angle)
        total = 0.0
        for theta in angles:
            normal = self.field.radial_stress(theta, geometry)
            # sin() carries the sign on the rear arc
            total += normal * math.sin(theta) * delta
        return geometry.tire_width * geometry.tire_radius / 2 * total

    def thrust(self, entry_angle: float, geometry: ContactGeometry) -> float:
        """Thrust from the horizontal shear component, F [N] (Wong 2010, eq. 12.7)."""
        field = self.field
        angles, delta = self.arc_grid(entry_angle)
        total = 0.0
        for theta in angles:
            normal = field.radial_stress(theta, geometry)
            shear = field.shear_stress(theta, normal, geometry)
            if theta > 0:
                total += shear * math.cos(theta) * delta
            else:
                total -= shear * math.cos(theta) * delta
        return geometry.tire_width * geometry.tire_radius / 2 * total

    def torque(self, entry_angle: float, geometry: ContactGeometry) -> float:
        """Driving torque from the shear stress, M [N*m] (Wong 2010, eq. 12.9)."""
        field = self.field
        angles, delta = self.arc_grid(entry_angle)
        total = 0.0
        for theta in angles:
            normal = field.radial_stress(theta, geometry)
            shear = field.shear_stress(theta, normal, geometry)
            if theta > 0:
                total += shear * delta
            else:
                total -= shear * delta
        return geometry.tire_width * geometry.tire_radius ** 2 / 4 * total

    def evaluate(self, geometry: ContactGeometry, entry_angle: Optional[float] = None) -> ReactionResult:
        """
        Run all four passes.

        Args:
            geometry: Wheel geometry and slip
            entry_angle: Integration domain end; defaults to the field's entry angle
        """
        if entry_angle is None:
            entry_angle = self.field.entry_angle(geometry)
        logger.debug("Integrating contact arc [%.4f, %.4f] rad", self.field.exit_angle(), entry_angle)
        return ReactionResult(
            vertical_load=self.vertical_stress(entry_angle, geometry),
            motion_resistance=self.motion_resistance(entry_angle, geometry),
            thrust=self.thrust(entry_angle, geometry),
            torque=self.torque(entry_angle, geometry),
        )

    def profile(self, geometry: ContactGeometry, samples: int = 51) -> list[StressSample]:
        """
        Stress distribution on a uniform grid over the contact arc.

        Args:
            geometry: Wheel geometry and slip
            samples: Number of points, endpoints included (at least 2)
        """
        if samples < 2:
            raise ValueError("Profile needs at least 2 samples")
        exit_angle = self.field.exit_angle()
        entry_angle = self.field.entry_angle(geometry)
        delta = (entry_angle - exit_angle) / (samples - 1)
        angles = [exit_angle + delta * i for i in range(samples - 1)] + [entry_angle]
        return [self.field.sample(theta, geometry) for theta in angles]
