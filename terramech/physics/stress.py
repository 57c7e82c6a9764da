"""
Stress distribution around the wheel-soil contact arc.

Radial stress follows the Reece pressure-sinkage relation split into a front
arc (peak angle to entry angle) and a rear arc (exit angle to peak angle),
after Chan (2008) eqs. 4.14 / 4.15. Shear stress follows Janosi-Hanamoto
mobilisation of the Mohr-Coulomb capacity (Wong 2010, eqs. 5.2 / 5.16).

Angles are measured from the vertical below the axle, positive towards the
direction of travel. The contact arc spans [exit_angle, entry_angle].
"""

import logging
import math
from enum import Enum
from typing import Optional

from terramech.models.config import IntegrationConfig
from terramech.models.contact import ContactGeometry, StressSample
from terramech.models.soil import SoilParameterSet
from terramech.physics.diagnostics import DegeneracyKind, NullObserver, StressObserver
from terramech.physics.entry_angle import EntryAngleStrategy, FixedAngle
from terramech.physics.numerics import report_degeneracy, safe_div, safe_pow

logger = logging.getLogger(__name__)


class RadialBranch(str, Enum):
    """Which Reece form applies at an angle."""
    FRONT = "front"
    REAR = "rear"


def radial_branch(angle: float, peak_angle: float) -> RadialBranch:
    """Front form at and ahead of the peak angle, rear form behind it."""
    return RadialBranch.FRONT if angle >= peak_angle else RadialBranch.REAR


def reece_coefficient(
    soil: SoilParameterSet,
    geometry: ContactGeometry,
    observer: Optional[StressObserver] = None,
) -> float:
    """
    Sinkage-independent part of the Reece equation.

    (c*k1 + rho*l*k2) * (r / l)^n, where l is the pressure-plate dimension.
    """
    plate = geometry.contact_length
    ratio = safe_div(geometry.tire_radius, plate, "reece_coefficient", observer)
    return (soil.cohesion * soil.k1 + soil.density * plate * soil.k2) * safe_pow(
        ratio, soil.n, "reece_coefficient", observer
    )


def reece_front_stress(
    angle: float,
    entry_angle: float,
    coefficient: float,
    n: float,
    observer: Optional[StressObserver] = None,
) -> float:
    """Front-arc radial stress, sinkage proxy cos(angle) - cos(entry)."""
    sinkage = math.cos(angle) - math.cos(entry_angle)
    return coefficient * safe_pow(sinkage, n, "radial_stress_front", observer)


def reece_rear_stress(
    angle: float,
    entry_angle: float,
    exit_angle: float,
    peak_angle: float,
    coefficient: float,
    n: float,
    observer: Optional[StressObserver] = None,
) -> float:
    """
    Rear-arc radial stress.

    The rear arc [exit, peak] is mapped linearly onto [entry, peak] of the
    front shape, so both forms meet at the peak angle.
    """
    fraction = safe_div(angle - exit_angle, peak_angle - exit_angle, "radial_stress_rear", observer)
    mapped = entry_angle - fraction * (entry_angle - peak_angle)
    sinkage = math.cos(mapped) - math.cos(entry_angle)
    return coefficient * safe_pow(sinkage, n, "radial_stress_rear", observer)


class StressField:
    """
    Stress evaluation for one soil under one entry-angle strategy.

    Stateless apart from its read-only collaborators; safe to share between
    threads as long as the observer is.
    """

    def __init__(
        self,
        soil: SoilParameterSet,
        strategy: Optional[EntryAngleStrategy] = None,
        integration: Optional[IntegrationConfig] = None,
        observer: Optional[StressObserver] = None,
    ):
        self.soil = soil
        self.strategy = strategy or FixedAngle()
        self.integration = integration or IntegrationConfig()
        self.observer = observer or NullObserver()

    def exit_angle(self) -> float:
        """Fixed rear contact angle (Chan 2008, p. 82)."""
        return self.integration.exit_angle

    def entry_angle(self, geometry: ContactGeometry) -> float:
        """Front contact angle, as chosen by the strategy."""
        return self.strategy.entry_angle(self, geometry)

    def max_radial_stress_angle(self, slip_ratio: float) -> float:
        """
        Angle of peak radial stress, where the front and rear forms switch.

        Closed-form root of the matching condition (Chan 2008, eq. 4.17),
        clamped to [0, phi/3]. A negative discriminant has no real root and
        puts the peak at 0.
        """
        phi = self.soil.friction_angle
        s = slip_ratio
        k = math.tan(math.pi / 4 - phi / 2)
        k2 = k ** 2
        k4 = k ** 4
        discriminant = k4 * s ** 2 - 2 * k4 * s + k4 + k2 * s ** 2 - 2 * k2 * s

        if discriminant < 0:
            logger.debug("No real peak-stress root for slip %.4f, using 0 rad", s)
            angle = 0.0
        else:
            root = math.sqrt(discriminant)
            denominator = (s - 1) * (k2 + 1)
            y = -safe_div(k2 - root, k * denominator, "max_radial_stress_angle", self.observer)
            x = -safe_div(root + 1, denominator, "max_radial_stress_angle", self.observer)
            angle = abs(math.atan2(abs(y), abs(x)))

        return min(max(angle, 0.0), phi / 3)

    def radial_stress_front(self, angle: float, geometry: ContactGeometry) -> float:
        """Radial stress from the front Reece form (Chan 2008, eq. 4.14) [Pa]."""
        return reece_front_stress(
            angle,
            self.entry_angle(geometry),
            reece_coefficient(self.soil, geometry, self.observer),
            self.soil.n,
            self.observer,
        )

    def radial_stress_rear(self, angle: float, geometry: ContactGeometry) -> float:
        """Radial stress from the rear Reece form (Chan 2008, eq. 4.15) [Pa]."""
        return reece_rear_stress(
            angle,
            self.entry_angle(geometry),
            self.exit_angle(),
            self.max_radial_stress_angle(geometry.slip_ratio),
            reece_coefficient(self.soil, geometry, self.observer),
            self.soil.n,
            self.observer,
        )

    def radial_stress(self, angle: float, geometry: ContactGeometry) -> float:
        """
        Radial stress at a contact angle [Pa].

        Zero outside [exit_angle, entry_angle].
        """
        if not self.exit_angle() <= angle <= self.entry_angle(geometry):
            return 0.0

        branch = radial_branch(angle, self.max_radial_stress_angle(geometry.slip_ratio))
        if branch is RadialBranch.FRONT:
            return self.radial_stress_front(angle, geometry)
        return self.radial_stress_rear(angle, geometry)

    def max_shear(self, normal_stress: float) -> float:
        """Mohr-Coulomb shear strength c + sigma*tan(phi) [Pa]."""
        return self.soil.cohesion + normal_stress * math.tan(self.soil.friction_angle)

    def shear_displacement(self, angle: float, geometry: ContactGeometry) -> float:
        """
        Janosi shear displacement accumulated from the entry angle [m].

        j = r * ((theta_e - theta) - (1 - s) * (sin(theta_e) - sin(theta)))
        """
        entry = self.entry_angle(geometry)
        return geometry.tire_radius * (
            (entry - angle) - (1.0 - geometry.slip_ratio) * (math.sin(entry) - math.sin(angle))
        )

    def shear_stress(self, angle: float, normal_stress: float, geometry: ContactGeometry) -> float:
        """Janosi-Hanamoto shear stress s_max * (1 - exp(-j / Kx)) [Pa]."""
        displacement = self.shear_displacement(angle, geometry)
        self.observer.on_shear_displacement(angle, displacement)
        exponent = safe_div(-displacement, self.soil.shear_modulus_x, "shear_stress", self.observer)
        try:
            mobilised = 1.0 - math.exp(exponent)
        except OverflowError:
            # the shear stress itself falls back, not the exponential
            return report_degeneracy(DegeneracyKind.OVERFLOW, "shear_stress", f"exp({exponent!r})", self.observer)
        return self.max_shear(normal_stress) * mobilised

    def sample(self, angle: float, geometry: ContactGeometry) -> StressSample:
        """Radial and shear stress at one angle."""
        radial = self.radial_stress(angle, geometry)
        shear = self.shear_stress(angle, radial, geometry)
        self.observer.on_stress_sample(angle, radial, shear)
        return StressSample(angle=angle, radial_stress=radial, shear_stress=shear)
