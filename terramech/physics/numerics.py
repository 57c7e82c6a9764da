"""
Guarded arithmetic for the stress and integration loops.

A degenerate operation (zero divisor, negative base raised to a fractional
exponent, overflowing exponential) never raises inside the engine. It is
logged as a warning, forwarded to the observer and replaced by a fallback
value of zero, so one bad geometry cannot take down a simulation frame.
"""

import logging
import math
from typing import Optional

from terramech.physics.diagnostics import DegeneracyKind, NumericDegeneracy, StressObserver

logger = logging.getLogger(__name__)

FALLBACK = 0.0


def report_degeneracy(
    kind: DegeneracyKind,
    where: str,
    detail: str,
    observer: Optional[StressObserver] = None,
) -> float:
    """
    Record a degeneracy and return the fallback value.

    Args:
        kind: Category of the anomaly
        where: Name of the operation that hit it
        detail: Operand values, for the log line
        observer: Optional diagnostic sink

    Returns:
        The fallback value (0.0)
    """
    event = NumericDegeneracy(kind=kind, where=where, detail=detail, fallback=FALLBACK)
    logger.warning("Numeric degeneracy: %s", event.describe())
    if observer is not None:
        observer.on_degeneracy(event)
    return FALLBACK


def safe_div(
    numerator: float,
    denominator: float,
    where: str,
    observer: Optional[StressObserver] = None,
) -> float:
    """Divide, falling back to zero on a zero denominator."""
    if denominator == 0:
        return report_degeneracy(
            DegeneracyKind.ZERO_DIVISOR,
            where,
            f"{numerator!r} / {denominator!r}",
            observer,
        )
    return numerator / denominator


def safe_pow(
    base: float,
    exponent: float,
    where: str,
    observer: Optional[StressObserver] = None,
) -> float:
    """Real power, falling back to zero where the result is not a finite real."""
    try:
        return math.pow(base, exponent)
    except ValueError:
        # negative base with fractional exponent, or 0 to a negative power
        return report_degeneracy(
            DegeneracyKind.FRACTIONAL_POWER,
            where,
            f"{base!r} ** {exponent!r}",
            observer,
        )
    except OverflowError:
        return report_degeneracy(
            DegeneracyKind.OVERFLOW,
            where,
            f"{base!r} ** {exponent!r}",
            observer,
        )
