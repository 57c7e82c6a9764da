"""
Helpers to turn analysis outputs into a compact, human-readable console
summary.
"""

from __future__ import annotations

from typing import Any

from terramech.models.outputs import (
    ContactAnalysisResult,
    LineSearchReport,
    SlipSweepResult,
    StressProfileResult,
)
from terramech.units import pa_to_kpa


def _fmt_float(value: Any, unit: str = "", zero_default: str = "n/a") -> str:
    """Safely format a float with optional unit suffix."""
    try:
        fval = float(value)
    except (TypeError, ValueError):
        return zero_default
    suffix = f" {unit}" if unit else ""
    if abs(fval) >= 100:
        return f"{fval:,.0f}{suffix}"
    return f"{fval:.2f}{suffix}"


def _print_warnings(warnings: list[str], max_items: int = 5) -> None:
    if not warnings:
        return
    print(f"Warnings ({len(warnings)}):")
    for w in warnings[:max_items]:
        print(f"  ! {w}")
    if len(warnings) > max_items:
        print(f"  ... {len(warnings) - max_items} more")


def print_analysis(result: ContactAnalysisResult) -> None:
    """Render a single contact analysis."""
    r = result.reactions
    print(f"Soil: {result.soil_name} ({result.classification}) | slip {result.slip_ratio:.2f}")
    print(
        f"Arc: exit {_fmt_float(result.exit_angle_deg, 'deg')} -> "
        f"entry {_fmt_float(result.entry_angle_deg, 'deg')} ({result.entry_angle_mode}), "
        f"peak stress at {_fmt_float(result.peak_stress_angle_deg, 'deg')}"
    )
    print(f"Steps: vertical {result.vertical_step_count} | arc {result.arc_step_count}")
    print("-" * 60)
    print(f"  Vertical load      {_fmt_float(r.vertical_load_N, 'N')}")
    print(f"  Motion resistance  {_fmt_float(r.motion_resistance_N, 'N')}")
    print(f"  Thrust             {_fmt_float(r.thrust_N, 'N')}")
    print(f"  Drawbar pull       {_fmt_float(r.drawbar_pull_N, 'N')}")
    print(f"  Torque             {_fmt_float(r.torque_Nm, 'N*m')}")
    print("-" * 60)
    _print_warnings(result.warnings)


def print_sweep(result: SlipSweepResult) -> None:
    """Render a slip sweep as a table."""
    print(f"Soil: {result.soil_name}")
    print(f"{'slip':>6} {'entry deg':>10} {'W [N]':>12} {'R [N]':>12} {'F [N]':>12} {'M [N*m]':>12}")
    for p in result.points:
        r = p.reactions
        print(
            f"{p.slip_ratio:>6.2f} {p.entry_angle_deg:>10.2f} {r.vertical_load_N:>12.1f} "
            f"{r.motion_resistance_N:>12.1f} {r.thrust_N:>12.1f} {r.torque_Nm:>12.1f}"
        )
    if result.peak_drawbar_pull_slip is not None:
        print(f"Peak drawbar pull at slip {result.peak_drawbar_pull_slip:.2f}")
    _print_warnings(result.warnings)


def print_profile(result: StressProfileResult) -> None:
    """Render a stress profile as a table."""
    print(f"Soil: {result.soil_name} | slip {result.slip_ratio:.2f}")
    print(f"Peak radial stress {_fmt_float(pa_to_kpa(result.peak_radial_stress_Pa), 'kPa')}")
    print(f"{'angle deg':>10} {'sigma [kPa]':>14} {'tau [kPa]':>14}")
    for p in result.points:
        print(
            f"{p.angle_deg:>10.2f} {pa_to_kpa(p.radial_stress_Pa):>14.3f} "
            f"{pa_to_kpa(p.shear_stress_Pa):>14.3f}"
        )
    _print_warnings(result.warnings)


def print_line_search(report: LineSearchReport) -> None:
    """Render a line search trace."""
    target = _fmt_float(report.target_load_N, "N", zero_default="minimise load")
    print(f"Soil: {report.soil_name} | slip {report.slip_ratio:.2f} | target {target}")
    print(f"State: {' -> '.join(report.states)}")
    print(
        f"Bracket: [{report.bracket.lower_deg:.3f}, {report.bracket.inner_deg:.3f}, "
        f"{report.bracket.upper_deg:.3f}] deg (found: {report.bracket_found})"
    )
    print(
        f"Iterations: bracketing {report.bracketing_iterations} | "
        f"refinement {report.refinement_iterations}"
    )
    print(f"Estimate: {report.estimate_deg:.3f} deg (reference returns {report.reference_angle_deg:.1f} deg)")
    print(f"Vertical load at estimate: {_fmt_float(report.vertical_load_at_estimate_N, 'N')}")
    _print_warnings(report.warnings)
