"""
Command-line interface for the wheel-soil contact engine.

Usage:
    python -m terramech presets
    python -m terramech make-example [--output example_input.json]
    python -m terramech analyze --input example.json [--output results.json] [--readable]
    python -m terramech sweep --input example.json [--slips -0.2 0 0.2 0.5]
    python -m terramech profile --input example.json [--samples 51]
    python -m terramech solve --input example.json [--target-load 500]
    python -m terramech serve [--port 8000]
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional

from terramech import __version__
from terramech.analysis.analyzer import ContactAnalyzer
from terramech.cli import readable_output
from terramech.models.inputs import WheelSoilInputs, example_inputs
from terramech.models.soil import SoilParameterSet, UnknownPresetError, list_presets

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="terramech",
        description="Wheel-soil contact patch engine - reaction forces of a rigid wheel "
                    "on deformable terrain (Reece / Janosi-Hanamoto).",
    )
    parser.add_argument("--version", action="version", version=f"terramech {__version__}")
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log at DEBUG level (per-sample stresses when diagnostics are on)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # presets command
    subparsers.add_parser(
        "presets",
        help="List the built-in soil presets",
    )

    # make-example command
    example_parser = subparsers.add_parser(
        "make-example",
        help="Generate an example input JSON file",
    )
    example_parser.add_argument(
        "--output", "-o",
        type=Path,
        default=Path("example_input.json"),
        help="Output path for example file (default: example_input.json)",
    )

    # analysis commands share --input/--output/--readable
    def add_io(sub: argparse.ArgumentParser) -> None:
        sub.add_argument(
            "--input", "-i",
            type=Path,
            required=True,
            help="Path to JSON input file with wheel and soil parameters",
        )
        sub.add_argument(
            "--output", "-o",
            type=Path,
            default=None,
            help="Path to save JSON output (prints to stdout if not specified)",
        )
        sub.add_argument(
            "--readable",
            action="store_true",
            help="Print a human-readable summary instead of JSON",
        )

    analyze_parser = subparsers.add_parser(
        "analyze",
        help="Integrate vertical load, motion resistance, thrust and torque",
    )
    add_io(analyze_parser)

    sweep_parser = subparsers.add_parser(
        "sweep",
        help="Evaluate the reactions across a range of slip ratios",
    )
    add_io(sweep_parser)
    sweep_parser.add_argument(
        "--slips",
        type=float,
        nargs="+",
        default=None,
        help="Slip ratios to evaluate (default: built-in range)",
    )

    profile_parser = subparsers.add_parser(
        "profile",
        help="Sample radial and shear stress over the contact arc",
    )
    add_io(profile_parser)
    profile_parser.add_argument(
        "--samples",
        type=int,
        default=51,
        help="Number of angles sampled from exit to entry (default: 51)",
    )

    solve_parser = subparsers.add_parser(
        "solve",
        help="Run the equilibrium line search for the entry angle",
    )
    add_io(solve_parser)
    solve_parser.add_argument(
        "--target-load",
        type=float,
        default=None,
        help="Vertical load to balance in N (default: minimise the integrated load)",
    )

    # serve command
    serve_parser = subparsers.add_parser(
        "serve",
        help="Start the FastAPI web server",
    )
    serve_parser.add_argument(
        "--host",
        default="127.0.0.1",
        help="Host to bind to (default: 127.0.0.1)",
    )
    serve_parser.add_argument(
        "--port", "-p",
        type=int,
        default=8000,
        help="Port to listen on (default: 8000)",
    )
    serve_parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload for development",
    )

    return parser


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def load_inputs(path: Path) -> WheelSoilInputs:
    """Read and validate an input document."""
    with open(path) as f:
        input_data = json.load(f)
    return WheelSoilInputs(**input_data)


def _emit(model, args: argparse.Namespace, printer) -> None:
    """Write a result as JSON (file or stdout), or print it readably."""
    if args.readable and args.output is None:
        printer(model)
        return

    output_json = model.model_dump_json(indent=2)
    if args.output:
        with open(args.output, "w") as f:
            f.write(output_json)
        print(f"\nResults saved to {args.output}", file=sys.stderr)
    else:
        print(output_json)


def _run(args: argparse.Namespace, action) -> int:
    """Load inputs, run an analyzer action and map failures to exit codes."""
    try:
        inputs = load_inputs(args.input)
        analyzer = ContactAnalyzer(inputs)
        print(f"\nTerrain: {analyzer.soil.name} | slip {inputs.slip_ratio:.2f}", file=sys.stderr)
        action(analyzer)
        return 0

    except FileNotFoundError as e:
        print(f"Error: Input file not found: {e.filename}", file=sys.stderr)
        return 1
    except json.JSONDecodeError as e:
        print(f"Error: Invalid JSON in {args.input}: {e}", file=sys.stderr)
        return 1
    except UnknownPresetError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"Validation Error: {e}", file=sys.stderr)
        return 1


def cmd_presets(args: argparse.Namespace) -> int:
    """List the built-in soil presets."""
    for name in list_presets():
        soil = SoilParameterSet.from_preset(name)
        print(
            f"{name:<8} {soil.name:<18} k1={soil.k1:g} k2={soil.k2:g} n={soil.n:g} "
            f"c={soil.cohesion:g} Pa phi={soil.friction_angle_deg:.1f} deg "
            f"K={soil.shear_modulus_x:g} m rho={soil.density:g} kg/m^3"
        )
    return 0


def cmd_make_example(args: argparse.Namespace) -> int:
    """Generate an example input JSON file."""
    output_json = example_inputs().model_dump_json(indent=2)

    with open(args.output, "w") as f:
        f.write(output_json)

    print(f"Created example input file: {args.output}")
    print("\nRun an analysis with:")
    print(f"  python -m terramech analyze --input {args.output}")

    return 0


def cmd_analyze(args: argparse.Namespace) -> int:
    """Integrate the contact reactions."""
    def action(analyzer: ContactAnalyzer) -> None:
        result = analyzer.analyze()
        _emit(result, args, readable_output.print_analysis)
        print(
            f"\nSummary: W={result.reactions.vertical_load_N:.1f} N, "
            f"DP={result.reactions.drawbar_pull_N:.1f} N",
            file=sys.stderr,
        )
        for w in result.warnings:
            print(f"  - {w}", file=sys.stderr)

    return _run(args, action)


def cmd_sweep(args: argparse.Namespace) -> int:
    """Run a slip sweep."""
    def action(analyzer: ContactAnalyzer) -> None:
        result = analyzer.run_sweep(args.slips)
        _emit(result, args, readable_output.print_sweep)
        print(f"\nSweep Summary: {len(result.points)} slip ratios", file=sys.stderr)

    return _run(args, action)


def cmd_profile(args: argparse.Namespace) -> int:
    """Sample the stress distribution."""
    def action(analyzer: ContactAnalyzer) -> None:
        result = analyzer.stress_profile(args.samples)
        _emit(result, args, readable_output.print_profile)

    return _run(args, action)


def cmd_solve(args: argparse.Namespace) -> int:
    """Run the equilibrium line search."""
    def action(analyzer: ContactAnalyzer) -> None:
        report = analyzer.solve(args.target_load)
        _emit(report, args, readable_output.print_line_search)
        print(f"\nLine search: {report.state} at {report.estimate_deg:.3f} deg", file=sys.stderr)

    return _run(args, action)


def cmd_serve(args: argparse.Namespace) -> int:
    """Start the FastAPI web server."""
    import uvicorn

    print("\nStarting Terramech Contact API", file=sys.stderr)
    print(f"API: http://{args.host}:{args.port}/", file=sys.stderr)
    print(f"Docs: http://{args.host}:{args.port}/docs", file=sys.stderr)
    print("\nPress Ctrl+C to stop\n", file=sys.stderr)

    uvicorn.run(
        "terramech.api.server:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
    )
    return 0


def cli(argv: Optional[list[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    configure_logging(args.verbose)

    commands = {
        "presets": cmd_presets,
        "make-example": cmd_make_example,
        "analyze": cmd_analyze,
        "sweep": cmd_sweep,
        "profile": cmd_profile,
        "solve": cmd_solve,
        "serve": cmd_serve,
    }

    handler = commands.get(args.command)
    if handler:
        logger.debug("Running command %s", args.command)
        return handler(args)
    else:
        parser.print_help()
        return 1


def main():
    """Console script entrypoint wrapper."""
    return cli()


if __name__ == "__main__":
    sys.exit(cli())
