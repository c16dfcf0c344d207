"""Command-line interface for standoff exposure projection using argparse."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from standoff.core.config import LOG_LEVELS, ProjectionConfig
from standoff.core.sources import (
    CylinderOrientation,
    RadiationSource,
    ReferenceMeasurement,
    make_source,
)
from standoff.io.scenario import Scenario, load_scenario, write_document
from standoff.physics.attenuation import InvalidInput


logger = logging.getLogger(__name__)

LOG_FORMAT = "%(levelname)s:%(name)s:%(message)s"


def _source_from_args(args: argparse.Namespace) -> RadiationSource:
    if args.shape == "cube":
        return make_source("cube", side=args.side, contact_exposure=args.contact)
    return make_source(
        "cylinder",
        diameter=args.diameter,
        height=args.height,
        orientation=args.orientation,
        contact_exposure=args.contact,
    )


def _print_table(payload: dict) -> None:
    source = payload["source"]
    mode = "calibrated" if payload["calibrated"] else "nominal"
    print(f"Source: {source['shape']} (r_s = {source['self_distance']:.4g} m)")
    print(f"Exponent n = {payload['exponent']:.4f} ({mode}), B = {payload['buildup']:.3f}")
    print(f"{'distance (m)':>14}  {'exposure':>12}")
    for distance, exposure in zip(payload["distances_m"], payload["exposures"]):
        print(f"{distance:>14.3f}  {exposure:>12.4g}")


def _emit(payload: dict, output: Optional[Path]) -> None:
    if output:
        write_document(output, payload)
        print(f"Wrote exposure projection to {output}")
    else:
        _print_table(payload)


def cmd_project(args: argparse.Namespace) -> None:
    defaults = ProjectionConfig()
    config = ProjectionConfig(
        buildup=defaults.buildup if args.buildup is None else args.buildup,
        distances=args.distances or defaults.distances,
        log_level=args.log_level,
    )
    reference = None
    if args.x30 is not None:
        reference = ReferenceMeasurement(x_30=args.x30, buildup=config.buildup)
    scenario = Scenario(source=_source_from_args(args), reference=reference, config=config)
    _emit(scenario.evaluate(), args.output)


def cmd_calibrate(args: argparse.Namespace) -> None:
    source = _source_from_args(args)
    buildup = ProjectionConfig().buildup if args.buildup is None else args.buildup
    n = source.estimate_n(args.x30, buildup)
    print(f"Calibrated exponent n = {n:.4f} (nominal {source.nominal_exponent})")


def cmd_run(args: argparse.Namespace) -> None:
    scenario = load_scenario(args.scenario_file)
    if args.log_level is None and scenario.config.log_level is not None:
        logging.getLogger().setLevel(scenario.config.logging_level)
    _emit(scenario.evaluate(), args.output)


def _add_source_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--shape", choices=["cube", "cylinder"], required=True)
    parser.add_argument("--contact", type=float, required=True, help="Contact exposure rate")
    parser.add_argument("--side", type=float, help="Cube side length (m)")
    parser.add_argument("--diameter", type=float, help="Cylinder diameter (m)")
    parser.add_argument("--height", type=float, help="Cylinder height (m)")
    parser.add_argument(
        "--orientation",
        choices=[o.value for o in CylinderOrientation],
        default=CylinderOrientation.SIDE.value,
    )
    parser.add_argument("--buildup", type=float, help="Buildup factor (default 1.05)")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Standoff exposure-rate projection from contact readings")
    parser.add_argument("--log-level", choices=LOG_LEVELS, help="Root log level (default WARNING)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    project = subparsers.add_parser("project", help="Project exposure to standoff distances")
    _add_source_arguments(project)
    project.add_argument("--x30", type=float, help="Exposure measured at 0.30 m, calibrates n")
    project.add_argument("--distances", type=float, nargs="+", help="Standoff distances (m)")
    project.add_argument("--output", type=Path)
    project.set_defaults(func=cmd_project)

    calibrate = subparsers.add_parser("calibrate", help="Calibrate n from a 0.30 m reading")
    _add_source_arguments(calibrate)
    calibrate.add_argument("--x30", type=float, required=True)
    calibrate.set_defaults(func=cmd_calibrate)

    run = subparsers.add_parser("run", help="Evaluate a JSON/YAML scenario file")
    run.add_argument("scenario_file", type=Path)
    run.add_argument("--output", type=Path)
    run.set_defaults(func=cmd_run)
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(format=LOG_FORMAT)
    logging.getLogger().setLevel(ProjectionConfig(log_level=args.log_level).logging_level)
    try:
        args.func(args)
    except InvalidInput as exc:
        logger.error("Invalid input: %s", exc)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
