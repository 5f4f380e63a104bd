"""Command line driver: compute yield-surface geometry and export it.

Examples::

    yieldviz mc 10 30                        # summary of c=10 kPa, φ=30°
    yieldviz dp --preset "Von Mises (m=0)" --format all --out exports/
    yieldviz presets MohrCoulomb
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from yieldviz.errors import YieldVizError
from yieldviz.io import snapshot, write_envelope_csv, write_sections_dxf, write_snapshot_json, write_stl
from yieldviz.logging_config import setup_logging
from yieldviz.models import generate_surface_mesh, get_meridian_envelope, get_pi_plane_section
from yieldviz.params import (
    DruckerPragerParams,
    MaterialParameters,
    ModelKind,
    MohrCoulombParams,
    validate_parameters,
)
from yieldviz.presets import get_preset, list_presets
from yieldviz.settings import GeometrySettings, load_settings

logger = logging.getLogger(__name__)

FORMATS = ("json", "csv", "stl", "dxf")

_MODEL_COMMANDS = {
    "mc": ModelKind.MOHR_COULOMB,
    "dp": ModelKind.DRUCKER_PRAGER,
}


def _add_common_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--preset", default=None,
                        help="Use a named preset instead of explicit parameters.")
    parser.add_argument("--out", type=Path, default=None,
                        help="Directory for exported files (default: current directory).")
    parser.add_argument(
        "--format",
        choices=list(FORMATS) + ["all"],
        action="append",
        help="Export format(s) to generate. Repeat this flag for multiple outputs.",
    )
    parser.add_argument("--config", type=Path, default=None,
                        help="YAML settings file (default: $YIELDVIZ_CONFIG or built-ins).")
    parser.add_argument("--p0", type=float, default=None,
                        help="Mean stress of the π-plane section (kPa).")
    parser.add_argument("--p-max", type=float, default=None, dest="p_max",
                        help="Upper mean stress of the surface and meridians (kPa).")
    parser.add_argument("--overwrite", action="store_true",
                        help="Allow replacing existing files in the output directory.")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="yieldviz",
        description="Mohr-Coulomb and Drucker-Prager yield surface geometry.",
    )
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="Increase log output (-v info, -vv debug).")
    sub = parser.add_subparsers(dest="command", required=True)

    mc = sub.add_parser("mc", help="Mohr-Coulomb surface from cohesion and friction angle.")
    mc.add_argument("cohesion", type=float, nargs="?", help="Cohesion c (kPa).")
    mc.add_argument("friction_angle", type=float, nargs="?", help="Friction angle φ (degrees).")
    _add_common_options(mc)

    dp = sub.add_parser("dp", help="Drucker-Prager surface from slope and intercept.")
    dp.add_argument("slope", type=float, nargs="?", help="Slope m of q = m p + k_d.")
    dp.add_argument("intercept", type=float, nargs="?", help="Cohesion intercept k_d (kPa).")
    _add_common_options(dp)

    presets = sub.add_parser("presets", help="List the available material presets.")
    presets.add_argument("kind", nargs="?", default=None,
                         help="Restrict to one model (MohrCoulomb, DruckerPrager, mc, dp).")
    return parser


def _resolve_params(args: argparse.Namespace) -> MaterialParameters:
    kind = _MODEL_COMMANDS[args.command]
    if kind is ModelKind.MOHR_COULOMB:
        values = (args.cohesion, args.friction_angle)
    else:
        values = (args.slope, args.intercept)

    if args.preset:
        if any(v is not None for v in values):
            raise YieldVizError("give either --preset or explicit parameters, not both")
        return get_preset(kind, args.preset).params
    if any(v is None for v in values):
        raise YieldVizError(f"'{args.command}' needs two parameters or --preset NAME")
    if kind is ModelKind.MOHR_COULOMB:
        return MohrCoulombParams(cohesion=values[0], friction_angle_deg=values[1])
    return DruckerPragerParams(slope=values[0], cohesion_intercept=values[1])


def _resolve_settings(args: argparse.Namespace) -> GeometrySettings:
    settings = load_settings(args.config)
    changes = {}
    if args.p0 is not None:
        changes["pi_plane_p"] = args.p0
    if args.p_max is not None:
        changes["p_max"] = args.p_max
    return settings.replace(**changes) if changes else settings


def _requested_formats(args: argparse.Namespace) -> List[str]:
    requested = set()
    for fmt in args.format or []:
        if fmt == "all":
            requested.update(FORMATS)
        else:
            requested.add(fmt)
    return [fmt for fmt in FORMATS if fmt in requested]


def _summary(params: MaterialParameters, settings: GeometrySettings) -> List[str]:
    mesh = generate_surface_mesh(params, settings)
    section = get_pi_plane_section(params, settings.pi_plane_p, settings)
    envelope = get_meridian_envelope(params, settings.p_max, settings)

    lines = [f"model: {params.kind.value} {params.to_dict()}"]
    lines.append(f"mesh: {len(mesh.vertices)} vertices, {len(mesh.triangles)} triangles, "
                 f"area {mesh.surface_area():.3f}")
    lines.append(f"pi-plane section at p={settings.pi_plane_p:g}: "
                 f"{max(len(section) - 1, 0)} points")
    for name, curve in envelope.items():
        if curve.is_empty:
            lines.append(f"meridian {name}: empty")
            continue
        start = curve.points[0]
        end = curve.points[-1]
        lines.append(f"meridian {name}: {len(curve.points)} points, "
                     f"({start.x:.2f}, {start.y:.2f}) -> ({end.x:.2f}, {end.y:.2f})")
    return lines


def _export(params: MaterialParameters, settings: GeometrySettings,
            formats: List[str], out_dir: Path, overwrite: bool) -> List[Path]:
    out_dir.mkdir(parents=True, exist_ok=True)
    stem = params.kind.value.lower()
    targets = {
        "json": out_dir / f"{stem}.json",
        "csv": out_dir / f"{stem}_meridian.csv",
        "stl": out_dir / f"{stem}.stl",
        "dxf": out_dir / f"{stem}_sections.dxf",
    }
    for fmt in formats:
        if targets[fmt].exists() and not overwrite:
            raise FileExistsError(f"export target already exists: {targets[fmt]}")

    written: List[Path] = []
    envelope = get_meridian_envelope(params, settings.p_max, settings)
    if "json" in formats:
        write_snapshot_json(snapshot(params, settings), targets["json"])
        written.append(targets["json"])
    if "csv" in formats:
        write_envelope_csv(envelope, targets["csv"])
        written.append(targets["csv"])
    if "stl" in formats:
        mesh = generate_surface_mesh(params, settings)
        if mesh.is_empty:
            logger.warning("no surface for %s; skipping STL", params.to_dict())
        else:
            write_stl(mesh, targets["stl"], name=f"yieldviz {params.kind.value}")
            written.append(targets["stl"])
    if "dxf" in formats:
        section = get_pi_plane_section(params, settings.pi_plane_p, settings)
        written.append(write_sections_dxf(section, envelope, targets["dxf"]))
    return written


def _list_presets(kind: Optional[str]) -> int:
    for preset in list_presets(kind):
        values = ", ".join(f"{k}={v:g}" for k, v in preset.params.to_dict().items() if k != "model")
        print(f"{preset.kind.value:14s} {preset.name:20s} {values:34s} {preset.description}")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose >= 2:
        level = logging.DEBUG
    setup_logging(level)

    try:
        if args.command == "presets":
            return _list_presets(args.kind)

        params = _resolve_params(args)
        settings = _resolve_settings(args)
    except (YieldVizError, ValueError, FileNotFoundError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    check = validate_parameters(params)
    for warning in check.warnings:
        logger.warning("parameter outside the usual range: %s", warning)

    for line in _summary(params, settings):
        print(line)

    formats = _requested_formats(args)
    if not formats:
        return 0

    try:
        written = _export(params, settings, formats, args.out or Path.cwd(), args.overwrite)
    except FileExistsError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    for path in written:
        print(f"wrote {path}")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
