"""Command line entry point.

Usage:
    python -m skapa generate                          # default 80x60x52 box
    python -m skapa generate --width 120 --out build/ # custom size
    python -m skapa serve                             # HTTP API on $HOST:$PORT
"""
import argparse
import asyncio
import logging
import sys
from pathlib import Path

from . import config
from .errors import SkapaError
from .geometry.assembly import build_box
from .geometry.kernel import get_kernel
from .geometry.types import BoxParameters, BuildStatus


def _parse_args(argv=None):
    parser = argparse.ArgumentParser(prog="skapa", description="Parametric pegboard enclosure generator")
    sub = parser.add_subparsers(dest="command", required=True)

    gen = sub.add_parser("generate", help="Build a box and write STEP/STL files")
    gen.add_argument("--height", type=float, default=config.DEFAULT_HEIGHT, help="[mm] outer height")
    gen.add_argument("--width", type=float, default=config.DEFAULT_WIDTH, help="[mm] outer width")
    gen.add_argument("--depth", type=float, default=config.DEFAULT_DEPTH, help="[mm] outer depth")
    gen.add_argument("--radius", type=float, default=config.DEFAULT_RADIUS, help="[mm] corner radius")
    gen.add_argument("--wall", type=float, default=config.DEFAULT_WALL, help="[mm] wall thickness")
    gen.add_argument("--bottom", type=float, default=config.DEFAULT_BOTTOM, help="[mm] floor thickness")
    gen.add_argument("--vent-width", type=float, default=None, help="[mm] vent slot long side")
    gen.add_argument("--vent-height", type=float, default=None, help="[mm] vent slot short side")
    gen.add_argument("--out", type=Path, default=Path("."), help="Output directory")

    sub.add_parser("serve", help="Run the HTTP API")
    return parser.parse_args(argv)


def _generate(args) -> int:
    # Imported here so `serve` does not pay for trimesh at startup
    from .services.export import export_step, export_stl, measure

    params = BoxParameters(
        height=args.height,
        width=args.width,
        depth=args.depth,
        corner_radius=args.radius,
        wall_thickness=args.wall,
        bottom_thickness=args.bottom,
        vent_hole_width=args.vent_width,
        vent_hole_height=args.vent_height,
    )
    for problem in params.violations():
        print(f"WARNING: {problem}", file=sys.stderr)

    try:
        kernel = asyncio.run(get_kernel())
    except SkapaError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    outcome = build_box(kernel, params)
    if outcome.status is BuildStatus.FAILED:
        print(f"ERROR: generation failed: {outcome.error}", file=sys.stderr)
        return 1
    if outcome.status is BuildStatus.DEGRADED:
        print(f"WARNING: vent holes skipped: {outcome.error}", file=sys.stderr)

    args.out.mkdir(parents=True, exist_ok=True)
    step_path = args.out / params.filename("step")
    stl_path = args.out / params.filename("stl")
    step_path.write_bytes(export_step(kernel, outcome.solid))
    stl_path.write_bytes(export_stl(kernel, outcome.solid))

    m = measure(kernel, outcome.solid)
    print(f"SIZE:{m['size'][0]:.2f}x{m['size'][1]:.2f}x{m['size'][2]:.2f}")
    print(f"VOLUME:{m['volume']:.2f}")
    print(f"SOLIDS:{m['solid_count']}")
    print(f"HOLES:{outcome.vents.hole_count if outcome.vents else 0} CLIPS:{len(outcome.clips)}")
    print(f"Files: {step_path}, {stl_path}")
    return 0


def _serve() -> int:
    import uvicorn

    uvicorn.run("skapa.app:app", host=config.HOST, port=config.PORT, log_level=config.LOG_LEVEL.lower())
    return 0


def main(argv=None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=config.LOG_LEVEL,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
    )
    if args.command == "generate":
        return _generate(args)
    return _serve()


if __name__ == "__main__":
    sys.exit(main())
