"""
Command-line interface for the orbit viewer.

Usage:
    # Interactive window (drag to rotate, wheel to zoom,
    # Up/Down for inclination, Left/Right for eccentricity)
    orbitcanvas

    # Elliptical, polar orbit in a smaller window
    orbitcanvas --eccentricity 0.3 --inclination 90 --width 800 --height 600

    # Headless: render 120 frames and save the last one
    orbitcanvas --snapshot orbit.png --frames 120
"""
from __future__ import annotations

import argparse
import logging
import sys

from orbitcanvas.utils import constants as C
from orbitcanvas.utils.config import ViewerConfig


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="orbitcanvas",
        description="Interactive wireframe view of a Keplerian orbit around Earth",
    )
    parser.add_argument('--width', type=int, default=C.DEFAULT_WIDTH, help="Window width in pixels")
    parser.add_argument('--height', type=int, default=C.DEFAULT_HEIGHT, help="Window height in pixels")
    parser.add_argument('--fps', type=int, default=C.DEFAULT_FPS, help="Frame-rate cap (default: 60)")
    parser.add_argument('--stars', type=int, default=C.STAR_COUNT, help="Number of background stars")
    parser.add_argument('--seed', type=int, default=None, help="Seed for the star field")

    orbit_group = parser.add_argument_group('orbit')
    orbit_group.add_argument(
        '--semi-major-axis', type=float, default=C.DEFAULT_SEMI_MAJOR_AXIS_KM,
        help=f"Semi-major axis in km (default: {C.DEFAULT_SEMI_MAJOR_AXIS_KM:g})"
    )
    orbit_group.add_argument(
        '--eccentricity', type=float, default=C.DEFAULT_ECCENTRICITY,
        help="Eccentricity; clamped so periapsis stays above the surface"
    )
    orbit_group.add_argument(
        '--inclination', type=float, default=C.DEFAULT_INCLINATION_DEG,
        help=f"Inclination in degrees, 0-180 (default: {C.DEFAULT_INCLINATION_DEG})"
    )
    orbit_group.add_argument(
        '--time-scale', type=float, default=C.TIME_ACCELERATION,
        help=f"Simulated seconds per real second (default: {C.TIME_ACCELERATION:g})"
    )

    snapshot_group = parser.add_argument_group('snapshot')
    snapshot_group.add_argument('--snapshot', help="Render off-screen and save the image to this path")
    snapshot_group.add_argument(
        '--frames', type=int, default=1,
        help="Frames to render before saving the snapshot (default: 1)"
    )

    parser.add_argument('-v', '--verbose', action='count', default=0, help="-v for info, -vv for debug")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    level = logging.WARNING - 10 * min(args.verbose, 2)
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        config = ViewerConfig(
            width=args.width,
            height=args.height,
            fps=args.fps,
            star_count=args.stars,
            semi_major_axis=args.semi_major_axis,
            eccentricity=args.eccentricity,
            inclination_deg=args.inclination,
            time_acceleration=args.time_scale,
            seed=args.seed,
        )
    except ValueError as exc:
        parser.error(str(exc))

    if args.frames < 1:
        parser.error("--frames must be at least 1")

    # pygame is imported lazily so --help works without a display stack
    from orbitcanvas.app.loop import render_snapshot, run_viewer

    if args.snapshot:
        controller = render_snapshot(config, args.snapshot, frames=args.frames)
        status = controller.status()
        print(
            f"Saved {args.snapshot} (i={status['inclination_deg']:.1f} deg, "
            f"e={status['eccentricity']:.2f}, period={status['period_min']:.1f} min)"
        )
        return 0

    frames = run_viewer(config)
    print(f"Rendered {frames} frames.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
