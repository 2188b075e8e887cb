"""Wireframe reference body.

The body's pole lies along world +Z, so its equator shares the X-Y plane
of the inertial frame the orbits are computed in.
"""
from __future__ import annotations

from functools import lru_cache

import numpy as np
from numpy.typing import NDArray

from orbitcanvas.core.projection import Projector
from orbitcanvas.render.canvas import DrawingContext, trace_polyline

GRID_COLOR = (119, 255, 119, 0.3)
EQUATOR_COLOR = (255, 0, 4, 0.3)
GRID_WIDTH = 3
EQUATOR_WIDTH = 5
GRID_SPACING_DEG = 15
RING_STEP_DEG = 5
EQUATOR_STEP_DEG = 2


def _sphere_point(radius: float, lat: NDArray[np.float64], lon: NDArray[np.float64]) -> NDArray[np.float64]:
    return np.stack(
        (radius * np.cos(lat) * np.cos(lon), radius * np.cos(lat) * np.sin(lon), radius * np.sin(lat)),
        axis=-1,
    )


@lru_cache(maxsize=8)
def wireframe_rings(radius: float) -> tuple[tuple[NDArray[np.float64], ...], tuple[NDArray[np.float64], ...], NDArray[np.float64]]:
    """World-space polylines of the body mesh.

    Returns:
        Tuple of (latitude rings every 15°, meridians every 15°, equator).
        Rings are open polylines whose last point repeats the first.
    """
    lon_samples = np.radians(np.arange(0, 361, RING_STEP_DEG))
    lat_samples = np.radians(np.arange(-90, 91, RING_STEP_DEG))

    latitudes = tuple(
        _sphere_point(radius, np.full_like(lon_samples, np.radians(lat)), lon_samples)
        for lat in range(-90, 91, GRID_SPACING_DEG)
    )
    meridians = tuple(
        _sphere_point(radius, lat_samples, np.full_like(lat_samples, np.radians(lon)))
        for lon in range(0, 360, GRID_SPACING_DEG)
    )
    eq_lon = np.radians(np.arange(0, 361, EQUATOR_STEP_DEG))
    equator = _sphere_point(radius, np.zeros_like(eq_lon), eq_lon)

    for ring in (*latitudes, *meridians, equator):
        ring.flags.writeable = False
    return latitudes, meridians, equator


def draw_wireframe_earth(ctx: DrawingContext, projector: Projector, radius: float) -> None:
    """Draw latitude rings, meridians and a highlighted equator.

    Args:
        ctx: Target context.
        projector: Live projection.
        radius: Body radius in render units (km times pixels-per-km).
    """
    latitudes, meridians, equator = wireframe_rings(float(radius))

    ctx.save()
    ctx.line_cap = "square"
    ctx.line_join = "miter"
    ctx.line_dash = []
    ctx.stroke_style = GRID_COLOR
    ctx.line_width = GRID_WIDTH
    for ring in (*latitudes, *meridians):
        ctx.begin_path()
        trace_polyline(ctx, *projector.project(ring))
        ctx.stroke()

    ctx.stroke_style = EQUATOR_COLOR
    ctx.line_width = EQUATOR_WIDTH
    ctx.begin_path()
    trace_polyline(ctx, *projector.project(equator))
    ctx.stroke()
    ctx.restore()
