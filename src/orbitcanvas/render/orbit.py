"""Dashed closed orbit path."""
from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from orbitcanvas.core.projection import Projector
from orbitcanvas.render.canvas import DrawingContext, trace_polyline

PATH_COLOR = (255, 107, 53, 0.9)
PATH_WIDTH = 2
PATH_DASH = [6, 6]


def draw_orbit_path(ctx: DrawingContext, projector: Projector, path: NDArray[np.float64] | None, scale: float) -> None:
    """Stroke the sampled orbit as a dashed loop, last point joined to the first.

    Args:
        ctx: Target context.
        projector: Live projection.
        path: Orbit samples in km, shape (n, 3). Nothing is drawn when empty.
        scale: Pixels per km.
    """
    if path is None or len(path) == 0:
        return

    ctx.save()
    ctx.line_cap = "round"
    ctx.line_join = "round"
    ctx.line_dash = PATH_DASH
    ctx.stroke_style = PATH_COLOR
    ctx.line_width = PATH_WIDTH

    ctx.begin_path()
    if trace_polyline(ctx, *projector.project(path * scale), closed=True):
        ctx.stroke()
    ctx.restore()
