"""Satellite marker: a wireframe cube with two solar-panel fins."""
from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from orbitcanvas.core.projection import Projector
from orbitcanvas.render.canvas import DrawingContext, snap

MARKER_COLOR = (255, 107, 53, 1.0)
MARKER_WIDTH = 2
CUBE_SIZE = 6
DEPTH_OFFSET = 2
PANEL_SIZE = 12
PANEL_THICKNESS = 2
PANEL_OFFSET = CUBE_SIZE + 3


def _square(ctx: DrawingContext, cx: float, cy: float, half: float) -> None:
    ctx.move_to(snap(cx - half), snap(cy - half))
    ctx.line_to(snap(cx + half), snap(cy - half))
    ctx.line_to(snap(cx + half), snap(cy + half))
    ctx.line_to(snap(cx - half), snap(cy + half))
    ctx.close_path()


def _panel(ctx: DrawingContext, inner_x: float, outer_x: float, cy: float) -> None:
    ctx.begin_path()
    ctx.move_to(snap(inner_x), snap(cy - PANEL_SIZE / 2))
    ctx.line_to(snap(inner_x), snap(cy + PANEL_SIZE / 2))
    ctx.line_to(snap(outer_x), snap(cy + PANEL_SIZE / 2))
    ctx.line_to(snap(outer_x), snap(cy - PANEL_SIZE / 2))
    ctx.close_path()
    ctx.stroke()


def draw_satellite(
    ctx: DrawingContext,
    projector: Projector,
    position: NDArray[np.float64] | None,
    scale: float,
) -> bool:
    """Draw the marker at the satellite's projected position.

    Args:
        ctx: Target context.
        projector: Live projection.
        position: Inertial position in km, or None while unavailable.
        scale: Pixels per km.

    Returns:
        True if the marker was drawn, False if it was skipped.
    """
    if position is None:
        return False
    screen = projector.project_point(np.asarray(position, dtype=np.float64) * scale)
    if screen is None:
        return False
    sx, sy = screen

    ctx.save()
    ctx.line_cap = "square"
    ctx.line_join = "miter"
    ctx.line_dash = []
    ctx.stroke_style = MARKER_COLOR
    ctx.line_width = MARKER_WIDTH

    # front face, back face offset down-right, and the four connecting edges
    ctx.begin_path()
    _square(ctx, sx, sy, CUBE_SIZE)
    _square(ctx, sx + DEPTH_OFFSET, sy + DEPTH_OFFSET, CUBE_SIZE)
    for dx, dy in ((-1, -1), (1, -1), (1, 1), (-1, 1)):
        ctx.move_to(snap(sx + dx * CUBE_SIZE), snap(sy + dy * CUBE_SIZE))
        ctx.line_to(snap(sx + dx * CUBE_SIZE + DEPTH_OFFSET), snap(sy + dy * CUBE_SIZE + DEPTH_OFFSET))
    ctx.stroke()

    _panel(ctx, sx - PANEL_OFFSET, sx - PANEL_OFFSET - PANEL_THICKNESS, sy)
    _panel(ctx, sx + PANEL_OFFSET, sx + PANEL_OFFSET + PANEL_THICKNESS, sy)

    # struts
    ctx.begin_path()
    ctx.move_to(snap(sx - CUBE_SIZE), snap(sy))
    ctx.line_to(snap(sx - PANEL_OFFSET), snap(sy))
    ctx.move_to(snap(sx + CUBE_SIZE), snap(sy))
    ctx.line_to(snap(sx + PANEL_OFFSET), snap(sy))
    ctx.stroke()
    ctx.restore()
    return True
