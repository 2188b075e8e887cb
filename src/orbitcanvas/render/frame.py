"""Per-frame composition of the scene.

There is no depth buffer: layers are painted back to front in a fixed
order (stars, orbit path, body, satellite) and that order must not change.
"""
from __future__ import annotations

import logging

import numpy as np
from numpy.typing import NDArray

from orbitcanvas.core.projection import Projector
from orbitcanvas.render.canvas import DrawingContext
from orbitcanvas.render.earth import draw_wireframe_earth
from orbitcanvas.render.orbit import draw_orbit_path
from orbitcanvas.render.satellite import draw_satellite
from orbitcanvas.render.stars import Star, draw_stars
from orbitcanvas.utils.constants import EARTH_RADIUS_KM, PIXELS_PER_KM

logger = logging.getLogger(__name__)

BACKGROUND_FADE = (5, 5, 15, 0.1)


class FrameRenderer:
    """Draws one frame of the scene through a :class:`Projector`.

    Drawing only touches the context; the path, elements and camera are
    read, never modified.

    Args:
        projector: Live projection shared with the controller.
        scale: Pixels per km.
        body_radius: Reference body radius in km.
    """

    def __init__(self, projector: Projector, scale: float = PIXELS_PER_KM, body_radius: float = EARTH_RADIUS_KM):
        self.projector = projector
        self.scale = scale
        self.body_radius = body_radius

    def clear(self, ctx: DrawingContext) -> None:
        """Translucent full-surface fill that leaves fading trails."""
        ctx.fill_style = BACKGROUND_FADE
        ctx.fill_rect(0, 0, self.projector.width, self.projector.height)

    def render(
        self,
        ctx: DrawingContext,
        stars: list[Star],
        path: NDArray[np.float64] | None,
        satellite_position: NDArray[np.float64] | None,
    ) -> bool:
        """Paint a full frame.

        Args:
            ctx: Target context.
            stars: Background stars in screen space.
            path: Orbit samples in km, or None before the first build.
            satellite_position: Inertial position in km, or None while the
                propagator is unavailable (the marker is skipped).

        Returns:
            True if the satellite marker was drawn.
        """
        self.clear(ctx)
        draw_stars(ctx, stars)
        draw_orbit_path(ctx, self.projector, path, self.scale)
        draw_wireframe_earth(ctx, self.projector, self.body_radius * self.scale)
        drawn = draw_satellite(ctx, self.projector, satellite_position, self.scale)
        if not drawn:
            logger.debug("Satellite marker skipped this frame")
        return drawn
