"""Decorative star field in screen space."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass

import numpy as np

from orbitcanvas.render.canvas import DrawingContext
from orbitcanvas.utils.constants import STAR_COUNT, STAR_MAX_RADIUS, STAR_MIN_OPACITY

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Star:
    """A background star.

    Attributes:
        x: Screen x in pixels.
        y: Screen y in pixels.
        radius: Radius in pixels.
        opacity: Alpha in [0.2, 1.0).
    """

    x: float
    y: float
    radius: float
    opacity: float


def generate_stars(
    width: float,
    height: float,
    count: int = STAR_COUNT,
    rng: np.random.Generator | None = None,
) -> list[Star]:
    """Scatter ``count`` stars uniformly over a ``width`` x ``height`` viewport."""
    rng = rng if rng is not None else np.random.default_rng()
    xs = rng.uniform(0.0, width, count)
    ys = rng.uniform(0.0, height, count)
    radii = rng.uniform(0.0, STAR_MAX_RADIUS, count)
    opacities = rng.uniform(STAR_MIN_OPACITY, 1.0, count)
    return [Star(float(x), float(y), float(r), float(o)) for x, y, r, o in zip(xs, ys, radii, opacities)]


class StarField:
    """Caches one star set per viewport size.

    The set is generated lazily and kept until :meth:`invalidate` is
    called (on resize).
    """

    def __init__(self, count: int = STAR_COUNT, rng: np.random.Generator | None = None):
        self.count = count
        self._rng = rng if rng is not None else np.random.default_rng()
        self._stars: list[Star] = []

    @property
    def stars(self) -> list[Star]:
        return self._stars

    def ensure(self, width: float, height: float) -> list[Star]:
        if not self._stars and self.count > 0:
            self._stars = generate_stars(width, height, self.count, self._rng)
            logger.debug("Generated %d stars for %gx%g viewport", self.count, width, height)
        return self._stars

    def invalidate(self) -> None:
        self._stars = []


def draw_stars(ctx: DrawingContext, stars: list[Star]) -> None:
    for star in stars:
        ctx.begin_path()
        ctx.arc(star.x, star.y, star.radius, 0.0, 2 * math.pi)
        ctx.fill_style = (255, 255, 255, star.opacity)
        ctx.fill()
