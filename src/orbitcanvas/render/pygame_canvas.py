"""pygame implementation of the drawing surface port."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Iterator

import pygame

from orbitcanvas.render.canvas import Color, DrawingContext

logger = logging.getLogger(__name__)

Point = tuple[float, float]


@dataclass
class _Subpath:
    points: list[Point] = field(default_factory=list)
    closed: bool = False
    circle: tuple[float, float, float] | None = None  # (cx, cy, radius) for a full arc


def to_rgba(color: Color) -> tuple[int, int, int, int]:
    """Convert a canvas-style colour (alpha in [0, 1]) to a pygame RGBA tuple."""
    r, g, b, a = color
    return int(r), int(g), int(b), max(0, min(255, int(round(a * 255))))


def dash_segments(points: list[Point], pattern: list[float]) -> Iterator[tuple[Point, Point]]:
    """Split a polyline into the "on" pieces of a dash pattern.

    The dash phase carries across vertices, as on an HTML canvas. An odd
    pattern is repeated to make it even.
    """
    pattern = [max(0.0, d) for d in pattern]
    if not pattern or sum(pattern) == 0:
        for a, b in zip(points, points[1:]):
            yield a, b
        return
    if len(pattern) % 2:
        pattern = pattern * 2

    index = 0
    remaining = pattern[0]
    for (x0, y0), (x1, y1) in zip(points, points[1:]):
        length = math.hypot(x1 - x0, y1 - y0)
        pos = 0.0
        while pos < length:
            step = min(remaining, length - pos)
            if index % 2 == 0 and step > 0:
                t0, t1 = pos / length, (pos + step) / length
                yield (
                    (x0 + (x1 - x0) * t0, y0 + (y1 - y0) * t0),
                    (x0 + (x1 - x0) * t1, y0 + (y1 - y0) * t1),
                )
            pos += step
            remaining -= step
            if remaining <= 1e-9:
                index = (index + 1) % len(pattern)
                remaining = pattern[index]


class PygameCanvas(DrawingContext):
    """Draws onto a ``pygame.Surface``.

    Each stroke or fill is painted on a scratch surface and blended, in
    call order, over an alpha layer that :meth:`present` composites onto
    the target surface. :meth:`fill_rect` blends straight onto the target so a translucent full-surface fill
    leaves fading trails of the previous frames.

    Args:
        surface: Target surface (usually the display surface).
    """

    def __init__(self, surface: pygame.Surface):
        super().__init__()
        self.surface = surface
        self._layer = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
        self._scratch = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
        self._subpaths: list[_Subpath] = []
        self._fill_cache: dict[tuple[tuple[int, int], tuple[int, int, int, int]], pygame.Surface] = {}

    def resize(self, surface: pygame.Surface) -> None:
        """Retarget the canvas after the display surface changed size."""
        self.surface = surface
        self._layer = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
        self._scratch = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
        self._fill_cache.clear()
        logger.debug("Canvas resized to %dx%d", *surface.get_size())

    # --- path construction ---

    def begin_path(self) -> None:
        self._subpaths = []

    def move_to(self, x: float, y: float) -> None:
        self._subpaths.append(_Subpath(points=[(x, y)]))

    def line_to(self, x: float, y: float) -> None:
        if not self._subpaths or self._subpaths[-1].closed or self._subpaths[-1].circle:
            self.move_to(x, y)
            return
        self._subpaths[-1].points.append((x, y))

    def close_path(self) -> None:
        if self._subpaths and self._subpaths[-1].points:
            current = self._subpaths[-1]
            current.closed = True
            self._subpaths.append(_Subpath(points=[current.points[0]]))

    def arc(self, x: float, y: float, radius: float, start_angle: float, end_angle: float) -> None:
        sweep = end_angle - start_angle
        if abs(sweep) >= 2 * math.pi - 1e-9:
            self._subpaths.append(_Subpath(circle=(x, y, radius)))
            return
        n = max(8, int(abs(sweep) * radius / 2) + 2)
        points = [
            (x + radius * math.cos(start_angle + sweep * k / (n - 1)),
             y + radius * math.sin(start_angle + sweep * k / (n - 1)))
            for k in range(n)
        ]
        if self._subpaths and not self._subpaths[-1].closed and self._subpaths[-1].circle is None:
            self._subpaths[-1].points.extend(points)
        else:
            self._subpaths.append(_Subpath(points=points))

    # --- painting ---

    def _composite(self, dirty: list[pygame.Rect]) -> None:
        """Blend the scratch pixels inside ``dirty`` over the layer, then clear them."""
        if not dirty:
            return
        area = dirty[0].unionall(dirty[1:]).clip(self._scratch.get_rect())
        if area.width and area.height:
            self._layer.blit(self._scratch, area.topleft, area)
            self._scratch.fill((0, 0, 0, 0), area)

    def stroke(self) -> None:
        color = to_rgba(self.stroke_style)
        width = max(1, int(round(self.line_width)))
        round_ends = width > 2 and (self.line_cap == "round" or self.line_join == "round")
        target = self._scratch
        dirty: list[pygame.Rect] = []

        for sub in self._subpaths:
            if sub.circle is not None:
                cx, cy, radius = sub.circle
                dirty.append(pygame.draw.circle(target, color, (cx, cy), max(1, round(radius)), width))
                continue
            points = sub.points + [sub.points[0]] if sub.closed else sub.points
            if len(points) < 2:
                continue
            if self.style.line_dash:
                pieces = list(dash_segments(points, self.style.line_dash))
            else:
                pieces = list(zip(points, points[1:]))
            for a, b in pieces:
                dirty.append(pygame.draw.line(target, color, a, b, width))
                if round_ends:
                    dirty.append(pygame.draw.circle(target, color, a, width / 2))
                    dirty.append(pygame.draw.circle(target, color, b, width / 2))
        self._composite(dirty)

    def fill(self) -> None:
        color = to_rgba(self.fill_style)
        dirty: list[pygame.Rect] = []
        for sub in self._subpaths:
            if sub.circle is not None:
                cx, cy, radius = sub.circle
                dirty.append(pygame.draw.circle(self._scratch, color, (cx, cy), max(1, round(radius))))
            elif len(sub.points) >= 3:
                dirty.append(pygame.draw.polygon(self._scratch, color, sub.points))
        self._composite(dirty)

    def fill_rect(self, x: float, y: float, width: float, height: float) -> None:
        size = (max(0, int(width)), max(0, int(height)))
        color = to_rgba(self.fill_style)
        key = (size, color)
        patch = self._fill_cache.get(key)
        if patch is None:
            patch = pygame.Surface(size, pygame.SRCALPHA)
            patch.fill(color)
            self._fill_cache[key] = patch
        self.surface.blit(patch, (int(x), int(y)))

    def present(self) -> None:
        """Composite the drawn layer onto the target surface and clear it."""
        self.surface.blit(self._layer, (0, 0))
        self._layer.fill((0, 0, 0, 0))
