"""Drawing surface port.

Renderers issue immediate-mode calls against :class:`DrawingContext`;
adapters implement it for a concrete surface.
"""
from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace

import numpy as np
from numpy.typing import NDArray

Color = tuple[int, int, int, float]
"""RGBA colour: 0-255 channels, alpha in [0, 1]."""


@dataclass
class Style:
    """Stroke and fill state saved and restored by :meth:`DrawingContext.save`."""

    stroke_style: Color = (0, 0, 0, 1.0)
    fill_style: Color = (0, 0, 0, 1.0)
    line_width: float = 1.0
    line_dash: list[float] = field(default_factory=list)
    line_cap: str = "butt"
    line_join: str = "miter"


class DrawingContext(ABC):
    """Port for a 2D immediate-mode drawing surface."""

    def __init__(self) -> None:
        self.style = Style()
        self._saved: list[Style] = []

    # style accessors mirror the canvas API
    @property
    def stroke_style(self) -> Color:
        return self.style.stroke_style

    @stroke_style.setter
    def stroke_style(self, value: Color) -> None:
        self.style.stroke_style = value

    @property
    def fill_style(self) -> Color:
        return self.style.fill_style

    @fill_style.setter
    def fill_style(self, value: Color) -> None:
        self.style.fill_style = value

    @property
    def line_width(self) -> float:
        return self.style.line_width

    @line_width.setter
    def line_width(self, value: float) -> None:
        self.style.line_width = value

    @property
    def line_dash(self) -> list[float]:
        return list(self.style.line_dash)

    @line_dash.setter
    def line_dash(self, value: list[float]) -> None:
        self.style.line_dash = list(value)

    @property
    def line_cap(self) -> str:
        return self.style.line_cap

    @line_cap.setter
    def line_cap(self, value: str) -> None:
        self.style.line_cap = value

    @property
    def line_join(self) -> str:
        return self.style.line_join

    @line_join.setter
    def line_join(self, value: str) -> None:
        self.style.line_join = value

    def save(self) -> None:
        self._saved.append(replace(self.style, line_dash=list(self.style.line_dash)))

    def restore(self) -> None:
        if self._saved:
            self.style = self._saved.pop()

    @abstractmethod
    def begin_path(self) -> None:
        """Discard the current path."""
        ...

    @abstractmethod
    def move_to(self, x: float, y: float) -> None:
        """Start a new subpath at (x, y)."""
        ...

    @abstractmethod
    def line_to(self, x: float, y: float) -> None:
        """Extend the current subpath to (x, y)."""
        ...

    @abstractmethod
    def close_path(self) -> None:
        """Close the current subpath back to its first point."""
        ...

    @abstractmethod
    def arc(self, x: float, y: float, radius: float, start_angle: float, end_angle: float) -> None:
        """Add a circular arc to the path."""
        ...

    @abstractmethod
    def stroke(self) -> None:
        """Stroke the current path with the current stroke style."""
        ...

    @abstractmethod
    def fill(self) -> None:
        """Fill the current path with the current fill style."""
        ...

    @abstractmethod
    def fill_rect(self, x: float, y: float, width: float, height: float) -> None:
        """Fill a rectangle with the current fill style, blending with what is below."""
        ...


def snap(value: float) -> int:
    """Round a projected coordinate to the nearest whole pixel, halves up."""
    return int(math.floor(value + 0.5))


def trace_polyline(
    ctx: DrawingContext,
    screen: NDArray[np.float64],
    visible: NDArray[np.bool_],
    closed: bool = False,
) -> int:
    """Add projected points to the current path as snapped line segments.

    A culled point ends the current subpath; the next visible point starts
    a new one. A closed polyline whose points are all visible ends with a
    segment back to the first point.

    Args:
        ctx: Target context (path should already be begun).
        screen: Screen coordinates, shape (n, 2).
        visible: Visibility mask, shape (n,).
        closed: Connect the last point back to the first.

    Returns:
        Number of points traced.
    """
    traced = 0
    pen_down = False
    for (sx, sy), ok in zip(screen, visible):
        if not ok:
            pen_down = False
            continue
        if pen_down:
            ctx.line_to(snap(sx), snap(sy))
        else:
            ctx.move_to(snap(sx), snap(sy))
            pen_down = True
        traced += 1

    if closed and traced and traced == len(screen):
        ctx.line_to(snap(screen[0][0]), snap(screen[0][1]))
    return traced
