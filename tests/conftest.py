"""Shared fixtures: a recording drawing context and headless pygame."""
from __future__ import annotations

import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import math

import pytest

from orbitcanvas.core.elements import OrbitalElements
from orbitcanvas.render.canvas import DrawingContext
from orbitcanvas.utils.config import ViewerConfig
from orbitcanvas.utils.constants import DEFAULT_SEMI_MAJOR_AXIS_KM


class RecordingContext(DrawingContext):
    """Records every call as a tuple so tests can inspect draw order."""

    def __init__(self) -> None:
        super().__init__()
        self.calls: list[tuple] = []
        self.strokes: list[dict] = []

    def begin_path(self) -> None:
        self.calls.append(("begin_path",))

    def move_to(self, x, y) -> None:
        self.calls.append(("move_to", x, y))

    def line_to(self, x, y) -> None:
        self.calls.append(("line_to", x, y))

    def close_path(self) -> None:
        self.calls.append(("close_path",))

    def arc(self, x, y, radius, start_angle, end_angle) -> None:
        self.calls.append(("arc", x, y, radius, start_angle, end_angle))

    def stroke(self) -> None:
        self.calls.append(("stroke", self.stroke_style, self.line_width, tuple(self.line_dash)))
        self.strokes.append({
            "color": self.stroke_style,
            "width": self.line_width,
            "dash": tuple(self.line_dash),
            "cap": self.line_cap,
            "join": self.line_join,
        })

    def fill(self) -> None:
        self.calls.append(("fill", self.fill_style))

    def fill_rect(self, x, y, width, height) -> None:
        self.calls.append(("fill_rect", x, y, width, height, self.fill_style))

    def points(self) -> list[tuple]:
        return [c[1:] for c in self.calls if c[0] in ("move_to", "line_to")]


@pytest.fixture
def recorder() -> RecordingContext:
    return RecordingContext()


@pytest.fixture
def circular_elements() -> OrbitalElements:
    """Default scenario: 4000 km altitude, circular, 51.6° inclination."""
    return OrbitalElements(
        semi_major_axis=DEFAULT_SEMI_MAJOR_AXIS_KM,
        eccentricity=0.0,
        inclination=math.radians(51.6),
    )


@pytest.fixture
def elliptic_elements() -> OrbitalElements:
    return OrbitalElements(
        semi_major_axis=15000.0,
        eccentricity=0.4,
        inclination=math.radians(30.0),
        raan=math.radians(40.0),
        arg_periapsis=math.radians(75.0),
    )


@pytest.fixture
def config() -> ViewerConfig:
    return ViewerConfig(width=800, height=600, seed=7)


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 100.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
