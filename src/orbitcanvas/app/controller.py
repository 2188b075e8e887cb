"""Session state and input handling for the orbit viewer.

A :class:`Controller` owns the camera, the orbit parameters, the sampled
path and the propagator. Input handlers and the frame tick run on the
same thread: handlers mutate state synchronously and the next tick picks
it up.
"""
from __future__ import annotations

import logging
import math
import time
from collections import deque
from typing import Callable

import numpy as np
from numpy.typing import NDArray

from orbitcanvas.core.elements import OrbitalElements, clamp_eccentricity, safe_max_eccentricity
from orbitcanvas.core.orbit_path import build_orbit_path
from orbitcanvas.core.projection import CameraState, Projector
from orbitcanvas.core.propagation import KeplerPropagator
from orbitcanvas.render.canvas import DrawingContext
from orbitcanvas.render.frame import FrameRenderer
from orbitcanvas.render.stars import StarField
from orbitcanvas.utils.config import ViewerConfig
from orbitcanvas.utils.constants import DRAG_SENSITIVITY, EARTH_RADIUS_KM, WHEEL_ZOOM_FACTOR

logger = logging.getLogger(__name__)


class Controller:
    """Owns live viewer state and drives the update-then-render cycle.

    Args:
        config: Viewer settings. Defaults to :class:`ViewerConfig`.
        clock: Monotonic time source in seconds.
        camera: Initial camera; a default one is created when omitted.
    """

    def __init__(
        self,
        config: ViewerConfig | None = None,
        clock: Callable[[], float] = time.monotonic,
        camera: CameraState | None = None,
    ):
        self.config = config or ViewerConfig()
        self.clock = clock
        self.camera = camera or CameraState()
        self.width = self.config.width
        self.height = self.config.height

        self.projector = Projector(self.camera, self.width, self.height)
        self.renderer = FrameRenderer(self.projector, scale=self.config.scale)
        self.stars = StarField(self.config.star_count, rng=np.random.default_rng(self.config.seed))

        self.semi_major_axis = self.config.semi_major_axis
        self.inclination_deg = self.config.inclination_deg
        self.eccentricity = clamp_eccentricity(self.config.eccentricity, self.semi_major_axis)
        self.elements = self._make_elements()
        self.path: NDArray[np.float64] = build_orbit_path(self.elements)

        self.propagator: KeplerPropagator | None = None
        self.trail: deque[NDArray[np.float64]] = deque(maxlen=self.config.trail_length)
        self.last_time = self.clock()

        self._dragging = False
        self._last_pointer = (0.0, 0.0)

    # --- orbit parameters ---

    @property
    def max_eccentricity(self) -> float:
        """Largest eccentricity the control offers for the current semi-major axis."""
        return safe_max_eccentricity(self.semi_major_axis, EARTH_RADIUS_KM)

    def _make_elements(self) -> OrbitalElements:
        return OrbitalElements.from_degrees(
            semi_major_axis=self.semi_major_axis,
            eccentricity=self.eccentricity,
            inclination_deg=self.inclination_deg,
        )

    def initialize(self) -> None:
        """Create the propagator; until then the satellite is unavailable."""
        self.propagator = KeplerPropagator(self.elements)
        self.last_time = self.clock()

    def set_inclination_deg(self, inclination_deg: float) -> None:
        self.inclination_deg = max(0.0, min(180.0, inclination_deg))
        self._reparameterize()

    def set_eccentricity(self, eccentricity: float) -> None:
        self.eccentricity = clamp_eccentricity(eccentricity, self.semi_major_axis)
        self._reparameterize()

    def _reparameterize(self) -> None:
        self.elements = self._make_elements()
        self.path = build_orbit_path(self.elements)
        if self.propagator is not None:
            self.propagator = KeplerPropagator(
                self.elements,
                mass_kg=self.propagator.mass_kg,
                isp_s=self.propagator.isp_s,
                thrust_limit_n=self.propagator.thrust_limit_n,
            )
        self.trail.clear()
        self.last_time = self.clock()
        logger.debug("Orbit reparameterized: i=%.1f deg, e=%.3f", self.inclination_deg, self.eccentricity)

    # --- camera input ---

    def pointer_down(self, x: float, y: float) -> None:
        self._dragging = True
        self._last_pointer = (x, y)

    def pointer_up(self) -> None:
        self._dragging = False

    @property
    def dragging(self) -> bool:
        return self._dragging

    def pointer_move(self, x: float, y: float) -> None:
        if not self._dragging:
            return
        last_x, last_y = self._last_pointer
        self.camera.rotate((x - last_x) * DRAG_SENSITIVITY, (y - last_y) * DRAG_SENSITIVITY)
        self._last_pointer = (x, y)

    def wheel(self, delta_y: float) -> None:
        """Zoom; positive deltas (scrolling down) bring the camera closer."""
        self.camera.zoom(-delta_y * WHEEL_ZOOM_FACTOR)

    def resize(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self.projector.resize(width, height)
        self.stars.invalidate()
        self.stars.ensure(width, height)
        logger.debug("Viewport resized to %dx%d", width, height)

    # --- frame cycle ---

    def satellite_position(self) -> NDArray[np.float64] | None:
        if self.propagator is None:
            return None
        return self.propagator.current_position()

    def update(self) -> None:
        """Advance the propagator by the scaled wall time since the last frame."""
        now = self.clock()
        elapsed = max(0.0, now - self.last_time)
        self.last_time = now
        if self.propagator is None:
            return
        self.propagator.advance(elapsed * self.config.time_acceleration)
        self.trail.append(self.propagator.current_position())

    def render(self, ctx: DrawingContext) -> bool:
        stars = self.stars.ensure(self.width, self.height)
        return self.renderer.render(ctx, stars, self.path, self.satellite_position())

    def tick(self, ctx: DrawingContext) -> bool:
        """One frame: update, then render. Returns True if the marker was drawn."""
        self.update()
        return self.render(ctx)

    def status(self) -> dict[str, float]:
        """Readout values for a heads-up display."""
        info = {
            "inclination_deg": self.inclination_deg,
            "eccentricity": self.eccentricity,
            "max_eccentricity": self.max_eccentricity,
            "period_min": self.elements.period / 60.0,
            "periapsis_alt_km": self.elements.periapsis_altitude,
            "apoapsis_alt_km": self.elements.apoapsis_altitude,
            "camera_distance": self.camera.distance,
        }
        if self.propagator is not None:
            info["speed_km_s"] = self.propagator.speed
            info["true_anomaly_deg"] = math.degrees(self.propagator.true_anomaly)
        return info
