"""Viewer configuration."""
from __future__ import annotations

import logging
from dataclasses import dataclass

from orbitcanvas.utils import constants as C

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ViewerConfig:
    """Settings for one viewer session.

    Attributes:
        width: Viewport width in pixels.
        height: Viewport height in pixels.
        fps: Target frame rate of the render loop.
        star_count: Number of background stars per viewport size.
        semi_major_axis: Semi-major axis of the displayed orbit in km.
        eccentricity: Requested eccentricity (clamped to the safe maximum).
        inclination_deg: Inclination in degrees, 0 to 180.
        time_acceleration: Simulated seconds per wall-clock second.
        scale: Pixels per km applied to world points before projection.
        trail_length: Maximum number of positions kept in the trail.
        seed: Optional seed for star generation.
    """

    width: int = C.DEFAULT_WIDTH
    height: int = C.DEFAULT_HEIGHT
    fps: int = C.DEFAULT_FPS
    star_count: int = C.STAR_COUNT
    semi_major_axis: float = C.DEFAULT_SEMI_MAJOR_AXIS_KM
    eccentricity: float = C.DEFAULT_ECCENTRICITY
    inclination_deg: float = C.DEFAULT_INCLINATION_DEG
    time_acceleration: float = C.TIME_ACCELERATION
    scale: float = C.PIXELS_PER_KM
    trail_length: int = C.TRAIL_LENGTH
    seed: int | None = None

    def __post_init__(self) -> None:
        problems = []
        if self.width <= 0 or self.height <= 0:
            problems.append(f"viewport must be positive, got {self.width}x{self.height}")
        if self.fps <= 0:
            problems.append(f"fps must be positive, got {self.fps}")
        if self.star_count < 0:
            problems.append(f"star_count must be >= 0, got {self.star_count}")
        if self.semi_major_axis <= C.EARTH_RADIUS_KM:
            problems.append(
                f"semi_major_axis must exceed the body radius ({C.EARTH_RADIUS_KM} km), "
                f"got {self.semi_major_axis}"
            )
        if self.eccentricity < 0:
            problems.append(f"eccentricity must be >= 0, got {self.eccentricity}")
        if not 0.0 <= self.inclination_deg <= 180.0:
            problems.append(f"inclination_deg must be in [0, 180], got {self.inclination_deg}")
        if self.time_acceleration < 0:
            problems.append(f"time_acceleration must be >= 0, got {self.time_acceleration}")
        if self.scale <= 0:
            problems.append(f"scale must be positive, got {self.scale}")
        if self.trail_length < 0:
            problems.append(f"trail_length must be >= 0, got {self.trail_length}")

        if problems:
            logger.error("Invalid viewer configuration: %s", "; ".join(problems))
            raise ValueError("Invalid viewer configuration: " + "; ".join(problems))
