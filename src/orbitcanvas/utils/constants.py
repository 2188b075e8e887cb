from __future__ import annotations

"""Physical, camera and rendering constants.

Lengths are in km unless noted, angles in radians, screen values in pixels.
"""

import math

# --- Earth parameters ---
EARTH_RADIUS_KM: float = 6371.0
"""Mean radius of the reference body in km."""

EARTH_MU_KM3_S2: float = 398600.4418
"""Earth gravitational parameter (GM) in km³/s²."""

# --- Default scenario ---
DEFAULT_ALTITUDE_KM: float = 4000.0
"""Altitude of the default circular orbit above the body radius."""

DEFAULT_SEMI_MAJOR_AXIS_KM: float = EARTH_RADIUS_KM + DEFAULT_ALTITUDE_KM
DEFAULT_INCLINATION_DEG: float = 51.6
DEFAULT_ECCENTRICITY: float = 0.0

DEFAULT_MASS_KG: float = 1000.0
DEFAULT_ISP_S: float = 300.0
DEFAULT_THRUST_LIMIT_N: float = 1000.0

# --- Eccentricity safety ---
ECCENTRICITY_SAFETY_MARGIN: float = 0.01
"""Margin subtracted from the periapsis-at-surface eccentricity."""

ECCENTRICITY_CAP: float = 0.95
"""Absolute ceiling for the eccentricity control."""

# --- Path sampling ---
ORBIT_PATH_STEPS: int = 360
"""Samples per orbital path (1 degree of true anomaly each)."""

# --- Projection ---
FIELD_OF_VIEW: float = 1000.0
"""Pseudo-perspective constant in ``scale = fov / (fov + z)``."""

MIN_DEPTH: float = 1.0
"""Smallest ``fov + z`` that is still projected; anything closer is culled."""

PIXELS_PER_KM: float = 0.1
"""World-to-render scale applied before projection."""

# --- Camera ---
CAMERA_DISTANCE: float = 3000.0
CAMERA_MIN_DISTANCE: float = 2000.0
CAMERA_MAX_DISTANCE: float = 5000.0
CAMERA_ROTATION_X: float = math.pi / 4
CAMERA_ROTATION_Y: float = math.pi / 2
CAMERA_MAX_PITCH: float = math.pi / 2

DRAG_SENSITIVITY: float = 0.01
"""Radians of camera rotation per pixel of pointer drag."""

WHEEL_ZOOM_FACTOR: float = 10.0
"""Distance units per unit of wheel delta."""

WHEEL_NOTCH_DELTA: float = 100.0
"""Wheel delta reported for one notch of a mouse wheel."""

# --- Loop ---
TIME_ACCELERATION: float = 50.0
"""Simulated seconds per wall-clock second."""

DEFAULT_FPS: int = 60
TRAIL_LENGTH: int = 500

# --- Stars ---
STAR_COUNT: int = 200
STAR_MAX_RADIUS: float = 1.5
STAR_MIN_OPACITY: float = 0.2

# --- Window ---
DEFAULT_WIDTH: int = 1280
DEFAULT_HEIGHT: int = 800

# --- Controls ---
INCLINATION_STEP_DEG: float = 1.0
ECCENTRICITY_STEP: float = 0.01
