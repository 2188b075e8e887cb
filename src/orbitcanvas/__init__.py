"""
orbitcanvas — Keplerian orbit viewer with a wireframe Earth.

Samples a closed orbit from classical orbital elements and animates a
satellite along it, seen through a draggable pseudo-perspective camera
in a pygame window.
"""

from __future__ import annotations

__version__ = "0.1.0"

from orbitcanvas.core.elements import (
    OrbitalElements,
    clamp_eccentricity,
    elements_to_inertial_point,
    elements_to_state,
    safe_max_eccentricity,
)
from orbitcanvas.core.orbit_path import build_orbit_path
from orbitcanvas.core.projection import CameraState, Projector
from orbitcanvas.core.propagation import KeplerPropagator, StateVector
from orbitcanvas.core.rotation import rotate_about_x, rotate_about_y
from orbitcanvas.render.canvas import DrawingContext
from orbitcanvas.render.frame import FrameRenderer
from orbitcanvas.app.controller import Controller
from orbitcanvas.utils.config import ViewerConfig

__all__ = [
    "__version__",
    "OrbitalElements",
    "clamp_eccentricity",
    "elements_to_inertial_point",
    "elements_to_state",
    "safe_max_eccentricity",
    "build_orbit_path",
    "CameraState",
    "Projector",
    "KeplerPropagator",
    "StateVector",
    "rotate_about_x",
    "rotate_about_y",
    "DrawingContext",
    "FrameRenderer",
    "Controller",
    "ViewerConfig",
]
