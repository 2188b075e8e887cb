"""Camera state and the world-to-screen projection pipeline.

World points are rotated into camera space (X rotation first, then Y),
pushed back by the camera distance and scaled by ``fov / (fov + z)``
around the viewport centre. Nothing is cached: every call reads the live
camera and viewport.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike, NDArray

from orbitcanvas.core.rotation import rotate_about_x, rotate_about_y
from orbitcanvas.utils import constants as C

logger = logging.getLogger(__name__)


@dataclass
class CameraState:
    """Orientation and distance of the orbiting camera.

    Only user input changes this; the render loop just reads it.

    Attributes:
        rotation_x: Pitch in radians, kept within [-π/2, π/2].
        rotation_y: Yaw in radians, unconstrained.
        distance: Depth offset added to camera-space z.
        min_distance: Lower zoom limit.
        max_distance: Upper zoom limit.
    """

    rotation_x: float = C.CAMERA_ROTATION_X
    rotation_y: float = C.CAMERA_ROTATION_Y
    distance: float = C.CAMERA_DISTANCE
    min_distance: float = C.CAMERA_MIN_DISTANCE
    max_distance: float = C.CAMERA_MAX_DISTANCE

    def __post_init__(self) -> None:
        self.rotation_x = _clamp(self.rotation_x, -C.CAMERA_MAX_PITCH, C.CAMERA_MAX_PITCH)
        self.distance = _clamp(self.distance, self.min_distance, self.max_distance)

    def rotate(self, delta_x: float, delta_y: float) -> None:
        """Apply a drag of ``delta_x``/``delta_y`` radians (yaw/pitch)."""
        self.rotation_y += delta_x
        self.rotation_x = _clamp(self.rotation_x + delta_y, -C.CAMERA_MAX_PITCH, C.CAMERA_MAX_PITCH)

    def zoom(self, delta: float) -> None:
        """Move the camera by ``delta`` distance units, within the zoom limits."""
        self.distance = _clamp(self.distance + delta, self.min_distance, self.max_distance)


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


class Projector:
    """Maps world points to screen pixels for a live camera and viewport.

    Args:
        camera: Camera whose current orientation and distance are used.
        width: Viewport width in pixels.
        height: Viewport height in pixels.
        fov: Pseudo-perspective constant.
    """

    def __init__(self, camera: CameraState, width: float, height: float, fov: float = C.FIELD_OF_VIEW):
        self.camera = camera
        self.width = width
        self.height = height
        self.fov = fov

    def resize(self, width: float, height: float) -> None:
        self.width = width
        self.height = height

    def to_camera_space(self, points: ArrayLike) -> NDArray[np.float64]:
        """Rotate world point(s) into camera space. X rotation precedes Y."""
        rotated = rotate_about_x(points, self.camera.rotation_x)
        return rotate_about_y(rotated, self.camera.rotation_y)

    def project(self, points: ArrayLike) -> tuple[NDArray[np.float64], NDArray[np.bool_]]:
        """Project world points to screen coordinates.

        Points whose depth denominator ``fov + z`` is at or below
        ``MIN_DEPTH`` are culled: their mask entry is False and their
        coordinates are NaN.

        Args:
            points: World points with shape (n, 3) (or (3,)).

        Returns:
            Tuple of (screen_xy with shape (..., 2), visible mask with shape (...)).
        """
        cam = self.to_camera_space(points)
        denom = self.fov + cam[..., 2] + self.camera.distance
        visible = denom > C.MIN_DEPTH

        scale = np.full(denom.shape, np.nan)
        np.divide(self.fov, denom, out=scale, where=visible)

        screen = np.stack(
            (cam[..., 0] * scale + self.width / 2, cam[..., 1] * scale + self.height / 2),
            axis=-1,
        )
        return screen, visible

    def project_point(self, point: ArrayLike) -> tuple[float, float] | None:
        """Project a single world point; None when it is culled."""
        screen, visible = self.project(point)
        if not bool(visible):
            logger.debug("Culled point behind the projection plane: %s", point)
            return None
        return float(screen[0]), float(screen[1])
