"""Rigid rotations of 3D points about the coordinate axes.

Both functions accept a single point of shape ``(3,)`` or a batch of shape
``(n, 3)`` and return a new array of the same shape. Right-handed
rotation matrices are used throughout.
"""
from __future__ import annotations

import math

import numpy as np
from numpy.typing import ArrayLike, NDArray


def rotate_about_x(point: ArrayLike, angle: float) -> NDArray[np.float64]:
    """Rotate ``point`` by ``angle`` radians about the X axis.

    Args:
        point: Point(s) with shape (3,) or (n, 3).
        angle: Rotation angle in radians.

    Returns:
        Rotated point(s), same shape as the input.
    """
    p = np.asarray(point, dtype=np.float64)
    c = math.cos(angle)
    s = math.sin(angle)
    x, y, z = p[..., 0], p[..., 1], p[..., 2]
    return np.stack((x, y * c - z * s, y * s + z * c), axis=-1)


def rotate_about_y(point: ArrayLike, angle: float) -> NDArray[np.float64]:
    """Rotate ``point`` by ``angle`` radians about the Y axis.

    Args:
        point: Point(s) with shape (3,) or (n, 3).
        angle: Rotation angle in radians.

    Returns:
        Rotated point(s), same shape as the input.
    """
    p = np.asarray(point, dtype=np.float64)
    c = math.cos(angle)
    s = math.sin(angle)
    x, y, z = p[..., 0], p[..., 1], p[..., 2]
    return np.stack((x * c + z * s, y, -x * s + z * c), axis=-1)
