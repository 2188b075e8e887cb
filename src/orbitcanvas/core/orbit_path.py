"""Sampling of a full closed orbit for display."""
from __future__ import annotations

import logging

import numpy as np
from numpy.typing import NDArray

from orbitcanvas.core.elements import OrbitalElements, perifocal_position, perifocal_to_inertial
from orbitcanvas.utils.constants import ORBIT_PATH_STEPS

logger = logging.getLogger(__name__)


def sample_anomalies(steps: int = ORBIT_PATH_STEPS) -> NDArray[np.float64]:
    """True anomalies in radians, uniformly spaced over [0°, 360°)."""
    return np.radians(np.arange(steps, dtype=np.float64) * (360.0 / steps))


def build_orbit_path(elements: OrbitalElements, steps: int = ORBIT_PATH_STEPS) -> NDArray[np.float64]:
    """Sample ``steps`` inertial points around the orbit.

    Points are in increasing true-anomaly order starting at periapsis.
    The result is a closed loop: consumers connect the last point back to
    the first. The returned array is read-only and safe to reuse every
    frame until the elements change.

    Args:
        elements: Orbital elements of the orbit.
        steps: Number of samples.

    Returns:
        Read-only array of shape (steps, 3) in km.
    """
    nu = sample_anomalies(steps)
    # (n, 3) @ R.T applies the same rotation to every row
    path = perifocal_position(elements, nu) @ perifocal_to_inertial(elements).T
    path.flags.writeable = False

    logger.debug(
        "Built orbit path: %d points, a=%.1f km, e=%.3f, i=%.2f rad",
        steps, elements.semi_major_axis, elements.eccentricity, elements.inclination,
    )
    return path
