"""Classical orbital elements and the perifocal-to-inertial transform.

The same combined 3-1-3 rotation is used for the live satellite state and
for sampling the full orbit, so the marker always sits on the drawn path.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from orbitcanvas.utils.constants import (
    ECCENTRICITY_CAP,
    ECCENTRICITY_SAFETY_MARGIN,
    EARTH_MU_KM3_S2 as MU,
    EARTH_RADIUS_KM as RE,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OrbitalElements:
    """Keplerian elements of an elliptical orbit.

    Instances are replaced wholesale when a parameter changes, never
    mutated.

    Attributes:
        semi_major_axis: Semi-major axis in km.
        eccentricity: Eccentricity in [0, 1).
        inclination: Inclination in radians.
        raan: Right ascension of the ascending node in radians.
        arg_periapsis: Argument of periapsis in radians.
    """

    semi_major_axis: float
    eccentricity: float
    inclination: float = 0.0
    raan: float = 0.0
    arg_periapsis: float = 0.0

    def __post_init__(self) -> None:
        if not self.semi_major_axis > 0:
            logger.error("Invalid semi-major axis: %r", self.semi_major_axis)
            raise ValueError(f"semi_major_axis must be positive, got {self.semi_major_axis!r}")
        if not 0.0 <= self.eccentricity < 1.0:
            logger.error("Invalid eccentricity: %r", self.eccentricity)
            raise ValueError(
                f"eccentricity must be in [0, 1) for a closed orbit, got {self.eccentricity!r}"
            )

    @classmethod
    def from_degrees(
        cls,
        semi_major_axis: float,
        eccentricity: float,
        inclination_deg: float = 0.0,
        raan_deg: float = 0.0,
        arg_periapsis_deg: float = 0.0,
    ) -> OrbitalElements:
        """Build elements from angles given in degrees."""
        return cls(
            semi_major_axis=semi_major_axis,
            eccentricity=eccentricity,
            inclination=math.radians(inclination_deg),
            raan=math.radians(raan_deg),
            arg_periapsis=math.radians(arg_periapsis_deg),
        )

    @property
    def semi_latus_rectum(self) -> float:
        return self.semi_major_axis * (1.0 - self.eccentricity ** 2)

    @property
    def periapsis_radius(self) -> float:
        return self.semi_major_axis * (1.0 - self.eccentricity)

    @property
    def apoapsis_radius(self) -> float:
        return self.semi_major_axis * (1.0 + self.eccentricity)

    @property
    def periapsis_altitude(self) -> float:
        """Periapsis height above the reference body in km."""
        return self.periapsis_radius - RE

    @property
    def apoapsis_altitude(self) -> float:
        """Apoapsis height above the reference body in km."""
        return self.apoapsis_radius - RE

    @property
    def mean_motion(self) -> float:
        """Mean motion in rad/s."""
        return math.sqrt(MU / self.semi_major_axis ** 3)

    @property
    def period(self) -> float:
        """Orbital period in seconds."""
        return 2.0 * math.pi / self.mean_motion


def perifocal_to_inertial(elements: OrbitalElements) -> NDArray[np.float64]:
    """Combined rotation matrix R3(Ω)·R1(i)·R3(ω).

    Columns map the perifocal x (toward periapsis) and y axes, plus the
    orbit normal, into the equatorial inertial frame.

    Args:
        elements: Orbital elements supplying Ω, i and ω.

    Returns:
        A 3x3 rotation matrix.
    """
    cos_o, sin_o = math.cos(elements.raan), math.sin(elements.raan)
    cos_i, sin_i = math.cos(elements.inclination), math.sin(elements.inclination)
    cos_w, sin_w = math.cos(elements.arg_periapsis), math.sin(elements.arg_periapsis)

    return np.array(
        [
            [cos_o * cos_w - sin_o * sin_w * cos_i, -cos_o * sin_w - sin_o * cos_w * cos_i, sin_o * sin_i],
            [sin_o * cos_w + cos_o * sin_w * cos_i, -sin_o * sin_w + cos_o * cos_w * cos_i, -cos_o * sin_i],
            [sin_w * sin_i, cos_w * sin_i, cos_i],
        ],
        dtype=np.float64,
    )


def perifocal_position(elements: OrbitalElements, true_anomaly: NDArray[np.float64] | float) -> NDArray[np.float64]:
    """Position(s) in the perifocal frame from the conic equation.

    Args:
        elements: Orbital elements supplying a and e.
        true_anomaly: True anomaly in radians, scalar or 1-D array.

    Returns:
        Array of shape (3,) for a scalar anomaly or (n, 3) for an array.
    """
    nu = np.asarray(true_anomaly, dtype=np.float64)
    e = elements.eccentricity
    r = elements.semi_latus_rectum / (1.0 + e * np.cos(nu))
    return np.stack((r * np.cos(nu), r * np.sin(nu), np.zeros_like(nu)), axis=-1)


def elements_to_inertial_point(elements: OrbitalElements, true_anomaly: float) -> NDArray[np.float64]:
    """Inertial position in km at the given true anomaly (radians)."""
    return perifocal_to_inertial(elements) @ perifocal_position(elements, true_anomaly)


def elements_to_state(
    elements: OrbitalElements, true_anomaly: float
) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    """Inertial position (km) and velocity (km/s) at the given true anomaly.

    Args:
        elements: Orbital elements.
        true_anomaly: True anomaly in radians.

    Returns:
        Tuple of (position, velocity), each of shape (3,).
    """
    rotation = perifocal_to_inertial(elements)
    e = elements.eccentricity
    h = math.sqrt(MU * elements.semi_latus_rectum)
    v_pqw = np.array(
        [-MU / h * math.sin(true_anomaly), MU / h * (e + math.cos(true_anomaly)), 0.0],
        dtype=np.float64,
    )
    position = rotation @ perifocal_position(elements, true_anomaly)
    return position, rotation @ v_pqw


def safe_max_eccentricity(
    semi_major_axis: float,
    body_radius: float = RE,
    margin: float = ECCENTRICITY_SAFETY_MARGIN,
    cap: float = ECCENTRICITY_CAP,
) -> float:
    """Largest eccentricity whose periapsis stays clear of the body.

    With ``e_max = 1 - R/a - margin`` the periapsis is ``R + margin·a``.

    Args:
        semi_major_axis: Semi-major axis in km.
        body_radius: Radius of the reference body in km.
        margin: Eccentricity margin below the surface-grazing value.
        cap: Absolute ceiling.

    Returns:
        The maximum allowed eccentricity, never negative.
    """
    raw = 1.0 - body_radius / semi_major_axis
    return max(0.0, min(cap, raw - margin))


def clamp_eccentricity(
    eccentricity: float,
    semi_major_axis: float,
    body_radius: float = RE,
    margin: float = ECCENTRICITY_SAFETY_MARGIN,
) -> float:
    """Clamp ``eccentricity`` into ``[0, safe_max_eccentricity(a)]``."""
    return max(0.0, min(eccentricity, safe_max_eccentricity(semi_major_axis, body_radius, margin)))
