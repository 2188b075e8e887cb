"""Closed-form Keplerian propagation driven by mean motion."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from orbitcanvas.core.elements import OrbitalElements, elements_to_state
from orbitcanvas.utils.constants import DEFAULT_ISP_S, DEFAULT_MASS_KG, DEFAULT_THRUST_LIMIT_N

logger = logging.getLogger(__name__)

_TWO_PI = 2.0 * math.pi


@dataclass
class StateVector:
    """Position and velocity in the equatorial inertial frame.

    Attributes:
        position_km: [x, y, z] position in km.
        velocity_km_s: [vx, vy, vz] velocity in km/s.
        elapsed_s: Simulated time since the propagator was created.
        true_anomaly: True anomaly in radians, in [0, 2π).
    """

    position_km: NDArray[np.float64]  # shape (3,)
    velocity_km_s: NDArray[np.float64]  # shape (3,)
    elapsed_s: float
    true_anomaly: float


def true_to_mean_anomaly(true_anomaly: float, eccentricity: float) -> float:
    """Convert true anomaly to mean anomaly (radians, in [0, 2π))."""
    e = eccentricity
    ecc_anomaly = 2.0 * math.atan2(
        math.sqrt(1.0 - e) * math.sin(true_anomaly / 2.0),
        math.sqrt(1.0 + e) * math.cos(true_anomaly / 2.0),
    )
    return (ecc_anomaly - e * math.sin(ecc_anomaly)) % _TWO_PI


def mean_to_true_anomaly(mean_anomaly: float, eccentricity: float, tol: float = 1e-12, max_iter: int = 50) -> float:
    """Solve Kepler's equation by Newton iteration and return the true anomaly.

    Args:
        mean_anomaly: Mean anomaly in radians.
        eccentricity: Eccentricity in [0, 1).
        tol: Convergence tolerance on the eccentric anomaly.
        max_iter: Iteration limit.

    Returns:
        True anomaly in radians, in [0, 2π).
    """
    e = eccentricity
    m = mean_anomaly % _TWO_PI
    ecc_anomaly = m if e < 0.8 else math.pi
    for _ in range(max_iter):
        step = (ecc_anomaly - e * math.sin(ecc_anomaly) - m) / (1.0 - e * math.cos(ecc_anomaly))
        ecc_anomaly -= step
        if abs(step) < tol:
            break
    nu = 2.0 * math.atan2(
        math.sqrt(1.0 + e) * math.sin(ecc_anomaly / 2.0),
        math.sqrt(1.0 - e) * math.cos(ecc_anomaly / 2.0),
    )
    return nu % _TWO_PI


class KeplerPropagator:
    """Advances a satellite along a fixed Keplerian orbit.

    Mass, specific impulse and thrust limit are accepted for a future
    propulsion model and are not used by the trajectory.

    Args:
        elements: Orbital elements of the orbit.
        true_anomaly: Initial true anomaly in radians.
        mass_kg: Spacecraft mass in kg.
        isp_s: Specific impulse in seconds.
        thrust_limit_n: Thrust limit in N.
    """

    def __init__(
        self,
        elements: OrbitalElements,
        true_anomaly: float = 0.0,
        mass_kg: float = DEFAULT_MASS_KG,
        isp_s: float = DEFAULT_ISP_S,
        thrust_limit_n: float = DEFAULT_THRUST_LIMIT_N,
    ):
        self.elements = elements
        self.mass_kg = mass_kg
        self.isp_s = isp_s
        self.thrust_limit_n = thrust_limit_n
        self.elapsed_s = 0.0
        self._mean_anomaly = true_to_mean_anomaly(true_anomaly, elements.eccentricity)
        self._true_anomaly = true_anomaly % _TWO_PI
        self._position, self._velocity = elements_to_state(elements, self._true_anomaly)

        logger.debug(
            "Created propagator: a=%.1f km, e=%.4f, period=%.1f s",
            elements.semi_major_axis, elements.eccentricity, elements.period,
        )

    def advance(self, dt: float) -> None:
        """Advance the satellite by ``dt`` simulated seconds.

        Raises:
            ValueError: If ``dt`` is negative.
        """
        if dt < 0:
            logger.error("Negative propagation step: %r", dt)
            raise ValueError(f"Propagation step must be non-negative, got {dt!r}")

        self.elapsed_s += dt
        self._mean_anomaly = (self._mean_anomaly + self.elements.mean_motion * dt) % _TWO_PI
        self._true_anomaly = mean_to_true_anomaly(self._mean_anomaly, self.elements.eccentricity)
        self._position, self._velocity = elements_to_state(self.elements, self._true_anomaly)

    def current_position(self) -> NDArray[np.float64]:
        """Current inertial position in km."""
        return self._position.copy()

    def state(self) -> StateVector:
        return StateVector(
            position_km=self._position.copy(),
            velocity_km_s=self._velocity.copy(),
            elapsed_s=self.elapsed_s,
            true_anomaly=self._true_anomaly,
        )

    @property
    def true_anomaly(self) -> float:
        return self._true_anomaly

    @property
    def period(self) -> float:
        """Orbital period in seconds."""
        return self.elements.period

    @property
    def speed(self) -> float:
        """Current orbital speed in km/s."""
        return float(np.linalg.norm(self._velocity))

    @property
    def periapsis_altitude(self) -> float:
        return self.elements.periapsis_altitude

    @property
    def apoapsis_altitude(self) -> float:
        return self.elements.apoapsis_altitude
