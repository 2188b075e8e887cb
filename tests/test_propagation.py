"""Tests for the Keplerian propagator."""
from __future__ import annotations

import math

import numpy as np
import pytest

from orbitcanvas.core.elements import OrbitalElements, elements_to_inertial_point
from orbitcanvas.core.orbit_path import build_orbit_path
from orbitcanvas.core.propagation import (
    KeplerPropagator,
    StateVector,
    mean_to_true_anomaly,
    true_to_mean_anomaly,
)


def test_initial_position_matches_elements(elliptic_elements: OrbitalElements):
    prop = KeplerPropagator(elliptic_elements, true_anomaly=0.5)
    np.testing.assert_allclose(prop.current_position(), elements_to_inertial_point(elliptic_elements, 0.5))


def test_full_period_returns_to_start(elliptic_elements: OrbitalElements):
    prop = KeplerPropagator(elliptic_elements)
    start = prop.current_position()
    prop.advance(elliptic_elements.period)
    np.testing.assert_allclose(prop.current_position(), start, atol=1e-6)


def test_half_period_reaches_apoapsis(elliptic_elements: OrbitalElements):
    prop = KeplerPropagator(elliptic_elements)
    prop.advance(elliptic_elements.period / 2)
    assert np.linalg.norm(prop.current_position()) == pytest.approx(elliptic_elements.apoapsis_radius)


def test_circular_orbit_advances_uniformly(circular_elements: OrbitalElements):
    prop = KeplerPropagator(circular_elements)
    prop.advance(circular_elements.period / 4)
    assert prop.true_anomaly == pytest.approx(math.pi / 2)


def test_satellite_stays_on_drawn_path(elliptic_elements: OrbitalElements):
    path = build_orbit_path(elliptic_elements, steps=3600)
    prop = KeplerPropagator(elliptic_elements)
    for _ in range(20):
        prop.advance(elliptic_elements.period / 17)
        gap = np.linalg.norm(path - prop.current_position(), axis=1).min()
        assert gap < 30.0  # within one sample spacing of the 3600-point path


def test_split_steps_equal_one_step(elliptic_elements: OrbitalElements):
    a = KeplerPropagator(elliptic_elements)
    b = KeplerPropagator(elliptic_elements)
    for _ in range(10):
        a.advance(123.0)
    b.advance(1230.0)
    np.testing.assert_allclose(a.current_position(), b.current_position(), atol=1e-6)
    assert a.elapsed_s == pytest.approx(1230.0)


def test_negative_step_rejected(circular_elements: OrbitalElements):
    prop = KeplerPropagator(circular_elements)
    with pytest.raises(ValueError, match="non-negative"):
        prop.advance(-1.0)


def test_state_vector(circular_elements: OrbitalElements):
    prop = KeplerPropagator(circular_elements)
    prop.advance(60.0)
    state = prop.state()
    assert isinstance(state, StateVector)
    assert state.position_km.shape == (3,)
    assert state.velocity_km_s.shape == (3,)
    assert state.elapsed_s == pytest.approx(60.0)
    assert prop.speed == pytest.approx(math.sqrt(398600.4418 / circular_elements.semi_major_axis))


def test_returned_position_is_a_copy(circular_elements: OrbitalElements):
    prop = KeplerPropagator(circular_elements)
    p = prop.current_position()
    p[:] = 0.0
    assert np.linalg.norm(prop.current_position()) > 0


def test_propulsion_parameters_are_stored_but_inert(circular_elements: OrbitalElements):
    heavy = KeplerPropagator(circular_elements, mass_kg=5000.0, isp_s=450.0, thrust_limit_n=20.0)
    light = KeplerPropagator(circular_elements)
    heavy.advance(500.0)
    light.advance(500.0)
    assert heavy.mass_kg == 5000.0
    np.testing.assert_allclose(heavy.current_position(), light.current_position())


@pytest.mark.parametrize("e", [0.0, 0.2, 0.7, 0.95])
@pytest.mark.parametrize("nu", [0.0, 0.4, 2.0, 3.1, 4.5, 6.0])
def test_anomaly_conversions_invert(e, nu):
    assert mean_to_true_anomaly(true_to_mean_anomaly(nu, e), e) == pytest.approx(nu, abs=1e-9)


def test_altitudes(elliptic_elements: OrbitalElements):
    prop = KeplerPropagator(elliptic_elements)
    assert prop.periapsis_altitude == pytest.approx(elliptic_elements.periapsis_altitude)
    assert prop.apoapsis_altitude == pytest.approx(elliptic_elements.apoapsis_altitude)
    assert prop.period == pytest.approx(elliptic_elements.period)
