"""Tests for the session controller: input handling, reparameterization and the frame tick."""
from __future__ import annotations

import math

import numpy as np
import pytest

from orbitcanvas.app.controller import Controller
from orbitcanvas.core.elements import safe_max_eccentricity
from orbitcanvas.utils.config import ViewerConfig
from orbitcanvas.utils.constants import EARTH_RADIUS_KM


@pytest.fixture
def controller(config: ViewerConfig, clock) -> Controller:
    return Controller(config, clock=clock)


def test_default_scenario(controller: Controller):
    assert controller.elements.semi_major_axis == pytest.approx(10371.0)
    assert controller.elements.eccentricity == 0.0
    assert math.degrees(controller.elements.inclination) == pytest.approx(51.6)
    assert controller.path.shape == (360, 3)
    np.testing.assert_allclose(controller.path[0], [10371.0, 0.0, 0.0], atol=1e-9)
    assert controller.path[0][2] == pytest.approx(0.0, abs=1e-9)


def test_satellite_unavailable_until_initialized(controller: Controller, recorder):
    assert controller.satellite_position() is None
    assert controller.tick(recorder) is False
    controller.initialize()
    assert controller.satellite_position() is not None
    assert controller.tick(recorder) is True


def test_tick_advances_by_scaled_wall_time(controller: Controller, clock, recorder):
    controller.initialize()
    clock.advance(2.0)
    controller.tick(recorder)
    assert controller.propagator.elapsed_s == pytest.approx(2.0 * 50.0)


def test_tick_records_trail(controller: Controller, clock, recorder):
    controller.initialize()
    for _ in range(3):
        clock.advance(0.1)
        controller.tick(recorder)
    assert len(controller.trail) == 3


def test_drag_rotates_camera(controller: Controller):
    rx, ry = controller.camera.rotation_x, controller.camera.rotation_y
    controller.pointer_down(100, 100)
    controller.pointer_move(130, 90)
    assert controller.camera.rotation_y == pytest.approx(ry + 0.3)
    assert controller.camera.rotation_x == pytest.approx(rx - 0.1)


def test_move_without_press_is_ignored(controller: Controller):
    before = (controller.camera.rotation_x, controller.camera.rotation_y)
    controller.pointer_move(500, 500)
    controller.pointer_down(0, 0)
    controller.pointer_up()
    controller.pointer_move(100, 100)
    assert (controller.camera.rotation_x, controller.camera.rotation_y) == before


def test_large_vertical_drags_keep_pitch_clamped(controller: Controller):
    controller.pointer_down(0, 0)
    for y in range(0, 100000, 997):
        controller.pointer_move(0, y)
        assert -math.pi / 2 <= controller.camera.rotation_x <= math.pi / 2
    controller.pointer_move(0, -10**7)
    assert controller.camera.rotation_x == pytest.approx(-math.pi / 2)


def test_wheel_zooms_within_limits(controller: Controller):
    controller.wheel(10.0)  # scroll down: closer
    assert controller.camera.distance == pytest.approx(2900.0)
    controller.wheel(-1e5)
    assert controller.camera.distance == 5000.0
    controller.wheel(1e5)
    assert controller.camera.distance == 2000.0


def test_camera_input_does_not_rebuild_path(controller: Controller):
    path = controller.path
    controller.pointer_down(0, 0)
    controller.pointer_move(50, 50)
    controller.wheel(3)
    assert controller.path is path


def test_eccentricity_is_clamped_to_safe_maximum(controller: Controller):
    controller.set_eccentricity(0.99)
    assert controller.eccentricity == pytest.approx(controller.max_eccentricity)
    assert controller.max_eccentricity == pytest.approx(safe_max_eccentricity(10371.0))
    controller.set_eccentricity(-1.0)
    assert controller.eccentricity == 0.0


def test_max_eccentricity_path_stays_above_surface(controller: Controller):
    controller.set_eccentricity(controller.max_eccentricity)
    assert np.linalg.norm(controller.path, axis=1).min() >= EARTH_RADIUS_KM


def test_reparameterization_replaces_state(controller: Controller, clock, recorder):
    controller.initialize()
    clock.advance(1.0)
    controller.tick(recorder)
    old_elements, old_path, old_prop = controller.elements, controller.path, controller.propagator
    assert len(controller.trail) == 1

    clock.advance(5.0)
    controller.set_inclination_deg(98.0)

    assert controller.elements is not old_elements
    assert controller.path is not old_path
    assert controller.propagator is not old_prop
    assert controller.propagator.elapsed_s == 0.0
    assert len(controller.trail) == 0
    assert math.degrees(controller.elements.inclination) == pytest.approx(98.0)

    # the clock was reset, so the next frame does not jump by the 5 s spent adjusting
    clock.advance(0.5)
    controller.tick(recorder)
    assert controller.propagator.elapsed_s == pytest.approx(0.5 * 50.0)


def test_new_propagator_starts_on_new_path(controller: Controller):
    controller.initialize()
    controller.set_eccentricity(0.3)
    np.testing.assert_allclose(controller.satellite_position(), controller.path[0], atol=1e-6)


def test_inclination_is_clamped(controller: Controller):
    controller.set_inclination_deg(270.0)
    assert controller.inclination_deg == 180.0
    controller.set_inclination_deg(-5.0)
    assert controller.inclination_deg == 0.0


def test_resize_regenerates_stars(controller: Controller):
    first = controller.stars.ensure(controller.width, controller.height)
    controller.resize(320, 200)
    stars = controller.stars.stars
    assert stars is not first
    assert len(stars) == 200
    assert all(0 <= s.x <= 320 and 0 <= s.y <= 200 for s in stars)
    assert controller.projector.width == 320


def test_resize_keeps_orbit(controller: Controller):
    elements, path = controller.elements, controller.path
    controller.resize(1000, 700)
    assert controller.elements is elements
    assert controller.path is path


def test_render_does_not_mutate_domain_state(controller: Controller, recorder, clock):
    controller.initialize()
    cam = (controller.camera.rotation_x, controller.camera.rotation_y, controller.camera.distance)
    path = controller.path.copy()
    controller.render(recorder)
    assert (controller.camera.rotation_x, controller.camera.rotation_y, controller.camera.distance) == cam
    np.testing.assert_array_equal(controller.path, path)


def test_status_readout(controller: Controller):
    status = controller.status()
    assert "speed_km_s" not in status
    controller.initialize()
    status = controller.status()
    assert status["inclination_deg"] == pytest.approx(51.6)
    assert status["periapsis_alt_km"] == pytest.approx(4000.0)
    assert status["speed_km_s"] == pytest.approx(math.sqrt(398600.4418 / 10371.0))
