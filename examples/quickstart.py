"""orbitcanvas quickstart — build an orbit and see where the satellite lands on screen."""

import math

import numpy as np

from orbitcanvas import CameraState, KeplerPropagator, OrbitalElements, Projector, build_orbit_path
from orbitcanvas.core.elements import safe_max_eccentricity

# Molniya-like orbit, kept clear of the surface
a = 26600.0
e = min(0.74, safe_max_eccentricity(a))
orbit = OrbitalElements.from_degrees(a, e, inclination_deg=63.4, raan_deg=40.0, arg_periapsis_deg=270.0)

print(f"Period:    {orbit.period / 3600:.2f} h")
print(f"Periapsis: {orbit.periapsis_altitude:.0f} km")
print(f"Apoapsis:  {orbit.apoapsis_altitude:.0f} km")

path = build_orbit_path(orbit)
radii = np.linalg.norm(path, axis=1)
print(f"Path:      {len(path)} points, r = {radii.min():.0f}..{radii.max():.0f} km")

sat = KeplerPropagator(orbit)
sat.advance(orbit.period / 4)
print(f"After T/4: nu = {math.degrees(sat.true_anomaly):.1f} deg, v = {sat.speed:.2f} km/s")

projector = Projector(CameraState(), width=1280, height=800)
screen = projector.project_point(sat.current_position() * 0.1)
print(f"On screen: {screen}")
