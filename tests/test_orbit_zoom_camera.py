import math

import numpy as np
import pytest
from pyglm.glm import normalize

from cam.config import Handedness, OrbitZoomCameraSettings
from cam.orbit_zoom_camera import OrbitZoomAction, OrbitZoomCamera


def close(a, b, atol=1e-4):
    return np.allclose(np.array(a), np.array(b), atol=atol)


def assert_looks_at_target(orbit):
    camera = orbit.camera()
    assert close(camera.forward(), normalize(orbit.target - camera.position))


@pytest.mark.parametrize("handedness, z", [(Handedness.RIGHT_HANDED, 10.0), (Handedness.LEFT_HANDED, -10.0)])
def test_default_camera(handedness, z):
    orbit = OrbitZoomCamera((0.0, 0.0, 0.0), handedness=handedness)
    camera = orbit.camera()
    assert close(camera.position, (0, 0, z))
    assert_looks_at_target(orbit)


def test_scroll_orbits():
    orbit = OrbitZoomCamera((1.0, 0.0, 0.0))
    orbit.mouse_scroll((math.pi / 2) / orbit.settings.orbit_speed, 0.0)
    assert orbit.yaw == pytest.approx(math.pi / 2)
    assert close(orbit.camera().position, (11, 0, 0))
    assert_looks_at_target(orbit)

    orbit.mouse_scroll(3.0, -7.0)
    assert_looks_at_target(orbit)
    assert np.linalg.norm(np.array(orbit.camera().position - orbit.target)) == pytest.approx(10.0, rel=1e-5)


def test_mouse_relative_requires_orbit():
    orbit = OrbitZoomCamera((0.0, 0.0, 0.0))
    orbit.mouse_relative(10.0, 0.0)
    assert orbit.yaw == 0.0

    orbit.press(OrbitZoomAction.ORBIT)
    orbit.mouse_relative(10.0, 4.0)
    assert orbit.yaw == pytest.approx(-0.5)
    assert orbit.pitch == pytest.approx(0.2)

    orbit.release(OrbitZoomAction.ORBIT)
    orbit.mouse_relative(10.0, 4.0)
    assert orbit.yaw == pytest.approx(-0.5)


def test_pan_moves_target():
    orbit = OrbitZoomCamera((0.0, 0.0, 0.0))
    orbit.press(OrbitZoomAction.PAN)
    orbit.mouse_scroll(1.0, 2.0)
    assert close(orbit.target, (0.1, 0.2, 0))
    assert close(orbit.camera().position, (0.1, 0.2, 10))
    assert orbit.yaw == 0.0


def test_zoom_changes_distance_and_clamps():
    orbit = OrbitZoomCamera((0.0, 0.0, 0.0), OrbitZoomCameraSettings(min_distance=0.5))
    orbit.press(OrbitZoomAction.ZOOM)
    orbit.mouse_scroll(0.0, 5.0)
    assert orbit.distance == pytest.approx(10.5)

    orbit.mouse_scroll(0.0, -1000.0)
    assert orbit.distance == 0.5

    orbit.release(OrbitZoomAction.ZOOM)
    assert orbit.actions == OrbitZoomAction.NONE
    orbit.mouse_scroll(0.0, 1.0)
    assert orbit.distance == 0.5
    assert orbit.pitch == pytest.approx(0.05)


def test_pan_takes_precedence_over_zoom():
    orbit = OrbitZoomCamera((0.0, 0.0, 0.0))
    orbit.press(OrbitZoomAction.ZOOM)
    orbit.press(OrbitZoomAction.PAN)
    orbit.control(0.0, 1.0)
    assert orbit.distance == 10.0
    assert close(orbit.target, (0, 0.1, 0))


def test_orbit_left_handed_mirrors_right_handed():
    rh = OrbitZoomCamera((0.0, 0.0, 0.0))
    lh = OrbitZoomCamera((0.0, 0.0, 0.0), handedness=Handedness.LEFT_HANDED)
    for orbit in (rh, lh):
        orbit.mouse_scroll(10.0, 4.0)
        assert_looks_at_target(orbit)

    rh_position = np.array(rh.camera().position)
    lh_position = np.array(lh.camera().position)
    assert np.allclose(lh_position[:2], rh_position[:2], atol=1e-4)
    assert lh_position[2] == pytest.approx(-rh_position[2], abs=1e-4)
