# Copyright Dario Mylonopoulos
# SPDX-License-Identifier: MIT

import logging
from enum import Flag
from typing import Optional

from pyglm.glm import angleAxis, quat, vec3

from .camera import Camera, Vec3Like, local_forward, rotation_sign
from .config import Handedness, OrbitZoomCameraSettings

logger = logging.getLogger(__name__)


class OrbitZoomAction(Flag):
    NONE = 0
    ZOOM = 0b001
    PAN = 0b010
    ORBIT = 0b100


class OrbitZoomCamera:
    """
    A 3dsMax / Blender style camera that orbits around a target point.

    Dragging while ORBIT is held or scrolling orbits the camera, holding PAN
    or ZOOM turns the same motion into panning or zooming.
    """

    def __init__(
        self,
        target: Vec3Like,
        settings: Optional[OrbitZoomCameraSettings] = None,
        handedness: Handedness = Handedness.RIGHT_HANDED,
    ):
        self.settings = settings or OrbitZoomCameraSettings()
        self.handedness = handedness

        # state
        self.target = vec3(target)
        self.rotation = quat(1, 0, 0, 0)
        self.yaw = 0.0
        self.pitch = 0.0
        self.distance = self.settings.initial_distance
        self.actions = OrbitZoomAction.NONE

    def camera(self) -> Camera:
        target_to_camera = self.rotation * (-local_forward(self.handedness) * self.distance)
        camera = Camera.new(self.target + target_to_camera, self.handedness)  # type: ignore
        camera.set_rotation(self.rotation)
        return camera

    def control(self, dx: float, dy: float) -> None:
        if OrbitZoomAction.PAN in self.actions:
            # Pan target position along plane normal to camera direction
            dx = dx * self.settings.pan_speed
            dy = dy * self.settings.pan_speed

            right = self.rotation * vec3(1, 0, 0)
            up = self.rotation * vec3(0, 1, 0)
            self.target = self.target + up * dy + right * dx  # type: ignore
        elif OrbitZoomAction.ZOOM in self.actions:
            distance = self.distance + dy * self.settings.zoom_speed
            if distance < self.settings.min_distance:
                logger.debug("Orbit zoom distance %f clamped to %f", distance, self.settings.min_distance)
                distance = self.settings.min_distance
            self.distance = distance
        else:
            self.yaw += dx * self.settings.orbit_speed
            self.pitch += dy * self.settings.orbit_speed
            s = rotation_sign(self.handedness)
            self.rotation = angleAxis(s * self.yaw, vec3(0, 1, 0)) * angleAxis(s * self.pitch, vec3(1, 0, 0))

    def mouse_scroll(self, dx: float, dy: float) -> None:
        self.control(dx, dy)

    def mouse_relative(self, dx: float, dy: float) -> None:
        if OrbitZoomAction.ORBIT in self.actions:
            self.control(-dx, dy)

    def press(self, action: OrbitZoomAction) -> None:
        self.actions |= action

    def release(self, action: OrbitZoomAction) -> None:
        self.actions &= ~action
