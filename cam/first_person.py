# Copyright Dario Mylonopoulos
# SPDX-License-Identifier: MIT

import logging
import math
from dataclasses import dataclass
from enum import Flag
from typing import Optional

from pyglm.glm import angleAxis, vec3

from .camera import WORLD_UP, Camera, Vec3Like, local_forward, rotation_sign
from .config import FirstPersonSettings, Handedness

logger = logging.getLogger(__name__)


class FirstPersonAction(Flag):
    NONE = 0
    MOVE_FORWARD = 0b0000001
    MOVE_BACK = 0b0000010
    STRAFE_LEFT = 0b0000100
    STRAFE_RIGHT = 0b0001000
    FLY_UP = 0b0010000
    FLY_DOWN = 0b0100000
    MOVE_FASTER = 0b1000000


@dataclass(frozen=True)
class FirstPersonKeyMap:
    # Key names as reported by the host windowing layer
    move_forward: str = "w"
    move_back: str = "s"
    strafe_left: str = "a"
    strafe_right: str = "d"
    fly_up: str = "space"
    fly_down: str = "left_shift"
    move_faster: str = "left_ctrl"

    @classmethod
    def keyboard_wasd(cls) -> "FirstPersonKeyMap":
        return cls()

    @classmethod
    def keyboard_esdf(cls) -> "FirstPersonKeyMap":
        return cls(
            move_forward="e",
            move_back="d",
            strafe_left="s",
            strafe_right="f",
            fly_up="space",
            fly_down="z",
            move_faster="left_shift",
        )

    def action_for(self, key: str) -> Optional[FirstPersonAction]:
        bindings = {
            self.move_forward: FirstPersonAction.MOVE_FORWARD,
            self.move_back: FirstPersonAction.MOVE_BACK,
            self.strafe_left: FirstPersonAction.STRAFE_LEFT,
            self.strafe_right: FirstPersonAction.STRAFE_RIGHT,
            self.fly_up: FirstPersonAction.FLY_UP,
            self.fly_down: FirstPersonAction.FLY_DOWN,
            self.move_faster: FirstPersonAction.MOVE_FASTER,
        }
        return bindings.get(key)


def _sign(x: float) -> float:
    if x == 0.0:
        return 0.0
    return math.copysign(1.0, x)


class FirstPerson:
    """
    A flying first person camera.

    Yaw and pitch follow relative mouse motion, movement follows the held
    actions. The direction is stored as (right, up, forward) in the horizontal
    frame of the current yaw.
    """

    def __init__(
        self,
        position: Vec3Like,
        settings: Optional[FirstPersonSettings] = None,
        handedness: Handedness = Handedness.RIGHT_HANDED,
    ):
        self.settings = settings or FirstPersonSettings()
        self.handedness = handedness

        # state
        self.position = vec3(position)
        self.yaw = 0.0
        self.pitch = 0.0
        self.direction = vec3(0)
        self.velocity = 1.0
        self.actions = FirstPersonAction.NONE

    def camera(self, dt: float) -> Camera:
        dh = dt * self.velocity * self.settings.speed_horizontal
        dv = dt * self.settings.speed_vertical

        heading = angleAxis(rotation_sign(self.handedness) * self.yaw, WORLD_UP)
        right = heading * vec3(1, 0, 0)
        forward = heading * local_forward(self.handedness)
        position = (
            self.position
            + (right * self.direction.x + forward * self.direction.z) * dh  # type: ignore
            + WORLD_UP * (self.direction.y * dv)
        )

        camera = Camera.new(position, self.handedness)
        camera.set_yaw_pitch(self.yaw, self.pitch)
        return camera

    def update(self, dt: float) -> None:
        self.position = self.camera(dt).position

    def mouse_relative(self, dx: float, dy: float) -> None:
        s = self.settings.mouse_sensitivity
        self.yaw = math.fmod(self.yaw - dx * s, 2.0 * math.pi)
        self.pitch = min(max(self.pitch - dy * s, -math.pi / 2), math.pi / 2)

    def press(self, action: FirstPersonAction) -> None:
        self.actions |= action
        logger.debug("First person press %s, held %s", action, self.actions)

        if action == FirstPersonAction.MOVE_FASTER:
            self.velocity = self.settings.faster_multiplier
            return

        x, y, z = self.direction
        if action == FirstPersonAction.MOVE_FORWARD:
            z = 1.0
        elif action == FirstPersonAction.MOVE_BACK:
            z = -1.0
        elif action == FirstPersonAction.STRAFE_LEFT:
            x = -1.0
        elif action == FirstPersonAction.STRAFE_RIGHT:
            x = 1.0
        elif action == FirstPersonAction.FLY_UP:
            y = 1.0
        elif action == FirstPersonAction.FLY_DOWN:
            y = -1.0
        self._set_direction(x, y, z)

    def release(self, action: FirstPersonAction) -> None:
        self.actions &= ~action
        logger.debug("First person release %s, held %s", action, self.actions)

        if action == FirstPersonAction.MOVE_FASTER:
            self.velocity = 1.0
            return

        # Fall back to the opposite direction if it is still held
        held = self.actions
        x, y, z = self.direction
        if action == FirstPersonAction.MOVE_FORWARD:
            z = -1.0 if FirstPersonAction.MOVE_BACK in held else 0.0
        elif action == FirstPersonAction.MOVE_BACK:
            z = 1.0 if FirstPersonAction.MOVE_FORWARD in held else 0.0
        elif action == FirstPersonAction.STRAFE_LEFT:
            x = 1.0 if FirstPersonAction.STRAFE_RIGHT in held else 0.0
        elif action == FirstPersonAction.STRAFE_RIGHT:
            x = -1.0 if FirstPersonAction.STRAFE_LEFT in held else 0.0
        elif action == FirstPersonAction.FLY_UP:
            y = -1.0 if FirstPersonAction.FLY_DOWN in held else 0.0
        elif action == FirstPersonAction.FLY_DOWN:
            y = 1.0 if FirstPersonAction.FLY_UP in held else 0.0
        self._set_direction(x, y, z)

    def _set_direction(self, x: float, y: float, z: float) -> None:
        x, z = _sign(x), _sign(z)
        if x != 0.0 and z != 0.0:
            x, z = x / math.sqrt(2), z / math.sqrt(2)
        self.direction = vec3(x, y, z)
