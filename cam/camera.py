# Copyright Dario Mylonopoulos
# SPDX-License-Identifier: MIT

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple, Union

import numpy as np
from numpy.typing import NDArray
from pyglm.glm import angleAxis, mat4, normalize, quat, row, vec3

from .config import CameraConfig, Handedness
from .transform3d import RigidTransform3D

# Matrices follow the GLM convention: column-major storage, column vectors and
# m[column][row] indexing. Transforms compose right to left, a point goes to
# clip space as projection * view * model * p.

Vec3Like = Union[vec3, Sequence[float]]

WORLD_UP = vec3(0, 1, 0)


def model_view_projection(model: mat4, view: mat4, projection: mat4) -> mat4:
    return projection * view * model  # type: ignore


def view_matrix(camera: "Camera") -> mat4:
    return camera.view()


def as_array(m: mat4) -> NDArray[np.float32]:
    """Returns m as a float32 array indexed as [row, column]."""
    return np.array([tuple(row(m, r)) for r in range(4)], np.float32)


def local_forward(handedness: Handedness) -> vec3:
    if handedness == Handedness.RIGHT_HANDED:
        return vec3(0, 0, -1)
    else:
        return vec3(0, 0, 1)


def rotation_sign(handedness: Handedness) -> float:
    """
    Sign applied to yaw, pitch and roll angles so that positive yaw turns left,
    positive pitch looks up and positive roll tilts the up axis to the right,
    whatever the handedness.
    """
    if handedness == Handedness.RIGHT_HANDED:
        return 1.0
    else:
        return -1.0


@dataclass
class Camera:
    position: vec3
    rotation: quat
    """Rotation from camera local axes to world axes"""

    handedness: Handedness = Handedness.RIGHT_HANDED

    @classmethod
    def new(cls, position: Vec3Like, handedness: Handedness = Handedness.RIGHT_HANDED) -> "Camera":
        """Places the camera at position looking down its local view axis (-Z right handed, +Z left handed)."""
        return cls(
            position=vec3(position),
            rotation=quat(1, 0, 0, 0),
            handedness=handedness,
        )

    @classmethod
    def from_config(cls, config: CameraConfig) -> "Camera":
        pose = RigidTransform3D.look_at(
            vec3(config.position), vec3(config.target), vec3(config.world_up), config.handedness
        )
        return cls(position=pose.translation, rotation=pose.rotation, handedness=config.handedness)

    @classmethod
    def from_view(cls, view: mat4, handedness: Handedness = Handedness.RIGHT_HANDED) -> "Camera":
        pose = RigidTransform3D.from_mat4(view).inverse()
        return cls(position=pose.translation, rotation=normalize(pose.rotation), handedness=handedness)

    def right(self) -> vec3:
        return self.rotation * vec3(1, 0, 0)  # type: ignore

    def up(self) -> vec3:
        return self.rotation * vec3(0, 1, 0)  # type: ignore

    def forward(self) -> vec3:
        return self.rotation * local_forward(self.handedness)  # type: ignore

    def right_up_forward(self) -> Tuple[vec3, vec3, vec3]:
        return self.right(), self.up(), self.forward()

    def pose(self) -> RigidTransform3D:
        return RigidTransform3D(translation=vec3(self.position), rotation=quat(self.rotation))

    def view(self) -> mat4:
        return self.pose().inverse().as_mat4()

    def look_at(self, point: Vec3Like, up: Optional[Vec3Like] = None) -> None:
        up = WORLD_UP if up is None else vec3(up)
        self.rotation = RigidTransform3D.look_at(self.position, vec3(point), up, self.handedness).rotation

    def set_yaw_pitch(self, yaw: float, pitch: float) -> None:
        """Yaw about world +Y followed by pitch about the yawed right axis, in radians."""
        s = rotation_sign(self.handedness)
        self.rotation = normalize(angleAxis(s * yaw, vec3(0, 1, 0)) * angleAxis(s * pitch, vec3(1, 0, 0)))

    def set_rotation(self, rotation: quat) -> None:
        """Sets the orientation relative to the identity orientation."""
        self.rotation = normalize(quat(rotation))

    def update(self, movement_delta: Vec3Like, rotation_delta: Vec3Like) -> "Camera":
        """
        Returns a new camera moved by movement_delta (right, up, forward) along
        the current camera axes and then rotated by rotation_delta (yaw, pitch,
        roll) in radians about the camera local up, right and view axes.
        """
        movement = vec3(movement_delta)
        yaw, pitch, roll = vec3(rotation_delta)

        right, up, forward = self.right_up_forward()
        position = self.position + right * movement.x + up * movement.y + forward * movement.z

        rotation = quat(self.rotation)
        if yaw != 0.0 or pitch != 0.0 or roll != 0.0:
            s = rotation_sign(self.handedness)
            rotation = normalize(
                rotation
                * angleAxis(s * yaw, vec3(0, 1, 0))
                * angleAxis(s * pitch, vec3(1, 0, 0))
                * angleAxis(s * roll, local_forward(self.handedness))
            )

        return Camera(position=vec3(position), rotation=rotation, handedness=self.handedness)
