# Copyright Dario Mylonopoulos
# SPDX-License-Identifier: MIT

import logging
from dataclasses import dataclass

from pyglm.glm import (
    conjugate,
    cross,
    dot,
    length,
    mat4,
    mat4_cast,
    normalize,
    quat,
    quat_cast,
    quatLookAtLH,
    quatLookAtRH,
    translate,
    vec3,
)

from .config import Handedness

logger = logging.getLogger(__name__)


@dataclass
class RigidTransform3D:
    translation: vec3
    rotation: quat

    @classmethod
    def look_at(cls, position: vec3, target: vec3, up: vec3, handedness: Handedness) -> "RigidTransform3D":
        """
        Pose of an object at position whose view axis points at target.

        The view axis is local -Z for right handed and local +Z for left
        handed transforms. If the view direction is parallel to up another
        world axis is used as up instead.
        """
        position = vec3(position)
        d = vec3(target) - position
        if length(d) < 1e-12:
            raise ValueError(f"Look-at target {tuple(target)} coincides with position {tuple(position)}")
        d = normalize(d)

        up = vec3(up)
        if length(cross(d, up)) < 1e-6:
            alt_up = vec3(0, 0, 1) if abs(dot(d, vec3(0, 0, 1))) < 0.999 else vec3(1, 0, 0)
            logger.warning("Look-at direction %s is parallel to up %s, using %s", tuple(d), tuple(up), tuple(alt_up))
            up = alt_up

        if handedness == Handedness.RIGHT_HANDED:
            rot = quatLookAtRH(d, up)
        else:
            rot = quatLookAtLH(d, up)

        return cls(
            translation=position,
            rotation=normalize(rot),
        )

    @classmethod
    def from_mat4(cls, m: mat4) -> "RigidTransform3D":
        """Rigid part of m, scale and projection terms are dropped."""
        return cls(translation=vec3(m[3]), rotation=normalize(quat_cast(m)))

    def as_mat4(self) -> mat4:
        return translate(self.translation) * mat4_cast(self.rotation)  # type: ignore

    def inverse(self) -> "RigidTransform3D":
        # Rotations are unit quaternions, the conjugate is the inverse
        rotation = conjugate(self.rotation)
        return RigidTransform3D(translation=rotation * -self.translation, rotation=rotation)  # type: ignore

    def __matmul__(self, other: "RigidTransform3D") -> "RigidTransform3D":
        """Applies other first, then self."""
        return RigidTransform3D(
            translation=self.translation + self.rotation * other.translation,  # type: ignore
            rotation=self.rotation * other.rotation,
        )
