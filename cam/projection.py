# Copyright Dario Mylonopoulos
# SPDX-License-Identifier: MIT

import math
from dataclasses import dataclass
from typing import Callable, Dict, Tuple, Union

import numpy as np
from pyglm.glm import (
    mat4,
    orthoLH_NO,
    orthoLH_ZO,
    orthoRH_NO,
    orthoRH_ZO,
    perspectiveLH_NO,
    perspectiveLH_ZO,
    perspectiveRH_NO,
    perspectiveRH_ZO,
    radians,
)

from .camera import as_array
from .config import CameraConfig, CameraProjection, DepthRange, Handedness

_PERSPECTIVE: Dict[Tuple[Handedness, DepthRange], Callable[[float, float, float, float], mat4]] = {
    (Handedness.RIGHT_HANDED, DepthRange.ZERO_TO_ONE): perspectiveRH_ZO,
    (Handedness.RIGHT_HANDED, DepthRange.NEGATIVE_ONE_TO_ONE): perspectiveRH_NO,
    (Handedness.LEFT_HANDED, DepthRange.ZERO_TO_ONE): perspectiveLH_ZO,
    (Handedness.LEFT_HANDED, DepthRange.NEGATIVE_ONE_TO_ONE): perspectiveLH_NO,
}

_ORTHOGRAPHIC: Dict[Tuple[Handedness, DepthRange], Callable[[float, float, float, float, float, float], mat4]] = {
    (Handedness.RIGHT_HANDED, DepthRange.ZERO_TO_ONE): orthoRH_ZO,
    (Handedness.RIGHT_HANDED, DepthRange.NEGATIVE_ONE_TO_ONE): orthoRH_NO,
    (Handedness.LEFT_HANDED, DepthRange.ZERO_TO_ONE): orthoLH_ZO,
    (Handedness.LEFT_HANDED, DepthRange.NEGATIVE_ONE_TO_ONE): orthoLH_NO,
}


class InvalidProjectionParameters(ValueError):
    pass


def _to_float32(**values: float) -> Dict[str, float]:
    """Rounds values to the float32 numbers a mat4 stores, they must stay finite."""
    result = {}
    with np.errstate(over="ignore"):
        for name, value in values.items():
            rounded = float(np.float32(value))
            if not math.isfinite(rounded):
                raise InvalidProjectionParameters(f"{name} must be finite in float32, got {value}")
            result[name] = rounded
    return result


def _check_matrix(m: mat4, params: object) -> mat4:
    if not np.isfinite(as_array(m)).all():
        raise InvalidProjectionParameters(f"{params} produces a non-finite projection matrix")
    return m


@dataclass(frozen=True)
class PerspectiveProjection:
    fov: float
    """Vertical field of view in radians"""

    aspect_ratio: float
    """Horizontal over vertical aspect ratio"""

    near: float
    far: float
    handedness: Handedness = Handedness.RIGHT_HANDED
    depth_range: DepthRange = DepthRange.ZERO_TO_ONE

    def validate(self) -> None:
        v = _to_float32(fov=self.fov, aspect_ratio=self.aspect_ratio, near=self.near, far=self.far)
        if not 0.0 < v["fov"] < math.pi:
            raise InvalidProjectionParameters(f"fov must be in (0, pi) radians, got {self.fov}")
        if v["aspect_ratio"] <= 0.0:
            raise InvalidProjectionParameters(f"aspect_ratio must be positive, got {self.aspect_ratio}")
        if v["near"] <= 0.0:
            raise InvalidProjectionParameters(f"near must be positive, got {self.near}")
        if v["near"] >= v["far"]:
            raise InvalidProjectionParameters(f"near ({self.near}) must be less than far ({self.far})")

    def matrix(self) -> mat4:
        self.validate()
        perspective = _PERSPECTIVE[(self.handedness, self.depth_range)]
        return _check_matrix(perspective(self.fov, self.aspect_ratio, self.near, self.far), self)


@dataclass(frozen=True)
class OrthographicProjection:
    center: Tuple[float, float]
    half_extents: Tuple[float, float]
    """Half size of the view volume, the horizontal extent is scaled by the aspect ratio"""

    aspect_ratio: float
    near: float
    far: float
    handedness: Handedness = Handedness.RIGHT_HANDED
    depth_range: DepthRange = DepthRange.ZERO_TO_ONE

    def validate(self) -> None:
        v = _to_float32(
            center_x=self.center[0],
            center_y=self.center[1],
            half_extent_x=self.half_extents[0],
            half_extent_y=self.half_extents[1],
            aspect_ratio=self.aspect_ratio,
            near=self.near,
            far=self.far,
        )
        if v["aspect_ratio"] <= 0.0:
            raise InvalidProjectionParameters(f"aspect_ratio must be positive, got {self.aspect_ratio}")
        if v["half_extent_x"] <= 0.0 or v["half_extent_y"] <= 0.0:
            raise InvalidProjectionParameters(f"half_extents must be positive, got {tuple(self.half_extents)}")
        if v["near"] >= v["far"]:
            raise InvalidProjectionParameters(f"near ({self.near}) must be less than far ({self.far})")

    def matrix(self) -> mat4:
        self.validate()
        half_x = self.half_extents[0] * self.aspect_ratio
        half_y = self.half_extents[1]
        bounds = _to_float32(
            left=self.center[0] - half_x,
            right=self.center[0] + half_x,
            bottom=self.center[1] - half_y,
            top=self.center[1] + half_y,
        )
        if bounds["left"] >= bounds["right"] or bounds["bottom"] >= bounds["top"]:
            raise InvalidProjectionParameters(f"{self} collapses to an empty view volume in float32")

        ortho = _ORTHOGRAPHIC[(self.handedness, self.depth_range)]
        m = ortho(bounds["left"], bounds["right"], bounds["bottom"], bounds["top"], self.near, self.far)
        return _check_matrix(m, self)


Projection = Union[PerspectiveProjection, OrthographicProjection]


def projection_matrix(params: Projection) -> mat4:
    return params.matrix()


def projection_from_config(config: CameraConfig, aspect_ratio: float) -> Projection:
    if config.projection == CameraProjection.PERSPECTIVE:
        return PerspectiveProjection(
            fov=radians(config.perspective_vertical_fov),
            aspect_ratio=aspect_ratio,
            near=config.z_near,
            far=config.z_far,
            handedness=config.handedness,
            depth_range=config.depth_range,
        )
    elif config.projection == CameraProjection.ORTHOGRAPHIC:
        return OrthographicProjection(
            center=config.ortho_center,
            half_extents=config.ortho_half_extents,
            aspect_ratio=aspect_ratio,
            near=config.z_near,
            far=config.z_far,
            handedness=config.handedness,
            depth_range=config.depth_range,
        )
    else:
        raise RuntimeError(f"Unhandled camera projection {config.projection}")
