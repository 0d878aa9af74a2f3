# Copyright Dario Mylonopoulos
# SPDX-License-Identifier: MIT

import math
from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class Handedness(Enum):
    RIGHT_HANDED = 0
    LEFT_HANDED = 1


class DepthRange(Enum):
    # Vulkan / D3D clip space
    ZERO_TO_ONE = 0
    # OpenGL clip space
    NEGATIVE_ONE_TO_ONE = 1


class CameraProjection(Enum):
    PERSPECTIVE = 0
    ORTHOGRAPHIC = 1


@dataclass
class CameraConfig:
    # Inital state
    projection: CameraProjection = CameraProjection.PERSPECTIVE
    position: Tuple[float, float, float] = (1.0, 1.0, 1.0)
    target: Tuple[float, float, float] = (0.0, 0.0, 0.0)
    world_up: Tuple[float, float, float] = (0.0, 1.0, 0.0)
    z_near: float = 0.01
    z_far: float = 1000.0

    # If type is CameraProjection.PERSPECTIVE
    perspective_vertical_fov: float = 45.0
    """Vertical field of view in degrees"""

    # If type is CameraProjection.ORTHOGRAPHIC
    ortho_center: Tuple[float, float] = (0.0, 0.0)
    ortho_half_extents: Tuple[float, float] = (1.0, 1.0)

    # Conventions
    handedness: Handedness = Handedness.RIGHT_HANDED
    depth_range: DepthRange = DepthRange.ZERO_TO_ONE


@dataclass
class FirstPersonSettings:
    speed_horizontal: float = 1.0
    """Horizontal movement speed in units per second"""

    speed_vertical: float = 1.0
    """Vertical movement speed in units per second"""

    mouse_sensitivity: float = math.pi / 4.0 / 360.0
    """Radians of yaw / pitch per unit of relative mouse motion"""

    faster_multiplier: float = 2.0


@dataclass
class OrbitZoomCameraSettings:
    # Arbitrary units, scaled by the deltas reported by the host
    orbit_speed: float = 0.05
    pan_speed: float = 0.1
    zoom_speed: float = 0.1
    min_distance: float = 0.01
    initial_distance: float = 10.0
