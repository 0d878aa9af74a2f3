# Copyright Dario Mylonopoulos
# SPDX-License-Identifier: MIT

from .camera import Camera, as_array, model_view_projection, view_matrix
from .config import (
    CameraConfig,
    CameraProjection,
    DepthRange,
    FirstPersonSettings,
    Handedness,
    OrbitZoomCameraSettings,
)
from .first_person import FirstPerson, FirstPersonAction, FirstPersonKeyMap
from .orbit_zoom_camera import OrbitZoomAction, OrbitZoomCamera
from .projection import (
    InvalidProjectionParameters,
    OrthographicProjection,
    PerspectiveProjection,
    projection_from_config,
    projection_matrix,
)
from .transform3d import RigidTransform3D
