"""Perspective camera."""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from .logger import get_logger
from .mathutil import F32, deg_to_rad, frustum
from .transform import Transform

_log = get_logger("scenekit")


@dataclass
class CameraSettings:
    """Values from which a camera can be built."""

    fov: float
    near: float
    far: float


def make_perspective(fov: float, aspect: float, near: float, far: float) -> np.ndarray:
    """Return a projection matrix for a vertical field of view in degrees."""
    ymax = F32(near) * F32(math.tan(deg_to_rad(F32(fov) * F32(0.5))))
    ymin = -ymax
    xmin = ymin * F32(aspect)
    xmax = ymax * F32(aspect)
    return frustum(xmin, xmax, ymin, ymax, near, far)


class PerspectiveCamera:
    """A camera with a transform and a perspective projection.

    The transform holds the camera's placement; the view matrix is its inverse.
    """

    def __init__(self, fov: float, aspect: float, near: float, far: float):
        _log.debug("Creating new perspective camera")
        _log.trace(f"-- FOV: {fov}")
        _log.trace(f"-- Aspect: {aspect}")
        _log.trace(f"-- Near: {near}")
        _log.trace(f"-- Far: {far}")
        self.projection_matrix = make_perspective(fov, aspect, near, far)
        self.transform = Transform()

    @classmethod
    def from_settings(cls, settings: CameraSettings, aspect: float) -> "PerspectiveCamera":
        return cls(settings.fov, aspect, settings.near, settings.far)