"""Position, rotation and scale of an object in 3D space."""

from __future__ import annotations

import numpy as np

from .mathutil import F32, look_at, quat_identity, quat_mul, quat_rotate, quat_to_mat4


def _invert(matrix: np.ndarray) -> np.ndarray:
    if np.linalg.det(matrix.astype(np.float64)) == 0:
        return np.zeros((4, 4), dtype=F32)
    return np.linalg.inv(matrix.astype(np.float64)).astype(F32)


class Transform:
    """Holds an object's transformation and keeps its model matrix in step.

    Defaults: position 0,0,0; rotation 0,0,0; scale 1,1,1;
    up 0,1,0; right 1,0,0; forward 0,0,-1.
    """

    def __init__(self) -> None:
        self._position = np.zeros(3, dtype=F32)
        self._rotation = np.zeros(3, dtype=F32)
        self._quaternion = quat_identity()
        self._scale = np.ones(3, dtype=F32)
        self.up = np.array([0, 1, 0], dtype=F32)
        self.right = np.array([1, 0, 0], dtype=F32)
        self.forward = np.array([0, 0, -1], dtype=F32)
        self._matrix = np.identity(4, dtype=F32)

    @property
    def position(self) -> np.ndarray:
        return self._position.copy()

    @property
    def rotation(self) -> np.ndarray:
        return self._rotation.copy()

    @property
    def quaternion(self) -> np.ndarray:
        return self._quaternion.copy()

    @property
    def scale(self) -> np.ndarray:
        return self._scale.copy()

    @property
    def matrix(self) -> np.ndarray:
        """The model matrix, indexed [row, column]."""
        return self._matrix.copy()

    def set_position(self, x: float, y: float, z: float) -> None:
        self._position = np.array([x, y, z], dtype=F32)
        self._matrix[:3, 3] = self._position

    def translate_x(self, x: float) -> None:
        self._position[0] += F32(x)
        self._matrix[0, 3] = self._position[0]

    def translate_y(self, y: float) -> None:
        self._position[1] += F32(y)
        self._matrix[1, 3] = self._position[1]

    def translate_z(self, z: float) -> None:
        self._position[2] += F32(z)
        self._matrix[2, 3] = self._position[2]

    def translate(self, v) -> None:
        """Move the object by the given vector."""
        self._position = (self._position + np.asarray(v, dtype=F32).reshape(3)).astype(F32)
        self._matrix[:3, 3] = self._position

    def set_scale(self, x: float, y: float, z: float) -> None:
        self._scale = np.array([x, y, z], dtype=F32)
        self._matrix[0, 0] = x
        self._matrix[1, 1] = y
        self._matrix[2, 2] = z

    def rotate_x(self, angle: float) -> None:
        """Rotate by angle radians around the x axis."""
        self._rotation[0] += F32(angle)
        self._rotate_on_axis((1, 0, 0), angle)

    def rotate_y(self, angle: float) -> None:
        """Rotate by angle radians around the y axis."""
        self._rotation[1] += F32(angle)
        self._rotate_on_axis((0, 1, 0), angle)

    def rotate_z(self, angle: float) -> None:
        """Rotate by angle radians around the z axis."""
        self._rotation[2] += F32(angle)
        self._rotate_on_axis((0, 0, 1), angle)

    def _rotate_on_axis(self, axis, angle: float) -> None:
        q = quat_rotate(angle, axis)
        self._quaternion = quat_mul(self._quaternion, q)
        self._matrix = (self._matrix @ quat_to_mat4(q)).astype(F32)

    def look_at(self, x: float, y: float, z: float) -> None:
        """Orient the object to face the target point, using the up vector."""
        target = np.array([x, y, z], dtype=F32)
        self._matrix = _invert(look_at(self._position, target, self.up))