"""Vector, quaternion and 4x4 matrix helpers.

Matrices are 4x4 float32 arrays indexed as [row, column]; translation
lives in the last column. Quaternions are arrays in (w, x, y, z) order.
"""

from __future__ import annotations

import math

import numpy as np

F32 = np.float32


def _vec3(v) -> np.ndarray:
    return np.asarray(v, dtype=F32).reshape(3)


def _quat(q) -> np.ndarray:
    return np.asarray(q, dtype=F32).reshape(4)


def _normalize(v: np.ndarray) -> np.ndarray:
    with np.errstate(divide="ignore", invalid="ignore"):
        return (v * (F32(1.0) / F32(np.linalg.norm(v)))).astype(F32)


def deg_to_rad(degrees: float) -> float:
    """Convert degrees to radians."""
    return float(F32(math.pi) * F32(degrees) / F32(180.0))


def quat_identity() -> np.ndarray:
    """Return the identity quaternion."""
    return np.array([1.0, 0.0, 0.0, 0.0], dtype=F32)


def quat_rotate(angle: float, axis) -> np.ndarray:
    """Return the quaternion rotating by angle (radians) around axis."""
    half = float(angle) / 2.0
    s = math.sin(half)
    vector = _vec3(axis) * F32(s)
    return np.array([math.cos(half), *vector], dtype=F32)


def quat_mul(a, b) -> np.ndarray:
    """Return the Hamilton product a * b."""
    a, b = _quat(a), _quat(b)
    aw, av = a[0], a[1:]
    bw, bv = b[0], b[1:]
    w = aw * bw - np.dot(av, bv)
    v = np.cross(av, bv) + bv * aw + av * bw
    return np.concatenate(([w], v)).astype(F32)


def quat_to_mat4(q) -> np.ndarray:
    """Return the rotation matrix of quaternion q."""
    w, x, y, z = (float(c) for c in _quat(q))
    return np.array(
        [
            [1 - 2 * y * y - 2 * z * z, 2 * x * y - 2 * w * z, 2 * x * z + 2 * w * y, 0],
            [2 * x * y + 2 * w * z, 1 - 2 * x * x - 2 * z * z, 2 * y * z - 2 * w * x, 0],
            [2 * x * z - 2 * w * y, 2 * y * z + 2 * w * x, 1 - 2 * x * x - 2 * y * y, 0],
            [0, 0, 0, 1],
        ],
        dtype=F32,
    )


def frustum(left: float, right: float, bottom: float, top: float, near: float, far: float) -> np.ndarray:
    """Return a perspective projection matrix for the given clip planes."""
    rml, tmb, fmn = right - left, top - bottom, far - near
    m = np.zeros((4, 4), dtype=F32)
    m[0, 0] = 2.0 * near / rml
    m[1, 1] = 2.0 * near / tmb
    m[0, 2] = (right + left) / rml
    m[1, 2] = (top + bottom) / tmb
    m[2, 2] = -(far + near) / fmn
    m[2, 3] = -(2.0 * far * near) / fmn
    m[3, 2] = -1.0
    return m


def look_at(eye, center, up) -> np.ndarray:
    """Return a view matrix looking from eye towards center."""
    eye, center, up = _vec3(eye), _vec3(center), _vec3(up)
    f = _normalize(center - eye)
    s = _normalize(np.cross(f, _normalize(up)).astype(F32))
    u = np.cross(s, f).astype(F32)
    rotation = np.identity(4, dtype=F32)
    rotation[0, :3] = s
    rotation[1, :3] = u
    rotation[2, :3] = -f
    translation = np.identity(4, dtype=F32)
    translation[:3, 3] = -eye
    return (rotation @ translation).astype(F32)