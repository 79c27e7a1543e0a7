import math

import numpy as np
import pytest

from scenekit.mathutil import quat_identity
from scenekit.transform import Transform


def test_new_transform():
    transform = Transform()
    assert np.array_equal(transform.position, [0, 0, 0])
    assert np.array_equal(transform.rotation, [0, 0, 0])
    assert np.array_equal(transform.quaternion, quat_identity())
    assert np.array_equal(transform.scale, [1, 1, 1])
    assert np.array_equal(transform.up, [0, 1, 0])
    assert np.array_equal(transform.right, [1, 0, 0])
    assert np.array_equal(transform.forward, [0, 0, -1])
    assert np.array_equal(transform.matrix, np.identity(4))


def test_set_position():
    transform = Transform()
    expected = np.array([5, 10, 3.5], dtype=np.float32)
    transform.set_position(*expected)
    assert np.array_equal(transform.position, expected)
    assert np.array_equal(transform.matrix[:3, 3], expected)


def test_translate_x():
    transform = Transform()
    transform.translate_x(2.5)
    assert transform.position[0] == np.float32(2.5)
    assert transform.matrix[0, 3] == np.float32(2.5)


def test_translate_y():
    transform = Transform()
    transform.translate_y(3.75)
    assert transform.position[1] == np.float32(3.75)
    assert transform.matrix[1, 3] == np.float32(3.75)


def test_translate_z():
    transform = Transform()
    transform.translate_z(-13.37)
    assert transform.position[2] == np.float32(-13.37)
    assert transform.matrix[2, 3] == np.float32(-13.37)


def test_translate():
    transform = Transform()
    transform.set_position(10, 10, 10)
    transform.translate((-5, 6, 3))
    assert np.array_equal(transform.position, [5, 16, 13])
    assert np.array_equal(transform.matrix[:3, 3], [5, 16, 13])


def test_scale():
    transform = Transform()
    transform.set_scale(2, 2, 2)
    assert np.array_equal(transform.scale, [2, 2, 2])
    assert np.array_equal(np.diag(transform.matrix)[:3], [2, 2, 2])


def test_rotate_x():
    transform = Transform()
    transform.rotate_x(math.pi / 2)
    assert transform.rotation[0] == np.float32(math.pi / 2)


def test_rotate_x_turns_y_axis_onto_z():
    transform = Transform()
    transform.rotate_x(math.pi / 2)
    assert np.allclose(transform.matrix @ [0, 1, 0, 0], [0, 0, 1, 0], atol=1e-6)


def test_rotations_accumulate():
    transform = Transform()
    transform.rotate_z(0.25)
    transform.rotate_z(0.5)
    assert transform.rotation[2] == pytest.approx(0.75)
    other = Transform()
    other.rotate_z(0.75)
    assert np.allclose(transform.matrix, other.matrix, atol=1e-6)
    assert np.allclose(transform.quaternion, other.quaternion, atol=1e-6)


def test_look_at_keeps_position_and_faces_target():
    transform = Transform()
    transform.set_position(0, 0, 5)
    transform.look_at(0, 0, 0)
    matrix = transform.matrix
    assert np.allclose(matrix[:3, 3], [0, 0, 5], atol=1e-5)
    assert np.allclose(matrix @ [0, 0, -1, 0], [0, 0, -1, 0], atol=1e-5)


def test_properties_return_copies():
    transform = Transform()
    transform.position[0] = 99
    transform.matrix[0, 0] = 99
    assert transform.position[0] == 0
    assert transform.matrix[0, 0] == 1