"""Scene objects (meshes and lines) and the scene that holds them."""

from __future__ import annotations

import enum
from typing import Any, Optional

import numpy as np

from .buffers import Index, generate_index, normal_data, uv_data, vertex_data
from .geometry import Shape
from .logger import get_logger
from .mathutil import F32
from .transform import Transform

_log = get_logger("scenekit")


class Primitive(enum.IntEnum):
    """Kind of primitive an object is drawn as; values match OpenGL."""

    LINES = 0x0001
    TRIANGLES = 0x0004


class Object3D:
    """An object in 3D space with a transform and its flattened vertex data."""

    mode = Primitive.TRIANGLES

    def __init__(self, geometry: Shape, material: Any):
        self.geometry = geometry
        self.material = material
        self.transform = Transform()
        self.vertex_buffer: np.ndarray = vertex_data(geometry)
        self.uv_buffer: Optional[np.ndarray] = None
        self.normal_buffer: Optional[np.ndarray] = None
        self.index: Optional[Index] = None


class Mesh(Object3D):
    """A shape drawn as triangles with a material."""

    mode = Primitive.TRIANGLES

    def __init__(self, geometry: Shape, material: Any):
        super().__init__(geometry, material)
        if geometry.uvs:
            self.uv_buffer = uv_data(geometry.uvs, True)
        if geometry.normals:
            self.normal_buffer = normal_data(geometry)
        self.index = generate_index(geometry)


class Line(Object3D):
    """A set of vertices drawn as line segments with a material."""

    mode = Primitive.LINES


class Scene:
    """The collection of objects and texts to render."""

    def __init__(self) -> None:
        _log.info("Creating new scene")
        self.objects: list[Object3D] = []
        self.texts: list[Any] = []

    def add(self, obj: Object3D) -> None:
        """Add an object to the scene."""
        _log.info("New object added to scene")
        self.objects.append(obj)

    def add_text(self, text: Any) -> None:
        """Add a text; texts are always drawn after the objects."""
        _log.info("New text added to scene")
        self.texts.append(text)


__all__ = ["Primitive", "Object3D", "Mesh", "Line", "Scene", "F32"]