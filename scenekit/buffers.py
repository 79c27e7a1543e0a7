"""Flat vertex data for shapes, and the attribute and index records built on it."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

import numpy as np

from .geometry import Shape
from .mathutil import F32


def _pack(vectors: Iterable, width: int) -> np.ndarray:
    rows = [[float(c) for c in list(v)[:width]] for v in vectors]
    return np.array(rows, dtype=F32).reshape(-1)


def vec2_data(vectors: Iterable) -> np.ndarray:
    """Flatten 2D vectors into a float32 array of x, y pairs."""
    return _pack(vectors, 2)


def uv_data(uvs: Iterable, compressed: bool) -> np.ndarray:
    """Flatten uv mappings; for compressed textures the v coordinate is inverted."""
    data = _pack(uvs, 2)
    if compressed:
        data[1::2] = F32(1.0) - data[1::2]
    return data


def vertex_data(geometry: Shape) -> np.ndarray:
    """Flatten a shape's vertices, expanding faces into three vertices each."""
    vertices = geometry.vertices
    if geometry.faces:
        picked = [vertices[i] for face in geometry.faces for i in face.vertex_indices]
    else:
        picked = list(vertices)
    return _pack(picked, 3)


def normal_data(geometry: Shape) -> np.ndarray:
    """Flatten the normals referenced by each face, three per face."""
    normals = geometry.normals
    picked = [normals[i] for face in geometry.faces for i in face.normal_indices]
    return _pack(picked, 3)


@dataclass
class Attribute:
    """Per-vertex data passed to a shader program at a given location."""

    index: int
    size: int
    data: np.ndarray


@dataclass
class Index:
    """Element indices used for indexed drawing."""

    data: np.ndarray = field(default_factory=lambda: np.zeros(0, dtype=np.uint16))

    def __post_init__(self) -> None:
        self.data = np.asarray(self.data, dtype=np.uint16).reshape(-1)

    @property
    def count(self) -> int:
        return int(self.data.size)


def generate_index(geometry: Shape) -> Index:
    """Return the element index for a shape.

    Indexed drawing is disabled, so the index is always empty and shapes
    are drawn from their expanded vertex arrays.
    """
    return Index()