"""Shapes made of vertices, uv mappings, normals and faces."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, Sequence, runtime_checkable

from .face import Face


@runtime_checkable
class Shape(Protocol):
    """What a renderable shape provides."""

    vertices: Sequence
    uvs: Sequence
    normals: Sequence
    faces: Sequence[Face]

    def array_count(self) -> int: ...


@dataclass
class Geometry:
    """A plain shape holding its vertices, uvs, normals and faces."""

    vertices: list = field(default_factory=list)
    uvs: list = field(default_factory=list)
    normals: list = field(default_factory=list)
    faces: list[Face] = field(default_factory=list)

    def array_count(self) -> int:
        """Number of elements to draw: three per face, else one per vertex."""
        if self.faces:
            return len(self.faces) * 3
        return len(self.vertices)