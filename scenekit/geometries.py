"""Ready-made geometries."""

from __future__ import annotations

from .face import Face
from .geometry import Geometry

_FACE_UVS = [(1.0, 1.0), (0.0, 1.0), (0.0, 0.0), (1.0, 0.0)]


class Box(Geometry):
    """A box of six quads, each split into two triangles, with uv mappings."""

    def __init__(self, width: float, height: float, depth: float):
        self.width = width
        self.height = height
        self.depth = depth
        hw, hh, hd = width / 2.0, height / 2.0, depth / 2.0
        vertices = [
            # front
            (-hw, -hh, hd), (hw, -hh, hd), (hw, hh, hd), (-hw, hh, hd),
            # top
            (-hw, hh, hd), (hw, hh, hd), (hw, hh, -hd), (-hw, hh, -hd),
            # back
            (hw, -hh, -hd), (-hw, -hh, -hd), (-hw, hh, -hd), (hw, hh, -hd),
            # bottom
            (-hw, -hh, -hd), (hw, -hh, -hd), (hw, -hh, hd), (-hw, -hh, hd),
            # left
            (-hw, -hh, -hd), (-hw, -hh, hd), (-hw, hh, hd), (-hw, hh, -hd),
            # right
            (hw, -hh, hd), (hw, -hh, -hd), (hw, hh, -hd), (hw, hh, hd),
        ]
        faces = []
        for side in range(6):
            base = side * 4
            faces.append(Face(base, base + 1, base + 2))
            faces.append(Face(base + 2, base + 3, base))
        super().__init__(vertices=vertices, uvs=_FACE_UVS * 6, faces=faces)


def cube(size: float) -> Box:
    """Return a box with equal sides."""
    return Box(size, size, size)


class LineGeometry(Geometry):
    """A single line segment between two points."""

    def __init__(self, start, end):
        self.start = tuple(start)
        self.end = tuple(end)
        super().__init__(vertices=[self.start, self.end])