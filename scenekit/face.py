"""Triangle faces referencing vertices and normals by index."""

from __future__ import annotations

_MAX_INDEX = 0xFFFF


def _check_index(value: int) -> int:
    value = int(value)
    if not 0 <= value <= _MAX_INDEX:
        raise ValueError(f"index {value} out of range 0..{_MAX_INDEX}")
    return value


class Face:
    """A triangle made of three vertex indices and three normal indices."""

    __slots__ = ("vertex_indices", "normal_indices")

    def __init__(self, a: int, b: int, c: int):
        self.vertex_indices = (_check_index(a), _check_index(b), _check_index(c))
        self.normal_indices = (0, 0, 0)

    @property
    def a(self) -> int:
        return self.vertex_indices[0]

    @property
    def b(self) -> int:
        return self.vertex_indices[1]

    @property
    def c(self) -> int:
        return self.vertex_indices[2]

    def at(self, i: int) -> int:
        """Return the vertex index at position i (0, 1 or 2)."""
        if not 0 <= i < 3:
            raise IndexError(f"face position {i} out of range")
        return self.vertex_indices[i]

    def normal_at(self, i: int) -> int:
        """Return the normal index at position i (0, 1 or 2)."""
        if not 0 <= i < 3:
            raise IndexError(f"face position {i} out of range")
        return self.normal_indices[i]

    def add_normal(self, x: int, y: int, z: int) -> None:
        """Set the normal indices of this face."""
        self.normal_indices = (_check_index(x), _check_index(y), _check_index(z))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Face):
            return NotImplemented
        return (self.vertex_indices, self.normal_indices) == (
            other.vertex_indices,
            other.normal_indices,
        )

    def __hash__(self) -> int:
        return hash((self.vertex_indices, self.normal_indices))

    def __repr__(self) -> str:
        return f"Face(vertices={self.vertex_indices}, normals={self.normal_indices})"