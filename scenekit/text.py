"""Screen-space text: its geometry and the drawable text object."""

from __future__ import annotations

from typing import Any, Optional

import numpy as np

from .buffers import uv_data, vec2_data
from .font import Font
from .window import current_window

Vec2 = tuple[float, float]


def create_text_vertices(
    text: str, position, size: float, font: Font, window_height: float
) -> tuple[list[Vec2], list[Vec2]]:
    """Return two triangles' vertices and uvs per character of text.

    The position is measured from the top left of the window; each
    character occupies a size x size square.
    """
    x = float(position[0])
    y = float(window_height) - float(position[1])
    size = float(size)
    vertices: list[Vec2] = []
    uvs: list[Vec2] = []

    for i, char in enumerate(text):
        left = x + i * size
        right = left + size
        up_left = (left, y + size)
        up_right = (right, y + size)
        down_right = (right, y)
        down_left = (left, y)
        vertices += [up_left, down_left, up_right, down_right, up_right, down_left]

        glyph = font.find(char)
        full_width = float(font.width)
        full_height = float(font.height)
        uv_x = glyph.x / full_width
        uv_y = (full_height - glyph.y) / full_height
        uv_w = glyph.width / full_width
        uv_h = glyph.height / full_height

        uv_up_left = (uv_x, uv_y)
        uv_up_right = (uv_x + uv_w, uv_y)
        uv_down_right = (uv_x + uv_w, uv_y - uv_h)
        uv_down_left = (uv_x, uv_y - uv_h)
        uvs += [uv_up_left, uv_down_left, uv_up_right, uv_down_right, uv_up_right, uv_down_left]

    return vertices, uvs


class TextGeometry:
    """The vertices and uvs of a line of 2D text.

    Without an explicit window height, the current window's height is used.
    """

    def __init__(
        self,
        text: str,
        position,
        size: float,
        font: Font,
        window_height: Optional[float] = None,
    ):
        if window_height is None:
            window_height = current_window().height
        self.text = text
        self.position = (float(position[0]), float(position[1]))
        self.size = float(size)
        self.font = font
        self.window_height = window_height
        self.vertices, self.uvs = create_text_vertices(
            text, self.position, self.size, font, window_height
        )

    def update_vertices(self, text: str) -> None:
        """Recompute vertices and uvs for new text at the same place."""
        self.vertices, self.uvs = create_text_vertices(
            text, self.position, self.size, self.font, self.window_height
        )


class Text:
    """A drawable text: its geometry, material and flattened vertex data.

    The material's texture is replaced by the font's atlas texture.
    """

    def __init__(self, geometry: TextGeometry, material: Any):
        material.texture = geometry.font.texture
        self.geometry = geometry
        self.material = material
        self.vertex_buffer: np.ndarray
        self.uv_buffer: np.ndarray
        self._rebuild()

    def _rebuild(self) -> None:
        self.vertex_buffer = vec2_data(self.geometry.vertices)
        self.uv_buffer = uv_data(self.geometry.uvs, True)

    def set_text(self, text: str) -> None:
        """Change the drawn text and rebuild the vertex and uv data."""
        self.geometry.text = text
        self.geometry.update_vertices(text)
        self._rebuild()