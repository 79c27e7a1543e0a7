"""Fonts rendered to a glyph atlas texture."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any

from PIL import Image, ImageDraw, ImageFont

from .logger import get_logger
from .texture import Texture, Wrapping

_log = get_logger("scenekit")

_FIRST_CHAR = 32
_LAST_CHAR = 127
_GLYPHS_PER_ROW = 16
_PADDING = 1


@dataclass(frozen=True)
class Glyph:
    """Placement of one character in the atlas, in pixels from the top left."""

    x: int
    y: int
    width: int
    height: int
    advance: int = 0


@dataclass(eq=False)
class Font:
    """A set of glyphs packed into one atlas image of width x height pixels."""

    glyphs: dict[str, Glyph]
    width: int
    height: int
    image: Any = None
    texture: Texture = field(init=False)

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"atlas size must be positive, got {self.width}x{self.height}")
        self.texture = Texture(
            image=self.image,
            wrap_s=Wrapping.CLAMP_TO_EDGE,
            wrap_t=Wrapping.CLAMP_TO_EDGE,
            repeat=(1.0, 1.0),
        )

    @classmethod
    def load(cls, path: str | os.PathLike, scale: int) -> "Font":
        """Load a TrueType font at the given pixel size and render its atlas."""
        _log.info(f"Loading font from: {path}")
        image_font = ImageFont.truetype(os.fspath(path), int(scale))
        return cls.from_image_font(image_font)

    @classmethod
    def from_image_font(cls, image_font, low: int = _FIRST_CHAR, high: int = _LAST_CHAR) -> "Font":
        """Render the characters low..high of a Pillow font into an atlas."""
        chars = [chr(code) for code in range(low, high + 1)]
        if not chars:
            raise ValueError("character range is empty")

        boxes = {ch: image_font.getbbox(ch) for ch in chars}
        advances = {ch: int(round(image_font.getlength(ch))) for ch in chars}
        top = min(0, min(box[1] for box in boxes.values()))
        bottom = max(1, max(box[3] for box in boxes.values()))
        cell_height = bottom - top

        cells: dict[str, tuple[int, int]] = {}
        for ch in chars:
            left = min(0, boxes[ch][0])
            width = max(1, advances[ch], boxes[ch][2]) - left
            cells[ch] = (width, left)

        rows = [chars[i : i + _GLYPHS_PER_ROW] for i in range(0, len(chars), _GLYPHS_PER_ROW)]
        atlas_width = max(
            sum(cells[ch][0] + _PADDING for ch in row) + _PADDING for row in rows
        )
        atlas_height = len(rows) * (cell_height + _PADDING) + _PADDING

        atlas = Image.new("RGBA", (atlas_width, atlas_height), (255, 255, 255, 0))
        draw = ImageDraw.Draw(atlas)
        glyphs: dict[str, Glyph] = {}
        y = _PADDING
        for row in rows:
            x = _PADDING
            for ch in row:
                width, left = cells[ch]
                draw.text((x - left, y - top), ch, font=image_font, fill=(255, 255, 255, 255))
                glyphs[ch] = Glyph(x, y, width, cell_height, advances[ch])
                x += width + _PADDING
            y += cell_height + _PADDING

        return cls(glyphs=glyphs, width=atlas_width, height=atlas_height, image=atlas)

    def find(self, char: str) -> Glyph:
        """Return the glyph for a character; KeyError if the font lacks it."""
        try:
            return self.glyphs[char]
        except KeyError:
            raise KeyError(f"no glyph for {char!r}") from None