"""Textures and their wrapping modes."""

from __future__ import annotations

import enum
import os
from dataclasses import dataclass
from typing import Any, Optional

from .dds import DDSImage, load_dds


class Wrapping(enum.IntEnum):
    """How a texture is sampled outside its 0..1 range."""

    CLAMP_TO_EDGE = 0
    REPEAT = 1
    MIRRORED_REPEAT = 2

    @property
    def gl_value(self) -> int:
        """The matching OpenGL wrap parameter."""
        return _GL_WRAPPING[self]


_GL_WRAPPING = {
    Wrapping.CLAMP_TO_EDGE: 0x812F,
    Wrapping.REPEAT: 0x2901,
    Wrapping.MIRRORED_REPEAT: 0x8370,
}


@dataclass(eq=False)
class Texture:
    """A graphic that can be drawn on a geometry.

    The image holds the source pixels; handle holds the uploaded GPU
    texture once the renderer has created it.
    """

    image: Optional[DDSImage] = None
    wrap_s: Wrapping = Wrapping.CLAMP_TO_EDGE
    wrap_t: Wrapping = Wrapping.CLAMP_TO_EDGE
    repeat: tuple[float, float] = (1.0, 1.0)
    handle: Any = None

    @classmethod
    def from_dds(cls, path: str | os.PathLike) -> "Texture":
        """Load a texture from a DDS file, clamped to edge and not repeated."""
        return cls(image=load_dds(path))

    def unload(self) -> None:
        """Release the uploaded GPU texture, if any."""
        handle, self.handle = self.handle, None
        if handle is not None and hasattr(handle, "delete"):
            handle.delete()