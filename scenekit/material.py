"""Materials describing how scene objects look."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Protocol, runtime_checkable

from .color import Color


@runtime_checkable
class Appearance(Protocol):
    """Anything that can hold a cached shader program for rendering."""

    program: Any


@dataclass(eq=False)
class BasicMaterial:
    """Basic shading with a solid colour or a texture; no lights or shadows.

    The program attribute caches the shader program built for the material.
    """

    color: Optional[Color] = None
    texture: Any = None
    wireframe: bool = False
    program: Any = None


@dataclass(eq=False)
class TextMaterial:
    """Material for 2D text, tinted by a colour and sampled from a font texture."""

    color: Optional[Color] = None
    texture: Any = None
    wireframe: bool = False
    program: Any = None