"""RGB colour values."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Color:
    """A colour with red, green and blue channels, each between 0 and 1."""

    r: float
    g: float
    b: float

    def as_list(self) -> list[float]:
        """Return the channels as a list in r, g, b order."""
        return [self.r, self.g, self.b]

    def __iter__(self):
        return iter(self.as_list())