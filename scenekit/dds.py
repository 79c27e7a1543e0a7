"""Reading DXT-compressed DDS images and their mipmap levels."""

from __future__ import annotations

import enum
import os
import struct
from dataclasses import dataclass, fields
from pathlib import Path

from .logger import get_logger

_log = get_logger("scenekit")

_MAGIC = b"DDS "
# 7 header words, 11 reserved, 8 pixel-format words, 4 caps, 1 reserved.
_HEADER = struct.Struct("<7I44x8I4I4x")
_DATA_OFFSET = len(_MAGIC) + _HEADER.size


class DDSError(ValueError):
    """Raised when a DDS file cannot be read or is malformed."""


class DDSFormat(enum.IntEnum):
    """Supported compressed formats, keyed by their four-character code."""

    DXT1 = 0x31545844
    DXT3 = 0x33545844
    DXT5 = 0x35545844

    @property
    def block_size(self) -> int:
        """Bytes per 4x4 block."""
        return 8 if self is DDSFormat.DXT1 else 16

    @property
    def gl_format(self) -> int:
        """The matching OpenGL compressed internal format."""
        return {
            DDSFormat.DXT1: 0x83F1,
            DDSFormat.DXT3: 0x83F2,
            DDSFormat.DXT5: 0x83F3,
        }[self]


@dataclass
class DDSHeader:
    """The 124-byte header that follows the file code."""

    size: int = 124
    flags: int = 0
    height: int = 0
    width: int = 0
    linear_size: int = 0
    depth: int = 0
    mipmap_count: int = 0
    pf_size: int = 32
    pf_flags: int = 0
    four_cc: int = 0
    rgb_bit_count: int = 0
    r_mask: int = 0
    g_mask: int = 0
    b_mask: int = 0
    a_mask: int = 0
    caps: int = 0
    caps2: int = 0
    caps3: int = 0
    caps4: int = 0

    @classmethod
    def unpack(cls, data: bytes) -> "DDSHeader":
        return cls(*_HEADER.unpack(data))

    def pack(self) -> bytes:
        return _HEADER.pack(*(getattr(self, f.name) for f in fields(self)))


@dataclass
class MipLevel:
    """One mipmap level of compressed image data."""

    level: int
    width: int
    height: int
    data: bytes


@dataclass
class DDSImage:
    """A parsed DDS image: header, format and its mipmap levels."""

    header: DDSHeader
    format: DDSFormat
    levels: list[MipLevel]

    @property
    def width(self) -> int:
        return self.header.width

    @property
    def height(self) -> int:
        return self.header.height


def parse_dds(data: bytes) -> DDSImage:
    """Parse the bytes of a DDS file."""
    data = bytes(data)
    code = data[: len(_MAGIC)]
    if code != _MAGIC:
        raise DDSError(f"File code is not DDS, instead got {code.decode('latin-1')}.")

    try:
        header = DDSHeader.unpack(data[len(_MAGIC) : _DATA_OFFSET])
    except struct.error as exc:
        raise DDSError(f"Couldn't read DDS header: {exc}") from exc

    try:
        fmt = DDSFormat(header.four_cc)
    except ValueError:
        raise DDSError(
            f"Invalid four CC in DDS header. Got: {header.four_cc:x}; "
            f"Expected {DDSFormat.DXT1:x}; {DDSFormat.DXT3:x}; or {DDSFormat.DXT5:x}"
        ) from None

    body = data[_DATA_OFFSET:]
    levels: list[MipLevel] = []
    offset = 0
    width, height = header.width, header.height
    level = 0
    while level < header.mipmap_count and (width > 0 or height > 0):
        size = ((width + 3) // 4) * ((height + 3) // 4) * fmt.block_size
        chunk = body[offset : offset + size]
        if len(chunk) != size:
            raise DDSError(
                f"Couldn't read all mipmaps: level {level} needs {size} bytes, "
                f"{len(chunk)} left"
            )
        levels.append(MipLevel(level, width, height, chunk))
        offset += size
        width, height, level = width // 2, height // 2, level + 1

    return DDSImage(header, fmt, levels)


def load_dds(path: str | os.PathLike) -> DDSImage:
    """Read and parse a DDS file."""
    _log.info(f"Loading DDS texture from: {path}")
    try:
        data = Path(path).read_bytes()
    except OSError as exc:
        raise DDSError(f"Cannot open DDS file: {exc}") from exc
    return parse_dds(data)