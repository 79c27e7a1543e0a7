"""Wavefront OBJ loading: vertices, normals and (fan-triangulated) faces."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Iterable

from .face import Face
from .geometry import Geometry
from .logger import get_logger

_log = get_logger("scenekit/loader")

_LINE = re.compile(r"(.*?) (.*)")
_INTEGER = re.compile(r"[+-]?[0-9]+")


class ObjError(ValueError):
    """Raised when an OBJ document is malformed."""


def _parse_vector(rest: str, message: str) -> tuple[float, float, float]:
    tokens = rest.split()
    values = []
    for token in tokens[:3]:
        try:
            values.append(float(token))
        except ValueError:
            break
    if len(values) != 3:
        raise ObjError(message)
    return (values[0], values[1], values[2])


def _parse_index(token: str, message: str) -> int:
    if not _INTEGER.fullmatch(token):
        raise ObjError(message)
    # OBJ indices are 1-based; out-of-range values wrap to 16 bits.
    return (int(token) - 1) & 0xFFFF


def _parse_faces(rest: str) -> list[Face]:
    elements = rest.split(" ")
    if len(elements) < 3:
        raise ObjError("Invalid obj file. Face line should be of format 'a b c [d]'")

    vertex_ids: list[int] = []
    normal_ids: list[int] = []
    for element in elements:
        parts = element.split("/")
        vertex_ids.append(
            _parse_index(parts[0], "Invalid obj file. Face vertex index is not an integer.")
        )
        if len(parts) > 2:
            normal_ids.append(
                _parse_index(parts[2], "Invalid obj file. Face normal index is not an integer.")
            )

    if normal_ids and len(normal_ids) != len(vertex_ids):
        raise ObjError("Invalid obj file. Face normal indices are incomplete.")

    faces = []
    first = vertex_ids[0]
    for i, (b, c) in enumerate(zip(vertex_ids[1:], vertex_ids[2:]), start=1):
        face = Face(first, b, c)
        if normal_ids:
            face.add_normal(normal_ids[0], normal_ids[i], normal_ids[i + 1])
        faces.append(face)
    return faces


def parse_obj(lines: Iterable[str]) -> Geometry:
    """Build a geometry from the lines of an OBJ document.

    Only 'v', 'vn' and 'f' records are used; other lines are ignored.
    Polygons are split into triangle fans.
    """
    vertices: list[tuple[float, float, float]] = []
    normals: list[tuple[float, float, float]] = []
    faces: list[Face] = []

    for raw in lines:
        line = raw.rstrip("\n")
        if line.endswith("\r"):
            line = line[:-1]
        match = _LINE.match(line)
        if match is None:
            _log.trace("Skip line. Wrong format.")
            continue
        header, rest = match.groups()
        if header == "v":
            vertices.append(
                _parse_vector(rest, "Invalid obj file. Vertex line should be of format 'x y z'")
            )
        elif header == "vn":
            normals.append(
                _parse_vector(rest, "Invalid obj file. Normal line should be of format 'x y z'")
            )
        elif header == "f":
            faces.extend(_parse_faces(rest))

    geometry = Geometry(vertices=vertices, normals=normals, faces=faces)
    _log.trace(f"-- Vertices: {len(geometry.vertices)}")
    _log.trace(f"-- UVs: {len(geometry.uvs)}")
    _log.trace(f"-- Normals: {len(geometry.normals)}")
    _log.trace(f"-- Faces: {len(geometry.faces)}")
    return geometry


def load_obj(path: str | os.PathLike) -> Geometry:
    """Load an OBJ file and return its geometry."""
    _log.info(f"Loading OBJ from: {path}")
    text = Path(path).read_text(encoding="utf-8", errors="replace")
    return parse_obj(text.split("\n"))