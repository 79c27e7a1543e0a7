"""A small scene-graph library for creating and displaying animated 3D graphics with OpenGL."""

__version__ = "0.1.0"