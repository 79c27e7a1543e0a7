[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "scenekit"
version = "0.1.0"
description = "A small scene-graph library for creating and displaying animated 3D graphics with OpenGL."
requires-python = ">=3.10"
keywords = ["3d", "opengl", "graphics", "scene-graph", "rendering", "wavefront-obj", "dds", "glsl"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
    "Topic :: Software Development :: Libraries :: Python Modules",
]
dependencies = [
    "numpy",
    "pyglet",
    "pillow",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
scenekit-demo = "scenekit.demos:main"

[tool.hatch.build.targets.wheel]
packages = ["scenekit"]

[tool.hatch.build.targets.sdist]
include = ["scenekit", "tests", "pyproject.toml"]

[tool.pytest.ini_options]
addopts = "-ra"
