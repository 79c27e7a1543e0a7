# scenekit

scenekit is a small scene-graph library for building and showing animated
3D graphics with OpenGL 3.3. You describe what to draw (a geometry), how it
looks (a material) and where it sits (a transform); scenekit flattens that
into vertex data, picks a GLSL shader program to match, and draws it every
frame through pyglet.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## A first scene

Classes live in their modules; the package root only carries `__version__`.

```python
from scenekit.camera import PerspectiveCamera
from scenekit.color import Color
from scenekit.geometries import cube
from scenekit.material import BasicMaterial
from scenekit.objects import Mesh, Scene
from scenekit.renderer import Renderer
from scenekit.window import Window, WindowSettings

window = Window(WindowSettings(width=640, height=480, title="Cube",
                               clear_color=Color(0.0, 0.0, 0.4)))
renderer = Renderer(window)

scene = Scene()
camera = PerspectiveCamera(45.0, 640 / 480, 0.1, 100.0)
camera.transform.set_position(4.0, 3.0, 4.0)
camera.transform.look_at(0, 0, 0)

mesh = Mesh(cube(1), BasicMaterial(color=Color(1.0, 0.0, 0.0), wireframe=True))
scene.add(mesh)

while not window.should_close():
    mesh.transform.rotate_x(0.01)
    mesh.transform.rotate_y(0.02)
    renderer.render(scene, camera)

renderer.unload(scene)
renderer.check_errors()
```

## Modules

- **`scenekit.window`** – `Window(settings)` opens a pyglet window with an
  OpenGL 3.3 core context, configured by `WindowSettings` (`width`, `height`,
  `title`, `fullscreen`, `clear_color`). In fullscreen mode the size is taken
  from the last video mode the screen reports. Pressing Escape or closing the
  window makes `should_close()` return true. `swap()` shows the frame and
  processes events, `set_title()` changes the caption, `close()` closes it;
  a `Window` can also be used as a context manager. `get_time()` returns
  seconds since the timer started, and `current_window()` returns the most
  recently created open window (or raises `RuntimeError`).
- **`scenekit.renderer`** – `Renderer(window)` sets up depth testing and face
  culling, then `render(scene, camera)` draws the scene's objects followed by
  its texts and swaps buffers. `unload(scene)` releases the shader programs,
  buffers and the window; `check_errors()` raises `RuntimeError` listing any
  pending OpenGL error codes. Shader programs are built on first draw and
  cached on the material; `select_features(material, geometry)` shows the
  choice: a colour, or a texture in its place, plus basic lighting when the
  geometry has normals. The light sits fixed at (4, 4, 4).
- **`scenekit.objects`** – `Scene` with `add(obj)` and `add_text(text)`;
  texts are always drawn after objects. `Mesh` draws triangles and `Line`
  draws line segments; each has a `geometry`, a `material` and a `transform`.
- **`scenekit.geometry`**, **`scenekit.geometries`**, **`scenekit.face`** –
  `Geometry` holds `vertices`, `uvs`, `normals` and `faces`;
  `array_count()` is three per face, or one per vertex when there are no
  faces. `Face(a, b, c)` holds vertex indices (0–65535, else `ValueError`)
  and normal indices set with `add_normal`. Ready-made shapes: `Box(width,
  height, depth)`, `cube(size)` and `LineGeometry(start, end)`.
- **`scenekit.obj`** – `load_obj(path)` and `parse_obj(lines)` read Wavefront
  OBJ `v`, `vn` and `f` records into a `Geometry`; other records are ignored.
  Polygons are split into triangle fans and 1-based indices are converted to
  0-based. Malformed lines raise `ObjError`.
- **`scenekit.material`** – `BasicMaterial` and `TextMaterial`, each with
  `color`, `texture`, `wireframe` and a cached `program`.
- **`scenekit.texture`** and **`scenekit.dds`** – `Texture.from_dds(path)`
  loads a DXT1, DXT3 or DXT5 DDS file, clamped to edge with no repeat;
  `Wrapping` selects clamp-to-edge, repeat or mirrored repeat.
  `parse_dds(data)` and `load_dds(path)` return a `DDSImage` with its
  `DDSHeader`, `DDSFormat` and `MipLevel`s; bad files raise `DDSError`.
- **`scenekit.font`** and **`scenekit.text`** – `Font.load(path, scale)`
  renders characters 32–127 of a TrueType font into an atlas with Pillow;
  `Font.find(char)` returns a `Glyph` or raises `KeyError`.
  `TextGeometry(text, position, size, font)` lays a string out as one
  size×size square per character, measured from the top left of the current
  window (pass `window_height=` to do without a window). `Text(geometry,
  material)` gives the material the font's texture; `Text.set_text` changes
  the string. The text shader maps an 800×600 pixel area onto the screen.
- **`scenekit.camera`** – `PerspectiveCamera(fov, aspect, near, far)` with the
  field of view in degrees, a `transform` and a `projection_matrix`;
  `PerspectiveCamera.from_settings(CameraSettings(...), aspect)` and
  `make_perspective(...)` are also provided.
- **`scenekit.transform`** – `Transform` with `set_position`, `translate`,
  `translate_x/y/z`, `set_scale`, `rotate_x/y/z` (radians) and `look_at(x, y,
  z)`, which uses the `up` vector. The model matrix is in `matrix`.
- **`scenekit.mathutil`**, **`scenekit.buffers`**, **`scenekit.shaders`** –
  the quaternion and matrix helpers, the flattening of vertex, uv and normal
  data, and the GLSL sources with their `ProgramFeature` defines.
- **`scenekit.logger`** – `get_logger(module)` returns a `Logger` at DEBUG
  level that writes timestamped lines to standard error; `set_level` takes a
  `Level` (OFF, FATAL, ERROR, WARN, INFO, DEBUG, TRACE).

## Demos

The `scenekit-demo` command runs one of the example scenes:

```
scenekit-demo lines
scenekit-demo wireframe_cube
scenekit-demo textured_cube --texture path/to/texture.dds
scenekit-demo obj_loading --obj path/to/model.obj --font path/to/font.ttf
scenekit-demo text --font path/to/font.ttf
```

`lines` draws the red, green and blue axes, `obj_loading` spins a model with
the axes and an FPS counter, `text` draws a line of text at sixteen sizes, and
the cube demos spin a textured or a wireframe cube. Without the options the
files are looked for at `obj/suzanne.obj`, `textures/uvgrid01.dds` and
`../_fonts/Inconsolata-Regular.ttf`; no such files come with the package.
Close a demo with Escape. Errors are printed and the command exits with
status 1.

## What it does not do

- OBJ texture coordinates (`vt`) and materials are not read; loaded models
  carry no uvs.
- Only DXT-compressed DDS textures are supported for meshes.
- Indexed drawing is disabled: shapes are always drawn from expanded vertex
  arrays.
- There is a single built-in light; lights and shadows cannot be added to a
  scene.