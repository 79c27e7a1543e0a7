"""Example scenes: axes, lines, an OBJ model, text, and textured or wireframe cubes."""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass
from typing import Callable, Optional

from .camera import PerspectiveCamera
from .color import Color
from .dds import DDSError
from .font import Font
from .geometries import LineGeometry, cube
from .material import BasicMaterial
from .obj import ObjError, load_obj
from .objects import Line, Mesh, Scene
from .renderer import Renderer
from .text import Text, TextGeometry
from .texture import Texture
from .window import Window, WindowSettings, get_time

_DARK_BLUE = Color(0.0, 0.0, 0.4)
_DEFAULT_FONT = "../_fonts/Inconsolata-Regular.ttf"
_DEFAULT_OBJ = "obj/suzanne.obj"
_DEFAULT_TEXTURE = "textures/uvgrid01.dds"

FrameCallback = Callable[[], None]
SceneBuilder = Callable[[Scene, PerspectiveCamera], FrameCallback]


def add_axes(scene: Scene) -> None:
    """Add red, green and blue lines of length 10 along the x, y and z axes."""
    origin = (0.0, 0.0, 0.0)
    axes = (
        ((10.0, 0.0, 0.0), Color(1.0, 0.0, 0.0)),
        ((0.0, 10.0, 0.0), Color(0.0, 1.0, 0.0)),
        ((0.0, 0.0, 10.0), Color(0.0, 0.0, 1.0)),
    )
    for end, color in axes:
        material = BasicMaterial(color=color)
        scene.add(Line(LineGeometry(origin, end), material))


@dataclass(frozen=True)
class _Demo:
    """A demo's window and camera settings and the function that fills its scene."""

    title: str
    width: int
    height: int
    fov: float
    near: float
    far: float
    clear_color: Optional[Color]
    build: SceneBuilder


def _no_update() -> None:
    return None


def _spinner(transform, rot_x: float, rot_y: float) -> FrameCallback:
    def frame() -> None:
        transform.rotate_x(rot_x)
        transform.rotate_y(rot_y)

    return frame


def _lines(args: argparse.Namespace) -> _Demo:
    def build(scene: Scene, camera: PerspectiveCamera) -> FrameCallback:
        add_axes(scene)
        camera.transform.set_position(20, 20, 20)
        camera.transform.look_at(0, 0, 0)
        return _no_update

    return _Demo("Example - Lines", 640, 480, 45.0, 0.1, 100.0, None, build)


def _obj_loading(args: argparse.Namespace) -> _Demo:
    model = load_obj(args.obj)
    font = Font.load(args.font, 25)

    def build(scene: Scene, camera: PerspectiveCamera) -> FrameCallback:
        camera.transform.set_position(0, 0, 5.0)

        grey = BasicMaterial(color=Color(0.5, 0.5, 0.5))
        add_axes(scene)
        mesh = Mesh(model, grey)

        white = BasicMaterial(color=Color(1.0, 1.0, 1.0))
        fps = Text(TextGeometry(" ", (50, 50), 25, font), white)
        scene.add_text(fps)
        scene.add(mesh)

        transform = mesh.transform
        state = {"last": get_time(), "frames": 0}

        def frame() -> None:
            now = get_time()
            state["frames"] += 1
            if now - state["last"] >= 1.0:
                fps.set_text(f"{state['frames']} FPS")
                state["frames"] = 0
                state["last"] += 1.0
            transform.rotate_x(0.01)
            transform.rotate_y(0.02)

        return frame

    return _Demo("Example - Obj Loading", 800, 600, 45.0, 0.1, 100.0, _DARK_BLUE, build)


def _text(args: argparse.Namespace) -> _Demo:
    fonts = [Font.load(args.font, 15 + i) for i in range(16)]

    def build(scene: Scene, camera: PerspectiveCamera) -> FrameCallback:
        size = 15.0
        offset = 50.0
        for font in fonts:
            white = BasicMaterial(color=Color(1.0, 1.0, 1.0))
            geometry = TextGeometry("Grumpy wizards", (10, offset), size, font)
            scene.add_text(Text(geometry, white))
            offset += size + 5
            size += 2
        camera.transform.set_position(20, 20, 20)
        camera.transform.look_at(0, 0, 0)
        return _no_update

    return _Demo("Example - Text", 800, 600, 45.0, 0.1, 100.0, _DARK_BLUE, build)


def _textured_cube(args: argparse.Namespace) -> _Demo:
    texture = Texture.from_dds(args.texture)

    def build(scene: Scene, camera: PerspectiveCamera) -> FrameCallback:
        camera.transform.translate_z(1000)
        mesh = Mesh(cube(200), BasicMaterial(texture=texture))
        scene.add(mesh)
        return _spinner(mesh.transform, 0.01, 0.02)

    return _Demo("Example - Textured Cube", 640, 480, 75.0, 1.0, 10000.0, None, build)


def _wireframe_cube(args: argparse.Namespace) -> _Demo:
    def build(scene: Scene, camera: PerspectiveCamera) -> FrameCallback:
        camera.transform.set_position(4.0, 3.0, 4.0)
        camera.transform.look_at(0, 0, 0)
        red = BasicMaterial(color=Color(1.0, 0.0, 0.0), wireframe=True)
        mesh = Mesh(cube(1), red)
        scene.add(mesh)
        return _spinner(mesh.transform, 0.01, 0.02)

    return _Demo("Example - Wireframe Cube", 640, 480, 45.0, 0.1, 100.0, _DARK_BLUE, build)


_DEMOS: dict[str, Callable[[argparse.Namespace], _Demo]] = {
    "lines": _lines,
    "obj_loading": _obj_loading,
    "text": _text,
    "textured_cube": _textured_cube,
    "wireframe_cube": _wireframe_cube,
}


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="scenekit-demo", description="Run an example scene.")
    parser.add_argument("demo", choices=sorted(_DEMOS), help="which example to run")
    parser.add_argument("--font", default=_DEFAULT_FONT, help="TrueType font for text demos")
    parser.add_argument("--obj", default=_DEFAULT_OBJ, help="OBJ model for obj_loading")
    parser.add_argument("--texture", default=_DEFAULT_TEXTURE, help="DDS texture for textured_cube")
    return parser


def _run(demo: _Demo) -> None:
    settings = WindowSettings(
        width=demo.width,
        height=demo.height,
        title=demo.title,
        fullscreen=False,
        clear_color=demo.clear_color,
    )
    window = Window(settings)
    try:
        renderer = Renderer(window)
    except Exception:
        window.close()
        raise

    scene = Scene()
    camera = PerspectiveCamera(demo.fov, demo.width / demo.height, demo.near, demo.far)
    frame = demo.build(scene, camera)

    while not window.should_close():
        frame()
        renderer.render(scene, camera)

    renderer.unload(scene)
    renderer.check_errors()


def main(argv=None) -> int:
    """Run the example named on the command line; return the exit status."""
    args = _parser().parse_args(argv)
    try:
        demo = _DEMOS[args.demo](args)
        _run(demo)
    except (OSError, ObjError, DDSError, RuntimeError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())