import math
from collections import Counter

import numpy as np
import pytest

from scenekit.camera import PerspectiveCamera
from scenekit.color import Color
from scenekit.face import Face
from scenekit.font import Font, Glyph
from scenekit.geometries import LineGeometry, cube
from scenekit.geometry import Geometry
from scenekit.material import BasicMaterial, TextMaterial
from scenekit.objects import Line, Mesh, Primitive, Scene
from scenekit.renderer import Program, Renderer, Uniform, select_features
from scenekit.shaders import (
    ProgramFeature,
    text_fragment_shader_source,
    text_vertex_shader_source,
)
from scenekit.text import Text, TextGeometry
from scenekit.texture import Texture
from scenekit.window import Window, WindowSettings


class FakeNative:
    def __init__(self, size=(800, 600)):
        self.size = size
        self.flips = 0
        self.closed = False
        self.handlers = {}

    def push_handlers(self, **handlers):
        self.handlers.update(handlers)

    def get_size(self):
        return self.size

    def flip(self):
        self.flips += 1

    def dispatch_events(self):
        pass

    def set_caption(self, title):
        pass

    def close(self):
        self.closed = True


class FakeBackend:
    def __init__(self):
        self.calls = []
        self.errors = []
        self.uniforms = {}
        self.programs = {}
        self.buffers = {}
        self.deleted_buffers = []
        self.deleted_programs = []
        self.released = False
        self._counter = 0

    def _new(self):
        self._counter += 1
        return self._counter

    def setup(self, clear_color):
        self.calls.append(("setup", clear_color))

    def create_program(self, vertex_source, fragment_source):
        handle = self._new()
        self.programs[handle] = (vertex_source, fragment_source)
        return handle

    def delete_program(self, program):
        self.deleted_programs.append(program)

    def use_program(self, program):
        self.calls.append(("use", program))

    def unuse_program(self, program):
        self.calls.append(("unuse", program))

    def uniform_location(self, program, name):
        return (program, name)

    def set_uniform(self, location, value):
        self.uniforms[location] = value

    def create_buffer(self, data):
        handle = self._new()
        self.buffers[handle] = data
        return handle

    def delete_buffer(self, buffer):
        self.deleted_buffers.append(buffer)

    def enable_attribute(self, index, size, buffer):
        self.calls.append(("enable", index, size, buffer))

    def disable_attribute(self, index):
        self.calls.append(("disable", index))

    def bind_texture(self, texture):
        self.calls.append(("bind_texture", texture))

    def unbind_texture(self, texture):
        self.calls.append(("unbind_texture", texture))

    def set_wireframe(self, enabled):
        self.calls.append(("wireframe", enabled))

    def enable_blending(self):
        self.calls.append(("blend",))

    def begin_frame(self, width, height):
        self.calls.append(("frame", width, height))

    def draw_arrays(self, mode, count):
        self.calls.append(("draw_arrays", mode, count))

    def draw_elements(self, mode, count, buffer):
        self.calls.append(("draw_elements", mode, count, buffer))

    def get_error(self):
        return self.errors.pop(0) if self.errors else 0

    def release(self):
        self.released = True

    def named(self, kind):
        return [call for call in self.calls if call[0] == kind]

    def uniform(self, program, name):
        return self.uniforms[(program.handle, name)]


@pytest.fixture
def setup():
    native = FakeNative()
    window = Window(WindowSettings(width=800, height=600, clear_color=Color(0, 0, 0.4)), native=native)
    backend = FakeBackend()
    renderer = Renderer(window, backend=backend)
    camera = PerspectiveCamera(45, 4 / 3, 0.1, 100)
    return renderer, backend, native, camera


def test_select_features_color_only():
    material = BasicMaterial(color=Color(1, 0, 0))
    assert select_features(material, Geometry()) == ProgramFeature.COLOR


def test_select_features_texture_replaces_color():
    material = BasicMaterial(color=Color(1, 0, 0), texture=Texture())
    assert select_features(material, Geometry()) == ProgramFeature.TEXTURE


def test_select_features_normals_add_shading():
    material = BasicMaterial(color=Color(1, 0, 0))
    geometry = Geometry(normals=[(0.0, 0.0, 1.0)])
    assert select_features(material, geometry) == ProgramFeature.COLOR | ProgramFeature.SHADING_BASIC


def test_select_features_nothing():
    assert select_features(BasicMaterial(), Geometry()) == ProgramFeature(0)


def test_uniform_apply_values():
    backend = FakeBackend()
    program = Program(backend)
    program.load(7)
    uniform = Uniform(program, "diffuse")
    assert uniform.location == (7, "diffuse")

    uniform.apply(Color(0.25, 0.5, 1.0))
    assert backend.uniforms[(7, "diffuse")] == (0.25, 0.5, 1.0)

    uniform.apply(Texture())
    assert backend.uniforms[(7, "diffuse")] == 0

    uniform.apply((1.0, 2.0))
    assert backend.uniforms[(7, "diffuse")] == (1.0, 2.0)

    uniform.apply(Glyph(3, 4, 5, 6))
    assert backend.uniforms[(7, "diffuse")] == (3.0, 4.0, 5.0, 6.0)


def test_uniform_matrix_is_column_major():
    backend = FakeBackend()
    program = Program(backend)
    program.load(1)
    matrix = np.identity(4, dtype=np.float32)
    matrix[0, 3] = 5.0
    Uniform(program, "M").apply(matrix)
    value = backend.uniforms[(1, "M")]
    assert len(value) == 16
    assert value[12] == 5.0
    assert value[3] == 0.0


def test_uniform_rejects_unknown_value():
    program = Program(FakeBackend())
    program.load(1)
    with pytest.raises(TypeError):
        Uniform(program, "M").apply(object())
    with pytest.raises(TypeError):
        Uniform(program, "M").apply("abc")


def test_renderer_setup_uses_clear_color(setup):
    _, backend, _, _ = setup
    assert backend.calls[0] == ("setup", Color(0, 0, 0.4))


def test_render_colored_mesh(setup):
    renderer, backend, native, camera = setup
    geometry = cube(1)
    material = BasicMaterial(color=Color(1, 0, 0))
    mesh = Mesh(geometry, material)
    scene = Scene()
    scene.add(mesh)

    renderer.render(scene, camera)

    program = material.program
    assert isinstance(program, Program)
    vertex_source, _ = backend.programs[program.handle]
    assert "#define USE_COLOR" in vertex_source
    assert "#define USE_TEXTURE" not in vertex_source
    assert backend.named("draw_arrays") == [("draw_arrays", Primitive.TRIANGLES, geometry.array_count())]
    assert backend.named("frame") == [("frame", 800, 600)]
    assert backend.uniform(program, "diffuse") == (1.0, 0.0, 0.0)
    assert backend.uniform(program, "LightPosition_worldspace") == (4.0, 4.0, 4.0)
    assert native.flips == 1


def test_program_is_cached_between_frames(setup):
    renderer, backend, _, camera = setup
    material = BasicMaterial(color=Color(0, 1, 0))
    scene = Scene()
    scene.add(Mesh(cube(1), material))
    renderer.render(scene, camera)
    first = material.program
    renderer.render(scene, camera)
    assert material.program is first
    assert len(backend.programs) == 1
    assert len(backend.named("draw_arrays")) == 2


def test_model_and_mvp_uniforms(setup):
    renderer, backend, _, camera = setup
    material = BasicMaterial(color=Color(1, 1, 1))
    mesh = Mesh(cube(1), material)
    mesh.transform.translate_x(2.5)
    scene = Scene()
    scene.add(mesh)

    renderer.render(scene, camera)

    program = material.program
    model = backend.uniform(program, "M")
    assert model[12] == 2.5
    view = backend.uniform(program, "V")
    assert view == tuple(float(v) for v in np.identity(4).reshape(-1))
    mvp = np.array(backend.uniform(program, "MVP")).reshape(4, 4).T
    expected = camera.projection_matrix @ mesh.transform.matrix
    assert np.allclose(mvp, expected)


def test_line_draws_lines(setup):
    renderer, backend, _, camera = setup
    geometry = LineGeometry((0, 0, 0), (10, 0, 0))
    scene = Scene()
    scene.add(Line(geometry, BasicMaterial(color=Color(1, 0, 0))))
    renderer.render(scene, camera)
    assert backend.named("draw_arrays") == [("draw_arrays", Primitive.LINES, len(geometry.vertices))]


def test_wireframe_material(setup):
    renderer, backend, _, camera = setup
    scene = Scene()
    scene.add(Mesh(cube(1), BasicMaterial(color=Color(1, 0, 0), wireframe=True)))
    renderer.render(scene, camera)
    assert backend.named("wireframe") == [("wireframe", True)]


def test_textured_mesh(setup):
    renderer, backend, _, camera = setup
    texture = Texture()
    material = BasicMaterial(texture=texture)
    mesh = Mesh(cube(200), material)
    scene = Scene()
    scene.add(mesh)

    renderer.render(scene, camera)

    program = material.program
    assert program.attributes["texture"].index == 1
    assert program.attributes["texture"].size == 2
    vertex_source, _ = backend.programs[program.handle]
    assert "#define USE_TEXTURE" in vertex_source
    assert backend.named("bind_texture") == [("bind_texture", texture)]
    assert backend.named("unbind_texture") == [("unbind_texture", texture)]
    assert backend.uniform(program, "textureSampler") == 0
    assert backend.uniform(program, "repeat") == (1.0, 1.0)


def test_mesh_with_normals_uses_shading(setup):
    renderer, backend, _, camera = setup
    face = Face(0, 1, 2)
    face.add_normal(0, 0, 0)
    geometry = Geometry(
        vertices=[(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (0.0, 1.0, 0.0)],
        normals=[(0.0, 0.0, 1.0)],
        faces=[face],
    )
    material = BasicMaterial(color=Color(0.5, 0.5, 0.5))
    scene = Scene()
    scene.add(Mesh(geometry, material))

    renderer.render(scene, camera)

    program = material.program
    normals = program.attributes["normals"]
    assert (normals.index, normals.size) == (2, 3)
    vertex_source, _ = backend.programs[program.handle]
    assert "#define USE_BASIC_SHADING" in vertex_source
    enabled = [call[1:3] for call in backend.named("enable")]
    assert (2, 3) in enabled
    assert (0, 3) in enabled


def test_attributes_are_disabled_after_drawing(setup):
    renderer, backend, _, camera = setup
    scene = Scene()
    scene.add(Mesh(cube(1), BasicMaterial(texture=Texture())))
    renderer.render(scene, camera)
    enabled = Counter(call[1] for call in backend.named("enable"))
    disabled = Counter(call[1] for call in backend.named("disable"))
    assert enabled == disabled
    uses = backend.named("use")
    unuses = backend.named("unuse")
    assert [c[1] for c in uses] == [c[1] for c in unuses]


def _font():
    return Font(glyphs={"a": Glyph(0, 0, 8, 8), "b": Glyph(8, 0, 8, 8)}, width=16, height=16)


def test_render_text(setup):
    renderer, backend, _, camera = setup
    geometry = TextGeometry("ab", (10, 10), 8, _font(), window_height=600)
    material = TextMaterial(color=Color(1, 1, 1))
    text = Text(geometry, material)
    scene = Scene()
    scene.add_text(text)

    renderer.render(scene, camera)

    program = material.program
    assert backend.programs[program.handle] == (
        text_vertex_shader_source(),
        text_fragment_shader_source(),
    )
    assert backend.named("blend") == [("blend",)]
    assert backend.named("draw_arrays") == [("draw_arrays", Primitive.TRIANGLES, len(geometry.vertices))]
    assert backend.uniform(program, "diffuse") == (1.0, 1.0, 1.0)
    assert (0, 2) in [call[1:3] for call in backend.named("enable")]


def test_text_change_refreshes_buffers(setup):
    renderer, backend, _, camera = setup
    geometry = TextGeometry("a", (0, 0), 8, _font(), window_height=600)
    material = TextMaterial(color=Color(1, 1, 1))
    text = Text(geometry, material)
    scene = Scene()
    scene.add_text(text)
    renderer.render(scene, camera)
    assert backend.deleted_buffers == []

    text.set_text("ab")
    renderer.render(scene, camera)

    assert material.program.attributes["texture"].data is text.uv_buffer
    assert len(backend.deleted_buffers) == 2
    draws = backend.named("draw_arrays")
    assert draws[-1][2] == len(text.geometry.vertices)


def test_unload_releases_everything(setup):
    renderer, backend, native, camera = setup
    material = BasicMaterial(color=Color(1, 0, 0))
    scene = Scene()
    scene.add(Mesh(cube(1), material))
    scene.add(Mesh(cube(2), material))
    renderer.render(scene, camera)
    handle = material.program.handle

    renderer.unload(scene)

    assert backend.deleted_programs == [handle]
    assert material.program.loaded is False
    assert backend.released is True
    assert native.closed is True
    assert len(backend.deleted_buffers) == 2


def test_program_use_and_unload():
    backend = FakeBackend()
    program = Program(backend)
    program.load(42)
    program.use()
    program.unuse()
    assert backend.calls == [("use", 42), ("unuse", 42)]
    program.unload()
    program.unload()
    assert backend.deleted_programs == [42]
    assert program.handle is None


def test_check_errors_raises_and_drains(setup):
    renderer, backend, _, _ = setup
    backend.errors = [0x0500, 0x0502]
    with pytest.raises(RuntimeError, match="0x0500"):
        renderer.check_errors()
    assert backend.errors == []
    renderer.check_errors()
    assert backend.get_error() == 0


def test_degenerate_camera_gives_zero_view(setup):
    renderer, backend, _, camera = setup
    camera.transform.set_scale(0, 0, 0)
    material = BasicMaterial(color=Color(1, 0, 0))
    scene = Scene()
    scene.add(Mesh(cube(1), material))
    renderer.render(scene, camera)
    view = backend.uniform(material.program, "V")
    assert all(v == 0.0 for v in view)
    assert not any(math.isnan(v) for v in backend.uniform(material.program, "MVP"))