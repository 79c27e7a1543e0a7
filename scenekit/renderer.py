"""Drawing scenes through OpenGL shader programs."""

from __future__ import annotations

import contextlib
from typing import Any, Optional, Protocol

import numpy as np

from .buffers import Attribute
from .color import Color
from .dds import DDSImage
from .font import Glyph
from .logger import get_logger
from .mathutil import F32
from .objects import Primitive
from .shaders import (
    ProgramFeature,
    fragment_shader_source,
    text_fragment_shader_source,
    text_vertex_shader_source,
    vertex_shader_source,
)
from .texture import Texture

_log = get_logger("scenekit")

_LIGHT_POSITION = (4.0, 4.0, 4.0)
_EMPTY = np.zeros(0, dtype=F32)
_MAX_ERRORS = 32


class _Backend(Protocol):
    """The drawing operations the renderer needs from a graphics device."""

    def setup(self, clear_color: Optional[Color]) -> None: ...
    def create_program(self, vertex_source: str, fragment_source: str) -> Any: ...
    def delete_program(self, program: Any) -> None: ...
    def use_program(self, program: Any) -> None: ...
    def unuse_program(self, program: Any) -> None: ...
    def uniform_location(self, program: Any, name: str) -> Any: ...
    def set_uniform(self, location: Any, value: Any) -> None: ...
    def create_buffer(self, data: np.ndarray) -> Any: ...
    def delete_buffer(self, buffer: Any) -> None: ...
    def enable_attribute(self, index: int, size: int, buffer: Any) -> None: ...
    def disable_attribute(self, index: int) -> None: ...
    def bind_texture(self, texture: Texture) -> None: ...
    def unbind_texture(self, texture: Texture) -> None: ...
    def set_wireframe(self, enabled: bool) -> None: ...
    def enable_blending(self) -> None: ...
    def begin_frame(self, width: int, height: int) -> None: ...
    def draw_arrays(self, mode: int, count: int) -> None: ...
    def draw_elements(self, mode: int, count: int, buffer: Any) -> None: ...
    def get_error(self) -> int: ...
    def release(self) -> None: ...


class _PygletBackend:
    """Graphics device backed by pyglet's OpenGL bindings."""

    def __init__(self) -> None:
        import pyglet
        from pyglet import gl
        from pyglet.graphics import shader, vertexarray, vertexbuffer

        self._pyglet = pyglet
        self.gl = gl
        self._shader = shader
        self._vertexarray = vertexarray
        self._vertexbuffer = vertexbuffer
        self._vao = None

    def setup(self, clear_color: Optional[Color]) -> None:
        gl = self.gl
        gl.glGetError()
        if clear_color is not None:
            gl.glClearColor(clear_color.r, clear_color.g, clear_color.b, 0.0)
        gl.glEnable(gl.GL_DEPTH_TEST)
        gl.glDepthFunc(gl.GL_LESS)
        gl.glEnable(gl.GL_CULL_FACE)
        self._vao = self._vertexarray.VertexArray()
        self._vao.bind()

    def create_program(self, vertex_source: str, fragment_source: str) -> Any:
        shader = self._shader
        return shader.ShaderProgram(
            shader.Shader(vertex_source, "vertex"),
            shader.Shader(fragment_source, "fragment"),
        )

    def delete_program(self, program: Any) -> None:
        program.delete()

    def use_program(self, program: Any) -> None:
        program.use()

    def unuse_program(self, program: Any) -> None:
        program.stop()

    def uniform_location(self, program: Any, name: str) -> Any:
        return (program, name)

    def set_uniform(self, location: Any, value: Any) -> None:
        if location is None:
            return
        program, name = location
        try:
            program[name] = value
        except self._shader.ShaderException:
            # Uniforms the compiler optimised away are ignored, as GL does.
            pass

    def create_buffer(self, data: np.ndarray) -> Any:
        data = np.ascontiguousarray(data)
        buffer = self._vertexbuffer.BufferObject(data.nbytes, usage=self.gl.GL_STATIC_DRAW)
        buffer.set_data(data.ctypes.data)
        return buffer

    def delete_buffer(self, buffer: Any) -> None:
        buffer.delete()

    def enable_attribute(self, index: int, size: int, buffer: Any) -> None:
        gl = self.gl
        gl.glBindBuffer(gl.GL_ARRAY_BUFFER, buffer.id)
        gl.glEnableVertexAttribArray(index)
        gl.glVertexAttribPointer(index, size, gl.GL_FLOAT, gl.GL_FALSE, 0, 0)

    def disable_attribute(self, index: int) -> None:
        gl = self.gl
        gl.glDisableVertexAttribArray(index)
        gl.glBindBuffer(gl.GL_ARRAY_BUFFER, 0)

    def _upload_texture(self, image: Any) -> Any:
        gl = self.gl
        if image is None:
            raise ValueError("texture has no image to upload")
        if isinstance(image, DDSImage):
            texture = self._pyglet.image.Texture.create(image.width, image.height)
            gl.glBindTexture(gl.GL_TEXTURE_2D, texture.id)
            gl.glPixelStorei(gl.GL_UNPACK_ALIGNMENT, 1)
            for level in image.levels:
                gl.glCompressedTexImage2D(
                    gl.GL_TEXTURE_2D,
                    level.level,
                    image.format.gl_format,
                    level.width,
                    level.height,
                    0,
                    len(level.data),
                    level.data,
                )
            gl.glTexParameteri(gl.GL_TEXTURE_2D, gl.GL_TEXTURE_MAX_LEVEL, max(0, len(image.levels) - 1))
            return texture
        rgba = image.convert("RGBA")
        width, height = rgba.size
        data = self._pyglet.image.ImageData(width, height, "RGBA", rgba.tobytes(), pitch=-width * 4)
        return data.get_texture()

    def bind_texture(self, texture: Texture) -> None:
        gl = self.gl
        if texture.handle is None:
            texture.handle = self._upload_texture(texture.image)
        handle = texture.handle
        gl.glActiveTexture(gl.GL_TEXTURE0)
        gl.glBindTexture(handle.target, handle.id)
        gl.glTexParameteri(gl.GL_TEXTURE_2D, gl.GL_TEXTURE_WRAP_S, texture.wrap_s.gl_value)
        gl.glTexParameteri(gl.GL_TEXTURE_2D, gl.GL_TEXTURE_WRAP_T, texture.wrap_t.gl_value)

    def unbind_texture(self, texture: Texture) -> None:
        self.gl.glBindTexture(self.gl.GL_TEXTURE_2D, 0)

    def set_wireframe(self, enabled: bool) -> None:
        gl = self.gl
        gl.glPolygonMode(gl.GL_FRONT_AND_BACK, gl.GL_LINE if enabled else gl.GL_FILL)

    def enable_blending(self) -> None:
        gl = self.gl
        gl.glEnable(gl.GL_BLEND)
        gl.glBlendFunc(gl.GL_SRC_ALPHA, gl.GL_ONE_MINUS_SRC_ALPHA)

    def begin_frame(self, width: int, height: int) -> None:
        gl = self.gl
        gl.glViewport(0, 0, width, height)
        gl.glClear(gl.GL_COLOR_BUFFER_BIT | gl.GL_DEPTH_BUFFER_BIT)

    def draw_arrays(self, mode: int, count: int) -> None:
        self.gl.glDrawArrays(int(mode), 0, count)

    def draw_elements(self, mode: int, count: int, buffer: Any) -> None:
        gl = self.gl
        gl.glBindBuffer(gl.GL_ELEMENT_ARRAY_BUFFER, buffer.id)
        gl.glDrawElements(int(mode), count, gl.GL_UNSIGNED_SHORT, 0)
        gl.glBindBuffer(gl.GL_ELEMENT_ARRAY_BUFFER, 0)

    def get_error(self) -> int:
        return int(self.gl.glGetError())

    def release(self) -> None:
        if self._vao is not None:
            self._vao.delete()
            self._vao = None


def _inverse(matrix: np.ndarray) -> np.ndarray:
    m = np.asarray(matrix, dtype=np.float64)
    if np.linalg.det(m) == 0:
        return np.zeros((4, 4), dtype=F32)
    return np.linalg.inv(m).astype(F32)


def _uniform_value(value: Any) -> Any:
    if isinstance(value, Color):
        return tuple(float(c) for c in value.as_list())
    if isinstance(value, Texture):
        return 0
    if isinstance(value, Glyph):
        return (float(value.x), float(value.y), float(value.width), float(value.height))
    if isinstance(value, (str, bytes)):
        raise TypeError(f"cannot use {type(value).__name__} as a uniform value")
    if isinstance(value, np.ndarray) and value.shape == (4, 4):
        # Column-major order, as OpenGL expects.
        return tuple(float(v) for v in value.astype(F32).T.reshape(-1))
    try:
        values = tuple(float(v) for v in value)
    except TypeError:
        raise TypeError(f"cannot use {type(value).__name__} as a uniform value") from None
    if len(values) not in (2, 3, 4):
        raise TypeError(f"cannot use a vector of {len(values)} values as a uniform value")
    return values


def select_features(material: Any, geometry: Any) -> ProgramFeature:
    """Pick the shader features for a material drawn on a geometry.

    A texture takes the place of a colour; normals add basic shading.
    """
    feature = ProgramFeature(0)
    if getattr(material, "color", None) is not None:
        feature = ProgramFeature.COLOR
    if getattr(material, "texture", None) is not None:
        feature = ProgramFeature.TEXTURE
    if len(getattr(geometry, "normals", ()) or ()) > 0:
        feature |= ProgramFeature.SHADING_BASIC
    return feature


class Program:
    """A shader program with its vertex attributes and uniforms."""

    def __init__(self, backend: _Backend):
        self.backend = backend
        self.attributes: dict[str, Attribute] = {}
        self.uniforms: dict[str, Uniform] = {}
        self.handle: Any = None
        self.loaded = False
        self._buffers: dict[str, tuple[np.ndarray, Any]] = {}

    def load(self, handle: Any) -> None:
        """Attach a compiled program."""
        self.handle = handle
        self.loaded = True

    def use(self) -> None:
        """Make this program current."""
        self.backend.use_program(self.handle)

    def unuse(self) -> None:
        """Stop using this program."""
        self.backend.unuse_program(self.handle)

    def unload(self) -> None:
        """Release the attribute buffers and the program itself."""
        if not self.loaded:
            return
        for _, buffer in self._buffers.values():
            self.backend.delete_buffer(buffer)
        self._buffers.clear()
        self.backend.delete_program(self.handle)
        self.handle = None
        self.loaded = False

    def _attribute_buffer(self, name: str) -> Any:
        data = self.attributes[name].data
        cached = self._buffers.get(name)
        if cached is not None and cached[0] is data:
            return cached[1]
        if cached is not None:
            self.backend.delete_buffer(cached[1])
        buffer = self.backend.create_buffer(data)
        self._buffers[name] = (data, buffer)
        return buffer


class Uniform:
    """A named uniform of a shader program."""

    def __init__(self, program: Program, identifier: str):
        _log.debug(f"Uniform: {identifier}")
        self.identifier = identifier
        self.backend = program.backend
        self.location = program.backend.uniform_location(program.handle, identifier)

    def apply(self, value: Any) -> None:
        """Set the uniform to a matrix, colour, texture, glyph or 2-4 vector."""
        _log.trace(f"Applying uniform: {self.identifier} = {value}")
        self.backend.set_uniform(self.location, _uniform_value(value))


class Renderer:
    """Draws scenes into a window."""

    def __init__(self, window: Any, backend: Optional[_Backend] = None):
        _log.debug("Initializing OpenGL")
        if backend is None:
            try:
                backend = _PygletBackend()
            except Exception as exc:
                raise RuntimeError("Could not initialise OpenGL.") from exc
        self.window = window
        self.backend = backend
        self._vertex_buffers: dict[Any, tuple[np.ndarray, Any]] = {}
        self._index_buffers: dict[Any, tuple[np.ndarray, Any]] = {}
        backend.setup(window.settings.clear_color)

    def render(self, scene: Any, camera: Any) -> None:
        """Draw the scene's objects, then its texts, and show the frame."""
        self.backend.begin_frame(self.window.width, self.window.height)
        for element in scene.objects:
            self._draw_object(camera, element)
        for text in scene.texts:
            self._draw_text(text)
        self.window.swap()

    def unload(self, scene: Any) -> None:
        """Release the scene's programs, the buffers and the window."""
        _log.info("Unload scene")
        for element in scene.objects:
            program = element.material.program
            if program is not None:
                program.unload()
        for cache in (self._vertex_buffers, self._index_buffers):
            for _, buffer in cache.values():
                self.backend.delete_buffer(buffer)
            cache.clear()
        self.backend.release()
        self.window.close()

    def check_errors(self) -> None:
        """Raise RuntimeError if OpenGL has reported errors since the last check."""
        errors = []
        while len(errors) < _MAX_ERRORS:
            code = self.backend.get_error()
            if code == 0:
                break
            errors.append(code)
        if errors:
            listed = ", ".join(f"0x{code:04X}" for code in errors)
            raise RuntimeError(f"OpenGL error(s): {listed}")

    def _cached_buffer(self, cache: dict, owner: Any, data: np.ndarray) -> Any:
        entry = cache.get(owner)
        if entry is not None and entry[0] is data:
            return entry[1]
        if entry is not None:
            self.backend.delete_buffer(entry[1])
        buffer = self.backend.create_buffer(data)
        cache[owner] = (data, buffer)
        return buffer

    def _apply_color(self, program: Program, material: Any) -> None:
        color = getattr(material, "color", None)
        if color is not None and "diffuse" in program.uniforms:
            program.uniforms["diffuse"].apply(color)

    def _bind_texture(self, stack: contextlib.ExitStack, program: Program, texture: Texture) -> None:
        self.backend.bind_texture(texture)
        stack.callback(self.backend.unbind_texture, texture)
        if "texture" in program.uniforms:
            program.uniforms["texture"].apply(texture)

    def _enable_attributes(self, stack: contextlib.ExitStack, program: Program) -> None:
        for name, attribute in program.attributes.items():
            buffer = program._attribute_buffer(name)
            self.backend.enable_attribute(attribute.index, attribute.size, buffer)
            stack.callback(self.backend.disable_attribute, attribute.index)

    def _enable_vertices(self, stack: contextlib.ExitStack, owner: Any, data: np.ndarray, size: int) -> None:
        buffer = self._cached_buffer(self._vertex_buffers, owner, data)
        self.backend.enable_attribute(0, size, buffer)
        stack.callback(self.backend.disable_attribute, 0)

    def _apply_wireframe(self, material: Any) -> None:
        if hasattr(material, "wireframe"):
            self.backend.set_wireframe(bool(material.wireframe))

    def _draw_object(self, camera: Any, element: Any) -> None:
        material = element.material
        program = material.program
        if program is None:
            program = self._create_program(element)
            material.program = program

        with contextlib.ExitStack() as stack:
            program.use()
            stack.callback(program.unuse)

            view = _inverse(camera.transform.matrix)
            model = element.transform.matrix
            mvp = (camera.projection_matrix @ view @ model).astype(F32)
            uniforms = program.uniforms
            uniforms["MVP"].apply(mvp)
            uniforms["M"].apply(model)
            uniforms["V"].apply(view)
            uniforms["LightPosition_worldspace"].apply(_LIGHT_POSITION)

            self._apply_color(program, material)

            texture = getattr(material, "texture", None)
            if texture is not None:
                self._bind_texture(stack, program, texture)
                if "repeat" in uniforms:
                    uniforms["repeat"].apply(texture.repeat)

            self._enable_attributes(stack, program)
            self._enable_vertices(stack, element, element.vertex_buffer, 3)
            self._apply_wireframe(material)

            index = element.index
            if index is not None and index.count > 0:
                buffer = self._cached_buffer(self._index_buffers, element, index.data)
                self.backend.draw_elements(Primitive.TRIANGLES, index.count, buffer)
            else:
                self.backend.draw_arrays(element.mode, element.geometry.array_count())

    def _draw_text(self, text: Any) -> None:
        material = text.material
        program = material.program
        if program is None:
            program = self._create_text_program(text)
            material.program = program

        uv_attribute = program.attributes.get("texture")
        if uv_attribute is not None and uv_attribute.data is not text.uv_buffer:
            program.attributes["texture"] = Attribute(1, 2, text.uv_buffer)

        with contextlib.ExitStack() as stack:
            program.use()
            stack.callback(program.unuse)

            self._apply_color(program, material)

            texture = getattr(material, "texture", None)
            if texture is not None:
                self._bind_texture(stack, program, texture)

            self._enable_attributes(stack, program)
            self._enable_vertices(stack, text, text.vertex_buffer, 2)
            self._apply_wireframe(material)

            self.backend.enable_blending()
            self.backend.draw_arrays(Primitive.TRIANGLES, len(text.geometry.vertices))

    def _create_program(self, element: Any) -> Program:
        program = Program(self.backend)
        material = element.material
        geometry = element.geometry
        features = select_features(material, geometry)
        textured = getattr(material, "texture", None) is not None

        if textured:
            uvs = element.uv_buffer if element.uv_buffer is not None else _EMPTY
            program.attributes["texture"] = Attribute(1, 2, uvs)
        if len(geometry.normals) > 0:
            normals = element.normal_buffer if element.normal_buffer is not None else _EMPTY
            program.attributes["normals"] = Attribute(2, 3, normals)

        _log.debug("Creating new shader program")
        program.load(
            self.backend.create_program(
                vertex_shader_source(features), fragment_shader_source(features)
            )
        )

        for name in ("MVP", "V", "M", "LightPosition_worldspace", "diffuse"):
            program.uniforms[name] = Uniform(program, name)
        if textured:
            program.uniforms["texture"] = Uniform(program, "textureSampler")
            program.uniforms["repeat"] = Uniform(program, "repeat")
        return program

    def _create_text_program(self, text: Any) -> Program:
        program = Program(self.backend)
        program.attributes["texture"] = Attribute(1, 2, text.uv_buffer)
        program.load(
            self.backend.create_program(text_vertex_shader_source(), text_fragment_shader_source())
        )
        program.uniforms["texture"] = Uniform(program, "textureSampler")
        program.uniforms["diffuse"] = Uniform(program, "diffuse")
        return program