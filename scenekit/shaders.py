"""GLSL sources for the scene and text shader programs."""

from __future__ import annotations

import enum


class ProgramFeature(enum.IntFlag):
    """Features switched on in a shader program via pre-processor defines."""

    COLOR = 1
    TEXTURE = 2
    SHADING_BASIC = 4

    @property
    def define(self) -> str:
        return _DEFINES[self]


_DEFINES = {
    ProgramFeature.COLOR: "USE_COLOR",
    ProgramFeature.TEXTURE: "USE_TEXTURE",
    ProgramFeature.SHADING_BASIC: "USE_BASIC_SHADING",
}


def shader_definitions(features: int) -> str:
    """Return the #define lines for the given features, one per line."""
    features = ProgramFeature(features)
    return "\n".join(
        f"#define {feature.define}"
        for feature in ProgramFeature
        if features & feature == feature
    )


def _assemble(version: str, defines: str, body: str) -> str:
    return f"#version {version}\n{defines}\n{body}"


# Attribute locations: 0 position, 1 uv, 2 normal.
# Uniform names are looked up by the renderer and must stay as they are.
_SCENE_VERTEX_BODY = """
layout(location = 0) in vec3 in_position;
#ifdef USE_TEXTURE
layout(location = 1) in vec2 in_uv;
out vec2 UV;
#endif
layout(location = 2) in vec3 in_normal;

uniform mat4 MVP;
uniform mat4 M;
uniform mat4 V;
uniform vec3 LightPosition_worldspace;
uniform vec2 repeat;

out vec3 world_position;
out vec3 view_normal;
out vec3 view_eye;
out vec3 view_light;

void main() {
    vec4 position = vec4(in_position, 1.0);
    world_position = (M * position).xyz;
    view_eye = -(V * M * position).xyz;
    view_light = (V * vec4(LightPosition_worldspace, 1.0)).xyz + view_eye;
    view_normal = (V * M * vec4(in_normal, 0.0)).xyz;
#ifdef USE_TEXTURE
    UV = in_uv * repeat;
#endif
    gl_Position = MVP * position;
}
"""

_SCENE_FRAGMENT_BODY = """
in vec3 world_position;
in vec3 view_normal;
in vec3 view_eye;
in vec3 view_light;

#ifdef USE_COLOR
uniform vec3 diffuse;
#endif
#ifdef USE_TEXTURE
in vec2 UV;
uniform sampler2D textureSampler;
#endif
uniform vec3 LightPosition_worldspace;

out vec3 color;

const vec3 LIGHT_COLOR = vec3(1.0);
const float LIGHT_POWER = 50.0;
const vec3 AMBIENT_FACTOR = vec3(0.1);
const vec3 SPECULAR_COLOR = vec3(0.3);

void main() {
    vec3 base = vec3(0.0);
#ifdef USE_COLOR
    base = diffuse;
#endif
#ifdef USE_TEXTURE
    base = texture(textureSampler, UV).rgb;
#endif

#ifdef USE_BASIC_SHADING
    float dist = length(LightPosition_worldspace - world_position);
    float falloff = LIGHT_POWER / (dist * dist);
    vec3 n = normalize(view_normal);
    vec3 l = normalize(view_light);
    float diffuse_term = clamp(dot(n, l), 0.0, 1.0);
    float specular_term = clamp(dot(normalize(view_eye), reflect(-l, n)), 0.0, 1.0);
    color = AMBIENT_FACTOR * base
          + base * LIGHT_COLOR * falloff * diffuse_term
          + SPECULAR_COLOR * LIGHT_COLOR * falloff * pow(specular_term, 5.0);
#else
    color = base;
#endif
}
"""

# Screen-space text: positions are pixels in an 800x600 area mapped to clip space.
_TEXT_VERTEX = """#version 330

layout(location = 0) in vec2 in_screen_position;
layout(location = 1) in vec2 in_uv;

out vec2 UV;

const vec2 HALF_SCREEN = vec2(400.0, 300.0);

void main() {
    vec2 clip = (in_screen_position - HALF_SCREEN) / HALF_SCREEN;
    gl_Position = vec4(clip, 0.0, 1.0);
    UV = in_uv;
}
"""

_TEXT_FRAGMENT = """#version 330

in vec2 UV;

uniform vec3 diffuse;
uniform sampler2D textureSampler;

out vec4 color;

void main() {
    color = vec4(diffuse, 1.0) * texture(textureSampler, UV);
}
"""


def vertex_shader_source(features: int) -> str:
    """Return the scene vertex shader with the given features defined."""
    return _assemble("330 core", shader_definitions(features), _SCENE_VERTEX_BODY)


def fragment_shader_source(features: int) -> str:
    """Return the scene fragment shader with the given features defined."""
    return _assemble("330 core", shader_definitions(features), _SCENE_FRAGMENT_BODY)


def text_vertex_shader_source() -> str:
    """Return the vertex shader used for screen-space text."""
    return _TEXT_VERTEX


def text_fragment_shader_source() -> str:
    """Return the fragment shader used for screen-space text."""
    return _TEXT_FRAGMENT