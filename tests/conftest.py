import struct

import pytest

from veshader.types import RawDiagnostic

VERTEX_COLOR = "\n".join(
    [
        "//# NAME vertex-color",
        "//# AUTHOR someone",
        "//# DESCRIPTION Passes a per-vertex color through to the fragment stage",
        "//# VERSION 450",
        "",
        "//# TYPE VERTEX",
        "layout(location = 0) in vec3 in_pos;",
        "layout(location = 1) in vec3 in_color;",
        "layout(location = 0) out vec3 v_color;",
        "",
        "void main() {",
        "    v_color = in_color;",
        "    gl_Position = vec4(in_pos, 1.0);",
        "}",
        "",
        "//# TYPE FRAGMENT",
        "layout(location = 0) in vec3 v_color;",
        "layout(location = 0) out vec4 out_color;",
        "",
        "void main() {",
        "    out_color = vec4(v_color, 1.0);",
        "}",
        "",
    ]
)


def make_spirv(bound: int = 8) -> bytes:
    # magic, version 1.0, generator, bound, schema, one OpNop-sized word
    return struct.pack("<6I", 0x07230203, 0x00010000, 0, bound, 0, 0x00010000)


@pytest.fixture
def vertex_color_source():
    return VERTEX_COLOR


@pytest.fixture
def fake_spirv():
    return make_spirv()


@pytest.fixture
def stub_compiler():
    """
    Succeeds for anything with a #version header and a main(),
    otherwise reports an error on stage-local line 1.
    Records every call.
    """
    calls = []

    def compile_fn(source_text, stage_kind):
        calls.append((source_text, stage_kind))
        if source_text.startswith("#version") and "void main()" in source_text:
            return make_spirv()
        return [RawDiagnostic(line=1, column=1, message="'main' : function not found")]

    compile_fn.calls = calls
    return compile_fn
