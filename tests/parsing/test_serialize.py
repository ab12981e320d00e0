from veshader.parsing.serialize import DEFAULT_GLSL_VERSION, serialize_block
from veshader.parsing.splitter import split_document


def test_version_line_is_prepended(vertex_color_source):
    doc = split_document(vertex_color_source)

    text = serialize_block(doc.stages[0])
    lines = text.split("\n")

    assert lines[0] == "#version 450"
    assert lines[1] == "layout(location = 0) in vec3 in_pos;"
    assert text.endswith("}\n")


def test_stage_local_line_n_is_body_line_n(vertex_color_source):
    block = split_document(vertex_color_source).stages[1]
    lines = serialize_block(block).split("\n")

    for n, source_line in enumerate(block.body_lines, start=1):
        assert lines[n] == source_line.text


def test_default_version_when_unset():
    block = split_document("//# TYPE VERTEX\nvoid main() {}").stages[0]
    assert serialize_block(block).startswith(f"#version {DEFAULT_GLSL_VERSION}\n")
