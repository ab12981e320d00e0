import pytest

from veshader.errors import (
    ConflictingVersion,
    EmptyStage,
    InvalidVersionArgument,
    NoStagesDefined,
    ParseError,
    UnknownDirective,
    UnknownStageType,
)
from veshader.parsing.lexer import is_directive
from veshader.parsing.splitter import parse_file, split_document
from veshader.types import StageKind


def _doc(*lines):
    return "\n".join(lines)


def test_vertex_color_example_splits_into_two_stages(vertex_color_source):
    doc = split_document(vertex_color_source)

    assert [s.kind for s in doc.stages] == [StageKind.VERTEX, StageKind.FRAGMENT]
    assert all(s.version == 450 for s in doc.stages)
    assert doc.metadata.name == "vertex-color"
    assert doc.metadata.author == "someone"
    assert doc.metadata.description.startswith("Passes a per-vertex color")

    vertex, fragment = doc.stages
    assert vertex.body_lines[0].line == 7
    assert vertex.body_lines[-1].line == 14  # trailing blank line 15 trimmed
    assert vertex.opened_at == 6
    assert fragment.body_lines[0].line == 17
    assert fragment.body_lines[-1].text == "}"
    assert fragment.metadata == doc.metadata


def test_bodies_reproduce_source_without_directives(vertex_color_source):
    doc = split_document(vertex_color_source)
    lines = vertex_color_source.split("\n")

    for stage in doc.stages:
        first, last = stage.body_lines[0].line, stage.body_lines[-1].line
        expected = [l for l in lines[first - 1 : last] if not is_directive(l)]
        assert [s.text for s in stage.body_lines] == expected
        assert [s.line for s in stage.body_lines] == list(range(first, last + 1))


def test_repeated_stage_kinds_stay_separate():
    doc = split_document(
        _doc(
            "//# TYPE VERTEX",
            "void main() { /* a */ }",
            "//# TYPE FRAGMENT",
            "void main() { /* b */ }",
            "//# TYPE VERTEX",
            "void main() { /* c */ }",
        )
    )

    assert [s.kind for s in doc.stages] == [
        StageKind.VERTEX,
        StageKind.FRAGMENT,
        StageKind.VERTEX,
    ]
    assert doc.stages[2].body_lines[0].line == 6


def test_type_argument_is_case_insensitive():
    doc = split_document(_doc("//# TYPE geometry", "void main() {}"))
    assert doc.stages[0].kind is StageKind.GEOMETRY


def test_same_version_twice_is_accepted():
    doc = split_document(
        _doc("//# VERSION 450", "//# TYPE VERTEX", "void main() {}", "//# VERSION 450")
    )
    assert doc.version == 450
    assert doc.stages[0].version_line == 1


def test_conflicting_version_is_fatal():
    with pytest.raises(ConflictingVersion) as exc:
        split_document(
            _doc("//# VERSION 450", "//# TYPE VERTEX", "void main() {}", "//# VERSION 460")
        )

    assert exc.value.line == 4
    assert exc.value.previous == 450
    assert exc.value.new == 460


def test_version_inside_stage_applies_to_earlier_blocks():
    doc = split_document(
        _doc(
            "//# TYPE VERTEX",
            "void main() {}",
            "//# TYPE FRAGMENT",
            "//# VERSION 330",
            "void main() {}",
        )
    )
    assert [s.version for s in doc.stages] == [330, 330]
    assert doc.stages[1].body_lines[0].line == 5


def test_missing_version_leaves_blocks_unversioned():
    doc = split_document(_doc("//# TYPE VERTEX", "void main() {}"))
    assert doc.version is None
    assert doc.stages[0].version is None


@pytest.mark.parametrize("argument", ["", "abc", "0", "-450", "450 core", "4.5"])
def test_invalid_version_argument(argument):
    with pytest.raises(InvalidVersionArgument) as exc:
        split_document(_doc(f"//# VERSION {argument}", "//# TYPE VERTEX", "void main() {}"))
    assert exc.value.line == 1


def test_unknown_directive_reports_its_line():
    with pytest.raises(UnknownDirective) as exc:
        split_document(_doc("//# TYPE VERTEX", "void main() {}", "//# FOO bar"))

    assert exc.value.line == 3
    assert "FOO bar" in str(exc.value)


def test_unknown_directive_in_preamble_is_fatal():
    with pytest.raises(UnknownDirective):
        split_document(_doc("//# NAMES typo", "//# TYPE VERTEX", "void main() {}"))


def test_unknown_stage_type():
    with pytest.raises(UnknownStageType) as exc:
        split_document(_doc("// header", "//# TYPE COMPUTE", "void main() {}"))

    assert exc.value.line == 2
    assert exc.value.argument == "COMPUTE"


def test_no_type_directive():
    with pytest.raises(NoStagesDefined):
        split_document(_doc("//# NAME nothing", "void main() {}"))


def test_empty_input():
    with pytest.raises(NoStagesDefined):
        split_document("")


def test_empty_stage_is_fatal():
    with pytest.raises(EmptyStage) as exc:
        split_document(_doc("//# TYPE VERTEX", "", "   ", "//# TYPE FRAGMENT", "void main() {}"))

    assert exc.value.line == 1
    assert exc.value.kind is StageKind.VERTEX


def test_parse_errors_are_value_errors():
    with pytest.raises(ValueError):
        split_document("//# TYPE NOPE")
    assert issubclass(UnknownStageType, ParseError)


def test_preamble_lines_are_ignored():
    doc = split_document(
        _doc(
            "This file holds the sky shader.",
            "uniform float unused;",
            "//# TYPE FRAGMENT",
            "void main() {}",
        )
    )
    assert len(doc.stages) == 1
    assert [s.text for s in doc.stages[0].body_lines] == ["void main() {}"]


def test_duplicate_metadata_warns_and_last_wins():
    doc = split_document(
        _doc(
            "//# NAME first",
            "//# TYPE VERTEX",
            "void main() {}",
            "//# NAME second",
        )
    )

    assert doc.metadata.name == "second"
    assert len(doc.warnings) == 1
    assert doc.warnings[0].line == 4
    assert "line 1" in doc.warnings[0].message


def test_blank_lines_inside_body_are_kept():
    doc = split_document(_doc("//# TYPE VERTEX", "", "void main() {", "", "}", "", ""))
    assert [s.text for s in doc.stages[0].body_lines] == ["", "void main() {", "", "}"]


def test_crlf_line_endings():
    doc = split_document("//# TYPE VERTEX\r\nvoid main() {}\r\n")
    assert doc.stages[0].body_lines[0].text == "void main() {}"


def test_parse_file(tmp_path, vertex_color_source):
    f = tmp_path / "vertex_color.glsl"
    f.write_text(vertex_color_source, encoding="utf-8")

    doc = parse_file(f)

    assert doc.path == str(f)
    assert len(doc.stages) == 2
