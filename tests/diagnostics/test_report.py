from veshader.diagnostics.report import (
    format_diagnostic,
    format_parse_error,
    format_warning,
)
from veshader.errors import UnknownDirective
from veshader.types import Diagnostic, ParseWarning, StageKind


def test_format_diagnostic_uses_original_line():
    d = Diagnostic(StageKind.FRAGMENT, 1, 42, 7, "'x' : undeclared identifier")
    assert format_diagnostic("a.glsl", d) == (
        "a.glsl:42:7: error: [FRAGMENT] 'x' : undeclared identifier"
    )


def test_format_unmappable_adds_note():
    d = Diagnostic(StageKind.VERTEX, 0, 10, None, "eof", line_unmappable=True)
    text = format_diagnostic("a.glsl", d)

    assert text.startswith("a.glsl:10: error: [VERTEX] eof")
    assert "approximate" in text


def test_format_synthetic_line():
    d = Diagnostic(StageKind.VERTEX, 0, None, None, "bad version", synthetic=True)
    text = format_diagnostic("a.glsl", d)

    assert text.startswith("a.glsl: error: [VERTEX] bad version")
    assert "#version" in text


def test_format_included_file_uses_its_own_path():
    d = Diagnostic(StageKind.FRAGMENT, 1, 5, 3, "'vec5' : undeclared identifier", file="inc/common.glsl")
    assert format_diagnostic("a.glsl", d) == (
        "inc/common.glsl:5:3: error: [FRAGMENT] 'vec5' : undeclared identifier"
    )


def test_format_parse_error_and_warning():
    err = UnknownDirective("//# FOO bar", 5)
    assert format_parse_error("a.glsl", err) == "a.glsl:5: error: Unknown directive: //# FOO bar"
    assert format_warning("a.glsl", ParseWarning(3, "dup")) == "a.glsl:3: warning: dup"
