# veshader/diagnostics/report.py
from __future__ import annotations

from typing import Optional

from veshader.errors import ParseError
from veshader.types import Diagnostic, ParseWarning


def location(path: str, line: Optional[int], column: Optional[int]) -> str:
    if line is None:
        return path
    if column is None:
        return f"{path}:{line}"
    return f"{path}:{line}:{column}"


def format_diagnostic(path: str, d: Diagnostic) -> str:
    """`path:line:col: severity: [STAGE] message`, plus a note when needed."""
    text = (
        f"{location(d.file or path, d.original_line, d.column)}: {d.severity}: "
        f"[{d.stage_kind.value}] {d.message}"
    )
    if d.synthetic:
        text += "\n  note: reported on the injected #version line"
    elif d.line_unmappable:
        text += "\n  note: compiler line is outside the stage body; location is approximate"
    return text


def format_parse_error(path: str, err: ParseError) -> str:
    return f"{location(path, err.line, None)}: error: {err.message}"


def format_warning(path: str, w: ParseWarning) -> str:
    return f"{location(path, w.line, None)}: warning: {w.message}"
