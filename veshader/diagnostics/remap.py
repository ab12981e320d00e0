# veshader/diagnostics/remap.py
from __future__ import annotations

from typing import Optional, Tuple

from veshader.errors import LineUnmappable
from veshader.types import Diagnostic, RawDiagnostic, StageBlock


def map_line(block: StageBlock, stage_local: Optional[int]) -> Tuple[Optional[int], bool, bool]:
    """
    Translate a stage-local line to a line of the authoring file.

    Returns (original_line, unmappable, synthetic). Lines outside the
    body are clamped to the nearest body line and flagged unmappable.
    """
    if stage_local is None:
        return None, True, False
    if stage_local == 0:
        return block.version_line, False, True

    body = block.body_lines
    if 1 <= stage_local <= len(body):
        return body[stage_local - 1].line, False, False

    if not body:
        return block.opened_at, True, False
    clamped = body[-1] if stage_local > len(body) else body[0]
    return clamped.line, True, False


def remap(
    raw: RawDiagnostic, block: StageBlock, stage_index: int
) -> Tuple[Diagnostic, Optional[LineUnmappable]]:
    """Never raises; a diagnostic that cannot be placed is flagged, not dropped."""
    if raw.file is not None:
        # Lines inside an #included file are already in that file's numbering.
        diagnostic = Diagnostic(
            stage_kind=block.kind,
            stage_index=stage_index,
            original_line=raw.line,
            column=raw.column,
            message=raw.message,
            severity=raw.severity,
            file=raw.file,
        )
        return diagnostic, None

    line, unmappable, synthetic = map_line(block, raw.line)
    diagnostic = Diagnostic(
        stage_kind=block.kind,
        stage_index=stage_index,
        original_line=line,
        column=raw.column,
        message=raw.message,
        severity=raw.severity,
        line_unmappable=unmappable,
        synthetic=synthetic,
    )
    note = LineUnmappable(raw.line, line) if unmappable else None
    return diagnostic, note
