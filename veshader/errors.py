# veshader/errors.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from veshader.types import Diagnostic, StageKind


class VeshaderError(Exception):
    """Base class for everything veshader raises on purpose."""


class ParseError(VeshaderError, ValueError):
    """
    Structural problem in the authoring file.
    Aborts processing of that file; partial splitting is not meaningful.
    """

    def __init__(self, message: str, line: Optional[int] = None) -> None:
        self.line = line
        self.message = message
        if line is not None:
            super().__init__(f"line {line}: {message}")
        else:
            super().__init__(message)


class UnknownDirective(ParseError):
    def __init__(self, text: str, line: int) -> None:
        self.text = text
        super().__init__(f"Unknown directive: {text.strip()}", line)


class UnknownStageType(ParseError):
    def __init__(self, argument: str, line: int) -> None:
        self.argument = argument
        super().__init__(
            f"Unknown shader type: {argument!r} (expected VERTEX, FRAGMENT or GEOMETRY)",
            line,
        )


class InvalidVersionArgument(ParseError):
    def __init__(self, argument: str, line: int) -> None:
        self.argument = argument
        super().__init__(
            f"VERSION expects a positive integer, got {argument!r}", line
        )


class ConflictingVersion(ParseError):
    def __init__(self, previous: int, previous_line: int, new: int, line: int) -> None:
        self.previous = previous
        self.previous_line = previous_line
        self.new = new
        super().__init__(
            f"VERSION {new} conflicts with VERSION {previous} set on line {previous_line}",
            line,
        )


class NoStagesDefined(ParseError):
    def __init__(self) -> None:
        super().__init__("No TYPE directive found; the file defines no shader stages")


class EmptyStage(ParseError):
    def __init__(self, kind: StageKind, line: int) -> None:
        self.kind = kind
        super().__init__(f"{kind.value} stage has no source lines", line)


class SettingsError(VeshaderError, ValueError):
    pass


class CompilerNotFound(VeshaderError):
    pass


@dataclass(frozen=True, slots=True)
class LineUnmappable:
    """Note: the compiler pointed outside the stage body."""

    stage_local_line: Optional[int]
    clamped_to: Optional[int]

    def __str__(self) -> str:
        if self.stage_local_line is None:
            return "compiler reported no line; location unknown"
        return (
            f"compiler reported stage-local line {self.stage_local_line}, "
            f"outside the stage body; shown at line {self.clamped_to}"
        )


class StageCompileFailure(VeshaderError):
    """
    The external compiler rejected one stage.
    Collected by the driver rather than raised, so the remaining stages
    still get compiled.
    """

    def __init__(
        self,
        stage_kind: StageKind,
        stage_index: int,
        diagnostics: Sequence[Diagnostic],
        notes: Sequence[LineUnmappable] = (),
    ) -> None:
        self.stage_kind = stage_kind
        self.stage_index = stage_index
        self.diagnostics: Tuple[Diagnostic, ...] = tuple(diagnostics)
        self.notes: Tuple[LineUnmappable, ...] = tuple(notes)
        errors = sum(1 for d in self.diagnostics if d.severity == "error")
        super().__init__(
            f"{stage_kind.value} stage #{stage_index} failed to compile "
            f"({errors} error(s))"
        )
