# veshader/types.py
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Literal, Optional, Tuple

if TYPE_CHECKING:
    from veshader.errors import StageCompileFailure

Severity = Literal["error", "warning"]


class DirectiveName(str, Enum):
    """Closed set of directives understood after the `//#` marker."""

    NAME = "NAME"
    AUTHOR = "AUTHOR"
    DESCRIPTION = "DESCRIPTION"
    VERSION = "VERSION"
    TYPE = "TYPE"
    UNKNOWN = "UNKNOWN"


class StageKind(str, Enum):
    VERTEX = "VERTEX"
    FRAGMENT = "FRAGMENT"
    GEOMETRY = "GEOMETRY"

    @classmethod
    def parse(cls, token: str) -> Optional[StageKind]:
        """Case-insensitive lookup, None when the token names no stage."""
        try:
            return cls(token.strip().upper())
        except ValueError:
            return None

    @property
    def glslc_stage(self) -> str:
        """Value for glslc's -fshader-stage flag."""
        return _GLSLC_STAGES[self]

    @property
    def file_suffix(self) -> str:
        """Suffix used in compiled artifact file names."""
        return _FILE_SUFFIXES[self]


_GLSLC_STAGES = {
    StageKind.VERTEX: "vert",
    StageKind.FRAGMENT: "frag",
    StageKind.GEOMETRY: "geom",
}

_FILE_SUFFIXES = {
    StageKind.VERTEX: "vert",
    StageKind.FRAGMENT: "frag",
    StageKind.GEOMETRY: "geo",
}


@dataclass(frozen=True, slots=True)
class Directive:
    """A single `//#` line after lexing."""

    name: DirectiveName
    argument: str
    source_line: int
    text: str  # Original line, kept for error reporting.


@dataclass(frozen=True, slots=True)
class SourceLine:
    line: int  # 1-based line in the authoring file
    text: str


@dataclass(frozen=True, slots=True)
class DocumentMetadata:
    """
    File-wide descriptive fields.
    Set at most once per file; a repeated directive overwrites the value.
    """

    name: Optional[str] = None
    author: Optional[str] = None
    description: Optional[str] = None


@dataclass(frozen=True, slots=True)
class StageBlock:
    """
    One compilable unit cut out of the authoring file.

    `body_lines` is indexed by stage-local position: stage-local line N
    (1-based) is `body_lines[N - 1]`. Stage-local line 0 is the injected
    `#version` line.
    """

    kind: StageKind
    body_lines: Tuple[SourceLine, ...]
    opened_at: int  # Line of the TYPE directive.
    version: Optional[int] = None
    version_line: Optional[int] = None
    metadata: DocumentMetadata = field(default_factory=DocumentMetadata)

    def __len__(self) -> int:
        return len(self.body_lines)

    @property
    def body_text(self) -> str:
        return "\n".join(s.text for s in self.body_lines)


@dataclass(frozen=True, slots=True)
class ParseWarning:
    line: int
    message: str


@dataclass(frozen=True, slots=True)
class ParsedDocument:
    metadata: DocumentMetadata
    stages: Tuple[StageBlock, ...]
    version: Optional[int] = None
    warnings: Tuple[ParseWarning, ...] = ()
    path: Optional[str] = None


@dataclass(frozen=True, slots=True)
class RawDiagnostic:
    """A diagnostic as reported by the compiler, in stage-local lines."""

    line: Optional[int]
    column: Optional[int]
    message: str
    severity: Severity = "error"
    file: Optional[str] = None  # Set when the line belongs to an #included file.


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """A diagnostic mapped back onto the authoring file."""

    stage_kind: StageKind
    stage_index: int
    original_line: Optional[int]
    column: Optional[int]
    message: str
    severity: Severity = "error"
    line_unmappable: bool = False
    synthetic: bool = False  # Points at the injected #version line.
    file: Optional[str] = None  # Included file the line refers to; None for the authoring file.


@dataclass(frozen=True, slots=True)
class CompilerOutput:
    """Normalized result of one call to a compile capability."""

    binary: Optional[bytes]
    diagnostics: Tuple[RawDiagnostic, ...] = ()

    @property
    def succeeded(self) -> bool:
        return self.binary is not None


@dataclass(frozen=True, slots=True)
class CompiledArtifact:
    stage_kind: StageKind
    stage_index: int
    binary: Optional[bytes] = None
    failure: Optional[StageCompileFailure] = None
    warnings: Tuple[Diagnostic, ...] = ()

    @property
    def ok(self) -> bool:
        return self.failure is None and self.binary is not None
