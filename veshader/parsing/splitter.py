# veshader/parsing/splitter.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from veshader.errors import (
    ConflictingVersion,
    EmptyStage,
    InvalidVersionArgument,
    NoStagesDefined,
    UnknownDirective,
    UnknownStageType,
)
from veshader.parsing.lexer import lex_lines
from veshader.types import (
    Directive,
    DirectiveName,
    DocumentMetadata,
    ParsedDocument,
    ParseWarning,
    SourceLine,
    StageBlock,
    StageKind,
)

logger = logging.getLogger(__name__)

_METADATA_FIELDS = {
    DirectiveName.NAME: "name",
    DirectiveName.AUTHOR: "author",
    DirectiveName.DESCRIPTION: "description",
}


def _trim_trailing_blank(lines: List[SourceLine]) -> Tuple[SourceLine, ...]:
    end = len(lines)
    while end > 0 and not lines[end - 1].text.strip():
        end -= 1
    return tuple(lines[:end])


@dataclass(slots=True)
class _OpenStage:
    kind: StageKind
    opened_at: int
    lines: List[SourceLine] = field(default_factory=list)


@dataclass(slots=True)
class _SealedStage:
    kind: StageKind
    opened_at: int
    body: Tuple[SourceLine, ...]


class StageSplitter:
    """
    State machine that partitions an authoring file into stage blocks.

    States:
      - Preamble: `current` is None, no TYPE seen yet
      - InStage(kind): `current` holds the open block

    Version and metadata are file-wide and may appear anywhere, so they
    are only attached to the blocks in `finish()`.
    """

    def __init__(self, path: Optional[str] = None) -> None:
        self.path = path
        self.current: Optional[_OpenStage] = None
        self._sealed: List[_SealedStage] = []
        self._metadata: Dict[str, str] = {}
        self._metadata_lines: Dict[str, int] = {}
        self._version: Optional[int] = None
        self._version_line: Optional[int] = None
        self._warnings: List[ParseWarning] = []
        self._preamble_lines = 0

    @property
    def in_preamble(self) -> bool:
        return self.current is None

    def feed(self, line_number: int, text: str, directive: Optional[Directive]) -> None:
        if directive is not None:
            self._on_directive(directive)
        elif self.current is None:
            if text.strip():
                self._preamble_lines += 1
        else:
            self.current.lines.append(SourceLine(line_number, text))

    def _on_directive(self, directive: Directive) -> None:
        name = directive.name
        if name in _METADATA_FIELDS:
            self._set_metadata(directive)
        elif name is DirectiveName.VERSION:
            self._set_version(directive)
        elif name is DirectiveName.TYPE:
            self._open_stage(directive)
        elif name is DirectiveName.UNKNOWN:
            raise UnknownDirective(directive.text, directive.source_line)
        else:
            raise AssertionError(f"Unhandled directive {name}")

    def _set_metadata(self, directive: Directive) -> None:
        key = _METADATA_FIELDS[directive.name]
        if key in self._metadata:
            warning = ParseWarning(
                line=directive.source_line,
                message=(
                    f"{directive.name.value} already set on line "
                    f"{self._metadata_lines[key]}; keeping the later value"
                ),
            )
            self._warnings.append(warning)
            logger.debug("%s:%d: %s", self.path or "<input>", warning.line, warning.message)
        self._metadata[key] = directive.argument
        self._metadata_lines[key] = directive.source_line

    def _set_version(self, directive: Directive) -> None:
        arg = directive.argument
        if not (arg.isascii() and arg.isdigit()) or int(arg) <= 0:
            raise InvalidVersionArgument(arg, directive.source_line)

        version = int(arg)
        if self._version is not None and self._version != version:
            raise ConflictingVersion(
                self._version, self._version_line, version, directive.source_line
            )
        if self._version is None:
            self._version = version
            self._version_line = directive.source_line

    def _open_stage(self, directive: Directive) -> None:
        kind = StageKind.parse(directive.argument)
        if kind is None:
            raise UnknownStageType(directive.argument, directive.source_line)

        self._seal()
        self.current = _OpenStage(kind=kind, opened_at=directive.source_line)
        logger.debug("line %d: opened %s stage", directive.source_line, kind.value)

    def _seal(self) -> None:
        if self.current is None:
            return
        body = _trim_trailing_blank(self.current.lines)
        if not body:
            raise EmptyStage(self.current.kind, self.current.opened_at)
        self._sealed.append(_SealedStage(self.current.kind, self.current.opened_at, body))
        self.current = None

    def finish(self) -> ParsedDocument:
        if self.current is None and not self._sealed:
            raise NoStagesDefined()
        self._seal()

        if self._preamble_lines:
            logger.debug("ignored %d preamble line(s)", self._preamble_lines)

        metadata = DocumentMetadata(**self._metadata)
        stages = tuple(
            StageBlock(
                kind=s.kind,
                body_lines=s.body,
                opened_at=s.opened_at,
                version=self._version,
                version_line=self._version_line,
                metadata=metadata,
            )
            for s in self._sealed
        )
        return ParsedDocument(
            metadata=metadata,
            stages=stages,
            version=self._version,
            warnings=tuple(self._warnings),
            path=self.path,
        )


def split_document(text: str, path: Optional[str] = None) -> ParsedDocument:
    """Split the full text of an authoring file into stage blocks."""
    splitter = StageSplitter(path=path)
    for line_number, line, directive in lex_lines(text.split("\n")):
        splitter.feed(line_number, line, directive)
    return splitter.finish()


def parse_file(path: Union[str, Path]) -> ParsedDocument:
    p = Path(path)
    text = p.read_text(encoding="utf-8")
    return split_document(text, path=str(p))
