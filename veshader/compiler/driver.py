# veshader/compiler/driver.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple, Union

from veshader.diagnostics.remap import remap
from veshader.errors import LineUnmappable, StageCompileFailure
from veshader.parsing.serialize import serialize_block
from veshader.types import (
    CompiledArtifact,
    CompilerOutput,
    Diagnostic,
    ParsedDocument,
    RawDiagnostic,
    StageBlock,
    StageKind,
)

logger = logging.getLogger(__name__)

RawResult = Union[bytes, CompilerOutput, Sequence[Union[RawDiagnostic, Tuple[int, int, str]]]]
CompileFn = Callable[[str, StageKind], RawResult]


@dataclass(frozen=True, slots=True)
class DocumentResult:
    path: Optional[str]
    artifacts: Tuple[CompiledArtifact, ...]
    diagnostics: Tuple[Diagnostic, ...]  # Stage order, then line order.

    @property
    def ok(self) -> bool:
        return all(a.ok for a in self.artifacts)

    @property
    def failures(self) -> Tuple[StageCompileFailure, ...]:
        return tuple(a.failure for a in self.artifacts if a.failure is not None)


def _as_raw(item: Union[RawDiagnostic, Tuple[int, int, str]]) -> RawDiagnostic:
    if isinstance(item, RawDiagnostic):
        return item
    line, column, message = item
    return RawDiagnostic(line=line, column=column, message=message)


def normalize_output(result: RawResult) -> CompilerOutput:
    """
    Accept what a compile capability may return:
      - bytes: a compiled module
      - a sequence of RawDiagnostic or (line, column, message): a failure
      - a CompilerOutput: passed through
    """
    if isinstance(result, CompilerOutput):
        return result
    if isinstance(result, (bytes, bytearray, memoryview)):
        return CompilerOutput(binary=bytes(result))
    diagnostics = tuple(_as_raw(item) for item in result)
    if not diagnostics:
        diagnostics = (RawDiagnostic(None, None, "compiler reported failure without diagnostics"),)
    return CompilerOutput(binary=None, diagnostics=diagnostics)


def _sort_key(d: Diagnostic) -> Tuple[str, int, int, int]:
    # Authoring file first, then each #included file; location-less ones last.
    line = d.original_line if d.original_line is not None else 1 << 30
    return (d.file or "", line, d.column or 0, 0 if d.severity == "error" else 1)


def compile_stage(
    block: StageBlock, stage_index: int, compile_fn: CompileFn
) -> CompiledArtifact:
    source = serialize_block(block)
    output = normalize_output(compile_fn(source, block.kind))

    diagnostics: List[Diagnostic] = []
    notes: List[LineUnmappable] = []
    for raw in output.diagnostics:
        diagnostic, note = remap(raw, block, stage_index)
        diagnostics.append(diagnostic)
        if note is not None:
            notes.append(note)
    diagnostics.sort(key=_sort_key)

    if output.binary is not None and not any(d.severity == "error" for d in diagnostics):
        return CompiledArtifact(
            stage_kind=block.kind,
            stage_index=stage_index,
            binary=output.binary,
            warnings=tuple(diagnostics),
        )

    failure = StageCompileFailure(block.kind, stage_index, diagnostics, notes)
    return CompiledArtifact(stage_kind=block.kind, stage_index=stage_index, failure=failure)


def compile_document(document: ParsedDocument, compile_fn: CompileFn) -> DocumentResult:
    """
    Compile every stage block in document order.

    A failing stage does not stop the others; its diagnostics are
    collected and the overall result is marked as failed.
    """
    artifacts: List[CompiledArtifact] = []
    diagnostics: List[Diagnostic] = []

    for index, block in enumerate(document.stages):
        artifact = compile_stage(block, index, compile_fn)
        artifacts.append(artifact)

        if artifact.failure is not None:
            logger.debug("%s: %s", document.path or "<input>", artifact.failure)
            diagnostics.extend(artifact.failure.diagnostics)
        else:
            diagnostics.extend(artifact.warnings)

    return DocumentResult(
        path=document.path,
        artifacts=tuple(artifacts),
        diagnostics=tuple(diagnostics),
    )
