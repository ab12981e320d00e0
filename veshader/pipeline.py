# veshader/pipeline.py
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple

from veshader.compiler.driver import CompileFn, DocumentResult, compile_document
from veshader.diagnostics.report import (
    format_diagnostic,
    format_parse_error,
    format_warning,
    location,
)
from veshader.errors import ParseError
from veshader.output import write_artifacts
from veshader.parsing.splitter import parse_file
from veshader.types import ParseWarning

logger = logging.getLogger(__name__)

SHADER_EXTENSION = ".glsl"


@dataclass(frozen=True, slots=True)
class FileReport:
    """Outcome of the parse-and-compile pipeline for one input file."""

    path: Path
    result: Optional[DocumentResult] = None
    warnings: Tuple[ParseWarning, ...] = ()
    parse_error: Optional[ParseError] = None
    io_error: Optional[str] = None
    written: Tuple[Path, ...] = ()

    @property
    def ok(self) -> bool:
        return (
            self.parse_error is None
            and self.io_error is None
            and self.result is not None
            and self.result.ok
        )

    def messages(self) -> List[str]:
        """User-facing lines in source order."""
        p = str(self.path)
        if self.parse_error is not None:
            return [format_parse_error(p, self.parse_error)]

        lines = [format_warning(p, w) for w in self.warnings]
        if self.result is not None:
            lines += [format_diagnostic(p, d) for d in self.result.diagnostics]
        if self.io_error is not None:
            lines.append(f"{p}: error: {self.io_error}")
        return lines


def select_inputs(paths: Iterable[Path], ignore_extension: bool = False) -> List[Path]:
    """Drop files that do not look like authoring files, warning about each."""
    selected = []
    for path in paths:
        if not path.suffix:
            logger.warning('Ignored file "%s", because no file extension was found.', path)
        elif path.suffix.lower() != SHADER_EXTENSION and not ignore_extension:
            logger.warning(
                "Skipped %s because it does not have the %s file extension. "
                "Ignore with --ignore-extension.",
                path,
                SHADER_EXTENSION,
            )
        else:
            selected.append(path)
    return selected


def _bind_includes(compile_fn: CompileFn, path: Path) -> CompileFn:
    # Let #include resolve relative to the authoring file when supported.
    with_include_dir = getattr(compile_fn, "with_include_dir", None)
    if with_include_dir is None:
        return compile_fn
    return with_include_dir(path.resolve().parent)


def process_file(path: Path, compile_fn: CompileFn, output_dir: Optional[Path]) -> FileReport:
    """
    Parse, compile and write one file.

    Parse errors abort this file only; compile failures are collected
    per stage and the successful stages are still written.
    """
    logger.info("Compiling shader at path: %s", path)
    try:
        document = parse_file(path)
    except ParseError as e:
        logger.debug("%s: %s", path, e)
        return FileReport(path=path, parse_error=e)
    except (OSError, UnicodeDecodeError) as e:
        logger.debug("Error reading the file %s: %s", path, e)
        return FileReport(path=path, io_error=f"Error reading the file: {e}")

    result = compile_document(document, _bind_includes(compile_fn, path))
    for failure in result.failures:
        logger.debug("%s: %s", path, failure)
    for artifact in result.artifacts:
        for w in artifact.warnings:
            where = location(w.file or str(path), w.original_line, w.column)
            logger.debug("%s: warning: %s", where, w.message)

    written: Sequence[Path] = ()
    if output_dir is not None:
        try:
            written = write_artifacts(path, result.artifacts, output_dir)
        except OSError as e:
            logger.debug("Unable to write output for %s: %s", path, e)
            return FileReport(
                path=path,
                result=result,
                warnings=document.warnings,
                io_error=f"Unable to write file: {e}",
            )

    return FileReport(
        path=path,
        result=result,
        warnings=document.warnings,
        written=tuple(written),
    )


def compile_files(
    paths: Sequence[Path],
    compile_fn: CompileFn,
    output_dir: Optional[Path],
    jobs: int = 4,
) -> List[FileReport]:
    """
    Run one pipeline per file on a worker pool.
    Files share no state; reports come back in input order.
    """
    if not paths:
        return []
    workers = max(1, min(jobs, len(paths)))
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="ShaderWorker") as pool:
        futures = [pool.submit(process_file, p, compile_fn, output_dir) for p in paths]
        return [f.result() for f in futures]
