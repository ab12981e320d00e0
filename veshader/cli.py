# veshader/cli.py
"""
Command line entry point.

    veshader "shaders/*.glsl" -o build/shaders
    veshader "**/*.glsl" -o out -s vulkan1_2 -O size --verbose

Every file is split and compiled independently; diagnostics for all files
are printed before exiting. Exit status is 1 if any file or any stage
failed, 2 for usage errors.
"""

from __future__ import annotations

import argparse
import glob
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional, Sequence, TextIO

from veshader import log
from veshader.compiler.glslc import GlslcCompiler
from veshader.compiler.settings import (
    CompileSettings,
    OptimizationLevel,
    RunSettings,
    TargetVersion,
)
from veshader.errors import CompilerNotFound, SettingsError
from veshader.pipeline import compile_files, select_inputs

logger = logging.getLogger(__name__)


def _target_version(text: str) -> TargetVersion:
    try:
        return TargetVersion.parse(text)
    except SettingsError as e:
        raise argparse.ArgumentTypeError(str(e)) from None


def _optimization(text: str) -> OptimizationLevel:
    try:
        return OptimizationLevel.parse(text)
    except SettingsError as e:
        raise argparse.ArgumentTypeError(str(e)) from None


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="veshader",
        description="Split multi-stage .glsl files on //# directives and compile each stage to SPIR-V.",
    )
    p.add_argument("glob", nargs="+", help="Shader files to compile (glob patterns, ** allowed).")
    p.add_argument("-o", "--output", required=True, help="Output directory for compiled .spv files.")
    p.add_argument(
        "-s",
        "--target-version",
        type=_target_version,
        default="vulkan",
        help="Shader version: vulkan, vulkan1_0, vulkan1_1, vulkan1_2.",
    )
    p.add_argument(
        "-O",
        "--optimization",
        type=_optimization,
        default="performance",
        help="Optimization level: zero, size, performance (default: performance).",
    )
    p.add_argument("-d", "--debug", action="store_true", help="Generate debug info.")
    p.add_argument("-t", "--target", type=int, default=None, help="Force a GLSL version (glslc -std).")
    p.add_argument(
        "--ignore-extension",
        action="store_true",
        help="Also compile files without the .glsl file extension.",
    )
    p.add_argument("--glslc", default=None, help="Path to glslc (default: auto-detect).")
    p.add_argument("-j", "--jobs", type=int, default=4, help="Files compiled in parallel.")
    p.add_argument("--verbose", action="store_true", help="Output debug info.")
    return p


def ignore_case(pattern: str) -> str:
    """Rewrite a glob pattern so letters match either case (`a` -> `[aA]`)."""
    drive, rest = os.path.splitdrive(pattern)
    out = [drive]
    in_class = False
    for ch in rest:
        if in_class:
            in_class = ch != "]"
            out.append(ch)
        elif ch == "[":
            in_class = True
            out.append(ch)
        elif ch.lower() != ch.upper() and len(ch.upper()) == 1:
            out.append(f"[{ch.lower()}{ch.upper()}]")
        else:
            out.append(ch)
    return "".join(out)


def expand_globs(patterns: Sequence[str]) -> List[Path]:
    """Expand patterns case-insensitively into unique files, keeping first-seen order."""
    seen = set()
    paths = []
    for pattern in patterns:
        matches = sorted(glob.glob(ignore_case(pattern), recursive=True)) or (
            [pattern] if Path(pattern).is_file() else []
        )
        for m in matches:
            path = Path(m)
            if path.is_file() and path not in seen:
                seen.add(path)
                paths.append(path)
    return paths


def main(argv: Optional[Sequence[str]] = None, out: Optional[TextIO] = None) -> int:
    args = build_parser().parse_args(argv)
    out = out or sys.stderr
    log.configure(verbose=args.verbose)

    settings = CompileSettings(
        target_version=args.target_version,
        optimization=args.optimization,
        debug_info=args.debug,
        forced_version=args.target,
        glslc=args.glslc,
    )
    run = RunSettings(
        output_dir=Path(args.output),
        ignore_extension=args.ignore_extension,
        jobs=args.jobs,
    )

    if args.ignore_extension:
        logger.debug("Compiling files with all file extensions.")

    paths = select_inputs(expand_globs(args.glob), run.ignore_extension)
    if not paths:
        print(f"veshader: no shader files matched {' '.join(args.glob)}", file=out)
        return 2

    try:
        compiler = GlslcCompiler(settings)
    except CompilerNotFound as e:
        print(f"veshader: {e}", file=out)
        return 2

    reports = compile_files(paths, compiler, run.output_dir, jobs=run.jobs)

    failed = 0
    for report in reports:
        for line in report.messages():
            print(line, file=out)
        if not report.ok:
            failed += 1

    if failed:
        print(f"veshader: {failed} of {len(reports)} file(s) failed", file=out)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
