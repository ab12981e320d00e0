# veshader/compiler/__init__.py
from veshader.compiler.driver import (
    CompileFn,
    DocumentResult,
    compile_document,
    compile_stage,
    normalize_output,
)
from veshader.compiler.glslc import GlslcCompiler, find_glslc, parse_glslc_output
from veshader.compiler.settings import (
    CompileSettings,
    OptimizationLevel,
    RunSettings,
    TargetVersion,
)

__all__ = [
    "CompileFn",
    "DocumentResult",
    "compile_document",
    "compile_stage",
    "normalize_output",
    "GlslcCompiler",
    "find_glslc",
    "parse_glslc_output",
    "CompileSettings",
    "OptimizationLevel",
    "RunSettings",
    "TargetVersion",
]
