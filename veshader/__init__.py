# veshader/__init__.py
from veshader.compiler.driver import DocumentResult, compile_document
from veshader.errors import (
    ConflictingVersion,
    EmptyStage,
    InvalidVersionArgument,
    LineUnmappable,
    NoStagesDefined,
    ParseError,
    StageCompileFailure,
    UnknownDirective,
    UnknownStageType,
    VeshaderError,
)
from veshader.parsing.serialize import serialize_block
from veshader.parsing.splitter import parse_file, split_document
from veshader.types import (
    CompiledArtifact,
    Diagnostic,
    Directive,
    DirectiveName,
    DocumentMetadata,
    ParsedDocument,
    StageBlock,
    StageKind,
)

__version__ = "0.1.0"

__all__ = [
    "split_document",
    "parse_file",
    "serialize_block",
    "compile_document",
    "DocumentResult",
    "CompiledArtifact",
    "Diagnostic",
    "Directive",
    "DirectiveName",
    "DocumentMetadata",
    "ParsedDocument",
    "StageBlock",
    "StageKind",
    "VeshaderError",
    "ParseError",
    "UnknownDirective",
    "UnknownStageType",
    "ConflictingVersion",
    "NoStagesDefined",
    "InvalidVersionArgument",
    "EmptyStage",
    "StageCompileFailure",
    "LineUnmappable",
]
