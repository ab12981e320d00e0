# veshader/parsing/__init__.py
from veshader.parsing.lexer import DIRECTIVE_MARKER, lex_line, lex_lines
from veshader.parsing.serialize import (
    DEFAULT_GLSL_VERSION,
    SYNTHETIC_HEADER_LINES,
    serialize_block,
)
from veshader.parsing.splitter import StageSplitter, parse_file, split_document

__all__ = [
    "DIRECTIVE_MARKER",
    "lex_line",
    "lex_lines",
    "StageSplitter",
    "split_document",
    "parse_file",
    "serialize_block",
    "DEFAULT_GLSL_VERSION",
    "SYNTHETIC_HEADER_LINES",
]
