# veshader/parsing/serialize.py
from __future__ import annotations

from veshader.types import StageBlock

DEFAULT_GLSL_VERSION = 450

# Lines prepended before the body. A compiler reporting physical line P
# means stage-local line P - SYNTHETIC_HEADER_LINES.
SYNTHETIC_HEADER_LINES = 1


def version_line(block: StageBlock) -> str:
    version = block.version if block.version is not None else DEFAULT_GLSL_VERSION
    return f"#version {version}"


def serialize_block(block: StageBlock) -> str:
    """
    Render a block as compilable GLSL.

    The `#version` line is stage-local line 0; body line N sits on
    stage-local line N.
    """
    return version_line(block) + "\n" + block.body_text + "\n"
