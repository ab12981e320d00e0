# veshader/diagnostics/__init__.py
from veshader.diagnostics.remap import map_line, remap
from veshader.diagnostics.report import (
    format_diagnostic,
    format_parse_error,
    format_warning,
)

__all__ = [
    "map_line",
    "remap",
    "format_diagnostic",
    "format_parse_error",
    "format_warning",
]
