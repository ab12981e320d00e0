# veshader/parsing/lexer.py
from __future__ import annotations

from typing import Iterable, Iterator, Optional, Tuple

from veshader.types import Directive, DirectiveName

DIRECTIVE_MARKER = "//#"

_KNOWN = {d.value: d for d in DirectiveName if d is not DirectiveName.UNKNOWN}


def is_directive(text: str) -> bool:
    return text.lstrip().startswith(DIRECTIVE_MARKER)


def lex_line(text: str, line_number: int) -> Optional[Directive]:
    """
    Tokenize a single line.

    Returns None for ordinary source text. Directive names are
    case-sensitive; anything outside the known set comes back as
    DirectiveName.UNKNOWN instead of raising, since only the splitter
    knows whether that is fatal.
    """
    stripped = text.lstrip()
    if not stripped.startswith(DIRECTIVE_MARKER):
        return None

    rest = stripped[len(DIRECTIVE_MARKER) :].strip()
    parts = rest.split(None, 1)
    token = parts[0] if parts else ""
    argument = parts[1].strip() if len(parts) > 1 else ""

    name = _KNOWN.get(token, DirectiveName.UNKNOWN)
    return Directive(
        name=name,
        argument=argument,
        source_line=line_number,
        text=text,
    )


def lex_lines(
    lines: Iterable[str],
) -> Iterator[Tuple[int, str, Optional[Directive]]]:
    """Yield (line_number, text, directive-or-None), numbering from 1."""
    for idx, raw in enumerate(lines, start=1):
        text = raw.rstrip("\r\n")
        yield idx, text, lex_line(text, idx)
