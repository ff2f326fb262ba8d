"""Literal regions: comments, quoted strings and backtick identifiers.

Text inside a literal region is never a placeholder, a brace or an
alternative separator.
"""
from __future__ import annotations

import re
from collections.abc import Iterator

LITERAL_RE = re.compile(
    r"""
      --[^\r\n]*                  # line comment
    | /\*.*?\*/                   # block comment
    | "(?:[^"\\]|\\.)*"           # double-quoted string
    | '(?:[^'\\]|\\.)*'           # single-quoted string
    | `(?:[^`]|``)*`              # backtick identifier
    """,
    re.DOTALL | re.VERBOSE,
)

_OPENERS = frozenset("-/\"'`")


def structural_chars(text: str, start: int = 0) -> Iterator[tuple[int, str]]:
    """Yield ``(offset, char)`` for every character outside literal regions.

    An opener that does not close (``'`` with no matching quote) is yielded
    as an ordinary character; the scanner reports it when it reaches it.
    """
    pos = start
    end = len(text)
    while pos < end:
        char = text[pos]
        if char in _OPENERS:
            literal = LITERAL_RE.match(text, pos)
            if literal:
                pos = literal.end()
                continue
        yield pos, char
        pos += 1
