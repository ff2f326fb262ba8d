"""Left-to-right template scanner.

At every position the scanner tries, in priority order:

1. a literal region (``--`` comment, ``/* */`` comment, single- or
   double-quoted string, backtick identifier), copied verbatim;
2. an optional block ``{...}`` with balanced braces, handed to the
   :class:`~stencilql.expand.blocks.OptionalBlockResolver`;
3. a placeholder ``?`` plus an optional one-character tag, handed to the
   :class:`~stencilql.expand.placeholders.PlaceholderDispatcher`;
4. anything else, copied verbatim.

The priority order is what keeps braces and question marks inside quoted
strings and comments away from steps 2 and 3.
"""
from __future__ import annotations

import re

from stencilql.errors import MalformedTemplateError
from stencilql.expand.blocks import OptionalBlockResolver
from stencilql.expand.context import ExpansionContext
from stencilql.expand.literals import LITERAL_RE, structural_chars
from stencilql.expand.placeholders import PlaceholderDispatcher

#: Characters accepted as a placeholder type tag right after ``?``.
PLACEHOLDER_TAGS = frozenset("_dsafn&|#")

# Runs of characters that can never start a token.
_PLAIN_RE = re.compile(r"[^-/\"'`{}?]+")

_QUOTE_NAMES = {'"': "double-quoted string", "'": "string literal", "`": "backtick identifier"}


class TemplateScanner:
    """Expands one template against a shared :class:`ExpansionContext`.

    Args:
        dispatcher: Renders placeholder tokens.
        block_resolver: Renders optional blocks.
    """

    def __init__(
        self,
        dispatcher: PlaceholderDispatcher,
        block_resolver: OptionalBlockResolver,
    ) -> None:
        self._dispatcher = dispatcher
        self._blocks = block_resolver

    def scan(self, template: str, ctx: ExpansionContext) -> str:
        """Return ``template`` with every placeholder and block expanded.

        Raises:
            MalformedTemplateError: On unbalanced braces or an unterminated
                literal region.
        """
        out: list[str] = []
        pos = 0
        end = len(template)

        while pos < end:
            plain = _PLAIN_RE.match(template, pos)
            if plain:
                out.append(plain.group())
                pos = plain.end()
                continue

            literal = LITERAL_RE.match(template, pos)
            if literal:
                out.append(literal.group())
                pos = literal.end()
                continue

            char = template[pos]
            if char in _QUOTE_NAMES:
                raise MalformedTemplateError(
                    f"Unterminated {_QUOTE_NAMES[char]} at offset {pos}.", offset=pos
                )
            if template.startswith("/*", pos):
                raise MalformedTemplateError(
                    f"Unterminated block comment at offset {pos}.", offset=pos
                )

            if char == "{":
                close = find_block_end(template, pos)
                content = template[pos + 1 : close]
                if content:
                    out.append(self._blocks.resolve(content, ctx))
                else:
                    out.append("{}")
                pos = close + 1
            elif char == "}":
                raise MalformedTemplateError(
                    f"Closing brace without opening brace at offset {pos}.", offset=pos
                )
            elif char == "?":
                tag = template[pos + 1 : pos + 2]
                if tag not in PLACEHOLDER_TAGS:
                    tag = ""
                out.append(self._dispatcher.dispatch(tag, ctx))
                pos += 1 + len(tag)
            else:
                # A lone '-' or '/' that does not open a comment.
                out.append(char)
                pos += 1

        return "".join(out)


def find_block_end(template: str, start: int) -> int:
    """Return the offset of the ``}`` matching the ``{`` at ``start``.

    Braces are counted outside literal regions only, so a quoted ``}`` or
    a ``}`` in a comment does not close the block.

    Raises:
        MalformedTemplateError: If the block is never closed.
    """
    depth = 0
    for index, char in structural_chars(template, start):
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return index
    raise MalformedTemplateError(
        f"Optional block opened at offset {start} is never closed.", offset=start
    )
