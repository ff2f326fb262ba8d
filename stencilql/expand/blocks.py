"""Optional block resolution.

A block ``{...}`` is emitted (wrapped in single spaces) or dropped entirely:

* ``{? ...}`` consumes one control parameter before anything inside the
  block; the block is dropped when that parameter is ``SKIP``.
* Any placeholder inside the block that consumes ``SKIP`` also drops it.

The content may hold ``|``-separated alternatives.  Every alternative is
expanded, in order, so parameters referenced by discarded alternatives are
still consumed and the parameter stream never shifts.  Only the first
alternative's text is kept.
"""
from __future__ import annotations

from stencilql.expand.context import SKIP, ExpansionContext
from stencilql.expand.literals import structural_chars
from stencilql.expand.placeholders import ExpandFn

SKIP_MARKER = "?"


class OptionalBlockResolver:
    """Decides whether an optional block's text is emitted.

    Args:
        expand_fn: Expands an alternative against the shared context.
    """

    def __init__(self, expand_fn: ExpandFn) -> None:
        self._expand = expand_fn

    def resolve(self, content: str, ctx: ExpansionContext) -> str:
        """Return the rendered block, or ``""`` when it is skipped.

        Args:
            content: Text between the block's braces, braces excluded.
            ctx: The shared expansion context.
        """
        forced_skip = False
        if content.startswith(SKIP_MARKER):
            forced_skip = ctx.take() is SKIP
            content = " " + content[1:]

        outer_flag = ctx.skip_raised
        ctx.skip_raised = False
        try:
            rendered: str | None = None
            for alternative in split_alternatives(content):
                text = self._expand(alternative, ctx)
                if rendered is None:
                    rendered = f" {text} "
            skipped = forced_skip or ctx.skip_raised
        finally:
            ctx.skip_raised = outer_flag

        return "" if skipped else rendered or ""


def split_alternatives(content: str) -> list[str]:
    """Split ``content`` on ``|`` outside nested braces and literal regions."""
    alternatives: list[str] = []
    begin = 0
    depth = 0
    for index, char in structural_chars(content):
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
        elif char == "|" and depth <= 0:
            alternatives.append(content[begin:index])
            begin = index + 1
    alternatives.append(content[begin:])
    return alternatives
