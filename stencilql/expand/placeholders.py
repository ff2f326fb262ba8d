"""Placeholder rendering.

One placeholder consumes exactly one parameter and renders it according to
its type tag:

====  ==========================================================
tag   rendering
====  ==========================================================
none  scalar literal (quoted string, bare number, ``NULL``)
d     integer, unquoted
f     float with ``.`` as decimal separator, unquoted
n     ``NULL`` for an empty value, otherwise integer
s     the value is itself a template, expanded in place
a     assignment list ``k=v, ...`` or multi-row ``v, v), (v, v``
#     identifier or qualified identifier list
====  ==========================================================

Any other tag falls back to quoting the value as a string.  A parameter
equal to :data:`~stencilql.expand.context.SKIP` renders as ``""`` under
every tag and raises the context's skip flag.
"""
from __future__ import annotations

from collections.abc import Callable, Mapping
from decimal import Decimal
from typing import Any

from stencilql.errors import InvalidPlaceholderTypeError
from stencilql.expand.context import SKIP, ExpansionContext
from stencilql.expand.escaper import ValueEscaper, format_float, is_scalar

#: ``(template, ctx) -> expanded text``; the scanner's ``scan`` method.
ExpandFn = Callable[[str, ExpansionContext], str]

_SEQUENCE_TYPES = (list, tuple)
_CONTAINER_TYPES = (Mapping, list, tuple)


class PlaceholderDispatcher:
    """Renders placeholder tokens.

    Args:
        escaper: Scalar and identifier escaper.
        expand_fn: Expands a nested template against the same context
            (used by ``?s``).
    """

    def __init__(self, escaper: ValueEscaper, expand_fn: ExpandFn) -> None:
        self._escaper = escaper
        self._expand = expand_fn
        # Tags whose handlers see None themselves; the rest share the NULL check.
        self._structural: dict[str, Callable[[Any, ExpansionContext], str]] = {
            "s": self._render_template,
            "a": self._render_array,
            "#": self._render_identifiers,
            "n": self._render_null_or_int,
        }
        self._typed: dict[str, Callable[[Any, ExpansionContext], str]] = {
            "": self._render_scalar,
            "d": self._render_int,
            "f": self._render_float,
        }

    def dispatch(self, tag: str, ctx: ExpansionContext) -> str:
        """Consume the next parameter and return its rendering for ``tag``."""
        value = ctx.take()
        if value is SKIP:
            ctx.skip_raised = True
            return ""

        handler = self._structural.get(tag)
        if handler is not None:
            return handler(value, ctx)

        if value is None:
            return "NULL"

        handler = self._typed.get(tag)
        if handler is None:
            return self._render_as_string(value, tag, ctx)
        return handler(value, ctx)

    # ------------------------------------------------------------------
    # Scalars
    # ------------------------------------------------------------------

    def _render_scalar(self, value: Any, ctx: ExpansionContext) -> str:
        if not is_scalar(value):
            raise InvalidPlaceholderTypeError(
                "Placeholder value is not scalar", "", ctx.position, value
            )
        return self._escape(value, "", ctx)

    def _render_as_string(self, value: Any, tag: str, ctx: ExpansionContext) -> str:
        if not is_scalar(value):
            raise InvalidPlaceholderTypeError(
                "Placeholder value is not scalar", tag, ctx.position, value
            )
        text = str(int(value)) if isinstance(value, bool) else str(value)
        return self._escaper.escape_scalar(text)

    def _render_int(self, value: Any, ctx: ExpansionContext) -> str:
        return str(self._to_int(value, "d", ctx))

    def _render_null_or_int(self, value: Any, ctx: ExpansionContext) -> str:
        if _is_empty(value):
            return "NULL"
        return str(self._to_int(value, "n", ctx))

    def _render_float(self, value: Any, ctx: ExpansionContext) -> str:
        try:
            if isinstance(value, str):
                number = float(value.strip().replace(",", "."))
            elif isinstance(value, (int, float, Decimal)):
                number = float(value)
            else:
                raise InvalidPlaceholderTypeError(
                    "Placeholder value is not a number", "f", ctx.position, value
                )
            return format_float(number)
        except ValueError as exc:
            raise InvalidPlaceholderTypeError(
                "Placeholder value is not a finite number", "f", ctx.position, value
            ) from exc

    def _escape(self, value: Any, tag: str, ctx: ExpansionContext) -> str:
        try:
            return self._escaper.escape_scalar(value)
        except ValueError as exc:
            raise InvalidPlaceholderTypeError(str(exc), tag, ctx.position, value) from exc

    @staticmethod
    def _to_int(value: Any, tag: str, ctx: ExpansionContext) -> int:
        try:
            if isinstance(value, (int, Decimal)):
                return int(value)
            if isinstance(value, float):
                return int(value)
            if isinstance(value, str):
                text = value.strip()
                try:
                    return int(text)
                except ValueError:
                    return int(float(text))
        except (ValueError, OverflowError) as exc:
            raise InvalidPlaceholderTypeError(
                "Placeholder value is not an integer", tag, ctx.position, value
            ) from exc
        raise InvalidPlaceholderTypeError(
            "Placeholder value is not an integer", tag, ctx.position, value
        )

    # ------------------------------------------------------------------
    # Sub-templates
    # ------------------------------------------------------------------

    def _render_template(self, value: Any, ctx: ExpansionContext) -> str:
        if not isinstance(value, str):
            raise InvalidPlaceholderTypeError(
                "Placeholder value is not a template string", "s", ctx.position, value
            )
        return self._expand(value, ctx)

    # ------------------------------------------------------------------
    # Arrays
    # ------------------------------------------------------------------

    def _render_array(self, value: Any, ctx: ExpansionContext) -> str:
        if not isinstance(value, _CONTAINER_TYPES):
            raise InvalidPlaceholderTypeError(
                "Placeholder value is not array", "a", ctx.position, value
            )
        if not value:
            return "NULL"

        if _is_row_list(value):
            rows = []
            for row in value:
                cells = row.values() if isinstance(row, Mapping) else row
                rows.append(", ".join(self._render_cell(cell, ctx) for cell in cells))
            return "), (".join(rows)

        ident = self._escaper.escape_identifier
        parts: list[str] = []
        for key, field in _entries(value):
            if isinstance(field, _CONTAINER_TYPES):
                prefix = f"{ident(key)}." if isinstance(key, str) else ""
                pairs = _entries(field)
            else:
                prefix = ""
                pairs = [(key, field)]
            for name, cell in pairs:
                rendered = self._render_cell(cell, ctx)
                if isinstance(name, str):
                    parts.append(f"{prefix}{ident(name)}={rendered}")
                else:
                    parts.append(rendered)
        return ", ".join(parts)

    def _render_cell(self, value: Any, ctx: ExpansionContext) -> str:
        if value is None:
            return "NULL"
        if isinstance(value, bool):
            return "1" if value else "0"
        if not is_scalar(value):
            raise InvalidPlaceholderTypeError(
                "Array element is not scalar", "a", ctx.position, value
            )
        return self._escape(value, "a", ctx)

    # ------------------------------------------------------------------
    # Identifiers
    # ------------------------------------------------------------------

    def _render_identifiers(self, value: Any, ctx: ExpansionContext) -> str:
        ident = self._escaper.escape_identifier
        if isinstance(value, str):
            return ident(value)
        if not isinstance(value, _CONTAINER_TYPES):
            raise InvalidPlaceholderTypeError(
                "Placeholder value is not an identifier", "#", ctx.position, value
            )

        parts: list[str] = []
        for table, identifiers in _entries(value):
            if not isinstance(identifiers, _SEQUENCE_TYPES):
                identifiers = [identifiers]
            prefix = f"{ident(table)}." if isinstance(table, str) else ""
            for identifier in identifiers:
                if not isinstance(identifier, str):
                    raise InvalidPlaceholderTypeError(
                        "Placeholder value is not string", "#", ctx.position, identifier
                    )
                parts.append(prefix + ("*" if identifier == "*" else ident(identifier)))
        return ", ".join(parts)


def _entries(value: Mapping | list | tuple) -> list[tuple[Any, Any]]:
    if isinstance(value, Mapping):
        return list(value.items())
    return list(enumerate(value))


def _is_row_list(value: Any) -> bool:
    """Multi-row shape: a sequence whose every element is a row container.

    This is structural detection only; a list mixing rows and scalars is
    treated as an assignment/value list.
    """
    return isinstance(value, _SEQUENCE_TYPES) and all(
        isinstance(row, _CONTAINER_TYPES) for row in value
    )


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value in ("", "0")
    if isinstance(value, (int, float, Decimal, *_CONTAINER_TYPES)):
        return not value
    return False
