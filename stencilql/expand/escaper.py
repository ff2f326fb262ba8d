"""Scalar and identifier escaping."""
from __future__ import annotations

import math
from datetime import date, time
from decimal import Decimal
from typing import Any
from uuid import UUID

from stencilql.expand.base import ValueQuoter

#: Types a plain ``?`` placeholder accepts.
SCALAR_TYPES: tuple[type, ...] = (str, int, float, Decimal, date, time, UUID)


def is_scalar(value: Any) -> bool:
    return isinstance(value, SCALAR_TYPES)


class ValueEscaper:
    """Renders single values as SQL literals.

    Numbers are emitted unquoted; every other scalar goes through the
    injected :class:`~stencilql.expand.base.ValueQuoter`.  ``None`` never
    reaches this class; callers render it as ``NULL`` themselves.

    Args:
        quoter: Driver-specific string literal quoter.
    """

    def __init__(self, quoter: ValueQuoter) -> None:
        self._quoter = quoter

    @property
    def quoter(self) -> ValueQuoter:
        return self._quoter

    def escape_scalar(self, value: Any) -> str:
        """Return the SQL literal for ``value``.

        Raises:
            ValueError: If ``value`` is a non-finite float or Decimal.
        """
        if isinstance(value, bool):
            return "1" if value else "0"
        if isinstance(value, int):
            return str(value)
        if isinstance(value, float):
            return format_float(value)
        if isinstance(value, Decimal):
            if not value.is_finite():
                raise ValueError(f"Non-finite decimal {value!r} has no SQL literal")
            return str(value)
        text = value if isinstance(value, str) else str(value)
        return self._quoter.quote(text)

    @staticmethod
    def escape_identifier(name: str) -> str:
        """Wrap ``name`` in backticks, doubling embedded backticks."""
        escaped = name.replace("`", "``")
        return f"`{escaped}`"


def format_float(value: float) -> str:
    """Locale-independent float literal, ``.`` as decimal separator."""
    if not math.isfinite(value):
        raise ValueError(f"Non-finite float {value!r} has no SQL literal")
    return repr(value)
