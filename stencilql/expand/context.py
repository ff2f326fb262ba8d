"""Per-expansion mutable state and the skip sentinel.

A single :class:`ExpansionContext` is created per top-level ``expand()``
call and threaded through the scanner, every placeholder, every optional
block and every ``?s`` sub-template.  This keeps one consumption cursor for
the whole statement, so parameters are taken strictly in left-to-right order
of the original template however deeply the current placeholder is nested.
"""
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from stencilql.errors import ParameterUnderflowError


class _SkipType:
    """Type of the :data:`SKIP` singleton."""

    _instance: _SkipType | None = None

    def __new__(cls) -> _SkipType:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "SKIP"

    def __reduce__(self) -> str:
        return "SKIP"


#: Parameter value meaning "no value, omit".  Compared by identity only.
SKIP = _SkipType()


@dataclass
class ExpansionContext:
    """Parameter cursor and skip flag shared by one expansion run.

    Attributes:
        params: The caller's parameter sequence.  Never mutated.
        skip_raised: Set when a placeholder consumed :data:`SKIP`; read and
            reset by the nearest enclosing optional block.
    """

    params: Sequence[Any]
    skip_raised: bool = False
    _cursor: int = field(default=0, init=False, repr=False)

    @property
    def position(self) -> int:
        """1-based ordinal of the most recently consumed parameter."""
        return self._cursor

    @property
    def consumed(self) -> int:
        return self._cursor

    def take(self) -> Any:
        """Consume and return the next parameter.

        Raises:
            ParameterUnderflowError: If every parameter is already consumed.
        """
        if self._cursor >= len(self.params):
            raise ParameterUnderflowError(self._cursor + 1, len(self.params))
        value = self.params[self._cursor]
        self._cursor += 1
        return value
