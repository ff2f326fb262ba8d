"""Expansion abstractions: ExpandedSQL and the ValueQuoter ABC.

The Strategy pattern (GoF) is used:
- ``ValueQuoter`` is the one driver-specific step of expansion, turning a
  Python string into a quoted, escaped SQL string literal.
- ``MySQLQuoter``, ``SQLiteQuoter`` and the driver-backed quoters in
  :mod:`stencilql.expand.native` supply that step.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass
class ExpandedSQL:
    """The output of a successful expansion.

    Attributes:
        sql: The fully literal SQL string, ready to execute.
        consumed: Number of parameters the template consumed, control slots
            of ``{?...}`` blocks included.
        supplied: Number of parameters the caller supplied.
        dialect: Name of the quoter dialect used for string literals.
    """

    sql: str
    consumed: int
    supplied: int
    dialect: str

    @property
    def unconsumed(self) -> int:
        """Number of trailing parameters the template never reached."""
        return self.supplied - self.consumed


class ValueQuoter(ABC):
    """Abstract base for driver-correct string literal quoting."""

    @abstractmethod
    def quote(self, text: str) -> str:
        """Return ``text`` as a quoted and escaped SQL string literal.

        Args:
            text: Raw string value.

        Returns:
            The literal, including its surrounding quote characters.
        """

    @property
    @abstractmethod
    def dialect_name(self) -> str:
        """Return the canonical dialect name (``'mysql'``, ``'sqlite'``...)."""
