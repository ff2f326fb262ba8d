"""SQLite string literal quoter."""
from __future__ import annotations

from stencilql.expand.base import ValueQuoter
from stencilql.expand.registry import register_quoter


@register_quoter("sqlite")
class SQLiteQuoter(ValueQuoter):
    """Quotes strings for SQLite.

    SQLite has no backslash escapes; the only special character inside a
    string literal is the single quote, which is doubled.
    """

    @property
    def dialect_name(self) -> str:
        return "sqlite"

    def quote(self, text: str) -> str:
        escaped = text.replace("'", "''")
        return f"'{escaped}'"
