"""MySQL string literal quoter."""

from __future__ import annotations

from stencilql.expand.base import ValueQuoter
from stencilql.expand.registry import register_quoter

# Same character set mysql_real_escape_string() escapes.
_MYSQL_ESCAPES = str.maketrans(
    {
        "\0": "\\0",
        "\n": "\\n",
        "\r": "\\r",
        "\\": "\\\\",
        "'": "\\'",
        '"': '\\"',
        "\x1a": "\\Z",
    }
)


@register_quoter("mysql")
class MySQLQuoter(ValueQuoter):
    """Quotes strings for MySQL / MariaDB.

    Backslash escaping assumes ``NO_BACKSLASH_ESCAPES`` is off, which is the
    server default.  Backslash-escaped quotes are also what the template
    scanner expects inside literal regions.
    """

    @property
    def dialect_name(self) -> str:
        return "mysql"

    def quote(self, text: str) -> str:
        return f"'{text.translate(_MYSQL_ESCAPES)}'"
