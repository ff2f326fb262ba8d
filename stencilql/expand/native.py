"""Quoters that delegate to a database driver's own escaping.

Driver callables
----------------
:class:`DriverQuoter` wraps any ``str -> str`` callable that returns a
complete quoted literal, e.g. a PyMySQL connection's ``escape`` method::

    conn = pymysql.connect(...)
    quoter = DriverQuoter(conn.escape, dialect="mysql")

SQLAlchemy
----------
:class:`SQLAlchemyQuoter` renders literals with SQLAlchemy's dialect-aware
``String`` literal processor.  Install the optional dependency first::

    pip install "stencilql[sqlalchemy]"

Example::

    from sqlalchemy import create_engine
    from stencilql.expand.native import SQLAlchemyQuoter

    engine = create_engine("sqlite:///mydb.db")
    quoter = SQLAlchemyQuoter(engine)
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from stencilql.expand.base import ValueQuoter

if TYPE_CHECKING:
    from sqlalchemy.engine import Dialect


class DriverQuoter(ValueQuoter):
    """Delegates quoting to a driver-supplied callable.

    Args:
        quote_fn: Callable returning the quoted literal for a string.
        dialect: Name reported as :attr:`dialect_name`.
    """

    def __init__(self, quote_fn: Callable[[str], str], dialect: str = "driver") -> None:
        self._quote_fn = quote_fn
        self._dialect = dialect

    @property
    def dialect_name(self) -> str:
        return self._dialect

    def quote(self, text: str) -> str:
        return self._quote_fn(text)


class SQLAlchemyQuoter(ValueQuoter):
    """Quotes strings with SQLAlchemy's literal rendering for a dialect.

    Args:
        bind: An ``Engine``, ``Connection`` or ``Dialect`` instance.
    """

    def __init__(self, bind: Any) -> None:
        from sqlalchemy import String

        dialect: Dialect = getattr(bind, "dialect", bind)
        self._dialect = dialect
        self._process = String().literal_processor(dialect=dialect)

    @property
    def dialect_name(self) -> str:
        return self._dialect.name

    def quote(self, text: str) -> str:
        return self._process(text)
