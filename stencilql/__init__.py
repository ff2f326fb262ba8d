"""stencilQL – SQL templates with typed placeholders and optional blocks.

Write the query once. Let the parameters decide which clauses survive.

Public API
----------
``expand``
    Expand a template and its positional parameters into one literal SQL
    string.

``Session``
    Expand-then-execute wrapper over a DB-API 2 connection, with row,
    column and cell fetch helpers and result transformers.

Template syntax
---------------
``?`` ``?d`` ``?f`` ``?n`` ``?s`` ``?a`` ``?#``
    Placeholders; each consumes one parameter.
``{ ... }``
    Optional block; dropped when a placeholder inside it receives ``SKIP``.
``{? ... }``
    Optional block gated by its own control parameter.
``{ a | b }``
    Alternatives; all consume parameters, the first one's text is kept.

Example::

    sql = stencilql.expand(
        "SELECT * FROM ?# WHERE 1 {AND id IN (?a)} {? AND deleted = 0}",
        ["users", [1, 2, 3], stencilql.SKIP],
    )
    # SELECT * FROM `users` WHERE 1  AND id IN (1, 2, 3)

Extensibility
-------------
A string-literal quoter for another target is bound with::

    from stencilql.expand.registry import register_quoter

    @register_quoter("oracle")
    class OracleQuoter(ValueQuoter):
        ...
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from stencilql.errors import (
    ConfigurationError,
    ExpansionError,
    InvalidPlaceholderTypeError,
    MalformedTemplateError,
    ParameterUnderflowError,
    ResultShapeError,
    StencilQLError,
)
from stencilql.expand.base import ExpandedSQL, ValueQuoter
from stencilql.expand.context import SKIP
from stencilql.expand.expander import TemplateExpander
from stencilql.expand.mysql import MySQLQuoter
from stencilql.expand.native import DriverQuoter, SQLAlchemyQuoter
from stencilql.expand.registry import create_quoter, register_quoter
from stencilql.expand.sqlite import SQLiteQuoter
from stencilql.schema.profile import EngineProfile
from stencilql.session.session import Session
from stencilql.transform.base import ResultTransformer
from stencilql.transform.keyed import GroupedTransformer, KeyedTransformer

__all__ = [
    # Core pipeline
    "expand",
    "SKIP",
    "TemplateExpander",
    "ExpandedSQL",
    # Configuration
    "EngineProfile",
    # Quoting
    "ValueQuoter",
    "MySQLQuoter",
    "SQLiteQuoter",
    "DriverQuoter",
    "SQLAlchemyQuoter",
    "create_quoter",
    "register_quoter",
    # Execution
    "Session",
    # Result shaping
    "ResultTransformer",
    "KeyedTransformer",
    "GroupedTransformer",
    # Errors
    "StencilQLError",
    "ExpansionError",
    "MalformedTemplateError",
    "InvalidPlaceholderTypeError",
    "ParameterUnderflowError",
    "ConfigurationError",
    "ResultShapeError",
]


def expand(
    template: str,
    params: Sequence[Any] = (),
    profile: EngineProfile | None = None,
    quoter: ValueQuoter | None = None,
) -> str:
    """Expand ``template`` against ``params`` into a literal SQL string.

    This is the main entry point when no connection is involved::

        sql = stencilql.expand("UPDATE t SET ?a WHERE id = ?d", [{"name": "x"}, 7])
        # UPDATE t SET `name`='x' WHERE id = 7

    Args:
        template: SQL template text.
        params: Parameters in left-to-right slot order.
        profile: Optional engine settings; defaults to ``EngineProfile()``.
        quoter: Optional explicit string-literal quoter.

    Returns:
        The expanded SQL.

    Raises:
        MalformedTemplateError: On unbalanced braces or unterminated literals.
        InvalidPlaceholderTypeError: If a value does not fit its tag.
        ParameterUnderflowError: If too few parameters were supplied.
    """
    return TemplateExpander(profile, quoter).expand(template, params).sql
