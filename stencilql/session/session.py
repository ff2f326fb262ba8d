"""DB-API session that expands templates before executing them.

``Session`` is the connection collaborator of the expansion engine.  Every
call expands its template to a fully literal SQL string first and only then
executes it, with no bound parameters, on the wrapped DB-API 2 connection.
An expansion error therefore never reaches the database.

Example::

    import sqlite3
    from stencilql import EngineProfile, Session, SKIP

    session = Session(sqlite3.connect("app.db"), EngineProfile(target="sqlite"))
    rows = session.select(
        "SELECT * FROM employees WHERE active = 1 {AND department_id = ?d}",
        [SKIP],
    )
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator, Sequence
from contextlib import closing, contextmanager
from typing import Any

from stencilql.errors import ResultShapeError
from stencilql.expand.base import ValueQuoter
from stencilql.expand.expander import TemplateExpander
from stencilql.schema.profile import EngineProfile
from stencilql.transform.base import ResultTransformer

logger = logging.getLogger(__name__)

_INSERT_RE = re.compile(r"^\s*INSERT\s+", re.IGNORECASE)


class Session:
    """Runs expanded templates against a DB-API 2 connection.

    Args:
        connection: Any DB-API 2 connection (``sqlite3``, PyMySQL, ...).
        profile: Engine settings; defaults to ``EngineProfile()``.
        quoter: Explicit string-literal quoter, e.g. a
            :class:`~stencilql.expand.native.DriverQuoter` over the same
            connection.
    """

    def __init__(
        self,
        connection: Any,
        profile: EngineProfile | None = None,
        quoter: ValueQuoter | None = None,
    ) -> None:
        self._conn = connection
        self._expander = TemplateExpander(profile, quoter)

    @property
    def connection(self) -> Any:
        return self._conn

    @property
    def expander(self) -> TemplateExpander:
        return self._expander

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------

    def begin(self) -> None:
        """Start a transaction on the underlying connection."""
        begin = getattr(self._conn, "begin", None)
        if callable(begin):
            begin()
            return
        with closing(self._conn.cursor()) as cursor:
            cursor.execute("BEGIN")

    def commit(self) -> None:
        self._conn.commit()

    def rollback(self) -> None:
        self._conn.rollback()

    @contextmanager
    def transaction(self) -> Iterator[Session]:
        """Begin, then commit on success or roll back and re-raise on error."""
        self.begin()
        try:
            yield self
        except BaseException:
            self.rollback()
            raise
        self.commit()

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def expand(self, template: str, params: Sequence[Any] = ()) -> str:
        """Return the literal SQL ``template`` expands to, without running it."""
        return self._expander.expand(template, params).sql

    def query(self, template: str, params: Sequence[Any] = ()) -> int:
        """Execute a data-changing statement.

        Returns:
            The last inserted row id for ``INSERT`` statements, the affected
            row count for statements returning no columns, otherwise ``0``.
        """
        with closing(self._execute(template, params)) as cursor:
            if _INSERT_RE.match(template):
                return cursor.lastrowid
            if cursor.description is None:
                return cursor.rowcount
            return 0

    def select(
        self,
        template: str,
        params: Sequence[Any] = (),
        transformer: ResultTransformer | None = None,
    ) -> list[dict[str, Any]] | dict[Any, Any]:
        """Fetch all rows as dicts, optionally reshaped by ``transformer``."""
        with closing(self._execute(template, params)) as cursor:
            rows = _fetch_dicts(cursor)
        if transformer is None:
            return rows
        return transformer.transform(rows)

    def select_row(self, template: str, params: Sequence[Any] = ()) -> dict[str, Any]:
        """Fetch the first row as a dict, or ``{}`` when there is none."""
        with closing(self._execute(template, params)) as cursor:
            row = cursor.fetchone()
            if row is None:
                return {}
            return dict(zip(_column_names(cursor), row))

    def select_col(
        self,
        template: str,
        params: Sequence[Any] = (),
        key_pair: bool = False,
    ) -> list[Any] | dict[Any, Any]:
        """Fetch the first column of every row.

        Args:
            key_pair: Return ``{first column: second column}`` instead.

        Raises:
            ResultShapeError: If ``key_pair`` is set and the result has
                fewer than two columns.
        """
        with closing(self._execute(template, params)) as cursor:
            rows = cursor.fetchall()
            if not key_pair:
                return [row[0] for row in rows]
            if len(cursor.description or ()) < 2:
                raise ResultShapeError("Key-pair fetch needs at least two columns.")
            return {row[0]: row[1] for row in rows}

    def select_cell(self, template: str, params: Sequence[Any] = ()) -> Any:
        """Fetch the first column of the first row, or ``None``."""
        column = self.select_col(template, params)
        return column[0] if column else None

    def _execute(self, template: str, params: Sequence[Any]) -> Any:
        sql = self.expand(template, params)
        logger.debug("Executing statement (%d params)", len(params))
        cursor = self._conn.cursor()
        try:
            cursor.execute(sql)
        except BaseException:
            cursor.close()
            raise
        return cursor


def _column_names(cursor: Any) -> list[str]:
    return [column[0] for column in cursor.description]


def _fetch_dicts(cursor: Any) -> list[dict[str, Any]]:
    if cursor.description is None:
        return []
    names = _column_names(cursor)
    return [dict(zip(names, row)) for row in cursor.fetchall()]
