"""Keyed and grouped row transformers.

Example::

    rows = session.select("SELECT * FROM employees")
    by_id = KeyedTransformer("employee_id").transform(rows)
    by_dept_then_role = GroupedTransformer(["department_id", "role"]).transform(rows)
"""
from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from stencilql.errors import ResultShapeError
from stencilql.transform.base import ResultTransformer, Row


def _key_of(row: Row, key: str) -> Any:
    try:
        return row[key]
    except KeyError:
        raise ResultShapeError(f"Row has no column '{key}'.", key=key) from None


class KeyedTransformer(ResultTransformer):
    """Indexes rows by one column; a later row with the same key wins."""

    def __init__(self, key: str) -> None:
        self._key = key

    def transform(self, rows: Sequence[Row]) -> dict[Any, Row]:
        return {_key_of(row, self._key): row for row in rows}


class GroupedTransformer(ResultTransformer):
    """Nests rows one dict level per key column.

    Args:
        keys: Column names, outermost first.
        data_as_last_element: Store the last matching row at each leaf
            instead of a list of all matching rows.

    Raises:
        ValueError: If ``keys`` is empty.
    """

    def __init__(self, keys: Sequence[str], data_as_last_element: bool = False) -> None:
        if not keys:
            raise ValueError("GroupedTransformer needs at least one key column")
        self._keys = list(keys)
        self._data_as_last_element = data_as_last_element

    def transform(self, rows: Sequence[Row]) -> dict[Any, Any]:
        result: dict[Any, Any] = {}
        *branch_keys, leaf_key = self._keys

        for row in rows:
            node = result
            for key in branch_keys:
                node = node.setdefault(_key_of(row, key), {})

            leaf = _key_of(row, leaf_key)
            if self._data_as_last_element:
                node[leaf] = row
            else:
                node.setdefault(leaf, []).append(row)

        return result
