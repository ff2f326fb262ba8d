"""Result transformer abstraction."""
from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from typing import Any

#: One fetched row: column name → value.
Row = Mapping[str, Any]


class ResultTransformer(ABC):
    """Reshapes a flat list of fetched rows into a keyed structure."""

    @abstractmethod
    def transform(self, rows: Sequence[Row]) -> dict[Any, Any]:
        """Return the reshaped rows.

        Args:
            rows: Rows in fetch order.
        """
