"""Test fixtures: sample schema DDL and small helpers."""

from __future__ import annotations

from pathlib import Path

_FIXTURES_DIR = Path(__file__).parent


def load_ddl() -> str:
    """Return the sample SQLite DDL string."""
    return (_FIXTURES_DIR / "ddl_sqlite.sql").read_text()


def norm(sql: str) -> str:
    """Collapse whitespace runs so block padding does not matter."""
    return " ".join(sql.split())
