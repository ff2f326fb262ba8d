"""Shared pytest fixtures for stencilQL unit and integration tests."""
from __future__ import annotations

import pytest

from stencilql.expand.expander import TemplateExpander
from stencilql.schema.profile import EngineProfile


@pytest.fixture(scope="session")
def mysql_expander() -> TemplateExpander:
    """Expander quoting string literals the MySQL way."""
    return TemplateExpander(EngineProfile(target="mysql"))


@pytest.fixture(scope="session")
def sqlite_expander() -> TemplateExpander:
    """Expander quoting string literals the SQLite way."""
    return TemplateExpander(EngineProfile(target="sqlite"))
