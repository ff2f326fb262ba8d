"""Pydantic model for the EngineProfile that configures expansion.

The profile chooses the string-literal quoter and the engine's logging
behaviour.  It is immutable; create a new profile to change settings::

    from stencilql import EngineProfile, Session

    session = Session(conn, EngineProfile(target="sqlite", log_expanded_sql=True))
"""
from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict

#: Built-in quoter targets.
QuoterTarget = Literal["mysql", "sqlite"]


class EngineProfile(BaseModel):
    """Settings for one :class:`~stencilql.expand.expander.TemplateExpander`.

    Attributes:
        target: Quoter used for string literals when none is injected.
        log_expanded_sql: Log every expanded statement at DEBUG level.
        warn_unconsumed_params: Log a warning when a template leaves
            supplied parameters unconsumed.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    target: QuoterTarget = "mysql"
    log_expanded_sql: bool = False
    warn_unconsumed_params: bool = True
