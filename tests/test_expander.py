"""Tests for TemplateExpander and the top-level ``expand`` entry point."""

from __future__ import annotations

import logging

import pytest

import stencilql
from stencilql.errors import ParameterUnderflowError
from stencilql.expand.expander import TemplateExpander
from stencilql.expand.native import DriverQuoter
from stencilql.schema.profile import EngineProfile
from tests.fixtures import norm


def test_public_expand_defaults_to_mysql_quoting():
    sql = stencilql.expand("UPDATE t SET ?a WHERE id = ?d", [{"name": "O'x"}, 7])
    assert sql == "UPDATE t SET `name`='O\\'x' WHERE id = 7"


def test_sqlite_target_doubles_quotes(sqlite_expander):
    assert sqlite_expander.expand("?", ["O'x"]).sql == "'O''x'"


def test_explicit_quoter_wins_over_target():
    quoter = DriverQuoter(lambda s: f"<{s}>", dialect="fake")
    expander = TemplateExpander(EngineProfile(target="sqlite"), quoter)
    result = expander.expand("?", ["x"])
    assert result.sql == "<x>"
    assert result.dialect == "fake"


def test_params_are_not_mutated(mysql_expander):
    params = [1, stencilql.SKIP, "x"]
    mysql_expander.expand("?d {?d} ?", params)
    assert params == [1, stencilql.SKIP, "x"]


def test_tuple_params_are_accepted(mysql_expander):
    assert mysql_expander.expand("?d + ?d", (1, 2)).sql == "1 + 2"


# ---------------------------------------------------------------------------
# Parameter accounting
# ---------------------------------------------------------------------------


def test_consumption_counts_every_slot(mysql_expander):
    template = "SELECT ?# FROM t WHERE 1 {? AND a = ?d} {AND b = ?|AND c = ?d} -- ?"
    result = mysql_expander.expand(template, ["col", 1, 2, "x", 3])
    assert result.consumed == 5
    assert result.supplied == 5
    assert result.unconsumed == 0
    assert norm(result.sql) == "SELECT `col` FROM t WHERE 1 AND a = 2 AND b = 'x' -- ?"


def test_underflow_raises(mysql_expander):
    with pytest.raises(ParameterUnderflowError) as exc_info:
        mysql_expander.expand("?d, ?d", [1])
    assert exc_info.value.position == 2
    assert exc_info.value.supplied == 1
    assert exc_info.value.to_error_response()["error"] == "PARAMETER_UNDERFLOW"


def test_underflow_in_discarded_alternative_raises(mysql_expander):
    with pytest.raises(ParameterUnderflowError):
        mysql_expander.expand("{a = ?d | b = ?d}", [1])


def test_underflow_on_control_slot(mysql_expander):
    with pytest.raises(ParameterUnderflowError):
        mysql_expander.expand("{? AND x = 1}", [])


def test_unconsumed_params_are_logged(mysql_expander, caplog):
    with caplog.at_level(logging.WARNING, logger="stencilql.expand.expander"):
        result = mysql_expander.expand("?d", [1, 2, 3])
    assert result.unconsumed == 2
    assert "consumed 1 of 3" in caplog.text


def test_unconsumed_warning_can_be_disabled(caplog):
    expander = TemplateExpander(EngineProfile(warn_unconsumed_params=False))
    with caplog.at_level(logging.WARNING, logger="stencilql.expand.expander"):
        expander.expand("?d", [1, 2])
    assert caplog.records == []


def test_expanded_sql_is_logged_when_enabled(caplog):
    expander = TemplateExpander(EngineProfile(log_expanded_sql=True))
    with caplog.at_level(logging.DEBUG, logger="stencilql.expand.expander"):
        expander.expand("SELECT ?d", [9])
    assert "SELECT 9" in caplog.text


def test_expanded_sql_is_not_logged_by_default(mysql_expander, caplog):
    with caplog.at_level(logging.DEBUG, logger="stencilql.expand.expander"):
        mysql_expander.expand("SELECT ?d", [9])
    assert "SELECT 9" not in caplog.text


# ---------------------------------------------------------------------------
# Conformance examples
# ---------------------------------------------------------------------------


class TestConformance:
    def test_type_tag_round_trip(self, mysql_expander):
        sql = mysql_expander.expand("?d ?f ?# ?#", ["42", "3,14", "col", "a`b"]).sql
        assert sql == "42 3.14 `col` `a``b`"

    def test_null_handling(self, mysql_expander):
        sql = mysql_expander.expand("? ?d ?f ?n", [None, None, None, None]).sql
        assert sql == "NULL NULL NULL NULL"

    def test_multi_row_insert(self, mysql_expander):
        sql = mysql_expander.expand(
            "INSERT INTO people (`name`, `age`) VALUES (?a)",
            [[{"name": "x1", "age": 1}, {"name": "x2", "age": 2}]],
        ).sql
        assert sql == "INSERT INTO people (`name`, `age`) VALUES ('x1', 1), ('x2', 2)"

    def test_dynamic_where_clause(self, mysql_expander):
        template = (
            "SELECT * FROM users WHERE 1"
            "{ AND name = ?}"
            "{ AND age > ?d}"
            "{? AND deleted = 0}"
        )
        both = mysql_expander.expand(template, ["ann", 30, True]).sql
        neither = mysql_expander.expand(
            template, [stencilql.SKIP, stencilql.SKIP, stencilql.SKIP]
        ).sql
        assert norm(both) == "SELECT * FROM users WHERE 1 AND name = 'ann' AND age > 30 AND deleted = 0"
        assert neither == "SELECT * FROM users WHERE 1"
