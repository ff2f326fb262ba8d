"""Unit tests for PlaceholderDispatcher tag rules."""

from __future__ import annotations

import pytest

from stencilql.errors import InvalidPlaceholderTypeError
from stencilql.expand.context import SKIP
from stencilql.expand.expander import TemplateExpander
from stencilql.schema.profile import EngineProfile

EXPANDER = TemplateExpander(EngineProfile(target="mysql"))


def _x(template: str, *params) -> str:
    return EXPANDER.expand(template, list(params)).sql


# ---------------------------------------------------------------------------
# Untagged
# ---------------------------------------------------------------------------


class TestScalar:
    def test_string_is_quoted(self):
        assert _x("?", "x") == "'x'"

    def test_number_is_bare(self):
        assert _x("?", 12) == "12"

    def test_none_is_null(self):
        assert _x("?", None) == "NULL"

    @pytest.mark.parametrize("value", [[1], {"a": 1}, (1, 2), object()])
    def test_non_scalar_raises(self, value):
        with pytest.raises(InvalidPlaceholderTypeError) as exc_info:
            _x("?d, ?", 1, value)
        assert exc_info.value.position == 2
        assert exc_info.value.tag == ""

    def test_non_finite_float_raises(self):
        with pytest.raises(InvalidPlaceholderTypeError):
            _x("?", float("inf"))

    def test_already_quoted_text_is_escaped_once(self):
        assert _x("?", "'x'") == "'\\'x\\''"


# ---------------------------------------------------------------------------
# d / f / n
# ---------------------------------------------------------------------------


class TestInteger:
    @pytest.mark.parametrize(
        "value,expected",
        [("42", "42"), (42, "42"), (3.9, "3"), (" 7.8 ", "7"), (True, "1"), (None, "NULL")],
    )
    def test_casts(self, value, expected):
        assert _x("?d", value) == expected

    def test_non_numeric_string_raises(self):
        with pytest.raises(InvalidPlaceholderTypeError) as exc_info:
            _x("?d", "abc")
        assert exc_info.value.position == 1
        assert exc_info.value.tag == "d"

    def test_container_raises(self):
        with pytest.raises(InvalidPlaceholderTypeError):
            _x("?d", [1])


class TestFloat:
    @pytest.mark.parametrize(
        "value,expected",
        [("3,14", "3.14"), ("2.5", "2.5"), (2, "2.0"), (0.25, "0.25"), (None, "NULL")],
    )
    def test_casts(self, value, expected):
        assert _x("?f", value) == expected

    @pytest.mark.parametrize("value", ["x", float("nan"), [1.0]])
    def test_invalid_raises(self, value):
        with pytest.raises(InvalidPlaceholderTypeError):
            _x("?f", value)


class TestNullOrInt:
    @pytest.mark.parametrize("value", [None, 0, 0.0, "", "0", [], {}, False])
    def test_empty_values_are_null(self, value):
        assert _x("?n", value) == "NULL"

    @pytest.mark.parametrize("value,expected", [(5, "5"), ("12", "12"), (2.7, "2")])
    def test_non_empty_values_are_integers(self, value, expected):
        assert _x("?n", value) == expected


# ---------------------------------------------------------------------------
# s
# ---------------------------------------------------------------------------


class TestSubTemplate:
    def test_expands_in_place_with_shared_cursor(self):
        assert _x("SELECT ?s", "?d + ?d", 1, 2) == "SELECT 1 + 2"

    def test_following_placeholders_continue_after_sub_template(self):
        assert _x("?s, ?d", "(?d)", 1, 2) == "(1), 2"

    def test_non_string_raises(self):
        with pytest.raises(InvalidPlaceholderTypeError):
            _x("?s", 5)


# ---------------------------------------------------------------------------
# a
# ---------------------------------------------------------------------------


class TestArray:
    def test_assignment_list_keeps_mapping_order(self):
        assert _x("?a", {"name": "x", "age": 1}) == "`name`='x', `age`=1"

    def test_booleans_and_nulls(self):
        assert _x("?a", {"flag": True, "gone": None}) == "`flag`=1, `gone`=NULL"

    def test_plain_list_is_value_list(self):
        assert _x("IN (?a)", [1, 2, "a"]) == "IN (1, 2, 'a')"

    def test_group_prefix_qualifies_keys(self):
        assert _x("?a", {"u": {"name": "x"}}) == "`u`.`name`='x'"

    def test_multi_row_tuples(self):
        rows = [("x1", 1), ("x2", 2)]
        assert _x("(?a)", rows) == "('x1', 1), ('x2', 2)"

    def test_multi_row_mappings_drop_keys(self):
        rows = [{"name": "x1", "age": 1}, {"name": "x2", "age": None}]
        assert _x("(?a)", rows) == "('x1', 1), ('x2', NULL)"

    @pytest.mark.parametrize("value", [[], {}, ()])
    def test_empty_is_null(self, value):
        assert _x("?a", value) == "NULL"

    @pytest.mark.parametrize("value", [None, "abc", 5])
    def test_non_array_raises(self, value):
        with pytest.raises(InvalidPlaceholderTypeError) as exc_info:
            _x("?a", value)
        assert exc_info.value.tag == "a"

    def test_too_deep_raises(self):
        with pytest.raises(InvalidPlaceholderTypeError):
            _x("?a", [[[1]]])


# ---------------------------------------------------------------------------
# #
# ---------------------------------------------------------------------------


class TestIdentifier:
    def test_scalar(self):
        assert _x("?#", "col") == "`col`"

    def test_backtick_is_doubled(self):
        assert _x("?#", "a`b") == "`a``b`"

    def test_table_qualified_list_with_wildcard(self):
        assert _x("?#", {"t": ["a", "*"]}) == "`t`.`a`, `t`.*"

    def test_plain_list(self):
        assert _x("?#", ["a", "b"]) == "`a`, `b`"

    def test_mixed_keys(self):
        assert _x("?#", {"t": "a", 0: "b"}) == "`t`.`a`, `b`"

    def test_non_string_identifier_raises(self):
        with pytest.raises(InvalidPlaceholderTypeError):
            _x("?#", {"t": [1]})

    @pytest.mark.parametrize("value", [5, None])
    def test_non_identifier_value_raises(self, value):
        with pytest.raises(InvalidPlaceholderTypeError):
            _x("?#", value)


# ---------------------------------------------------------------------------
# SKIP
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("tag", ["", "d", "f", "n", "s", "a", "#", "_"])
def test_skip_renders_empty_for_every_tag(tag):
    assert _x(f"x=?{tag};", SKIP) == "x=;"


def test_error_position_counts_control_slots():
    with pytest.raises(InvalidPlaceholderTypeError) as exc_info:
        _x("{? ?d} ?a", 1, 2, "bad")
    assert exc_info.value.position == 3
    assert exc_info.value.details["value_type"] == "str"


def test_error_position_counts_discarded_alternatives():
    with pytest.raises(InvalidPlaceholderTypeError) as exc_info:
        _x("{a=?d | b=?a} ?d", 1, "x", 2)
    assert exc_info.value.position == 2


def test_error_position_after_discarded_alternative():
    with pytest.raises(InvalidPlaceholderTypeError) as exc_info:
        _x("{a=?d | b=?d} ?a", 1, 2, "bad")
    assert exc_info.value.position == 3
