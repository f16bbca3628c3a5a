"""
Unit tests for the condition evaluator.
"""

import logging

import pytest

from form_semantics.runtime.conditions import evaluate_condition, strict_equals, value_exists


def cond(field, operator, value=None):
    return {"field": field, "operator": operator, "value": value}


class TestEqualityOperators:
    """equals / not_equals use strict equality."""

    def test_equals_match(self):
        data = {"s": {"f": "option1"}}
        assert evaluate_condition(cond("s.f", "equals", "option1"), data) is True

    def test_equals_mismatch(self):
        data = {"s": {"f": "option1"}}
        assert evaluate_condition(cond("s.f", "equals", "option2"), data) is False

    def test_no_string_number_coercion(self):
        data = {"s": {"f": "1"}}
        assert evaluate_condition(cond("s.f", "equals", 1), data) is False
        assert evaluate_condition(cond("s.f", "not_equals", 1), data) is True

    def test_no_bool_number_coercion(self):
        data = {"s": {"f": True}}
        assert evaluate_condition(cond("s.f", "equals", 1), data) is False
        assert evaluate_condition(cond("s.f", "equals", True), data) is True

    def test_int_and_float_compare_numerically(self):
        data = {"s": {"f": 2}}
        assert evaluate_condition(cond("s.f", "equals", 2.0), data) is True

    def test_missing_value(self):
        assert evaluate_condition(cond("s.f", "equals", "x"), {}) is False
        assert evaluate_condition(cond("s.f", "not_equals", "x"), {}) is True

    def test_nested_booleans_are_not_numbers(self):
        data = {"s": {"f": [True], "g": {"on": True}}}
        assert evaluate_condition(cond("s.f", "equals", [1]), data) is False
        assert evaluate_condition(cond("s.f", "equals", [True]), data) is True
        assert evaluate_condition(cond("s.g", "equals", {"on": 1}), data) is False
        assert evaluate_condition(cond("s.g", "not_equals", {"on": 1}), data) is True

    def test_membership_of_nested_values(self):
        data = {"s": {"f": [1, 2]}}
        assert evaluate_condition(cond("s.f", "in", [[True, 2], [1, 2]]), data) is True
        assert evaluate_condition(cond("s.f", "in", [[True, 2]]), data) is False

    def test_strict_equals_helper(self):
        assert strict_equals(None, None)
        assert not strict_equals(None, "")
        assert not strict_equals(0, False)
        assert strict_equals(["a"], ["a"])
        assert not strict_equals(float("nan"), float("nan"))
        assert strict_equals({"a": [1, "x"]}, {"a": (1.0, "x")})
        assert not strict_equals([1, 2], [1])
        assert not strict_equals({"a": 1}, {"a": 1, "b": 2})
        assert not strict_equals([], {})


class TestMembershipOperators:
    """in / not_in require a list operand."""

    def test_in_list(self):
        data = {"projectInfo": {"projectType": "option2"}}
        condition = cond("projectInfo.projectType", "in", ["option2", "option3"])
        assert evaluate_condition(condition, data) is True

    def test_not_in_list(self):
        data = {"projectInfo": {"projectType": "option1"}}
        condition = cond("projectInfo.projectType", "not_in", ["option2", "option3"])
        assert evaluate_condition(condition, data) is True

    def test_in_uses_strict_equality(self):
        data = {"s": {"f": 1}}
        assert evaluate_condition(cond("s.f", "in", ["1", True]), data) is False

    @pytest.mark.parametrize("operator", ["in", "not_in"])
    def test_non_list_operand_is_false(self, operator):
        data = {"s": {"f": "a"}}
        assert evaluate_condition(cond("s.f", operator, "abc"), data) is False
        assert evaluate_condition(cond("s.f", operator, None), data) is False


class TestNumericOperators:
    """greater_than / less_than only hold for numeric values."""

    def test_greater_than(self):
        data = {"s": {"n": 10}}
        assert evaluate_condition(cond("s.n", "greater_than", 5), data) is True
        assert evaluate_condition(cond("s.n", "greater_than", 10), data) is False

    def test_less_than(self):
        data = {"s": {"n": 2.5}}
        assert evaluate_condition(cond("s.n", "less_than", 3), data) is True
        assert evaluate_condition(cond("s.n", "less_than", 2), data) is False

    def test_numeric_string_is_not_a_number(self):
        data = {"s": {"n": "10"}}
        assert evaluate_condition(cond("s.n", "greater_than", 5), data) is False
        assert evaluate_condition(cond("s.n", "less_than", 50), data) is False

    def test_boolean_is_not_a_number(self):
        data = {"s": {"n": True}}
        assert evaluate_condition(cond("s.n", "greater_than", 0), data) is False

    def test_missing_value(self):
        assert evaluate_condition(cond("s.n", "less_than", 5), {}) is False

    def test_non_numeric_operand(self):
        data = {"s": {"n": 10}}
        assert evaluate_condition(cond("s.n", "greater_than", "5"), data) is False


class TestExistenceOperators:
    """exists / not_exists."""

    @pytest.mark.parametrize("value", [None, ""])
    def test_empty_values_do_not_exist(self, value):
        data = {"s": {"f": value}}
        assert evaluate_condition(cond("s.f", "exists"), data) is False
        assert evaluate_condition(cond("s.f", "not_exists"), data) is True

    @pytest.mark.parametrize("value", [0, False, "x", [], {}, 0.0])
    def test_other_values_exist(self, value):
        data = {"s": {"f": value}}
        assert evaluate_condition(cond("s.f", "exists"), data) is True

    def test_missing_section(self):
        assert evaluate_condition(cond("s.f", "exists"), {}) is False

    @pytest.mark.parametrize("data", [
        {},
        {"s": {}},
        {"s": {"f": None}},
        {"s": {"f": ""}},
        {"s": {"f": " "}},
        {"s": {"f": 0}},
        {"s": {"f": False}},
        {"s": "not-a-mapping"},
    ])
    def test_not_exists_negates_exists(self, data):
        exists = evaluate_condition(cond("s.f", "exists"), data)
        not_exists = evaluate_condition(cond("s.f", "not_exists"), data)
        assert exists is (not not_exists)

    def test_value_exists_helper(self):
        assert value_exists(0)
        assert not value_exists("")


class TestMalformedConditions:
    """Rule errors degrade to True and are logged, never raised."""

    def test_unknown_operator_is_true(self, caplog):
        with caplog.at_level(logging.WARNING, logger="form_semantics.runtime.conditions"):
            result = evaluate_condition(cond("s.f", "matches_regex", ".*"), {"s": {"f": "x"}})
        assert result is True
        assert "Unknown operator" in caplog.text

    def test_missing_operator_is_true(self):
        assert evaluate_condition({"field": "s.f"}, {}) is True

    def test_unhashable_operator_is_true(self):
        assert evaluate_condition(cond("s.f", ["equals"]), {}) is True

    def test_missing_field_path_is_true(self, caplog):
        with caplog.at_level(logging.WARNING):
            assert evaluate_condition({"operator": "equals", "value": 1}, {}) is True
        assert "without a field path" in caplog.text

    def test_non_mapping_condition_is_true(self):
        assert evaluate_condition("projectType == 1", {}) is True

    def test_does_not_mutate_data(self):
        data = {"s": {"f": "x"}}
        evaluate_condition(cond("s.g", "exists"), data)
        assert data == {"s": {"f": "x"}}
