"""
Unit tests for the condition evaluator.
"""

import pytest

from app.core.exceptions import MalformedCondition
from app.engine import RuleCondition, evaluate_condition, strict_equals


def condition(field, operator, value=None):
    return RuleCondition(field=field, operator=operator, value=value)


class TestExists:
    """Test cases for exists / not_exists."""

    @pytest.mark.parametrize("actual", ["p-1", 0, False, [], 3.5])
    def test_exists_true_for_present_values(self, actual):
        assert evaluate_condition(condition("projectId", "exists"), {"projectId": actual}) is True

    @pytest.mark.parametrize("context", [{}, {"projectId": None}, {"projectId": ""}])
    def test_exists_false_for_absent_values(self, context):
        assert evaluate_condition(condition("projectId", "exists"), context) is False

    def test_not_exists_on_missing_field(self):
        """A missing field satisfies not_exists."""
        assert evaluate_condition(condition("assignee", "not_exists"), {}) is True

    def test_not_exists_on_empty_string(self):
        assert evaluate_condition(condition("assignee", "not_exists"), {"assignee": ""}) is True

    def test_not_exists_on_present_value(self):
        assert evaluate_condition(condition("assignee", "not_exists"), {"assignee": "me"}) is False

    def test_exists_ignores_value(self):
        assert evaluate_condition(condition("type", "exists", "Bug"), {"type": "Feature"}) is True


class TestEquals:
    """Test cases for equals / not_equals."""

    def test_equals_same_string(self):
        assert evaluate_condition(condition("type", "equals", "Bug"), {"type": "Bug"}) is True

    def test_equals_different_string(self):
        assert evaluate_condition(condition("type", "equals", "Bug"), {"type": "Feature"}) is False

    def test_equals_does_not_coerce_string_and_number(self):
        assert evaluate_condition(condition("weight", "equals", 3), {"weight": "3"}) is False
        assert evaluate_condition(condition("weight", "equals", "3"), {"weight": 3}) is False

    def test_equals_does_not_coerce_bool_and_number(self):
        assert evaluate_condition(condition("done", "equals", True), {"done": 1}) is False
        assert evaluate_condition(condition("done", "equals", 1), {"done": True}) is False

    def test_equals_int_and_float_are_numbers(self):
        assert evaluate_condition(condition("weight", "equals", 3), {"weight": 3.0}) is True

    def test_equals_missing_field(self):
        assert evaluate_condition(condition("type", "equals", "Bug"), {}) is False

    def test_not_equals_is_strict_inverse(self):
        assert evaluate_condition(condition("weight", "not_equals", 3), {"weight": "3"}) is True
        assert evaluate_condition(condition("weight", "not_equals", 3), {"weight": 3}) is False

    def test_not_equals_missing_field(self):
        assert evaluate_condition(condition("type", "not_equals", "Bug"), {}) is True

    def test_strict_equals_lists(self):
        assert strict_equals(["a", 1], ["a", 1]) is True
        assert strict_equals(["a", 1], ["a", True]) is False
        assert strict_equals(["a"], ["a", "b"]) is False


class TestContains:
    """Test cases for contains."""

    def test_list_membership(self):
        cond = condition("labels", "contains", "urgent")
        assert evaluate_condition(cond, {"labels": ["urgent", "home"]}) is True
        assert evaluate_condition(cond, {"labels": ["home"]}) is False

    def test_list_membership_is_strict(self):
        assert evaluate_condition(condition("ids", "contains", 1), {"ids": [True, "1"]}) is False
        assert evaluate_condition(condition("ids", "contains", 1), {"ids": [2, 1]}) is True

    def test_string_substring(self):
        cond = condition("labels", "contains", "urgent")
        assert evaluate_condition(cond, {"labels": "urgent-ish"}) is True
        assert evaluate_condition(cond, {"labels": "calm"}) is False

    def test_string_substring_with_non_string_value(self):
        assert evaluate_condition(condition("title", "contains", 3), {"title": "v3 release"}) is True
        assert evaluate_condition(condition("title", "contains", True), {"title": "is true"}) is True
        assert evaluate_condition(condition("title", "contains", 2.0), {"title": "sprint 2"}) is True

    @pytest.mark.parametrize("actual", [42, True, {"urgent": 1}, None])
    def test_other_types_are_false(self, actual):
        assert evaluate_condition(condition("labels", "contains", "urgent"), {"labels": actual}) is False

    def test_missing_field_is_false(self):
        assert evaluate_condition(condition("labels", "contains", "urgent"), {}) is False


class TestMalformed:
    """Test cases for unknown operators."""

    def test_unknown_operator_raises(self):
        with pytest.raises(MalformedCondition) as exc_info:
            evaluate_condition(condition("weight", "greater_than", 3), {"weight": 5})

        assert exc_info.value.field == "weight"
        assert exc_info.value.operator == "greater_than"
        assert exc_info.value.code == "MALFORMED_CONDITION"

    def test_unknown_operator_raises_even_when_field_missing(self):
        with pytest.raises(MalformedCondition):
            evaluate_condition(condition("weight", "EQUALS", 3), {})

    def test_context_is_not_modified(self):
        context = {"labels": ["urgent"], "type": "Bug"}
        snapshot = {"labels": ["urgent"], "type": "Bug"}

        evaluate_condition(condition("labels", "contains", "urgent"), context)
        evaluate_condition(condition("type", "not_exists"), context)

        assert context == snapshot
