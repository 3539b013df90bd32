"""
Unit tests for the rule evaluator.
"""

import pytest

from app.core.exceptions import MalformedCondition
from app.engine import RuleAction, evaluate_rule, try_evaluate_rule
from tests.factories import make_rule


class TestEvaluateRule:
    """Test cases for evaluate_rule."""

    def test_matching_rule_returns_actions(self):
        rule = make_rule(
            conditions=[("type", "equals", "Bug")],
            actions=[("priority", "Q1"), ("size", "S")],
        )

        actions = evaluate_rule(rule, {"type": "Bug"})

        assert actions is rule.actions
        assert [a.field for a in actions] == ["priority", "size"]

    def test_non_matching_rule_returns_none(self):
        rule = make_rule(conditions=[("type", "equals", "Bug")], actions=[("priority", "Q1")])

        assert evaluate_rule(rule, {"type": "Feature"}) is None

    def test_disabled_rule_returns_none(self):
        rule = make_rule(actions=[("priority", "Q1")], enabled=False)

        assert evaluate_rule(rule, {}) is None

    def test_disabled_rule_with_malformed_condition_does_not_raise(self):
        rule = make_rule(conditions=[("type", "bogus", "x")], enabled=False)

        assert evaluate_rule(rule, {"type": "x"}) is None

    def test_empty_conditions_match_vacuously(self):
        rule = make_rule(actions=[("status", "todo")])

        assert evaluate_rule(rule, {}) == (RuleAction(field="status", value="todo"),)

    def test_empty_actions_match_with_no_effect(self):
        rule = make_rule(conditions=[("type", "exists", None)])

        assert evaluate_rule(rule, {"type": "Bug"}) == ()

    def test_all_conditions_required(self):
        rule = make_rule(
            conditions=[("type", "equals", "Bug"), ("projectId", "exists", None)],
            actions=[("priority", "Q1")],
        )

        assert evaluate_rule(rule, {"type": "Bug"}) is None
        assert evaluate_rule(rule, {"type": "Bug", "projectId": "p-1"}) is not None

    def test_condition_order_does_not_change_match(self):
        conditions = [("type", "equals", "Bug"), ("labels", "contains", "home"), ("goalId", "not_exists", None)]
        forward = make_rule(conditions=conditions, actions=[("priority", "Q2")])
        backward = make_rule(conditions=list(reversed(conditions)), actions=[("priority", "Q2")])

        for context in (
            {"type": "Bug", "labels": ["home"]},
            {"type": "Bug", "labels": ["home"], "goalId": "g-1"},
            {"type": "Feature", "labels": "homework"},
            {},
        ):
            assert (evaluate_rule(forward, context) is None) == (evaluate_rule(backward, context) is None)

    def test_short_circuit_skips_later_malformed_condition(self):
        rule = make_rule(conditions=[("type", "equals", "Bug"), ("weight", "bogus", 1)])

        assert evaluate_rule(rule, {"type": "Feature"}) is None

    def test_malformed_condition_propagates(self):
        rule = make_rule(conditions=[("type", "equals", "Bug"), ("weight", "bogus", 1)])

        with pytest.raises(MalformedCondition):
            evaluate_rule(rule, {"type": "Bug"})


class TestTryEvaluateRule:
    """Test cases for the result-style evaluation."""

    def test_ok_and_matched(self):
        rule = make_rule(actions=[("priority", "Q1")])

        result = try_evaluate_rule(rule, {})

        assert result.ok is True
        assert result.matched is True
        assert result.rule_id == "rule-1"
        assert result.error is None

    def test_ok_not_matched(self):
        rule = make_rule(conditions=[("type", "exists", None)])

        result = try_evaluate_rule(rule, {})

        assert result.ok is True
        assert result.matched is False

    def test_error_is_captured(self):
        rule = make_rule(rule_id="bad", conditions=[("type", "matches", "B.*")])

        result = try_evaluate_rule(rule, {"type": "Bug"})

        assert result.ok is False
        assert result.matched is False
        assert isinstance(result.error, MalformedCondition)
        assert result.error.operator == "matches"
