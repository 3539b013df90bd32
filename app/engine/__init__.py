from .types import Rule, RuleAction, RuleCondition, RuleOperator, FieldValue, Context
from .conditions import evaluate_condition, strict_equals
from .rules import evaluate_rule, try_evaluate_rule, RuleEvaluation
from .dispatcher import dispatch, dispatch_report, DispatchReport
from .applier import apply_actions

__all__ = [
    "Rule", "RuleAction", "RuleCondition", "RuleOperator", "FieldValue", "Context",
    "evaluate_condition", "strict_equals",
    "evaluate_rule", "try_evaluate_rule", "RuleEvaluation",
    "dispatch", "dispatch_report", "DispatchReport",
    "apply_actions",
]
