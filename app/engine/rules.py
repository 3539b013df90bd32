from dataclasses import dataclass
from typing import Optional, Tuple

from app.core.exceptions import MalformedCondition
from app.engine.conditions import evaluate_condition
from app.engine.types import Context, Rule, RuleAction


@dataclass(frozen=True)
class RuleEvaluation:
    """Résultat explicite de l'évaluation d'une règle (succès ou erreur)"""
    rule_id: str
    actions: Optional[Tuple[RuleAction, ...]] = None
    error: Optional[MalformedCondition] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def matched(self) -> bool:
        return self.actions is not None


def evaluate_rule(rule: Rule, context: Context) -> Optional[Tuple[RuleAction, ...]]:
    """Retourne les actions de la règle si elle est active et que toutes
    ses conditions sont vraies, sinon None.

    Les conditions sont évaluées dans l'ordre déclaré et l'évaluation
    s'arrête à la première condition fausse. MalformedCondition se propage.
    """
    if not rule.enabled:
        return None

    for condition in rule.conditions:
        if not evaluate_condition(condition, context):
            return None

    return rule.actions


def try_evaluate_rule(rule: Rule, context: Context) -> RuleEvaluation:
    """Comme evaluate_rule, mais capture MalformedCondition dans le résultat"""
    try:
        return RuleEvaluation(rule_id=rule.id, actions=evaluate_rule(rule, context))
    except MalformedCondition as e:
        return RuleEvaluation(rule_id=rule.id, error=e)
