import logging
from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

from app.core.exceptions import InvalidRuleSet
from app.engine.rules import try_evaluate_rule
from app.engine.types import Context, Rule, RuleAction

logger = logging.getLogger(__name__)


@dataclass
class DispatchReport:
    """Actions collectées pour un déclencheur, avec le diagnostic par règle"""
    trigger: str
    actions: List[RuleAction] = field(default_factory=list)
    matched_rule_ids: List[str] = field(default_factory=list)
    # (rule_id, message d'erreur), dans l'ordre des règles
    failures: List[Tuple[str, str]] = field(default_factory=list)


def _check_rule_set(rules: Sequence[Rule]) -> None:
    # Seules les séquences ordonnées sont acceptées : l'ordre de la liste
    # départage les actions en conflit
    if not isinstance(rules, (list, tuple)):
        raise InvalidRuleSet(
            f"Rules must be an ordered list, got {type(rules).__name__}",
            {"type": type(rules).__name__}
        )


def dispatch_report(trigger: str, context: Context, rules: Sequence[Rule]) -> DispatchReport:
    """Évalue les règles du déclencheur dans l'ordre de la liste.

    Une règle en erreur est journalisée et traitée comme non correspondante ;
    seule une collection de règles invalide interrompt le dispatch.
    """
    _check_rule_set(rules)
    report = DispatchReport(trigger=trigger)

    for rule in rules:
        if rule.trigger != trigger:
            continue

        evaluation = try_evaluate_rule(rule, context)
        if not evaluation.ok:
            logger.warning(
                f"Rule {rule.id} ({rule.name or 'unnamed'}) skipped: {evaluation.error.message}"
            )
            report.failures.append((rule.id, evaluation.error.message))
            continue

        if evaluation.matched:
            report.actions.extend(evaluation.actions)
            report.matched_rule_ids.append(rule.id)

    logger.debug(
        f"Dispatch '{trigger}': {len(report.matched_rule_ids)} rule(s) matched, "
        f"{len(report.actions)} action(s), {len(report.failures)} failure(s)"
    )
    return report


def dispatch(trigger: str, context: Context, rules: Sequence[Rule]) -> List[RuleAction]:
    """Concatène les actions de toutes les règles correspondantes"""
    return dispatch_report(trigger, context, rules).actions
