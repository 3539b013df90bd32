from typing import List, Dict, Any, Mapping, Optional, Tuple
from sqlalchemy.orm import Session
from app.repositories.rule_repository import RuleRepository
from app.engine import Rule, RuleAction, dispatch_report, apply_actions, DispatchReport
import logging

logger = logging.getLogger(__name__)


class RuleEngine:
    """Moteur de règles : lit l'instantané des règles dans le magasin de
    réglages et applique les actions des règles correspondantes"""

    def __init__(self, db: Session):
        self.db = db
        self.rule_repo = RuleRepository(db)

    def get_rules(self) -> Tuple[Rule, ...]:
        """Retourne l'instantané courant des règles, dans l'ordre"""
        return self.rule_repo.get_rules()

    def get_all_rules(self, trigger: Optional[str] = None) -> List[Dict[str, Any]]:
        """Retourne les règles lisibles, éventuellement filtrées par déclencheur"""
        if trigger is not None:
            return self.rule_repo.get_by_trigger(trigger)
        return self.rule_repo.get_readable()

    def get_rule_by_id(self, rule_id: str) -> Optional[Dict[str, Any]]:
        """Retourne une règle par son ID"""
        return self.rule_repo.get_by_id(rule_id)

    def create_rule(self, rule_data: Dict[str, Any]) -> Dict[str, Any]:
        """Crée une nouvelle règle en fin de liste"""
        rule = self.rule_repo.create(rule_data)
        logger.info(f"Rule created: {rule['id']} ({rule.get('name', '')})")
        return rule

    def update_rule(self, rule_id: str, rule_data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Met à jour une règle"""
        rule = self.rule_repo.update(rule_id, rule_data)
        if rule:
            logger.info(f"Rule updated: {rule_id}")
        return rule

    def delete_rule(self, rule_id: str) -> bool:
        """Supprime une règle"""
        deleted = self.rule_repo.delete(rule_id)
        if deleted:
            logger.info(f"Rule deleted: {rule_id}")
        return deleted

    def activate_rule(self, rule_id: str) -> Optional[Dict[str, Any]]:
        """Active une règle"""
        return self.rule_repo.set_enabled(rule_id, True)

    def deactivate_rule(self, rule_id: str) -> Optional[Dict[str, Any]]:
        """Désactive une règle"""
        return self.rule_repo.set_enabled(rule_id, False)

    def reorder_rules(self, rule_ids: List[str]) -> List[Dict[str, Any]]:
        """Réordonne les règles ; l'ordre départage les actions en conflit"""
        rules = self.rule_repo.reorder(rule_ids)
        logger.info(f"Rules reordered: {', '.join(rule_ids)}")
        return rules

    def get_applied_actions_report(self, trigger: str, context: Mapping[str, Any]) -> DispatchReport:
        """Évalue les règles du déclencheur et retourne actions et diagnostic"""
        return dispatch_report(trigger, context, self.get_rules())

    def get_applied_actions(self, trigger: str, context: Mapping[str, Any]) -> List[RuleAction]:
        """Retourne les actions des règles qui correspondent au contexte"""
        return self.get_applied_actions_report(trigger, context).actions

    def apply_rules_with_actions(
            self,
            trigger: str,
            context: Mapping[str, Any],
            data: Optional[Mapping[str, Any]] = None
    ) -> Tuple[Dict[str, Any], List[RuleAction]]:
        """Comme apply_rules, en retournant aussi les actions appliquées"""
        actions = self.get_applied_actions(trigger, context)
        base_record = context if data is None else data
        return apply_actions(actions, base_record), actions

    def apply_rules(
            self,
            trigger: str,
            context: Mapping[str, Any],
            data: Optional[Mapping[str, Any]] = None
    ) -> Dict[str, Any]:
        """Applique les actions du déclencheur à `data` (le contexte par défaut)"""
        mutated, _ = self.apply_rules_with_actions(trigger, context, data)
        return mutated

    def get_rule_statistics(self) -> Dict[str, Any]:
        """Retourne des statistiques sur les règles"""
        rules = self.get_rules()

        stats = {
            "total_rules": len(rules),
            "enabled_rules": 0,
            "disabled_rules": 0,
            "rules_by_trigger": {}
        }

        for rule in rules:
            if rule.enabled:
                stats["enabled_rules"] += 1
            else:
                stats["disabled_rules"] += 1

            if rule.trigger not in stats["rules_by_trigger"]:
                stats["rules_by_trigger"][rule.trigger] = {"total": 0, "enabled": 0}
            stats["rules_by_trigger"][rule.trigger]["total"] += 1
            if rule.enabled:
                stats["rules_by_trigger"][rule.trigger]["enabled"] += 1

        return stats
