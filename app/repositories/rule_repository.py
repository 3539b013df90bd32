import logging
import uuid
from typing import List, Optional, Dict, Any, Tuple
from pydantic import ValidationError
from sqlalchemy.orm import Session
from app.core.exceptions import InvalidRuleSet, DuplicateRule, InvalidRuleOrder
from app.engine.types import Rule
from app.repositories.settings_repository import SettingsRepository

logger = logging.getLogger(__name__)

RULES_KEY = "rules"


class RuleRepository:
    """Repository des règles, stockées en liste ordonnée dans le réglage `rules`"""

    def __init__(self, db: Session):
        self.db = db
        self.settings_repo = SettingsRepository(db)

    def get_all(self) -> List[Dict[str, Any]]:
        """Récupère les règles brutes dans l'ordre de la liste"""
        raw = self.settings_repo.get_value(RULES_KEY, [])
        if raw is None:
            return []
        if not isinstance(raw, list):
            raise InvalidRuleSet(
                f"Stored rules must be a list, got {type(raw).__name__}",
                {"type": type(raw).__name__}
            )
        return raw

    def get_rules(self) -> Tuple[Rule, ...]:
        """Retourne un instantané immuable des règles valides"""
        rules = []
        for position, entry in enumerate(self.get_all()):
            rule = self._parse(position, entry)
            if rule is not None:
                rules.append(rule)
        return tuple(rules)

    def get_readable(self) -> List[Dict[str, Any]]:
        """Récupère les règles brutes lisibles, les entrées invalides sont ignorées"""
        return [
            entry for position, entry in enumerate(self.get_all())
            if self._parse(position, entry) is not None
        ]

    def get_by_id(self, rule_id: str) -> Optional[Dict[str, Any]]:
        """Récupère une règle lisible par son ID"""
        for rule in self.get_readable():
            if rule.get("id") == rule_id:
                return rule
        return None

    def get_by_trigger(self, trigger: str) -> List[Dict[str, Any]]:
        """Récupère les règles d'un déclencheur, dans l'ordre"""
        return [r for r in self.get_readable() if r.get("trigger") == trigger]

    def create(self, rule_data: Dict[str, Any]) -> Dict[str, Any]:
        """Ajoute une règle en fin de liste"""
        rules = list(self.get_all())
        rule = dict(rule_data)
        if not rule.get("id"):
            rule["id"] = f"rule-{uuid.uuid4().hex[:12]}"

        if self._index_of(rules, rule["id"]) is not None:
            raise DuplicateRule(rule["id"])

        rules.append(rule)
        self._save(rules)
        return rule

    def update(self, rule_id: str, rule_data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Remplace une règle en conservant sa position et son ID"""
        rules = list(self.get_all())
        index = self._index_of(rules, rule_id)
        if index is None:
            return None

        rule = {**rule_data, "id": rule_id}
        rules[index] = rule
        self._save(rules)
        return rule

    def delete(self, rule_id: str) -> bool:
        """Supprime une règle"""
        rules = list(self.get_all())
        index = self._index_of(rules, rule_id)
        if index is None:
            return False

        del rules[index]
        self._save(rules)
        return True

    def set_enabled(self, rule_id: str, enabled: bool) -> Optional[Dict[str, Any]]:
        """Active ou désactive une règle lisible"""
        rules = list(self.get_all())
        index = self._index_of(rules, rule_id)
        if index is None or self._parse(index, rules[index]) is None:
            return None

        rules[index] = {**rules[index], "enabled": enabled}
        self._save(rules)
        return rules[index]

    def reorder(self, rule_ids: List[str]) -> List[Dict[str, Any]]:
        """Réordonne les règles ; `rule_ids` doit être une permutation des IDs existants"""
        rules = list(self.get_all())
        for position, rule in enumerate(rules):
            if not isinstance(rule, dict) or not isinstance(rule.get("id"), str):
                raise InvalidRuleSet(
                    f"Stored rule at position {position} has no usable id",
                    {"position": position}
                )
        current_ids = [r["id"] for r in rules]

        if len(rule_ids) != len(set(rule_ids)) or sorted(rule_ids) != sorted(current_ids):
            raise InvalidRuleOrder(
                "Rule order must list every existing rule exactly once",
                {"expected": current_ids, "received": list(rule_ids)}
            )

        by_id = {r["id"]: r for r in rules}
        ordered = [by_id[rule_id] for rule_id in rule_ids]
        self._save(ordered)
        return [r for position, r in enumerate(ordered) if self._parse(position, r) is not None]

    @staticmethod
    def _parse(position: int, entry: Any) -> Optional[Rule]:
        try:
            return Rule.model_validate(entry)
        except ValidationError as e:
            rule_id = entry.get("id") if isinstance(entry, dict) else None
            logger.warning(f"Skipping unreadable rule at position {position} (id={rule_id}): {e}")
            return None

    @staticmethod
    def _index_of(rules: List[Dict[str, Any]], rule_id: str) -> Optional[int]:
        for index, rule in enumerate(rules):
            if isinstance(rule, dict) and rule.get("id") == rule_id:
                return index
        return None

    def _save(self, rules: List[Dict[str, Any]]) -> None:
        self.settings_repo.set_value(RULES_KEY, rules)
