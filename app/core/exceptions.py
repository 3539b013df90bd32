from typing import Dict, Any, Optional


class RuleEngineError(Exception):
    """Erreur de base du moteur de règles"""

    code = "RULE_ENGINE_ERROR"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class MalformedCondition(RuleEngineError):
    """Condition avec un opérateur inconnu"""

    code = "MALFORMED_CONDITION"

    def __init__(self, field: str, operator: Any):
        self.field = field
        self.operator = operator
        super().__init__(
            f"Unknown operator {operator!r} on field {field!r}",
            {"field": field, "operator": operator}
        )


class InvalidRuleSet(RuleEngineError):
    """La collection de règles n'est pas une séquence ordonnée"""

    code = "INVALID_RULE_SET"


class DuplicateRule(RuleEngineError):
    code = "DUPLICATE_RULE"

    def __init__(self, rule_id: str):
        self.rule_id = rule_id
        super().__init__(f"Rule {rule_id!r} already exists", {"rule_id": rule_id})


class InvalidRuleOrder(RuleEngineError):
    """L'ordre demandé n'est pas une permutation des règles existantes"""

    code = "INVALID_RULE_ORDER"
