from typing import Any

from app.core.exceptions import MalformedCondition
from app.engine.types import Context, RuleCondition, RuleOperator


def _kind(value: Any) -> str:
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "list"
    if value is None:
        return "absent"
    return "other"


def strict_equals(left: Any, right: Any) -> bool:
    """Égalité stricte sans coercition entre types ("3" != 3, True != 1)"""
    kind = _kind(left)
    if kind != _kind(right):
        return False
    if kind == "list":
        return len(left) == len(right) and all(
            strict_equals(a, b) for a, b in zip(left, right)
        )
    return left == right


def stringify(value: Any) -> str:
    """Représentation texte d'un opérande pour la recherche de sous-chaîne"""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _exists(actual: Any) -> bool:
    if actual is None:
        return False
    if isinstance(actual, str) and actual == "":
        return False
    return True


def _contains(actual: Any, value: Any) -> bool:
    # str avant list : une chaîne est aussi une séquence
    if isinstance(actual, str):
        return stringify(value) in actual
    if isinstance(actual, (list, tuple)):
        return any(strict_equals(item, value) for item in actual)
    return False


def evaluate_condition(condition: RuleCondition, context: Context) -> bool:
    """Évalue une condition contre le contexte.

    Un champ absent n'est pas une erreur : il rend `exists`, `equals` et
    `contains` faux. Un opérateur hors de l'ensemble reconnu lève
    MalformedCondition.
    """
    actual = context.get(condition.field)
    operator = condition.operator

    if operator == RuleOperator.EXISTS:
        return _exists(actual)
    if operator == RuleOperator.NOT_EXISTS:
        return not _exists(actual)
    if operator == RuleOperator.EQUALS:
        return strict_equals(actual, condition.value)
    if operator == RuleOperator.NOT_EQUALS:
        return not strict_equals(actual, condition.value)
    if operator == RuleOperator.CONTAINS:
        return _contains(actual, condition.value)

    raise MalformedCondition(condition.field, operator)
