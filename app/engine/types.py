from enum import Enum
from typing import Any, List, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

# Ordre important : bool avant int pour que `true` reste un booléen
Primitive = Union[bool, int, float, str]
FieldValue = Union[Primitive, List[Primitive]]

Context = Mapping[str, Any]


class RuleOperator(str, Enum):
    """Opérateurs de condition reconnus"""
    EXISTS = "exists"
    NOT_EXISTS = "not_exists"
    EQUALS = "equals"
    NOT_EQUALS = "not_equals"
    CONTAINS = "contains"


class RuleCondition(BaseModel):
    """Prédicat sur un champ du contexte"""
    model_config = ConfigDict(frozen=True)

    field: str
    # Tout opérateur est accepté ici, les inconnus lèvent MalformedCondition à l'évaluation
    operator: str
    value: Optional[FieldValue] = None


class RuleAction(BaseModel):
    """Affectation constante d'un champ"""
    model_config = ConfigDict(frozen=True)

    field: str
    value: Optional[FieldValue] = None


class Rule(BaseModel):
    """Règle déclarative : déclencheur, conditions (ET) et actions"""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str = ""
    trigger: str
    conditions: Tuple[RuleCondition, ...] = Field(default_factory=tuple)
    actions: Tuple[RuleAction, ...] = Field(default_factory=tuple)
    enabled: bool = True
