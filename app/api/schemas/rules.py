from pydantic import BaseModel, Field, model_validator
from typing import List, Dict, Any, Optional

from app.engine.types import FieldValue, RuleOperator, RuleAction, RuleCondition

# Opérateurs qui exigent une valeur de comparaison
VALUE_OPERATORS = {RuleOperator.EQUALS, RuleOperator.NOT_EQUALS, RuleOperator.CONTAINS}


class RuleConditionCreate(BaseModel):
    field: str = Field(..., min_length=1)
    operator: RuleOperator
    value: Optional[FieldValue] = None

    @model_validator(mode="after")
    def check_value(self):
        """equals / not_equals / contains exigent une valeur"""
        if self.operator in VALUE_OPERATORS and self.value is None:
            raise ValueError(f"Operator '{self.operator.value}' requires a value")
        return self


class RuleActionCreate(BaseModel):
    field: str = Field(..., min_length=1)
    value: Optional[FieldValue] = None


class RuleCreate(BaseModel):
    id: Optional[str] = None
    name: str = "New Rule"
    trigger: str = Field(..., min_length=1)  # ex: story-create
    conditions: List[RuleConditionCreate] = Field(default_factory=list)
    actions: List[RuleActionCreate] = Field(default_factory=list)
    enabled: bool = True


class RuleResponse(BaseModel):
    id: str
    name: str = ""
    trigger: str
    conditions: List[RuleCondition] = Field(default_factory=list)
    actions: List[RuleAction] = Field(default_factory=list)
    enabled: bool = True


class RuleOrderUpdate(BaseModel):
    rule_ids: List[str]


class RuleStatistics(BaseModel):
    total_rules: int
    enabled_rules: int
    disabled_rules: int
    rules_by_trigger: Dict[str, Dict[str, int]]


class ActionsRequest(BaseModel):
    """Contexte à évaluer pour un déclencheur"""
    trigger: str = Field(..., min_length=1)
    context: Dict[str, Any] = Field(default_factory=dict)


class RuleFailure(BaseModel):
    """Règle ignorée pendant l'évaluation"""
    rule_id: str
    error: str


class ActionsResponse(BaseModel):
    trigger: str
    actions: List[RuleAction]
    matched_rules: List[str]
    failed_rules: List[RuleFailure]



class ApplyRequest(ActionsRequest):
    # Enregistrement à modifier ; le contexte est utilisé s'il est absent
    data: Optional[Dict[str, Any]] = None


class ApplyResponse(BaseModel):
    trigger: str
    data: Dict[str, Any]
    actions: List[RuleAction]
