from fastapi import APIRouter, Depends, HTTPException, status
from typing import List, Optional

from app.api.schemas.rules import (
    RuleResponse, RuleCreate, RuleOrderUpdate, RuleStatistics,
    ActionsRequest, ActionsResponse, ApplyRequest, ApplyResponse, RuleFailure
)
from app.core.exceptions import DuplicateRule, InvalidRuleOrder, InvalidRuleSet
from app.dependencies import get_rule_engine
from app.services.rule_engine import RuleEngine

router = APIRouter(prefix="/rules", tags=["rules"])


def _invalid_rule_set(e: InvalidRuleSet) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"Stored rules are invalid: {e.message}"
    )


@router.get("/", response_model=List[RuleResponse])
async def get_rules(
        trigger: Optional[str] = None,
        rule_engine: RuleEngine = Depends(get_rule_engine)
):
    """Obtenir les règles dans l'ordre d'évaluation"""
    try:
        return rule_engine.get_all_rules(trigger)
    except InvalidRuleSet as e:
        raise _invalid_rule_set(e)


@router.post("/", response_model=RuleResponse, status_code=status.HTTP_201_CREATED)
async def create_rule(
        rule_data: RuleCreate,
        rule_engine: RuleEngine = Depends(get_rule_engine)
):
    """Créer une nouvelle règle (ajoutée en fin de liste)"""
    try:
        return rule_engine.create_rule(rule_data.model_dump(mode="json"))
    except DuplicateRule as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message)
    except InvalidRuleSet as e:
        raise _invalid_rule_set(e)


@router.get("/statistics", response_model=RuleStatistics)
async def get_rule_statistics(rule_engine: RuleEngine = Depends(get_rule_engine)):
    """Statistiques des règles par déclencheur"""
    try:
        return rule_engine.get_rule_statistics()
    except InvalidRuleSet as e:
        raise _invalid_rule_set(e)


@router.put("/order", response_model=List[RuleResponse])
async def reorder_rules(
        order: RuleOrderUpdate,
        rule_engine: RuleEngine = Depends(get_rule_engine)
):
    """Réordonner les règles"""
    try:
        return rule_engine.reorder_rules(order.rule_ids)
    except InvalidRuleOrder as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except InvalidRuleSet as e:
        raise _invalid_rule_set(e)


@router.post("/actions", response_model=ActionsResponse)
async def get_applied_actions(
        request: ActionsRequest,
        rule_engine: RuleEngine = Depends(get_rule_engine)
):
    """Actions produites par les règles du déclencheur pour ce contexte"""
    try:
        report = rule_engine.get_applied_actions_report(request.trigger, request.context)
    except InvalidRuleSet as e:
        raise _invalid_rule_set(e)

    return ActionsResponse(
        trigger=report.trigger,
        actions=report.actions,
        matched_rules=report.matched_rule_ids,
        failed_rules=[
            RuleFailure(rule_id=rule_id, error=error) for rule_id, error in report.failures
        ]
    )


@router.post("/apply", response_model=ApplyResponse)
async def apply_rules(
        request: ApplyRequest,
        rule_engine: RuleEngine = Depends(get_rule_engine)
):
    """Appliquer les règles du déclencheur et retourner l'enregistrement modifié"""
    try:
        data, actions = rule_engine.apply_rules_with_actions(
            request.trigger, request.context, request.data
        )
    except InvalidRuleSet as e:
        raise _invalid_rule_set(e)

    return ApplyResponse(trigger=request.trigger, data=data, actions=actions)


@router.get("/{rule_id}", response_model=RuleResponse)
async def get_rule(
        rule_id: str,
        rule_engine: RuleEngine = Depends(get_rule_engine)
):
    """Obtenir une règle"""
    rule = rule_engine.get_rule_by_id(rule_id)
    if not rule:
        raise HTTPException(status_code=404, detail="Rule not found")
    return rule


@router.put("/{rule_id}", response_model=RuleResponse)
async def update_rule(
        rule_id: str,
        rule_data: RuleCreate,
        rule_engine: RuleEngine = Depends(get_rule_engine)
):
    """Mettre à jour une règle (sa position est conservée)"""
    rule_dict = rule_data.model_dump(mode="json", exclude={"id"})
    updated_rule = rule_engine.update_rule(rule_id, rule_dict)
    if not updated_rule:
        raise HTTPException(status_code=404, detail="Rule not found")
    return updated_rule


@router.delete("/{rule_id}")
async def delete_rule(
        rule_id: str,
        rule_engine: RuleEngine = Depends(get_rule_engine)
):
    """Supprimer une règle"""
    success = rule_engine.delete_rule(rule_id)
    if not success:
        raise HTTPException(status_code=404, detail="Rule not found")
    return {"message": "Rule deleted"}


@router.post("/{rule_id}/activate", response_model=RuleResponse)
async def activate_rule(
        rule_id: str,
        rule_engine: RuleEngine = Depends(get_rule_engine)
):
    """Activer une règle"""
    rule = rule_engine.activate_rule(rule_id)
    if not rule:
        raise HTTPException(status_code=404, detail="Rule not found")
    return rule


@router.post("/{rule_id}/deactivate", response_model=RuleResponse)
async def deactivate_rule(
        rule_id: str,
        rule_engine: RuleEngine = Depends(get_rule_engine)
):
    """Désactiver une règle"""
    rule = rule_engine.deactivate_rule(rule_id)
    if not rule:
        raise HTTPException(status_code=404, detail="Rule not found")
    return rule
