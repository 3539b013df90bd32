from typing import Any, Dict, Iterable, Mapping

from app.engine.types import RuleAction


def apply_actions(actions: Iterable[RuleAction], base_record: Mapping[str, Any]) -> Dict[str, Any]:
    """Applique les actions sur une copie superficielle de l'enregistrement.

    En cas de conflit sur un même champ, la dernière action gagne.
    L'enregistrement d'origine n'est jamais modifié.
    """
    mutated = dict(base_record)
    for action in actions:
        value = action.value
        # Les listes sont copiées : l'instantané des règles n'est jamais partagé
        mutated[action.field] = list(value) if isinstance(value, list) else value
    return mutated
