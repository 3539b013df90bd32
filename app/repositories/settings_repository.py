import copy
import logging
from typing import Any, Dict, List
from sqlalchemy.orm import Session
from app.models.setting import Setting
from app.repositories.base_repository import BaseRepository

logger = logging.getLogger(__name__)

# Valeurs par défaut ajoutées par migrate_settings quand la clé manque
DEFAULT_SETTINGS: Dict[str, Any] = {
    "rules": [],
}


class SettingsRepository(BaseRepository[Setting]):
    """Magasin clé/valeur des réglages utilisateur"""

    def __init__(self, db: Session):
        super().__init__(Setting, db)

    def get_value(self, key: str, default: Any = None) -> Any:
        """Retourne la valeur d'un réglage, ou `default` s'il n'existe pas"""
        setting = self.get_by_field("key", key)
        if setting is None:
            return default
        return setting.value

    def set_value(self, key: str, value: Any) -> Setting:
        """Crée ou remplace la valeur d'un réglage"""
        setting = self.get_by_field("key", key)
        # Nouvelle référence pour que SQLAlchemy détecte le changement du JSON
        value = copy.deepcopy(value)
        if setting is None:
            return self.create({"key": key, "value": value})
        return self.update_instance(setting, {"value": value})

    def delete_value(self, key: str) -> bool:
        setting = self.get_by_field("key", key)
        if setting is None:
            return False
        self.delete_instance(setting)
        return True

    def get_all_settings(self) -> Dict[str, Any]:
        """Retourne tous les réglages sous forme de dictionnaire"""
        return {setting.key: setting.value for setting in self.get_all(limit=None)}

    def migrate_settings(self) -> List[str]:
        """Ajoute les réglages manquants avec leur valeur par défaut"""
        added = []
        for key, default in DEFAULT_SETTINGS.items():
            if self.get_by_field("key", key) is None:
                self.create({"key": key, "value": copy.deepcopy(default)})
                added.append(key)

        if added:
            logger.info(f"Settings migrated, added defaults for: {', '.join(added)}")
        return added
