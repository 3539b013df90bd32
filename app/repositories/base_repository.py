# app/repositories/base_repository.py
from typing import TypeVar, Generic, List, Optional, Type, Dict, Any
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from app.core.database import Base

# Type générique pour les modèles
ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Repository générique pour les opérations CRUD de base"""

    def __init__(self, model: Type[ModelType], db: Session):
        self.model = model
        self.db = db

    def get_all(self, skip: int = 0, limit: Optional[int] = 100) -> List[ModelType]:
        """Récupère tous les enregistrements avec pagination"""
        try:
            query = self.db.query(self.model).order_by(self.model.id).offset(skip)
            if limit is not None:
                query = query.limit(limit)
            return query.all()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise e

    def get_by_field(self, field: str, value: Any) -> Optional[ModelType]:
        """Récupère un enregistrement par un champ spécifique"""
        try:
            return self.db.query(self.model).filter(getattr(self.model, field) == value).first()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise e

    def create(self, obj_data: Dict[str, Any]) -> ModelType:
        """Crée un nouvel enregistrement"""
        try:
            db_obj = self.model(**obj_data)
            self.db.add(db_obj)
            self.db.commit()
            self.db.refresh(db_obj)
            return db_obj
        except SQLAlchemyError as e:
            self.db.rollback()
            raise e

    def update_instance(self, db_obj: ModelType, obj_data: Dict[str, Any]) -> ModelType:
        """Met à jour un enregistrement déjà chargé"""
        try:
            for field, value in obj_data.items():
                if hasattr(db_obj, field):
                    setattr(db_obj, field, value)
            self.db.commit()
            self.db.refresh(db_obj)
            return db_obj
        except SQLAlchemyError as e:
            self.db.rollback()
            raise e

    def delete_instance(self, db_obj: ModelType) -> None:
        """Supprime un enregistrement déjà chargé"""
        try:
            self.db.delete(db_obj)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise e

