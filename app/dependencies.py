from sqlalchemy.orm import Session
from fastapi import Depends

from app.core.database import get_db
from app.services.rule_engine import RuleEngine


# === SERVICES ===
def get_rule_engine(
        db: Session = Depends(get_db)
) -> RuleEngine:
    """Factory pour le moteur de règles"""
    return RuleEngine(db)
