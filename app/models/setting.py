from sqlalchemy import Column, String, JSON
from .base import BaseModel


class Setting(BaseModel):
    __tablename__ = "settings"

    # Clé du réglage (ex: "rules", "roles", "labels")
    key = Column(String(100), unique=True, index=True, nullable=False)
    value = Column(JSON, nullable=True)

    def __repr__(self):
        return f"<Setting(key='{self.key}')>"

