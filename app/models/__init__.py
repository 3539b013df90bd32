from .base import BaseModel
from .setting import Setting

__all__ = ["BaseModel", "Setting"]
