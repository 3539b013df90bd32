from pydantic_settings import BaseSettings
from dotenv import load_dotenv
from typing import List, Optional
import os
from pathlib import Path

root_dir = Path(__file__).parent.parent
env_path = root_dir / ".env"
load_dotenv(env_path)

class Settings(BaseSettings):
    # Application
    APP_NAME: str = "Life Scrum Rules API"
    DEBUG: bool = False

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None

    # Database
    DATABASE_URL: Optional[str] = None
    POSTGRES_USER: Optional[str] = None
    POSTGRES_PASSWORD: Optional[str] = None
    POSTGRES_HOST: Optional[str] = None
    POSTGRES_PORT: int = 5432
    POSTGRES_DB: Optional[str] = None

    # CORS (client web)
    CORS_ORIGINS: List[str] = ["http://localhost:5173"]

    # Database URL
    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        if self.POSTGRES_HOST:
            return f"postgresql://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        return "sqlite:///./life_scrum.db"

    class Config:
        env_file = ".env"
        env_file_encoding = 'utf-8'
        extra = "ignore"
        case_sensitive = True

try:
    settings = Settings()
except Exception as e:
    print(f"❌ Settings creation failed: {e}")
    print(f"❌ Available environment variables:")
    for key, value in os.environ.items():
        if any(prefix in key for prefix in ['DATABASE', 'POSTGRES', 'APP', 'DEBUG', 'LOG', 'CORS']):
            print(f"   {key}: {'*' * min(8, len(value)) if 'PASSWORD' in key else value}")
    raise
