from fastapi import FastAPI
import logging
import uvicorn
from contextlib import asynccontextmanager

from app.api.middleware import setup_middlewares
from app.api.router import router
from app.config import settings
from app.core.database import db_manager
from app.core.logging import setup_logging
from app.repositories.settings_repository import SettingsRepository

from app import models  # noqa: F401 - enregistre les tables

setup_logging(settings.LOG_LEVEL, log_file=settings.LOG_FILE)
logger = logging.getLogger(__name__)


def init_database() -> None:
    """Crée les tables et complète les réglages manquants"""
    db_manager.create_tables()
    db = db_manager.get_session()
    try:
        SettingsRepository(db).migrate_settings()
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("🚀 Démarrage de l'application...")
    init_database()
    yield
    logger.info("✅ Application arrêtée proprement")

app = FastAPI(
    title=settings.APP_NAME,
    description="API des règles automatiques (stories, objectifs, projets)",
    version="1.0.0",
    debug=settings.DEBUG,
    lifespan=lifespan
)

setup_middlewares(app)
app.include_router(router)


if __name__ == "__main__":
    url = "http://localhost:8000/docs"
    print(f"🚀 {settings.APP_NAME} démarrée !")
    print(f"📚 Documentation : {url}")
    uvicorn.run("app.main:app", host="0.0.0.0", port=8000, reload=settings.DEBUG)
