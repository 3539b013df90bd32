from fastapi import APIRouter
from app.api.v1 import rules
from app.config import settings

router = APIRouter()

router.include_router(rules.router, prefix="/api/v1")

@router.get("/")
async def root():
    return {
        "message": settings.APP_NAME,
        "version": "1.0.0",
        "docs": "/docs",
        "rules": "/api/v1/rules"
    }

@router.get("/health")
async def health():
    return {"status": "healthy"}
