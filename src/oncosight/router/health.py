"""Router – health check."""

from fastapi import APIRouter

from src.oncosight.config import settings

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check() -> dict:
    """Liveness probe; also reports which upstreams are configured."""
    return {
        "status": "ok",
        "inference_url": settings.brain_tumor_url,
        "chat_configured": bool(settings.groq_api_key),
    }
