"""Onco Sight – FastAPI application entry-point."""

from contextlib import asynccontextmanager
import logging
from collections.abc import AsyncIterator

from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware

from src.oncosight.config import settings
from src.oncosight.httpclient import make_http_client
from src.oncosight.router import chatbot, health, predict
from src.oncosight.router import settings as settings_router

# Configure logging from settings
logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


# ──────────────────────────────────────────────
# Lifespan: open the shared HTTP client on startup, close it on shutdown
# ──────────────────────────────────────────────
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    logger.info("🚀 Opening outbound HTTP client …")
    app.state.http_client = make_http_client()
    logger.info("✅ Inference service: %s", settings.brain_tumor_url)
    if not settings.groq_api_key:
        logger.warning("GROQ_API_KEY is not set – chat requests will fail.")
    yield
    logger.info("🛑 Shutting down – closing HTTP client …")
    await app.state.http_client.aclose()
    app.state.http_client = None


# ──────────────────────────────────────────────
# Application factory
# ──────────────────────────────────────────────
app = FastAPI(
    title="Onco Sight API",
    description="Brain-tumor MRI classification and a cancer-focused chat assistant.",
    version="1.0.0",
    lifespan=lifespan,
)

# ── CORS middleware (configured from environment variables) ──
app.add_middleware(
    middleware_class=CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_methods_list,
    allow_headers=settings.cors_headers_list,
)

logger.info("CORS configured with origins: %s", settings.cors_origins_list)

# ── register routers ──
app.get('/')(lambda: {"message": "Welcome to the Onco Sight API! Visit /docs for API documentation."})
app.include_router(health.router)
app.include_router(predict.router)
app.include_router(chatbot.router)
app.include_router(settings_router.router)
