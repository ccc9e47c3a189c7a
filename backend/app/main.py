"""
app/main.py
────────────
FastAPI application factory.

All business logic lives in ``analytics/``; endpoints live in
``app/api/v1/endpoints/``.  This file is intentionally slim — it wires
together logging, middleware, routers, and lifecycle events only.

API Layout
----------
GET  /                              Health check
POST /api/v1/portfolio/analyze      Portfolio risk analysis

Run locally
-----------
    cd backend
    uvicorn app.main:app --reload

OpenAPI docs
------------
- Swagger UI:  http://localhost:8000/docs
- ReDoc:       http://localhost:8000/redoc
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.dependencies import get_engine
from app.api.v1.router import api_router
from core.config import get_settings

logger = logging.getLogger(__name__)


def configure_logging(debug: bool, level: str) -> None:
    """Configure the root logger once for the whole process."""
    logging.basicConfig(
        level=logging.DEBUG if debug else getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


# ── Lifespan ──────────────────────────────────────────────────────────────────


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application startup and shutdown logic.

    Startup:  Build the engine singleton so a bad synthesizer configuration
              fails at boot rather than on the first request.
    Shutdown: Nothing to close — the engine holds no resources.
    """
    settings = get_settings()
    logger.info(
        "Starting %s v%s (debug=%s)",
        settings.APP_TITLE,
        settings.APP_VERSION,
        settings.DEBUG,
    )
    engine = get_engine()
    logger.info(
        "Risk engine ready (synthesizer=%s, risk_free_rate=%.4f, static_quotes=%d)",
        engine.synthesizer.get_model_info()["model_name"],
        engine.risk_free_rate,
        len(settings.STATIC_QUOTES),
    )

    yield  # ← application runs here

    logger.info("Shutting down %s", settings.APP_TITLE)


# ── App factory ───────────────────────────────────────────────────────────────

settings = get_settings()
configure_logging(settings.DEBUG, settings.LOG_LEVEL)

app = FastAPI(
    title=settings.APP_TITLE,
    version=settings.APP_VERSION,
    description=settings.APP_DESCRIPTION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# ── Middleware ────────────────────────────────────────────────────────────────

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ── Routers ───────────────────────────────────────────────────────────────────

app.include_router(api_router, prefix="/api/v1")

# ── Root health-check ─────────────────────────────────────────────────────────


@app.get("/", tags=["health"], summary="Health check")
def health_check() -> dict:
    """
    Lightweight liveness probe.

    Returns:
        Status and current API version.
    """
    return {"status": "ok", "version": settings.APP_VERSION}
