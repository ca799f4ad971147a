"""FastAPI application main entry point."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

load_dotenv()

from .middleware import register_error_handlers
from .routes import auth, entries, insights, reading, search, system
from ..services.config import get_config

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan handler to run startup tasks."""
    system.install_log_buffer()
    config = get_config()
    if config.backend_configured:
        logger.info("Supabase backend configured at %s", config.supabase_url)
    else:
        logger.warning(
            "SUPABASE_URL/SUPABASE_KEY not set; vault requests will fail until configured"
        )
    if config.enable_local_mode:
        logger.info("Local mode enabled: static development token accepted")
    yield


app = FastAPI(
    title="Knowledge Vault API",
    description="Personal notes and links with tags, search and AI insights",
    version="0.1.0",
    lifespan=lifespan,
)

config = get_config()

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=list(config.cors_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

# Mount routers
app.include_router(auth.router, tags=["auth"])
app.include_router(entries.router, tags=["entries"])
app.include_router(search.router, tags=["search"])
app.include_router(insights.router, tags=["insights"])
app.include_router(reading.router, tags=["reading"])
app.include_router(system.router, tags=["system"])


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}


__all__ = ["app"]
