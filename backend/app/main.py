"""
Track Export API

FastAPI application for storing GPS tracks and exporting them as
GPX, KML or CSV documents.
"""

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings
from app.db.session import init_db, SessionLocal
from app.api.v1.router import api_router
from app.features.export import ExportJobManager
from app.shared.logging_config import configure_logging


# === Logging Setup ===
configure_logging(settings.log_level)
logger = logging.getLogger(__name__)


# === Lifespan ===
@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    # Startup
    logger.info("Starting Track Export API...")
    init_db()
    logger.info("Database initialized")

    app.state.export_jobs = ExportJobManager(SessionLocal)
    logger.info(f"Exports are written under {settings.export_root.resolve()}")

    yield

    # Shutdown: in-flight exports always run to completion
    await app.state.export_jobs.shutdown()
    logger.info("Shutting down...")


# === App Creation ===
app = FastAPI(
    title="Track Export API",
    description="Stream recorded GPS tracks into GPX, KML and CSV documents",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)


# === Middleware ===
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# === Routes ===
app.include_router(api_router, prefix="/api/v1")


# === Health Check ===
@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": "0.1.0"}
