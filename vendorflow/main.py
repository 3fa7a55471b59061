"""
Vendorflow - FastAPI Application
Main entry point with all routes configured.
"""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from vendorflow.config import settings
from vendorflow.database import init_db, close_db

from vendorflow.api import plan, outreach, vendors, settings as settings_api
from vendorflow.schemas.common import HealthResponse

# Import models to ensure they are registered with SQLModel
from vendorflow.models import Vendor, VendorSequence, OutreachLog, Setting  # noqa: F401

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)

VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    await init_db()
    logger.info("Database ready")
    yield
    await close_db()


app = FastAPI(
    title="Vendorflow API",
    description="Daily outreach planning for multi-channel vendor sequences",
    version=VERSION,
    lifespan=lifespan
)

# CORS Configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.DEV_MODE else [],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(plan.router)
app.include_router(outreach.router)
app.include_router(vendors.router)
app.include_router(settings_api.router)


@app.get("/")
async def root():
    """Health check endpoint."""
    return {
        "message": "Vendorflow API is running",
        "version": VERSION,
        "docs": "/docs"
    }


@app.get("/health", response_model=HealthResponse)
async def health():
    return HealthResponse(version=VERSION)
