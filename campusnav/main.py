"""
CampusNav - Main Application

FastAPI backend with:
- PostgreSQL (or SQLite) for users, buildings and schedules
- JWT authentication with institutional email registration
- Replace-all schedule sync for the client editor

Run: uvicorn campusnav.main:app --reload
"""

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from campusnav import __version__
from campusnav.api.error_handlers import register_error_handlers
from campusnav.api.routes import api_router
from campusnav.core.config import get_settings
from campusnav.core.logging_config import setup_logging
from campusnav.db.database import init_schema, test_database_connection

settings = get_settings()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging and make sure the tables exist."""
    setup_logging(settings.log_level)
    try:
        init_schema()
        logger.info("Database schema ready")
    except Exception as e:
        logger.warning("Schema initialization failed: %s", e)
    yield


# Create FastAPI app
app = FastAPI(
    title="CampusNav",
    description="""
    Campus navigation API.

    ## Features
    - **Authentication**: Institutional email registration, JWT login
    - **Buildings**: Campus building catalog for the map
    - **Schedule**: Per-user courses and meetings, replaced as one unit
    """,
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

# Include API routes
app.include_router(api_router, prefix="/api")


@app.get("/health", tags=["Health"])
async def health_check():
    """Detailed health check."""
    return {
        "status": "healthy",
        "database": "connected" if test_database_connection() else "disconnected",
    }
