"""
FastAPI Main Application
Portfolio tracker: authenticated holdings CRUD + gain/loss summary
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from typing import AsyncGenerator
from sqlalchemy import text
import logging

from app.config import settings
from app.core.logging import setup_logging
from app.api.errors import register_exception_handlers
from app.infrastructure.db.database import init_db, close_db

# Configure logging
setup_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

APP_VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Application lifespan manager
    Handles startup and shutdown of the database
    """
    # ===================
    # STARTUP
    # ===================
    logger.info("=" * 60)
    logger.info("🚀 Starting Portfolio Tracker (%s)", settings.APP_ENV)
    logger.info("=" * 60)

    logger.info("📊 Initializing database...")
    await init_db()
    logger.info("✅ Database initialized")

    logger.info(f"   ✅ API Server: http://{settings.API_HOST}:{settings.API_PORT}")
    logger.info(f"   ✅ API Docs: http://{settings.API_HOST}:{settings.API_PORT}/docs")

    yield

    # ===================
    # SHUTDOWN
    # ===================
    logger.info("🛑 Shutting down Portfolio Tracker...")
    await close_db()
    logger.info("✅ Database connections closed")


# Create FastAPI app
app = FastAPI(
    title="Portfolio Tracker",
    description="Manually tracked stock holdings with gain/loss summary",
    version=APP_VERSION,
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


# Health check endpoint
@app.get("/health")
async def health_check():
    """Service and database health"""
    db_status = "disconnected"
    db_error = None
    try:
        from app.infrastructure.db.database import engine
        if engine is None:
            db_status = "not_initialized"
        else:
            async with engine.begin() as conn:
                await conn.execute(text("SELECT 1"))
            db_status = "connected"
    except Exception as exc:
        logger.warning("Database health check failed: %s", exc)
        db_status = "error"
        db_error = str(exc)

    return {
        "status": "healthy" if db_status == "connected" else "degraded",
        "service": "Portfolio Tracker",
        "version": APP_VERSION,
        "services": {
            "api": "running",
            "database": db_status
        },
        "database_error": db_error,
    }


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": "📈 Portfolio Tracker",
        "version": APP_VERSION,
        "docs": "/docs"
    }


# Import and include routers
from app.api.routes import auth, investments, portfolio  # noqa: E402

app.include_router(auth.router, prefix="/api/v1/auth", tags=["Auth"])
app.include_router(investments.router, prefix="/api/v1/investments", tags=["Investments"])
app.include_router(portfolio.router, prefix="/api/v1/portfolio", tags=["Portfolio"])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.DEBUG,
    )
