"""
Main FastAPI application entry point.
Initializes the app, middleware, and routes.
"""
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging

from speech_practice.config import settings
from speech_practice.core.dependencies import get_catalog, get_session_service
from speech_practice.services.practice_session_service import PracticeSessionService
from speech_practice.services.reference_catalog import ReferenceCatalog

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format=settings.LOG_FORMAT
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Practice session engine for articulation therapy",
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def startup_event():
    """Load the reference catalog on startup."""
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
    logger.info(f"Environment: {settings.ENVIRONMENT}")

    phonemes = get_catalog().all_phonemes()
    logger.info(f"Reference catalog loaded: {len(phonemes)} phonemes")

    logger.info("Application started successfully")


@app.on_event("shutdown")
async def shutdown_event():
    """Log sessions that were never saved."""
    logger.info("Shutting down application...")

    active = len(get_session_service().registry)
    if active:
        logger.warning(f"{active} practice sessions still active at shutdown")

    logger.info("Application shutdown complete")


@app.get("/")
async def root():
    """Health check endpoint"""
    return JSONResponse(content={
        "app": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "healthy",
        "environment": settings.ENVIRONMENT
    })


@app.get("/health")
async def health_check(
    catalog: ReferenceCatalog = Depends(get_catalog),
    service: PracticeSessionService = Depends(get_session_service)
):
    """
    Detailed health check endpoint.
    Reports catalog and session registry state.
    """
    catalog_status = "up"
    try:
        catalog.all_phonemes()
    except (OSError, ValueError) as e:
        logger.error(f"Reference catalog unavailable: {e}")
        catalog_status = "down"

    health_status = {
        "status": "healthy" if catalog_status == "up" else "degraded",
        "services": {
            "api": "up",
            "catalog": catalog_status,
            "active_sessions": len(service.registry)
        }
    }

    return JSONResponse(content=health_status)


# Include routers
from speech_practice.api.v1.endpoints import catalog
from speech_practice.api.v1.endpoints import lists
from speech_practice.api.v1.endpoints import sessions
app.include_router(catalog.router, prefix=settings.API_V1_PREFIX, tags=["catalog"])
app.include_router(lists.router, prefix=settings.API_V1_PREFIX, tags=["lists"])
app.include_router(sessions.router, prefix=settings.API_V1_PREFIX, tags=["sessions"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "speech_practice.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG
    )
