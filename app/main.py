"""
Safety Report Intake - FastAPI Application Entry Point

Accepts citizen-submitted safety incident reports, stores report and
location data in separate collections, and stores attached media.

DESIGN PRINCIPLES:
- Validation is the only gate before any write
- Location data is kept apart from report data
- A report counts as created once its own write succeeds
- No submitter authentication at this layer
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.core.exceptions import InvalidRequest, StoreFailure
from app.core.settings import settings
from app.routes import health, reports
from app.routes.reports import error_response

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


# Initialize FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Intake API for citizen-submitted safety incident reports",
    debug=settings.DEBUG,
)


def cors_headers(request: Request) -> dict:
    """
    CORS headers for responses built outside CORSMiddleware (the catch-all
    500 handler runs in the outermost middleware).
    """
    origin = request.headers.get("origin")
    allowed = settings.cors_origins_list
    if not origin or ("*" not in allowed and origin not in allowed):
        return {}
    return {
        "Access-Control-Allow-Origin": origin,
        "Access-Control-Allow-Credentials": "true",
        "Vary": "Origin",
    }


@app.exception_handler(InvalidRequest)
async def invalid_request_handler(request: Request, exc: InvalidRequest):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": exc.message},
    )


@app.exception_handler(StoreFailure)
async def store_failure_handler(request: Request, exc: StoreFailure):
    logger.error(f"Store failure on {request.method} {request.url.path}: {exc}")
    return error_response(exc)


# Global exception handler to catch ALL exceptions
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Catch all unhandled exceptions and return the standard error envelope."""
    logger.error(f"Unhandled exception on {request.method} {request.url.path}: {exc}", exc_info=True)

    content = {"message": "Error processing request"}
    if settings.EXPOSE_ERROR_DETAILS:
        content["error"] = str(exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=content,
        headers=cors_headers(request),
    )


# CORS configuration.
# Permissive by default ("*"); set CORS_ORIGINS to explicit origins before production.
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def startup_event():
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
    if settings.USE_MOCK_DB:
        logger.warning("USE_MOCK_DB is set: reports, locations and media are kept in memory only")


@app.on_event("shutdown")
async def shutdown_event():
    logger.info(f"Shutting down {settings.APP_NAME}")


# Include routers
app.include_router(health.router)
app.include_router(reports.router)


# Root endpoint
@app.get("/")
async def root():
    """
    Root endpoint - API information.
    """
    return {
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "running",
        "docs": "/docs",
        "health": "/health",
        "submit": "POST /reports",
    }
