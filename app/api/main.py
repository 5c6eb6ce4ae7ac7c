"""
FastAPI Main Application for Smart Farming System.

This module initializes the FastAPI application with all routes and middleware.
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from app.core.config import get_settings
from app.api.endpoints.advisor import router as advisor_router
from app.api.endpoints.crops import router as crops_router
from app.api.endpoints.market import router as market_router
from app.api.endpoints.pests import router as pests_router
from app.services.gemini_client import GeminiError

logger = logging.getLogger(__name__)

# Initialize settings
settings = get_settings()

# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="AI-assisted crop, pest and market advice for farmers",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(crops_router)
app.include_router(pests_router)
app.include_router(market_router)
app.include_router(advisor_router)


@app.get("/")
async def root():
    """Root endpoint with system information."""
    return {
        "message": "Smart Farming API",
        "version": "0.1.0",
        "status": "operational",
    }


@app.get("/api/v1/health")
async def health_check():
    """Health check endpoint for Docker health checks."""
    return {"status": "healthy", "service": "smart-farming-web"}


@app.get("/api/v1/info")
async def system_info():
    """System information endpoint."""
    return {
        "app_name": settings.app_name,
        "version": "0.1.0",
        "debug": settings.debug,
        "gemini_model": settings.gemini_model,
        "gemini_configured": bool(settings.gemini_api_key),
        "allow_synthetic_data": settings.allow_synthetic_data,
    }


@app.exception_handler(GeminiError)
async def gemini_exception_handler(request, exc):
    """Upstream AI failures are reported as a bad gateway."""
    logger.error(f"Gemini request failed for {request.url.path}: {exc}")
    return JSONResponse(
        status_code=502,
        content={"error": "AI service error", "detail": str(exc)},
    )


@app.exception_handler(ValueError)
async def value_error_handler(request, exc):
    """Service-level input validation failures."""
    if isinstance(exc, ValidationError):
        # A model built from internal data failed, not the request
        return await global_exception_handler(request, exc)
    return JSONResponse(
        status_code=422,
        content={"error": "Invalid request", "detail": str(exc)},
    )


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    """Handle all uncaught exceptions."""
    logger.exception(f"Unhandled error for {request.url.path}")
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error", "detail": str(exc)},
    )
