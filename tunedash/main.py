# ============================================================================
# FILE: tunedash/main.py
# ============================================================================
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from tunedash.api.v1.router import api_router
from tunedash.config import Settings, settings as default_settings
from tunedash.core.logging import setup_logging
from tunedash.core.session_store import SessionStore
from tunedash.storage.base import Storage
from tunedash.storage.factory import create_storage
from typing import Optional
import logging

logger = logging.getLogger(__name__)

def create_app(
    app_settings: Optional[Settings] = None,
    storage: Optional[Storage] = None,
    session_store: Optional[SessionStore] = None
) -> FastAPI:
    """
    Build the FastAPI application
    
    The entity store lives as long as the app; pass one in to share or
    inspect it (tests), otherwise it is built from STORAGE_BACKEND.
    """
    app_settings = app_settings or default_settings
    
    # Setup logging
    setup_logging("DEBUG" if app_settings.DEBUG else app_settings.LOG_LEVEL)
    
    # Create FastAPI app instance
    app = FastAPI(
        title=f"{app_settings.APP_NAME} API",
        description="Artist dashboard: tracks, playlists, plays and revenue analytics",
        version="1.0.0"
    )
    
    app.state.storage = storage if storage is not None else create_storage(app_settings)
    app.state.session_store = session_store or SessionStore(app_settings.REDIS_URL)
    
    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    
    # Include API v1 router
    app.include_router(api_router, prefix="/api/v1")
    
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Malformed payloads get a generic 400, no field-level detail"""
        logger.debug(f"Validation error on {request.method} {request.url.path}: {exc.errors()}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": "Invalid request data"},
        )
    
    @app.on_event("startup")
    async def startup_event():
        logger.info(f"Starting {app_settings.APP_NAME} API ({app_settings.STORAGE_BACKEND} storage)")
    
    @app.on_event("shutdown")
    async def shutdown_event():
        """Cleanup on shutdown"""
        logger.info(f"Shutting down {app_settings.APP_NAME} API")
        app.state.storage.close()
    
    @app.get("/health")
    async def health_check():
        return {"status": "healthy"}
    
    return app

app = create_app()
