"""Rental Management Backend - Main Application Entry Point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import settings
from .core.exceptions import RentalException
from .core.logging import RequestIdMiddleware, get_logger, setup_logging, shutdown_logging
from .database import import_models

# Import routers
from .modules.asset_management.routers import router as assets_router
from .modules.auth.routers import router as auth_router
from .modules.auth.routers import users_router
from .modules.contract_management.routers import router as contracts_router
from .modules.dashboard.routers import admin_router
from .modules.dashboard.routers import router as dashboard_router
from .modules.finance.routers import router as finance_router
from .modules.maintenance.routers import router as maintenance_router
from .modules.notifications.routers import router as notifications_router
from .modules.payment_management.routers import router as payments_router

logger = get_logger("app")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    # Startup
    setup_logging(settings)
    import_models()
    logger.info("Starting rental backend", extra={"env": settings.app_env})
    logger.info(f"Debug mode: {settings.app_debug}")
    yield
    # Shutdown
    logger.info("Shutting down rental backend")
    shutdown_logging()


# Create FastAPI application
app = FastAPI(
    title=settings.api_title,
    description="Rental property management: assets, contracts, payments and upkeep",
    version=settings.api_version,
    docs_url="/api/docs" if settings.app_debug else None,
    redoc_url="/api/redoc" if settings.app_debug else None,
    openapi_url="/api/openapi.json" if settings.app_debug else None,
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins or ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Request ID middleware for request tracing
app.add_middleware(RequestIdMiddleware)


@app.exception_handler(RentalException)
async def rental_exception_handler(request: Request, exc: RentalException):
    """Render domain errors with the status code they carry."""
    if exc.status_code >= 500:
        logger.error(
            exc.message,
            extra={"path": request.url.path, "error_type": type(exc).__name__},
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "success": False,
            "message": exc.message,
            "error": exc.details or exc.message,
            "data": None,
        },
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle unhandled exceptions."""
    logger.exception(f"Unhandled exception: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "message": "Internal server error",
            "error": str(exc) if settings.app_debug else "Internal server error",
            "data": None,
        },
    )


# Health check endpoint
@app.get("/api/health", tags=["Health"])
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "version": settings.api_version,
        "env": settings.app_env,
    }


API_PREFIX = settings.api_prefix

app.include_router(auth_router, prefix=API_PREFIX)
app.include_router(users_router, prefix=API_PREFIX)
app.include_router(assets_router, prefix=API_PREFIX)
app.include_router(contracts_router, prefix=API_PREFIX)
app.include_router(payments_router, prefix=API_PREFIX)
app.include_router(maintenance_router, prefix=API_PREFIX)
app.include_router(finance_router, prefix=API_PREFIX)
app.include_router(notifications_router, prefix=API_PREFIX)
app.include_router(dashboard_router, prefix=API_PREFIX)
app.include_router(admin_router, prefix=API_PREFIX)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "rental_backend.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.app_debug,
    )
