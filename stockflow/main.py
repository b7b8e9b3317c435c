"""
Main application entry point.
"""
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
import logging

from stockflow.core.config import settings, print_config_info
from stockflow.core.errors import AppError
from stockflow.db.mongodb import mongodb, ensure_indexes

# Import API routers
from stockflow.api.stock_requests.router import router as stock_requests_router
from stockflow.api.stock.router import router as stock_router
from stockflow.api.stores.router import router as stores_router
from stockflow.api.sites.router import router as sites_router
from stockflow.api.clients.router import router as clients_router
from stockflow.api.egg_fish_medication.router import router as egg_fish_medication_router
from stockflow.api.realtime.router import router as realtime_router

# Setup logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title=settings.PROJECT_NAME,
    openapi_url=f"{settings.API_V1_STR}/openapi.json"
)

# Setup CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    """Render domain errors with their status code and kind."""
    if exc.status_code >= 500:
        logger.error(f"{exc.kind}: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} -> {exc.status_code} {exc.kind}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler for unhandled errors."""
    logger.error(f"Unhandled exception: {str(exc)}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"detail": f"Internal server error: {str(exc)}", "kind": "internal_error"}
    )


# Startup and shutdown events
@app.on_event("startup")
async def startup_event():
    """Event triggered on application startup."""
    print_config_info()

    mongodb.connect_to_mongodb()
    await ensure_indexes()

    logger.info("Application started successfully")


@app.on_event("shutdown")
async def shutdown_event():
    """Event triggered on application shutdown."""
    await mongodb.close_mongodb_connection()

    logger.info("Application shutdown")


# Include API routers
app.include_router(stock_requests_router, prefix=f"{settings.API_V1_STR}/stock-requests", tags=["stock requests"])
app.include_router(stock_router, prefix=f"{settings.API_V1_STR}/stock", tags=["stock"])
app.include_router(stores_router, prefix=f"{settings.API_V1_STR}/stores", tags=["stores"])
app.include_router(sites_router, prefix=f"{settings.API_V1_STR}/sites", tags=["sites"])
app.include_router(clients_router, prefix=f"{settings.API_V1_STR}/clients", tags=["clients"])
app.include_router(egg_fish_medication_router, prefix=f"{settings.API_V1_STR}/egg-fish-medication",
                   tags=["egg-fish medication"])
app.include_router(realtime_router, prefix=settings.API_V1_STR, tags=["realtime"])


# Root endpoint
@app.get("/")
async def root():
    """Root endpoint."""
    return {"message": f"Welcome to {settings.PROJECT_NAME} API"}
