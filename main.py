from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import time
import logging
import os

from config.settings import settings
from core.exceptions import AnalyticsError, InvalidRangeError
from core.logger import setup_logging
from database.postgres import check_database_health, close_all_connections, configure_mappers
from utils.cache import init_cache, get_cache
from utils.response import error_response

# Import routers
from api.router.analytics import analytics_router

logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="Ledger Analytics API",
    description="Read-only dashboard analytics over the transaction ledger",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)

# Routers
app.include_router(analytics_router, prefix="/api")


@app.exception_handler(InvalidRangeError)
async def invalid_range_handler(request: Request, exc: InvalidRangeError):
    logger.info(f"Rejected {request.url.path}: {exc}")
    return error_response(status_code=status.HTTP_400_BAD_REQUEST, message=str(exc))


@app.exception_handler(AnalyticsError)
async def analytics_error_handler(request: Request, exc: AnalyticsError):
    logger.error(f"Analytics failure on {request.url.path}: {exc}")
    return error_response(status_code=status.HTTP_502_BAD_GATEWAY, message=str(exc))


@app.on_event("startup")
async def on_startup():
    """
    Startup tasks:
    - Configure logging
    - Initialize cache (Redis or in-memory fallback)
    - Test database connection
    """
    setup_logging()
    logger.info("=" * 60)
    logger.info("APPLICATION STARTING UP")
    logger.info("=" * 60)

    configure_mappers()
    init_cache()
    if get_cache().ping():
        logger.info("✓ Cache backend available")
    else:
        logger.warning("⚠️  Cache backend not available - results computed on every request")

    db_health = check_database_health()
    if db_health.get("status") == "healthy":
        logger.info(f"✓ Database connected: {db_health.get('database')}")
    else:
        # Don't raise - allow app to start for health checks
        logger.error(f"❌ Database not reachable: {db_health.get('error')}")

    logger.info("APPLICATION READY")


@app.on_event("shutdown")
async def on_shutdown():
    logger.info("Application shutting down...")
    close_all_connections()
    logger.info("Shutdown completed")


@app.get("/")
def read_root():
    """Root endpoint"""
    return {
        "name": "Ledger Analytics API",
        "version": "1.0.0",
        "status": "operational",
    }


@app.get("/health")
def health_check():
    """
    Health check endpoint for load balancers

    Returns:
        dict: Health status
    """
    health = {
        "status": "healthy",
        "timestamp": time.time(),
    }

    health["cache"] = "connected" if get_cache().ping() else "disconnected"

    db_health = check_database_health()
    health["database"] = db_health.get("status", "unknown")
    if db_health.get("status") != "healthy":
        health["status"] = "unhealthy"

    status_code = 200 if health["status"] == "healthy" else 503
    return JSONResponse(content=health, status_code=status_code)


@app.middleware("http")
async def add_process_time_header(request: Request, call_next):
    """
    Add response time header to all responses
    """
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time
    response.headers["X-Process-Time"] = f"{process_time:.4f}"
    return response


if __name__ == "__main__":
    import uvicorn
    port = int(os.getenv('PORT', 8001))
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=port,
        reload=False,
        workers=1,
        log_level=settings.LOG_LEVEL.lower(),
        access_log=True,
    )
