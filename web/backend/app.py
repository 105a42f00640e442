#!/usr/bin/env python3
"""
BamaAI Connect - FastAPI Application

Search and matchmaking API for the Alabama AI business directory.

Usage:
    uv run python -m web.backend.app

Then open:
    - http://localhost:8080/docs - API Documentation (Swagger UI)
    - http://localhost:8080/redoc - Alternative API Documentation
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError

from core.app_context import AppContext
from core.exceptions import MatchmakingError
from .config import get_config
from .exceptions import (
    matchmaking_exception_handler,
    request_validation_exception_handler,
    http_exception_handler,
    general_exception_handler
)
from .models.responses import HealthResponse
from .routers import (
    match_router,
    search_router,
    cache_router
)
from .routers.match import add_rate_limit_handlers

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Wire the AppContext once per process and tear it down on shutdown."""
    context = AppContext.build(get_config())
    app.state.context = context
    logger.info("Application context ready")
    try:
        yield
    finally:
        context.shutdown()
        logger.info("Application context shut down")


# Create FastAPI app
app = FastAPI(
    title="BamaAI Connect API",
    description="Search and matchmaking for Alabama AI businesses",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

# Configure rate limiting
add_rate_limit_handlers(app)

# Register exception handlers
app.add_exception_handler(MatchmakingError, matchmaking_exception_handler)
app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
app.add_exception_handler(HTTPException, http_exception_handler)
app.add_exception_handler(Exception, general_exception_handler)

# Include routers
app.include_router(match_router)
app.include_router(search_router)
app.include_router(cache_router)


@app.get("/health", response_model=HealthResponse)
def health_check():
    """Health check endpoint."""
    return HealthResponse(status="healthy", service="bamaai-connect")


def main():
    """Run the web server."""
    import uvicorn

    config = get_config()
    logger.info(f"Starting BamaAI Connect on {config.web.host}:{config.web.port}")
    logger.info(f"API Docs: http://{config.web.host}:{config.web.port}/docs")

    uvicorn.run(
        "web.backend.app:app",
        host=config.web.host,
        port=config.web.port,
        reload=False,
        log_level="info"
    )


if __name__ == "__main__":
    main()
