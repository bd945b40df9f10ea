#!/usr/bin/env python3
"""
Center Recommendation API - FastAPI Application

Usage:
    python main.py serve

Then open:
    - http://localhost:8080/docs - API Documentation (Swagger UI)
    - http://localhost:8080/redoc - Alternative API Documentation
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException

from core.config_loader import get_config
from core.exceptions import RecommendationError
from .dependencies import get_aggregator
from .exceptions import (
    service_exception_handler,
    http_exception_handler,
    general_exception_handler
)
from .routers import recommendations_router, centers_router

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

config = get_config()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Stop the shared scorer pool on shutdown."""
    logger.info(f"Scoring in timezone {config.scoring.timezone}, "
                f"closing-soon threshold {config.scoring.closing_soon_minutes} min")

    yield

    if get_aggregator.cache_info().currsize:
        logger.info("Shutting down scorer pool")
        get_aggregator().shutdown()
        get_aggregator.cache_clear()


app = FastAPI(
    title="Center Recommendation API",
    description="Ranks nearby mental-health centers by distance, opening status, staff and programs",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

app.add_exception_handler(RecommendationError, service_exception_handler)
app.add_exception_handler(HTTPException, http_exception_handler)
app.add_exception_handler(Exception, general_exception_handler)

app.include_router(recommendations_router)
app.include_router(centers_router)


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "center-recommendation-api"}


def main():
    """Run the web server."""
    import uvicorn

    logger.info(f"Starting Center Recommendation API on {config.web.host}:{config.web.port}")
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
