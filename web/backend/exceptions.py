#!/usr/bin/env python3
"""
Error handlers for the web application.

Domain exceptions from the recommendation engine are mapped onto HTTP
status codes here; the engine itself knows nothing about HTTP.
"""

import logging
from fastapi import Request, HTTPException
from fastapi.responses import JSONResponse

from core.exceptions import (
    CenterNotFoundError,
    InvalidRequestError,
    InvalidWeightsError,
    RecommendationError,
)

logger = logging.getLogger(__name__)


def _status_code_for(exc: RecommendationError) -> int:
    if isinstance(exc, CenterNotFoundError):
        return 404
    if isinstance(exc, InvalidRequestError):
        return 400
    return 500


async def service_exception_handler(
    request: Request,
    exc: RecommendationError
) -> JSONResponse:
    """
    Handle recommendation engine exceptions.

    Args:
        request: The FastAPI request.
        exc: The domain exception.

    Returns:
        JSONResponse with error details.
    """
    status_code = _status_code_for(exc)
    if status_code >= 500 or isinstance(exc, InvalidWeightsError):
        logger.error(f"Service error in {request.url.path}: {exc}", exc_info=True)
    else:
        logger.info(f"Rejected request to {request.url.path}: {exc}")

    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "error": str(exc) if status_code < 500 else "Internal server error",
            "type": exc.__class__.__name__
        }
    )


async def http_exception_handler(
    request: Request,
    exc: HTTPException
) -> JSONResponse:
    """Handle FastAPI HTTP exceptions with consistent format."""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "success": False,
            "error": exc.detail,
            "type": "HTTPException"
        }
    )


async def general_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error in {request.url.path}")

    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "Internal server error",
            "type": "InternalError"
        }
    )
