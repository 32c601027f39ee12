"""
FACT-G Scoring Service - FastAPI Application

Production-quality API with:
- FACT-G subscale and total scoring
- Submit payload building with insert/update correlation

Environment Variables:
    See config.py for complete list and descriptions.
"""

import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from config import settings, get_service_status
from evaluators.errors import InvalidResponseValue, NoResponsesEntered, UnknownItem
from models.schemas import (
    HealthResponse,
    ServiceStatus,
    ErrorResponse,
)
from routes import factg

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Service status: {get_service_status()}")
    yield
    logger.info("Shutting down...")


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="FACT-G quality-of-life scoring for the VR guided-imagery study",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(factg.router)


# Error handlers
@app.exception_handler(InvalidResponseValue)
async def invalid_response_handler(request: Request, exc: InvalidResponseValue):
    """Handle out-of-range responses."""
    return JSONResponse(
        status_code=422,
        content=ErrorResponse(
            error_code="INVALID_RESPONSE_VALUE",
            message=str(exc),
            details={"item_id": exc.item_id, "value": exc.value},
        ).model_dump(),
    )


@app.exception_handler(UnknownItem)
async def unknown_item_handler(request: Request, exc: UnknownItem):
    """Handle answers addressed to items missing from the catalog."""
    return JSONResponse(
        status_code=422,
        content=ErrorResponse(
            error_code="UNKNOWN_ITEM",
            message=str(exc),
            details={"item_id": exc.item_id},
        ).model_dump(),
    )


@app.exception_handler(NoResponsesEntered)
async def no_responses_handler(request: Request, exc: NoResponsesEntered):
    """Handle a submission with every item unanswered."""
    return JSONResponse(
        status_code=422,
        content=ErrorResponse(
            error_code="NO_RESPONSES_ENTERED",
            message=str(exc),
            details={"flagged_items": exc.flagged_items},
        ).model_dump(),
    )


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    """Handle Pydantic validation errors."""
    return JSONResponse(
        status_code=400,
        content=ErrorResponse(
            error_code="VALIDATION_ERROR",
            message="Invalid input data",
            details={"errors": exc.errors(include_url=False, include_context=False)},
        ).model_dump(),
    )


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    """Handle HTTP exceptions."""
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(
            error_code=f"HTTP_{exc.status_code}",
            message=str(exc.detail),
        ).model_dump(),
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected errors."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            error_code="INTERNAL_ERROR",
            message="An unexpected error occurred. Please try again.",
        ).model_dump(),
    )


# Health endpoint
@app.get(
    "/factg/health",
    response_model=HealthResponse,
    tags=["Health"],
    summary="Health check endpoint",
)
async def health_check() -> HealthResponse:
    """
    Check API health and service configuration status.
    """
    service_status = get_service_status()

    return HealthResponse(
        status="healthy",
        version=settings.app_version,
        services=ServiceStatus(**service_status),
    )


# Root
@app.get("/", include_in_schema=False)
async def root():
    """Root endpoint."""
    return {"message": settings.app_name, "docs": "/docs", "health": "/factg/health"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
    )
