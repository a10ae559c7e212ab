"""
AI Readiness Auditor - FastAPI Application

Audits a crawled website for two kinds of machine consumption:
- Content readiness (GEO): can AI answer engines quote and cite the pages?
- Integration readiness (AEO): can AI agents discover and use the site?

Environment Variables:
    See config.py for complete list and descriptions.
"""

import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from config import settings, get_service_status
from evaluators.errors import AnalysisError
from evaluators.pipeline import analyze_site
from models.enums import BENCHMARK_LABELS, BENCHMARKS
from models.schemas import (
    AnalyzeRequest,
    ErrorResponse,
    HealthResponse,
    ServiceStatus,
    SiteAnalysis,
)
from utils.urls import validate_url

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
    description="AI Readiness Auditor - content and integration readiness scoring for websites",
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


# Error handlers
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


@app.exception_handler(AnalysisError)
async def analysis_error_handler(request: Request, exc: AnalysisError):
    """Handle errors surfaced by the analysis pipeline."""
    return JSONResponse(
        status_code=422,
        content=ErrorResponse(
            error_code=exc.error_code,
            message=exc.message,
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
    "/audit/health",
    response_model=HealthResponse,
    tags=["Health"],
    summary="Health check endpoint",
)
async def health_check() -> HealthResponse:
    """
    Check API health and pipeline configuration.

    Returns the version, the registered archetypes and the
    concurrency limits applied to analysis requests.
    """
    return HealthResponse(
        status="healthy",
        version=settings.app_version,
        services=ServiceStatus(**get_service_status()),
    )


# Main analysis endpoint
@app.post(
    "/audit/analyze",
    response_model=SiteAnalysis,
    response_model_exclude_none=True,
    responses={
        400: {"model": ErrorResponse, "description": "Validation error"},
        422: {"model": ErrorResponse, "description": "Analysis could not run"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
    tags=["Audit"],
    summary="Analyze a crawled website for AI readiness",
)
async def analyze(request: AnalyzeRequest) -> SiteAnalysis:
    """
    Score a crawled website for AI readiness.

    The caller supplies fetched page snapshots (homepage first) and the
    site-level resources (robots.txt, llms.txt, OpenAPI document).

    **Scoring Model:**
    - Content (GEO): 11 weighted categories, aggregated across pages
    - Integration (AEO): archetype-specific rubric
    - Overall: archetype split of GEO and AEO

    **Grades:**
    - A+ (90-100), A (80-89), B (70-79), C (60-69), D (50-59), F (0-49)
    """
    request_id = request.client_request_id
    logger.info(f"Analysis request received: {len(request.pages)} page(s) [request_id={request_id}]")

    is_valid, normalized_origin, url_error = validate_url(request.resources.origin)
    if not is_valid:
        logger.warning(f"Invalid origin: {url_error} [request_id={request_id}]")
        raise HTTPException(
            status_code=400,
            detail=f"Invalid origin: {url_error}",
        )

    if url_error and "HTTP URL" in url_error:
        logger.warning(f"HTTP origin submitted: {normalized_origin} [request_id={request_id}]")

    if len(request.pages) > settings.max_pages:
        logger.warning(f"Too many pages: {len(request.pages)} [request_id={request_id}]")
        raise HTTPException(
            status_code=400,
            detail=f"At most {settings.max_pages} pages can be analyzed per request",
        )

    analysis = await run_in_threadpool(analyze_site, request.pages, request.resources)

    logger.info(
        f"Analysis complete: overall={analysis.overall_score} ({analysis.overall_grade.value}), "
        f"archetype={analysis.archetype.value} [request_id={request_id}]"
    )
    return analysis


@app.get(
    "/audit/benchmarks",
    tags=["Audit"],
    summary="Industry benchmarks per archetype",
)
async def benchmarks() -> dict:
    """Overall-score benchmark anchors (p25, median, p75, top10) per archetype."""
    return {
        archetype.value: {"label": BENCHMARK_LABELS[archetype], **anchors}
        for archetype, anchors in BENCHMARKS.items()
    }


# Root redirect
@app.get("/", include_in_schema=False)
async def root():
    """Root endpoint."""
    return {"message": "AI Readiness Auditor API", "docs": "/docs", "health": "/audit/health"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
    )
