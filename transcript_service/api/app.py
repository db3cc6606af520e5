"""
FastAPI application for the transcript cleaner service.
"""

import time
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool
from starlette.exceptions import HTTPException as StarletteHTTPException

from transcript_service.api.routes import router
from transcript_service.api.schemas import NotFoundResponse
from transcript_service.config import APP_NAME, APP_VERSION, Settings, load_settings
from transcript_service.core.pipeline import TranscriptPipeline
from transcript_service.core.rate_limiter import (
    InMemoryRateLimitStore,
    RateLimiter,
    RateLimitStore,
    RedisRateLimitStore,
)
from transcript_service.services.captions import CaptionsChecker
from transcript_service.services.transcript_fetcher import TranscriptFetcher
from transcript_service.utils.errors import (
    PayloadTooLargeError,
    RateLimitError,
    ServiceError,
    ValidationError,
)
from transcript_service.utils.logger import logging

API_PREFIX = "/api"


def build_rate_limit_store(settings: Settings) -> RateLimitStore:
    """Use Redis when configured, otherwise keep counts in process memory."""
    if settings.redis_url:
        try:
            return RedisRateLimitStore.from_url(settings.redis_url)
        except Exception as e:
            logging.error(f"Error configuring Redis, using in-memory rate limiting: {e}")
    return InMemoryRateLimitStore()


def create_app(
    settings: Optional[Settings] = None,
    rate_limit_store: Optional[RateLimitStore] = None,
    captions_checker: Optional[CaptionsChecker] = None,
    transcript_fetcher: Optional[TranscriptFetcher] = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Runtime settings (loaded from the environment if None)
        rate_limit_store: Storage for per-client request counts
        captions_checker: Caption availability checker
        transcript_fetcher: Transcript retrieval wrapper

    Returns:
        Configured FastAPI application
    """
    settings = settings or load_settings()
    logging.setLevel(settings.log_level)

    app = FastAPI(
        title=APP_NAME,
        version=APP_VERSION,
        description="An API that returns YouTube transcripts as plain text, without timestamps",
    )

    app.state.settings = settings
    app.state.rate_limiter = RateLimiter(
        rate_limit_store or build_rate_limit_store(settings),
        window=settings.rate_limit_window,
        max_requests=settings.rate_limit_max_requests,
    )
    app.state.pipeline = TranscriptPipeline(
        captions_checker or CaptionsChecker(settings.youtube_api_key, timeout=settings.captions_timeout),
        transcript_fetcher or TranscriptFetcher(timeout=settings.transcript_timeout),
    )

    @app.on_event("startup")
    async def startup_event():
        """Log the effective configuration."""
        logging.info(f"{APP_NAME} v{APP_VERSION} starting on port {settings.port}")
        logging.info(f"Health check: http://localhost:{settings.port}{API_PREFIX}/health")
        logging.info(f"YouTube API Key: {'configured' if settings.youtube_api_key else 'missing'}")
        logging.info(f"Environment: {settings.environment}")

    # Middleware added first runs innermost
    @app.middleware("http")
    async def rate_limit(request: Request, call_next):
        """Count requests under the API prefix per client address."""
        path = request.url.path
        if path == API_PREFIX or path.startswith(API_PREFIX + "/"):
            client_id = request.client.host if request.client else "unknown"
            try:
                await run_in_threadpool(app.state.rate_limiter.hit, client_id)
            except RateLimitError as e:
                return JSONResponse(status_code=e.status_code, content=e.to_dict())
        return await call_next(request)

    @app.middleware("http")
    async def limit_body_size(request: Request, call_next):
        """Reject bodies whose declared length is over the limit."""
        content_length = request.headers.get("content-length")
        if content_length and content_length.isdigit() and int(content_length) > settings.max_body_size:
            error = PayloadTooLargeError("Request entity too large")
            return JSONResponse(status_code=error.status_code, content=error.to_dict())
        return await call_next(request)

    @app.middleware("http")
    async def add_process_time_header(request: Request, call_next):
        """Middleware to add processing time header to responses."""
        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time
        response.headers["X-Process-Time"] = str(process_time)
        return response

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(ServiceError)
    async def service_error_handler(request: Request, exc: ServiceError):
        """Structured errors raised by the pipeline."""
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.to_dict(expose_details=settings.expose_error_details),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        """Bodies that are not a JSON object carry no usable videoUrl."""
        logging.warning(f"Invalid request body on {request.url.path}: {exc.errors()}")
        error = ValidationError(
            "Video URL is required and must be a valid string",
            code="MISSING_VIDEO_URL",
        )
        return JSONResponse(status_code=error.status_code, content=error.to_dict())

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code in (404, 405):
            return JSONResponse(
                status_code=404,
                content=NotFoundResponse(
                    error="Endpoint not found",
                    message="The requested API endpoint does not exist",
                ).model_dump(),
            )
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail), "message": str(exc.detail)},
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Global exception handler for unhandled exceptions."""
        logging.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal server error",
                "message": "Something went wrong" if settings.is_production else str(exc),
            },
        )

    app.include_router(router)

    return app


app = create_app()
