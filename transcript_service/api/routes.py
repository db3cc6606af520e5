"""
API routes for the transcript cleaner service.
"""

import time
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Body, Depends, Request
from starlette.concurrency import run_in_threadpool

from transcript_service.api.schemas import ErrorResponse, HealthResponse, RemoveTimestampsRequest
from transcript_service.config import APP_VERSION
from transcript_service.core.pipeline import TranscriptPipeline
from transcript_service.models.schemas import TranscriptResult
from transcript_service.utils.errors import ServiceError
from transcript_service.utils.logger import logging

router = APIRouter(prefix="/api", tags=["transcripts"])


def get_pipeline(request: Request) -> TranscriptPipeline:
    return request.app.state.pipeline


def utc_timestamp() -> str:
    """Current UTC time as ISO 8601 with milliseconds, e.g. 2024-01-01T00:00:00.000Z."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Report that the service is up."""
    return HealthResponse(status="OK", timestamp=utc_timestamp(), version=APP_VERSION)


@router.post(
    "/remove-timestamps",
    response_model=TranscriptResult,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        413: {"model": ErrorResponse},
        429: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def remove_timestamps(
    payload: Optional[RemoveTimestampsRequest] = Body(None),
    pipeline: TranscriptPipeline = Depends(get_pipeline),
):
    """
    Fetch a video's transcript and return it as plain text.

    - Body: ``{"videoUrl": "<YouTube URL>"}``
    - Errors are returned as ``{"error", "code"}`` with a matching status
    """
    started_at = time.monotonic()

    video_url = payload.videoUrl if payload else None
    logging.info(f"Received request: timestamp={utc_timestamp()}, videoUrl={video_url!r}")

    try:
        return await run_in_threadpool(pipeline.process, video_url, started_at)
    except ServiceError:
        raise
    except Exception as e:
        processing_time = int((time.monotonic() - started_at) * 1000)
        logging.error(f"Error processing request after {processing_time}ms: {e}", exc_info=True)
        raise ServiceError(
            "An error occurred while processing the request",
            code="INTERNAL_SERVER_ERROR",
            details=str(e),
        ) from e
