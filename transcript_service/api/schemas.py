from typing import Any, Optional

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Model for health check responses."""
    status: str
    timestamp: str
    version: str


class ErrorResponse(BaseModel):
    """Model for structured error responses."""
    error: str
    code: str
    details: Optional[str] = None


class NotFoundResponse(BaseModel):
    error: str
    message: str


class RemoveTimestampsRequest(BaseModel):
    """Model for transcript requests. The URL is validated by the pipeline."""
    videoUrl: Any = None
