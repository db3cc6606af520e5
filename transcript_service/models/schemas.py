"""
Data models for the transcript cleaner service.
"""
from typing import Optional

from pydantic import BaseModel


class TranscriptSegment(BaseModel):
    """One timed utterance as returned by transcript extraction."""
    text: str = ""
    start: Optional[float] = None
    duration: Optional[float] = None


class TranscriptResult(BaseModel):
    """Cleaned transcript returned to the client."""
    transcript: str
    videoId: str
    originalLength: int
    processedLength: int
    processingTime: int
