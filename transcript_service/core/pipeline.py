"""
Request pipeline: validate the URL, check captions, fetch and clean the transcript.
"""

import time
from typing import Any, Optional

from transcript_service.core.text_normalizer import clean_transcript
from transcript_service.core.video_id import validate_video_url
from transcript_service.models.schemas import TranscriptResult
from transcript_service.services.captions import CaptionsChecker
from transcript_service.services.transcript_fetcher import TranscriptFetcher
from transcript_service.utils.logger import logging


class TranscriptPipeline:
    """Runs the steps of one transcript request in order, without retries."""

    def __init__(self, captions_checker: CaptionsChecker, transcript_fetcher: TranscriptFetcher):
        self.captions_checker = captions_checker
        self.transcript_fetcher = transcript_fetcher

    def process(self, video_url: Any, started_at: Optional[float] = None) -> TranscriptResult:
        """
        Turn a YouTube URL into cleaned transcript text.

        Args:
            video_url: Raw ``videoUrl`` value from the request
            started_at: ``time.monotonic()`` value at request entry

        Returns:
            TranscriptResult with the cleaned transcript and timing

        Raises:
            ServiceError: The first failing step, as a structured error
        """
        started_at = time.monotonic() if started_at is None else started_at

        video_id = validate_video_url(video_url)

        self.captions_checker.ensure_configured()
        self.captions_checker.check(video_id)

        segments = self.transcript_fetcher.fetch(video_id)

        cleaned = clean_transcript(segments)
        processing_time = int((time.monotonic() - started_at) * 1000)

        logging.info(
            f"Transcript processed successfully: originalLength={len(segments)}, "
            f"processedLength={len(cleaned)}, processingTime={processing_time}ms"
        )

        return TranscriptResult(
            transcript=cleaned,
            videoId=video_id,
            originalLength=len(segments),
            processedLength=len(cleaned),
            processingTime=processing_time,
        )
