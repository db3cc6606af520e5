"""
Transcript retrieval through youtube-transcript-api.
"""

from typing import List, Optional, Sequence

import requests
from youtube_transcript_api import NoTranscriptFound, YouTubeTranscriptApi

from transcript_service.models.schemas import TranscriptSegment
from transcript_service.utils.errors import TranscriptFetchError
from transcript_service.utils.logger import logging


class TimeoutSession(requests.Session):
    """requests session that applies a default timeout to every request."""

    def __init__(self, timeout: float):
        super().__init__()
        self.timeout = timeout

    def request(self, method, url, **kwargs):
        kwargs.setdefault("timeout", self.timeout)
        return super().request(method, url, **kwargs)


class TranscriptFetcher:
    """Fetches the timestamped transcript segments for a video."""

    def __init__(self, timeout: float = 10.0, languages: Sequence[str] = ("en",),
                 api: Optional[YouTubeTranscriptApi] = None):
        self.languages = list(languages)
        self.api = api or YouTubeTranscriptApi(http_client=TimeoutSession(timeout))

    def _find_transcript(self, video_id: str):
        """Pick a track in the preferred languages, else the first one listed."""
        transcript_list = self.api.list(video_id)
        try:
            return transcript_list.find_transcript(self.languages)
        except NoTranscriptFound:
            transcript = next(iter(transcript_list), None)
            if transcript is None:
                raise
            logging.info(
                f"No {self.languages} transcript for {video_id}, using {transcript.language_code}"
            )
            return transcript

    def fetch(self, video_id: str) -> List[TranscriptSegment]:
        """
        Fetch the transcript of a video.

        Args:
            video_id: YouTube video ID

        Returns:
            Ordered list of transcript segments

        Raises:
            TranscriptFetchError: If the fetch fails or returns no segments
        """
        logging.info(f"Attempting to extract transcript for video: {video_id}")

        try:
            fetched = self._find_transcript(video_id).fetch()
            segments = [
                TranscriptSegment(
                    text=snippet.get("text") or "",
                    start=snippet.get("start"),
                    duration=snippet.get("duration"),
                )
                for snippet in fetched.to_raw_data()
            ]
            if not segments:
                raise ValueError("Empty transcript received")
        except Exception as e:
            logging.warning(f"Transcript fetch failed for {video_id}: {e}")
            raise TranscriptFetchError(
                "Failed to fetch transcript. "
                "The video may not have available transcripts or they may be disabled.",
                details=f"No transcript available for this video. {e}",
            ) from e

        logging.info(f"Transcript fetched for {video_id}: {len(segments)} segments")
        return segments
