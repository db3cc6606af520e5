"""
Caption availability check against the YouTube Data API.
"""

from typing import Optional

import requests

from transcript_service.utils.errors import ConfigurationError, NotFoundError
from transcript_service.utils.logger import logging

CAPTIONS_URL = "https://www.googleapis.com/youtube/v3/captions"


class CaptionsChecker:
    """Confirms a video has at least one caption track before fetching it."""

    def __init__(self, api_key: Optional[str], timeout: float = 10.0,
                 session: Optional[requests.Session] = None):
        """
        Initialize the checker.

        Args:
            api_key: YouTube Data API key
            timeout: Request timeout in seconds
            session: Optional requests session to reuse connections
        """
        self.api_key = api_key
        self.timeout = timeout
        self.session = session or requests.Session()

    def ensure_configured(self) -> None:
        """Fail fast when the API key is missing."""
        if not self.api_key:
            logging.error("YouTube API key not configured")
            raise ConfigurationError(
                "Server configuration error. YouTube API key is missing.",
                code="MISSING_API_KEY",
            )

    def check(self, video_id: str) -> int:
        """
        Check that captions exist for a video.

        Args:
            video_id: YouTube video ID

        Returns:
            Number of caption tracks listed for the video

        Raises:
            ConfigurationError: If no API key is configured
            NotFoundError: If the video has no caption tracks
            requests.RequestException: On transport errors or non-2xx responses
        """
        self.ensure_configured()

        logging.info(f"Fetching captions list for video: {video_id}")
        response = self.session.get(
            CAPTIONS_URL,
            params={"part": "snippet", "videoId": video_id, "key": self.api_key},
            timeout=self.timeout,
        )
        response.raise_for_status()

        items = response.json().get("items") or []
        if not items:
            logging.warning(f"No captions available for video: {video_id}")
            raise NotFoundError(
                "No captions available for this video. "
                "The video may not have subtitles or they may be disabled.",
                code="NO_CAPTIONS_AVAILABLE",
            )

        logging.info(f"Found {len(items)} caption track(s) for video: {video_id}")
        return len(items)
