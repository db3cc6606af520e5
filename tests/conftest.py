"""
Configuration for pytest tests.
"""

import os
import tempfile

os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="transcriptservice-logs-"))

import pytest
from unittest.mock import MagicMock
from fastapi.testclient import TestClient

from transcript_service.api.app import create_app
from transcript_service.config import Settings
from transcript_service.core.rate_limiter import InMemoryRateLimitStore
from transcript_service.services.captions import CaptionsChecker
from transcript_service.services.transcript_fetcher import TranscriptFetcher

TEST_VIDEO_ID = "dQw4w9WgXcQ"


@pytest.fixture(scope="session")
def test_video_url():
    """Return a test YouTube video URL."""
    return f"https://www.youtube.com/watch?v={TEST_VIDEO_ID}"


@pytest.fixture
def settings():
    """Development settings with an API key configured."""
    return Settings(youtube_api_key="test_api_key", environment="development")


@pytest.fixture
def captions_session():
    """Mocked requests session; by default the video has one caption track."""
    session = MagicMock()
    session.get.return_value.json.return_value = {"items": [{"id": "caption-track-1"}]}
    return session


@pytest.fixture
def transcript_api():
    """Mocked YouTubeTranscriptApi whose English track has two segments."""
    api = MagicMock()
    track = api.list.return_value.find_transcript.return_value
    track.fetch.return_value.to_raw_data.return_value = [
        {"text": "Hello &amp; welcome", "start": 0.0, "duration": 1.5},
        {"text": "to   the show", "start": 1.5, "duration": 2.0},
    ]
    return api


@pytest.fixture
def captions_checker(settings, captions_session):
    return CaptionsChecker(settings.youtube_api_key, session=captions_session)


@pytest.fixture
def transcript_fetcher(transcript_api):
    return TranscriptFetcher(api=transcript_api)


@pytest.fixture
def make_client(captions_session, transcript_fetcher):
    """Build a test client for the given settings, with external calls mocked."""
    def _make_client(settings, raise_server_exceptions=True):
        app = create_app(
            settings=settings,
            rate_limit_store=InMemoryRateLimitStore(),
            captions_checker=CaptionsChecker(settings.youtube_api_key, session=captions_session),
            transcript_fetcher=transcript_fetcher,
        )
        return TestClient(app, raise_server_exceptions=raise_server_exceptions)
    return _make_client


@pytest.fixture
def client(make_client, settings):
    return make_client(settings)
