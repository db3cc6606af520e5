"""
Tests for the captions checker and the transcript fetcher.
"""

import pytest
import requests
from youtube_transcript_api import NoTranscriptFound
from unittest.mock import patch, MagicMock

from transcript_service.models.schemas import TranscriptSegment
from transcript_service.services.captions import CAPTIONS_URL, CaptionsChecker
from transcript_service.services.transcript_fetcher import TimeoutSession, TranscriptFetcher
from transcript_service.utils.errors import (
    ConfigurationError,
    NotFoundError,
    TranscriptFetchError,
)


def test_captions_check_calls_api(captions_checker, captions_session):
    assert captions_checker.check("dQw4w9WgXcQ") == 1

    captions_session.get.assert_called_once_with(
        CAPTIONS_URL,
        params={"part": "snippet", "videoId": "dQw4w9WgXcQ", "key": "test_api_key"},
        timeout=10.0,
    )


@pytest.mark.parametrize("api_key", [None, ""])
def test_captions_check_missing_api_key(api_key, captions_session):
    checker = CaptionsChecker(api_key, session=captions_session)

    with pytest.raises(ConfigurationError) as exc_info:
        checker.check("dQw4w9WgXcQ")

    assert exc_info.value.code == "MISSING_API_KEY"
    assert exc_info.value.status_code == 500
    captions_session.get.assert_not_called()


@pytest.mark.parametrize("payload", [{"items": []}, {}, {"items": None}])
def test_captions_check_no_captions(payload, captions_checker, captions_session):
    captions_session.get.return_value.json.return_value = payload

    with pytest.raises(NotFoundError) as exc_info:
        captions_checker.check("dQw4w9WgXcQ")

    assert exc_info.value.code == "NO_CAPTIONS_AVAILABLE"
    assert exc_info.value.status_code == 404


def test_captions_check_http_error_propagates(captions_checker, captions_session):
    captions_session.get.return_value.raise_for_status.side_effect = requests.HTTPError("403 Forbidden")

    with pytest.raises(requests.HTTPError):
        captions_checker.check("dQw4w9WgXcQ")


def test_fetch_transcript_segments(transcript_fetcher, transcript_api):
    segments = transcript_fetcher.fetch("dQw4w9WgXcQ")

    transcript_api.list.assert_called_once_with("dQw4w9WgXcQ")
    transcript_api.list.return_value.find_transcript.assert_called_once_with(["en"])
    assert segments == [
        TranscriptSegment(text="Hello &amp; welcome", start=0.0, duration=1.5),
        TranscriptSegment(text="to   the show", start=1.5, duration=2.0),
    ]


def test_fetch_transcript_falls_back_to_first_track(transcript_fetcher, transcript_api):
    transcript_list = transcript_api.list.return_value
    transcript_list.find_transcript.side_effect = NoTranscriptFound("dQw4w9WgXcQ", ["en"], MagicMock())
    spanish = MagicMock(language_code="es")
    spanish.fetch.return_value.to_raw_data.return_value = [
        {"text": "Hola a todos", "start": 0.0, "duration": 2.0},
    ]
    transcript_list.__iter__.return_value = iter([spanish])

    segments = transcript_fetcher.fetch("dQw4w9WgXcQ")

    assert segments == [TranscriptSegment(text="Hola a todos", start=0.0, duration=2.0)]
    spanish.fetch.assert_called_once_with()


def test_fetch_transcript_no_tracks_at_all(transcript_fetcher, transcript_api):
    transcript_list = transcript_api.list.return_value
    transcript_list.find_transcript.side_effect = NoTranscriptFound("dQw4w9WgXcQ", ["en"], MagicMock())
    transcript_list.__iter__.return_value = iter([])

    with pytest.raises(TranscriptFetchError) as exc_info:
        transcript_fetcher.fetch("dQw4w9WgXcQ")

    assert exc_info.value.code == "TRANSCRIPT_FETCH_FAILED"
    assert isinstance(exc_info.value.__cause__, NoTranscriptFound)


def test_fetch_transcript_empty(transcript_fetcher, transcript_api):
    track = transcript_api.list.return_value.find_transcript.return_value
    track.fetch.return_value.to_raw_data.return_value = []

    with pytest.raises(TranscriptFetchError) as exc_info:
        transcript_fetcher.fetch("dQw4w9WgXcQ")

    assert exc_info.value.code == "TRANSCRIPT_FETCH_FAILED"
    assert exc_info.value.details == "No transcript available for this video. Empty transcript received"


def test_fetch_transcript_upstream_error(transcript_fetcher, transcript_api):
    transcript_api.list.side_effect = RuntimeError("Subtitles are disabled for this video")

    with pytest.raises(TranscriptFetchError) as exc_info:
        transcript_fetcher.fetch("dQw4w9WgXcQ")

    assert "Subtitles are disabled for this video" in exc_info.value.details
    assert isinstance(exc_info.value.__cause__, RuntimeError)


@patch("transcript_service.services.transcript_fetcher.YouTubeTranscriptApi")
def test_fetcher_uses_timeout_session(mock_api_class):
    fetcher = TranscriptFetcher(timeout=3.0, languages=("de", "en"))

    http_client = mock_api_class.call_args.kwargs["http_client"]
    assert isinstance(http_client, TimeoutSession)
    assert http_client.timeout == 3.0
    assert fetcher.languages == ["de", "en"]


@patch("requests.Session.request")
def test_timeout_session_applies_default(mock_request):
    session = TimeoutSession(5.0)

    session.request("GET", "https://www.youtube.com/watch?v=dQw4w9WgXcQ")
    assert mock_request.call_args.kwargs["timeout"] == 5.0

    session.request("GET", "https://www.youtube.com/watch?v=dQw4w9WgXcQ", timeout=1.0)
    assert mock_request.call_args.kwargs["timeout"] == 1.0
