"""
Input sanitizing and YouTube video ID extraction.
"""

import re
from typing import Any, Optional

from transcript_service.utils.errors import ValidationError
from transcript_service.utils.logger import logging

VIDEO_ID_LENGTH = 11

# watch?v=, youtu.be/, /v/, /embed/ and /u/<ch>/ shapes; group 7 holds the id
VIDEO_URL_PATTERN = re.compile(
    r"^.*((youtu.be/)|(v/)|(/u/\w/)|(embed/)|(watch\?))\??v?=?([^#&?]*).*",
    re.ASCII,
)


def sanitize_input(value: Any) -> str:
    """Trim the value and drop angle brackets. Non-strings become an empty string."""
    if not isinstance(value, str):
        return ""
    return re.sub(r"[<>]", "", value.strip())


def extract_video_id(url: Optional[str]) -> Optional[str]:
    """
    Extract the video ID from a YouTube URL.

    Args:
        url: YouTube video URL

    Returns:
        The 11-character video ID, or None if the URL is not recognised
    """
    if not url:
        return None
    match = VIDEO_URL_PATTERN.match(url)
    if match and match.group(7) and len(match.group(7)) == VIDEO_ID_LENGTH:
        return match.group(7)
    return None


def validate_video_url(video_url: Any) -> str:
    """
    Validate a raw ``videoUrl`` value and return its video ID.

    Raises:
        ValidationError: MISSING_VIDEO_URL, INVALID_URL_CHARACTERS or
            INVALID_URL_FORMAT
    """
    if not video_url or not isinstance(video_url, str):
        logging.warning("Invalid input: videoUrl missing or not a string")
        raise ValidationError(
            "Video URL is required and must be a valid string",
            code="MISSING_VIDEO_URL",
        )

    sanitized_url = sanitize_input(video_url)
    if sanitized_url != video_url:
        logging.warning("Invalid input: videoUrl contains potentially harmful characters")
        raise ValidationError(
            "Video URL contains invalid characters",
            code="INVALID_URL_CHARACTERS",
        )

    video_id = extract_video_id(sanitized_url)
    if not video_id:
        logging.warning(f"Invalid YouTube URL format: {sanitized_url!r}")
        raise ValidationError(
            "Invalid YouTube URL format. Please provide a valid YouTube video URL.",
            code="INVALID_URL_FORMAT",
        )

    logging.info(f"Extracted video ID: {video_id}")
    return video_id
