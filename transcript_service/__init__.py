"""
YouTube Transcript Cleaner.

A small HTTP service that fetches the transcript of a YouTube video and
returns it as plain text, with timestamps and HTML entities removed.
"""

from transcript_service.config import APP_VERSION

__version__ = APP_VERSION
