"""
Helper utility functions for the YouTube normalization service.
"""

import re
from datetime import datetime, timezone
from typing import Any, Optional

# YouTube URL patterns
VIDEO_ID_PATTERNS = [
    r"(?:v=|\/)([0-9A-Za-z_-]{11}).*",
    r"(?:embed\/)([0-9A-Za-z_-]{11})",
    r"(?:watch\?v=)([0-9A-Za-z_-]{11})",
]


def extract_video_id(url: str) -> Optional[str]:
    """Extract the video ID from a YouTube URL."""
    for pattern in VIDEO_ID_PATTERNS:
        match = re.search(pattern, url)
        if match:
            return match.group(1)

    return None


def normalize_video_id(value: str) -> str:
    """
    Reduce a YouTube URL to its video ID; plain identifiers pass through.

    Args:
        value: Video ID or watch/short/embed URL

    Returns:
        The bare video ID
    """
    value = value.strip()
    if "youtube.com" in value or "youtu.be" in value:
        return extract_video_id(value) or value
    return value


def format_timestamp(offset_ms: int) -> str:
    """
    Format a millisecond offset as M:SS.

    Minutes are not zero-padded, so long videos give values like "61:03".

    Args:
        offset_ms: Offset from the start of the video in milliseconds

    Returns:
        Formatted timestamp string
    """
    total_seconds = int(offset_ms) // 1000
    minutes = total_seconds // 60
    seconds = total_seconds % 60
    return f"{minutes}:{seconds:02d}"


def compact_date(value: Any) -> Optional[str]:
    """Convert a YYYYMMDD date string to ISO format (YYYY-MM-DD)."""
    if not isinstance(value, str) or not re.fullmatch(r"\d{8}", value):
        return None
    return f"{value[:4]}-{value[4:6]}-{value[6:]}"


def epoch_to_iso(value: Any) -> Optional[str]:
    """Convert a UNIX timestamp in seconds to an ISO 8601 UTC string."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return datetime.fromtimestamp(value, tz=timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
