"""
Configuration for pytest tests.
"""

import os
import tempfile
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

# Keep test logs out of the project tree; must run before yt_normalizer is imported
os.environ.setdefault("LOG_DIR", os.path.join(tempfile.gettempdir(), "yt_normalizer_test_logs"))
os.environ.setdefault("ENVIRONMENT", "development")

import pytest

from yt_normalizer.core.client import ClientProvider
from yt_normalizer.core.service import YouTubeService


RICK_ROLL_VIDEO_ID = "dQw4w9WgXcQ"
RICK_ASTLEY_CHANNEL_ID = "UCuAXFkgsw1L7xaCfnd5JJOw"


@pytest.fixture
def mock_client():
    """Fixture for the underlying client with async capabilities."""
    client = MagicMock()
    client.get_info = AsyncMock()
    client.search = AsyncMock()
    client.get_channel = AsyncMock()
    client.get_playlist = AsyncMock()
    client.get_trending = AsyncMock()
    return client


@pytest.fixture
def client_factory(mock_client):
    """Factory handing out the mock client; records every construction."""
    return MagicMock(return_value=mock_client)


@pytest.fixture
def service(client_factory):
    """Service wired to the mock client."""
    return YouTubeService(ClientProvider(factory=client_factory, options={}))


@pytest.fixture
def rick_roll_info():
    """InnerTube-style video info payload."""
    return {
        "basic_info": {
            "id": RICK_ROLL_VIDEO_ID,
            "title": "Never Gonna Give You Up",
            "short_description": 'The official video for "Never Gonna Give You Up" by Rick Astley',
            "author": "Rick Astley",
            "channel_id": RICK_ASTLEY_CHANNEL_ID,
            "duration": 212,
            "view_count": 1400000000,
            "like_count": 15000000,
            "start_timestamp": "2009-10-25T06:57:33Z",
            "thumbnail": [{"url": "https://example.com/thumb.jpg"}],
            "is_live": False,
            "is_private": False,
            "is_unlisted": False,
            "category": "Music",
            "keywords": ["rick", "astley", "never", "gonna", "give", "you", "up"],
            "embed": {"iframe_url": f"https://www.youtube.com/embed/{RICK_ROLL_VIDEO_ID}"},
        }
    }


@pytest.fixture
def lyric_segments():
    """Raw InnerTube transcript segments."""
    return [
        {"snippet": {"text": "We're no strangers to love"}, "start_ms": "0", "end_ms": "3000"},
        {"snippet": {"text": "Never gonna give you up"}, "start_ms": "3000", "end_ms": "5500"},
        {"snippet": {"text": "never gonna let you down"}, "start_ms": "65000", "end_ms": "68000"},
        {"snippet": {"text": "You know the rules and so do I"}, "start_ms": "545000", "end_ms": "548000"},
    ]


def make_video_info(tracks, transcript_body=None, **extra):
    """Attribute-style video info with a transcript accessor."""
    return SimpleNamespace(
        basic_info={"id": RICK_ROLL_VIDEO_ID},
        captions={"caption_tracks": tracks},
        get_transcript=AsyncMock(return_value=transcript_body),
        **extra,
    )


def nested_body(segments):
    return {"transcript": {"content": {"body": {"initial_segments": segments}}}}
